"""Operaciones aritméticas y funciones científicas sobre float.

Funciones puras, sin estado. Los errores de dominio se lanzan como
``CalculatorError``; los desbordamientos se dejan pasar como infinito para
que quien llama decida (el formateador los muestra, la sesión los rechaza).
"""

import math

from calculator_errors import CalculatorError, ErrorKind


class PythonMathProvider:
    """Motor aritmético basado en ``math`` (IEEE-754)."""

    # ── Aritmética básica ────────────────────────────────────────

    def add(self, a: float, b: float) -> float:
        return a + b

    def subtract(self, a: float, b: float) -> float:
        return a - b

    def multiply(self, a: float, b: float) -> float:
        return a * b

    def divide(self, a: float, b: float) -> float:
        if b == 0:
            raise CalculatorError(ErrorKind.DIVISION_BY_ZERO)
        return a / b

    def power(self, base: float, exponent: float) -> float:
        """Potencia con la semántica del ``pow`` de la plataforma.

        ``math.pow`` lanza excepciones donde IEEE-754 devuelve un valor:
        desbordamiento → ±inf, ``0`` elevado a negativo → ±inf, base
        negativa con exponente fraccionario → NaN.
        """
        try:
            return math.pow(base, exponent)
        except OverflowError:
            return self._signed_infinity(base, exponent)
        except ValueError:
            if base == 0:
                return self._signed_infinity(base, exponent)
            return math.nan

    @staticmethod
    def _signed_infinity(base: float, exponent: float) -> float:
        odd_exponent = float(exponent).is_integer() and exponent % 2 == 1
        if math.copysign(1.0, base) < 0 and odd_exponent:
            return -math.inf
        return math.inf

    # ── Conversión angular ───────────────────────────────────────

    @staticmethod
    def to_radians(degrees: float) -> float:
        return degrees * (math.pi / 180)

    @staticmethod
    def to_degrees(radians: float) -> float:
        return radians * (180 / math.pi)

    def _angle(self, angle: float, mode: str) -> float:
        return self.to_radians(angle) if mode == "deg" else angle

    # ── Trigonometría ────────────────────────────────────────────

    # Ángulo no finito: NaN, como sin/cos/tan de IEEE-754 (math lanza ValueError)

    def sin(self, angle: float, mode: str = "rad") -> float:
        radians = self._angle(angle, mode)
        if not math.isfinite(radians):
            return math.nan
        return math.sin(radians)

    def cos(self, angle: float, mode: str = "rad") -> float:
        radians = self._angle(angle, mode)
        if not math.isfinite(radians):
            return math.nan
        return math.cos(radians)

    def tan(self, angle: float, mode: str = "rad") -> float:
        radians = self._angle(angle, mode)
        if not math.isfinite(radians):
            return math.nan
        return math.tan(radians)

    # ── Logaritmos, exponencial y raíz ───────────────────────────

    def ln(self, x: float) -> float:
        if x <= 0:
            raise CalculatorError(ErrorKind.INVALID_DOMAIN, "ln requiere un valor positivo")
        return math.log(x)

    def log10(self, x: float) -> float:
        if x <= 0:
            raise CalculatorError(ErrorKind.INVALID_DOMAIN, "log requiere un valor positivo")
        return math.log10(x)

    def exp(self, x: float) -> float:
        try:
            return math.exp(x)
        except OverflowError:
            return math.inf

    def sqrt(self, x: float) -> float:
        if x < 0:
            raise CalculatorError(ErrorKind.INVALID_DOMAIN, "sqrt requiere un valor no negativo")
        return math.sqrt(x)

    # ── Factorial ────────────────────────────────────────────────

    def factorial(self, n: float) -> float:
        """Producto iterativo ``2..n``; sin cota superior (desborda a inf)."""
        if n < 0 or not float(n).is_integer():
            raise CalculatorError(ErrorKind.INVALID_FACTORIAL_INPUT)

        result = 1.0
        for i in range(2, int(n) + 1):
            result *= i
            if math.isinf(result):
                break
        return result

    # ── Namespace para el evaluador ──────────────────────────────

    @staticmethod
    def literal(text) -> float:
        return float(text)

    def build_namespace(self, angle_mode: str) -> dict:
        """Asocia cada operador y función del parser con su operación."""

        def _trig(fn):
            def w(x):
                return fn(x, angle_mode)

            return w

        return {
            "+": self.add,
            "-": self.subtract,
            "×": self.multiply,
            "*": self.multiply,
            "÷": self.divide,
            "/": self.divide,
            "^": self.power,
            "sin": _trig(self.sin),
            "cos": _trig(self.cos),
            "tan": _trig(self.tan),
            "ln": self.ln,
            "log": self.log10,
            "sqrt": self.sqrt,
            "exp": self.exp,
            "factorial": self.factorial,
        }
