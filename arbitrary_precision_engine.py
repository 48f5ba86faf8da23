"""Motor de cálculo con precisión arbitraria y expansión progresiva."""

from __future__ import annotations

import logging

from calculator_errors import CalculatorError, ErrorKind
from formula_evaluator import FormulaEvaluator

try:
    from mpmath import mp
except ImportError as exc:  # pragma: no cover
    raise ImportError(
        "mpmath no está instalado. Instala con: pip install mpmath"
    ) from exc


logger = logging.getLogger(__name__)


class MPMathProvider:
    """Proveedor matemático basado en mpmath.

    Mismas operaciones y errores de dominio que ``PythonMathProvider``,
    sobre ``mpf`` a la precisión activa de ``mp``.
    """

    @staticmethod
    def literal(text):
        return mp.mpf(text)

    # ── Aritmética ───────────────────────────────────────────────

    @staticmethod
    def add(a, b):
        return a + b

    @staticmethod
    def subtract(a, b):
        return a - b

    @staticmethod
    def multiply(a, b):
        return a * b

    @staticmethod
    def divide(a, b):
        if b == 0:
            raise CalculatorError(ErrorKind.DIVISION_BY_ZERO)
        return a / b

    @staticmethod
    def power(base, exponent):
        if base == 0 and exponent < 0:
            return mp.inf
        result = mp.power(base, exponent)
        # Base negativa con exponente fraccionario: igual que el motor float
        if isinstance(result, mp.mpc):
            return mp.nan
        return result

    # ── Funciones ────────────────────────────────────────────────

    @staticmethod
    def _trig(fn, mode: str):
        def wrapped(x):
            value = mp.radians(x) if mode == "deg" else x
            return fn(value)

        return wrapped

    @staticmethod
    def ln(x):
        if x <= 0:
            raise CalculatorError(ErrorKind.INVALID_DOMAIN, "ln requiere un valor positivo")
        return mp.log(x)

    @staticmethod
    def log10(x):
        if x <= 0:
            raise CalculatorError(ErrorKind.INVALID_DOMAIN, "log requiere un valor positivo")
        return mp.log10(x)

    @staticmethod
    def sqrt(x):
        if x < 0:
            raise CalculatorError(ErrorKind.INVALID_DOMAIN, "sqrt requiere un valor no negativo")
        return mp.sqrt(x)

    @staticmethod
    def factorial(x):
        if not mp.isfinite(x) or x < 0 or mp.floor(x) != x:
            raise CalculatorError(ErrorKind.INVALID_FACTORIAL_INPUT)

        n = int(x)
        if n <= 5000:
            return mp.factorial(n)

        return mp.exp(mp.loggamma(n + 1))

    def build_namespace(self, angle_mode: str) -> dict:
        return {
            "+": self.add,
            "-": self.subtract,
            "×": self.multiply,
            "*": self.multiply,
            "÷": self.divide,
            "/": self.divide,
            "^": self.power,
            "sin": self._trig(mp.sin, angle_mode),
            "cos": self._trig(mp.cos, angle_mode),
            "tan": self._trig(mp.tan, angle_mode),
            "ln": self.ln,
            "log": self.log10,
            "sqrt": self.sqrt,
            "exp": mp.exp,
            "factorial": self.factorial,
        }


class ArbitraryPrecisionCalculatorEngine:
    """Evalúa expresiones con precisión arbitraria y dígitos progresivos."""

    SCI_NOTATION_EXP_LIMIT = 12

    def __init__(self, initial_digits: int = 18, precision_step: int = 24):
        self._provider = MPMathProvider()
        self._evaluator = FormulaEvaluator(self._provider)

        self._initial_digits = max(8, initial_digits)
        self._precision_step = max(8, precision_step)

        self._working_digits = self._initial_digits
        self._last_expression: str | None = None
        self._last_angle_mode = "rad"
        self._last_value = None

    @property
    def working_digits(self) -> int:
        return self._working_digits

    @property
    def last_value(self):
        return self._last_value

    def evaluate(self, expression: str, angle_mode: str = "rad") -> str:
        self._working_digits = self._initial_digits
        self._last_value = self._evaluate_with_digits(
            expression, angle_mode, self._working_digits
        )
        self._last_expression = expression
        self._last_angle_mode = angle_mode
        return self._format_result(self._last_value, self._working_digits)

    def can_expand_precision(self) -> bool:
        return self._last_expression is not None

    def request_more_precision(self) -> str:
        if not self._last_expression:
            raise CalculatorError(ErrorKind.INVALID_EXPRESSION, "No hay cálculo previo")

        self._working_digits += self._precision_step
        logger.debug("Ampliando precisión a %d dígitos", self._working_digits)
        self._last_value = self._evaluate_with_digits(
            self._last_expression,
            self._last_angle_mode,
            self._working_digits,
        )
        return self._format_result(self._last_value, self._working_digits)

    def _evaluate_with_digits(self, expression: str, angle_mode: str, digits: int):
        internal_dps = max(40, digits * 2 + 10)
        with mp.workdps(internal_dps):
            return self._evaluator.evaluate(expression, angle_mode)

    @staticmethod
    def _format_result(value, digits: int) -> str:
        if not mp.isfinite(value):
            if mp.isnan(value):
                return "Error"
            return "Infinity" if value > 0 else "-Infinity"

        if value == 0:
            return "0"

        if mp.floor(value) == value and abs(value) < mp.mpf("1e18"):
            return str(int(value))

        exponent = int(mp.floor(mp.log10(abs(value))))
        if abs(exponent) >= ArbitraryPrecisionCalculatorEngine.SCI_NOTATION_EXP_LIMIT:
            return mp.nstr(value, n=digits, min_fixed=0, max_fixed=0)

        return mp.nstr(value, n=digits)
