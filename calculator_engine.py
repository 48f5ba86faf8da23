"""
Motor de cálculo para la calculadora científica.

Este módulo provee la clase CalculatorEngine, que representa una sesión
de calculadora: posee su propio estado (``SessionState``), su memoria
(``MemoryRegister``) y un evaluador de fórmulas. No hay estado global; cada
sesión es un objeto independiente.

Contrato de interfaz:
    - evaluate(expression: str | None) -> str
    - angle_mode: propiedad 'rad' | 'deg'
"""

import logging
import math

from calculator_config import MAX_PARENTHESIS_DEPTH
from calculator_errors import CalculatorError, ErrorKind
from formula_evaluator import FormulaEvaluator
from math_provider import PythonMathProvider
from memory_register import MemoryRegister
from number_formatter import NumberFormatter
from state_manager import SessionState


logger = logging.getLogger(__name__)


class CalculatorEngine:
    """Evalúa expresiones matemáticas y mantiene el estado de la sesión."""

    def __init__(self, state: SessionState = None, memory: MemoryRegister = None):
        self._provider = PythonMathProvider()
        self._evaluator = FormulaEvaluator(self._provider)
        self._formatter = NumberFormatter
        self._state = state if state is not None else SessionState()
        self._memory = memory if memory is not None else MemoryRegister()
        # True justo después de un "=" correcto: el buffer muestra el resultado
        self._just_evaluated = False

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def memory(self) -> MemoryRegister:
        return self._memory

    # ── Propiedad: modo angular ──────────────────────────────────

    @property
    def angle_mode(self) -> str:
        return self._state.angle_mode

    @angle_mode.setter
    def angle_mode(self, mode: str):
        self._state.set_angle_mode(mode)

    def toggle_angle_mode(self) -> str:
        return self._state.toggle_angle_mode()

    # ── Construcción de la expresión ─────────────────────────────

    def enter(self, text: str) -> str:
        """Añade caracteres al número en curso si siguen siendo válidos.

        Tras un "=" empieza un número nuevo en lugar de prolongar el resultado.
        """
        buffer = "" if self._just_evaluated else self._state.input_buffer
        candidate = buffer + text
        if not self._formatter.is_valid_input(candidate):
            raise CalculatorError(ErrorKind.INVALID_CHARACTER, f"Entrada inválida: {text}")
        if self._just_evaluated:
            self._state.set_expression("")
            self._just_evaluated = False
        self._state.set_input_buffer(candidate)
        return candidate

    def append(self, fragment: str) -> str:
        """Confirma el número en curso y añade ``fragment`` a la expresión.

        Rechaza el cambio completo si deja un ``)`` sin pareja o supera el
        máximo de niveles de paréntesis. Tras un "=" la expresión continúa
        desde el valor completo del resultado, no desde su texto redondeado.
        """
        if self._just_evaluated:
            candidate = repr(self._state.last_result) + fragment
        else:
            candidate = self._state.expression + self._state.input_buffer + fragment
        depth = 0
        for char in candidate:
            if char == "(":
                depth += 1
            elif char == ")":
                depth -= 1
            if depth < 0 or depth > MAX_PARENTHESIS_DEPTH:
                raise CalculatorError(ErrorKind.MISMATCHED_PARENTHESES)

        self._state.set_expression(candidate)
        self._state.clear_input_buffer()
        self._state.set_parenthesis_depth(depth)
        self._just_evaluated = False
        return candidate

    # ── Evaluación principal ─────────────────────────────────────

    def evaluate_value(self, expression: str) -> float:
        """Evalúa sin tocar el estado de la sesión."""
        return self._evaluator.evaluate(expression, self._state.angle_mode)

    def evaluate(self, expression: str = None) -> str:
        """Evalúa la expresión (o la de la sesión) y devuelve el texto a mostrar.

        Raises:
            CalculatorError: expresión inválida, dominio, división por cero...
        """
        if expression is None and self._just_evaluated:
            expression = repr(self._state.last_result)
        elif expression is None:
            expression = self._state.expression + self._state.input_buffer

        self._just_evaluated = False
        logger.debug("Evaluando %r en modo %s", expression, self._state.angle_mode)
        try:
            value = self.evaluate_value(expression)
        except CalculatorError as exc:
            logger.warning("Error al evaluar %r: %s", expression, exc.message)
            self._state.set_error(exc.message)
            raise

        text = self._formatter.format(value)
        if not math.isfinite(value):
            logger.warning("Resultado no finito para %r: %s", expression, text)
            self._state.set_error(f"Resultado no finito: {text}")
            return text

        self._state.set_last_result(value)
        self._state.set_input_buffer(text)
        self._state.set_expression("")
        self._state.set_parenthesis_depth(0)
        self._just_evaluated = True
        return text

    # ── Memoria ──────────────────────────────────────────────────

    def _current_value(self) -> float:
        if self._just_evaluated:
            return self._state.last_result
        buffer = self._state.input_buffer
        if buffer:
            try:
                return float(buffer)
            except ValueError as exc:
                raise CalculatorError(ErrorKind.INVALID_VALUE) from exc
        if self._state.last_result is not None:
            return self._state.last_result
        return 0.0

    def memory_store(self):
        self._memory.store(self._current_value())

    def memory_add(self):
        self._memory.add(self._current_value())

    def memory_recall(self) -> str:
        text = self._formatter.format(self._memory.recall())
        if self._just_evaluated:
            self._state.set_expression("")
            self._just_evaluated = False
        self._state.set_input_buffer(text)
        return text

    def memory_clear(self):
        self._memory.clear()

    # ── Otras teclas ─────────────────────────────────────────────

    def negate(self) -> str:
        buffer = self._state.input_buffer
        if self._just_evaluated:
            buffer = ""
        if buffer and buffer not in ("-", ".", "-."):
            value = float(buffer)
            if value != 0:
                self._state.set_input_buffer(self._formatter.format(-value))
            return self._state.input_buffer

        if not buffer and self._state.last_result is not None:
            negated = -self._state.last_result
            self._state.set_last_result(negated)
            self._state.set_input_buffer(self._formatter.format(negated))
            return self._state.input_buffer

        self._state.set_input_buffer("-")
        return "-"

    def clear_entry(self):
        self._just_evaluated = False
        self._state.clear_input_buffer()

    def all_clear(self):
        self._just_evaluated = False
        self._state.reset()
