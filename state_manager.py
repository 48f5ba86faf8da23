"""Estado de una sesión de calculadora.

Registro plano con validación al escribir. ``set_last_result`` y
``set_parenthesis_depth`` rechazan en silencio los valores inválidos (solo
queda un aviso en el log): un cálculo erróneo no debe desincronizar la
sesión. ``set_angle_mode`` sí lanza error.
"""

import logging
import math
from numbers import Real
from typing import Optional

from calculator_config import ANGLE_MODES, DEFAULT_ANGLE_MODE, MAX_PARENTHESIS_DEPTH
from calculator_errors import CalculatorError, ErrorKind


logger = logging.getLogger(__name__)


class SessionState:
    """Buffer de entrada, expresión, último resultado, modo angular y error."""

    def __init__(self):
        self.reset()

    def reset(self):
        self._input_buffer = ""
        self._expression = ""
        self._last_result: Optional[float] = None
        self._angle_mode = DEFAULT_ANGLE_MODE
        self._parenthesis_depth = 0
        self._error: Optional[str] = None

    # ── Buffer de entrada ────────────────────────────────────────

    @property
    def input_buffer(self) -> str:
        return self._input_buffer

    def set_input_buffer(self, value):
        self._input_buffer = str(value)
        self._error = None

    def clear_input_buffer(self):
        self._input_buffer = ""
        self._error = None

    def backspace(self):
        if self._input_buffer:
            self._input_buffer = self._input_buffer[:-1]

    # ── Expresión ────────────────────────────────────────────────

    @property
    def expression(self) -> str:
        return self._expression

    def set_expression(self, expression):
        self._expression = str(expression)

    # ── Último resultado ─────────────────────────────────────────

    @property
    def last_result(self) -> Optional[float]:
        return self._last_result

    def set_last_result(self, value):
        if isinstance(value, Real) and not isinstance(value, bool):
            try:
                if math.isfinite(value):
                    self._last_result = float(value)
                    return
            except OverflowError:
                pass
        logger.warning("Resultado rechazado: %r", value)

    # ── Modo angular ─────────────────────────────────────────────

    @property
    def angle_mode(self) -> str:
        return self._angle_mode

    def set_angle_mode(self, mode: str):
        if mode not in ANGLE_MODES:
            raise CalculatorError(ErrorKind.INVALID_ANGLE_MODE)
        self._angle_mode = mode

    def toggle_angle_mode(self) -> str:
        self._angle_mode = "rad" if self._angle_mode == "deg" else "deg"
        return self._angle_mode

    # ── Paréntesis ───────────────────────────────────────────────

    @property
    def parenthesis_depth(self) -> int:
        return self._parenthesis_depth

    def set_parenthesis_depth(self, depth):
        if (
            isinstance(depth, int)
            and not isinstance(depth, bool)
            and 0 <= depth <= MAX_PARENTHESIS_DEPTH
        ):
            self._parenthesis_depth = depth
            return
        logger.warning("Nivel de paréntesis rechazado: %r", depth)

    # ── Error ────────────────────────────────────────────────────

    @property
    def error(self) -> Optional[str]:
        return self._error

    def set_error(self, message: str):
        self._error = message

    def clear_error(self):
        self._error = None
