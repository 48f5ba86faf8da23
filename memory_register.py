"""Registro de memoria de la calculadora (M+, MR, MC, MS)."""

import logging
import math
from numbers import Real

from calculator_errors import CalculatorError, ErrorKind


logger = logging.getLogger(__name__)


def _is_finite_number(value) -> bool:
    if not isinstance(value, Real) or isinstance(value, bool):
        return False
    try:
        return math.isfinite(value)
    except OverflowError:
        # int demasiado grande para float
        return False


class MemoryRegister:
    """Acumulador escalar; ``0`` significa memoria vacía."""

    def __init__(self):
        self._value = 0.0

    def store(self, value):
        if not _is_finite_number(value):
            raise CalculatorError(ErrorKind.INVALID_VALUE)
        self._value = float(value)

    def recall(self) -> float:
        return self._value

    def clear(self):
        self._value = 0.0

    def add(self, value):
        if not _is_finite_number(value):
            raise CalculatorError(ErrorKind.INVALID_VALUE)

        total = self._value + value
        if not math.isfinite(total):
            logger.warning("Desbordamiento al sumar %r a la memoria", value)
            raise CalculatorError(ErrorKind.OVERFLOW)
        self._value = total

    def has_value(self) -> bool:
        return self._value != 0
