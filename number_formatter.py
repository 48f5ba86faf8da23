"""Formato de resultados numéricos para la pantalla.

Controla los dígitos significativos, el paso a notación científica y la
limpieza de artefactos de coma flotante (``0.1 + 0.2`` → ``"0.3"``).
"""

import math
import re
from decimal import Decimal

from calculator_config import (
    LARGE_NUMBER_THRESHOLD,
    MAX_SIGNIFICANT_DIGITS,
    SMALL_NUMBER_THRESHOLD,
)


class NumberFormatter:
    """Convierte floats en texto de pantalla. Sin estado."""

    MAX_SIGNIFICANT_DIGITS = MAX_SIGNIFICANT_DIGITS
    LARGE_NUMBER_THRESHOLD = LARGE_NUMBER_THRESHOLD
    SMALL_NUMBER_THRESHOLD = SMALL_NUMBER_THRESHOLD

    # Por debajo de este valor repr() ya no da notación decimal fija y el
    # recorte de decimales se comería cifras significativas
    EXPONENT_DISPLAY_THRESHOLD = 1e-6

    _PARTIAL_INPUT_RE = re.compile(r"-?[0-9]*\.?[0-9]*")
    _MANTISSA_ZEROS_RE = re.compile(r"(\.\d*?)0+(e[+-]?\d+)$")
    _DANGLING_DOT_RE = re.compile(r"\.(e[+-]?\d+)$")
    _EXPONENT_PADDING_RE = re.compile(r"e([+-])0*(\d)")

    # ── Resultados ───────────────────────────────────────────────

    @classmethod
    def format(cls, value: float) -> str:
        if math.isnan(value):
            return "Error"
        if math.isinf(value):
            return "Infinity" if value > 0 else "-Infinity"

        if value == 0:
            return "0"

        abs_value = abs(value)
        if abs_value >= cls.LARGE_NUMBER_THRESHOLD or abs_value < cls.SMALL_NUMBER_THRESHOLD:
            return cls.format_scientific(value)
        if abs_value < cls.EXPONENT_DISPLAY_THRESHOLD:
            return cls.format_scientific(value)

        rounded = cls.round_to_precision(value, cls.MAX_SIGNIFICANT_DIGITS)
        return cls._format_decimal(cls._plain_string(rounded))

    @classmethod
    def format_scientific(cls, value: float) -> str:
        mantissa_digits = min(cls.MAX_SIGNIFICANT_DIGITS - 1, 9)
        text = f"{value:.{mantissa_digits}e}"
        text = cls._MANTISSA_ZEROS_RE.sub(r"\1\2", text)
        text = cls._DANGLING_DOT_RE.sub(r"\1", text)
        # Python rellena el exponente a dos cifras ("e-08")
        return cls._EXPONENT_PADDING_RE.sub(r"e\1\2", text)

    @staticmethod
    def round_to_precision(value: float, significant_digits: int) -> float:
        """Redondea a ``significant_digits`` cifras significativas.

        El primer redondeo equivale a ``%.Ng``; el segundo (escalar,
        redondear, desescalar) elimina los restos binarios que deja el
        primero, p. ej. ``0.30000000000000004``.
        """
        if value == 0:
            return 0.0

        precision = float(f"{value:.{significant_digits}g}")
        magnitude = math.floor(math.log10(abs(value)))
        exponent = significant_digits - magnitude - 1
        if exponent >= 0:
            scale = 10 ** exponent
            return round(precision * scale) / scale
        scale = 10 ** -exponent
        return round(precision / scale) * scale

    @staticmethod
    def _plain_string(value: float) -> str:
        # repr() usa notación científica por debajo de 1e-4; aquí no
        text = repr(value)
        if "e" in text or "E" in text:
            text = format(Decimal(text), "f")
        return text

    @classmethod
    def _format_decimal(cls, text: str) -> str:
        if "." not in text:
            return text

        integer_part, decimal_part = text.split(".", 1)
        decimal_part = decimal_part.rstrip("0")
        if not decimal_part:
            return integer_part

        max_decimal_places = max(
            0, cls.MAX_SIGNIFICANT_DIGITS - len(integer_part.replace("-", ""))
        )
        if len(decimal_part) > max_decimal_places:
            decimal_part = decimal_part[:max_decimal_places].rstrip("0")

        return f"{integer_part}.{decimal_part}" if decimal_part else integer_part

    # ── Entrada en curso ─────────────────────────────────────────

    @classmethod
    def is_valid_input(cls, text: str) -> bool:
        """Indica si ``text`` es un número parcial válido mientras se teclea."""
        if text in ("", "-", ".", "-."):
            return True
        return cls._PARTIAL_INPUT_RE.fullmatch(text) is not None

    @classmethod
    def format_input(cls, text: str) -> str:
        """Devuelve la entrada tal cual si es parcial válida; si no, la formatea."""
        if cls.is_valid_input(text):
            return text

        try:
            value = float(text)
        except ValueError:
            return "0"
        if math.isnan(value):
            return "0"
        return cls.format(value)

    @staticmethod
    def significant_digits(value: float) -> int:
        if value == 0 or not math.isfinite(value):
            return 1
        return len(Decimal(repr(abs(value))).normalize().as_tuple().digits)
