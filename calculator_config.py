"""Constantes y valores por defecto de la calculadora."""

import logging
import os


# ── Parser ───────────────────────────────────────────────────────

MAX_PARENTHESIS_DEPTH = 10

# ── Formato ──────────────────────────────────────────────────────

MAX_SIGNIFICANT_DIGITS = 10
LARGE_NUMBER_THRESHOLD = 1e10
SMALL_NUMBER_THRESHOLD = 1e-7

# ── Modo angular ─────────────────────────────────────────────────

ANGLE_MODES = ("deg", "rad")
DEFAULT_ANGLE_MODE = "deg"

# ── Precisión arbitraria ─────────────────────────────────────────

USE_ARBITRARY_PRECISION = False
AP_INITIAL_DIGITS = 30
AP_PRECISION_STEP = 30

# ── Logging ──────────────────────────────────────────────────────

LOG_LEVEL = getattr(
    logging,
    os.environ.get("CALCULADORA_LOG_LEVEL", "WARNING").upper(),
    logging.WARNING,
)
