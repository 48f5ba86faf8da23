"""Configuración del logging de la calculadora."""

import logging
import sys
from typing import Optional

# Módulos del proyecto (layout plano: un logger por módulo).
_LOGGER_NAMES = (
    "calculadora",
    "calculator_engine",
    "arbitrary_precision_engine",
    "state_manager",
    "memory_register",
)


def setup_logging(level: int = logging.INFO, log_file: Optional[str] = None) -> None:
    """Configura los loggers del proyecto.

    Args:
        level: nivel de logging (p. ej. logging.DEBUG).
        log_file: ruta opcional donde duplicar los mensajes.
    """
    formatter = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%H:%M:%S",
    )

    handlers = []
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    handlers.append(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, mode="w", encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        handlers.append(file_handler)

    for name in _LOGGER_NAMES:
        logger = logging.getLogger(name)
        logger.setLevel(level)
        # Evitar handlers duplicados si se llama más de una vez
        if logger.hasHandlers():
            logger.handlers.clear()
        for handler in handlers:
            logger.addHandler(handler)
        logger.propagate = False

    logging.getLogger("calculadora").info("Logging inicializado.")
