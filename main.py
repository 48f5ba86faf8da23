"""Punto de entrada de la calculadora científica (línea de órdenes)."""

import argparse
import logging
import sys

from arbitrary_precision_engine import ArbitraryPrecisionCalculatorEngine
from calculator_config import (
    AP_INITIAL_DIGITS,
    AP_PRECISION_STEP,
    LOG_LEVEL,
    USE_ARBITRARY_PRECISION,
)
from calculator_engine import CalculatorEngine
from calculator_errors import CalculatorError
from logging_config import setup_logging


EXIT_COMMANDS = {"salir", "exit", "quit"}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Calculadora científica")
    parser.add_argument("--rad", action="store_true", help="trigonometría en radianes")
    parser.add_argument(
        "--precise",
        action="store_true",
        default=USE_ARBITRARY_PRECISION,
        help="usar el motor de precisión arbitraria (mpmath)",
    )
    parser.add_argument("--digits", type=int, default=AP_INITIAL_DIGITS)
    parser.add_argument("--log-level", default=None, help="DEBUG, INFO, WARNING...")
    return parser


def run(lines, out, angle_mode: str = "deg", precise: bool = False, digits: int = AP_INITIAL_DIGITS) -> int:
    """Evalúa una expresión por línea y escribe el resultado en ``out``.

    Devuelve el número de líneas que terminaron en error.
    """
    engine = CalculatorEngine()
    engine.angle_mode = angle_mode
    precise_engine = None
    if precise:
        precise_engine = ArbitraryPrecisionCalculatorEngine(
            initial_digits=digits,
            precision_step=AP_PRECISION_STEP,
        )

    errors = 0
    for raw in lines:
        expr = raw.strip()
        if not expr:
            continue
        if expr.lower() in EXIT_COMMANDS:
            break
        try:
            if precise_engine is not None:
                result = precise_engine.evaluate(expr, engine.angle_mode)
            else:
                result = engine.evaluate(expr)
        except CalculatorError as exc:
            errors += 1
            out.write(f"Error: {exc.message}\n")
            continue
        out.write(f"{result}\n")
    return errors


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    level = LOG_LEVEL
    if args.log_level:
        level = getattr(logging, args.log_level.upper(), LOG_LEVEL)
    setup_logging(level)

    errors = run(
        sys.stdin,
        sys.stdout,
        angle_mode="rad" if args.rad else "deg",
        precise=args.precise,
        digits=args.digits,
    )
    return 1 if errors else 0


if __name__ == "__main__":
    sys.exit(main())
