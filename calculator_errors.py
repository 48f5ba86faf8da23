"""Errores tipados de la calculadora científica.

Todas las capas (motor, parser, memoria, estado) lanzan ``CalculatorError``
con un ``ErrorKind`` concreto, de modo que quien llama puede decidir según
``error.kind`` en lugar de comparar mensajes.
"""

from enum import Enum


class ErrorKind(Enum):
    DIVISION_BY_ZERO = "division_by_zero"
    INVALID_DOMAIN = "invalid_domain"
    INVALID_FACTORIAL_INPUT = "invalid_factorial_input"
    INVALID_ANGLE_MODE = "invalid_angle_mode"
    MISMATCHED_PARENTHESES = "mismatched_parentheses"
    UNKNOWN_FUNCTION = "unknown_function"
    INVALID_CHARACTER = "invalid_character"
    INVALID_EXPRESSION = "invalid_expression"
    INVALID_VALUE = "invalid_value"
    OVERFLOW = "overflow"


_DEFAULT_MESSAGES = {
    ErrorKind.DIVISION_BY_ZERO: "División por cero",
    ErrorKind.INVALID_DOMAIN: "Dominio inválido",
    ErrorKind.INVALID_FACTORIAL_INPUT: "factorial requiere entero no negativo",
    ErrorKind.INVALID_ANGLE_MODE: "El modo debe ser 'rad' o 'deg'",
    ErrorKind.MISMATCHED_PARENTHESES: "Paréntesis desbalanceados",
    ErrorKind.UNKNOWN_FUNCTION: "Función desconocida",
    ErrorKind.INVALID_CHARACTER: "Carácter inválido",
    ErrorKind.INVALID_EXPRESSION: "Expresión inválida",
    ErrorKind.INVALID_VALUE: "Valor inválido para memoria",
    ErrorKind.OVERFLOW: "Desbordamiento de memoria",
}


class CalculatorError(ValueError):
    """Error de cálculo con su categoría."""

    def __init__(self, kind: ErrorKind, message: str = None):
        self.kind = kind
        self.message = message or _DEFAULT_MESSAGES[kind]
        super().__init__(self.message)

    def __repr__(self) -> str:
        return f"CalculatorError({self.kind.name}, {self.message!r})"
