"""Parseo y evaluación de expresiones para la calculadora científica.

Tres etapas puras, sin estado compartido entre llamadas:

    tokenize(expr)            -> tokens infijos
    to_postfix(tokens)        -> tokens en notación polaca inversa (Shunting-Yard)
    evaluate_postfix(tokens)  -> valor numérico (pila)

Las operaciones concretas las aporta un *provider* (``PythonMathProvider``
para float, ``MPMathProvider`` para precisión arbitraria).
"""

import math
import re
from dataclasses import dataclass, field
from enum import Enum
from typing import ClassVar, List, Optional

from calculator_config import ANGLE_MODES, MAX_PARENTHESIS_DEPTH
from calculator_errors import CalculatorError, ErrorKind


OPERATOR_PRECEDENCE = {
    "+": 1,
    "-": 1,
    "×": 2,
    "÷": 2,
    "*": 2,
    "/": 2,
    "^": 3,
}
RIGHT_ASSOCIATIVE = {"^"}
FUNCTIONS = {"sin", "cos", "tan", "ln", "log", "sqrt", "exp", "factorial"}

IMPLICIT_MULTIPLICATION = "×"


# ═════════════════════════════════════════════════════════════════
#  Tokens
# ═════════════════════════════════════════════════════════════════

class TokenKind(Enum):
    NUMBER = "number"
    OPERATOR = "operator"
    FUNCTION = "function"
    PARENTHESIS = "parenthesis"


@dataclass(frozen=True)
class NumberToken:
    value: float
    # Literal tal como se escribió (con signo), para proveedores de precisión
    text: Optional[str] = field(default=None, compare=False, repr=False)

    kind: ClassVar[TokenKind] = TokenKind.NUMBER

    def __str__(self) -> str:
        return self.text if self.text is not None else repr(self.value)


@dataclass(frozen=True)
class OperatorToken:
    symbol: str
    precedence: int

    kind: ClassVar[TokenKind] = TokenKind.OPERATOR

    @property
    def right_associative(self) -> bool:
        return self.symbol in RIGHT_ASSOCIATIVE

    def __str__(self) -> str:
        return self.symbol


@dataclass(frozen=True)
class FunctionToken:
    name: str

    kind: ClassVar[TokenKind] = TokenKind.FUNCTION

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class ParenToken:
    is_open: bool

    kind: ClassVar[TokenKind] = TokenKind.PARENTHESIS

    @property
    def symbol(self) -> str:
        return "(" if self.is_open else ")"

    def __str__(self) -> str:
        return self.symbol


OPEN_PAREN = ParenToken(True)
CLOSE_PAREN = ParenToken(False)


# ═════════════════════════════════════════════════════════════════
#  Evaluador
# ═════════════════════════════════════════════════════════════════

class FormulaEvaluator:
    """Tokeniza, convierte a postfija y evalúa expresiones infijas."""

    # Solo dígitos ASCII: \d aceptaría también '٣', '５'...
    _NUMBER_RE = re.compile(r"(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:[eE][+\-]?[0-9]+)?")
    _LETTERS_RE = re.compile(r"[A-Za-z]+")

    def __init__(self, provider):
        self._provider = provider

    @property
    def provider(self):
        return self._provider

    # ── Entrada pública ──────────────────────────────────────────

    def evaluate(self, expression: str, angle_mode: str = "rad"):
        """Evalúa la expresión y devuelve el valor numérico.

        Raises:
            CalculatorError: con el ``ErrorKind`` de la etapa que falló.
        """
        if angle_mode not in ANGLE_MODES:
            raise CalculatorError(ErrorKind.INVALID_ANGLE_MODE)

        tokens = self.tokenize(expression)
        postfix = self.to_postfix(tokens)
        return self.evaluate_postfix(postfix, angle_mode)

    # ── Paréntesis ───────────────────────────────────────────────

    @staticmethod
    def validate_parentheses(expression: str) -> None:
        level = 0
        for char in expression:
            if char == "(":
                level += 1
                if level > MAX_PARENTHESIS_DEPTH:
                    raise CalculatorError(
                        ErrorKind.MISMATCHED_PARENTHESES,
                        f"Máximo {MAX_PARENTHESIS_DEPTH} niveles de paréntesis",
                    )
            elif char == ")":
                level -= 1
                if level < 0:
                    raise CalculatorError(ErrorKind.MISMATCHED_PARENTHESES)

        if level != 0:
            raise CalculatorError(ErrorKind.MISMATCHED_PARENTHESES)

    # ── Etapa 1: tokenización ────────────────────────────────────

    def tokenize(self, expression: str) -> List:
        if not expression or not expression.strip():
            raise CalculatorError(ErrorKind.INVALID_EXPRESSION, "Expresión vacía")

        self.validate_parentheses(expression)

        tokens = []
        i = 0
        length = len(expression)

        while i < length:
            char = expression[i]

            if char.isspace():
                i += 1
                continue

            if self._starts_number(expression, i):
                token, i = self._read_number(expression, i)
                self._push(tokens, token)
                continue

            if char in OPERATOR_PRECEDENCE:
                if char == "-" and self._is_unary_position(tokens):
                    j = i + 1
                    while j < length and expression[j].isspace():
                        j += 1
                    if self._starts_number(expression, j):
                        token, i = self._read_number(expression, j, negative=True)
                        self._push(tokens, token)
                        continue
                # Menos unario sin número detrás: queda como operador
                tokens.append(OperatorToken(char, OPERATOR_PRECEDENCE[char]))
                i += 1
                continue

            if char == "(":
                self._push(tokens, OPEN_PAREN)
                i += 1
                continue

            if char == ")":
                tokens.append(CLOSE_PAREN)
                i += 1
                continue

            letters = self._LETTERS_RE.match(expression, i)
            if letters:
                name = letters.group()
                if name not in FUNCTIONS:
                    raise CalculatorError(
                        ErrorKind.UNKNOWN_FUNCTION, f"Función desconocida: {name}"
                    )
                self._push(tokens, FunctionToken(name))
                i = letters.end()
                continue

            raise CalculatorError(ErrorKind.INVALID_CHARACTER, f"Carácter inválido: {char}")

        return tokens

    @staticmethod
    def _starts_number(expression: str, i: int) -> bool:
        if i >= len(expression):
            return False
        char = expression[i]
        if char.isdigit() and char.isascii():
            return True
        return (
            char == "."
            and i + 1 < len(expression)
            and expression[i + 1].isdigit()
            and expression[i + 1].isascii()
        )

    def _read_number(self, expression: str, start: int, negative: bool = False):
        match = self._NUMBER_RE.match(expression, start)
        text = match.group()
        if negative:
            text = "-" + text

        value = float(text)
        if math.isinf(value):
            raise CalculatorError(
                ErrorKind.INVALID_EXPRESSION, f"Número fuera de rango: {text}"
            )
        return NumberToken(value, text), match.end()

    @staticmethod
    def _is_unary_position(tokens: List) -> bool:
        if not tokens:
            return True
        last = tokens[-1]
        return (
            last is OPEN_PAREN
            or isinstance(last, (OperatorToken, FunctionToken))
        )

    @staticmethod
    def _push(tokens: List, token) -> None:
        """Añade ``token`` insertando la multiplicación implícita si procede.

        ``2(3)``, ``2sin(30)``, ``(1)(2)``, ``(1)2`` y ``(1)sqrt(4)`` llevan un
        ``×`` implícito; dos números seguidos no.
        """
        if tokens:
            last = tokens[-1]
            closes_operand = isinstance(last, NumberToken) or last is CLOSE_PAREN
            opens_operand = token is OPEN_PAREN or isinstance(token, FunctionToken)
            if (closes_operand and opens_operand) or (
                last is CLOSE_PAREN and isinstance(token, NumberToken)
            ):
                tokens.append(
                    OperatorToken(
                        IMPLICIT_MULTIPLICATION,
                        OPERATOR_PRECEDENCE[IMPLICIT_MULTIPLICATION],
                    )
                )
        tokens.append(token)

    # ── Etapa 2: Shunting-Yard ───────────────────────────────────

    @staticmethod
    def to_postfix(tokens: List) -> List:
        output = []
        stack = []

        for token in tokens:
            if isinstance(token, NumberToken):
                output.append(token)

            elif isinstance(token, FunctionToken):
                stack.append(token)

            elif isinstance(token, OperatorToken):
                while stack and not isinstance(stack[-1], ParenToken):
                    top = stack[-1]
                    if (
                        isinstance(top, FunctionToken)
                        or top.precedence > token.precedence
                        or (
                            top.precedence == token.precedence
                            and not token.right_associative
                        )
                    ):
                        output.append(stack.pop())
                    else:
                        break
                stack.append(token)

            elif token.is_open:
                stack.append(token)

            else:
                while stack and not (isinstance(stack[-1], ParenToken) and stack[-1].is_open):
                    output.append(stack.pop())
                if not stack:
                    raise CalculatorError(ErrorKind.MISMATCHED_PARENTHESES)
                stack.pop()

                # Cierre de la lista de argumentos de una función
                if stack and isinstance(stack[-1], FunctionToken):
                    output.append(stack.pop())

        while stack:
            token = stack.pop()
            if isinstance(token, ParenToken):
                raise CalculatorError(ErrorKind.MISMATCHED_PARENTHESES)
            output.append(token)

        return output

    # ── Etapa 3: evaluación de la postfija ───────────────────────

    def evaluate_postfix(self, tokens: List, angle_mode: str = "rad"):
        namespace = self._provider.build_namespace(angle_mode)
        stack = []

        for token in tokens:
            if isinstance(token, NumberToken):
                literal = token.text if token.text is not None else token.value
                stack.append(self._provider.literal(literal))

            elif isinstance(token, OperatorToken):
                if len(stack) < 2:
                    raise CalculatorError(ErrorKind.INVALID_EXPRESSION)
                operation = namespace.get(token.symbol)
                if operation is None:
                    raise CalculatorError(
                        ErrorKind.INVALID_EXPRESSION, f"Operador desconocido: {token.symbol}"
                    )
                b = stack.pop()
                a = stack.pop()
                stack.append(operation(a, b))

            elif isinstance(token, FunctionToken):
                if not stack:
                    raise CalculatorError(ErrorKind.INVALID_EXPRESSION)
                function = namespace.get(token.name)
                if function is None:
                    raise CalculatorError(
                        ErrorKind.UNKNOWN_FUNCTION, f"Función desconocida: {token.name}"
                    )
                stack.append(function(stack.pop()))

            else:
                raise CalculatorError(ErrorKind.MISMATCHED_PARENTHESES)

        if len(stack) != 1:
            raise CalculatorError(ErrorKind.INVALID_EXPRESSION)

        return stack[0]
