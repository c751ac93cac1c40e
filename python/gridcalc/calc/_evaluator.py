"""Arithmetic expression evaluator: tokenize, shunting-yard, RPN.

Operates on an expression whose cell references have already been
replaced by numbers, e.g. ``"5+3*(2-1)"``.  The supported grammar is
numbers, the four binary operators, unary sign and parentheses; there is
no fallback interpreter for anything outside it.

Malformed structure raises :class:`InvalidResult`.  Division by zero does
not raise: it produces ``inf``/``-inf``/``nan`` and the caller decides
that a non-finite number is not a valid answer.
"""

from __future__ import annotations

import math
from typing import Union

from gridcalc.calc._errors import InvalidCharacters, InvalidResult

Token = Union[float, str]

_DIGITS = "0123456789."
_BINARY_OPS = "+-*/"
_PARENS = "()"

# Unary sign tokens are spelled apart from the binary ones after tokenizing.
NEG = "u-"
POS = "u+"

_PRECEDENCE: dict[str, int] = {
    "+": 1,
    "-": 1,
    "*": 2,
    "/": 2,
    NEG: 3,
    POS: 3,
}
_UNARY = frozenset({NEG, POS})


def _to_number(text: str) -> float:
    try:
        return float(text)
    except ValueError:
        raise InvalidResult(f"Malformed number: {text}") from None


def tokenize(expr: str) -> list[Token]:
    """Split *expr* into numbers and operator/parenthesis tokens.

    Consecutive digit and ``.`` characters form one number.  A ``+``/``-``
    at the start, after another operator, or after ``(`` is a unary sign
    and comes back as :data:`POS`/:data:`NEG`.
    """
    tokens: list[Token] = []
    current = ""
    for ch in expr:
        if ch in _DIGITS:
            current += ch
            continue
        if current:
            tokens.append(_to_number(current))
            current = ""
        if ch in _BINARY_OPS:
            prev = tokens[-1] if tokens else None
            if ch in "+-" and (prev is None or prev == "(" or prev in _PRECEDENCE):
                tokens.append(NEG if ch == "-" else POS)
            else:
                tokens.append(ch)
        elif ch in _PARENS:
            tokens.append(ch)
        else:
            raise InvalidCharacters()
    if current:
        tokens.append(_to_number(current))
    return tokens


def to_postfix(tokens: list[Token]) -> list[Token]:
    """Reorder infix *tokens* into RPN using operator precedence.

    ``*``/``/`` bind tighter than ``+``/``-``; all binary operators are
    left associative, unary signs are right associative and bind tightest.
    """
    output: list[Token] = []
    operators: list[str] = []

    for token in tokens:
        if isinstance(token, float):
            output.append(token)
        elif token == "(":
            operators.append(token)
        elif token == ")":
            while operators and operators[-1] != "(":
                output.append(operators.pop())
            if not operators:
                raise InvalidResult("Mismatched parentheses")
            operators.pop()
        elif token in _UNARY:
            operators.append(token)
        else:
            prec = _PRECEDENCE[token]
            while (
                operators
                and operators[-1] != "("
                and _PRECEDENCE[operators[-1]] >= prec
            ):
                output.append(operators.pop())
            operators.append(token)

    while operators:
        op = operators.pop()
        if op == "(":
            raise InvalidResult("Mismatched parentheses")
        output.append(op)

    return output


def _divide(a: float, b: float) -> float:
    if b == 0:
        if a == 0 or math.isnan(a):
            return math.nan
        return math.copysign(math.inf, a) * math.copysign(1.0, b)
    return a / b


def _apply(op: str, a: float, b: float) -> float:
    if op == "+":
        return a + b
    if op == "-":
        return a - b
    if op == "*":
        return a * b
    if op == "/":
        return _divide(a, b)
    raise InvalidResult(f"Unknown operator: {op}")


def evaluate_postfix(postfix: list[Token]) -> float:
    """Evaluate an RPN token list with a single operand stack."""
    stack: list[float] = []
    for token in postfix:
        if isinstance(token, float):
            stack.append(token)
        elif token in _UNARY:
            if not stack:
                raise InvalidResult("Missing operand")
            if token == NEG:
                stack.append(-stack.pop())
        else:
            if len(stack) < 2:
                raise InvalidResult("Missing operand")
            b = stack.pop()
            a = stack.pop()
            stack.append(_apply(token, a, b))

    if len(stack) != 1:
        raise InvalidResult("Malformed expression")
    return stack[0]


def evaluate(expr: str) -> float:
    """Evaluate a substituted arithmetic expression to a float.

    The result may be non-finite (division by zero); callers must check.
    """
    return evaluate_postfix(to_postfix(tokenize(expr)))
