"""Formula compiler: reference extraction, substitution and evaluation.

Turns a raw cell input into a ``(display_value, error_state)`` pair.
Every :class:`FormulaError` raised along the way is caught here and
converted to the ``#ERROR`` sentinel plus its reason, so nothing past
this boundary ever sees an exception from a bad formula.
"""

from __future__ import annotations

import logging
import math
import re
from collections.abc import Callable, Mapping
from typing import Optional

from gridcalc._utils import CELL_REF_RE, format_number
from gridcalc.calc._errors import (
    ERROR,
    EmptyExpression,
    EmptyFormula,
    FormulaError,
    InvalidCharacters,
    InvalidReference,
    InvalidResult,
)
from gridcalc.calc._evaluator import evaluate
from gridcalc.calc._protocol import CompileResult

logger = logging.getLogger(__name__)

# Resolver: cell id -> its numeric value, or None when it has none.
Resolver = Callable[[str], Optional[float]]

_WHITESPACE_RE = re.compile(r"\s+")
_VALID_EXPR_RE = re.compile(r"[0-9+\-*/().]*")


# ---------------------------------------------------------------------------
# Reference extraction
# ---------------------------------------------------------------------------


def is_formula(raw: str) -> bool:
    """True when *raw* is a formula (starts with ``=``) rather than a literal."""
    return raw.startswith("=")


def find_references(formula: str) -> list[str]:
    """Every reference token in *formula*, duplicates included."""
    return CELL_REF_RE.findall(formula)


def parse_references(formula: str) -> list[str]:
    """Distinct reference tokens in order of first appearance."""
    refs: list[str] = []
    seen: set[str] = set()
    for ref in find_references(formula):
        if ref not in seen:
            refs.append(ref)
            seen.add(ref)
    return refs


def substitute_references(expr: str, values: Mapping[str, float]) -> str:
    """Replace every occurrence of each reference with its number.

    Substitution is driven by the reference grammar rather than plain
    string replacement, so ``A1`` never rewrites the front of ``A10``.
    """
    return CELL_REF_RE.sub(lambda m: format_number(values[m.group(0)]), expr)


# ---------------------------------------------------------------------------
# Compilation
# ---------------------------------------------------------------------------


def _compile_expression(body: str, refs: list[str], resolve: Resolver) -> str:
    if not body:
        raise EmptyFormula()

    values: dict[str, float] = {}
    for ref in refs:
        value = resolve(ref)
        if value is None:
            raise InvalidReference(ref)
        values[ref] = value

    expr = _WHITESPACE_RE.sub("", substitute_references(body, values))
    if _VALID_EXPR_RE.fullmatch(expr) is None:
        raise InvalidCharacters()
    if not expr:
        raise EmptyExpression()

    result = evaluate(expr)
    if not math.isfinite(result):
        raise InvalidResult()
    return format_number(result)


def compile_formula(formula: str, resolve: Resolver) -> CompileResult:
    """Compile a raw cell input against *resolve*.

    Literals (no leading ``=``) display as themselves with no references.
    Formulas list every distinct reference they contain, whether or not
    evaluation succeeds, so the caller can rebuild dependency edges.
    """
    if not is_formula(formula):
        return CompileResult(display_value=formula)

    body = formula[1:].strip()
    refs = parse_references(body)
    try:
        display = _compile_expression(body, refs, resolve)
    except FormulaError as e:
        logger.debug("Cannot evaluate formula %r: %s", formula, e.reason)
        return CompileResult(
            display_value=ERROR,
            error_state=e.reason,
            references=tuple(refs),
        )
    return CompileResult(display_value=display, references=tuple(refs))


class FormulaCompiler:
    """Compiles formulas against a fixed resolver.

    Usage::

        compiler = FormulaCompiler(lambda ref: {"A1": 5.0}.get(ref))
        compiler.compile("=A1+3").display_value  # "8"
    """

    __slots__ = ("_resolve",)

    def __init__(self, resolve: Resolver) -> None:
        self._resolve = resolve

    def compile(self, formula: str) -> CompileResult:
        return compile_formula(formula, self._resolve)

    def parse_refs(self, formula: str) -> list[str]:
        """Extract the distinct cell references in *formula*."""
        return parse_references(formula)
