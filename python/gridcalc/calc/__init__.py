"""gridcalc.calc - Formula evaluation and recalculation engine."""

from gridcalc.calc._engine import RecalcEngine
from gridcalc.calc._errors import (
    CIRCULAR,
    ERROR,
    EmptyExpression,
    EmptyFormula,
    FormulaError,
    InvalidCharacters,
    InvalidReference,
    InvalidResult,
    is_sentinel,
)
from gridcalc.calc._evaluator import evaluate
from gridcalc.calc._graph import DependencyGraph
from gridcalc.calc._parser import FormulaCompiler, compile_formula, parse_references
from gridcalc.calc._protocol import CalcEngine, Cell, CellDelta, CompileResult, EditResult

__all__ = [
    "CIRCULAR",
    "CalcEngine",
    "Cell",
    "CellDelta",
    "CompileResult",
    "DependencyGraph",
    "ERROR",
    "EditResult",
    "EmptyExpression",
    "EmptyFormula",
    "FormulaCompiler",
    "FormulaError",
    "InvalidCharacters",
    "InvalidReference",
    "InvalidResult",
    "RecalcEngine",
    "compile_formula",
    "evaluate",
    "is_sentinel",
    "parse_references",
]
