"""Formula failure types and the sentinel display values they map to."""

from __future__ import annotations

# ---------------------------------------------------------------------------
# Sentinels: reserved display strings that signal failure rather than data
# ---------------------------------------------------------------------------

ERROR = "#ERROR"
CIRCULAR = "#CIRCULAR"
SENTINELS = frozenset({ERROR, CIRCULAR})

CIRCULAR_REASON = "Circular reference detected"


def is_sentinel(display_value: str | None) -> bool:
    """Return True if *display_value* is ``#ERROR`` or ``#CIRCULAR``."""
    return display_value in SENTINELS


# ---------------------------------------------------------------------------
# Exceptions raised inside the compiler/evaluator
# ---------------------------------------------------------------------------


class FormulaError(Exception):
    """Base class for a formula that cannot produce a numeric value.

    ``reason`` is the human-readable text stored in a cell's error state.
    """

    default_reason = "Formula error"

    def __init__(self, reason: str | None = None) -> None:
        self.reason = reason or self.default_reason
        super().__init__(self.reason)


class EmptyFormula(FormulaError):
    default_reason = "Empty formula"


class EmptyExpression(FormulaError):
    default_reason = "Empty expression after replacements"


class InvalidReference(FormulaError):
    """A referenced cell is empty, non-numeric, or itself failed."""

    def __init__(self, ref: str) -> None:
        self.ref = ref
        super().__init__(f"Invalid reference: {ref}")


class InvalidCharacters(FormulaError):
    default_reason = "Invalid characters in formula"


class InvalidResult(FormulaError):
    default_reason = "Invalid result"
