"""Cell records, result dataclasses and the CalcEngine protocol."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol, runtime_checkable

from gridcalc.calc._errors import is_sentinel

if TYPE_CHECKING:
    from collections.abc import Mapping


@dataclass(frozen=True)
class Cell:
    """Snapshot of one cell.

    ``formula`` mirrors ``raw_input``; an input starting with ``=`` is a
    formula, anything else a literal.  For formula cells ``error_state`` is
    set exactly when ``display_value`` is a sentinel; a literal always has
    no error state, even one typed as ``#ERROR``.
    """

    cell_id: str
    raw_input: str = ""
    formula: str = ""
    display_value: str = ""
    error_state: str | None = None

    @property
    def is_formula(self) -> bool:
        return self.formula.startswith("=")

    @property
    def is_error(self) -> bool:
        return is_sentinel(self.display_value)

    @property
    def is_empty(self) -> bool:
        return self.raw_input == ""


@dataclass(frozen=True)
class CompileResult:
    """Outcome of compiling one raw input."""

    display_value: str
    error_state: str | None = None
    references: tuple[str, ...] = ()  # distinct refs, first-appearance order


@dataclass(frozen=True)
class CellDelta:
    """A single cell's visible change from an edit."""

    cell_id: str
    old_value: str
    new_value: str
    old_error: str | None = None
    new_error: str | None = None


@dataclass(frozen=True)
class EditResult:
    """Result of applying one edit and propagating it."""

    cell_id: str
    recalculated: tuple[str, ...]  # dependents, in evaluation order
    deltas: tuple[CellDelta, ...]  # cells whose display or error changed

    @property
    def changed_cells(self) -> tuple[str, ...]:
        return tuple(d.cell_id for d in self.deltas)


@runtime_checkable
class CalcEngine(Protocol):
    """Protocol the presentation layer relies on."""

    def apply_edit(self, cell_id: str, raw_input: str) -> EditResult:
        """Overwrite a cell's raw input and recalculate its dependents."""
        ...

    def get_cell(self, cell_id: str) -> Cell:
        """Read-only snapshot of one cell."""
        ...

    def get_all_cells(self) -> Mapping[str, Cell]:
        """Snapshot of every cell, for a full redraw."""
        ...
