"""Grid proxy — provides ``grid['A1']`` access over a RecalcEngine."""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from typing import Any

from gridcalc._utils import COLUMNS, ROWS, rowcol_to_a1
from gridcalc.calc._engine import RecalcEngine
from gridcalc.calc._protocol import Cell, EditResult


class Grid:
    """Worksheet-style front end for the presentation layer.

    Reading returns immutable :class:`Cell` snapshots; assigning a string
    applies an edit and recalculates everything that depends on it.
    """

    __slots__ = ("_engine",)

    def __init__(self, engine: RecalcEngine | None = None) -> None:
        self._engine = engine if engine is not None else RecalcEngine()

    @property
    def engine(self) -> RecalcEngine:
        return self._engine

    @property
    def dimensions(self) -> str:
        return f"A1:{rowcol_to_a1(ROWS, len(COLUMNS))}"

    @property
    def max_row(self) -> int:
        return ROWS

    @property
    def max_column(self) -> int:
        return len(COLUMNS)

    # ------------------------------------------------------------------
    # Cell access
    # ------------------------------------------------------------------

    def __getitem__(self, key: str) -> Cell:
        """``grid['A1']`` -> Cell."""
        return self._engine.get_cell(key)

    def __setitem__(self, key: str, value: str) -> None:
        """``grid['A1'] = '=B1*2'`` — shorthand for :meth:`edit`."""
        self.edit(key, value)

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and key in self._engine.get_all_cells()

    def __iter__(self) -> Iterator[Cell]:
        for row in self.iter_rows():
            yield from row

    def edit(self, key: str, value: str) -> EditResult:
        return self._engine.apply_edit(key, value)

    def cell(self, row: int, column: int, value: str | None = None) -> Cell:
        """Get a cell by 1-based (row, column), optionally editing it first."""
        cell_id = rowcol_to_a1(row, column)
        if value is not None:
            self.edit(cell_id, value)
        return self._engine.get_cell(cell_id)

    def load(self, values: Mapping[str, str]) -> None:
        self._engine.load(values)

    def reset(self) -> None:
        self._engine.reset()

    # ------------------------------------------------------------------
    # Iteration
    # ------------------------------------------------------------------

    def iter_rows(
        self,
        min_row: int | None = None,
        max_row: int | None = None,
        min_col: int | None = None,
        max_col: int | None = None,
        values_only: bool = False,
    ) -> Iterator[tuple[Any, ...]]:
        """Iterate over rows in a range, top to bottom.

        With ``values_only`` each row holds display values instead of cells.
        """
        r_min = min_row or 1
        r_max = max_row or ROWS
        c_min = min_col or 1
        c_max = max_col or len(COLUMNS)
        cells = self._engine.get_all_cells()

        for r in range(r_min, r_max + 1):
            row = tuple(cells[rowcol_to_a1(r, c)] for c in range(c_min, c_max + 1))
            if values_only:
                yield tuple(cell.display_value for cell in row)
            else:
                yield row
