"""RecalcEngine: owns the cell table and propagates edits through the graph."""

from __future__ import annotations

import logging
from collections import deque
from collections.abc import Mapping

from gridcalc._utils import all_cell_ids, is_valid_cell_id, parse_number
from gridcalc.calc._errors import CIRCULAR, CIRCULAR_REASON
from gridcalc.calc._graph import DependencyGraph
from gridcalc.calc._parser import compile_formula
from gridcalc.calc._protocol import Cell, CellDelta, EditResult

logger = logging.getLogger(__name__)


class RecalcEngine:
    """Incremental recalculation over the fixed 10x10 grid.

    Usage::

        engine = RecalcEngine()
        engine.apply_edit("A1", "5")
        engine.apply_edit("B1", "=A1+3")
        engine.get_cell("B1").display_value  # "8"
        engine.apply_edit("A1", "10")
        engine.get_cell("B1").display_value  # "13"

    The engine is single-writer: callers sharing an instance across threads
    must serialize whole ``apply_edit`` calls themselves.
    """

    def __init__(self) -> None:
        self._graph = DependencyGraph()
        self._cells: dict[str, Cell] = {}
        self.reset()

    @property
    def graph(self) -> DependencyGraph:
        return self._graph

    def reset(self) -> None:
        """Return every cell to empty and drop all dependency edges."""
        self._graph.clear()
        self._cells = {cell_id: Cell(cell_id) for cell_id in all_cell_ids()}

    def load(self, values: Mapping[str, str]) -> None:
        """Apply a batch of raw inputs in iteration order."""
        for cell_id, raw_input in values.items():
            self.apply_edit(cell_id, raw_input)

    # ------------------------------------------------------------------
    # Read accessors
    # ------------------------------------------------------------------

    def get_cell(self, cell_id: str) -> Cell:
        self._check_cell_id(cell_id)
        return self._cells[cell_id]

    def get_all_cells(self) -> dict[str, Cell]:
        return dict(self._cells)

    # ------------------------------------------------------------------
    # Editing
    # ------------------------------------------------------------------

    def apply_edit(self, cell_id: str, raw_input: str) -> EditResult:
        """Overwrite *cell_id* with *raw_input* and recalculate its dependents.

        Each transitive dependent is recalculated at most once, after its
        precedents within the affected set.  Failures never raise; they are
        recorded in the affected cells' error state.
        """
        self._check_cell_id(cell_id)
        if not isinstance(raw_input, str):
            raise TypeError(f"raw_input must be str, not {type(raw_input).__name__}")

        before = dict(self._cells)
        self._evaluate(cell_id, raw_input)

        order = self._graph.evaluation_order(self._graph.get_all_dependents(cell_id))
        logger.debug("Edit %s: recalculating %s", cell_id, order)

        # The edited cell shows up among its own dependents when it sits on
        # a cycle; it has already been evaluated.
        processed: set[str] = {cell_id}
        recalculated: list[str] = []
        queue: deque[str] = deque(order)
        while queue:
            dep = queue.popleft()
            if dep in processed:
                continue
            processed.add(dep)
            self._evaluate(dep, self._cells[dep].formula)
            recalculated.append(dep)

        deltas: list[CellDelta] = []
        for touched in (cell_id, *recalculated):
            old, new = before[touched], self._cells[touched]
            if (old.display_value, old.error_state) != (new.display_value, new.error_state):
                deltas.append(CellDelta(
                    cell_id=touched,
                    old_value=old.display_value,
                    new_value=new.display_value,
                    old_error=old.error_state,
                    new_error=new.error_state,
                ))

        return EditResult(
            cell_id=cell_id,
            recalculated=tuple(recalculated),
            deltas=tuple(deltas),
        )

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _evaluate(self, cell_id: str, raw_input: str) -> None:
        """Rebuild *cell_id*'s edges from *raw_input*, compile it and commit."""
        self._graph.remove_all_precedents(cell_id)

        result = compile_formula(raw_input, self._resolve)
        for ref in result.references:
            self._graph.add_dependency(cell_id, ref)

        display_value, error_state = result.display_value, result.error_state
        if self._graph.has_cycle_through(cell_id):
            logger.debug("Circular reference through %s", cell_id)
            display_value, error_state = CIRCULAR, CIRCULAR_REASON

        self._cells[cell_id] = Cell(
            cell_id=cell_id,
            raw_input=raw_input,
            formula=raw_input,
            display_value=display_value,
            error_state=error_state,
        )

    def _resolve(self, ref: str) -> float | None:
        cell = self._cells.get(ref)
        if cell is None or cell.is_error:
            return None
        return parse_number(cell.display_value)

    @staticmethod
    def _check_cell_id(cell_id: str) -> None:
        if not is_valid_cell_id(cell_id):
            raise ValueError(f"Invalid cell reference: {cell_id!r}")
