"""gridcalc — incremental formula evaluation for a 10x10 grid of cells.

Usage::

    from gridcalc import Grid

    grid = Grid()
    grid["A1"] = "5"
    grid["B1"] = "=A1+3"
    grid["C1"] = "=B1*2"
    print(grid["C1"].display_value)   # 16

    grid["A1"] = "10"
    print(grid["C1"].display_value)   # 26
"""

from gridcalc._grid import Grid
from gridcalc._utils import COLUMNS, ROWS, all_cell_ids, is_valid_cell_id
from gridcalc.calc import CIRCULAR, ERROR, Cell, EditResult, RecalcEngine

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "CIRCULAR",
    "COLUMNS",
    "Cell",
    "ERROR",
    "EditResult",
    "Grid",
    "ROWS",
    "RecalcEngine",
    "all_cell_ids",
    "is_valid_cell_id",
]
