"""Cell identifier grammar and number formatting helpers."""

from __future__ import annotations

import math
import re

# Fixed 10x10 grid: columns A-J, rows 1-10.
COLUMNS = "ABCDEFGHIJ"
ROWS = 10

# Reference token grammar. "10" is tried before the single digit so A10
# is never split into A1 + "0".
CELL_REF_RE = re.compile(r"[A-J](?:10|[1-9])")

_NUMBER_RE = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")


def is_valid_cell_id(cell_id: object) -> bool:
    """True when *cell_id* is one of the 100 addressable identifiers."""
    return isinstance(cell_id, str) and CELL_REF_RE.fullmatch(cell_id) is not None


def a1_to_rowcol(cell_id: str) -> tuple[int, int]:
    """Convert ``"B3"`` to a 1-based ``(row, col)`` tuple ``(3, 2)``."""
    if not is_valid_cell_id(cell_id):
        raise ValueError(f"Invalid cell reference: {cell_id!r}")
    return int(cell_id[1:]), COLUMNS.index(cell_id[0]) + 1


def rowcol_to_a1(row: int, col: int) -> str:
    """Convert a 1-based ``(row, col)`` pair to an identifier like ``"B3"``."""
    if not (1 <= row <= ROWS and 1 <= col <= len(COLUMNS)):
        raise ValueError(f"Cell position out of range: ({row}, {col})")
    return f"{COLUMNS[col - 1]}{row}"


def all_cell_ids() -> list[str]:
    """All identifiers in row-major order: A1, B1, ..., J1, A2, ..., J10."""
    return [rowcol_to_a1(r, c) for r in range(1, ROWS + 1) for c in range(1, len(COLUMNS) + 1)]


def format_number(value: float) -> str:
    """Canonical decimal string for a finite number.

    Integral values drop the fractional part (``8.0`` -> ``"8"``) and the
    result never uses exponent notation, so it can be spliced back into an
    expression that only allows digits, operators and ``.``.
    """
    if not math.isfinite(value):
        raise ValueError(f"Cannot format non-finite number: {value!r}")
    if value == 0:
        return "0"
    if float(value).is_integer():
        return str(int(value))
    text = repr(float(value))
    if "e" in text or "E" in text:
        # Python repr switches to exponent form for very small/large values;
        # expand it back to plain positional digits.
        mantissa, _, exp = text.lower().partition("e")
        negative = mantissa.startswith("-")
        digits = mantissa.lstrip("-").replace(".", "")
        point = len(mantissa.lstrip("-").split(".")[0]) + int(exp)
        if point <= 0:
            text = "0." + "0" * (-point) + digits
        elif point >= len(digits):
            text = digits + "0" * (point - len(digits))
        else:
            text = digits[:point] + "." + digits[point:]
        text = text.rstrip("0").rstrip(".") if "." in text else text
        if negative:
            text = "-" + text
    return text


def parse_number(text: str | None) -> float | None:
    """Parse a display value as a number, or ``None`` if it is not one.

    Stricter than ``float()``: ``inf``, ``nan``, sentinels and text with
    trailing junk are all rejected.
    """
    if text is None:
        return None
    stripped = text.strip()
    if not stripped or _NUMBER_RE.fullmatch(stripped) is None:
        return None
    value = float(stripped)
    if not math.isfinite(value):
        return None
    return value
