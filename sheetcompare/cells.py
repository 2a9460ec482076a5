from __future__ import annotations

import math
from decimal import Decimal
from typing import Optional

from .models import Cell, CellKind


def values_equal(cell1: Optional[Cell], cell2: Optional[Cell]) -> bool:
    # absent and BLANK are different things here even though both render as ""
    if cell1 is None and cell2 is None:
        return True
    if cell1 is None or cell2 is None:
        return False
    if cell1.kind != cell2.kind:
        return False

    kind = cell1.kind
    if kind == CellKind.STRING:
        return cell1.value == cell2.value
    if kind == CellKind.NUMERIC:
        return float(cell1.value) == float(cell2.value)
    if kind == CellKind.BOOLEAN:
        return bool(cell1.value) == bool(cell2.value)
    if kind == CellKind.BLANK:
        return True
    return False


def format_number(value: float) -> str:
    """Plain decimal, never exponent form: 1e16 -> "10000000000000000.0"."""
    value = float(value)
    if not math.isfinite(value):
        return repr(value)
    text = format(Decimal(repr(value)), "f")
    return text if "." in text else text + ".0"


def stringify(cell: Optional[Cell]) -> str:
    if cell is None:
        return ""
    if cell.kind == CellKind.STRING:
        return cell.value
    if cell.kind == CellKind.NUMERIC:
        return format_number(cell.value)
    if cell.kind == CellKind.BOOLEAN:
        return "true" if cell.value else "false"
    return ""
