from __future__ import annotations

import logging
from typing import List, Optional, Tuple

from .errors import MalformedHeaderCell
from .models import Cell, CellKind, ColumnMapping, HeaderIndex, SheetData

LOGGER = logging.getLogger(__name__)


def cell_text(sheet: str, row_number: int, column_index: int, cell: Optional[Cell]) -> str:
    """Read a header/mapping cell as trimmed text; a blank cell reads as ""."""
    if cell is None:
        raise MalformedHeaderCell(sheet, row_number, column_index, None)
    if cell.kind == CellKind.BLANK:
        return ""
    if cell.kind != CellKind.STRING:
        raise MalformedHeaderCell(sheet, row_number, column_index, cell.kind.value)
    return cell.value.strip()


def read_header_index(sheet: SheetData) -> HeaderIndex:
    header = sheet.header
    if header is None:
        LOGGER.warning("%s has no header row", sheet.name)
        return HeaderIndex()

    entries: List[Tuple[str, int]] = []
    for idx, cell in enumerate(header.cells):
        if cell is None:
            continue
        entries.append((cell_text(sheet.name, header.number, idx, cell), idx))
    index = HeaderIndex(entries)
    if len(index) < len(entries):
        LOGGER.debug("%s: %d duplicate header names, last column wins", sheet.name, len(entries) - len(index))
    return index


def read_column_mapping(sheet: SheetData, skip_header: bool = False) -> ColumnMapping:
    rows = sheet.rows[1:] if skip_header else sheet.rows
    mapping: ColumnMapping = {}
    for row in rows:
        if not any(cell is not None for cell in row.cells):
            continue
        source = cell_text(sheet.name, row.number, 0, row.cell(0))
        target = cell_text(sheet.name, row.number, 1, row.cell(1))
        if source in mapping:
            LOGGER.debug("%s row %d overrides mapping for '%s'", sheet.name, row.number, source)
        mapping[source] = target
    LOGGER.info("Loaded %d column mappings from %s", len(mapping), sheet.name)
    return mapping
