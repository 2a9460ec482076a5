from __future__ import annotations

import logging
from typing import List, Optional, Sequence

from .cells import stringify, values_equal
from .diagnostics import CellMismatch, Diagnostics
from .models import (
    ColumnMatch,
    CompareResult,
    HeaderIndex,
    MismatchRecord,
    ResolvedMatch,
    SheetData,
    UnresolvedMatch,
)

LOGGER = logging.getLogger(__name__)


def diff_column(
    sheet1: SheetData,
    sheet2: SheetData,
    header1: HeaderIndex,
    header2: HeaderIndex,
    match: ResolvedMatch,
) -> List[MismatchRecord]:
    """Compare one matched column pair row by row.

    Rows are paired by position after the header; the walk stops at the end
    of the shorter sheet without complaint.
    """
    field_name = header1.name_at(match.source_index) or match.source_name
    target_field = header2.name_at(match.target_index) or match.target_name
    records: List[MismatchRecord] = []
    for row1, row2 in zip(sheet1.data_rows(), sheet2.data_rows()):
        cell1 = row1.cell(match.source_index)
        cell2 = row2.cell(match.target_index)
        if values_equal(cell1, cell2):
            continue
        records.append(
            MismatchRecord(
                tag_id=match.tag_id,
                field_name=field_name,
                value1=stringify(cell1),
                value2=stringify(cell2),
                target_field=target_field,
                row_number=row1.number,
            )
        )
    return records


def compare_sheets(
    sheet1: SheetData,
    sheet2: SheetData,
    header1: HeaderIndex,
    header2: HeaderIndex,
    matches: Sequence[ColumnMatch],
    diagnostics: Optional[Diagnostics] = None,
) -> CompareResult:
    diagnostics = diagnostics or Diagnostics()
    mismatches: List[MismatchRecord] = []
    unresolved: List[UnresolvedMatch] = []
    for match in matches:
        if isinstance(match, UnresolvedMatch):
            unresolved.append(match)
            continue
        LOGGER.debug("Comparing %s and %s (tag %d)", match.source_name, match.target_name, match.tag_id)
        for record in diff_column(sheet1, sheet2, header1, header2, match):
            diagnostics.emit(CellMismatch(record))
            mismatches.append(record)

    rows1 = max(len(sheet1.rows) - 1, 0)
    rows2 = max(len(sheet2.rows) - 1, 0)
    if rows1 != rows2:
        LOGGER.debug("Row counts differ (%d vs %d); compared the first %d", rows1, rows2, min(rows1, rows2))

    identical = not mismatches and not unresolved
    LOGGER.info(
        "Compared %s and %s: %d mismatches, %d unresolved mappings",
        sheet1.name, sheet2.name, len(mismatches), len(unresolved),
    )
    return CompareResult(identical=identical, mismatches=mismatches, unresolved=unresolved)
