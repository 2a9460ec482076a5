from __future__ import annotations

import datetime
import logging
import zipfile
from contextlib import contextmanager
from typing import Any, Iterator, List, Optional
from xml.etree.ElementTree import ParseError

from openpyxl import load_workbook
from openpyxl.cell.read_only import EmptyCell
from openpyxl.utils.datetime import to_excel
from openpyxl.utils.exceptions import InvalidFileException
from openpyxl.workbook.workbook import Workbook

from .errors import SourceUnavailable
from .models import Cell, CellKind, Row, SheetData

LOGGER = logging.getLogger(__name__)


@contextmanager
def open_workbook(path: str) -> Iterator[Workbook]:
    try:
        wb = load_workbook(path, read_only=True)
    except (OSError, InvalidFileException, zipfile.BadZipFile, KeyError, ParseError) as exc:
        raise SourceUnavailable(path, "open", str(exc)) from exc
    # keep date-styled numbers as the stored serials instead of datetimes
    wb._date_formats = set()
    wb._timedelta_formats = set()
    try:
        yield wb
    finally:
        wb.close()


def to_cell(cell: Any, epoch: datetime.datetime) -> Optional[Cell]:
    if isinstance(cell, EmptyCell):
        return None
    value = cell.value
    if value is None:
        return Cell(CellKind.BLANK)
    data_type = cell.data_type
    if data_type == "f":
        return Cell(CellKind.FORMULA, value)
    if data_type == "e":
        return Cell(CellKind.ERROR, value)
    if data_type == "b":
        return Cell(CellKind.BOOLEAN, bool(value))
    if data_type == "d":
        # ISO 8601 date cells; compare them as serial numbers
        return Cell(CellKind.NUMERIC, float(to_excel(value, epoch)))
    if data_type == "n":
        return Cell(CellKind.NUMERIC, float(value))
    return Cell(CellKind.STRING, str(value))


def read_sheet(wb: Workbook, name: str) -> SheetData:
    """Materialise the first worksheet; rows with no cells at all are dropped."""
    ws = wb.worksheets[0]
    ws.reset_dimensions()
    rows: List[Row] = []
    for number, raw in enumerate(ws.iter_rows(), start=1):
        cells = tuple(to_cell(c, wb.epoch) for c in raw)
        if not any(c is not None for c in cells):
            continue
        rows.append(Row(number, cells))
    LOGGER.info("Ingested %s (%s): %d rows", name, ws.title, len(rows))
    return SheetData(name=name, rows=rows)


def load_sheet(path: str) -> SheetData:
    with open_workbook(path) as wb:
        if not wb.worksheets:
            raise SourceUnavailable(path, "read", "workbook has no worksheets")
        try:
            return read_sheet(wb, path)
        except (OSError, zipfile.BadZipFile, KeyError, ParseError, ValueError) as exc:
            raise SourceUnavailable(path, "read", str(exc)) from exc
