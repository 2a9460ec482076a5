from __future__ import annotations

from pathlib import Path
from typing import Iterable, List, Optional

from openpyxl import Workbook
from openpyxl.styles import Font, PatternFill
from openpyxl.utils import get_column_letter
from openpyxl.worksheet.worksheet import Worksheet

from .errors import SinkUnavailable
from .models import Config, MismatchRecord

REPORT_HEADERS = ["Tag ID", "Field Name", "Value in File 1", "Value in File 2"]
HIGHLIGHT_COLUMNS = (2, 3, 4)

DEFAULT_SHEET_TITLE = "Mismatches"
DEFAULT_HIGHLIGHT = "FF0000"
DEFAULT_MAX_WIDTH = 60


def mismatch_fill(color: str) -> PatternFill:
    return PatternFill(start_color=color, end_color=color, fill_type="solid")


def _autosize(ws: Worksheet, max_width: int = DEFAULT_MAX_WIDTH) -> None:
    for i, col in enumerate(ws.columns, start=1):
        max_len = max((len(str(c.value)) for c in col if c.value is not None), default=0)
        ws.column_dimensions[get_column_letter(i)].width = min(max_len + 2, max_width)


def _format(ws: Worksheet, max_width: int) -> None:
    ws.freeze_panes = "A2"
    for cell in ws[1]:
        cell.font = Font(bold=True)
    _autosize(ws, max_width)


def build_report(mismatches: Iterable[MismatchRecord], config: Optional[Config] = None) -> Workbook:
    report_cfg = (config or {}).get("report") or {}
    fill = mismatch_fill(str(report_cfg.get("highlight_color", DEFAULT_HIGHLIGHT)))

    wb = Workbook()
    ws = wb.active
    ws.title = str(report_cfg.get("sheet_title", DEFAULT_SHEET_TITLE))
    ws.append(REPORT_HEADERS)
    for record in mismatches:
        ws.append([record.tag_id, record.field_name, record.value1, record.value2])
        for col in HIGHLIGHT_COLUMNS:
            ws.cell(row=ws.max_row, column=col).fill = fill

    _format(ws, int(report_cfg.get("max_column_width", DEFAULT_MAX_WIDTH)))
    return wb


def write_report(path: str, mismatches: List[MismatchRecord], config: Optional[Config] = None) -> None:
    wb = build_report(mismatches, config)
    try:
        Path(path).parent.mkdir(parents=True, exist_ok=True)
        wb.save(path)
    except OSError as exc:
        raise SinkUnavailable(path, str(exc)) from exc
