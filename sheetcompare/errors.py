from __future__ import annotations

from typing import Optional


class SheetCompareError(Exception):
    """Base class for failures that end a comparison run."""


class MalformedHeaderCell(SheetCompareError):
    def __init__(self, sheet: str, row_number: int, column_index: int, kind: Optional[str]) -> None:
        self.sheet = sheet
        self.row_number = row_number
        self.column_index = column_index
        self.kind = kind
        found = kind or "no cell"
        super().__init__(
            f"{sheet}: row {row_number}, column {column_index + 1} should hold text but has {found}"
        )


class SourceUnavailable(SheetCompareError):
    def __init__(self, path: str, operation: str, reason: str) -> None:
        self.path = path
        self.operation = operation
        super().__init__(f"cannot {operation} {path}: {reason}")


class SinkUnavailable(SheetCompareError):
    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        super().__init__(f"cannot write report {path}: {reason}")
