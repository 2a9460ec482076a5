from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterator, List, Optional, Tuple, Union


class CellKind(str, Enum):
    STRING = "STRING"
    NUMERIC = "NUMERIC"
    BOOLEAN = "BOOLEAN"
    BLANK = "BLANK"
    FORMULA = "FORMULA"
    ERROR = "ERROR"


@dataclass(frozen=True)
class Cell:
    kind: CellKind
    value: Any = None


@dataclass(frozen=True)
class Row:
    number: int
    cells: Tuple[Optional[Cell], ...] = ()

    def cell(self, index: int) -> Optional[Cell]:
        if 0 <= index < len(self.cells):
            return self.cells[index]
        return None


@dataclass
class SheetData:
    name: str
    rows: List[Row] = field(default_factory=list)

    @property
    def header(self) -> Optional[Row]:
        return self.rows[0] if self.rows else None

    def data_rows(self) -> Iterator[Row]:
        return iter(self.rows[1:])


class HeaderIndex:
    """Header name -> column position for one sheet, plus the reverse lookup.

    Names are trimmed and case-sensitive. A repeated name replaces the earlier
    entry, so only the last column carrying it is reachable by name.
    """

    def __init__(self, entries: Optional[List[Tuple[str, int]]] = None) -> None:
        self._by_name: Dict[str, int] = {}
        self._by_index: Dict[int, str] = {}
        for name, index in entries or []:
            self._by_name[name] = index
            self._by_index[index] = name

    def __contains__(self, name: object) -> bool:
        return name in self._by_name

    def __getitem__(self, name: str) -> int:
        return self._by_name[name]

    def __len__(self) -> int:
        return len(self._by_name)

    def __repr__(self) -> str:
        return f"HeaderIndex({self._by_name!r})"

    def as_dict(self) -> Dict[str, int]:
        return dict(self._by_name)

    def name_at(self, index: int) -> Optional[str]:
        return self._by_index.get(index)


ColumnMapping = Dict[str, str]


@dataclass(frozen=True)
class ResolvedMatch:
    tag_id: int
    source_name: str
    target_name: str
    source_index: int
    target_index: int


@dataclass(frozen=True)
class UnresolvedMatch:
    tag_id: int
    source_name: str
    target_name: str
    missing_source: bool
    missing_target: bool


ColumnMatch = Union[ResolvedMatch, UnresolvedMatch]


@dataclass(frozen=True)
class MismatchRecord:
    tag_id: int
    field_name: str
    value1: str
    value2: str
    target_field: str = ""
    row_number: int = 0


@dataclass
class CompareResult:
    identical: bool
    mismatches: List[MismatchRecord]
    unresolved: List[UnresolvedMatch] = field(default_factory=list)


Config = Dict[str, Any]
