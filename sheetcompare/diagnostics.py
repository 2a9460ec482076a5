from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Union

from .models import MismatchRecord, UnresolvedMatch

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class UnresolvedMapping:
    match: UnresolvedMatch

    def describe(self) -> str:
        missing = []
        if self.match.missing_source:
            missing.append(f"'{self.match.source_name}' in file 1")
        if self.match.missing_target:
            missing.append(f"'{self.match.target_name}' in file 2")
        return f"Column mapping {self.match.tag_id} not found: {' and '.join(missing)}"


@dataclass(frozen=True)
class CellMismatch:
    record: MismatchRecord

    def describe(self) -> str:
        rec = self.record
        return (
            f"Row {rec.row_number}, {rec.field_name} vs {rec.target_field}: "
            f"'{rec.value1}' != '{rec.value2}'"
        )


DiagnosticEvent = Union[UnresolvedMapping, CellMismatch]


class Diagnostics:
    """Collects matcher/differ events in emission order and logs each one."""

    def __init__(self) -> None:
        self.events: List[DiagnosticEvent] = []

    def emit(self, event: DiagnosticEvent) -> None:
        self.events.append(event)
        if isinstance(event, UnresolvedMapping):
            LOGGER.warning(event.describe())
        else:
            LOGGER.info(event.describe())

    def unresolved(self) -> List[UnresolvedMapping]:
        return [e for e in self.events if isinstance(e, UnresolvedMapping)]

    def mismatches(self) -> List[CellMismatch]:
        return [e for e in self.events if isinstance(e, CellMismatch)]
