from __future__ import annotations

import logging
from typing import List, Optional

from .diagnostics import Diagnostics, UnresolvedMapping
from .models import ColumnMapping, ColumnMatch, HeaderIndex, ResolvedMatch, UnresolvedMatch

LOGGER = logging.getLogger(__name__)


def match_columns(
    header1: HeaderIndex,
    header2: HeaderIndex,
    mapping: ColumnMapping,
    diagnostics: Optional[Diagnostics] = None,
) -> List[ColumnMatch]:
    """Resolve each mapping entry against both headers, one match per entry.

    Entries keep the mapping's order; the 1-based position is the tag id.
    """
    diagnostics = diagnostics or Diagnostics()
    results: List[ColumnMatch] = []
    for tag_id, (source, target) in enumerate(mapping.items(), start=1):
        if source in header1 and target in header2:
            results.append(ResolvedMatch(tag_id, source, target, header1[source], header2[target]))
            continue
        unresolved = UnresolvedMatch(tag_id, source, target, source not in header1, target not in header2)
        results.append(unresolved)
        diagnostics.emit(UnresolvedMapping(unresolved))

    resolved = sum(1 for m in results if isinstance(m, ResolvedMatch))
    LOGGER.info("Matched %d of %d mapped columns", resolved, len(results))
    return results
