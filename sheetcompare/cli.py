from __future__ import annotations

import argparse
import logging
from typing import Iterable, Optional, Tuple

import yaml

from .diagnostics import Diagnostics
from .diff_sheets import compare_sheets
from .errors import SheetCompareError, SourceUnavailable
from .export_excel import write_report
from .headers import read_column_mapping, read_header_index
from .ingest import load_sheet
from .match import match_columns
from .models import CompareResult, Config

LOGGER = logging.getLogger(__name__)


def load_config(path: Optional[str]) -> Config:
    if not path:
        return {}
    try:
        with open(path, "r", encoding="utf-8") as file:
            return yaml.safe_load(file) or {}
    except OSError as exc:
        raise SourceUnavailable(path, "read config", str(exc)) from exc
    except yaml.YAMLError as exc:
        raise SourceUnavailable(path, "parse config", str(exc)) from exc


def build_results(config: Config, source: str, target: str, mapping: str) -> Tuple[CompareResult, Diagnostics]:
    sheet1 = load_sheet(source)
    sheet2 = load_sheet(target)
    mapping_sheet = load_sheet(mapping)

    skip_header = bool((config.get("mapping") or {}).get("skip_header", False))
    header1 = read_header_index(sheet1)
    header2 = read_header_index(sheet2)
    column_mapping = read_column_mapping(mapping_sheet, skip_header=skip_header)

    diagnostics = Diagnostics()
    matches = match_columns(header1, header2, column_mapping, diagnostics)
    result = compare_sheets(sheet1, sheet2, header1, header2, matches, diagnostics)
    return result, diagnostics


def run(argv: Iterable[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Compare two spreadsheets through a column-name mapping")
    parser.add_argument("--source", required=True, help="File 1 (.xlsx)")
    parser.add_argument("--target", required=True, help="File 2 (.xlsx)")
    parser.add_argument("--mapping", required=True, help="Two-column sheet: file 1 header, file 2 header")
    parser.add_argument("--out", required=True, help="Mismatch report to write (.xlsx)")
    parser.add_argument("--config", help="Optional YAML settings")
    parser.add_argument("--log-level", default="INFO")
    args = parser.parse_args(list(argv) if argv is not None else None)

    logging.basicConfig(level=getattr(logging, args.log_level.upper(), logging.INFO), format="%(levelname)s %(name)s: %(message)s")

    try:
        config = load_config(args.config)
        result, _ = build_results(config, args.source, args.target, args.mapping)
        if result.identical:
            LOGGER.info("Excel sheets are identical.")
            return 0

        LOGGER.info("Excel sheets have different values.")
        write_report(args.out, result.mismatches, config)
    except SheetCompareError as exc:
        raise SystemExit(str(exc)) from exc

    LOGGER.info("Wrote %s (mismatches=%d, unresolved=%d)", args.out, len(result.mismatches), len(result.unresolved))
    return 1


if __name__ == "__main__":
    raise SystemExit(run())
