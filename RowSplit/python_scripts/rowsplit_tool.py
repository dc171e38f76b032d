#!/usr/bin/env python3
"""Command line host for the row distribution trigger.

Records a checkbox edit in an .xlsx workbook, fires the trigger the way the
spreadsheet would, and saves the workbook again.
"""
# RowSplit/python_scripts/rowsplit_tool.py
# MARK: - Version 1.1
# MARK: - History
# - 1.0 -> 1.1: Added --dry-run and --precision.
# - 1.0: Initial creation. Apply one checkbox edit to a workbook file.

import argparse
import logging
import os
from pathlib import Path
from typing import Any, Optional

import openpyxl

from RowSplit.python_scripts.cell_store import EditEvent, MemoryCellStore, WorksheetCellStore
from RowSplit.python_scripts.errors import ConfigError
from RowSplit.python_scripts.row_config import DEFAULT_CONFIG, DistributorConfig, column_index
from RowSplit.python_scripts.row_distributor import RowDistributor, log_failure

# Default log file can be set with the ROWSPLIT_LOG_FILE environment variable
LOG_FILE = os.environ.get("ROWSPLIT_LOG_FILE")

TRUE_WORDS = {"true", "yes", "on", "1"}
FALSE_WORDS = {"false", "no", "off", "0"}


def setup_logger(log_file: Optional[str] = None, debug: bool = False) -> logging.Logger:
    logger = logging.getLogger("rowsplit")
    handler = None
    if log_file:
        log_path = os.path.abspath(log_file)
        if not any(
            isinstance(h, logging.FileHandler) and h.baseFilename == log_path for h in logger.handlers
        ):
            handler = logging.FileHandler(log_path, encoding="utf-8")
    elif not logger.handlers:
        handler = logging.StreamHandler()
    if handler is not None:
        formatter = logging.Formatter(
            "%(asctime)s %(levelname)s %(message)s", "%Y-%m-%dT%H:%M:%S"
        )
        handler.setFormatter(formatter)
        logger.addHandler(handler)
    logger.setLevel(logging.DEBUG if debug else logging.INFO)
    return logger


def parse_edit_value(text: str) -> Any:
    """Return a bool for words that spell one, else the text unchanged."""
    lowered = text.strip().lower()
    if lowered in TRUE_WORDS:
        return True
    if lowered in FALSE_WORDS:
        return False
    return text


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Tick a row's checkbox in a workbook and split the remaining value over its blank cells"
    )
    parser.add_argument('workbook', help='Path to the .xlsx workbook')
    parser.add_argument('--row', type=int, required=True, help='Row of the edited checkbox')
    parser.add_argument('--value', default='true', help='New value of the edited cell (default: true)')
    parser.add_argument('--column', help='Edited column, defaults to the checkbox column')
    parser.add_argument('--sheet', help='Worksheet name, defaults to the active sheet')
    parser.add_argument('--checkbox-column', default=DEFAULT_CONFIG.checkbox_column,
                        help='Column holding the trigger checkbox')
    parser.add_argument('--reference-cell', default=DEFAULT_CONFIG.reference_cell,
                        help='Cell holding the target value')
    parser.add_argument('--start-column', default=DEFAULT_CONFIG.start_column,
                        help='First column of the distributed span')
    parser.add_argument('--columns', type=int, default=DEFAULT_CONFIG.column_count,
                        help='Number of columns in the span')
    parser.add_argument('--precision', type=float, help='Round each share to this increment')
    parser.add_argument('--output', help='Save to this path instead of overwriting the workbook')
    parser.add_argument('--dry-run', action='store_true', help='Compute without saving anything')
    parser.add_argument('--log-file', default=LOG_FILE, help='Write the log to this file')
    parser.add_argument('--debug', action='store_true', help='Log ignored events too')
    return parser


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logger = setup_logger(args.log_file, args.debug)

    workbook_path = Path(args.workbook)
    if not workbook_path.exists():
        raise FileNotFoundError(f"Workbook not found: {args.workbook}")

    try:
        config = DistributorConfig(
            checkbox_column=args.checkbox_column,
            reference_cell=args.reference_cell,
            start_column=args.start_column,
            column_count=args.columns,
            precision=args.precision,
        )
        column = column_index(args.column) if args.column else config.checkbox_column
    except ConfigError as exc:
        parser.error(str(exc))
    if args.row < 1:
        parser.error(f"--row must be >= 1, got {args.row}")

    wb = openpyxl.load_workbook(workbook_path)
    if args.sheet:
        if args.sheet not in wb.sheetnames:
            parser.error(f"No worksheet named {args.sheet!r} in {workbook_path.name}")
        ws = wb[args.sheet]
    else:
        ws = wb.active

    if args.dry_run:
        store = MemoryCellStore.from_worksheet(ws)
    else:
        store = WorksheetCellStore(ws)

    value = parse_edit_value(args.value)
    event = EditEvent(row=args.row, column=column, value=value, sheet=ws.title)
    store.write(event.address, value)
    logger.debug(f"Edit {ws.title}!{event.address} = {value!r}")

    result = RowDistributor(store, config).handle(event)
    log_failure(event, result)

    if not result.is_ok:
        print(f"❌ {event.address}: {result.error}")
    elif result.value is None:
        print(f"ℹ️  {event.address}: nothing to distribute")
    else:
        outcome = result.value
        cells = ", ".join(f"{address}={share:g}" for address, share in outcome.written)
        print(f"✅ Row {outcome.row}: target {outcome.target:g}, existing {outcome.total:g}, wrote {cells}")

    if args.dry_run:
        print("Dry run; workbook not saved.")
    else:
        dest = Path(args.output) if args.output else workbook_path
        wb.save(dest)
        print(f"💾 Saved {dest}")

    return 0 if result.is_ok else 1


if __name__ == '__main__':
    raise SystemExit(main())
