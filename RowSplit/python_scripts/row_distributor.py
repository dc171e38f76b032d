"""Split the remainder of a target value over the blank cells of a row.

Ticking the checkbox on a row reads the target from the reference cell,
subtracts what the row already holds and writes an equal share of the rest
into every blank cell of the span, then clears the checkbox again.
"""

# RowSplit/python_scripts/row_distributor.py
# MARK: - Version 1.3
# MARK: - History
# - 1.2 -> 1.3: Refuse rows holding the reference cell; round shares to the precision.
# - 1.1 -> 1.2: Report failures as Err results; trigger entry point logs them.
# - 1.0 -> 1.1: Guard rows without blank cells instead of writing inf.
# - 1.0: Initial distribution trigger.

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Generic, List, Optional, Sequence, Tuple, TypeVar, Union

from RowSplit.python_scripts.cell_store import CellStore, EditEvent, cell_address, split_address
from RowSplit.python_scripts.cell_values import is_blank, parse_number
from RowSplit.python_scripts.errors import DivisionByZeroError, RowSplitError, ValidationError
from RowSplit.python_scripts.row_config import DEFAULT_CONFIG, DistributorConfig

logger = logging.getLogger("rowsplit")

T = TypeVar("T")


@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T = None

    @property
    def is_ok(self) -> bool:
        return True

    def unwrap(self) -> T:
        return self.value


@dataclass(frozen=True)
class Err:
    error: RowSplitError

    @property
    def is_ok(self) -> bool:
        return False

    def unwrap(self):
        raise self.error


Result = Union[Ok, Err]


@dataclass(frozen=True)
class Distribution:
    """What one successful trigger wrote."""

    row: int
    target: float
    total: float
    blanks: int
    share: float
    written: Tuple[Tuple[str, float], ...]


def validate(edited_value: Any) -> Result:
    """Only booleans are valid checkbox values."""
    if not isinstance(edited_value, bool):
        return Err(ValidationError("edited cell must contain a boolean value"))
    return Ok(edited_value)


def compute_total(row: Sequence[Any]) -> float:
    """Sum the cells that hold a finite number; anything else counts as 0."""
    total = 0.0
    for cell in row:
        number = parse_number(cell)
        if number is not None:
            total += number
    return total


def count_blanks(row: Sequence[Any]) -> int:
    return sum(1 for cell in row if is_blank(cell))


def distribute(target_value: float, row: Sequence[Any]) -> float:
    """Return the share each blank cell gets so the row sums to ``target_value``.

    Raises ``DivisionByZeroError`` when the row has no blank cell and
    ``ValidationError`` when the share overflows a float.
    """
    blanks = count_blanks(row)
    if blanks == 0:
        raise DivisionByZeroError("row has no blank cells to distribute into")
    share = (target_value - compute_total(row)) / blanks
    if not math.isfinite(share):
        raise ValidationError("row values are too large to distribute")
    return share


def _decimal_places(precision: float) -> int:
    return max(0, -Decimal(str(precision)).as_tuple().exponent)


def apply_distribution(row: Sequence[Any], value: float, precision: Optional[float] = None) -> List[Any]:
    """Return a copy of ``row`` with ``value`` in every blank position.

    With ``precision`` each share is rounded to that increment and the
    rounding residue goes to the last blank cell.
    """
    updated = list(row)
    blank_indices = [i for i, cell in enumerate(updated) if is_blank(cell)]
    if not blank_indices:
        return updated

    share = value
    if precision is not None:
        places = _decimal_places(precision)
        share = round(round(value / precision) * precision, places)
    for idx in blank_indices:
        updated[idx] = share

    if precision is not None:
        diff = value * len(blank_indices) - share * len(blank_indices)
        last = blank_indices[-1]
        updated[last] = round(updated[last] + diff, places)
    return updated


class RowDistributor:
    """Edit handler bound to one cell store and configuration."""

    def __init__(self, store: CellStore, config: DistributorConfig = DEFAULT_CONFIG):
        self.store = store
        self.config = config

    def is_trigger(self, event: EditEvent) -> bool:
        if event.column != self.config.checkbox_column:
            return False
        sheet_name = self.config.sheet_name
        return sheet_name is None or event.sheet is None or event.sheet == sheet_name

    def handle(self, event: EditEvent) -> Result:
        """Run one trigger. Ok(None) means the event needed no work."""
        if not self.is_trigger(event):
            logger.debug(f"Ignoring edit at {event.address}")
            return Ok(None)

        checked = validate(event.value)
        if not checked.is_ok:
            return checked
        if checked.value is False:
            logger.debug(f"Checkbox {event.address} cleared; nothing to do")
            return Ok(None)

        config = self.config
        reference_row, reference_column = split_address(config.reference_cell)
        if event.row == reference_row and reference_column in config.span_columns:
            return Err(ValidationError("edited row holds the reference cell"))

        target = parse_number(self.store.read(config.reference_cell))
        if target is None:
            return Err(ValidationError("reference cell must contain a number"))

        row = self.store.read_row(event.row, config.start_column, config.column_count)
        try:
            share = distribute(target, row)
        except RowSplitError as exc:
            return Err(exc)

        updated = apply_distribution(row, share, config.precision)
        written = []
        for column, old, new in zip(config.span_columns, row, updated):
            if is_blank(old):
                address = cell_address(event.row, column)
                self.store.write(address, new)
                written.append((address, new))
        self.store.write(event.address, False)

        result = Distribution(
            row=event.row,
            target=target,
            total=compute_total(row),
            blanks=len(written),
            share=share,
            written=tuple(written),
        )
        logger.info(
            f"Row {event.row}: distributed {target - result.total} over {result.blanks} blank cells ({share} each)"
        )
        return Ok(result)


def log_failure(event: EditEvent, result: Result) -> None:
    """Log an Err result for ``event``; Ok results are ignored."""
    if result.is_ok:
        return
    error = result.error
    if isinstance(error, DivisionByZeroError):
        logger.warning(f"Row {event.row}: {error}; no cells changed")
    else:
        logger.error(f"Edit at {event.address} rejected: {error}")


def on_edit(event: EditEvent, store: CellStore, config: DistributorConfig = DEFAULT_CONFIG) -> None:
    """Trigger entry point. Failures are logged, never raised to the host."""
    result = RowDistributor(store, config).handle(event)
    log_failure(event, result)


__all__ = [
    "Ok",
    "Err",
    "Result",
    "Distribution",
    "validate",
    "compute_total",
    "count_blanks",
    "distribute",
    "apply_distribution",
    "RowDistributor",
    "log_failure",
    "on_edit",
]
