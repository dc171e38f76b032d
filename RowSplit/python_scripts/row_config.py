"""Configuration for the row distribution trigger."""

# RowSplit/python_scripts/row_config.py
# MARK: - Version 1.0
# MARK: - History
# - 1.0: Replaced hard-coded column constants with an explicit config object.

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple, Union

from openpyxl.utils.cell import column_index_from_string, coordinate_from_string
from openpyxl.utils.exceptions import CellCoordinatesException

from RowSplit.python_scripts.errors import ConfigError

Column = Union[int, str]


def column_index(column: Column) -> int:
    """Return the 1-based index for a column given as ``5`` or ``"E"``."""
    if isinstance(column, bool):
        raise ConfigError(f"Invalid column: {column!r}")
    if isinstance(column, int):
        if column < 1:
            raise ConfigError(f"Column index must be >= 1, got {column}")
        return column
    text = str(column).strip()
    if text.isdigit():
        return column_index(int(text))
    try:
        return column_index_from_string(text.upper())
    except ValueError as exc:
        raise ConfigError(f"Invalid column: {column!r}") from exc


@dataclass(frozen=True)
class DistributorConfig:
    """Where the checkbox, the reference value and the row span live.

    ``start_column`` and ``column_count`` describe the span of cells on the
    edited row that receive the distributed value. ``precision`` rounds each
    written share when set.
    """

    checkbox_column: int = 5
    reference_cell: str = "B1"
    start_column: int = 2
    column_count: int = 3
    sheet_name: Optional[str] = None
    precision: Optional[float] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "checkbox_column", column_index(self.checkbox_column))
        object.__setattr__(self, "start_column", column_index(self.start_column))
        if isinstance(self.column_count, bool) or not isinstance(self.column_count, int) or self.column_count < 1:
            raise ConfigError(f"column_count must be a positive integer, got {self.column_count!r}")
        try:
            letters, row = coordinate_from_string(str(self.reference_cell).replace("$", "").upper())
        except (CellCoordinatesException, ValueError) as exc:
            raise ConfigError(f"Invalid reference cell: {self.reference_cell!r}") from exc
        object.__setattr__(self, "reference_cell", f"{letters}{row}")
        if self.precision is not None and not self.precision > 0:
            raise ConfigError(f"precision must be positive, got {self.precision!r}")
        if self.checkbox_column in self.span_columns:
            raise ConfigError(
                f"Checkbox column {self.checkbox_column} overlaps the distribution span {self.span_columns}"
            )

    @property
    def span_columns(self) -> Tuple[int, ...]:
        return tuple(range(self.start_column, self.start_column + self.column_count))


DEFAULT_CONFIG = DistributorConfig()

__all__ = ["Column", "column_index", "DistributorConfig", "DEFAULT_CONFIG"]
