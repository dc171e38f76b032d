"""Cell storage seen by the trigger, and the edit event it receives."""

# RowSplit/python_scripts/cell_store.py
# MARK: - Version 1.2
# MARK: - History
# - 1.1 -> 1.2: from_cell keeps an explicit None value.
# - 1.0 -> 1.1: Added MemoryCellStore for dry runs and tests.
# - 1.0: CellStore protocol with an openpyxl worksheet binding.

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional, Protocol, Tuple, runtime_checkable

from openpyxl.utils.cell import column_index_from_string, coordinate_from_string, get_column_letter
from openpyxl.worksheet.worksheet import Worksheet

from RowSplit.python_scripts.cell_values import get_actual_cell_value


_UNSET = object()


def cell_address(row: int, column: int) -> str:
    """Return the A1 address for 1-based row and column indices."""
    return f"{get_column_letter(column)}{row}"


def split_address(address: str) -> Tuple[int, int]:
    """Return ``(row, column)`` for an A1 address such as ``"$B$7"``."""
    letters, row = coordinate_from_string(address.replace("$", "").upper())
    return row, column_index_from_string(letters)


def normalize_address(address: str) -> str:
    return cell_address(*split_address(address))


@runtime_checkable
class CellStore(Protocol):
    """Narrow read/write access to the host spreadsheet."""

    def read(self, address: str) -> Any:
        ...

    def read_row(self, row: int, start_column: int, count: int) -> List[Any]:
        ...

    def write(self, address: str, value: Any) -> None:
        ...


@dataclass(frozen=True)
class EditEvent:
    """A single-cell edit delivered by the host.

    ``value`` is the new content of the cell; hosts report None when the edit
    covered more than one cell.
    """

    row: int
    column: int
    value: Any
    sheet: Optional[str] = None

    @property
    def address(self) -> str:
        return cell_address(self.row, self.column)

    @classmethod
    def from_cell(cls, cell, value: Any = _UNSET) -> "EditEvent":
        """Build an event for an openpyxl cell, defaulting to its current value.

        Pass ``value=None`` for an edit that covered more than one cell.
        """
        if value is _UNSET:
            value = cell.value
        parent = getattr(cell, "parent", None)
        return cls(row=cell.row, column=cell.column, value=value, sheet=getattr(parent, "title", None))


class WorksheetCellStore:
    """CellStore backed by an openpyxl worksheet."""

    def __init__(self, worksheet: Worksheet):
        self.worksheet = worksheet

    @property
    def title(self) -> str:
        return self.worksheet.title

    def read(self, address: str) -> Any:
        return get_actual_cell_value(self.worksheet[normalize_address(address)])

    def read_row(self, row: int, start_column: int, count: int) -> List[Any]:
        return [
            get_actual_cell_value(self.worksheet.cell(row=row, column=column))
            for column in range(start_column, start_column + count)
        ]

    def write(self, address: str, value: Any) -> None:
        self.worksheet[normalize_address(address)].value = value


class MemoryCellStore:
    """Dict-backed CellStore; unset cells read as None."""

    def __init__(self, values: Optional[Mapping[str, Any]] = None):
        self.values: Dict[str, Any] = {}
        self.writes: List[Tuple[str, Any]] = []
        for address, value in (values or {}).items():
            self.values[normalize_address(address)] = value

    @classmethod
    def from_worksheet(cls, worksheet: Worksheet) -> "MemoryCellStore":
        """Snapshot every non-empty cell of a worksheet."""
        values = {
            cell.coordinate: cell.value
            for row in worksheet.iter_rows()
            for cell in row
            if cell.value is not None
        }
        return cls(values)

    def read(self, address: str) -> Any:
        return self.values.get(normalize_address(address))

    def read_row(self, row: int, start_column: int, count: int) -> List[Any]:
        return [self.values.get(cell_address(row, column)) for column in range(start_column, start_column + count)]

    def write(self, address: str, value: Any) -> None:
        key = normalize_address(address)
        self.values[key] = value
        self.writes.append((key, value))


__all__ = [
    "cell_address",
    "split_address",
    "normalize_address",
    "CellStore",
    "EditEvent",
    "WorksheetCellStore",
    "MemoryCellStore",
]
