# RowSplit/python_scripts/cell_values.py

# MARK: - Version 1.1
# MARK: - History
# - 1.0 -> 1.1: Treat NaN/inf and booleans as blank so checkbox cells never count.
# - 1.0: Number parsing helpers for row cells.

from __future__ import annotations

import math
from typing import Any, Optional

from openpyxl.cell import Cell, MergedCell


def get_actual_cell_value(cell_content: Any) -> Any:
    """Return the underlying value for openpyxl cell objects."""
    if isinstance(cell_content, (Cell, MergedCell)):
        return cell_content.value
    return cell_content


def parse_number(cell_content: Any) -> Optional[float]:
    """Return the finite number held by a cell, or None if it holds none.

    Numeric strings are accepted the way statements print them: ``'``
    thousands separators are dropped and a trailing ``%`` divides by 100.
    Booleans, dates and text are not numbers.
    """
    val = get_actual_cell_value(cell_content)
    if val is None or isinstance(val, bool):
        return None
    if isinstance(val, (int, float)):
        try:
            number = float(val)
        except OverflowError:
            return None
    elif isinstance(val, str):
        value_str = val.strip()
        if not value_str:
            return None
        cleaned_str = value_str.replace("'", "")
        try:
            if cleaned_str.endswith("%"):
                number = float(cleaned_str[:-1]) / 100.0
            else:
                number = float(cleaned_str)
        except ValueError:
            return None
    else:
        return None
    if not math.isfinite(number):
        return None
    return number


def is_blank(cell_content: Any) -> bool:
    return parse_number(cell_content) is None


__all__ = ["get_actual_cell_value", "parse_number", "is_blank"]
