import logging

import openpyxl
import pytest

from RowSplit.python_scripts.cell_store import MemoryCellStore
from RowSplit.python_scripts.row_config import DistributorConfig


@pytest.fixture
def config():
    # target in B1, span B..D, checkbox in E
    return DistributorConfig()


@pytest.fixture
def make_store():
    def _make(target, row, row_index=2, checkbox=True):
        values = {"B1": target, f"E{row_index}": checkbox}
        for letter, value in zip("BCD", row):
            if value is not None:
                values[f"{letter}{row_index}"] = value
        return MemoryCellStore(values)
    return _make


@pytest.fixture
def workbook_path(tmp_path):
    wb = openpyxl.Workbook()
    ws = wb.active
    ws.title = "Budget"
    ws["A1"] = "Target"
    ws["B1"] = 90
    ws["A2"] = "Alpha"
    ws["B2"] = 30
    ws["E2"] = False
    ws["A3"] = "Full"
    ws["B3"] = 10
    ws["C3"] = 20
    ws["D3"] = 30
    ws["E3"] = False
    path = tmp_path / "budget.xlsx"
    wb.save(path)
    return path


@pytest.fixture(autouse=True)
def rowsplit_logger():
    logger = logging.getLogger("rowsplit")
    old_level = logger.level
    old_handlers = list(logger.handlers)
    yield logger
    for handler in logger.handlers[:]:
        if handler not in old_handlers:
            logger.removeHandler(handler)
            handler.close()
    logger.setLevel(old_level)
