import openpyxl

from RowSplit.python_scripts.cell_store import (
    CellStore,
    EditEvent,
    MemoryCellStore,
    WorksheetCellStore,
    cell_address,
    split_address,
)


def test_address_helpers():
    assert cell_address(7, 2) == "B7"
    assert cell_address(1, 28) == "AB1"
    assert split_address("$B$7") == (7, 2)
    assert split_address("ab1") == (1, 28)


def test_worksheet_store_reads_and_writes():
    wb = openpyxl.Workbook()
    ws = wb.active
    ws["B1"] = 90
    ws["B2"] = 30
    store = WorksheetCellStore(ws)

    assert isinstance(store, CellStore)
    assert store.read("b1") == 90
    assert store.read_row(2, 2, 3) == [30, None, None]

    store.write("C2", 30.0)
    assert ws["C2"].value == 30.0


def test_memory_store_records_writes():
    store = MemoryCellStore({"b1": 90, "$C$2": 5})
    assert isinstance(store, CellStore)
    assert store.read("B1") == 90
    assert store.read_row(2, 2, 3) == [None, 5, None]

    store.write("d2", 1)
    assert store.read("D2") == 1
    assert store.writes == [("D2", 1)]


def test_memory_store_snapshot_leaves_worksheet_alone():
    ws = openpyxl.Workbook().active
    ws["B1"] = 100
    store = MemoryCellStore.from_worksheet(ws)
    store.write("B2", 1)
    assert store.read("B1") == 100
    assert ws["B2"].value is None


def test_edit_event_from_cell():
    wb = openpyxl.Workbook()
    ws = wb.active
    ws.title = "Budget"
    ws["E4"] = True

    event = EditEvent.from_cell(ws["E4"])
    assert event == EditEvent(row=4, column=5, value=True, sheet="Budget")
    assert event.address == "E4"
    assert EditEvent.from_cell(ws["E4"], value=False).value is False


def test_edit_event_from_cell_multi_cell_edit():
    ws = openpyxl.Workbook().active
    ws["E4"] = True

    event = EditEvent.from_cell(ws["E4"], value=None)
    assert event.value is None
