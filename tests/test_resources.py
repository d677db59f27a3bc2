import pytest

from gwsheets.sheets.resources import Spreadsheet, SheetProperties, Worksheet, Cell, ValueRange

from conftest import sheet_props, spreadsheet_response

def test_spreadsheet_from_response():
    ss = Spreadsheet.from_base(spreadsheet_response(sheet_props(0, "Sheet1"), sheet_props(7, "Data", 10, 4, 1)))
    assert(ss)
    assert(ss.title == "Grades")
    assert(len(ss.sheets) == 2)
    assert(ss.sheets[1].properties.sheetId == 7)
    assert(ss.sheets[1].properties.gridProperties.columnCount == 4)

def test_unknown_fields_ignored():
    raw = sheet_props(3, "Data")
    raw['properties']['someNewField'] = True
    raw['properties']['gridProperties']['anotherNewField'] = 1
    ss = Spreadsheet.from_base({'spreadsheetId': 'x', 'sheets': [raw], 'newTopLevel': []})
    assert(ss.sheets[0].properties.title == "Data")

def test_empty_spreadsheet_is_falsy():
    assert(not Spreadsheet())
    assert(not Spreadsheet.from_base(None))

def test_worksheet_in_memory_edits():
    ws = Worksheet("abc", sheet_props(5, "Data", 10, 4)['properties'])
    assert(ws)
    assert(ws.dimensions == (10, 4))
    assert(len(ws) == 40)
    ws.rows = 20
    ws.cols = 2
    ws.title = "Renamed"
    assert(ws.properties.gridProperties.rowCount == 20)
    assert(ws.properties.gridProperties.columnCount == 2)
    assert(ws.title == "Renamed")
    assert(ws.sheet_id == 5)
    assert(ws.spreadsheet_id == "abc")

def test_worksheet_invalid_without_properties():
    assert(not Worksheet("abc", {}))
    assert(not Worksheet("", SheetProperties(sheetId=0, title="Sheet1")))

def test_cell_batch_id():
    assert(Cell(3, 12, "x").batch_id == "R3C12")
    assert(Cell.of((1, 2, "v")) == Cell(1, 2, "v"))
    with pytest.raises(ValueError):
        Cell(0, 1, "")

def test_trim_keeps_zero_and_false():
    props = SheetProperties(sheetId=0, title="", index=0)
    t = props.trim()
    assert(t['sheetId'] == 0)
    assert(t['hidden'] is False)
    assert('title' not in t)
    assert('tabColor' not in t)

def test_value_range_dimension():
    assert(ValueRange("A1", "cols").majorDimension == "COLUMNS")
    with pytest.raises(ValueError):
        ValueRange("A1", "sideways")
