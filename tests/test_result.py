import pytest

from gwsheets import LookupFailed
from gwsheets.sheets.result import Result, WorksheetLookupError, SpreadsheetLookupError, CellLookupError

def test_ok_and_fail():
    r = Result.ok("worksheet")
    assert(r)
    assert(r.value == "worksheet")
    assert(r.error is None)
    assert(r.unwrap() == "worksheet")

    r = Result.fail(WorksheetLookupError.NO_WORKSHEET)
    assert(not r)
    assert(r.value is None)
    assert(r.error == WorksheetLookupError.NO_WORKSHEET)
    assert(str(r) == "error:no-worksheet")

def test_exactly_one_side():
    with pytest.raises(ValueError):
        Result()
    with pytest.raises(ValueError):
        Result(value="x", error=WorksheetLookupError.NO_ENTRY)

def test_unwrap_error_carries_reason():
    with pytest.raises(LookupFailed) as e:
        Result.fail(SpreadsheetLookupError.MORE_THAN_ONE_SPREADSHEET).unwrap()
    assert(e.value.reason == SpreadsheetLookupError.MORE_THAN_ONE_SPREADSHEET)

def test_reason_tags():
    assert(WorksheetLookupError.NO_ENTRY.value == "no-entry")
    assert(WorksheetLookupError.MORE_THAN_ONE_WORKSHEET.value == "more-than-one-worksheet")
    assert(SpreadsheetLookupError.NO_SPREADSHEET.value == "no-spreadsheet")
    assert(CellLookupError.NO_CELLS.value == "no-cells")
    assert(CellLookupError.MORE_THAN_ONE_CELL.value == "more-than-one-cell")
