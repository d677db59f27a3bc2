import pytest

from gwsheets.sheets.result import SpreadsheetLookupError
from gwsheets.sheets.spreadsheet import find_spreadsheet_by_id, find_spreadsheet_by_title, file_name_to_ids

from conftest import SPREADSHEET_ID, sheet_props, spreadsheet_response, http_error

def _drive_files(session, *files):
    session.drive.files.return_value.list.return_value.execute.return_value = {'files': list(files)}

def test_find_by_id(session, spreadsheets):
    spreadsheets.get.return_value.execute.return_value = spreadsheet_response(sheet_props(0, "Sheet1"))
    r = find_spreadsheet_by_id(session, SPREADSHEET_ID)
    assert(r)
    assert(r.value.spreadsheetId == SPREADSHEET_ID)

def test_find_by_id_missing(session, spreadsheets):
    spreadsheets.get.return_value.execute.side_effect = http_error(404)
    assert(find_spreadsheet_by_id(session, "nope").error == SpreadsheetLookupError.NO_ENTRY)

def test_find_by_id_empty(session, spreadsheets):
    spreadsheets.get.return_value.execute.return_value = {}
    assert(find_spreadsheet_by_id(session, "nope").error == SpreadsheetLookupError.NO_ENTRY)

def test_find_by_title(session, spreadsheets):
    _drive_files(session, {'id': SPREADSHEET_ID, 'name': 'Grades'})
    spreadsheets.get.return_value.execute.return_value = spreadsheet_response(sheet_props(0, "Sheet1"))
    r = find_spreadsheet_by_title(session, "Grades")
    assert(r)
    assert(r.value.spreadsheetId == SPREADSHEET_ID)
    q = session.drive.files.return_value.list.call_args.kwargs['q']
    assert("name = 'Grades'" in q)
    assert("trashed = false" in q)

def test_find_by_title_escapes_quotes(session):
    _drive_files(session)
    find_spreadsheet_by_title(session, "Bob's \\ sheet")
    q = session.drive.files.return_value.list.call_args.kwargs['q']
    assert("name = 'Bob\\'s \\\\ sheet'" in q)

def test_find_by_title_none(session):
    _drive_files(session)
    assert(find_spreadsheet_by_title(session, "Grades").error == SpreadsheetLookupError.NO_SPREADSHEET)

def test_find_by_title_ambiguous(session, spreadsheets):
    _drive_files(session, {'id': 'a', 'name': 'Grades'}, {'id': 'b', 'name': 'Grades'})
    r = find_spreadsheet_by_title(session, "Grades")
    assert(r.error == SpreadsheetLookupError.MORE_THAN_ONE_SPREADSHEET)
    spreadsheets.get.assert_not_called()

def test_find_by_title_follows_pages(session, spreadsheets):
    execute = session.drive.files.return_value.list.return_value.execute
    execute.side_effect = [{'files': [{'id': 'a', 'name': 'Grades'}], 'nextPageToken': 't'},
                           {'files': [{'id': 'b', 'name': 'Grades'}]}]
    r = find_spreadsheet_by_title(session, "Grades")
    assert(r.error == SpreadsheetLookupError.MORE_THAN_ONE_SPREADSHEET)
    assert(execute.call_count == 2)

def test_file_name_to_ids(session, spreadsheets):
    _drive_files(session, {'id': SPREADSHEET_ID, 'name': 'Grades'})
    spreadsheets.get.return_value.execute.return_value = spreadsheet_response(
        sheet_props(0, "Sheet1"), sheet_props(123, "Totals"))
    r = file_name_to_ids(session, "Grades")
    assert(r.value == {'spreadsheet': {SPREADSHEET_ID: 'Grades'},
                       'worksheets': {0: 'Sheet1', 123: 'Totals'}})

def test_file_name_to_ids_passes_error(session):
    _drive_files(session)
    assert(file_name_to_ids(session, "Grades").error == SpreadsheetLookupError.NO_SPREADSHEET)
