"""
Locating spreadsheets.  By ID goes straight to the Sheets service, by title
has to search Drive as Sheets has no listing of its own.
"""
from googleapiclient.errors import HttpError

from ..access import GoogleSheetsSession
from .result import Result, SpreadsheetLookupError
from . import ops

__all__ = ['find_spreadsheet_by_id', 'find_spreadsheet_by_title', 'file_name_to_ids']

def find_spreadsheet_by_id(session: GoogleSheetsSession, spreadsheet_id: str) -> Result:
    """
    Fetch the spreadsheet with its sheet properties.
    Result holds the Spreadsheet or SpreadsheetLookupError.NO_ENTRY.
    """
    try:
        ss = ops.get(session, spreadsheet_id)
    except HttpError as e:
        if e.resp.status == 404:
            return Result.fail(SpreadsheetLookupError.NO_ENTRY)
        raise
    if not ss:
        return Result.fail(SpreadsheetLookupError.NO_ENTRY)
    return Result.ok(ss)

def find_spreadsheet_by_title(session: GoogleSheetsSession, title: str) -> Result:
    """
    Find the spreadsheet named exactly title.  Drive allows duplicate names
    so more than one match is reported as MORE_THAN_ONE_SPREADSHEET rather
    than picking one.
    """
    files = ops.listSpreadsheetFiles(session, title)
    # drive name matching is exact already, this guards against a loose backend
    files = [f for f in files if f.get('name', None) == title]
    if len(files) == 1:
        return find_spreadsheet_by_id(session, files[0]['id'])
    elif len(files) < 1:
        return Result.fail(SpreadsheetLookupError.NO_SPREADSHEET)
    return Result.fail(SpreadsheetLookupError.MORE_THAN_ONE_SPREADSHEET)

def file_name_to_ids(session: GoogleSheetsSession, spreadsheet_name: str) -> Result:
    """
    Get the spreadsheet ID and the ID of each of its worksheets, as
    {'spreadsheet': {id: name}, 'worksheets': {sheet_id: title}}
    """
    found = find_spreadsheet_by_title(session, spreadsheet_name)
    if not found:
        return found
    ss = found.value
    worksheets = {s.properties.sheetId: s.properties.title for s in ss.sheets}
    return Result.ok({'spreadsheet': {ss.spreadsheetId: spreadsheet_name},
                      'worksheets': worksheets})
