"""
Locating, creating and resizing worksheets within a spreadsheet.

Lookups return a Result, an unknown ID or an ambiguous title is something
the caller is expected to branch on.  Creating and updating must get a
worksheet back, so an empty response raises EmptyResponseError.
"""
import logging

from googleapiclient.errors import HttpError

from ..access import GoogleSheetsSession
from ..errors import EmptyResponseError
from .resources import Spreadsheet, Worksheet
from .requests import AddSheetRequest, UpdateSheetPropertiesRequest, GoogleSheetsUpdateRequest
from .result import Result, WorksheetLookupError
from . import ops

__all__ = ['create_new_worksheet', 'update_worksheet_row_count', 'update_worksheet_col_count',
           'update_worksheet_all_fields', 'find_worksheet_by_id', 'find_worksheet_by_title',
           'select_worksheet']

logger = logging.getLogger(__name__)

def _spreadsheet_id(spreadsheet: Spreadsheet|str) -> str:
    sid = spreadsheet.spreadsheetId if isinstance(spreadsheet, Spreadsheet) else str(spreadsheet)
    if not sid:
        raise ValueError("A spreadsheet ID is required")
    return sid

def _check_dimension(name: str, value: int) -> int:
    v = int(value)
    if v < 1:
        raise ValueError(f"{name} must be >= 1, got {value}")
    return v

def create_new_worksheet(session: GoogleSheetsSession, spreadsheet: Spreadsheet|str,
                         rows: int, cols: int, title: str) -> Worksheet:
    """
    Create a new worksheet in the spreadsheet with the given size and title,
    returning the reference to it as the server created it.
    """
    sid = _spreadsheet_id(spreadsheet)
    request = GoogleSheetsUpdateRequest([AddSheetRequest(str(title),
                                                         _check_dimension("rows", rows),
                                                         _check_dimension("cols", cols))])
    response = ops.batchUpdate(session, sid, request)
    reply = response.replies[0] if response and response.replies else {}
    props = (reply or {}).get('addSheet', {}).get('properties', None)
    if not props:
        raise EmptyResponseError("create_new_worksheet")
    worksheet = Worksheet(sid, props)
    logger.info("created worksheet %s", worksheet)
    return worksheet

def _update_worksheet(session: GoogleSheetsSession, worksheet: Worksheet,
                      fields: list[str], operation: str) -> Worksheet:
    """
    Push the named fields of the in-memory reference and return the refreshed
    reference from the spreadsheet that comes back with the response.
    """
    if not worksheet:
        raise ValueError("Must be a valid worksheet for an update operation")
    request = GoogleSheetsUpdateRequest([UpdateSheetPropertiesRequest(worksheet.properties, fields)],
                                        includeSpreadsheetInResponse=True)
    response = ops.batchUpdate(session, worksheet.spreadsheet_id, request)
    if not response:
        raise EmptyResponseError(operation)
    for s in response.updatedSpreadsheet.sheets:
        if s.properties.sheetId == worksheet.sheet_id:
            logger.debug("updated worksheet %s fields %s", worksheet.sheet_id, fields)
            return Worksheet(worksheet.spreadsheet_id, s.properties)
    raise EmptyResponseError(operation)

def update_worksheet_row_count(session: GoogleSheetsSession, worksheet: Worksheet, rows: int) -> Worksheet:
    """Set the number of rows and return the refreshed worksheet"""
    worksheet.rows = _check_dimension("rows", rows)
    return _update_worksheet(session, worksheet, ['gridProperties.rowCount'],
                             "update_worksheet_row_count")

def update_worksheet_col_count(session: GoogleSheetsSession, worksheet: Worksheet, cols: int) -> Worksheet:
    """Set the number of columns and return the refreshed worksheet"""
    worksheet.cols = _check_dimension("cols", cols)
    return _update_worksheet(session, worksheet, ['gridProperties.columnCount'],
                             "update_worksheet_col_count")

def update_worksheet_all_fields(session: GoogleSheetsSession, worksheet: Worksheet,
                                rows: int, cols: int, title: str) -> Worksheet:
    """Update all the fields for the given worksheet and return the new worksheet"""
    worksheet.rows = _check_dimension("rows", rows)
    worksheet.cols = _check_dimension("cols", cols)
    worksheet.title = title
    return _update_worksheet(session, worksheet,
                             ['title', 'gridProperties.rowCount', 'gridProperties.columnCount'],
                             "update_worksheet_all_fields")

def find_worksheet_by_id(session: GoogleSheetsSession, spreadsheet: Spreadsheet|str,
                         worksheet_id: int|str) -> Result:
    """
    Find the worksheet with the given sheetId.
    Result holds the Worksheet, or WorksheetLookupError.NO_ENTRY if either the
    spreadsheet or the worksheet isn't there.
    """
    sid = _spreadsheet_id(spreadsheet)
    try:
        ss = ops.get(session, sid)
    except HttpError as e:
        if e.resp.status == 404:
            return Result.fail(WorksheetLookupError.NO_ENTRY)
        raise
    return select_worksheet(ss, worksheet_id)

def select_worksheet(spreadsheet: Spreadsheet, worksheet_id: int|str) -> Result:
    """
    Pick the worksheet with the given sheetId out of an already fetched
    spreadsheet, no remote call.
    """
    try:
        wid = int(worksheet_id)
    except (TypeError, ValueError):
        return Result.fail(WorksheetLookupError.NO_ENTRY)
    for s in spreadsheet.sheets:
        if s.properties.sheetId == wid:
            return Result.ok(Worksheet(spreadsheet.spreadsheetId, s.properties))
    return Result.fail(WorksheetLookupError.NO_ENTRY)

def find_worksheet_by_title(session: GoogleSheetsSession, spreadsheet: Spreadsheet|str,
                            title: str) -> Result:
    """
    Find the worksheet whose title is exactly title.
    Zero matches gives NO_WORKSHEET and more than one gives
    MORE_THAN_ONE_WORKSHEET, an ambiguous title is never resolved here.
    """
    sid = _spreadsheet_id(spreadsheet)
    ss = ops.get(session, sid)
    matches = [s for s in ss.sheets if s.properties.title == title]
    if len(matches) == 1:
        return Result.ok(Worksheet(sid, matches[0].properties))
    elif len(matches) < 1:
        return Result.fail(WorksheetLookupError.NO_WORKSHEET)
    return Result.fail(WorksheetLookupError.MORE_THAN_ONE_WORKSHEET)
