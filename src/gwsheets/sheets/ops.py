"""
One wrapper per remote call.  Each takes the session first and hands back
the typed resource, or an empty (falsy) one if the service returned nothing.
Deciding what an empty response means is left to the callers.
"""
from collections.abc import Iterable
import logging

from ..access import GoogleSheetsSession
from .resources import GoogleSheetsEnum, Spreadsheet, ValueRange
from .requests import (GoogleSheetsUpdateRequest, GoogleSheetsUpdateRequestResponse, GetValuesRequestResponse,
                       UpdateValuesRequestResponse, AppendValuesResponse)

logger = logging.getLogger(__name__)

SPREADSHEET_MIME_TYPE = "application/vnd.google-apps.spreadsheet"

# enough to locate worksheets without pulling any grid data
SHEET_PROPERTIES_FIELDS = "spreadsheetId,spreadsheetUrl,properties.title,sheets.properties"

def get(session: GoogleSheetsSession, spreadsheetid: str,
        fields: str = SHEET_PROPERTIES_FIELDS) -> Spreadsheet:
    """
    Wrapper for calling the get() spreadsheet method.
    See https://developers.google.com/sheets/api/reference/rest/v4/spreadsheets/get
    Only spreadsheet and sheet properties are requested by default.
    """
    ret = Spreadsheet()
    if spreadsheetid:
        logger.debug("spreadsheets.get %s", spreadsheetid)
        response = session.sheets.spreadsheets().get(spreadsheetId=spreadsheetid,
                                                     fields=fields).execute()
        if response:
            ret = Spreadsheet.from_base(response)
    return ret

def batchUpdate(session: GoogleSheetsSession, spreadsheetid: str,
                request: GoogleSheetsUpdateRequest|dict) -> GoogleSheetsUpdateRequestResponse:
    """
    Wrapper for calling the batchUpdate() spreadsheet method.
    See https://developers.google.com/sheets/api/reference/rest/v4/spreadsheets/batchUpdate
    This is for altering sheet properties and for cell writes addressed by grid
    coordinate.  The whole batch succeeds or fails together.
    """
    body = request.to_base() if isinstance(request, GoogleSheetsUpdateRequest) else dict(request)
    logger.debug("spreadsheets.batchUpdate %s with %d request(s)", spreadsheetid, len(body.get('requests', [])))
    response = session.sheets.spreadsheets().batchUpdate(spreadsheetId=spreadsheetid, body=body).execute()
    if response:
        return GoogleSheetsUpdateRequestResponse.from_base(response)
    return GoogleSheetsUpdateRequestResponse()

def getValues(session: GoogleSheetsSession, spreadsheetId: str,
              ranges: str|list[str],
              dimension: str = "ROWS",
              valueRenderOption: str = "FORMATTED",
              dateTimeRenderOption: str = "SERIAL") -> GetValuesRequestResponse:
    """
    Wrapper for calling the batchGet() method on the values resource.
    See https://developers.google.com/sheets/api/reference/rest/v4/spreadsheets.values/batchGet
    We always call batchGet, even for a single range instead of calling get()
    just for consistency.
    """
    range_list = [ranges] if isinstance(ranges, str) else [str(r) for r in ranges]
    dim = GoogleSheetsEnum.dimension(dimension)
    if not dim:
        raise ValueError(f"Invalid majorDimension value: {dimension}")
    value_render = GoogleSheetsEnum.valueRenderOption(valueRenderOption)
    if not value_render:
        raise ValueError(f"Invalid valueRenderOption value: {valueRenderOption}")
    date_time_render = GoogleSheetsEnum.dateTimeRenderOption(dateTimeRenderOption)
    if not date_time_render:
        raise ValueError(f"Invalid dateTimeRenderOption value: {dateTimeRenderOption}")

    response = GetValuesRequestResponse()
    if range_list:
        logger.debug("values.batchGet %s %s", spreadsheetId, range_list)
        r = session.sheets.spreadsheets().values().batchGet(spreadsheetId=spreadsheetId,
                                                            ranges=range_list,
                                                            majorDimension=dim,
                                                            valueRenderOption=value_render,
                                                            dateTimeRenderOption=date_time_render).execute()
        if r:
            response = GetValuesRequestResponse.from_base(r)
    return response

def updateValues(session: GoogleSheetsSession, spreadsheetId: str,
                 data: ValueRange|list[ValueRange],
                 valueInputOption: str = "USER") -> UpdateValuesRequestResponse:
    """
    Wrapper for calling the batchUpdate() method on the values resource.
    See https://developers.google.com/sheets/api/reference/rest/v4/spreadsheets.values/batchUpdate
    Writes overwrite whatever is in the range, there is no version check.
    """
    dlist = [d.to_base() for d in data] if isinstance(data, Iterable) else [data.to_base()]
    value_input = GoogleSheetsEnum.valueInputOption(valueInputOption)
    if not value_input:
        raise ValueError(f"Invalid valueInputOption value: {valueInputOption}")
    response = UpdateValuesRequestResponse()
    if dlist:
        body = {
            "valueInputOption": value_input,
            "data": dlist
        }
        logger.debug("values.batchUpdate %s %s", spreadsheetId, [d['range'] for d in dlist])
        r = session.sheets.spreadsheets().values().batchUpdate(spreadsheetId=spreadsheetId, body=body).execute()
        if r:
            response = UpdateValuesRequestResponse.from_base(r)
    return response

def appendValues(session: GoogleSheetsSession, spreadsheetId: str,
                 data: ValueRange,
                 valueInputOption: str = "USER",
                 insertDataOption: str = "INSERT") -> AppendValuesResponse:
    """
    Wrapper for calling the append() method on the values resource.
    See https://developers.google.com/sheets/api/reference/rest/v4/spreadsheets.values/append
    The table found at data.range is extended with the rows in data.values.
    """
    value_input = GoogleSheetsEnum.valueInputOption(valueInputOption)
    if not value_input:
        raise ValueError(f"Invalid valueInputOption value: {valueInputOption}")
    insert_data = GoogleSheetsEnum.insertDataOption(insertDataOption)
    if not insert_data:
        raise ValueError(f"Invalid insertDataOption value: {insertDataOption}")
    logger.debug("values.append %s %s", spreadsheetId, data.range)
    r = session.sheets.spreadsheets().values().append(spreadsheetId=spreadsheetId,
                                                      range=data.range,
                                                      valueInputOption=value_input,
                                                      insertDataOption=insert_data,
                                                      body=data.to_base()).execute()
    if r:
        return AppendValuesResponse.from_base(r)
    return AppendValuesResponse()

def _escape_query(value: str) -> str:
    return str(value).replace('\\', '\\\\').replace("'", "\\'")

def listSpreadsheetFiles(session: GoogleSheetsSession, name: str) -> list[dict]:
    """
    Search Drive for non-trashed spreadsheets named exactly name.
    See https://developers.google.com/drive/api/guides/search-files
    Returns the raw file dicts, each with 'id' and 'name'.
    """
    q = (f"name = '{_escape_query(name)}' and mimeType = '{SPREADSHEET_MIME_TYPE}' "
         "and trashed = false")
    files = []
    page_token = None
    while True:
        logger.debug("drive files.list q=%s", q)
        r = session.drive.files().list(q=q, spaces="drive",
                                       fields="nextPageToken, files(id, name)",
                                       pageToken=page_token).execute()
        if not r:
            break
        files.extend(r.get('files', []))
        page_token = r.get('nextPageToken', None)
        if not page_token:
            break
    return files
