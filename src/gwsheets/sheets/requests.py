from dataclasses import dataclass, asdict, field
from typing import Any, List
import re

from ..resources import GoogleWorkSpaceResourceBase
from .resources import SheetProperties, Spreadsheet, ValueRange

def cell_value(value: Any) -> dict:
    """
    Translate a python value into an ExtendedValue.
    https://developers.google.com/sheets/api/reference/rest/v4/spreadsheets/other#ExtendedValue
    Strings starting with '=' are entered as formulas, the same as typing
    them into the sheet.
    """
    if isinstance(value, bool):
        return {'boolValue': value}
    if isinstance(value, (int, float)):
        return {'numberValue': value}
    v = "" if value is None else str(value)
    if v.startswith('='):
        return {'formulaValue': v}
    return {'stringValue': v}

class GoogleSheetsUpdateRequestBase(GoogleWorkSpaceResourceBase):
    """
    Base class for sheet batchUpdate requests to get the actual
    request dict into the right format.
    """
    def to_request(self) -> dict[str,dict]:
        name = self.__class__.__name__
        # need to strip off the trailing 'Request' class name and
        # set the first letter to lower case
        m = re.match("^([a-zA-Z])([a-zA-Z]+)Request$", name)
        if not m:
            raise RuntimeError("Invalid Google Sheets request format for class name")
        key = m.group(1).lower() + m.group(2)
        return {key: self.to_base()}

@dataclass
class AddSheetRequest(GoogleSheetsUpdateRequestBase):
    """
    https://developers.google.com/sheets/api/reference/rest/v4/spreadsheets/request#addsheetrequest
    Only the title and grid size are sent, the server fills in the rest.
    """
    title: str
    rowCount: int
    columnCount: int

    def to_base(self) -> dict:
        return {'properties': {'title': str(self.title),
                               'gridProperties': {'rowCount': int(self.rowCount),
                                                  'columnCount': int(self.columnCount)}}}

@dataclass
class UpdateSheetPropertiesRequest(GoogleSheetsUpdateRequestBase):
    """
    https://developers.google.com/sheets/api/reference/rest/v4/spreadsheets/request#updatesheetpropertiesrequest
    The field mask limits the update to the named properties, anything not
    in it is left alone on the server.
    """
    properties: SheetProperties
    fields: List[str] = field(default_factory=list)

    def to_base(self) -> dict:
        if not self.fields:
            raise ValueError("updateSheetProperties needs at least one field")
        props = {'sheetId': self.properties.sheetId}
        grid = {}
        for f in self.fields:
            if f == 'title':
                props['title'] = self.properties.title
            elif f.startswith('gridProperties.'):
                name = f.split('.', 1)[1]
                grid[name] = getattr(self.properties.gridProperties, name)
            else:
                props[f] = getattr(self.properties, f)
        if grid:
            props['gridProperties'] = grid
        return {'properties': props, 'fields': ','.join(self.fields)}

@dataclass
class UpdateCellsRequest(GoogleSheetsUpdateRequestBase):
    """
    https://developers.google.com/sheets/api/reference/rest/v4/spreadsheets/request#updatecellsrequest
    A single cell write.  row/col are 1-based here and translated to the
    0-based GridCoordinate the API wants.
    """
    sheetId: int
    row: int
    col: int
    value: Any = field(default="")

    def to_base(self) -> dict:
        return {'start': {'sheetId': self.sheetId,
                          'rowIndex': int(self.row) - 1,
                          'columnIndex': int(self.col) - 1},
                'rows': [{'values': [{'userEnteredValue': cell_value(self.value)}]}],
                'fields': 'userEnteredValue'}

@dataclass
class GoogleSheetsUpdateRequest(GoogleWorkSpaceResourceBase):
    """
    Generate a GSheet Batch Update request body.
    https://developers.google.com/sheets/api/reference/rest/v4/spreadsheets/batchUpdate#request-body
    """
    requests: List[GoogleSheetsUpdateRequestBase|dict]
    includeSpreadsheetInResponse: bool = field(default=False)
    responseRanges: List[str] = field(default_factory=list)
    responseIncludeGridData: bool = field(default=False)

    def to_base(self) -> dict:
        return {'requests': [r.to_request() if isinstance(r, GoogleSheetsUpdateRequestBase) else dict(r)
                             for r in self.requests],
                'includeSpreadsheetInResponse': self.includeSpreadsheetInResponse,
                'responseRanges': list(self.responseRanges),
                'responseIncludeGridData': self.responseIncludeGridData}

@dataclass
class GoogleSheetsUpdateRequestResponse(GoogleWorkSpaceResourceBase):
    """
    https://developers.google.com/sheets/api/reference/rest/v4/spreadsheets/batchUpdate#response-body
    replies line up one to one with the requests that were sent.
    """
    spreadsheetId: str = field(default="")
    replies: List[dict] = field(default_factory=list)
    updatedSpreadsheet: Spreadsheet|dict = field(default_factory=dict)

    def __post_init__(self) -> None:
        self.fixup()

    def __bool__(self) -> bool:
        return bool(self.spreadsheetId)

    def fixup(self) -> None:
        self.updatedSpreadsheet = self.updatedSpreadsheet if isinstance(self.updatedSpreadsheet,Spreadsheet) else Spreadsheet.from_base(self.updatedSpreadsheet)

    def to_base(self) -> dict:
        self.fixup()
        b = asdict(self)
        b['updatedSpreadsheet'] = self.updatedSpreadsheet.to_base()
        return b

@dataclass
class GetValuesRequestResponse(GoogleWorkSpaceResourceBase):
    """
    https://developers.google.com/sheets/api/reference/rest/v4/spreadsheets.values/batchGet#response-body
    """
    spreadsheetId: str = field(default="")
    valueRanges: List[ValueRange|dict] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.fixup()

    def __bool__(self) -> bool:
        return bool(self.spreadsheetId)

    def fixup(self) -> None:
        self.valueRanges = [vr if isinstance(vr,ValueRange) else ValueRange.from_base(vr) for vr in self.valueRanges]

@dataclass
class UpdateValuesRequestResponse(GoogleWorkSpaceResourceBase):
    """
    https://developers.google.com/sheets/api/reference/rest/v4/spreadsheets.values/batchUpdate#response-body
    """
    spreadsheetId: str = field(default="")
    totalUpdatedRows: int = field(default=0)
    totalUpdatedColumns: int = field(default=0)
    totalUpdatedCells: int = field(default=0)
    totalUpdatedSheets: int = field(default=0)
    responses: List[dict] = field(default_factory=list)

    def __bool__(self) -> bool:
        """Response is valid if an ID came back"""
        return bool(self.spreadsheetId)

@dataclass
class AppendValuesResponse(GoogleWorkSpaceResourceBase):
    """
    https://developers.google.com/sheets/api/reference/rest/v4/spreadsheets.values/append#response-body
    """
    spreadsheetId: str = field(default="")
    tableRange: str = field(default="")
    updates: dict = field(default_factory=dict)

    def __bool__(self) -> bool:
        return bool(self.spreadsheetId)
