import json
from unittest.mock import MagicMock, Mock

import httplib2
import pytest
from googleapiclient.errors import HttpError

SPREADSHEET_ID = "1abcSpreadsheet"

def sheet_props(sheet_id: int, title: str, rows: int = 1000, cols: int = 26, index: int = 0) -> dict:
    return {'properties': {'sheetId': sheet_id, 'title': title, 'index': index, 'sheetType': 'GRID',
                           'gridProperties': {'rowCount': rows, 'columnCount': cols}}}

def spreadsheet_response(*sheets: dict, title: str = "Grades") -> dict:
    return {'spreadsheetId': SPREADSHEET_ID, 'properties': {'title': title}, 'sheets': list(sheets)}

def http_error(status: int) -> HttpError:
    content = json.dumps({'error': {'code': status, 'message': 'error'}}).encode('utf-8')
    return HttpError(httplib2.Response({'status': status}), content)

@pytest.fixture
def session():
    """A session whose services are fakes, nothing goes over the wire"""
    s = Mock()
    s.sheets = MagicMock()
    s.drive = MagicMock()
    return s

@pytest.fixture
def spreadsheets(session):
    """The spreadsheets() resource of the fake sheets service"""
    return session.sheets.spreadsheets.return_value
