"""
Operations on Google Sheets spreadsheets, worksheets and cells
"""

# can address up to 'ZZZ'
GoogleSheetsMaxColumns = 18278
# current cell limit in a single GSheet
# this can be any R and C dimensions as long as RxC <= 10000000
GoogleSheetsMaxCells = 10000000
# cell writes per batchUpdate call, keeps request payloads under the API limit
GoogleSheetsBatchSize = 10000

from .result import Result, WorksheetLookupError, SpreadsheetLookupError, CellLookupError
from .resources import Spreadsheet, Sheet, SheetProperties, GridProperties, ValueRange, Worksheet, Cell
from .a1 import GoogleSheetsA1Notation
from .worksheet import *
from .spreadsheet import *
from .cells import *
