"""
Reading and writing cells and rows of a worksheet.

Operations addressed by spreadsheet and worksheet IDs resolve the worksheet
first and hand back the lookup error unchanged if it can't be found.
Writes are unconditional overwrites: the API carries no version check on
cell data so whatever is in the sheet is replaced.
"""
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any
import logging
import re

from ..access import GoogleSheetsSession
from ..errors import EmptyResponseError
from . import GoogleSheetsBatchSize
from .a1 import GoogleSheetsA1Notation
from .resources import Cell, ValueRange, Worksheet
from .requests import UpdateCellsRequest, GoogleSheetsUpdateRequest
from .result import Result, CellLookupError
from .spreadsheet import find_spreadsheet_by_id
from .worksheet import select_worksheet, update_worksheet_all_fields
from . import ops

__all__ = ['BatchEntry', 'find_cell_by_row_col', 'update_cell', 'build_batch_entries',
           'batch_update_cells', 'chunk_cells', 'insert_row', 'read_worksheet_headers',
           'read_worksheet_values', 'read_worksheet', 'write_worksheet']

logger = logging.getLogger(__name__)

def _resolve_worksheet(session: GoogleSheetsSession, spreadsheet_id: str, worksheet_id: int|str) -> Result:
    """One read: fetch the spreadsheet and pick the worksheet out of it"""
    found = find_spreadsheet_by_id(session, spreadsheet_id)
    if not found:
        return found
    return select_worksheet(found.value, worksheet_id)

def _as_str(value: Any) -> str:
    return "" if value is None else str(value)

def _pad(row: list, width: int) -> list[str]:
    vals = [_as_str(v) for v in row]
    return vals + [""] * (width - len(vals))

def find_cell_by_row_col(session: GoogleSheetsSession, worksheet: Worksheet,
                         row: int, col: int) -> Result:
    """
    Get the Cell at row, col.  An empty cell comes back with a value of "".
    """
    a1 = GoogleSheetsA1Notation.cell(worksheet.title, row, col)
    response = ops.getValues(session, worksheet.spreadsheet_id, a1)
    if not response.valueRanges:
        return Result.fail(CellLookupError.NO_CELLS)
    values = response.valueRanges[0].values
    if len(response.valueRanges) > 1 or len(values) > 1 or any(len(r) > 1 for r in values):
        return Result.fail(CellLookupError.MORE_THAN_ONE_CELL)
    value = values[0][0] if values and values[0] else ""
    return Result.ok(Cell(int(row), int(col), value))

def _write_cell(session: GoogleSheetsSession, worksheet: Worksheet, cell: Cell):
    data = ValueRange(range=GoogleSheetsA1Notation.cell(worksheet.title, cell.row, cell.col),
                      values=[[cell.value]])
    return ops.updateValues(session, worksheet.spreadsheet_id, data, "USER")

def update_cell(session: GoogleSheetsSession, spreadsheet_id: str, worksheet_id: int|str,
                cell: Cell|tuple) -> Result:
    """
    Set the value of one cell, given as a Cell or (row, col, value).
    Values are entered as if typed, so '=...' is a formula.
    """
    c = Cell.of(cell)
    found = _resolve_worksheet(session, spreadsheet_id, worksheet_id)
    if not found:
        return found
    return Result.ok(_write_cell(session, found.value, c))

@dataclass
class BatchEntry():
    """
    One operation in a cell batch, tagged with the client-chosen batch id
    so replies can be matched up with what was asked.
    """
    batch_id: str
    request: UpdateCellsRequest
    operation: str = field(default="update")

def build_batch_entries(sheet_id: int, cells: Iterable[Cell|tuple]) -> list[BatchEntry]:
    entries = []
    for cell in cells:
        c = Cell.of(cell)
        entries.append(BatchEntry(c.batch_id, UpdateCellsRequest(sheet_id, c.row, c.col, c.value)))
    return entries

def batch_update_cells(session: GoogleSheetsSession, spreadsheet_id: str, worksheet_id: int|str,
                       cells: Iterable[Cell|tuple]) -> Result:
    """
    Write a set of cells in one batch request, each given as a Cell or
    (row, col, value).  Result holds {batch_id: reply} for every entry.
    The batch is all or nothing, a failed call fails every entry.
    Callers with large writes should split them with chunk_cells() first.
    """
    found = _resolve_worksheet(session, spreadsheet_id, worksheet_id)
    if not found:
        return found
    worksheet = found.value
    entries = build_batch_entries(worksheet.sheet_id, cells)
    if not entries:
        return Result.ok({})
    request = GoogleSheetsUpdateRequest([e.request for e in entries])
    response = ops.batchUpdate(session, worksheet.spreadsheet_id, request)
    if not response:
        raise EmptyResponseError("batch_update_cells")
    logger.debug("batch wrote %d cells to %s", len(entries), worksheet)
    replies = list(response.replies) + [{}] * (len(entries) - len(response.replies))
    return Result.ok({e.batch_id: r for e, r in zip(entries, replies)})

def chunk_cells(header_cells: list[Cell], value_cells: list[Cell],
                size: int = GoogleSheetsBatchSize) -> list[list[Cell]]:
    """
    Split value_cells into groups of at most size, with the header cells
    always going out with the first group.
    """
    if size < 1:
        raise ValueError(f"chunk size must be >= 1, got {size}")
    values = list(value_cells)
    chunks = [values[i:i + size] for i in range(0, len(values), size)]
    if not chunks:
        return [list(header_cells)]
    chunks[0] = list(header_cells) + chunks[0]
    return chunks

def _header_key(header: str) -> str:
    """Headers match on lower case with whitespace removed"""
    return re.sub(r"\s+", "", _as_str(header)).lower()

def insert_row(session: GoogleSheetsSession, spreadsheet_id: str, worksheet_id: int|str,
               row_values: dict[str, Any]) -> Result:
    """
    Append a row after the last one with data, given a map of header to value.
    Headers are the values in the first row of the worksheet and match
    ignoring case and whitespace.  Any header not in the sheet is a ValueError.
    """
    found = _resolve_worksheet(session, spreadsheet_id, worksheet_id)
    if not found:
        return found
    worksheet = found.value
    headers = [_header_key(h) for h in read_worksheet_headers(session, worksheet)]
    row = [""] * len(headers)
    for header, value in row_values.items():
        key = _header_key(header)
        if not key or key not in headers:
            raise ValueError(f"No column with header {header!r} in worksheet {worksheet.title}")
        row[headers.index(key)] = value
    data = ValueRange(range=GoogleSheetsA1Notation.cell(worksheet.title, 1, 1), values=[row])
    return Result.ok(ops.appendValues(session, worksheet.spreadsheet_id, data))

def read_worksheet_headers(session: GoogleSheetsSession, worksheet: Worksheet) -> list[str]:
    """
    The values of the header row (row 1), padded with "" out to the
    worksheet's column count.
    """
    response = ops.getValues(session, worksheet.spreadsheet_id,
                             GoogleSheetsA1Notation.rows(worksheet.title, 1, 1))
    values = response.valueRanges[0].values if response.valueRanges else []
    return _pad(values[0] if values else [], worksheet.cols)

def read_worksheet_values(session: GoogleSheetsSession, worksheet: Worksheet) -> list[list[str]]:
    """
    Every row below the header as a list of strings, padded with "" out to
    the worksheet's column count.  Trailing empty rows are not returned.
    """
    if worksheet.rows < 2 or worksheet.cols < 1:
        return []
    a1 = GoogleSheetsA1Notation.block(worksheet.title, 2, 1, worksheet.rows, worksheet.cols)
    response = ops.getValues(session, worksheet.spreadsheet_id, a1)
    values = response.valueRanges[0].values if response.valueRanges else []
    return [_pad(r, worksheet.cols) for r in values]

def read_worksheet(session: GoogleSheetsSession, spreadsheet_id: str, worksheet_id: int|str) -> Result:
    """
    Read a worksheet split into its header row and the rest,
    as {'headers': [...], 'values': [[...], ...]}
    """
    found = _resolve_worksheet(session, spreadsheet_id, worksheet_id)
    if not found:
        return found
    worksheet = found.value
    return Result.ok({'headers': read_worksheet_headers(session, worksheet),
                      'values': read_worksheet_values(session, worksheet)})

def write_worksheet(session: GoogleSheetsSession, spreadsheet_id: str, worksheet_id: int|str,
                    data: dict) -> Result:
    """
    Replace the whole contents of a worksheet with
    {'headers': [...], 'values': [[...], ...]}.
    The sheet is shrunk to a single blank cell, which erases everything, then
    grown to fit and written in chunks the API can handle.  Result holds the
    list of per-chunk {batch_id: reply} maps.
    """
    found = _resolve_worksheet(session, spreadsheet_id, worksheet_id)
    if not found:
        return found
    worksheet = found.value
    headers = list(data.get('headers', []))
    values = [list(r) for r in data.get('values', [])]
    rows_needed = len(values) + 1
    cols_needed = max([len(headers), 1] + [len(r) for r in values])
    title = worksheet.title

    worksheet = update_worksheet_all_fields(session, worksheet, 1, 1, title)
    _write_cell(session, worksheet, Cell(1, 1, ""))
    worksheet = update_worksheet_all_fields(session, worksheet, rows_needed, cols_needed, title)

    header_cells = [Cell(1, c + 1, v) for c, v in enumerate(headers)]
    value_cells = [Cell(r + 2, c + 1, v) for r, row in enumerate(values) for c, v in enumerate(row)]
    chunks = chunk_cells(header_cells, value_cells)
    logger.info("writing %d cells to %s in %d batch(es)",
                len(header_cells) + len(value_cells), worksheet, len(chunks))
    results = []
    for chunk in chunks:
        r = batch_update_cells(session, spreadsheet_id, worksheet_id, chunk)
        if not r:
            return r
        results.append(r.value)
    return Result.ok(results)
