import re

from . import GoogleSheetsMaxColumns

class GoogleSheetsA1Notation():
    """
    Helpers for generating Google Sheets A1 ranges.
    See https://developers.google.com/sheets/api/guides/concepts#cell
    A general A1 has the form:

    <title>!<start col><start row>:<end col><end row>

        All rows are integers, and are 1 based
        All cols are alphabetical A-ZZZ, also 1 based so 'A' is 1
        The title must be wrapped in single quotes if it has anything other
        than letters, digits and underscores, with embedded quotes doubled.
    """
    _A1COLREGEXSTR = r"^[A-Z]{1,3}$"
    _PLAIN_TITLE_REGEXSTR = r"^[A-Za-z_][A-Za-z0-9_]*$"

    _a1_col_re = re.compile(_A1COLREGEXSTR)
    _plain_title_re = re.compile(_PLAIN_TITLE_REGEXSTR)

    @classmethod
    def col_to_int(cls, column: str) -> int:
        """
        Convert a sheet column A-ZZZ indexing to its integer equivalent.
        Returns 0 if the column label is invalid.
        """
        c = str(column).upper()
        num = 0
        if cls._a1_col_re.match(c):
            for v in c:
                num = num * 26 + (ord(v) - 64)
        return num

    @classmethod
    def int_to_col(cls, index: int) -> str:
        """
        Translate a 1-based column index to its A-ZZZ label.
        An empty string signals an out of range index.
        """
        i = int(index)
        if i < 1 or i > GoogleSheetsMaxColumns:
            return ""
        col = ""
        while i:
            i, r = divmod(i - 1, 26)
            col = chr(r + 65) + col
        return col

    @classmethod
    def quote_title(cls, title: str) -> str:
        t = str(title)
        if cls._plain_title_re.match(t):
            return t
        return "'" + t.replace("'", "''") + "'"

    @classmethod
    def cell(cls, title: str, row: int, col: int) -> str:
        """A1 of a single cell, e.g. 'My Sheet'!C4"""
        c = cls.int_to_col(col)
        if not c or int(row) < 1:
            raise ValueError(f"invalid cell position: R{row}C{col}")
        return f"{cls.quote_title(title)}!{c}{int(row)}"

    @classmethod
    def rows(cls, title: str, start_row: int, end_row: int) -> str:
        """A1 of whole rows, from start_row to end_row inclusive, e.g. Sheet1!1:1"""
        if int(start_row) < 1 or int(end_row) < int(start_row):
            raise ValueError(f"invalid row range: {start_row}:{end_row}")
        return f"{cls.quote_title(title)}!{int(start_row)}:{int(end_row)}"

    @classmethod
    def block(cls, title: str, start_row: int, start_col: int,
              end_row: int, end_col: int) -> str:
        """A1 of a bounded rectangle of cells"""
        if end_row < start_row or end_col < start_col:
            raise ValueError(f"invalid range: R{start_row}C{start_col}:R{end_row}C{end_col}")
        start = cls.cell(title, start_row, start_col)
        end_c = cls.int_to_col(end_col)
        if not end_c:
            raise ValueError(f"invalid end column: {end_col}")
        return f"{start}:{end_c}{int(end_row)}"
