"""
Class implementations of sheets resources.
As these are just logical groupings of data fields we use dataclasses.
dataclass.asdict() gives exactly the dict the client wants but there's no
inverse, so the ones with nested resources coerce raw dicts in fixup().
Only the resources this package reads or writes are implemented.
"""
from dataclasses import dataclass, field, asdict
from typing import Any, List

from ..resources import GoogleWorkSpaceResourceBase

class GoogleSheetsEnum():
    """
    An 'enum' in the sheets client is just a string so this is
    just to translate and validate input.
    """
    _VALID_VALUE_RENDER_OPTIONS = {
        "FORMATTED": "FORMATTED_VALUE",
        "FORMATTED_VALUE": "FORMATTED_VALUE",
        "UNFORMATTED": "UNFORMATTED_VALUE",
        "UNFORMATTED_VALUE": "UNFORMATTED_VALUE",
        "FORMULA": "FORMULA"
    }
    _VALID_DATE_TIME_RENDER_OPTIONS = {
        "SERIAL": "SERIAL_NUMBER",
        "SERIAL_NUMBER": "SERIAL_NUMBER",
        "FORMATTED": "FORMATTED_STRING",
        "FORMATTED_STRING": "FORMATTED_STRING"
    }
    _VALID_DIMENSION_OPTIONS = {
        "ROWS": "ROWS",
        "R": "ROWS",
        "C": "COLUMNS",
        "COLS": "COLUMNS",
        "COLUMNS": "COLUMNS"
    }
    _VALID_VALUE_INPUT_OPTIONS = {
        "RAW": "RAW",
        "USER": "USER_ENTERED",
        "USER_ENTERED": "USER_ENTERED"
    }
    _VALID_INSERT_DATA_OPTIONS = {
        "OVERWRITE": "OVERWRITE",
        "INSERT": "INSERT_ROWS",
        "INSERT_ROWS": "INSERT_ROWS"
    }
    @classmethod
    def valueRenderOption(cls, option: str) -> str:
        """https://developers.google.com/sheets/api/reference/rest/v4/ValueRenderOption"""
        return cls._VALID_VALUE_RENDER_OPTIONS.get(str(option).upper(), "")

    @classmethod
    def dateTimeRenderOption(cls, option: str) -> str:
        """https://developers.google.com/sheets/api/reference/rest/v4/DateTimeRenderOption"""
        return cls._VALID_DATE_TIME_RENDER_OPTIONS.get(str(option).upper(), "")

    @classmethod
    def dimension(cls, dim: str) -> str:
        """https://developers.google.com/sheets/api/reference/rest/v4/Dimension"""
        return cls._VALID_DIMENSION_OPTIONS.get(str(dim).upper(), "")

    @classmethod
    def valueInputOption(cls, option: str) -> str:
        """https://developers.google.com/sheets/api/reference/rest/v4/ValueInputOption"""
        return cls._VALID_VALUE_INPUT_OPTIONS.get(str(option).upper(), "")

    @classmethod
    def insertDataOption(cls, option: str) -> str:
        """https://developers.google.com/sheets/api/reference/rest/v4/spreadsheets.values/append#insertdataoption"""
        return cls._VALID_INSERT_DATA_OPTIONS.get(str(option).upper(), "")

@dataclass
class SpreadsheetProperties(GoogleWorkSpaceResourceBase):
    """
    https://developers.google.com/sheets/api/reference/rest/v4/spreadsheets#SpreadsheetProperties
    """
    title: str = field(default="")
    locale: str = field(default="")
    autoRecalc: str = field(default="")
    timeZone: str = field(default="")
    defaultFormat: dict = field(default_factory=dict)
    iterativeCalculationSettings: dict = field(default_factory=dict)
    spreadsheetTheme: dict = field(default_factory=dict)
    importFunctionsExternalUrlAccessAllowed: bool = field(default=False)

    def __bool__(self) -> bool:
        return bool(self.title)

@dataclass
class GridProperties(GoogleWorkSpaceResourceBase):
    """https://developers.google.com/sheets/api/reference/rest/v4/spreadsheets/sheets#gridproperties"""
    rowCount: int = field(default=-1)
    columnCount: int = field(default=-1)
    frozenRowCount: int = field(default=0)
    frozenColumnCount: int = field(default=0)
    hideGridlines: bool = field(default=False)
    rowGroupControlAfter: bool = field(default=False)
    columnGroupControlAfter: bool = field(default=False)

    def __bool__(self) -> bool:
        return self.rowCount >= 0 and self.columnCount >= 0

@dataclass
class SheetProperties(GoogleWorkSpaceResourceBase):
    """https://developers.google.com/sheets/api/reference/rest/v4/spreadsheets/sheets#sheetproperties"""
    sheetId: int = field(default=-1)
    title: str = field(default="")
    index: int = field(default=-1)
    sheetType: str = field(default="GRID")
    gridProperties: GridProperties|dict = field(default_factory=dict)
    hidden: bool = field(default=False)
    tabColor: dict = field(default_factory=dict)
    tabColorStyle: dict = field(default_factory=dict)
    rightToLeft: bool = field(default=False)
    dataSourceSheetProperties: dict = field(default_factory=dict)

    def __post_init__(self) -> None:
        self.fixup()

    def fixup(self) -> None:
        self.gridProperties = self.gridProperties if isinstance(self.gridProperties,GridProperties) else GridProperties.from_base(self.gridProperties)

    def to_base(self) -> dict:
        self.fixup()
        b = asdict(self)
        b['gridProperties'] = self.gridProperties.to_base()
        return b

    def __bool__(self) -> bool:
        """
        Valid if the ID is 0 or positive and there is a title
        """
        return self.sheetId >= 0 and bool(self.title)

    def __str__(self) -> str:
        if not self:
            return "<invalid sheet>"
        val = f"{str(self.title)}({str(self.sheetId)}[{str(self.index)}]):{str(self.sheetType)}"
        if self.gridProperties:
            val += f"({self.gridProperties.rowCount}Rx{self.gridProperties.columnCount}C)"
        return val

@dataclass
class Sheet(GoogleWorkSpaceResourceBase):
    """
    https://developers.google.com/sheets/api/reference/rest/v4/spreadsheets/sheets#sheet
    Only the properties are kept, this package never asks for grid data
    through the spreadsheet resource.
    """
    properties: SheetProperties|dict = field(default_factory=dict)

    def __post_init__(self) -> None:
        self.fixup()

    def fixup(self) -> None:
        self.properties = self.properties if isinstance(self.properties,SheetProperties) else SheetProperties.from_base(self.properties)

    def to_base(self) -> dict:
        self.fixup()
        return {'properties': self.properties.to_base()}

    def __bool__(self) -> bool:
        return bool(self.properties)

    def __str__(self) -> str:
        return str(self.properties)

@dataclass
class Spreadsheet(GoogleWorkSpaceResourceBase):
    """
    https://developers.google.com/sheets/api/reference/rest/v4/spreadsheets#resource:-spreadsheet
    The spreadsheet reference: its ID plus whatever sheet properties
    came back with it.
    """
    spreadsheetId: str = field(default="")
    properties: SpreadsheetProperties|dict = field(default_factory=dict)
    sheets: List[Sheet|dict] = field(default_factory=list)
    spreadsheetUrl: str = field(default="")

    def __post_init__(self) -> None:
        self.fixup()

    def fixup(self) -> None:
        self.properties = self.properties if isinstance(self.properties,SpreadsheetProperties) else SpreadsheetProperties.from_base(self.properties)
        self.sheets = [s if isinstance(s,Sheet) else Sheet.from_base(s) for s in self.sheets]

    def to_base(self) -> dict:
        self.fixup()
        b = asdict(self)
        b['properties'] = self.properties.to_base()
        b['sheets'] = [s.to_base() for s in self.sheets]
        return b

    def __bool__(self) -> bool:
        return bool(self.spreadsheetId)

    def __str__(self) -> str:
        if not self.spreadsheetId:
            return 'unconnected'
        if not self.sheets:
            return f"{self.spreadsheetId}(no sheets)"
        return f"{self.properties.title}[{','.join(str(s) for s in self.sheets)}]"

    @property
    def title(self) -> str:
        return self.properties.title

@dataclass
class ValueRange(GoogleWorkSpaceResourceBase):
    """https://developers.google.com/sheets/api/reference/rest/v4/spreadsheets.values#resource:-valuerange"""
    range: str = field(default="")
    majorDimension: str = field(default="ROWS")
    values: List[list] = field(default_factory=list)

    def __post_init__(self):
        self.fixup()

    def fixup(self) -> None:
        if self.majorDimension:
            d = str(self.majorDimension)
            self.majorDimension = GoogleSheetsEnum.dimension(d)
            if not self.majorDimension:
                raise ValueError(f"Invalid dimension value: {d}")

    def __bool__(self) -> bool:
        """
        A ValueRange is valid if the range string is not empty
        and the majorDimension has a valid value.
        """
        return bool(self.range) and bool(self.majorDimension)

class Worksheet():
    """
    Reference to a worksheet, a tab within a parent spreadsheet.
    An actual request to a worksheet is addressed with the spreadsheetId of
    the parent and the sheetId of the worksheet within it.  The sheetId is
    constant, the title and index can change.

    Setting rows, cols or title only changes this in-memory reference, nothing
    is sent until one of the worksheet update operations is called with it.
    """
    def __init__(self, spreadsheetid: str,
                 properties: SheetProperties|dict) -> None:
        self._spreadsheetid = str(spreadsheetid)
        self._props = properties if isinstance(properties, SheetProperties) else SheetProperties.from_base(properties)

    def __bool__(self) -> bool:
        return bool(self._spreadsheetid) and bool(self._props)

    def __str__(self) -> str:
        return f"{self._spreadsheetid}/{str(self._props)}"

    def __repr__(self) -> str:
        return f"{self.__class__}:{str(self)}"

    def __eq__(self, other) -> bool:
        return (isinstance(other, Worksheet) and self.spreadsheet_id == other.spreadsheet_id
                and self._props == other._props)

    def __len__(self) -> int:
        """
        In this context length is number of cells in the sheet
        """
        return max(self.rows, 0) * max(self.cols, 0)

    @property
    def spreadsheet_id(self) -> str:
        return self._spreadsheetid

    @property
    def properties(self) -> SheetProperties:
        return self._props

    @property
    def sheet_id(self) -> int:
        return self._props.sheetId

    @property
    def index(self) -> int:
        return self._props.index

    @property
    def title(self) -> str:
        return self._props.title

    @title.setter
    def title(self, value: str) -> None:
        self._props.title = str(value)

    @property
    def rows(self) -> int:
        return self._props.gridProperties.rowCount

    @rows.setter
    def rows(self, value: int) -> None:
        self._props.gridProperties.rowCount = int(value)

    @property
    def cols(self) -> int:
        return self._props.gridProperties.columnCount

    @cols.setter
    def cols(self, value: int) -> None:
        self._props.gridProperties.columnCount = int(value)

    @property
    def dimensions(self) -> tuple[int,int]:
        return (self.rows, self.cols)

@dataclass(frozen=True)
class Cell():
    """
    A cell position and value.  Rows and cols are 1-based.
    """
    row: int
    col: int
    value: Any = field(default="")

    def __post_init__(self) -> None:
        if int(self.row) < 1 or int(self.col) < 1:
            raise ValueError(f"Cell positions are 1-based, got R{self.row}C{self.col}")

    @property
    def batch_id(self) -> str:
        """Client-chosen id of this cell's entry in a batch request"""
        return f"R{self.row}C{self.col}"

    @classmethod
    def of(cls, cell):
        """Accept a Cell or a (row, col, value) triple"""
        if isinstance(cell, Cell):
            return cell
        row, col, value = cell
        return cls(int(row), int(col), value)
