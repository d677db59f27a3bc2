"""
A thin binding of configuration values and simple function calls onto the
Google Sheets document model: spreadsheets, worksheets, cells and rows.

Authentication and service construction live in access, the operations in
the sheets subpackage.  Every operation takes an explicit session as its
first argument so a caller authenticates once and reuses the built services.

Lookups return a Result rather than raising, creation and updates raise
EmptyResponseError if Google hands back nothing.
"""
from .errors import GoogleSheetsError, CredentialsError, EmptyResponseError, LookupFailed
from .access import GoogleSheetsSession, build_credential, build_sheet_service
