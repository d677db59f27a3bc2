"""
Exceptions raised by this package.
Transport and HTTP errors from the google client are not wrapped, they
propagate as googleapiclient.errors.HttpError and friends.
"""

class GoogleSheetsError(Exception):
    """Base for everything raised by this package"""
    pass

class CredentialsError(GoogleSheetsError):
    """No usable credential could be built from the configuration"""
    pass

class EmptyResponseError(GoogleSheetsError):
    """
    The remote service returned an empty response to a call that
    must return an entity, such as creating or updating a worksheet.
    """
    def __init__(self, operation: str) -> None:
        super().__init__(f"{operation}: remote returned empty response")
        self.operation = operation

class LookupFailed(GoogleSheetsError):
    """Raised by Result.unwrap() on an error result"""
    def __init__(self, reason) -> None:
        super().__init__(f"lookup failed: {reason}")
        self.reason = reason
