"""
Base exceptions shared by the store, the query engine and the HTTP layer.
"""


class SalesLensError(Exception):
    """Base class for all sales-lens errors. Carries the HTTP status to report."""

    status_code = 500

    def __init__(self, message):
        super().__init__(message)
        self.message = message


class DataLoadError(SalesLensError):
    """The dataset file is missing, unreadable, or not a JSON array of records."""

    status_code = 500


class ValidationError(SalesLensError):
    """A caller supplied an invalid parameter (blank state, bad date, ...)."""

    status_code = 400


class NotFoundError(SalesLensError):
    """A lookup produced no matching entity."""

    status_code = 404
