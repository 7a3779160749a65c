from .sheets_client import SheetsClient
from .result_writer import SheetsRepository
from .workbook_fetcher import build_export_url, fetch_workbook
from .exceptions import (
    AuthenticationError,
    QuotaExceededError,
    SheetNotFoundError,
    SheetsError,
    WorkbookFetchError,
)

__all__ = [
    "SheetsClient",
    "SheetsRepository",
    "build_export_url",
    "fetch_workbook",
    "SheetsError",
    "SheetNotFoundError",
    "AuthenticationError",
    "QuotaExceededError",
    "WorkbookFetchError",
]
