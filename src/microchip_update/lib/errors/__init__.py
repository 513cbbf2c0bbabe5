"""Error report library public API."""

from microchip_update.lib.errors.log import ERROR_HEADERS, ErrorEntry, ErrorLog, open_error_log

__all__ = [
    "ERROR_HEADERS",
    "ErrorEntry",
    "ErrorLog",
    "open_error_log",
]
