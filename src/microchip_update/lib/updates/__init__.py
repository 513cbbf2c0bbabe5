"""Found.org update library public API."""

from microchip_update.lib.updates.builder import (
    FOUND_HEADERS,
    UpdateCollection,
    UpdateRecord,
    build_update,
    build_updates,
)

__all__ = [
    "FOUND_HEADERS",
    "UpdateCollection",
    "UpdateRecord",
    "build_update",
    "build_updates",
]
