"""Registry library public API.

Provides Dog Information Report parsing, field validation, dog records and
the per-snapshot dog registry.
"""

from microchip_update.lib.registry.chip_report import CHIP_REPORT_HEADERS, apply_chip_report
from microchip_update.lib.registry.dog import DogRecord, InvalidDogNumberError
from microchip_update.lib.registry.parser import (
    NEW_DIR_HEADERS,
    OLD_DIR_HEADERS,
    ReportFormatError,
    parse_dir,
)
from microchip_update.lib.registry.registry import DogRegistry, check_new_microchips

__all__ = [
    "CHIP_REPORT_HEADERS",
    "NEW_DIR_HEADERS",
    "OLD_DIR_HEADERS",
    "DogRecord",
    "DogRegistry",
    "InvalidDogNumberError",
    "ReportFormatError",
    "apply_chip_report",
    "check_new_microchips",
    "parse_dir",
]
