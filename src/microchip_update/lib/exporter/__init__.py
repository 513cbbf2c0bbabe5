"""Exporter library: CSV output for the update and error reports."""

from microchip_update.lib.exporter.csv_writer import write_csv

__all__ = ["write_csv"]
