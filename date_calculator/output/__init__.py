"""
Output formatting and export functionality.
"""

from date_calculator.output.formatter import ConsoleFormatter
from date_calculator.output.exporter import ResultExporter

__all__ = ["ConsoleFormatter", "ResultExporter"]
