"""
Export functionality for business-day reports.
"""

import csv
import json
from datetime import datetime
from pathlib import Path
from typing import List, Optional, Tuple

from date_calculator.data.schemas import BusinessDaysReport, Holiday


class ResultExporter:
    """Exports business-day reports to various formats."""

    def __init__(
        self,
        output_directory: str = "results",
        timestamp_format: str = "%Y%m%d_%H%M%S",
    ):
        """
        Initialize the result exporter.

        Args:
            output_directory: Directory for output files.
            timestamp_format: Format string for timestamps in filenames.
        """
        self.output_directory = output_directory
        self.timestamp_format = timestamp_format

    def _ensure_output_dir(self) -> Path:
        """Ensure output directory exists and return path."""
        output_path = Path(self.output_directory)
        output_path.mkdir(parents=True, exist_ok=True)
        return output_path

    def _generate_filename(self, prefix: str, extension: str) -> str:
        """Generate a filename with timestamp."""
        timestamp = datetime.now().strftime(self.timestamp_format)
        return f"{prefix}_{timestamp}.{extension}"

    def _target_path(self, output_path: Optional[str], prefix: str, extension: str) -> Path:
        if output_path:
            file_path = Path(output_path)
            file_path.parent.mkdir(parents=True, exist_ok=True)
            return file_path
        return self._ensure_output_dir() / self._generate_filename(prefix, extension)

    def export_json(self, report: BusinessDaysReport, output_path: Optional[str] = None) -> str:
        """
        Export a report to a JSON file.

        Args:
            report: BusinessDaysReport to export.
            output_path: Optional specific output path.

        Returns:
            Path to the exported file.
        """
        file_path = self._target_path(output_path, "business_days", "json")

        with open(file_path, "w", encoding="utf-8") as f:
            json.dump(self._report_to_dict(report), f, indent=2, ensure_ascii=False)

        return str(file_path)

    def export_csv(self, report: BusinessDaysReport, output_path: Optional[str] = None) -> str:
        """
        Export a report to a single-row CSV file.

        Args:
            report: BusinessDaysReport to export.
            output_path: Optional specific output path.

        Returns:
            Path to the exported file.
        """
        file_path = self._target_path(output_path, "business_days", "csv")

        with open(file_path, "w", newline="", encoding="utf-8") as f:
            writer = csv.writer(f)
            writer.writerow([
                "Start Date",
                "End Date",
                "Calendar Days",
                "Weekend Days",
                "Holidays Count",
                "Business Days",
                "Holidays",
            ])
            writer.writerow([
                report.start_date.isoformat(),
                report.end_date.isoformat(),
                report.calendar_days,
                report.weekend_days,
                report.holidays_count,
                report.business_days,
                ";".join(d.isoformat() for d in report.holidays),
            ])

        return str(file_path)

    def export_holidays_csv(self, holidays: List[Holiday], output_path: Optional[str] = None) -> str:
        """
        Export a holiday list to a CSV file.

        Args:
            holidays: List of holidays to export.
            output_path: Optional specific output path.

        Returns:
            Path to the exported file.
        """
        file_path = self._target_path(output_path, "holidays", "csv")

        with open(file_path, "w", newline="", encoding="utf-8") as f:
            writer = csv.writer(f)
            writer.writerow(["Date", "Name", "Country", "Subdivision"])
            for holiday in holidays:
                writer.writerow([
                    holiday.holiday_date.isoformat(),
                    holiday.name,
                    holiday.country or "",
                    holiday.subdivision or "",
                ])

        return str(file_path)

    def export_both(self, report: BusinessDaysReport) -> Tuple[str, str]:
        """Export a report to both JSON and CSV; returns (json_path, csv_path)."""
        return self.export_json(report), self.export_csv(report)

    def _report_to_dict(self, report: BusinessDaysReport) -> dict:
        return {
            "start_date": report.start_date.isoformat(),
            "end_date": report.end_date.isoformat(),
            "calculation": {
                "calendar_days": report.calendar_days,
                "weekend_days": report.weekend_days,
                "weekend_detail": report.weekend_detail,
                "holidays_count": report.holidays_count,
                "business_days": report.business_days,
            },
            "holidays": [d.isoformat() for d in report.holidays],
            "metadata": {
                "calculation_timestamp": report.calculation_timestamp.isoformat(),
            },
        }
