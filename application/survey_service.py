"""
Application Layer - Survey Processing Use Case
File: application/survey_service.py

Replays every snapshot of a capture through the SignalExtractor, with the
clock pinned to the snapshot's capture time, then builds tables, a chart
and the Excel workbook.
"""

import logging
from pathlib import Path
from typing import Callable, Optional

from domain.models import CaptureSnapshot, SignalReport
from domain.signal_extractor import SignalExtractor
from infrastructure.csv_parser import CaptureParser
from infrastructure.excel_writer import SurveyExcelWriter
from services.chart_generator import ChartGenerator
from services.data_processor import SurveyDataProcessor
from utils.helpers import now_millis

log = logging.getLogger(__name__)


class SurveyService:
    """Orchestrates capture parsing, signal extraction and export."""

    def __init__(self):
        self.capture_parser = CaptureParser()
        self.processor = SurveyDataProcessor()
        self.excel_writer = SurveyExcelWriter()
        self.chart_generator: Optional[ChartGenerator] = None

    def extract_snapshot(self, snapshot: CaptureSnapshot) -> SignalReport:
        captured_at = snapshot.captured_at
        clock = (lambda: captured_at) if captured_at is not None else now_millis
        extractor = SignalExtractor(clock=clock)
        return extractor.extract_signal(
            snapshot.permission_granted,
            snapshot.records,
            snapshot.carrier_name,
            snapshot.location,
        )

    def process_capture(
        self,
        capture_path: Path,
        output_path: Path,
        progress_callback: Callable[[str, int], None] = None,
        with_chart: bool = True,
    ) -> dict:
        """
        Process one capture CSV into an Excel survey report.
        Returns the overall summary.
        """
        capture_path = Path(capture_path)
        try:
            self._update_progress(progress_callback, f"Parsing capture: {capture_path.name}...", 5)
            snapshots = self.capture_parser.parse_capture_csv(capture_path)
            if not snapshots:
                raise ValueError(f"No snapshots found in {capture_path.name}")
            self.log_message(f"✓ Parsed {len(snapshots)} snapshots from {capture_path.name}", progress_callback)

            self._update_progress(progress_callback, "Extracting signal reports...", 30)
            reports = [self.extract_snapshot(s) for s in snapshots]

            self._update_progress(progress_callback, "Summarizing survey...", 60)
            samples = self.processor.reports_to_frame(reports, [s.snapshot_id for s in snapshots])
            band_summary = self.processor.summarize_by_band(samples)
            overall = self.processor.overall_summary(samples)

            chart = None
            if with_chart:
                self._update_progress(progress_callback, "Generating chart...", 75)
                if self.chart_generator is None:
                    self.chart_generator = ChartGenerator()
                chart = self.chart_generator.generate_signal_chart(samples, title=f"Signal Survey - {capture_path.stem}")

            self._update_progress(progress_callback, "Writing Excel report...", 90)
            self.excel_writer.write_report(
                samples, band_summary, overall, Path(output_path), chart=chart,
                title=f"Signal Survey - {capture_path.stem}",
            )
            self.log_message(f"✓ Report saved: {Path(output_path).name}", progress_callback)

            self._update_progress(progress_callback, "Survey processing complete!", 100)
            return overall

        except Exception as e:
            self._update_progress(progress_callback, f"Error: {str(e)}", 0)
            raise

    @staticmethod
    def _update_progress(
        callback: Optional[Callable[[str, int], None]],
        message: str,
        percentage: int
    ) -> None:
        """Update progress if callback is provided."""
        log.debug(message)
        if callback:
            callback(message, percentage)

    @staticmethod
    def log_message(
        message: str,
        callback: Optional[Callable[[str, int], None]] = None
    ) -> None:
        """Log a message without changing progress percentage."""
        log.info(message)
        if callback:
            print(message)
