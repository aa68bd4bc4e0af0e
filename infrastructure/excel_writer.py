"""
Infrastructure Layer - Survey Excel Writer
File: infrastructure/excel_writer.py

Sheets:
- Summary  : overall totals, PASS/FAIL against the coverage minimums, chart
- By Band  : per-band statistics
- Samples  : one row per snapshot report
"""

from io import BytesIO
from pathlib import Path
from typing import Optional

import pandas as pd
from openpyxl import Workbook
from openpyxl.drawing.image import Image as XLImage
from openpyxl.styles import PatternFill, Font, Alignment, Border, Side
from openpyxl.utils import get_column_letter

from config.settings import (
    RED_FILL,
    DARK_RED_TEXT,
    GREEN_FILL,
    DARK_GREEN_TEXT,
    HEADER_FILL,
    HEADER_FONT_COLOR,
    NOT_AVAILABLE,
)


class SurveyExcelWriter:
    """Writes survey reports to an Excel workbook."""

    SUMMARY_ROWS = [
        ("Total samples", "total_samples"),
        ("Live samples", "live_samples"),
        ("Searching samples", "searching_samples"),
        ("No permission samples", "no_permission_samples"),
        ("Average RSRP (dBm)", "avg_rsrp"),
        ("Average SINR (dB)", "avg_sinr"),
        ("Compliant samples (%)", "compliant_pct"),
        ("Quality", "bucket"),
    ]

    def __init__(self):
        self.pass_fill = PatternFill(start_color=GREEN_FILL, end_color=GREEN_FILL, fill_type="solid")
        self.fail_fill = PatternFill(start_color=RED_FILL, end_color=RED_FILL, fill_type="solid")
        self.pass_font = Font(color=DARK_GREEN_TEXT, bold=True)
        self.fail_font = Font(color=DARK_RED_TEXT, bold=True)

        self.header_fill = PatternFill("solid", fgColor=HEADER_FILL)
        self.header_font = Font(bold=True, color=HEADER_FONT_COLOR)

        self.thin_border = Border(
            left=Side(style="thin"),
            right=Side(style="thin"),
            top=Side(style="thin"),
            bottom=Side(style="thin"),
        )
        self.center_align = Alignment(horizontal="center", vertical="center")

    def write_report(
        self,
        samples: pd.DataFrame,
        band_summary: pd.DataFrame,
        overall: dict,
        output_path: Path,
        chart: Optional[BytesIO] = None,
        title: str = "Signal Survey",
    ) -> Path:
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)

        wb = Workbook()
        ws = wb.active
        ws.title = "Summary"
        self._write_summary(ws, overall, title, chart)

        self._write_frame(wb.create_sheet("By Band"), band_summary)
        ws_samples = wb.create_sheet("Samples")
        self._write_frame(ws_samples, samples)
        self._mark_compliance(ws_samples, samples)

        wb.save(output_path)
        return output_path

    def _write_summary(self, ws, overall: dict, title: str, chart: Optional[BytesIO]) -> None:
        title_cell = ws.cell(row=1, column=1, value=title)
        title_cell.font = Font(bold=True, size=16)

        for idx, (label, key) in enumerate(self.SUMMARY_ROWS, start=3):
            label_cell = ws.cell(row=idx, column=1, value=label)
            label_cell.border = self.thin_border

            value = overall.get(key)
            value_cell = ws.cell(row=idx, column=2, value="N/A" if value is None else value)
            value_cell.border = self.thin_border
            value_cell.alignment = self.center_align
            if isinstance(value, float):
                value_cell.number_format = "0.00"

        status_row = 3 + len(self.SUMMARY_ROWS)
        ws.cell(row=status_row, column=1, value="Coverage status").border = self.thin_border
        self._format_pass_fail(ws.cell(row=status_row, column=2), self._survey_passes(overall))

        ws.column_dimensions["A"].width = 28
        ws.column_dimensions["B"].width = 18

        if chart is not None:
            img = XLImage(BytesIO(chart.getvalue()))
            ws.add_image(img, "D3")

    def _write_frame(self, ws, df: pd.DataFrame) -> None:
        for col_idx, column in enumerate(df.columns, start=1):
            cell = ws.cell(row=1, column=col_idx, value=str(column))
            cell.fill = self.header_fill
            cell.font = self.header_font
            cell.border = self.thin_border
            cell.alignment = self.center_align
            ws.column_dimensions[get_column_letter(col_idx)].width = max(12, len(str(column)) + 4)

        for row_idx, values in enumerate(df.itertuples(index=False), start=2):
            for col_idx, value in enumerate(values, start=1):
                cell = ws.cell(row=row_idx, column=col_idx, value=self._cell_value(value))
                cell.border = self.thin_border

        ws.freeze_panes = "A2"

    def _mark_compliance(self, ws, df: pd.DataFrame) -> None:
        if "COMPLIANT" not in df.columns:
            return
        col_idx = list(df.columns).index("COMPLIANT") + 1
        for row_idx, compliant in enumerate(df["COMPLIANT"], start=2):
            cell = ws.cell(row=row_idx, column=col_idx)
            if pd.isna(compliant):
                cell.value = NOT_AVAILABLE
                cell.alignment = self.center_align
                continue
            self._format_pass_fail(cell, bool(compliant))

    def _format_pass_fail(self, cell, is_pass: bool) -> None:
        cell.value = "PASS" if is_pass else "FAIL"
        cell.fill = self.pass_fill if is_pass else self.fail_fill
        cell.font = self.pass_font if is_pass else self.fail_font
        cell.border = self.thin_border
        cell.alignment = self.center_align

    @staticmethod
    def _survey_passes(overall: dict) -> bool:
        # 95% of live samples must meet the coverage minimums
        return overall.get("live_samples", 0) > 0 and overall.get("compliant_pct", 0.0) >= 95.0

    @staticmethod
    def _cell_value(value):
        if value is None:
            return None
        if pd.api.types.is_scalar(value) and pd.isna(value):
            return None
        # openpyxl rejects numpy scalars
        if hasattr(value, "item"):
            return value.item()
        return value
