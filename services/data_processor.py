"""
Data Processor Service
Turn extracted SignalReports into survey tables and per-band summaries
"""
from typing import Optional, Sequence

import numpy as np
import pandas as pd

from config.settings import NoCellInfoDefaults
from domain.models import NetworkType, SignalReport
from domain.signal_quality import classify_report, quality_bucket
from utils.helpers import format_timestamp


REPORT_COLUMNS = [
    "SNAPSHOT_ID", "TIME", "TIMESTAMP", "CARRIER", "NETWORK_TYPE", "CELL_ID",
    "BAND", "CHANNEL", "RSRP", "RSRQ", "RSSI", "SINR", "LATITUDE", "LONGITUDE",
    "BARS", "LEVEL", "BUCKET", "COMPLIANT", "LIVE",
]

# Placeholders the extractor writes for metrics a live cell did not report
METRIC_PLACEHOLDERS = {
    "RSRP": NoCellInfoDefaults.RSRP,
    "RSRQ": NoCellInfoDefaults.RSRQ,
    "RSSI": NoCellInfoDefaults.RSSI,
    "SINR": NoCellInfoDefaults.SINR,
}


def _missing_metric(report: SignalReport) -> bool:
    return report.rsrp == NoCellInfoDefaults.RSRP or report.sinr == NoCellInfoDefaults.SINR


def _optional(value) -> Optional[float]:
    if value is None or pd.isna(value):
        return None
    return float(value)


class SurveyDataProcessor:
    """Build pandas tables from survey reports"""

    @staticmethod
    def reports_to_frame(reports: Sequence[SignalReport],
                         snapshot_ids: Optional[Sequence[str]] = None) -> pd.DataFrame:
        """
        One row per report, with quality classification columns.

        Placeholder metrics become NaN so aggregations skip them, and
        COMPLIANT is left empty for a live report missing RSRP or SINR.
        """
        if snapshot_ids is None:
            snapshot_ids = [str(i + 1) for i in range(len(reports))]

        rows = []
        for snapshot_id, report in zip(snapshot_ids, reports):
            quality = classify_report(report)
            compliant = None if report.is_live and _missing_metric(report) else quality.compliant
            rows.append({
                "SNAPSHOT_ID": snapshot_id,
                "TIME": format_timestamp(report.timestamp_millis),
                "TIMESTAMP": report.timestamp_millis,
                "CARRIER": report.carrier_name,
                "NETWORK_TYPE": report.network_type,
                "CELL_ID": report.cell_id,
                "BAND": report.band,
                "CHANNEL": report.channel_number,
                "RSRP": report.rsrp,
                "RSRQ": report.rsrq,
                "RSSI": report.rssi,
                "SINR": report.sinr,
                "LATITUDE": report.location.latitude,
                "LONGITUDE": report.location.longitude,
                "BARS": quality.bars,
                "LEVEL": quality.level,
                "BUCKET": quality.bucket.value,
                "COMPLIANT": compliant,
                "LIVE": report.is_live,
            })

        df = pd.DataFrame(rows, columns=REPORT_COLUMNS)
        for column, placeholder in METRIC_PLACEHOLDERS.items():
            df[column] = df[column].mask(df[column] == placeholder).astype(float)
        df["COMPLIANT"] = df["COMPLIANT"].astype("boolean")
        return df

    @staticmethod
    def summarize_by_band(df: pd.DataFrame) -> pd.DataFrame:
        """Per-band statistics over live samples only"""
        columns = ["BAND", "NETWORK_TYPE", "SAMPLES", "AVG_RSRP", "MIN_RSRP",
                   "MAX_RSRP", "AVG_SINR", "COMPLIANT_PCT", "BUCKET"]

        live = df[df["LIVE"]] if len(df) else df
        if len(live) == 0:
            return pd.DataFrame(columns=columns)

        grouped = live.groupby(["BAND", "NETWORK_TYPE"], sort=True)
        summary = grouped.agg(
            SAMPLES=("RSRP", "size"),
            AVG_RSRP=("RSRP", "mean"),
            MIN_RSRP=("RSRP", "min"),
            MAX_RSRP=("RSRP", "max"),
            AVG_SINR=("SINR", "mean"),
            COMPLIANT_PCT=("COMPLIANT", "mean"),
        ).reset_index()

        summary["COMPLIANT_PCT"] = summary["COMPLIANT_PCT"].to_numpy(dtype=float, na_value=np.nan) * 100
        summary["AVG_RSRP"] = summary["AVG_RSRP"].round(2)
        summary["AVG_SINR"] = summary["AVG_SINR"].round(2)
        summary["BUCKET"] = [
            quality_bucket(_optional(rsrp), _optional(sinr), samples).value
            for rsrp, sinr, samples in zip(summary["AVG_RSRP"], summary["AVG_SINR"], summary["SAMPLES"])
        ]
        summary = summary.sort_values("SAMPLES", ascending=False, kind="stable").reset_index(drop=True)
        return summary[columns]

    @staticmethod
    def overall_summary(df: pd.DataFrame) -> dict:
        """Totals across the whole survey"""
        total = len(df)
        live = df[df["LIVE"]] if total else df
        live_count = len(live)

        avg_rsrp = None
        avg_sinr = None
        compliant_pct = 0.0
        if live_count:
            avg_rsrp = _optional(np.round(live["RSRP"].mean(), 2))
            avg_sinr = _optional(np.round(live["SINR"].mean(), 2))
            compliant = live["COMPLIANT"].mean()
            if not pd.isna(compliant):
                compliant_pct = float(compliant * 100)

        network_types = df["NETWORK_TYPE"].value_counts() if total else pd.Series(dtype=int)

        return {
            "total_samples": total,
            "live_samples": live_count,
            "searching_samples": int(network_types.get(NetworkType.SEARCHING.value, 0)),
            "no_permission_samples": int(network_types.get(NetworkType.NO_PERMISSION.value, 0)),
            "avg_rsrp": avg_rsrp,
            "avg_sinr": avg_sinr,
            "compliant_pct": compliant_pct,
            "bucket": quality_bucket(avg_rsrp, avg_sinr, live_count).value,
        }
