"""
Domain Layer - Signal Quality Classification
File: domain/signal_quality.py
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from config.settings import (
    BarThresholds,
    LevelThresholds,
    BucketThresholds,
    COMPLIANCE_MIN_RSRP,
    COMPLIANCE_MIN_SINR,
)
from domain.models import SignalReport


class QualityBucket(Enum):
    EXCELLENT = "Excellent"
    GOOD = "Good"
    FAIR = "Fair"
    POOR = "Poor"
    NO_SERVICE = "NoService"


@dataclass(frozen=True)
class SignalQuality:
    """UI-facing quality summary for one report."""
    bars: int
    level: str
    bucket: QualityBucket
    compliant: bool
    description: str


def rssi_to_bars(rssi: Optional[int]) -> int:
    """Convert RSSI to signal bars (0-5)"""
    if rssi is None:
        return 0
    if rssi >= BarThresholds.FIVE:
        return 5
    if rssi >= BarThresholds.FOUR:
        return 4
    if rssi >= BarThresholds.THREE:
        return 3
    if rssi >= BarThresholds.TWO:
        return 2
    if rssi >= BarThresholds.ONE:
        return 1
    return 0


def rssi_to_level(rssi: Optional[int]) -> str:
    if rssi is None:
        return "no-signal"
    if rssi >= LevelThresholds.EXCELLENT:
        return "excellent"
    if rssi >= LevelThresholds.GOOD:
        return "good"
    if rssi >= LevelThresholds.FAIR:
        return "fair"
    if rssi >= LevelThresholds.POOR:
        return "poor"
    return "no-signal"


def quality_bucket(avg_rsrp: Optional[float], avg_sinr: Optional[float],
                   sample_count: Optional[int]) -> QualityBucket:
    """Bucket averaged RSRP/SINR over a set of samples."""
    if not sample_count or sample_count <= 0 or avg_rsrp is None or avg_sinr is None:
        return QualityBucket.NO_SERVICE

    if avg_rsrp <= BucketThresholds.NO_SERVICE_RSRP:
        return QualityBucket.NO_SERVICE

    for bucket, (min_rsrp, min_sinr) in (
        (QualityBucket.EXCELLENT, BucketThresholds.EXCELLENT),
        (QualityBucket.GOOD, BucketThresholds.GOOD),
        (QualityBucket.FAIR, BucketThresholds.FAIR),
    ):
        if avg_rsrp >= min_rsrp and avg_sinr >= min_sinr:
            return bucket

    return QualityBucket.POOR


def compliance_status(rsrp: float, sinr: float) -> tuple[bool, str]:
    """Check RSRP/SINR against the public safety coverage minimums."""
    rsrp_passes = rsrp >= COMPLIANCE_MIN_RSRP
    sinr_passes = sinr >= COMPLIANCE_MIN_SINR

    if rsrp_passes and sinr_passes:
        return True, "Meets NFPA 1221 requirements"

    issues = []
    if not rsrp_passes:
        issues.append(f"RSRP {rsrp:.1f} dBm (needs >= {COMPLIANCE_MIN_RSRP})")
    if not sinr_passes:
        issues.append(f"SINR {sinr:.1f} dB (needs >= {COMPLIANCE_MIN_SINR})")

    return False, f"Fails: {', '.join(issues)}"


def describe_signal(bars: int, rssi: Optional[int]) -> str:
    if rssi is None:
        return "No signal detected"

    descriptions = {
        5: "Excellent ({} dBm) - Strong, stable signal",
        4: "Very Good ({} dBm) - Reliable signal",
        3: "Good ({} dBm) - Acceptable signal",
        2: "Fair ({} dBm) - May experience issues",
        1: "Poor ({} dBm) - Weak signal, likely issues",
    }
    template = descriptions.get(bars, "No Signal ({} dBm) - Connection unstable")
    return template.format(rssi)


def classify_report(report: SignalReport) -> SignalQuality:
    """
    Classify a report. Default reports (NO PERMISSION / Searching) carry
    placeholder metrics and always classify as no service.
    """
    if not report.is_live:
        return SignalQuality(
            bars=0,
            level="no-signal",
            bucket=QualityBucket.NO_SERVICE,
            compliant=False,
            description=f"No signal detected ({report.network_type})",
        )

    bars = rssi_to_bars(report.rssi)
    compliant, _ = compliance_status(report.rsrp, report.sinr)

    return SignalQuality(
        bars=bars,
        level=rssi_to_level(report.rssi),
        bucket=quality_bucket(report.rsrp, report.sinr, 1),
        compliant=compliant,
        description=describe_signal(bars, report.rssi),
    )
