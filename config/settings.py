"""Application settings and constants"""

from pathlib import Path

BASE_DIR = Path(__file__).parent.parent
OUTPUT_DIR = BASE_DIR / "output"

DEFAULT_CARRIER_NAME = "Unknown"
NOT_AVAILABLE = "N/A"
UNKNOWN_BAND = "Unknown"

# Android reports CellInfo.UNAVAILABLE for fields the modem does not expose
UNAVAILABLE = 2147483647


class NoCellInfoDefaults:
    """'Obviously invalid' values for metrics a live record did not report."""
    RSRP = -999
    RSRQ = -999
    RSSI = -999
    SINR = -999


class WeakSignalDefaults:
    """'Plausible weak signal' values for NO PERMISSION / Searching reports."""
    RSRP = -140
    RSRQ = -20
    RSSI = NoCellInfoDefaults.RSSI
    SINR = -10


class RadioTypeCodes:
    """TelephonyManager.NETWORK_TYPE_* codes."""
    GPRS = 1
    EDGE = 2
    UMTS = 3
    HSDPA = 8
    HSUPA = 9
    HSPA = 10
    LTE = 13
    HSPAP = 15
    NR = 20


class BarThresholds:
    """RSSI (dBm) lower bounds for 5..1 bars."""
    FIVE = -50
    FOUR = -60
    THREE = -70
    TWO = -80
    ONE = -90


class LevelThresholds:
    EXCELLENT = -50
    GOOD = -70
    FAIR = -85
    POOR = -100


class BucketThresholds:
    NO_SERVICE_RSRP = -120
    EXCELLENT = (-90, 10)
    GOOD = (-100, 5)
    FAIR = (-110, 0)


# Public safety coverage (NFPA 1221)
COMPLIANCE_MIN_RSRP = -95
COMPLIANCE_MIN_SINR = 0


class CaptureColumns:
    SNAPSHOT_ID = "snapshot_id"
    CAPTURED_AT = "captured_at"
    PERMISSION = "permission_granted"
    CARRIER = "carrier_name"
    GENERATION = "generation"
    REGISTERED = "registered"
    CELL_ID = "cell_id"
    CHANNEL = "channel_number"
    RSRP = "rsrp"
    RSRQ = "rsrq"
    RSSI = "rssi"
    SINR = "sinr"
    LATITUDE = "latitude"
    LONGITUDE = "longitude"
    ACCURACY = "accuracy"
    ALTITUDE = "altitude"

    REQUIRED = (SNAPSHOT_ID, GENERATION, REGISTERED)


TRUE_VALUES = {"1", "true", "yes", "y", "t"}


# Formatting
RED_FILL = "FFFFC7CE"
DARK_RED_TEXT = "FF9C0006"
GREEN_FILL = "FFC6EFCE"
DARK_GREEN_TEXT = "FF006100"
HEADER_FILL = "47402D"
HEADER_FONT_COLOR = "FFFEFB"
