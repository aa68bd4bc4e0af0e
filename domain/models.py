"""
Domain Layer - Core Signal Models
File: domain/models.py
"""

from dataclasses import dataclass, field
from typing import Optional, Union
from enum import Enum

from config.settings import RadioTypeCodes
from utils.helpers import to_int_or_none, to_bool


class NetworkType(Enum):
    """Network type labels surfaced to the UI."""
    NR = "5G"
    LTE = "LTE"
    UMTS = "3G"
    GSM = "2G"
    UNKNOWN = "Unknown"
    NO_PERMISSION = "NO PERMISSION"
    SEARCHING = "Searching"


class Generation(Enum):
    """Radio generation of a raw cell record."""
    LTE = "LTE"
    NR = "NR"
    UMTS = "UMTS"
    GSM = "GSM"
    UNKNOWN = "Unknown"

    @property
    def network_type(self) -> NetworkType:
        return _NETWORK_TYPES[self]

    @classmethod
    def parse(cls, value) -> "Generation":
        """Parse an enum member, a name/label or a NETWORK_TYPE_* code."""
        if isinstance(value, Generation):
            return value
        if value is None:
            return cls.UNKNOWN

        code = to_int_or_none(value)
        if code is not None:
            return _RADIO_CODES.get(code, cls.UNKNOWN)

        return _ALIASES.get(str(value).strip().upper(), cls.UNKNOWN)


_NETWORK_TYPES = {
    Generation.LTE: NetworkType.LTE,
    Generation.NR: NetworkType.NR,
    Generation.UMTS: NetworkType.UMTS,
    Generation.GSM: NetworkType.GSM,
    Generation.UNKNOWN: NetworkType.UNKNOWN,
}

_RADIO_CODES = {
    RadioTypeCodes.NR: Generation.NR,
    RadioTypeCodes.LTE: Generation.LTE,
    RadioTypeCodes.HSPAP: Generation.UMTS,
    RadioTypeCodes.HSPA: Generation.UMTS,
    RadioTypeCodes.HSUPA: Generation.UMTS,
    RadioTypeCodes.HSDPA: Generation.UMTS,
    RadioTypeCodes.UMTS: Generation.UMTS,
    RadioTypeCodes.EDGE: Generation.GSM,
    RadioTypeCodes.GPRS: Generation.GSM,
}

_ALIASES = {
    "LTE": Generation.LTE,
    "4G": Generation.LTE,
    "NR": Generation.NR,
    "5G": Generation.NR,
    "UMTS": Generation.UMTS,
    "WCDMA": Generation.UMTS,
    "3G": Generation.UMTS,
    "GSM": Generation.GSM,
    "2G": Generation.GSM,
}


@dataclass(frozen=True)
class LteSignal:
    """CellSignalStrengthLte fields."""
    rsrp: Optional[int] = None
    rsrq: Optional[int] = None
    rssi: Optional[int] = None
    rssnr: Optional[int] = None


@dataclass(frozen=True)
class NrSignal:
    """CellSignalStrengthNr fields. NR exposes no independent RSSI."""
    ss_rsrp: Optional[int] = None
    ss_rsrq: Optional[int] = None
    ss_sinr: Optional[int] = None
    csi_rsrp: Optional[int] = None


@dataclass(frozen=True)
class RawCellRecord:
    """One measurement reported by the radio stack for one cell."""
    generation: Generation
    is_registered: bool
    cell_id: Optional[int] = None
    channel_number: Optional[int] = None
    signal: Union[LteSignal, NrSignal, None] = None

    @classmethod
    def lte(cls, is_registered=True, rsrp=None, rsrq=None, rssi=None, rssnr=None,
            ci=None, earfcn=None) -> "RawCellRecord":
        return cls(
            generation=Generation.LTE,
            is_registered=bool(is_registered),
            cell_id=to_int_or_none(ci),
            channel_number=to_int_or_none(earfcn),
            signal=LteSignal(
                rsrp=to_int_or_none(rsrp),
                rsrq=to_int_or_none(rsrq),
                rssi=to_int_or_none(rssi),
                rssnr=to_int_or_none(rssnr),
            ),
        )

    @classmethod
    def nr(cls, is_registered=True, ss_rsrp=None, ss_rsrq=None, ss_sinr=None,
           nci=None, nrarfcn=None, csi_rsrp=None) -> "RawCellRecord":
        return cls(
            generation=Generation.NR,
            is_registered=bool(is_registered),
            cell_id=to_int_or_none(nci),
            channel_number=to_int_or_none(nrarfcn),
            signal=NrSignal(
                ss_rsrp=to_int_or_none(ss_rsrp),
                ss_rsrq=to_int_or_none(ss_rsrq),
                ss_sinr=to_int_or_none(ss_sinr),
                csi_rsrp=to_int_or_none(csi_rsrp),
            ),
        )

    @classmethod
    def from_mapping(cls, data: dict) -> "RawCellRecord":
        """
        Build a record from a host dictionary.

        Accepts snake_case or camelCase keys. For NR the generic
        rsrp/rsrq/sinr keys are read as the SS metrics.
        """
        def pick(*keys):
            for key in keys:
                if key in data and data[key] not in (None, ""):
                    return data[key]
            return None

        generation = Generation.parse(pick("generation", "type", "networkType"))
        registered = to_bool(pick("is_registered", "isRegistered", "registered"))

        if generation is Generation.LTE:
            return cls.lte(
                is_registered=registered,
                rsrp=pick("rsrp"),
                rsrq=pick("rsrq"),
                rssi=pick("rssi"),
                rssnr=pick("rssnr", "sinr"),
                ci=pick("ci", "cell_id", "cellId"),
                earfcn=pick("earfcn", "channel_number", "channelNumber"),
            )
        if generation is Generation.NR:
            return cls.nr(
                is_registered=registered,
                ss_rsrp=pick("ss_rsrp", "ssRsrp", "rsrp"),
                ss_rsrq=pick("ss_rsrq", "ssRsrq", "rsrq"),
                ss_sinr=pick("ss_sinr", "ssSinr", "sinr"),
                nci=pick("nci", "cell_id", "cellId"),
                nrarfcn=pick("nrarfcn", "channel_number", "channelNumber"),
                csi_rsrp=pick("csi_rsrp", "csiRsrp"),
            )

        return cls(
            generation=generation,
            is_registered=registered,
            cell_id=to_int_or_none(pick("cell_id", "cellId", "cid")),
            channel_number=to_int_or_none(pick("channel_number", "channelNumber")),
        )


@dataclass(frozen=True)
class Location:
    """Last known location fix."""
    latitude: float = 0.0
    longitude: float = 0.0
    accuracy: float = 0.0
    altitude: float = 0.0

    @classmethod
    def zero(cls) -> "Location":
        return cls()


@dataclass(frozen=True)
class SignalReport:
    """Canonical normalized signal report."""
    carrier_name: str
    network_type: str
    rsrp: int
    rsrq: int
    rssi: int
    sinr: int
    cell_id: str
    band: str
    channel_number: int
    timestamp_millis: int
    location: Location = field(default_factory=Location.zero)
    generation: Generation = Generation.UNKNOWN

    @property
    def is_live(self) -> bool:
        """True when the metrics come from a registered cell."""
        return self.network_type in (NetworkType.NR.value, NetworkType.LTE.value)


@dataclass(frozen=True)
class BandRange:
    """One row of a channel-number -> band table, bounds inclusive."""
    generation: Generation
    low_channel: int
    high_channel: int
    band_id: int

    def contains(self, channel_number: int) -> bool:
        return self.low_channel <= channel_number <= self.high_channel

    @property
    def label(self) -> str:
        prefix = "n" if self.generation is Generation.NR else "B"
        return f"{prefix}{self.band_id}"


@dataclass(frozen=True)
class CaptureSnapshot:
    """One radio snapshot from a drive test / survey capture."""
    snapshot_id: str
    permission_granted: bool
    carrier_name: str
    records: tuple[RawCellRecord, ...] = ()
    location: Optional[Location] = None
    captured_at: Optional[int] = None
