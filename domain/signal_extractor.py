"""
Domain Layer - Signal Extraction
File: domain/signal_extractor.py

Selects the serving cell from a snapshot of raw cell records and
normalizes it into a SignalReport. Every failure degrades to an
in-band default report:

- permission not granted  -> "NO PERMISSION" with weak-signal defaults
- no registered LTE/NR    -> "Searching" with weak-signal defaults
- metric missing on cell  -> -999 for that metric only
"""

import logging
from typing import Callable, Iterable, Optional

from config.settings import (
    DEFAULT_CARRIER_NAME,
    NOT_AVAILABLE,
    NoCellInfoDefaults,
    WeakSignalDefaults,
)
from domain.band_resolver import BandResolver
from domain.models import (
    Generation,
    Location,
    NetworkType,
    NrSignal,
    LteSignal,
    RawCellRecord,
    SignalReport,
)
from utils.helpers import clean_text, now_millis

log = logging.getLogger(__name__)

_INTERPRETED = (Generation.LTE, Generation.NR)


class SignalExtractor:
    """Builds SignalReports from raw radio snapshots."""

    def __init__(self, clock: Optional[Callable[[], int]] = None):
        self.clock = clock or now_millis

    def extract_signal(
        self,
        permission_granted: bool,
        records: Optional[Iterable[RawCellRecord]],
        carrier_name_hint: Optional[str] = None,
        location_fix: Optional[Location] = None,
    ) -> SignalReport:
        """Produce a report for one snapshot. Never raises."""
        timestamp = self._capture_time()
        carrier_name = self.normalize_carrier(carrier_name_hint)
        location = location_fix if isinstance(location_fix, Location) else Location.zero()

        if not permission_granted:
            log.info("Permission not granted, returning NO PERMISSION report")
            return self._default_report(NetworkType.NO_PERMISSION, carrier_name, location, timestamp)

        try:
            record = self.select_serving_cell(records)
            if record is None:
                log.info("No registered LTE/NR cell found")
                return self._default_report(NetworkType.SEARCHING, carrier_name, location, timestamp)

            if record.generation is Generation.NR:
                report = self._from_nr(record, carrier_name, location, timestamp)
            else:
                report = self._from_lte(record, carrier_name, location, timestamp)
            log.debug("%s signal - RSRP: %s, Band: %s", report.network_type, report.rsrp, report.band)
            return report

        except Exception:
            log.exception("Error extracting signal, returning Searching report")
            return self._default_report(NetworkType.SEARCHING, carrier_name, location, timestamp)

    @staticmethod
    def select_serving_cell(records: Optional[Iterable[RawCellRecord]]) -> Optional[RawCellRecord]:
        """First registered LTE or NR record in input order."""
        if not records:
            return None

        for record in records:
            if not isinstance(record, RawCellRecord):
                log.debug("Skipping non-record entry: %r", record)
                continue
            if record.is_registered and record.generation in _INTERPRETED:
                return record
        return None

    @staticmethod
    def normalize_carrier(carrier_name_hint: Optional[str]) -> str:
        carrier_name = clean_text(carrier_name_hint)
        return carrier_name or DEFAULT_CARRIER_NAME

    # --------------------------
    # Report builders
    # --------------------------
    @staticmethod
    def _from_lte(record: RawCellRecord, carrier_name: str, location: Location, timestamp: int) -> SignalReport:
        signal = record.signal if isinstance(record.signal, LteSignal) else LteSignal()

        return SignalReport(
            carrier_name=carrier_name,
            network_type=NetworkType.LTE.value,
            rsrp=_metric(signal.rsrp, NoCellInfoDefaults.RSRP),
            rsrq=_metric(signal.rsrq, NoCellInfoDefaults.RSRQ),
            rssi=_metric(signal.rssi, NoCellInfoDefaults.RSSI),
            sinr=_metric(signal.rssnr, NoCellInfoDefaults.SINR),
            cell_id=_cell_id(record.cell_id),
            band=BandResolver.resolve_band(Generation.LTE, record.channel_number),
            channel_number=record.channel_number or 0,
            timestamp_millis=timestamp,
            location=location,
            generation=Generation.LTE,
        )

    @staticmethod
    def _from_nr(record: RawCellRecord, carrier_name: str, location: Location, timestamp: int) -> SignalReport:
        signal = record.signal if isinstance(record.signal, NrSignal) else NrSignal()
        rsrp = _metric(signal.ss_rsrp, NoCellInfoDefaults.RSRP)

        return SignalReport(
            carrier_name=carrier_name,
            network_type=NetworkType.NR.value,
            rsrp=rsrp,
            rsrq=_metric(signal.ss_rsrq, NoCellInfoDefaults.RSRQ),
            # NR has no separate RSSI, mirror SS-RSRP
            rssi=rsrp,
            sinr=_metric(signal.ss_sinr, NoCellInfoDefaults.SINR),
            cell_id=_cell_id(record.cell_id),
            band=BandResolver.resolve_band(Generation.NR, record.channel_number),
            channel_number=record.channel_number or 0,
            timestamp_millis=timestamp,
            location=location,
            generation=Generation.NR,
        )

    @staticmethod
    def _default_report(network_type: NetworkType, carrier_name: str, location: Location,
                        timestamp: int) -> SignalReport:
        return SignalReport(
            carrier_name=carrier_name,
            network_type=network_type.value,
            rsrp=WeakSignalDefaults.RSRP,
            rsrq=WeakSignalDefaults.RSRQ,
            rssi=WeakSignalDefaults.RSSI,
            sinr=WeakSignalDefaults.SINR,
            cell_id=NOT_AVAILABLE,
            band=NOT_AVAILABLE,
            channel_number=0,
            timestamp_millis=timestamp,
            location=location,
        )

    def _capture_time(self) -> int:
        try:
            return int(self.clock())
        except Exception:
            log.exception("Clock failed, falling back to wall clock")
            return now_millis()


def _metric(value: Optional[int], default: int) -> int:
    return default if value is None else value


def _cell_id(cell_id: Optional[int]) -> str:
    return NOT_AVAILABLE if cell_id is None else str(cell_id)


def extract_signal(
    permission_granted: bool,
    records: Optional[Iterable[RawCellRecord]],
    carrier_name_hint: Optional[str] = None,
    location_fix: Optional[Location] = None,
    clock: Optional[Callable[[], int]] = None,
) -> SignalReport:
    return SignalExtractor(clock).extract_signal(
        permission_granted, records, carrier_name_hint, location_fix
    )
