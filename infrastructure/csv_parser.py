"""
Infrastructure Layer - Capture CSV Parsing
File: infrastructure/csv_parser.py

Behavior:
- One CSV row per raw cell record; rows sharing snapshot_id form one snapshot.
- Snapshots keep first-seen order; records keep row order (the serving-cell
  tie-break depends on it).
- Snapshot-level fields (permission, carrier, location, captured_at) are
  taken from the first row of the snapshot.
- A row with an empty generation marks a snapshot with no cell records.
- Rows that cannot be parsed are logged and SKIPPED.
"""

import csv
import json
import logging
from pathlib import Path
from typing import Optional

from config.settings import CaptureColumns as Col
from domain.models import CaptureSnapshot, Generation, Location, RawCellRecord
from utils.helpers import clean_text, to_bool, to_epoch_millis, to_float_or_none

log = logging.getLogger(__name__)


class CaptureParser:
    """Parses survey capture CSV files into CaptureSnapshots."""

    def parse_capture_csv(self, csv_path: Path) -> list[CaptureSnapshot]:
        csv_path = Path(csv_path)
        if not csv_path.exists():
            raise FileNotFoundError(f"Capture file not found: {csv_path}")

        grouped: dict[str, dict] = {}
        skipped = 0
        total = 0

        with open(csv_path, 'r', encoding='utf-8-sig', newline='') as f:
            reader = csv.DictReader(f)
            header = [clean_text(h).lower() for h in (reader.fieldnames or [])]
            missing = [c for c in Col.REQUIRED if c not in header]
            if missing:
                raise ValueError(f"Capture file {csv_path.name} missing required columns: {missing}")
            reader.fieldnames = header

            for row in reader:
                total += 1
                if not self._add_row(grouped, row):
                    skipped += 1

        snapshots = [self._build_snapshot(sid, data) for sid, data in grouped.items()]
        log.info("%s: Parsed %d rows into %d snapshots, Skipped %d",
                 csv_path.name, total - skipped, len(snapshots), skipped)
        return snapshots

    def parse_snapshot_json(self, json_path: Path) -> CaptureSnapshot:
        """
        Load a single host snapshot:
        {"permissionGranted": bool, "carrierName": str, "records": [...],
         "location": {"latitude": .., "longitude": .., ...}, "capturedAt": ..}
        """
        json_path = Path(json_path)
        if not json_path.exists():
            raise FileNotFoundError(f"Snapshot file not found: {json_path}")

        with open(json_path, 'r', encoding='utf-8') as f:
            data = json.load(f)
        if not isinstance(data, dict):
            raise ValueError(f"Snapshot file {json_path.name} must contain a JSON object")

        records = []
        for entry in data.get("records") or []:
            if isinstance(entry, dict):
                records.append(RawCellRecord.from_mapping(entry))
            else:
                log.warning("Skipping non-object record entry: %r", entry)

        location_data = data.get("location")
        location = self._parse_location(location_data) if isinstance(location_data, dict) else None

        return CaptureSnapshot(
            snapshot_id=clean_text(data.get("snapshotId")) or json_path.stem,
            permission_granted=to_bool(data.get("permissionGranted", True)),
            carrier_name=clean_text(data.get("carrierName")),
            records=tuple(records),
            location=location,
            captured_at=to_epoch_millis(data.get("capturedAt")),
        )

    def _add_row(self, grouped: dict, row: dict) -> bool:
        try:
            snapshot_id = clean_text(row.get(Col.SNAPSHOT_ID))
            if not snapshot_id:
                return False

            if snapshot_id not in grouped:
                grouped[snapshot_id] = {
                    "permission": self._parse_permission(row.get(Col.PERMISSION)),
                    "carrier": clean_text(row.get(Col.CARRIER)),
                    "location": self._parse_location(row),
                    "captured_at": to_epoch_millis(row.get(Col.CAPTURED_AT)),
                    "records": [],
                }

            if not clean_text(row.get(Col.GENERATION)):
                return True

            grouped[snapshot_id]["records"].append(self._parse_record(row))
            return True

        except Exception as e:
            log.warning("Error parsing capture row: %s", e)
            return False

    @staticmethod
    def _parse_record(row: dict) -> RawCellRecord:
        return RawCellRecord.from_mapping({
            "generation": Generation.parse(row.get(Col.GENERATION)),
            "is_registered": to_bool(row.get(Col.REGISTERED)),
            "cell_id": row.get(Col.CELL_ID),
            "channel_number": row.get(Col.CHANNEL),
            "rsrp": row.get(Col.RSRP),
            "rsrq": row.get(Col.RSRQ),
            "rssi": row.get(Col.RSSI),
            "sinr": row.get(Col.SINR),
        })

    @staticmethod
    def _parse_permission(value) -> bool:
        # Captures without the column were taken with permission
        if not clean_text(value):
            return True
        return to_bool(value)

    @staticmethod
    def _parse_location(row: dict) -> Optional[Location]:
        latitude = to_float_or_none(row.get(Col.LATITUDE))
        longitude = to_float_or_none(row.get(Col.LONGITUDE))
        if latitude is None or longitude is None:
            return None

        return Location(
            latitude=latitude,
            longitude=longitude,
            accuracy=to_float_or_none(row.get(Col.ACCURACY)) or 0.0,
            altitude=to_float_or_none(row.get(Col.ALTITUDE)) or 0.0,
        )

    @staticmethod
    def _build_snapshot(snapshot_id: str, data: dict) -> CaptureSnapshot:
        return CaptureSnapshot(
            snapshot_id=snapshot_id,
            permission_granted=data["permission"],
            carrier_name=data["carrier"],
            records=tuple(data["records"]),
            location=data["location"],
            captured_at=data["captured_at"],
        )
