import json

import pytest

from domain.models import Generation, Location
from infrastructure.csv_parser import CaptureParser


CAPTURE_HEADER = (
    "snapshot_id,captured_at,permission_granted,carrier_name,generation,registered,"
    "cell_id,channel_number,rsrp,rsrq,rssi,sinr,latitude,longitude,accuracy,altitude\n"
)


def _write_capture(tmp_path, rows, header=CAPTURE_HEADER):
    path = tmp_path / "capture.csv"
    path.write_text(header + "".join(row + "\n" for row in rows), encoding="utf-8")
    return path


def test_rows_are_grouped_into_snapshots_in_order(tmp_path):
    path = _write_capture(tmp_path, [
        "s1,1700000000000,true,T-Mobile,NR,false,11,392000,-100,-12,,5,40.1,-74.2,3.5,10",
        "s1,1700000000000,true,T-Mobile,NR,true,12,431000,-85,-10,,15,40.1,-74.2,3.5,10",
        "s2,1700000005000,true,T-Mobile,LTE,true,456,300,-95,-9,-65,8,40.2,-74.3,4,11",
        "s3,1700000010000,false,T-Mobile,,,,,,,,,,,,",
    ])

    snapshots = CaptureParser().parse_capture_csv(path)

    assert [s.snapshot_id for s in snapshots] == ["s1", "s2", "s3"]

    first = snapshots[0]
    assert len(first.records) == 2
    assert [r.cell_id for r in first.records] == [11, 12]
    assert first.records[1].generation is Generation.NR
    assert first.records[1].signal.ss_rsrp == -85
    assert first.location == Location(40.1, -74.2, 3.5, 10.0)
    assert first.captured_at == 1700000000000
    assert first.carrier_name == "T-Mobile"

    assert snapshots[1].records[0].signal.rssnr == 8
    assert snapshots[2].permission_granted is False
    assert snapshots[2].records == ()
    assert snapshots[2].location is None


def test_missing_permission_column_defaults_to_granted(tmp_path):
    header = "snapshot_id,generation,registered,rsrp\n"
    path = _write_capture(tmp_path, ["a,LTE,1,-90"], header=header)

    snapshots = CaptureParser().parse_capture_csv(path)

    assert snapshots[0].permission_granted is True
    assert snapshots[0].records[0].signal.rsrp == -90
    assert snapshots[0].captured_at is None


def test_rows_without_snapshot_id_are_skipped(tmp_path):
    path = _write_capture(tmp_path, [
        ",1700000000000,true,X,LTE,true,1,300,-90,-9,-60,10,,,,",
        "ok,1700000000000,true,X,LTE,true,1,300,-90,-9,-60,10,,,,",
    ])

    snapshots = CaptureParser().parse_capture_csv(path)
    assert [s.snapshot_id for s in snapshots] == ["ok"]


def test_iso_capture_time_is_converted(tmp_path):
    path = _write_capture(tmp_path, ["a,2023-11-14 22:13:20,true,X,LTE,true,1,300,-90,-9,-60,10,,,,"])
    assert CaptureParser().parse_capture_csv(path)[0].captured_at == 1700000000000


def test_missing_required_columns_raise(tmp_path):
    path = _write_capture(tmp_path, ["a,-90"], header="snapshot_id,rsrp\n")
    with pytest.raises(ValueError):
        CaptureParser().parse_capture_csv(path)


def test_missing_file_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        CaptureParser().parse_capture_csv(tmp_path / "missing.csv")


def test_parse_snapshot_json(tmp_path):
    path = tmp_path / "snap.json"
    path.write_text(json.dumps({
        "permissionGranted": True,
        "carrierName": " Verizon ",
        "capturedAt": 1700000000,
        "location": {"latitude": 1.5, "longitude": 2.5},
        "records": [
            {"generation": "LTE", "isRegistered": True, "rsrp": -95, "rsrq": -9,
             "rssnr": 8, "ci": 456, "earfcn": 300},
            "not-a-record",
        ],
    }), encoding="utf-8")

    snapshot = CaptureParser().parse_snapshot_json(path)

    assert snapshot.snapshot_id == "snap"
    assert snapshot.carrier_name == "Verizon"
    assert snapshot.captured_at == 1700000000000
    assert snapshot.location == Location(1.5, 2.5, 0.0, 0.0)
    assert len(snapshot.records) == 1
    assert snapshot.records[0].cell_id == 456


def test_snapshot_json_with_infinite_capture_time(tmp_path):
    path = tmp_path / "inf.json"
    path.write_text('{"capturedAt": 1e999, "records": []}', encoding="utf-8")

    snapshot = CaptureParser().parse_snapshot_json(path)

    assert snapshot.captured_at is None
    assert snapshot.records == ()
