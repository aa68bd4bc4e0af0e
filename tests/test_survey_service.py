import json
import zipfile

import pytest
from openpyxl import load_workbook

from application.survey_service import SurveyService
from domain.models import CaptureSnapshot, RawCellRecord
from main import main


CAPTURE = (
    "snapshot_id,captured_at,permission_granted,carrier_name,generation,registered,"
    "cell_id,channel_number,rsrp,rsrq,rssi,sinr,latitude,longitude,accuracy,altitude\n"
    "s1,1700000000000,true,T-Mobile,NR,true,12,431000,-85,-10,,15,40.1,-74.2,3.5,10\n"
    "s2,1700000005000,true,T-Mobile,LTE,true,456,300,-99,-9,-65,3,40.2,-74.3,4,11\n"
    "s3,1700000010000,true,T-Mobile,LTE,false,457,300,-110,-15,-90,-2,,,,\n"
    "s4,1700000015000,false,T-Mobile,,,,,,,,,,,,\n"
)


def _write_capture(tmp_path):
    path = tmp_path / "drive_test.csv"
    path.write_text(CAPTURE, encoding="utf-8")
    return path


def test_extract_snapshot_pins_clock_to_capture_time():
    snapshot = CaptureSnapshot(
        snapshot_id="x",
        permission_granted=True,
        carrier_name="Carrier",
        records=(RawCellRecord.lte(rsrp=-90, earfcn=3100),),
        captured_at=1234,
    )
    report = SurveyService().extract_snapshot(snapshot)

    assert report.timestamp_millis == 1234
    assert report.band == "B7"
    assert report.location.latitude == 0.0


def test_process_capture_writes_workbook(tmp_path):
    capture = _write_capture(tmp_path)
    output = tmp_path / "out" / "survey.xlsx"
    progress = []

    overall = SurveyService().process_capture(
        capture, output, progress_callback=lambda msg, pct: progress.append(pct), with_chart=False
    )

    assert output.exists()
    assert overall["total_samples"] == 4
    assert overall["live_samples"] == 2
    assert overall["searching_samples"] == 1
    assert overall["no_permission_samples"] == 1
    assert progress[-1] == 100

    wb = load_workbook(output)
    assert wb.sheetnames == ["Summary", "By Band", "Samples"]

    samples = wb["Samples"]
    header = [c.value for c in samples[1]]
    assert header[0] == "SNAPSHOT_ID"
    assert samples.max_row == 5
    compliant_col = header.index("COMPLIANT") + 1
    assert samples.cell(row=2, column=compliant_col).value == "PASS"
    assert samples.cell(row=3, column=compliant_col).value == "FAIL"

    # 1 of 2 live samples compliant
    summary = wb["Summary"]
    assert summary["A11"].value == "Coverage status"
    assert summary["B11"].value == "FAIL"


def test_process_capture_with_chart(tmp_path):
    capture = _write_capture(tmp_path)
    output = tmp_path / "survey.xlsx"

    SurveyService().process_capture(capture, output)

    with zipfile.ZipFile(output) as archive:
        media = [n for n in archive.namelist() if n.startswith("xl/media/")]
    assert len(media) == 1


def test_process_capture_reports_errors(tmp_path):
    progress = []
    with pytest.raises(FileNotFoundError):
        SurveyService().process_capture(
            tmp_path / "missing.csv", tmp_path / "out.xlsx",
            progress_callback=lambda msg, pct: progress.append((msg, pct)),
        )
    assert progress[-1][0].startswith("Error:")
    assert progress[-1][1] == 0


def test_cli_signal_prints_payload(tmp_path, capsys):
    snapshot = tmp_path / "snap.json"
    snapshot.write_text(json.dumps({
        "carrierName": "Verizon",
        "capturedAt": 1700000000000,
        "records": [{"generation": "LTE", "isRegistered": True, "rsrp": -95,
                     "rsrq": -9, "rssnr": 8, "ci": 456, "earfcn": 300}],
    }), encoding="utf-8")

    assert main(["signal", str(snapshot)]) == 0

    payload = json.loads(capsys.readouterr().out)
    assert payload["networkType"] == "LTE"
    assert payload["band"] == "B1"
    assert payload["timestamp"] == 1700000000000


def test_cli_survey_missing_file_returns_error(tmp_path):
    assert main(["survey", str(tmp_path / "nope.csv"), "--no-chart"]) == 1


def test_process_capture_with_missing_sinr(tmp_path):
    capture = tmp_path / "gaps.csv"
    capture.write_text(
        "snapshot_id,captured_at,generation,registered,cell_id,channel_number,rsrp,rsrq,rssi,sinr\n"
        "a,1700000000000,LTE,true,1,300,-90,-9,-60,12\n"
        "b,1700000005000,LTE,true,1,300,-94,-9,-61,\n",
        encoding="utf-8",
    )
    output = tmp_path / "gaps.xlsx"

    overall = SurveyService().process_capture(capture, output)

    assert overall["avg_sinr"] == 12.0
    assert overall["compliant_pct"] == 100.0

    samples = load_workbook(output)["Samples"]
    header = [c.value for c in samples[1]]
    assert samples.cell(row=3, column=header.index("SINR") + 1).value is None
    assert samples.cell(row=3, column=header.index("COMPLIANT") + 1).value == "N/A"
    assert samples.cell(row=2, column=header.index("COMPLIANT") + 1).value == "PASS"


def test_cli_signal_with_infinite_capture_time(tmp_path, capsys):
    snapshot = tmp_path / "inf.json"
    snapshot.write_text('{"capturedAt": 1e999, "records": []}', encoding="utf-8")

    assert main(["signal", str(snapshot)]) == 0

    payload = json.loads(capsys.readouterr().out)
    assert payload["networkType"] == "Searching"
    assert isinstance(payload["timestamp"], int)
    assert payload["timestamp"] > 0
