"""
Host Payload Service
Render a SignalReport as the flat camelCase dictionary the UI bridge expects
"""

from domain.models import Generation, SignalReport


def build_payload(report: SignalReport) -> dict:
    """Flatten a report for the host transport"""
    channel_key = "nrarfcn" if report.generation is Generation.NR else "earfcn"

    return {
        "carrierName": report.carrier_name,
        "networkType": report.network_type,
        "rsrp": report.rsrp,
        "rsrq": report.rsrq,
        "rssi": report.rssi,
        "sinr": report.sinr,
        "cellId": report.cell_id,
        "band": report.band,
        channel_key: report.channel_number,
        "latitude": report.location.latitude,
        "longitude": report.location.longitude,
        "accuracy": report.location.accuracy,
        "altitude": report.location.altitude,
        "timestamp": report.timestamp_millis,
    }
