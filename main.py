"""
Signal Survey - Main Entry Point
Description: Normalize raw cell snapshots into signal reports and build survey workbooks
"""

import argparse
import json
import logging
import sys
from pathlib import Path

from application.survey_service import SurveyService
from config.settings import OUTPUT_DIR
from infrastructure.csv_parser import CaptureParser
from services.host_payload import build_payload


def run_signal(args) -> int:
    snapshot = CaptureParser().parse_snapshot_json(Path(args.snapshot))
    report = SurveyService().extract_snapshot(snapshot)
    print(json.dumps(build_payload(report), indent=2))
    return 0


def run_survey(args) -> int:
    capture = Path(args.capture)
    output = Path(args.output) if args.output else OUTPUT_DIR / f"{capture.stem}_survey.xlsx"

    def progress(message, percentage):
        print(f"[{percentage:3d}%] {message}")

    overall = SurveyService().process_capture(
        capture, output, progress_callback=progress, with_chart=not args.no_chart
    )
    print(f"Samples: {overall['total_samples']} (live {overall['live_samples']}), quality: {overall['bucket']}")
    return 0


def main(argv=None):
    """Main application entry point"""
    parser = argparse.ArgumentParser(description='Cellular signal normalization and survey reporting')
    parser.add_argument('-v', '--verbose', action='store_true', help='Enable verbose logging')
    subparsers = parser.add_subparsers(dest='command', required=True)

    signal_parser = subparsers.add_parser('signal', help='Extract one signal report from a JSON snapshot')
    signal_parser.add_argument('snapshot', help='Snapshot JSON file path')
    signal_parser.set_defaults(func=run_signal)

    survey_parser = subparsers.add_parser('survey', help='Build an Excel survey report from a capture CSV')
    survey_parser.add_argument('capture', help='Capture CSV file path')
    survey_parser.add_argument('-o', '--output', help='Output .xlsx path (default: output/<capture>_survey.xlsx)')
    survey_parser.add_argument('--no-chart', action='store_true', help='Skip chart generation')
    survey_parser.set_defaults(func=run_survey)

    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG)
    else:
        logging.basicConfig(level=logging.INFO)

    try:
        return args.func(args)
    except (FileNotFoundError, ValueError, OverflowError) as e:
        print(f"✗ {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
