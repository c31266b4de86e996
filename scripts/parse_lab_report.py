#!/usr/bin/env python
"""
PDF 검사결과지 한 건을 가져와 후보 결과를 출력하는 스크립트.
앱과 동일한 경로(텍스트 추출 → OCR 폴백 → 파싱)로 수행합니다.

Usage:
  python scripts/parse_lab_report.py report.pdf
  python scripts/parse_lab_report.py report.pdf --json
  OCR_PROVIDER=dummy python scripts/parse_lab_report.py scanned.pdf
"""
from __future__ import annotations

import argparse
import asyncio
import json
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT))

from src.services.lab_import.importer import LabReportImporter  # noqa: E402
from src.settings import configure_logging, settings, validate_settings  # noqa: E402
from src.utils.pdf import is_pdf  # noqa: E402


def _print_event(event: dict) -> None:
    extra = {k: v for k, v in event.items() if k not in ("stage", "status", "ts")}
    print(f"[{event['stage']}] {event['status']} {extra if extra else ''}", file=sys.stderr)


def main() -> int:
    parser = argparse.ArgumentParser(description="PDF 검사결과지 파싱")
    parser.add_argument("pdf", type=Path, help="PDF 파일 경로")
    parser.add_argument("--json", action="store_true", help="JSON 으로 출력")
    parser.add_argument("--timeout", type=float, default=None, help="추출 제한 시간(초)")
    args = parser.parse_args()

    configure_logging()
    for key, message in validate_settings().items():
        print(f"[WARN] {key}: {message}", file=sys.stderr)

    if not args.pdf.exists():
        print(f"[ERROR] 파일을 찾을 수 없습니다: {args.pdf}", file=sys.stderr)
        return 1

    if not is_pdf(args.pdf):
        print(f"[WARN] PDF 확장자가 아닙니다: {args.pdf.name}", file=sys.stderr)

    data = args.pdf.read_bytes()
    if len(data) > settings.max_upload_size_mb * 1024 * 1024:
        print(f"[ERROR] 파일이 너무 큽니다 (최대 {settings.max_upload_size_mb}MB)", file=sys.stderr)
        return 1

    importer = LabReportImporter(timeout=args.timeout, progress_cb=_print_event)
    outcome = asyncio.run(importer.import_bytes_async(data))

    if args.json:
        print(json.dumps(outcome.to_envelope().model_dump(), ensure_ascii=False, indent=2))
        return 0

    result = outcome.result
    print(f"추출 방식: {outcome.method}")
    print(f"보고서 날짜: {result.report_date or '(감지 안 됨)'}")
    for item in result.items:
        mark = "x" if item.include else " "
        key = item.definition.id if item.definition else "-"
        print(f"[{mark}] {item.display_name:<40} {item.value_display:<16} ({key})")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
