"""검사결과지 가져오기 패키지

PDF 검사결과지에서 텍스트를 추출하고, 라인별로 바이오마커 후보 결과를 만들어
사람의 검토를 거쳐 저장 레코드로 변환하는 기능을 제공합니다.

주요 모듈:
- text_extractor: 텍스트 레이어 추출 + OCR 폴백
- report_parser: 라인 파서 / 보고서 파서 (ParsedResult, ReportParseResult)
- catalog_matcher: 카탈로그 매칭/검색
- text_normalizer: 비교 키 정규화
- number_parser: 결과값 숫자 선택 및 변환
- date_detector: 보고서 날짜 감지
- review: 검토 동작, 저장 전 검증, 저장 레코드 생성
- importer: 비동기/취소/제한 시간 지원 파이프라인 매니저
- reference/: 바이오마커 카탈로그, 단위 렉시콘
"""

from .catalog_matcher import match_template, search
from .date_detector import detect_report_date
from .importer import ImportOutcome, LabReportImporter
from .number_parser import best_number, parse_number
from .report_parser import ParsedResult, ReportParseResult, parse_line, parse_report
from .review import (
    BiomarkerRecord,
    SelectionError,
    build_biomarker_records,
    validate_selection,
)
from .text_extractor import DocumentTextExtractor, ExtractionCancelled, extract_text
from .text_normalizer import normalize

__all__ = [
    # catalog_matcher
    "match_template",
    "search",
    # date_detector
    "detect_report_date",
    # importer
    "ImportOutcome",
    "LabReportImporter",
    # number_parser
    "best_number",
    "parse_number",
    # report_parser
    "ParsedResult",
    "ReportParseResult",
    "parse_line",
    "parse_report",
    # review
    "BiomarkerRecord",
    "SelectionError",
    "build_biomarker_records",
    "validate_selection",
    # text_extractor
    "DocumentTextExtractor",
    "ExtractionCancelled",
    "extract_text",
    # text_normalizer
    "normalize",
]
