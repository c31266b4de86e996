"""
보고서 날짜 감지 모듈

검사결과지 전체 텍스트에서 채혈/보고 날짜 하나를 추정합니다.

2단계 탐색:
1) 키워드(날짜/채혈/결과 관련, 헝가리어/영어)가 포함된 라인에서만 날짜 후보를 찾아 파싱
2) 1단계에서 못 찾으면 문서 전체 텍스트에서 같은 절차를 반복

키워드 인접 날짜를 우선하여 병원 머리글, 출력 시각 등 무관한 날짜를 피합니다.
"""
from __future__ import annotations

import logging
import re
from datetime import date, datetime
from typing import List, Optional, Pattern, Tuple

logger = logging.getLogger(__name__)

DATE_KEYWORDS: Tuple[str, ...] = (
    "dátum",
    "datum",
    "mintavétel",
    "vizsgálat",
    "eredmény",
    "date",
    "collected",
)

# 순서 = 후보 추출 순서
DATE_PATTERNS: Tuple[Pattern[str], ...] = (
    re.compile(r"\b\d{4}\.\d{1,2}\.\d{1,2}\.?\b"),  # 2024.03.15(.)
    re.compile(r"\b\d{1,2}\.\d{1,2}\.\d{4}\.?\b"),  # 15.03.2024(.)
    re.compile(r"\b\d{4}-\d{1,2}-\d{1,2}\b"),       # 2024-03-15
    re.compile(r"\b\d{1,2}/\d{1,2}/\d{4}\b"),       # 15/03/2024
)

# 모두 숫자 형식이라 로케일에 따라 결과가 달라지지 않음
DATE_FORMATS: Tuple[str, ...] = (
    "%Y.%m.%d",
    "%Y.%m.%d.",
    "%Y-%m-%d",
    "%d.%m.%Y",
    "%d.%m.%Y.",
    "%d/%m/%Y",
)


def extract_date_strings(text: str) -> List[str]:
    """날짜처럼 보이는 부분 문자열을 패턴 순서, 패턴 내 등장 순서로 반환"""
    results: List[str] = []
    for pattern in DATE_PATTERNS:
        results.extend(m.group(0) for m in pattern.finditer(text))
    return results


def parse_date(candidate: str) -> Optional[date]:
    """후보 문자열을 형식 목록 순서대로 파싱. 모두 실패하면 None"""
    for fmt in DATE_FORMATS:
        try:
            return datetime.strptime(candidate, fmt).date()
        except ValueError:
            continue
    return None


def _first_parsed(text: str) -> Optional[date]:
    for candidate in extract_date_strings(text):
        parsed = parse_date(candidate)
        if parsed is not None:
            return parsed
    return None


def has_date_keyword(line: str) -> bool:
    lower = line.lower()
    return any(k in lower for k in DATE_KEYWORDS)


def detect_report_date(full_text: str) -> Optional[date]:
    """문서 텍스트에서 보고서 날짜를 추정합니다.

    매개변수:
        full_text: 추출된 문서 전체 텍스트

    반환값:
        datetime.date 또는 None (날짜 후보가 없거나 모두 파싱 실패)

    사용 예시:
        >>> detect_report_date("Mintavétel dátuma: 2024.03.15.")
        datetime.date(2024, 3, 15)
    """
    if not full_text:
        return None

    for line in full_text.splitlines():
        if not has_date_keyword(line):
            continue
        found = _first_parsed(line)
        if found is not None:
            logger.debug(f"키워드 라인에서 날짜 감지: {found} ({line.strip()!r})")
            return found

    found = _first_parsed(full_text)
    if found is not None:
        logger.debug(f"전체 텍스트 폴백으로 날짜 감지: {found}")
    return found


__all__ = [
    "DATE_KEYWORDS",
    "DATE_PATTERNS",
    "DATE_FORMATS",
    "extract_date_strings",
    "parse_date",
    "has_date_keyword",
    "detect_report_date",
]
