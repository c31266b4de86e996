"""
검사결과지 텍스트 파서 (라인 파서 + 보고서 파서)

추출된 문서 텍스트를 사람이 검토할 후보 결과 목록으로 변환합니다.
입력 텍스트만으로 결과가 결정되는 순수 함수이며, 라인 사이에 상태를 공유하지 않습니다.

라인 처리 순서:
1) 소문자화 + micro 문자 치환 (prepare_line)
2) 단위 + 단위 토큰 위치 탐지
3) 단위 위치 기준 최선의 숫자 선택 → 숫자가 없으면 라인 버림
4) 원문 라인으로 카탈로그 매칭 → 단위도 매칭도 없으면 라인 버림
5) 후보 생성: 단위가 없으면 매칭 정의의 기본 단위, 포함 여부는 매칭 존재 여부
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date
from typing import Any, Dict, List, Optional

from .catalog_matcher import match_template
from .date_detector import detect_report_date
from .number_parser import best_number, parse_number
from .reference.biomarker_catalog import BiomarkerDefinition, BiomarkerUnit
from .reference.unit_lexicon import detect_unit, detect_unit_token_range, prepare_line

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ParsedResult:
    """라인 하나에서 얻은 검토 대기 후보 결과"""

    source_line: str
    raw_name: str
    matched_definition: Optional[BiomarkerDefinition]
    value_text: str
    unit: Optional[BiomarkerUnit]
    include: bool
    selected_definition: Optional[BiomarkerDefinition] = None

    @property
    def definition(self) -> Optional[BiomarkerDefinition]:
        """사용자 선택 정의 우선, 없으면 자동 매칭 정의"""
        return self.selected_definition or self.matched_definition

    @property
    def display_name(self) -> str:
        definition = self.definition
        return definition.name if definition else self.raw_name

    @property
    def value_display(self) -> str:
        unit_text = self.unit.value if self.unit else ""
        return f"{self.value_text} {unit_text}"

    @property
    def parsed_value(self) -> Optional[float]:
        return parse_number(self.value_text)

    def to_dict(self) -> Dict[str, Any]:
        """딕셔너리로 변환 (정의는 안정 키로 표기)"""
        return {
            "source_line": self.source_line,
            "raw_name": self.raw_name,
            "matched_key": self.matched_definition.id if self.matched_definition else None,
            "selected_key": self.selected_definition.id if self.selected_definition else None,
            "value_text": self.value_text,
            "unit": self.unit.value if self.unit else None,
            "include": self.include,
        }


@dataclass(frozen=True)
class ReportParseResult:
    """문서 단위 파싱 결과 (라인 순서 유지)"""

    report_date: Optional[date] = None
    items: List[ParsedResult] = field(default_factory=list)

    @property
    def matched_count(self) -> int:
        return sum(1 for item in self.items if item.matched_definition is not None)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "report_date": self.report_date.isoformat() if self.report_date else None,
            "items": [item.to_dict() for item in self.items],
        }


def split_lines(full_text: str) -> List[str]:
    """줄 단위 분리 + 양끝 공백 제거 + 빈 줄 제외"""
    lines = (line.strip() for line in (full_text or "").splitlines())
    return [line for line in lines if line]


def parse_line(line: str) -> Optional[ParsedResult]:
    """단일 라인을 후보 결과로 변환합니다.

    매개변수:
        line: 양끝 공백이 제거된 원문 라인

    반환값:
        ParsedResult 또는 None (숫자가 없거나, 단위와 카탈로그 매칭이 모두 없는 라인)

    사용 예시:
        >>> r = parse_line("CRP 1.20 mg/L (0.00-3.00)")
        >>> (r.matched_definition.id, r.value_text, r.unit.value, r.include)
        ('hscrp', '1.20', 'mg/L', True)
    """
    prepared = prepare_line(line)
    unit = detect_unit(prepared)
    unit_range = detect_unit_token_range(prepared)

    value_text = best_number(prepared, unit_range)
    if value_text is None:
        return None

    definition = match_template(line)
    if unit is None and definition is None:
        return None

    return ParsedResult(
        source_line=line,
        raw_name=definition.name if definition else line,
        matched_definition=definition,
        value_text=value_text,
        unit=unit or (definition.default_unit if definition else None),
        include=definition is not None,
    )


def parse_report(full_text: str) -> ReportParseResult:
    """문서 전체 텍스트를 파싱합니다.

    - 보고서 날짜는 전체 텍스트에 대해 한 번 감지
    - 후보 목록은 문서 라인 순서 그대로 (재정렬 없음)

    매개변수:
        full_text: 추출된 문서 텍스트

    반환값:
        ReportParseResult
    """
    lines = split_lines(full_text)
    report_date = detect_report_date(full_text or "")

    items: List[ParsedResult] = []
    for line in lines:
        parsed = parse_line(line)
        if parsed is not None:
            items.append(parsed)

    logger.info(
        f"검사결과지 파싱 완료: lines={len(lines)}, items={len(items)}, "
        f"matched={sum(1 for i in items if i.matched_definition)}, report_date={report_date}"
    )
    return ReportParseResult(report_date=report_date, items=items)


__all__ = [
    "ParsedResult",
    "ReportParseResult",
    "split_lines",
    "parse_line",
    "parse_report",
]
