"""
검토 단계 모듈 (후보 수정 + 저장 전 검증)

파서가 만든 후보는 불변 값입니다. 사용자의 검토 동작(포함 토글, 정의 선택,
값/단위 수정)은 새 ParsedResult 를 반환하는 명시적 함수로 표현합니다.

저장 정책:
- include=True 인 후보만 저장 대상
- 저장 대상이 하나도 없으면 저장 불가
- 저장 대상 중 하나라도 정의(선택 또는 매칭)가 없거나 값이 숫자로 변환되지 않으면 저장 불가
- 저장 레코드는 카탈로그 인덱스가 아닌 안정 키(template_key)로 정의를 참조
"""

from dataclasses import dataclass, field, replace
from datetime import date
from typing import List, Optional, Sequence

from .number_parser import parse_number
from .reference.biomarker_catalog import BiomarkerCategory, BiomarkerDefinition, BiomarkerUnit
from .report_parser import ParsedResult


class SelectionError(ValueError):
    """저장 전제 조건을 만족하지 않는 선택"""

    def __init__(self, message: str, validation: "SelectionValidation"):
        super().__init__(message)
        self.validation = validation


# -----------------------
# 검토 동작
# -----------------------

def toggle_include(item: ParsedResult, include: Optional[bool] = None) -> ParsedResult:
    """포함 여부 전환 (include 지정 시 해당 값으로 설정)"""
    return replace(item, include=(not item.include) if include is None else include)


def select_definition(
    item: ParsedResult, definition: Optional[BiomarkerDefinition]
) -> ParsedResult:
    """사용자 정의 선택. 단위가 비어 있으면 선택 정의의 기본 단위로 채움"""
    unit = item.unit
    if unit is None and definition is not None:
        unit = definition.default_unit
    return replace(item, selected_definition=definition, unit=unit)


def edit_value(item: ParsedResult, value_text: str) -> ParsedResult:
    return replace(item, value_text=value_text.strip())


def change_unit(item: ParsedResult, unit: Optional[BiomarkerUnit]) -> ParsedResult:
    return replace(item, unit=unit)


def replace_item(
    items: Sequence[ParsedResult], index: int, item: ParsedResult
) -> List[ParsedResult]:
    """index 위치 후보만 교체한 새 목록"""
    updated = list(items)
    updated[index] = item
    return updated


# -----------------------
# 저장 전 검증
# -----------------------

@dataclass
class SelectionValidation:
    """저장 전 검증 결과"""

    accepted: List[ParsedResult] = field(default_factory=list)
    rejected: List[tuple] = field(default_factory=list)  # (ParsedResult, [사유])

    @property
    def accepted_count(self) -> int:
        return len(self.accepted)

    @property
    def rejected_count(self) -> int:
        return len(self.rejected)

    @property
    def is_saveable(self) -> bool:
        return self.accepted_count > 0 and self.rejected_count == 0

    def summary(self) -> dict:
        """QA 요약 반환"""
        return {
            "selected": self.accepted_count + self.rejected_count,
            "accepted": self.accepted_count,
            "rejected": self.rejected_count,
        }


def validate_selection(items: Sequence[ParsedResult]) -> SelectionValidation:
    """include=True 후보를 accepted/rejected 로 분리합니다.

    제외 사유:
        - missing_definition: 선택/매칭 정의 모두 없음
        - invalid_value: value_text 가 숫자로 변환되지 않음
    """
    result = SelectionValidation()
    for item in items:
        if not item.include:
            continue
        reasons = []
        if item.definition is None:
            reasons.append("missing_definition")
        if parse_number(item.value_text) is None:
            reasons.append("invalid_value")
        if reasons:
            result.rejected.append((item, reasons))
        else:
            result.accepted.append(item)
    return result


@dataclass(frozen=True)
class BiomarkerRecord:
    """저장 계층에 넘기는 바이오마커 측정값"""

    name: str
    value: float
    unit: BiomarkerUnit
    date: date
    category: BiomarkerCategory
    template_key: str
    min_reference: Optional[float] = None
    max_reference: Optional[float] = None

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "value": self.value,
            "unit": self.unit.value,
            "date": self.date.isoformat(),
            "category": self.category.value,
            "template_key": self.template_key,
            "min_reference": self.min_reference,
            "max_reference": self.max_reference,
        }


def build_biomarker_records(
    items: Sequence[ParsedResult], report_date: Optional[date] = None
) -> List[BiomarkerRecord]:
    """검증을 통과한 선택을 저장 레코드로 변환합니다.

    매개변수:
        items: 검토가 끝난 후보 목록
        report_date: 보고서 날짜 (None 이면 오늘)

    반환값:
        BiomarkerRecord 리스트 (후보 순서 유지)

    예외:
        SelectionError: 선택이 비었거나 잘못된 후보가 있을 때
    """
    validation = validate_selection(items)
    if not validation.is_saveable:
        if validation.accepted_count == 0 and validation.rejected_count == 0:
            raise SelectionError("저장할 항목이 선택되지 않았습니다.", validation)
        raise SelectionError(
            f"저장할 수 없는 항목이 {validation.rejected_count}개 있습니다.", validation
        )

    when = report_date or date.today()
    records: List[BiomarkerRecord] = []
    for item in validation.accepted:
        definition = item.definition
        value = parse_number(item.value_text)
        records.append(
            BiomarkerRecord(
                name=definition.name,
                value=value,
                unit=item.unit or definition.default_unit,
                date=when,
                category=definition.category,
                template_key=definition.id,
                min_reference=definition.min_reference,
                max_reference=definition.max_reference,
            )
        )
    return records


__all__ = [
    "SelectionError",
    "toggle_include",
    "select_definition",
    "edit_value",
    "change_unit",
    "replace_item",
    "SelectionValidation",
    "validate_selection",
    "BiomarkerRecord",
    "build_biomarker_records",
]
