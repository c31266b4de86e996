"""
카탈로그 매칭 모듈

- match_template(line): 검사결과지 라인을 카탈로그 정의에 연결 (정규화 키 포함 비교)
- search(query): 사용자 탐색용 대소문자 무시 부분 문자열 필터 (정규화 없음)

매칭 규칙 (변경 시 라인이 귀속되는 바이오마커가 바뀌므로 주의):
- 라인을 한 번 정규화한 뒤 카탈로그를 선언 순서대로 훑습니다.
- 각 항목에서 이름 또는 별칭 중 하나라도 정규화 라인에 포함되면 그 항목을 반환합니다.
- 구체성(최장 일치)으로 재정렬하지 않습니다. 먼저 선언된 항목이 이깁니다.
"""
from __future__ import annotations

from functools import lru_cache
from typing import Iterable, List, Optional, Sequence, Tuple

from .reference.biomarker_catalog import BiomarkerDefinition, get_biomarker_catalog
from .text_normalizer import normalize


@lru_cache(maxsize=None)
def _definition_keys(definition: BiomarkerDefinition) -> Tuple[str, ...]:
    keys = [normalize(definition.name)]
    keys.extend(normalize(alias) for alias in definition.aliases)
    # 빈 키는 모든 라인에 포함되므로 제외
    return tuple(k for k in keys if k)


def match_template(
    line: str,
    catalog: Optional[Sequence[BiomarkerDefinition]] = None,
) -> Optional[BiomarkerDefinition]:
    """라인에 언급된 첫 번째 카탈로그 정의를 반환합니다.

    매개변수:
        line: 원문 라인 (소문자화 전)
        catalog: 검사할 정의 목록 (기본: 전역 카탈로그, 선언 순서)

    반환값:
        BiomarkerDefinition 또는 None

    사용 예시:
        >>> match_template("Kálium 4.2 mmol/L").id
        'potassium'
    """
    normalized_line = normalize(line)
    if not normalized_line:
        return None
    entries: Iterable[BiomarkerDefinition] = catalog if catalog is not None else get_biomarker_catalog()
    for definition in entries:
        if any(key in normalized_line for key in _definition_keys(definition)):
            return definition
    return None


def search(
    query: str,
    catalog: Optional[Sequence[BiomarkerDefinition]] = None,
) -> List[BiomarkerDefinition]:
    """이름/별칭에 대한 대소문자 무시 부분 문자열 검색. 빈 쿼리는 전체 반환"""
    entries = list(catalog if catalog is not None else get_biomarker_catalog())
    trimmed = (query or "").strip()
    if not trimmed:
        return entries
    needle = trimmed.casefold()
    return [
        d for d in entries
        if needle in d.name.casefold() or any(needle in a.casefold() for a in d.aliases)
    ]


__all__ = ["match_template", "search"]
