"""
검사 단위 사전 (reference/unit_lexicon)
-----------------------------------------------------
- 검사결과지 라인에서 단위 토큰을 찾아 표준 BiomarkerUnit 으로 해석합니다.
- 렉시콘은 (소문자 토큰, 단위) 쌍의 '순서 있는' 튜플입니다.

주요 제공 함수
- prepare_line(line): 소문자화 + micro 문자(µ, μ) -> 'u' 치환
- detect_unit(line) -> Optional[BiomarkerUnit]
- detect_unit_token_range(line) -> Optional[(start, end)]

정책
- 선언 순서대로 검사하여 '처음 포함되는' 토큰을 채택합니다 (최장/최좌측 매칭 아님).
- 따라서 더 구체적인 토큰이 그 부분 문자열 토큰보다 앞에 있어야 합니다.
  예) 'mg/dl' 은 'g/l' 보다, 'miu/l' 은 'iu/l' 보다 앞.
- 입력은 prepare_line() 을 거친 문자열을 기대합니다.
"""
from __future__ import annotations

from typing import NamedTuple, Optional, Tuple

from .biomarker_catalog import BiomarkerUnit


class UnitToken(NamedTuple):
    """단위 리터럴 토큰과 표준 단위"""
    token: str
    unit: BiomarkerUnit


_MICRO_CHARS = ("µ", "μ")  # micro sign vs greek mu

UNIT_TOKENS: Tuple[UnitToken, ...] = (
    UnitToken("mg/dl", BiomarkerUnit.MG_DL),
    UnitToken("mg/l", BiomarkerUnit.MG_L),
    UnitToken("mmol/l", BiomarkerUnit.MMOL_L),
    UnitToken("nmol/l", BiomarkerUnit.NMOL_L),
    UnitToken("ng/ml", BiomarkerUnit.NG_ML),
    UnitToken("miu/l", BiomarkerUnit.MIU_L),
    UnitToken("iu/l", BiomarkerUnit.IU_L),
    UnitToken("pg/ml", BiomarkerUnit.PG_ML),
    UnitToken("uiu/ml", BiomarkerUnit.UIU_ML),
    UnitToken("umol/l", BiomarkerUnit.UMOL_L),
    UnitToken("giga/l", BiomarkerUnit.GIGA_L),
    UnitToken("tera/l", BiomarkerUnit.TERA_L),
    UnitToken("g/l", BiomarkerUnit.G_L),
    UnitToken("fl", BiomarkerUnit.FL),
    UnitToken("pg", BiomarkerUnit.PG),
    UnitToken("mm/hour", BiomarkerUnit.MM_HOUR),
    UnitToken("ml/min/1.73m2", BiomarkerUnit.ML_MIN_173),
    UnitToken("leu/ul", BiomarkerUnit.LEU_UL),
    UnitToken("l/l", BiomarkerUnit.L_L),
    UnitToken("%", BiomarkerUnit.PERCENT),
)


def prepare_line(line: str) -> str:
    """단위 탐지용 라인 정규화: 소문자화 + micro 문자를 'u' 로 통일"""
    out = line.lower()
    for ch in _MICRO_CHARS:
        out = out.replace(ch, "u")
    return out


def _first_token(line: str) -> Optional[Tuple[UnitToken, int]]:
    for entry in UNIT_TOKENS:
        idx = line.find(entry.token)
        if idx >= 0:
            return entry, idx
    return None


def detect_unit(line: str) -> Optional[BiomarkerUnit]:
    """라인에 포함된 첫 번째(선언 순서) 단위 토큰의 표준 단위를 반환합니다.

    매개변수:
        line: prepare_line() 을 거친 라인

    반환값:
        BiomarkerUnit 또는 None

    사용 예시:
        >>> detect_unit("crp 1.20 mg/l (0.00-3.00)")
        <BiomarkerUnit.MG_L: 'mg/L'>
    """
    found = _first_token(line)
    return found[0].unit if found else None


def detect_unit_token_range(line: str) -> Optional[Tuple[int, int]]:
    """detect_unit() 과 같은 토큰의 문자 위치 [start, end) 를 반환합니다."""
    found = _first_token(line)
    if found is None:
        return None
    entry, start = found
    return start, start + len(entry.token)


def list_all_tokens() -> list[str]:
    """렉시콘 토큰 목록 (선언 순서)"""
    return [entry.token for entry in UNIT_TOKENS]


__all__ = [
    "UnitToken",
    "UNIT_TOKENS",
    "prepare_line",
    "detect_unit",
    "detect_unit_token_range",
    "list_all_tokens",
]
