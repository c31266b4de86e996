"""
수치 토큰 추출/변환 모듈

검사결과지 라인에는 결과값 외에도 참고 범위, 페이지 번호 등 여러 숫자가 섞여 있습니다.
예) "CRP 1.20 mg/L (0.00-3.00)"
단위 토큰에 가장 가까운 숫자를 결과값으로 선택합니다.

- find_numbers(text): 숫자 후보 (문자열, 시작 위치) 목록
- best_number(text, unit_range): 단위 위치 기준 최선의 숫자 문자열
- parse_number(text): 소수점(.)/소수쉼표(,) 혼용에 견디는 float 변환
"""
from __future__ import annotations

import locale
import logging
import re
from typing import List, Optional, Tuple

logger = logging.getLogger(__name__)

# 정수부 1~4자리로 제한: 긴 식별자/날짜 조각이 통째로 값으로 잡히지 않도록
NUMBER_PATTERN = re.compile(r"[-+]?\d{1,4}(?:[.,]\d+)?")


def find_numbers(text: str) -> List[Tuple[str, int]]:
    """숫자 후보를 스캔 순서대로 (문자열, 시작 위치) 로 반환"""
    return [(m.group(0), m.start()) for m in NUMBER_PATTERN.finditer(text or "")]


def best_number(text: str, unit_range: Optional[Tuple[int, int]] = None) -> Optional[str]:
    """결과값으로 가장 그럴듯한 숫자 문자열을 선택합니다.

    매개변수:
        text: prepare_line() 을 거친 라인 (unit_range 와 같은 좌표계)
        unit_range: detect_unit_token_range() 결과 (없으면 None)

    반환값:
        숫자 문자열 (원래 소수 구분자 유지) 또는 None

    선택 규칙:
        - unit_range 가 있으면 시작 위치가 단위 토큰 시작 위치에 가장 가까운 후보
        - 거리가 같으면 먼저 나온 후보
        - unit_range 가 없으면 첫 번째 후보

    사용 예시:
        >>> best_number("crp 1.20 mg/l (0.00-3.00)", (9, 13))
        '1.20'
    """
    candidates = find_numbers(text)
    if not candidates:
        return None
    if unit_range is None:
        return candidates[0][0]

    unit_start = unit_range[0]
    # min()은 동률일 때 처음 항목을 유지
    best, _ = min(candidates, key=lambda c: abs(c[1] - unit_start))
    return best


def parse_number(text: Optional[str]) -> Optional[float]:
    """숫자 문자열을 float 로 변환합니다.

    1) 현재 LC_NUMERIC 로케일 기준 변환 (locale.atof)
    2) 실패 시 ',' → '.' 치환 후 일반 변환
    둘 다 실패하면 None.

    사용 예시:
        >>> parse_number("1,20")
        1.2
        >>> parse_number("abc") is None
        True
    """
    if text is None:
        return None
    s = text.strip()
    if not s:
        return None
    try:
        return locale.atof(s)
    except ValueError:
        pass
    try:
        return float(s.replace(",", "."))
    except ValueError:
        logger.debug(f"숫자 변환 실패: {text!r}")
        return None


__all__ = ["NUMBER_PATTERN", "find_numbers", "best_number", "parse_number"]
