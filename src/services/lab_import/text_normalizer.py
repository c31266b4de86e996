"""
비교 키 정규화 모듈

카탈로그 이름/별칭과 검사결과지 라인을 같은 방식으로 접어서(fold)
퍼지 포함 비교에 쓰는 비교 키를 만듭니다.

변환 규칙:
- 대소문자 접기: "KALIUM" → "kalium"
- 발음 구별 기호 제거: "Kálium" → "kalium", "Összkoleszterin" → "osszkoleszterin"
- 영숫자 이외 문자 및 공백 제거: "LDL-koleszterin" → "ldlkoleszterin"

사용 예시:
    from src.services.lab_import.text_normalizer import normalize

    normalize("C-reaktív protein")
    # "creaktivprotein"
"""
from __future__ import annotations

import unicodedata


def fold_diacritics(s: str) -> str:
    """NFKD 분해 후 결합 문자(악센트 등)를 제거합니다."""
    decomposed = unicodedata.normalize("NFKD", s)
    return "".join(ch for ch in decomposed if not unicodedata.combining(ch))


def normalize(text: str) -> str:
    """비교 키를 생성합니다.

    모든 문자열 입력에 대해 정의되며 실패하지 않습니다. 멱등적입니다.
    비교 양쪽(카탈로그/라인)에 반드시 동일하게 적용해야 합니다.

    매개변수:
        text: 임의의 문자열

    반환값:
        정규화된 비교 키 (빈 문자열일 수 있음)

    사용 예시:
        >>> normalize("Kálium")
        'kalium'
        >>> normalize("  Vitamin D (25-OH) ")
        'vitamind25oh'
    """
    if not text:
        return ""
    folded = fold_diacritics(text).casefold()
    # casefold 결과가 다시 분해 가능한 문자를 만들 수 있어 한 번 더 접습니다 (멱등성)
    folded = fold_diacritics(folded)
    return "".join(ch for ch in folded if ch.isalnum())


__all__ = ["fold_diacritics", "normalize"]
