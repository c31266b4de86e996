"""참조 데이터 패키지
바이오마커 카탈로그와 단위 렉시콘을 제공합니다.
주요 모듈:
- biomarker_catalog: 바이오마커 정의 테이블 (분류/기본 단위/별칭/참고 범위)
- unit_lexicon: 순서 있는 단위 토큰 사전 및 탐지기
"""
from .biomarker_catalog import (
    BIOMARKER_CATALOG,
    BiomarkerCategory,
    BiomarkerDefinition,
    BiomarkerUnit,
    find_definition,
    get_biomarker_catalog,
    list_all_keys,
)
from .unit_lexicon import (
    UNIT_TOKENS,
    UnitToken,
    detect_unit,
    detect_unit_token_range,
    list_all_tokens,
    prepare_line,
)
__all__ = [
    # biomarker_catalog
    "BIOMARKER_CATALOG",
    "BiomarkerCategory",
    "BiomarkerDefinition",
    "BiomarkerUnit",
    "find_definition",
    "get_biomarker_catalog",
    "list_all_keys",
    # unit_lexicon
    "UNIT_TOKENS",
    "UnitToken",
    "detect_unit",
    "detect_unit_token_range",
    "list_all_tokens",
    "prepare_line",
]
