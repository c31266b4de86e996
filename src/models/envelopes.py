"""파이프라인 Envelope 모델

검사결과지 가져오기 파이프라인 각 단계(OCR/텍스트 추출/파싱)별 데이터와
메타데이터를 일관되고 타입 안전하게 관리하는 Pydantic 모델 정의.
"""
from __future__ import annotations

from typing import Any, Dict, Generic, List, Literal, Optional, TypeVar
from typing_extensions import TypeAlias

from pydantic import BaseModel, Field


# =============================================================================
# 기본 타입 정의
# =============================================================================

Stage: TypeAlias = Literal['ocr', 'extract_text', 'parse']
"""파이프라인 처리 단계"""

ExtractionMethod: TypeAlias = Literal['native', 'ocr', 'none']
"""텍스트 추출 방식 (텍스트 레이어 / OCR 폴백 / 추출 불가)"""

TData = TypeVar('TData')
TMeta = TypeVar('TMeta')


class Envelope(BaseModel, Generic[TData, TMeta]):
    """파이프라인 단계별 데이터와 메타데이터를 감싸는 공통 Envelope 모델"""
    stage: Stage
    data: TData
    meta: TMeta
    version: str = '1.0'


# =============================================================================
# OCR 단계 모델
# =============================================================================

class OCRItem(BaseModel):
    """단일 이미지/페이지의 OCR 결과"""
    rec_texts: List[str] = Field(default_factory=list, description="인식된 텍스트 리스트")
    rec_scores: List[float] = Field(default_factory=list, description="인식 신뢰도 리스트")
    dt_polys: List[List[List[float]]] = Field(default_factory=list, description="텍스트 감지 영역 폴리곤")

    def __len__(self) -> int:
        return len(self.rec_texts)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'rec_texts': self.rec_texts,
            'rec_scores': self.rec_scores,
            'dt_polys': self.dt_polys,
        }


class OCRData(BaseModel):
    """OCR 단계 결과 데이터"""
    items: List[OCRItem] = Field(default_factory=list, description="OCR 결과 아이템 리스트")


class OCRMeta(BaseModel):
    """OCR 단계 결과 메타데이터"""
    items: Optional[int] = Field(default=None, description="총 인식된 텍스트 개수")
    source: Optional[Literal['bytes', 'nparray', 'path']] = Field(default=None, description="입력 소스 타입")
    lang: Optional[str] = Field(default=None, description="OCR 인식 언어")
    engine: Optional[str] = Field(default=None, description="사용된 OCR 엔진명")


# =============================================================================
# 텍스트 추출 단계 모델
# =============================================================================

class TextExtractionData(BaseModel):
    """텍스트 추출 단계 결과 데이터"""
    text: str = Field(default="", description="추출된 전체 텍스트")
    pages: List[str] = Field(default_factory=list, description="페이지별 텍스트")


class TextExtractionMeta(BaseModel):
    """텍스트 추출 단계 결과 메타데이터"""
    method: ExtractionMethod = Field(default='none', description="사용된 추출 방식")
    pages: int = Field(default=0, description="문서 페이지 수")
    failed_pages: List[int] = Field(default_factory=list, description="추출 실패로 빈 문자열 처리된 페이지 (0부터)")


# =============================================================================
# 파싱 단계 모델
# =============================================================================

class ParseMeta(BaseModel):
    """파싱 단계 결과 메타데이터"""
    lines: int = Field(default=0, description="처리된 비어있지 않은 라인 수")
    items: int = Field(default=0, description="생성된 후보 결과 수")
    matched: int = Field(default=0, description="카탈로그와 매칭된 후보 수")
    report_date: Optional[str] = Field(default=None, description="감지된 보고서 날짜 (ISO)")


# =============================================================================
# 타입 별칭 (Type Aliases)
# =============================================================================

OCRResultEnvelope = Envelope[OCRData, OCRMeta]
TextExtractionEnvelope = Envelope[TextExtractionData, TextExtractionMeta]
ParseEnvelope = Envelope[Dict[str, Any], ParseMeta]


__all__ = [
    'Stage',
    'ExtractionMethod',
    'Envelope',
    'OCRItem',
    'OCRData',
    'OCRMeta',
    'OCRResultEnvelope',
    'TextExtractionData',
    'TextExtractionMeta',
    'TextExtractionEnvelope',
    'ParseMeta',
    'ParseEnvelope',
]
