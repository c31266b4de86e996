"""OCR 서비스 패키지

스캔된 검사결과지 페이지 인식을 위한 OCR 엔진을 통일된 인터페이스로 제공합니다.
모든 서비스가 OCRResultEnvelope를 반환합니다.

주요 모듈:
- base: OCR 서비스 기본 인터페이스 (BaseOCRService)
- easy_ocr: EasyOCR 기반 구현체 (MyEasyOCR)
- dummy_ocr: 테스트용 더미 구현체 (DummyOCR)
- factory: OCR 서비스 팩토리 함수
"""

from .base import BaseOCRService
from .dummy_ocr import DummyOCR
from .easy_ocr import MyEasyOCR
from .factory import get_ocr_service

__all__ = [
    # 기본 인터페이스
    "BaseOCRService",
    # 서비스
    "MyEasyOCR",
    "DummyOCR",
    # 팩토리
    "get_ocr_service",
]
