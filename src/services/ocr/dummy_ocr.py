"""더미 OCR 서비스 (테스트용)

실제 OCR 엔진 없이 고정된 헝가리어 검사결과지 텍스트를 반환합니다.
OCR 폴백 경로와 파서 연동 테스트에 사용합니다.
"""
from __future__ import annotations

import logging
from typing import List, Optional

from PIL import Image

from src.models.envelopes import OCRData, OCRItem, OCRMeta, OCRResultEnvelope
from .base import BaseOCRService

logger = logging.getLogger(__name__)


DUMMY_REPORT_LINES: List[str] = [
    "Központi Laboratórium",
    "Mintavétel dátuma: 2024.03.15.",
    "Glükóz 5,4 mmol/L (3,9-6,1)",
    "Kálium 4.2 mmol/L (3.5-5.1)",
    "CRP 1.20 mg/L (0.00-3.00)",
    "Oldal 1/1",
]


class DummyOCR(BaseOCRService):
    """테스트용 더미 OCR 서비스

    Args:
        lines: 페이지마다 반환할 인식 라인 (기본: DUMMY_REPORT_LINES)
    """

    def __init__(self, lines: Optional[List[str]] = None):
        self.lines = list(lines) if lines is not None else list(DUMMY_REPORT_LINES)
        self.calls = 0

    def extract_text(self, image: Image.Image) -> OCRResultEnvelope:
        """더미 인식 결과 반환 (이미지 내용은 무시)"""
        self.calls += 1
        logger.debug(f"더미 OCR 실행: image_size={image.size}")
        return OCRResultEnvelope(
            stage="ocr",
            data=OCRData(
                items=[
                    OCRItem(
                        rec_texts=list(self.lines),
                        rec_scores=[1.0] * len(self.lines),
                        dt_polys=[],
                    )
                ]
            ),
            meta=OCRMeta(items=len(self.lines), source="nparray", lang="dummy", engine="DummyOCR"),
        )
