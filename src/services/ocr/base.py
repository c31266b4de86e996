"""OCR 서비스 기본 인터페이스

텍스트 레이어가 없는 PDF 페이지를 인식하는 엔진(MyEasyOCR, DummyOCR)의 공통 계약.
엔진은 extract_text() 하나만 구현하면 되고, 텍스트 추출기는 recognize_text() 로
페이지 단위 텍스트를 받아 갑니다.
"""
from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import List

from PIL import Image

from src.models.envelopes import OCRResultEnvelope
from .line_grouping import item_lines

logger = logging.getLogger(__name__)


class BaseOCRService(ABC):
    """페이지 이미지 -> OCRResultEnvelope"""

    @abstractmethod
    def extract_text(self, image: Image.Image) -> OCRResultEnvelope:
        """페이지 이미지 한 장을 인식합니다.

        Args:
            image: 렌더링된 페이지 (PIL Image)

        Returns:
            OCRResultEnvelope

        Raises:
            엔진 오류는 그대로 전파 (호출 측에서 해당 페이지를 실패로 기록)
        """

    def recognize_text(self, image: Image.Image) -> str:
        """페이지 텍스트: 인식 박스를 시각적 라인으로 묶어 위→아래 줄바꿈 연결"""
        envelope = self.extract_text(image)
        lines: List[str] = []
        for item in envelope.data.items:
            lines.extend(item_lines(item))
        logger.debug(f"페이지 인식 라인 수: {len(lines)}")
        return "\n".join(lines)


__all__ = [
    "BaseOCRService",
]
