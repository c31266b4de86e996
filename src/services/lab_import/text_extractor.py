"""
검사결과지 텍스트 추출 모듈

PDF 바이트에서 텍스트를 얻는 두 가지 전략과 이를 묶는 추출기를 제공합니다.

- NativeTextExtractor: PDF 텍스트 레이어 직접 추출 (pdfplumber)
- OCRTextExtractor: 페이지를 고정 크기 이미지로 렌더링 후 OCR (pdf2image + OCR 서비스)
- DocumentTextExtractor: 텍스트 레이어 우선, 결과가 공백뿐이면 OCR 폴백

실패 정책:
- 페이지 단위 실패(손상 페이지, 인식 오류)는 해당 페이지를 빈 문자열로 처리하고 계속 진행
- 문서 자체를 열 수 없으면 빈 문자열
- 취소 요청(cancel_event)은 페이지 사이에서 확인하며 ExtractionCancelled 로 중단
"""
from __future__ import annotations

import io
import logging
import threading
from dataclasses import dataclass, field
from typing import Callable, List, Optional, Protocol, Tuple

import pdfplumber

from src.models.envelopes import (
    ExtractionMethod,
    TextExtractionData,
    TextExtractionEnvelope,
    TextExtractionMeta,
)
from src.services.ocr.base import BaseOCRService
from src.settings import settings
from src.utils.pdf import pdf_page_count, render_pdf_page

logger = logging.getLogger(__name__)

PageRenderer = Callable[[bytes, int, Tuple[int, int]], object]


class ExtractionCancelled(Exception):
    """진행 중인 텍스트 추출이 취소됨"""


@dataclass
class PageTexts:
    """페이지별 텍스트 + 실패 페이지 인덱스"""

    pages: List[str] = field(default_factory=list)
    failed: List[int] = field(default_factory=list)

    def add(self, text: str) -> None:
        self.pages.append(text)

    def add_failed(self) -> None:
        self.failed.append(len(self.pages))
        self.pages.append("")

    def joined(self) -> str:
        """각 페이지 뒤에 줄바꿈을 붙여 연결"""
        return "".join(f"{page}\n" for page in self.pages)


def _check_cancelled(cancel_event: Optional[threading.Event]) -> None:
    if cancel_event is not None and cancel_event.is_set():
        raise ExtractionCancelled("텍스트 추출이 취소되었습니다.")


class TextExtractionStrategy(Protocol):
    """PDF 바이트 -> 페이지별 텍스트"""

    method: ExtractionMethod

    def extract_pages(
        self, pdf_bytes: bytes, cancel_event: Optional[threading.Event] = None
    ) -> PageTexts:
        ...


class NativeTextExtractor:
    """PDF 텍스트 레이어 추출 (pdfplumber)"""

    method: ExtractionMethod = "native"

    def extract_pages(
        self, pdf_bytes: bytes, cancel_event: Optional[threading.Event] = None
    ) -> PageTexts:
        result = PageTexts()
        with pdfplumber.open(io.BytesIO(pdf_bytes)) as pdf:
            for index, page in enumerate(pdf.pages):
                _check_cancelled(cancel_event)
                try:
                    result.add(page.extract_text() or "")
                except Exception as e:
                    logger.warning(f"텍스트 레이어 추출 실패: page={index}, error={e}")
                    result.add_failed()
        return result


class OCRTextExtractor:
    """페이지 렌더링 + OCR 추출

    Args:
        ocr_service: 페이지 이미지를 인식할 OCR 서비스
        page_size: 렌더링 크기 (폭, 높이)
        renderer: 페이지 렌더러 (기본: src.utils.pdf.render_pdf_page)
        page_counter: 페이지 수 계산기 (기본: src.utils.pdf.pdf_page_count)
    """

    method: ExtractionMethod = "ocr"

    def __init__(
        self,
        ocr_service: BaseOCRService,
        page_size: Optional[Tuple[int, int]] = None,
        renderer: Optional[PageRenderer] = None,
        page_counter: Optional[Callable[[bytes], int]] = None,
    ):
        self.ocr_service = ocr_service
        self.page_size = page_size or (settings.ocr_page_width, settings.ocr_page_height)
        self._render = renderer or render_pdf_page
        self._count_pages = page_counter or pdf_page_count

    def extract_pages(
        self, pdf_bytes: bytes, cancel_event: Optional[threading.Event] = None
    ) -> PageTexts:
        result = PageTexts()
        total = self._count_pages(pdf_bytes)
        logger.info(f"OCR 폴백 시작: pages={total}, size={self.page_size}")
        for index in range(total):
            _check_cancelled(cancel_event)
            try:
                image = self._render(pdf_bytes, index + 1, self.page_size)
                result.add(self.ocr_service.recognize_text(image))
            except Exception as e:
                logger.warning(f"페이지 OCR 실패: page={index}, error={e}")
                result.add_failed()
        return result


class DocumentTextExtractor:
    """텍스트 레이어 우선, OCR 폴백 추출기

    사용 예시:
        extractor = DocumentTextExtractor(ocr=OCRTextExtractor(get_ocr_service()))
        text = extractor.extract_text(pdf_bytes)
    """

    def __init__(
        self,
        native: Optional[TextExtractionStrategy] = None,
        ocr: Optional[TextExtractionStrategy] = None,
    ):
        self.native = native or NativeTextExtractor()
        self._ocr = ocr

    @property
    def ocr(self) -> TextExtractionStrategy:
        """OCR 전략 (없으면 설정된 OCR 서비스로 lazy 생성)"""
        if self._ocr is None:
            from src.services.ocr.factory import get_ocr_service

            self._ocr = OCRTextExtractor(get_ocr_service())
        return self._ocr

    def extract(
        self,
        pdf_bytes: Optional[bytes],
        cancel_event: Optional[threading.Event] = None,
    ) -> TextExtractionEnvelope:
        """텍스트 추출 결과를 envelope 으로 반환"""
        if not pdf_bytes:
            return self._envelope(PageTexts(), "none")

        try:
            pages = self.native.extract_pages(pdf_bytes, cancel_event)
        except ExtractionCancelled:
            raise
        except Exception as e:
            logger.error(f"PDF 문서를 열 수 없습니다: {e}")
            return self._envelope(PageTexts(), "none")

        text = pages.joined()
        if text.strip():
            return self._envelope(pages, "native")

        logger.info("텍스트 레이어가 비어 있어 OCR로 전환합니다.")
        try:
            pages = self.ocr.extract_pages(pdf_bytes, cancel_event)
        except ExtractionCancelled:
            raise
        except Exception as e:
            logger.error(f"OCR 추출 실패: {e}")
            return self._envelope(PageTexts(), "none")
        return self._envelope(pages, "ocr")

    def extract_text(
        self,
        pdf_bytes: Optional[bytes],
        cancel_event: Optional[threading.Event] = None,
    ) -> str:
        """추출된 전체 텍스트 (실패 시 빈 문자열)"""
        return self.extract(pdf_bytes, cancel_event).data.text

    @staticmethod
    def _envelope(pages: PageTexts, method: ExtractionMethod) -> TextExtractionEnvelope:
        return TextExtractionEnvelope(
            stage="extract_text",
            data=TextExtractionData(text=pages.joined(), pages=list(pages.pages)),
            meta=TextExtractionMeta(
                method=method,
                pages=len(pages.pages),
                failed_pages=list(pages.failed),
            ),
        )


def extract_text(pdf_bytes: Optional[bytes]) -> str:
    """기본 구성(텍스트 레이어 + 설정된 OCR 서비스)으로 텍스트 추출"""
    return DocumentTextExtractor().extract_text(pdf_bytes)


__all__ = [
    "ExtractionCancelled",
    "PageTexts",
    "TextExtractionStrategy",
    "NativeTextExtractor",
    "OCRTextExtractor",
    "DocumentTextExtractor",
    "extract_text",
]
