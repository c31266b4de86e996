"""OCR 서비스 기본 인터페이스 테스트"""

import pytest
from PIL import Image

from src.models.envelopes import OCRData, OCRItem, OCRMeta, OCRResultEnvelope
from src.services.ocr.base import BaseOCRService
from src.services.ocr.dummy_ocr import DUMMY_REPORT_LINES, DummyOCR


class BoxOCR(BaseOCRService):
    """좌표가 있는 박스 단위 결과를 돌려주는 테스트 엔진"""

    def __init__(self, boxes):
        self.boxes = boxes

    def extract_text(self, image):
        texts = [text for text, _ in self.boxes]
        polys = [poly for _, poly in self.boxes]
        return OCRResultEnvelope(
            stage="ocr",
            data=OCRData(items=[OCRItem(rec_texts=texts, rec_scores=[0.9] * len(texts), dt_polys=polys)]),
            meta=OCRMeta(items=len(texts), source="nparray", lang="test", engine="BoxOCR"),
        )


class FailingOCR(BaseOCRService):
    def extract_text(self, image):
        raise RuntimeError("engine crashed")


def _rect(x0, y0, x1, y1):
    return [[x0, y0], [x1, y0], [x1, y1], [x0, y1]]


def test_dummy_ocr_extract_text(dummy_ocr_service, sample_image):
    """더미 OCR 텍스트 추출"""
    result = dummy_ocr_service.extract_text(sample_image)

    assert isinstance(result, OCRResultEnvelope)
    assert result.stage == "ocr"
    assert result.meta.engine == "DummyOCR"
    assert result.data.items[0].rec_texts == DUMMY_REPORT_LINES


def test_dummy_ocr_counts_pages(dummy_ocr_service):
    """페이지마다 한 번씩 인식"""
    for _ in range(3):
        dummy_ocr_service.recognize_text(Image.new("RGB", (100, 100), color="white"))

    assert dummy_ocr_service.calls == 3


def test_recognize_text_joins_lines(sample_image):
    ocr = DummyOCR(lines=["Kálium 4.2 mmol/L", "CRP 1.20 mg/L"])
    assert ocr.recognize_text(sample_image) == "Kálium 4.2 mmol/L\nCRP 1.20 mg/L"


def test_recognize_text_groups_boxes(sample_image):
    """좌표가 있는 결과는 같은 행끼리 묶음"""
    ocr = BoxOCR([
        ("4.2", _rect(80, 42, 110, 58)),
        ("Kálium", _rect(5, 40, 60, 56)),
        ("Glükóz", _rect(5, 10, 60, 26)),
        ("5,4", _rect(80, 11, 110, 27)),
    ])
    assert ocr.recognize_text(sample_image) == "Glükóz 5,4\nKálium 4.2"


def test_recognize_text_propagates_engine_error(sample_image):
    with pytest.raises(RuntimeError, match="engine crashed"):
        FailingOCR().recognize_text(sample_image)
