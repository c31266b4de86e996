"""Envelope 모델 테스트

OCRResultEnvelope, TextExtractionEnvelope, ParseEnvelope 등 Pydantic 모델 검증
"""

import pytest
from pydantic import ValidationError

from src.models.envelopes import (
    Envelope,
    OCRData,
    OCRItem,
    OCRMeta,
    OCRResultEnvelope,
    ParseEnvelope,
    ParseMeta,
    TextExtractionData,
    TextExtractionEnvelope,
    TextExtractionMeta,
)


class TestOCRItem:
    """OCRItem 모델 테스트"""

    def test_create_ocr_item(self):
        item = OCRItem(
            rec_texts=["Kálium", "4.2", "mmol/L"],
            rec_scores=[0.95, 0.92, 0.88],
            dt_polys=[[[10, 100], [50, 100], [50, 120], [10, 120]]] * 3,
        )
        assert len(item) == 3
        assert item.dt_polys[0][2] == [50, 120]

    def test_ocr_item_empty(self):
        item = OCRItem()
        assert item.rec_texts == []
        assert len(item) == 0
        assert item.dt_polys == []

    def test_to_dict(self):
        item = OCRItem(rec_texts=["CRP"], rec_scores=[0.9], dt_polys=[])
        assert item.to_dict() == {"rec_texts": ["CRP"], "rec_scores": [0.9], "dt_polys": []}


class TestOCRResultEnvelope:
    def test_create(self):
        envelope = OCRResultEnvelope(
            stage="ocr",
            data=OCRData(items=[OCRItem(rec_texts=["CRP"])]),
            meta=OCRMeta(items=1, source="nparray", lang="hungarian", engine="EasyOCR"),
        )
        assert envelope.version == "1.0"
        assert envelope.data.items[0].rec_texts == ["CRP"]

    def test_invalid_stage(self):
        with pytest.raises(ValidationError):
            OCRResultEnvelope(stage="merge", data=OCRData(), meta=OCRMeta())

    def test_invalid_source(self):
        with pytest.raises(ValidationError):
            OCRMeta(source="camera")


class TestTextExtractionEnvelope:
    def test_defaults(self):
        meta = TextExtractionMeta()
        assert meta.method == "none"
        assert meta.pages == 0
        assert meta.failed_pages == []

    def test_create(self):
        envelope = TextExtractionEnvelope(
            stage="extract_text",
            data=TextExtractionData(text="a\nb\n", pages=["a", "b"]),
            meta=TextExtractionMeta(method="native", pages=2),
        )
        assert envelope.data.pages == ["a", "b"]

    def test_invalid_method(self):
        with pytest.raises(ValidationError):
            TextExtractionMeta(method="vision")


class TestParseEnvelope:
    def test_serialization(self):
        envelope = ParseEnvelope(
            stage="parse",
            data={"report_date": None, "items": []},
            meta=ParseMeta(lines=3),
        )
        dumped = envelope.model_dump()
        assert dumped["stage"] == "parse"
        assert dumped["meta"] == {"lines": 3, "items": 0, "matched": 0, "report_date": None}

    def test_generic_envelope(self):
        envelope = Envelope[dict, dict](stage="parse", data={"x": 1}, meta={})
        assert envelope.data == {"x": 1}
