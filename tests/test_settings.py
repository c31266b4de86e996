"""설정 테스트"""

from unittest.mock import patch

from src.settings import Settings, validate_settings


class TestSettings:
    def test_defaults(self, monkeypatch):
        for name in ("OCR_PROVIDER", "OCR_LANGUAGES", "OCR_PAGE_WIDTH", "OCR_PAGE_HEIGHT"):
            monkeypatch.delenv(name, raising=False)
        s = Settings(_env_file=None)
        assert s.ocr_provider == "easyocr"
        assert s.ocr_languages == ["hu", "en"]
        assert (s.ocr_page_width, s.ocr_page_height) == (1800, 2400)
        assert s.extraction_timeout_seconds > 0

    def test_env_override(self, monkeypatch):
        monkeypatch.setenv("OCR_PROVIDER", "dummy")
        monkeypatch.setenv("OCR_LANGUAGES", '["de", "en"]')
        monkeypatch.setenv("EXTRACTION_TIMEOUT_SECONDS", "30")
        s = Settings(_env_file=None)
        assert s.ocr_provider == "dummy"
        assert s.ocr_languages == ["de", "en"]
        assert s.extraction_timeout_seconds == 30.0


class TestValidateSettings:
    def test_valid(self):
        with patch("src.settings.settings", Settings(_env_file=None, ocr_provider="dummy")):
            assert validate_settings() == {}

    def test_warnings(self):
        bad = Settings(
            _env_file=None,
            ocr_provider="easyocr",
            ocr_languages=[],
            ocr_page_width=0,
            extraction_timeout_seconds=-1,
        )
        with patch("src.settings.settings", bad):
            warnings = validate_settings()
        assert set(warnings) == {"ocr", "ocr_page", "extraction"}

    def test_zero_timeout_means_no_limit(self):
        """0 은 제한 없음으로 허용"""
        unlimited = Settings(_env_file=None, ocr_provider="dummy", extraction_timeout_seconds=0)
        with patch("src.settings.settings", unlimited):
            assert "extraction" not in validate_settings()
