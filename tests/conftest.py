"""테스트 픽스처 및 설정"""

from pathlib import Path

import pytest
from dotenv import load_dotenv
from PIL import Image

from src.services.ocr.dummy_ocr import DummyOCR
from tests.fixtures import SAMPLE_REPORT_TEXT, build_image_pdf, build_text_pdf

# 프로젝트 루트의 .env 파일 로드
env_path = Path(__file__).parent.parent / ".env"
load_dotenv(env_path)


@pytest.fixture
def dummy_ocr_service():
    """더미 OCR 서비스 픽스처"""
    return DummyOCR()


@pytest.fixture
def sample_image():
    """샘플 이미지 픽스처"""
    return Image.new("RGB", (100, 100), color="white")


@pytest.fixture
def sample_report_text():
    """헝가리어 검사결과지 샘플 텍스트"""
    return SAMPLE_REPORT_TEXT


@pytest.fixture
def text_pdf_bytes():
    """텍스트 레이어가 있는 2페이지 PDF"""
    return build_text_pdf([
        ["Collected: 2024-03-15", "CRP 1.20 mg/L (0.00-3.00)"],
        ["Potassium 4.2 mmol/L"],
    ])


@pytest.fixture
def scanned_pdf_bytes():
    """텍스트 레이어가 없는 2페이지 PDF"""
    return build_image_pdf(page_count=2)
