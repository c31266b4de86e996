"""PDF 처리 유틸리티"""

from pathlib import Path

from pdf2image import convert_from_bytes, pdfinfo_from_bytes
from PIL import Image


def pdf_page_count(pdf_bytes: bytes) -> int:
    """PDF 바이트 데이터의 페이지 수 (poppler pdfinfo)"""
    info = pdfinfo_from_bytes(pdf_bytes)
    return int(info.get("Pages", 0))


def render_pdf_page(
    pdf_bytes: bytes, page_number: int, size: tuple[int, int] = (1800, 2400)
) -> Image.Image:
    """PDF 한 페이지를 고정 크기 이미지로 변환

    Args:
        pdf_bytes: PDF 바이트 데이터
        page_number: 페이지 번호 (1부터 시작)
        size: 출력 이미지 크기 (폭, 높이)

    Returns:
        RGB 이미지

    Raises:
        ValueError: 해당 페이지를 렌더링하지 못한 경우
    """
    images = convert_from_bytes(
        pdf_bytes,
        size=size,
        first_page=page_number,
        last_page=page_number,
    )
    if not images:
        raise ValueError(f"페이지 렌더링 결과 없음: page={page_number}")
    return images[0].convert("RGB")


def is_pdf(file_path: str | Path) -> bool:
    """PDF 파일인지 확인"""
    return Path(file_path).suffix.lower() == ".pdf"
