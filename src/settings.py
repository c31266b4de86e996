"""애플리케이션 설정 관리"""

import logging
from typing import List, Literal

from dotenv import load_dotenv
from pydantic import Field
from pydantic_settings import BaseSettings

# .env 파일 로드
load_dotenv()


class Settings(BaseSettings):
    """애플리케이션 설정"""

    # OCR 설정
    ocr_provider: Literal["easyocr", "dummy"] = Field(
        default="easyocr", description="OCR 제공자 (easyocr | dummy)"
    )
    ocr_languages: List[str] = Field(
        default_factory=lambda: ["hu", "en"],
        description="OCR 인식 언어 (문서 기대 언어 + 일반 폴백)",
    )
    ocr_use_gpu: bool = Field(default=False, description="OCR GPU 사용 여부")
    ocr_page_width: int = Field(default=1800, description="OCR용 페이지 래스터 폭 (px)")
    ocr_page_height: int = Field(default=2400, description="OCR용 페이지 래스터 높이 (px)")

    # 추출 설정
    extraction_timeout_seconds: float = Field(
        default=120.0, description="문서 1건당 텍스트 추출 제한 시간 (초, 0이면 제한 없음)"
    )

    # 앱 설정
    app_debug: bool = Field(default=False, description="디버그 모드")
    log_level: str = Field(default="INFO", description="로그 레벨")
    max_upload_size_mb: int = Field(default=10, description="최대 업로드 크기 (MB)")

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False


# 전역 설정 인스턴스
settings = Settings()


def configure_logging() -> None:
    """log_level 설정을 루트 로거에 적용"""
    level = logging.DEBUG if settings.app_debug else settings.log_level.upper()
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


def validate_settings() -> dict[str, str]:
    """설정 유효성 검사 및 경고 메시지 반환"""
    warnings = {}

    # OCR 설정 검증
    if settings.ocr_provider == "easyocr" and not settings.ocr_languages:
        warnings["ocr"] = "EasyOCR 사용을 위해서는 OCR_LANGUAGES가 최소 1개 필요합니다."

    if settings.ocr_page_width <= 0 or settings.ocr_page_height <= 0:
        warnings["ocr_page"] = (
            f"OCR 페이지 크기가 올바르지 않습니다: "
            f"{settings.ocr_page_width}x{settings.ocr_page_height}"
        )

    # 추출 설정 검증
    if settings.extraction_timeout_seconds < 0:
        warnings["extraction"] = (
            "EXTRACTION_TIMEOUT_SECONDS는 음수일 수 없습니다. 제한 없이 실행하려면 0을 사용하세요."
        )

    return warnings
