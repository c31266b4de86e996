"""EasyOCR 기반 검사결과지 페이지 인식

스캔본 PDF 의 페이지 이미지를 EasyOCR(PyTorch)로 인식합니다.
정확도 우선(beam search 디코딩)으로 동작하며 인식 언어는 문서 기대 언어와
일반 폴백 언어로 제한합니다.

사용 예시:
    ocr = MyEasyOCR(languages=['hu', 'en'])
    page_text = ocr.recognize_text(page_image)
"""
from __future__ import annotations

import logging
from typing import Any, List, Optional, Sequence, Union

import numpy as np
from PIL import Image

from src.models.envelopes import OCRData, OCRItem, OCRMeta, OCRResultEnvelope
from .base import BaseOCRService

logger = logging.getLogger(__name__)

ImageInput = Union[np.ndarray, Image.Image, bytes]

DEFAULT_LANGUAGES = ['hu', 'en']


def _cuda_available() -> bool:
    """CUDA 디바이스 사용 가능 여부 (torch 미설치 시 False)"""
    try:
        import torch
    except ImportError:
        logger.warning("PyTorch가 설치되지 않았습니다. CPU 모드로 전환합니다.")
        return False
    if not torch.cuda.is_available():
        return False
    logger.info(f"GPU 모드 활성화: {torch.cuda.get_device_name(0)}")
    return True


def _decode_image_bytes(image_bytes: bytes) -> Optional[np.ndarray]:
    """인코딩된 이미지 바이트 -> RGB 배열 (OpenCV). 디코딩 실패 시 None"""
    import cv2

    buffer = np.frombuffer(image_bytes, np.uint8)
    bgr = cv2.imdecode(buffer, cv2.IMREAD_COLOR)
    if bgr is None:
        return None
    return cv2.cvtColor(bgr, cv2.COLOR_BGR2RGB)


def _polygon(bbox: Any) -> List[List[float]]:
    if isinstance(bbox, np.ndarray):
        return bbox.tolist()
    return [list(point) for point in bbox]


class MyEasyOCR(BaseOCRService):
    """EasyOCR 페이지 인식 서비스

    Args:
        lang: 메타데이터에 기록할 언어 식별자
        languages: EasyOCR 언어 코드 (비어 있으면 ['hu', 'en'])
        use_gpu: GPU 요청 여부 (CUDA 가 없으면 CPU 로 동작)
        decoder: 'beamsearch' (정확도 우선) 또는 'greedy'
        beam_width: beam search 폭
    """

    engine_name = 'EasyOCR'

    def __init__(
        self,
        lang: str = "hungarian",
        languages: Optional[List[str]] = None,
        use_gpu: bool = False,
        decoder: str = "beamsearch",
        beam_width: int = 5,
    ):
        self.lang = lang
        self.languages = list(languages) if languages else list(DEFAULT_LANGUAGES)
        self.decoder = decoder
        self.beam_width = beam_width
        self._reader = None

        self.use_gpu = bool(use_gpu) and _cuda_available()
        if use_gpu and not self.use_gpu:
            logger.warning("GPU 모드가 요청되었으나 CUDA를 사용할 수 없어 CPU로 실행합니다.")

    @property
    def reader(self):
        """EasyOCR Reader (첫 인식 시점에 모델 로드)"""
        if self._reader is None:
            self._reader = self._create_reader()
        return self._reader

    def _create_reader(self):
        try:
            import easyocr
        except ImportError as e:
            raise ImportError(
                "easyocr 패키지가 설치되지 않았습니다. pip install easyocr 로 설치해주세요."
            ) from e

        logger.info(f"EasyOCR Reader 초기화: languages={self.languages}, gpu={self.use_gpu}")
        return easyocr.Reader(lang_list=self.languages, gpu=self.use_gpu, verbose=False)

    def _predict(self, image_array: np.ndarray) -> List:
        """[(bbox, text, confidence), ...]"""
        return self.reader.readtext(
            image_array,
            detail=1,
            paragraph=False,
            decoder=self.decoder,
            beamWidth=self.beam_width,
        )

    def _convert_to_ocr_item(self, raw_results: Sequence) -> OCRItem:
        """EasyOCR 결과 -> OCRItem (형식이 어긋난 결과는 건너뜀)"""
        item = OCRItem()
        for entry in raw_results:
            try:
                bbox, text, confidence = entry
                polygon = _polygon(bbox)
            except (TypeError, ValueError) as e:
                logger.warning(f"OCR 결과 변환 실패: {e}, result={entry}")
                continue
            item.rec_texts.append(str(text))
            item.rec_scores.append(float(confidence))
            item.dt_polys.append(polygon)
        return item

    def _to_array(self, image: ImageInput) -> Optional[np.ndarray]:
        if isinstance(image, np.ndarray):
            return image
        if isinstance(image, Image.Image):
            return np.array(image.convert("RGB"))
        if isinstance(image, bytes):
            array = _decode_image_bytes(image)
            if array is None:
                logger.error("이미지 디코딩 실패: 지원되지 않는 형식이거나 손상된 이미지")
            return array
        logger.error(f"지원하지 않는 이미지 타입: {type(image)}")
        return None

    def run_ocr_from_nparray(self, image_array: np.ndarray) -> OCRResultEnvelope:
        """RGB 배열 인식. 엔진 오류는 전파"""
        item = self._convert_to_ocr_item(self._predict(image_array))
        return OCRResultEnvelope(
            stage='ocr',
            data=OCRData(items=[item]),
            meta=OCRMeta(items=len(item), source='nparray', lang=self.lang, engine=self.engine_name),
        )

    def run_ocr(self, image: ImageInput) -> Optional[OCRResultEnvelope]:
        """입력 타입(배열/PIL/인코딩 바이트)에 맞춰 인식. 해석할 수 없는 입력은 None"""
        array = self._to_array(image)
        if array is None:
            return None
        return self.run_ocr_from_nparray(array)

    def extract_text(self, image: Image.Image) -> OCRResultEnvelope:
        result = self.run_ocr(image)
        if result is None:
            raise ValueError(f"OCR 입력 이미지를 해석할 수 없습니다: {type(image)}")
        return result

    @property
    def is_gpu_enabled(self) -> bool:
        return self.use_gpu

    def get_device_info(self) -> dict:
        """엔진/디바이스 설정 요약"""
        return {
            "engine": self.engine_name,
            "use_gpu": self.use_gpu,
            "languages": self.languages,
            "lang": self.lang,
            "decoder": self.decoder,
            "beam_width": self.beam_width,
        }


__all__ = ["MyEasyOCR"]
