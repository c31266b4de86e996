"""
검사결과지 가져오기 파이프라인 매니저

PDF bytes -> 텍스트 추출 (텍스트 레이어 / OCR 폴백) -> 파싱 -> 검토 대기 후보

- 스트리밍/콜백 지원: 각 단계의 진행 상황을 이벤트(dict)로 외부에 알림
  이벤트 공통 필드 예: {
    'stage': 'extract_text' | 'parse',
    'status': 'start' | 'end' | 'cancelled' | 'timeout',
    'ts': <epoch_seconds>,
    ... (추가 메타데이터)
  }
- 텍스트 추출(OCR 포함)은 동기/비동기 모두 작업 스레드에서 제한 시간 안에 실행되고,
  파싱은 추출이 끝난 뒤 호출 스레드에서 동기 실행됩니다.
- 취소/시간 초과는 예외가 아니라 빈 결과로 귀결됩니다 (저장은 항상 결과 반환 이후).
"""
from __future__ import annotations

import asyncio
import logging
import threading
import time
from concurrent.futures import ThreadPoolExecutor
from concurrent.futures import TimeoutError as FutureTimeoutError
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Optional

from src.models.envelopes import ExtractionMethod, ParseEnvelope, ParseMeta
from src.settings import settings

from .report_parser import ReportParseResult, parse_report
from .text_extractor import DocumentTextExtractor, ExtractionCancelled

logger = logging.getLogger(__name__)

Event = Dict[str, Any]
ProgressCB = Optional[Callable[[Event], None]]


@dataclass
class ImportOutcome:
    """문서 1건 가져오기 결과"""

    text: str = ""
    method: ExtractionMethod = "none"
    result: ReportParseResult = field(default_factory=ReportParseResult)
    cancelled: bool = False
    timed_out: bool = False

    def to_envelope(self) -> ParseEnvelope:
        """파싱 단계 envelope 으로 변환"""
        return ParseEnvelope(
            stage="parse",
            data=self.result.to_dict(),
            meta=ParseMeta(
                lines=len([ln for ln in self.text.splitlines() if ln.strip()]),
                items=len(self.result.items),
                matched=self.result.matched_count,
                report_date=self.result.report_date.isoformat() if self.result.report_date else None,
            ),
        )


class LabReportImporter:
    """
    검사결과지 가져오기 매니저.

    의존성은 생성자 주입으로 전달합니다. None 이면 기본 구성을 사용합니다.
    - extractor: DocumentTextExtractor (기본: 텍스트 레이어 + 설정된 OCR 서비스)
    - timeout: 문서 1건당 추출 제한 시간(초) (기본: settings.extraction_timeout_seconds)
    """

    def __init__(
        self,
        *,
        extractor: Optional[DocumentTextExtractor] = None,
        timeout: Optional[float] = None,
        progress_cb: ProgressCB = None,
    ) -> None:
        self.extractor = extractor or DocumentTextExtractor()
        self.timeout = settings.extraction_timeout_seconds if timeout is None else timeout
        self._progress_cb = progress_cb

    # ---------- 내부 유틸 ----------
    @staticmethod
    def _ts() -> float:
        return time.time()

    def _emit(self, event: Event, progress_cb: ProgressCB = None) -> None:
        cb = progress_cb or self._progress_cb
        if cb:
            try:
                cb(event)
            except Exception as e:
                # 콜백 오류는 파이프라인을 중단시키지 않음
                logger.debug(f"진행 콜백 오류 무시: {e}")

    def _extract(
        self,
        data: Optional[bytes],
        cancel_event: Optional[threading.Event],
        progress_cb: ProgressCB,
    ):
        self._emit({'stage': 'extract_text', 'status': 'start', 'ts': self._ts(),
                    'bytes': len(data) if data else 0}, progress_cb)
        envelope = self.extractor.extract(data, cancel_event)
        self._emit({'stage': 'extract_text', 'status': 'end', 'ts': self._ts(),
                    'method': envelope.meta.method, 'pages': envelope.meta.pages}, progress_cb)
        return envelope

    def parse_text(self, text: str, *, progress_cb: ProgressCB = None) -> ReportParseResult:
        """추출된 텍스트 -> 파싱 결과"""
        self._emit({'stage': 'parse', 'status': 'start', 'ts': self._ts()}, progress_cb)
        result = parse_report(text)
        self._emit({'stage': 'parse', 'status': 'end', 'ts': self._ts(),
                    'items': len(result.items)}, progress_cb)
        return result

    # ---------- 동기 실행 ----------
    def import_bytes(
        self,
        data: Optional[bytes],
        *,
        cancel_event: Optional[threading.Event] = None,
        progress_cb: ProgressCB = None,
    ) -> ImportOutcome:
        """PDF bytes 를 동기적으로 추출 + 파싱합니다.

        추출은 작업 스레드 1개에서 실행되며 비동기 경로와 같은 제한 시간이 적용됩니다.
        시간 초과 시 cancel_event 를 설정하고 작업 종료를 기다리지 않고 빈 결과를 반환합니다.
        """
        cancel_event = cancel_event or threading.Event()
        executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="lab-import")
        future = executor.submit(self._extract, data, cancel_event, progress_cb)
        limit = self.timeout if self.timeout and self.timeout > 0 else None
        try:
            envelope = future.result(timeout=limit)
        except FutureTimeoutError:
            cancel_event.set()
            logger.warning(f"텍스트 추출 시간 초과: timeout={self.timeout}s")
            self._emit({'stage': 'extract_text', 'status': 'timeout', 'ts': self._ts()}, progress_cb)
            return ImportOutcome(timed_out=True)
        except ExtractionCancelled:
            logger.info("가져오기 취소됨")
            self._emit({'stage': 'extract_text', 'status': 'cancelled', 'ts': self._ts()}, progress_cb)
            return ImportOutcome(cancelled=True)
        finally:
            executor.shutdown(wait=False)

        text = envelope.data.text
        return ImportOutcome(
            text=text,
            method=envelope.meta.method,
            result=self.parse_text(text, progress_cb=progress_cb),
        )

    # ---------- 비동기 실행 ----------
    async def import_bytes_async(
        self,
        data: Optional[bytes],
        *,
        cancel_event: Optional[threading.Event] = None,
        progress_cb: ProgressCB = None,
    ) -> ImportOutcome:
        """추출을 executor 에서 실행하고 제한 시간을 적용합니다.

        - 시간 초과: cancel_event 를 설정해 다음 페이지 경계에서 작업을 멈추고 빈 결과 반환
        - 취소(cancel_event 외부 설정 또는 태스크 취소): 빈 결과 반환 / CancelledError 전파
        """
        cancel_event = cancel_event or threading.Event()
        loop = asyncio.get_running_loop()
        future = loop.run_in_executor(
            None,
            lambda: self._extract(data, cancel_event, progress_cb),
        )
        try:
            if self.timeout and self.timeout > 0:
                envelope = await asyncio.wait_for(future, timeout=self.timeout)
            else:
                envelope = await future
        except asyncio.TimeoutError:
            cancel_event.set()
            logger.warning(f"텍스트 추출 시간 초과: timeout={self.timeout}s")
            self._emit({'stage': 'extract_text', 'status': 'timeout', 'ts': self._ts()}, progress_cb)
            return ImportOutcome(timed_out=True)
        except ExtractionCancelled:
            logger.info("가져오기 취소됨")
            self._emit({'stage': 'extract_text', 'status': 'cancelled', 'ts': self._ts()}, progress_cb)
            return ImportOutcome(cancelled=True)
        except asyncio.CancelledError:
            cancel_event.set()
            raise

        text = envelope.data.text
        return ImportOutcome(
            text=text,
            method=envelope.meta.method,
            result=self.parse_text(text, progress_cb=progress_cb),
        )


__all__ = ["ImportOutcome", "LabReportImporter"]
