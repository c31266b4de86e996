"""OCR 텍스트 박스 -> 시각적 라인 묶기

EasyOCR 는 표 한 행의 셀(항목명/결과값/단위/참고치)을 각각 별도 박스로 돌려줍니다.
파서는 인쇄된 한 줄 단위 텍스트를 기대하므로, 박스 좌표로 같은 행을 묶어 연결합니다.

정책:
- y_center 기준 정렬 후 위→아래 스윕하며 라인 형성
- tau = median(박스 높이) * alpha
- 라인 첫 박스의 y_center ± tau 밴드 안에 중심이 들어오면 같은 라인
- 라인 내 정렬: x_left 오름차순 (같으면 입력 순서)
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import List, Sequence

from src.models.envelopes import OCRItem

DEFAULT_ALPHA = 0.7
_FALLBACK_HEIGHT = 16.0


@dataclass(frozen=True)
class TextBox:
    """인식 텍스트 + 축 정렬 경계"""

    text: str
    x_left: float
    y_top: float
    y_bottom: float

    @property
    def y_center(self) -> float:
        return (self.y_top + self.y_bottom) / 2

    @property
    def height(self) -> float:
        return self.y_bottom - self.y_top


def _median(values: Sequence[float]) -> float:
    s = sorted(values)
    n = len(s)
    return s[n // 2] if n % 2 == 1 else (s[n // 2 - 1] + s[n // 2]) / 2


def boxes_from_item(item: OCRItem) -> List[TextBox]:
    """OCRItem 의 (rec_texts, dt_polys) 를 TextBox 목록으로 변환"""
    boxes: List[TextBox] = []
    for text, poly in zip(item.rec_texts, item.dt_polys):
        xs = [point[0] for point in poly]
        ys = [point[1] for point in poly]
        boxes.append(TextBox(text=text, x_left=min(xs), y_top=min(ys), y_bottom=max(ys)))
    return boxes


def group_boxes_by_line(boxes: Sequence[TextBox], alpha: float = DEFAULT_ALPHA) -> List[List[TextBox]]:
    """박스를 라인 단위로 묶어 2차원 목록으로 반환 (위→아래, 라인 내 좌→우)"""
    if not boxes:
        return []

    heights = [b.height for b in boxes if b.height > 0]
    tau = max(1.0, (_median(heights) if heights else _FALLBACK_HEIGHT) * alpha)

    lines: List[List[TextBox]] = []
    band_center = None
    for box in sorted(boxes, key=lambda b: (b.y_center, b.y_top)):
        if band_center is not None and abs(box.y_center - band_center) <= tau:
            lines[-1].append(box)
        else:
            lines.append([box])
            band_center = box.y_center

    return [sorted(line, key=lambda b: b.x_left) for line in lines]


def item_lines(item: OCRItem, alpha: float = DEFAULT_ALPHA) -> List[str]:
    """OCRItem -> 시각적 라인 텍스트 목록

    박스 좌표가 텍스트와 1:1 로 없으면(이미 라인 단위인 결과) 인식 순서를 그대로 사용합니다.

    사용 예시:
        >>> item = OCRItem(
        ...     rec_texts=["1.20", "CRP"],
        ...     dt_polys=[[[80, 10], [120, 10], [120, 30], [80, 30]],
        ...               [[10, 12], [50, 12], [50, 31], [10, 31]]],
        ... )
        >>> item_lines(item)
        ['CRP 1.20']
    """
    polys = item.dt_polys
    if len(polys) != len(item.rec_texts) or any(not poly for poly in polys):
        return list(item.rec_texts)
    lines = group_boxes_by_line(boxes_from_item(item), alpha)
    return [" ".join(box.text for box in line) for line in lines]


__all__ = ["TextBox", "boxes_from_item", "group_boxes_by_line", "item_lines"]
