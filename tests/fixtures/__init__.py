"""테스트 픽스처 및 헬퍼 함수

이 모듈은 테스트에서 공통으로 사용하는 샘플 텍스트와 PDF 생성 헬퍼를 제공합니다.
"""

import io
from typing import List

from PIL import Image

SAMPLE_REPORT_TEXT = """Központi Laboratórium - Nyomtatva: 2024.04.02.
Beteg: Minta Elek
Mintavétel dátuma: 2024.03.15.

Glükóz 5,4 mmol/L (3,9-6,1)
Kálium 4.2 mmol/L (3.5-5.1)
CRP 1.20 mg/L (0.00-3.00)
HbA1c 5.4 %
Leukocyta 6.1 Giga/L
Megjegyzés: kontroll javasolt
Oldal 1/1
"""


def _pdf_escape(text: str) -> str:
    return text.replace("\\", "\\\\").replace("(", "\\(").replace(")", "\\)")


def build_text_pdf(pages: List[List[str]]) -> bytes:
    """텍스트 레이어가 있는 최소 PDF 생성 (Helvetica, ASCII 라인만)

    Args:
        pages: 페이지별 라인 리스트

    Returns:
        PDF 바이트
    """
    objects: List[bytes] = []
    font_id = 3 + 2 * len(pages)
    kids = " ".join(f"{3 + 2 * i} 0 R" for i in range(len(pages)))

    objects.append(b"<< /Type /Catalog /Pages 2 0 R >>")
    objects.append(f"<< /Type /Pages /Kids [{kids}] /Count {len(pages)} >>".encode("ascii"))
    for i, lines in enumerate(pages):
        page_id = 3 + 2 * i
        content_id = page_id + 1
        ops = ["BT", "/F1 12 Tf", "72 720 Td"]
        for n, line in enumerate(lines):
            if n:
                ops.append("0 -18 Td")
            ops.append(f"({_pdf_escape(line)}) Tj")
        ops.append("ET")
        stream = "\n".join(ops).encode("ascii")
        objects.append(
            (
                f"<< /Type /Page /Parent 2 0 R /MediaBox [0 0 612 792] "
                f"/Contents {content_id} 0 R /Resources << /Font << /F1 {font_id} 0 R >> >> >>"
            ).encode("ascii")
        )
        objects.append(
            f"<< /Length {len(stream)} >>\nstream\n".encode("ascii") + stream + b"\nendstream"
        )
    objects.append(b"<< /Type /Font /Subtype /Type1 /BaseFont /Helvetica >>")

    out = io.BytesIO()
    out.write(b"%PDF-1.4\n")
    offsets = []
    for number, body in enumerate(objects, start=1):
        offsets.append(out.tell())
        out.write(f"{number} 0 obj\n".encode("ascii") + body + b"\nendobj\n")
    xref_at = out.tell()
    out.write(f"xref\n0 {len(objects) + 1}\n".encode("ascii"))
    out.write(b"0000000000 65535 f \n")
    for offset in offsets:
        out.write(f"{offset:010d} 00000 n \n".encode("ascii"))
    out.write(
        f"trailer\n<< /Size {len(objects) + 1} /Root 1 0 R >>\nstartxref\n{xref_at}\n%%EOF\n".encode("ascii")
    )
    return out.getvalue()


def build_image_pdf(page_count: int = 1) -> bytes:
    """텍스트 레이어 없는(스캔본 같은) PDF 생성"""
    pages = [Image.new("RGB", (200, 280), color="white") for _ in range(page_count)]
    buffer = io.BytesIO()
    pages[0].save(buffer, format="PDF", save_all=True, append_images=pages[1:])
    return buffer.getvalue()
