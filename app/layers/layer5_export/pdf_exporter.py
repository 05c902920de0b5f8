"""PDF exporter - single page Helvetica text PDF.

외부 PDF 라이브러리 없이 최소한의 PDF 1.4 문서를 직접 작성합니다.
객체 구성은 항상 5개로 고정됩니다.
1: Catalog, 2: Pages, 3: Page, 4: Font (Helvetica), 5: Content stream
한 페이지에 들어가지 않는 줄은 잘라냅니다.
"""

import logging
from typing import Any

from .document_text import normalize_text, resolve_estimate_data, to_document_text

logger = logging.getLogger(__name__)

PAGE_WIDTH = 612
PAGE_HEIGHT = 792
MARGIN_X = 50
MARGIN_TOP = 60
FONT_SIZE = 11
LINE_HEIGHT = 14
MAX_CHARS_PER_LINE = 92
MAX_LINES = max((PAGE_HEIGHT - MARGIN_TOP - MARGIN_X) // LINE_HEIGHT, 1)


def wrap_text(raw_text: Any, max_chars: int = MAX_CHARS_PER_LINE) -> list[str]:
    """
    단어 단위 줄바꿈.

    - 빈 줄(공백만 있는 줄 포함)은 빈 문자열로 유지
    - max_chars보다 긴 단어는 max_chars 단위로 강제 분할
    """
    lines: list[str] = []

    for source_line in normalize_text(raw_text).split("\n"):
        if not source_line.strip():
            lines.append("")
            continue

        current = ""
        for word in source_line.split():
            if current and len(current) + 1 + len(word) <= max_chars:
                current += f" {word}"
                continue

            if current:
                lines.append(current)
                current = ""

            if len(word) <= max_chars:
                current = word
            else:
                lines.extend(word[i:i + max_chars] for i in range(0, len(word), max_chars))

        if current:
            lines.append(current)

    return lines


def escape_pdf_text(value: str) -> str:
    """PDF 문자열 리터럴 이스케이프: \\ ( )"""
    return value.replace("\\", "\\\\").replace("(", "\\(").replace(")", "\\)")


def build_pdf(lines: list[str]) -> bytes:
    """줄 목록으로 단일 페이지 PDF 바이트 생성 (MAX_LINES 초과분은 버림)."""
    start_y = PAGE_HEIGHT - MARGIN_TOP
    page_lines = lines[:MAX_LINES]

    commands = []
    for index, line in enumerate(page_lines):
        escaped = escape_pdf_text(line)
        if index == 0:
            commands.append(f"{MARGIN_X} {start_y} Td ({escaped}) Tj")
        else:
            commands.append(f"T* ({escaped}) Tj")

    content_stream = f"BT\n/F1 {FONT_SIZE} Tf\n{LINE_HEIGHT} TL\n" + "\n".join(commands) + "\nET"
    stream_length = len(content_stream.encode("utf-8"))

    objects = [
        "1 0 obj\n<< /Type /Catalog /Pages 2 0 R >>\nendobj\n",
        "2 0 obj\n<< /Type /Pages /Kids [3 0 R] /Count 1 >>\nendobj\n",
        f"3 0 obj\n<< /Type /Page /Parent 2 0 R /MediaBox [0 0 {PAGE_WIDTH} {PAGE_HEIGHT}] "
        f"/Resources << /Font << /F1 4 0 R >> >> /Contents 5 0 R >>\nendobj\n",
        "4 0 obj\n<< /Type /Font /Subtype /Type1 /BaseFont /Helvetica >>\nendobj\n",
        f"5 0 obj\n<< /Length {stream_length} >>\nstream\n{content_stream}\nendstream\nendobj\n",
    ]

    header = b"%PDF-1.4\n"
    body = bytearray(header)
    offsets = []
    for obj in objects:
        offsets.append(len(body))
        body.extend(obj.encode("utf-8"))

    xref_start = len(body)
    xref = [f"xref\n0 {len(objects) + 1}\n", "0000000000 65535 f \n"]
    xref.extend(f"{offset:010d} 00000 n \n" for offset in offsets)
    trailer = (
        f"trailer\n<< /Size {len(objects) + 1} /Root 1 0 R >>\n"
        f"startxref\n{xref_start}\n%%EOF\n"
    )

    body.extend("".join(xref).encode("utf-8"))
    body.extend(trailer.encode("utf-8"))
    return bytes(body)


def create_pdf_buffer(estimate_or_input: Any) -> bytes:
    """
    추정 결과(또는 추정 입력)를 PDF 바이트로 변환.

    Raises:
        ExportError: 추정 결과로 해석할 수 없는 입력
    """
    estimate = resolve_estimate_data(estimate_or_input)
    lines = wrap_text(to_document_text(estimate))
    if len(lines) > MAX_LINES:
        logger.info(f"[PdfExporter] {len(lines) - MAX_LINES}줄이 페이지를 넘어 생략됨")

    pdf = build_pdf(lines)
    logger.debug(f"[PdfExporter] PDF 생성 완료: {len(pdf)} bytes")
    return pdf
