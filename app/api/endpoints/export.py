"""
추정 결과 내보내기 API입니다.
PDF / DOCX 파일을 첨부 파일(attachment)로 내려줍니다.
"""

from collections.abc import Mapping
from typing import Any, Callable

from fastapi import APIRouter, Body
from fastapi.responses import Response

from app.layers.layer5_export import create_docx_buffer, create_pdf_buffer, export_filename
from app.utils.validation import validate_estimate_input

router = APIRouter()

PDF_MEDIA_TYPE = "application/pdf"
DOCX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"


def _export(body: Any, build: Callable[[Any], bytes], media_type: str, extension: str) -> Response:
    # estimateData가 없으면 원시 추정 입력으로 보고 먼저 검증합니다.
    if not (isinstance(body, Mapping) and isinstance(body.get("estimateData"), Mapping)):
        validate_estimate_input(body)

    content = build(body)
    return Response(
        content=content,
        media_type=media_type,
        headers={"Content-Disposition": f'attachment; filename="{export_filename(extension)}"'},
    )


@router.post("/pdf")
def export_pdf(body: Any = Body(...)) -> Response:
    """추정 결과를 PDF로 내보내기. 본문은 {"estimateData": {...}} 또는 추정 입력."""
    return _export(body, create_pdf_buffer, PDF_MEDIA_TYPE, "pdf")


@router.post("/docx")
def export_docx(body: Any = Body(...)) -> Response:
    """추정 결과를 DOCX로 내보내기. 본문은 {"estimateData": {...}} 또는 추정 입력."""
    return _export(body, create_docx_buffer, DOCX_MEDIA_TYPE, "docx")
