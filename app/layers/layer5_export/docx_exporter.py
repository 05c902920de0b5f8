"""DOCX exporter - minimal WordprocessingML package.

패키지는 세 파트만 포함합니다.
- [Content_Types].xml
- _rels/.rels
- word/document.xml (한 줄 = 한 문단)
"""

import logging
from datetime import datetime
from typing import Any, Optional

from .document_text import normalize_text, resolve_estimate_data, to_document_text
from .zip_writer import ZipEntry, create_zip_buffer

logger = logging.getLogger(__name__)

CONTENT_TYPES_XML = """<?xml version="1.0" encoding="UTF-8" standalone="yes"?>
<Types xmlns="http://schemas.openxmlformats.org/package/2006/content-types">
  <Default Extension="rels" ContentType="application/vnd.openxmlformats-package.relationships+xml"/>
  <Default Extension="xml" ContentType="application/xml"/>
  <Override PartName="/word/document.xml" ContentType="application/vnd.openxmlformats-officedocument.wordprocessingml.document.main+xml"/>
</Types>"""

RELS_XML = """<?xml version="1.0" encoding="UTF-8" standalone="yes"?>
<Relationships xmlns="http://schemas.openxmlformats.org/package/2006/relationships">
  <Relationship Id="rId1" Type="http://schemas.openxmlformats.org/officeDocument/2006/relationships/officeDocument" Target="word/document.xml"/>
</Relationships>"""

DOCUMENT_XML_TEMPLATE = """<?xml version="1.0" encoding="UTF-8" standalone="yes"?>
<w:document xmlns:w="http://schemas.openxmlformats.org/wordprocessingml/2006/main">
  <w:body>
    {paragraphs}
    <w:sectPr>
      <w:pgSz w:w="12240" w:h="15840"/>
      <w:pgMar w:top="1440" w:right="1440" w:bottom="1440" w:left="1440" w:header="720" w:footer="720" w:gutter="0"/>
    </w:sectPr>
  </w:body>
</w:document>"""

BLANK_PARAGRAPH = '<w:p><w:r><w:t xml:space="preserve"> </w:t></w:r></w:p>'


def xml_escape(value: Any) -> str:
    return (
        str(value)
        .replace("&", "&amp;")
        .replace("<", "&lt;")
        .replace(">", "&gt;")
        .replace('"', "&quot;")
        .replace("'", "&apos;")
    )


def to_word_paragraphs(text: str) -> str:
    """줄마다 <w:p> 문단 하나. 빈 줄은 공백 하나짜리 문단."""
    paragraphs = []
    for line in normalize_text(text).split("\n"):
        if not line.strip():
            paragraphs.append(BLANK_PARAGRAPH)
        else:
            paragraphs.append(
                f'<w:p><w:r><w:t xml:space="preserve">{xml_escape(line)}</w:t></w:r></w:p>'
            )
    return "".join(paragraphs)


def build_docx_entries(document_text: str) -> list[ZipEntry]:
    document_xml = DOCUMENT_XML_TEMPLATE.format(paragraphs=to_word_paragraphs(document_text))
    return [
        ZipEntry("[Content_Types].xml", CONTENT_TYPES_XML),
        ZipEntry("_rels/.rels", RELS_XML),
        ZipEntry("word/document.xml", document_xml),
    ]


def create_docx_buffer(estimate_or_input: Any, now: Optional[datetime] = None) -> bytes:
    """
    추정 결과(또는 추정 입력)를 DOCX 바이트로 변환.

    Args:
        estimate_or_input: EstimateResult, 추정 결과 딕셔너리, estimateData 래퍼 또는 추정 입력
        now: ZIP 엔트리 타임스탬프 (기본값: 현재 UTC)

    Raises:
        ExportError: 추정 결과로 해석할 수 없는 입력
    """
    estimate = resolve_estimate_data(estimate_or_input)
    docx = create_zip_buffer(build_docx_entries(to_document_text(estimate)), now=now)
    logger.debug(f"[DocxExporter] DOCX 생성 완료: {len(docx)} bytes")
    return docx
