"""Layer 5: Export - PDF and DOCX binaries."""

from .document_text import (
    export_filename,
    resolve_estimate_data,
    to_document_text,
    normalize_text,
)
from .pdf_exporter import (
    create_pdf_buffer,
    build_pdf,
    wrap_text,
    escape_pdf_text,
    MAX_LINES,
)
from .zip_writer import (
    ZipEntry,
    create_zip_buffer,
    crc32,
    to_dos_date_time,
)
from .docx_exporter import (
    create_docx_buffer,
    to_word_paragraphs,
    xml_escape,
)

__all__ = [
    "export_filename",
    "resolve_estimate_data",
    "to_document_text",
    "normalize_text",
    "create_pdf_buffer",
    "build_pdf",
    "wrap_text",
    "escape_pdf_text",
    "MAX_LINES",
    "ZipEntry",
    "create_zip_buffer",
    "crc32",
    "to_dos_date_time",
    "create_docx_buffer",
    "to_word_paragraphs",
    "xml_escape",
]
