"""
PDF text extraction for transcript documents.

Reads each page's text with pdfplumber, in page order. The parser only ever
sees the joined text; nothing here knows about the transcript layout.
"""

from pathlib import Path
from typing import List, Union
import logging

import pdfplumber

from transcript_parser import join_pages

logger = logging.getLogger(__name__)


def extract_pages(pdf_path: Union[str, Path]) -> List[str]:
    """Text of every page, in page order (empty string for image-only pages)"""
    pages = []
    with pdfplumber.open(str(pdf_path)) as pdf:
        for page_number, page in enumerate(pdf.pages, start=1):
            text = page.extract_text() or ""
            if not text.strip():
                logger.warning(f"  ⚠️ Page {page_number} of {Path(pdf_path).name} has no text layer")
            pages.append(text)
    logger.info(f"📄 Extracted {len(pages)} pages from {Path(pdf_path).name}")
    return pages


def read_transcript_text(path: Union[str, Path]) -> str:
    """Full text of a transcript: PDF pages joined, or a plain-text dump as-is"""
    path = Path(path)
    if path.suffix.lower() == ".pdf":
        return join_pages(extract_pages(path))
    return path.read_text(encoding="utf-8")
