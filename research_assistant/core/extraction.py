"""
Document Text Extraction

Pulls plain text out of uploaded .txt, .pdf and .docx files.
"""

import asyncio
import io
import logging
import os
from typing import Optional

import pdfplumber
from docx import Document

logger = logging.getLogger(__name__)

SUPPORTED_EXTENSIONS = (".txt", ".pdf", ".docx")


def file_extension(filename: Optional[str]) -> str:
    return os.path.splitext(filename or "")[1].lower()


def is_supported(filename: Optional[str]) -> bool:
    return file_extension(filename) in SUPPORTED_EXTENSIONS


def extract_text_from_txt(data: bytes) -> str:
    return data.decode("utf-8", errors="replace")


def extract_text_from_pdf(data: bytes) -> str:
    with pdfplumber.open(io.BytesIO(data)) as pdf:
        return "\n".join(page.extract_text() or "" for page in pdf.pages)


def extract_text_from_docx(data: bytes) -> str:
    text = ""
    doc = Document(io.BytesIO(data))
    for para in doc.paragraphs:
        text += para.text + "\n"
    return text


EXTRACTORS = {
    ".txt": extract_text_from_txt,
    ".pdf": extract_text_from_pdf,
    ".docx": extract_text_from_docx,
}


def extract_text(filename: Optional[str], data: bytes) -> Optional[str]:
    """
    Extract plain text from an uploaded file.

    Args:
        filename: Original file name; its extension selects the parser
        data: Raw file contents

    Returns:
        The extracted text, or None if the type is unsupported or the
        parser failed
    """
    extractor = EXTRACTORS.get(file_extension(filename))
    if extractor is None:
        logger.warning(f"No extractor for file: {filename}")
        return None

    try:
        return extractor(data)
    except Exception:
        logger.exception(f"Text extraction failed for {filename}")
        return None


async def extract_text_async(filename: Optional[str], data: bytes) -> Optional[str]:
    """Run extract_text in the default executor so parsing does not block the event loop."""
    loop = asyncio.get_running_loop()
    return await loop.run_in_executor(None, extract_text, filename, data)
