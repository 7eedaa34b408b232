from io import BytesIO

import pytest
from docx import Document

from veriscan.utils.file_utils import (
    FileExtractionError,
    FileTooLargeError,
    UnsupportedFileError,
    allowed_file,
    extract_text_from_file,
)


def _docx_bytes(*paragraphs):
    doc = Document()
    for p in paragraphs:
        doc.add_paragraph(p)
    buf = BytesIO()
    doc.save(buf)
    return buf.getvalue()


def test_allowed_file():
    assert allowed_file("essay.TXT")
    assert allowed_file("thesis.final.pdf")
    assert allowed_file("notes.docx")
    assert not allowed_file("slides.pptx")
    assert not allowed_file("README")


def test_txt():
    assert extract_text_from_file("  plain text body \n".encode("utf-8"), "a.txt") == "plain text body"


def test_txt_legacy_encoding():
    assert extract_text_from_file("café au lait".encode("cp1252"), "a.txt") == "café au lait"


def test_docx():
    raw = _docx_bytes("First paragraph.", "Second paragraph.")
    assert extract_text_from_file(raw, "essay.docx") == "First paragraph.\nSecond paragraph."


def test_unsupported_extension():
    with pytest.raises(UnsupportedFileError, match="Unsupported file format"):
        extract_text_from_file(b"data", "image.png")


def test_missing_filename():
    with pytest.raises(UnsupportedFileError):
        extract_text_from_file(b"data", "")


def test_corrupted_pdf():
    with pytest.raises(FileExtractionError):
        extract_text_from_file(b"this is not a pdf", "broken.pdf")


def test_corrupted_docx():
    with pytest.raises(FileExtractionError, match="DOCX"):
        extract_text_from_file(b"not a zip archive", "broken.docx")


def test_empty_text():
    with pytest.raises(FileExtractionError, match="No text"):
        extract_text_from_file(b"   \n ", "blank.txt")


def test_too_large(monkeypatch):
    monkeypatch.setattr("veriscan.utils.file_utils.MAX_FILE_SIZE_MB", 0)
    with pytest.raises(FileTooLargeError):
        extract_text_from_file(b"x", "a.txt")
