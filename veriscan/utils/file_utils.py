import logging
from io import BytesIO

from docx import Document as DocxDocument
from pdfminer.high_level import extract_text as extract_pdf_text

from veriscan.config import ALLOWED_EXTENSIONS, MAX_FILE_SIZE_MB

logger = logging.getLogger("file_utils")


class UnsupportedFileError(ValueError):
    pass


class FileExtractionError(ValueError):
    pass


class FileTooLargeError(ValueError):
    pass


def allowed_file(filename: str) -> bool:
    return "." in filename and filename.rsplit(".", 1)[1].lower() in ALLOWED_EXTENSIONS


def _decode_txt(raw: bytes) -> str:
    for enc in ("utf-8", "cp1252"):
        try:
            return raw.decode(enc)
        except UnicodeDecodeError:
            continue
    return raw.decode("utf-8", errors="ignore")


def extract_text_from_file(content_bytes: bytes, filename: str) -> str:
    """
    Plain text of an uploaded TXT, PDF or DOCX file.

    Raises:
        UnsupportedFileError: extension is not one of ALLOWED_EXTENSIONS.
        FileTooLargeError: upload is over MAX_FILE_SIZE_MB.
        FileExtractionError: file could not be read or holds no text.
    """
    if not filename or not allowed_file(filename):
        raise UnsupportedFileError("Unsupported file format. Please upload PDF, DOCX, or TXT.")
    if len(content_bytes) > MAX_FILE_SIZE_MB * 1024 * 1024:
        raise FileTooLargeError(f"File exceeds {MAX_FILE_SIZE_MB} MB.")

    ext = filename.rsplit(".", 1)[1].lower()
    try:
        if ext == "txt":
            text = _decode_txt(content_bytes)
        elif ext == "pdf":
            text = extract_pdf_text(BytesIO(content_bytes)) or ""
        else:
            doc = DocxDocument(BytesIO(content_bytes))
            text = "\n".join(p.text for p in doc.paragraphs)
    except Exception as e:
        logger.warning(f"Failed to read {filename}: {e}")
        raise FileExtractionError(
            f"Failed to parse {ext.upper()}. The file might be encrypted or corrupted."
        ) from e

    text = text.strip()
    if not text:
        raise FileExtractionError(f"No text could be extracted from {filename}.")
    logger.info(f"Extracted {len(text)} chars from {filename}")
    return text
