from fastapi import APIRouter, File, HTTPException, UploadFile

from veriscan.schemas.report_schemas import ErrorResponse, ExtractedText
from veriscan.utils.file_utils import (
    FileExtractionError,
    FileTooLargeError,
    UnsupportedFileError,
    extract_text_from_file,
)
from veriscan.utils.report_builder import count_words

router = APIRouter(prefix="/api", tags=["extraction"])


@router.post(
    "/extract",
    response_model=ExtractedText,
    responses={413: {"model": ErrorResponse}, 415: {"model": ErrorResponse}, 422: {"model": ErrorResponse}},
)
async def extract(file: UploadFile = File(...)):
    """Pull plain text out of an uploaded TXT, PDF or DOCX file."""
    raw = await file.read()
    try:
        text = extract_text_from_file(raw, file.filename or "")
    except UnsupportedFileError as e:
        raise HTTPException(status_code=415, detail=str(e))
    except FileTooLargeError as e:
        raise HTTPException(status_code=413, detail=str(e))
    except FileExtractionError as e:
        raise HTTPException(status_code=422, detail=str(e))

    return ExtractedText(
        fileName=file.filename,
        text=text,
        wordCount=count_words(text),
        characterCount=len(text),
    )
