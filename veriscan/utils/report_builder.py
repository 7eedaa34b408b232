import hashlib
import uuid
from datetime import datetime, timezone
from typing import Optional

from veriscan.config import REPORT_AUTHOR
from veriscan.schemas.report_schemas import AIDetectionResult, AnalysisReport, DigitalReceipt
from veriscan.utils.match_extractor import MatchExtraction


def count_words(text: str) -> int:
    return len((text or "").split())


def _report_id() -> str:
    return f"VERI-{uuid.uuid4().hex[:6].upper()}"


def _submission_id(now: datetime) -> str:
    millis = str(int(now.timestamp() * 1000))
    return f"REC-{millis[-6:]}"


def _file_hash(content: str) -> str:
    # Short digest for display only; not used for lookups
    return f"SHA-{hashlib.sha256(content.encode('utf-8')).hexdigest()[:16].upper()}"


def build_report(
    content: str,
    file_name: str,
    extraction: MatchExtraction,
    ai_result: AIDetectionResult,
    now: Optional[datetime] = None,
) -> AnalysisReport:
    """Assemble the immutable report for one analysis run. No side effects."""
    now = now or datetime.now(timezone.utc)
    content = content.strip()

    receipt = DigitalReceipt(
        submissionId=_submission_id(now),
        submissionDate=now.strftime("%Y-%m-%d %H:%M:%S %Z").strip(),
        fileHash=_file_hash(content),
        author=REPORT_AUTHOR,
        characterCount=len(content),
    )

    return AnalysisReport(
        id=_report_id(),
        timestamp=now.isoformat(),
        fileName=file_name,
        overallSimilarity=extraction.overall,
        internetSimilarity=extraction.internet,
        publicationSimilarity=extraction.publication,
        studentSimilarity=extraction.student,
        aiProbability=ai_result.aiScore,
        wordCount=count_words(content),
        matches=extraction.matches,
        aiResult=ai_result,
        content=content,
        receipt=receipt,
    )
