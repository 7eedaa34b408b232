from enum import Enum
from typing import List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator


class MatchCategory(str, Enum):
    INTERNET = "Internet Source"
    PUBLICATION = "Publication"
    STUDENT = "Student Paper"


class Level(str, Enum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"


class PlagiarismMatch(BaseModel):
    model_config = ConfigDict(frozen=True)

    index: int = Field(ge=1)     # 1-based, first-seen parse order
    source: str                  # display title
    url: str                     # absolute URL or opaque label
    similarity: int = Field(ge=0, le=100)
    matchedText: str = Field(min_length=1)
    category: MatchCategory


class AIDetectionResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    aiScore: float = Field(allow_inf_nan=False)
    confidence: float = Field(allow_inf_nan=False)
    perplexity: Level
    burstiness: Level
    analysis: str

    @field_validator("aiScore")
    @classmethod
    def _clamp_score(cls, v: float) -> float:
        return min(max(v, 0.0), 100.0)


class DigitalReceipt(BaseModel):
    model_config = ConfigDict(frozen=True)

    submissionId: str
    submissionDate: str
    fileHash: str        # placeholder, not a content address
    author: str
    characterCount: int


class AnalysisReport(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    timestamp: str       # ISO-8601, UTC
    fileName: str
    overallSimilarity: int = Field(ge=0, le=100)
    internetSimilarity: int
    publicationSimilarity: int
    studentSimilarity: int
    aiProbability: float
    wordCount: int
    matches: Tuple[PlagiarismMatch, ...] = ()
    aiResult: AIDetectionResult
    content: str
    receipt: DigitalReceipt


# ---- Request / response helpers ----

class AnalyzeRequest(BaseModel):
    # Optional so that missing fields get the endpoint's own message
    text: Optional[str] = None
    fileName: Optional[str] = None


class ErrorResponse(BaseModel):
    error: str
    retryAfter: Optional[int] = None


class ReportSummary(BaseModel):
    id: str
    fileName: str
    timestamp: str
    overallSimilarity: int
    aiProbability: float
    wordCount: int
    matchCount: int


class DashboardStats(BaseModel):
    totalScans: int
    averageSimilarity: int
    aiRiskProfile: Level
    recent: List[ReportSummary] = Field(default_factory=list)


class ExtractedText(BaseModel):
    fileName: str
    text: str
    wordCount: int
    characterCount: int
