from typing import List, Optional

from pydantic import BaseModel, ConfigDict

from veriscan.schemas.report_schemas import MatchCategory, PlagiarismMatch


class Occurrence(BaseModel):
    """One verbatim location of a match in the document. Never stored."""
    model_config = ConfigDict(frozen=True)

    start: int
    end: int
    match: PlagiarismMatch

    @property
    def length(self) -> int:
        return self.end - self.start


class TextSegment(BaseModel):
    model_config = ConfigDict(frozen=True)

    text: str
    start: int
    end: int
    matchIndex: Optional[int] = None   # None for plain runs
    color: Optional[str] = None
    selected: bool = False

    @property
    def is_decorated(self) -> bool:
        return self.matchIndex is not None


class SourceEntry(BaseModel):
    index: int
    source: str
    url: str
    similarity: int
    matchedText: str
    category: MatchCategory
    color: str


class HighlightView(BaseModel):
    reportId: str
    segments: List[TextSegment]
    sources: List[SourceEntry]
