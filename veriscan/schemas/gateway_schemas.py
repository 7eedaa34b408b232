from typing import List

from pydantic import BaseModel, Field


class GroundingCitation(BaseModel):
    url: str
    title: str = ""


class MatchesResponse(BaseModel):
    text: str = ""
    citations: List[GroundingCitation] = Field(default_factory=list)
