"""
Match extraction from the plagiarism-audit response.

The model returns free text containing a block like:

    [MATCHES_START]
    - Index: 1 | Segment: "verbatim text segment" | Category: Internet Source | Source: https://example.com/page
    - Index: 2 | Segment: "another verbatim segment" | Category: Publication | Source: https://doi.org/reference
    [MATCHES_END]

Each accepted line becomes a PlagiarismMatch. Similarity figures are derived
from the matched character counts, never taken from the model.
A missing block or malformed lines degrade to fewer (or no) matches; nothing
here raises on bad model output.
"""
import logging
import math
import re
from typing import List, Optional, Sequence, Tuple
from urllib.parse import urlparse

from pydantic import BaseModel, ConfigDict

from veriscan.config import MIN_SEGMENT_LENGTH
from veriscan.schemas.gateway_schemas import GroundingCitation
from veriscan.schemas.report_schemas import MatchCategory, PlagiarismMatch

logger = logging.getLogger("match_extractor")

MATCHES_SECTION_RE = re.compile(r"\[MATCHES_START\](.*?)\[MATCHES_END\]", re.S)
INDEX_RE = re.compile(r"\d+")
FIELD_SEPARATOR = "|"
MIN_FIELDS = 4


class MatchExtraction(BaseModel):
    model_config = ConfigDict(frozen=True)

    matches: Tuple[PlagiarismMatch, ...] = ()
    internet: int = 0
    publication: int = 0
    student: int = 0
    overall: int = 0


def round_half_up(value: float) -> int:
    """Round non-negative values the way a dashboard reader expects (2.5 -> 3)."""
    return int(math.floor(value + 0.5))


def extract_matches_section(text: str) -> Optional[str]:
    m = MATCHES_SECTION_RE.search(text or "")
    if not m:
        return None
    return m.group(1)


def classify_category(raw: str) -> MatchCategory:
    lowered = (raw or "").lower()
    if "publication" in lowered:
        return MatchCategory.PUBLICATION
    if "student" in lowered:
        return MatchCategory.STUDENT
    return MatchCategory.INTERNET


def _default_title(source: str) -> str:
    trimmed = source.strip()
    if trimmed.lower().startswith("http"):
        try:
            host = urlparse(trimmed).hostname
        except ValueError:
            host = None
        if host:
            return host
    return trimmed


def resolve_source_title(source: str, citations: Sequence[GroundingCitation] = ()) -> str:
    """
    Display title for a source token.

    URLs show their host, labels show as-is. A grounding citation with the
    exact same URL wins when it carries a title.
    """
    cited = next((c for c in citations if c.url == source), None)
    if cited is not None and cited.title:
        return cited.title
    return _default_title(source)


def _strip_label(field: str, label: str) -> str:
    return field.replace(label, "", 1).strip()


def parse_match_lines(section: str, citations: Sequence[GroundingCitation] = ()) -> List[PlagiarismMatch]:
    """
    Parse the lines of a matches block in order.

    Similarity on the returned records is a 0 placeholder; extract_matches
    fills it in once the document length is known.
    """
    matches: List[PlagiarismMatch] = []
    for line_no, line in enumerate(section.strip().split("\n"), start=1):
        parts = line.split(FIELD_SEPARATOR)
        if len(parts) < MIN_FIELDS:
            if line.strip():
                logger.debug(f"Skipping line {line_no}: {len(parts)} fields")
            continue

        idx_match = INDEX_RE.search(parts[0])
        index = int(idx_match.group(0)) if idx_match else len(matches) + 1
        segment = _strip_label(parts[1], "Segment: ").replace('"', "").strip()
        category = classify_category(_strip_label(parts[2], "Category: "))
        url = _strip_label(parts[3], "Source: ")

        if len(segment) <= MIN_SEGMENT_LENGTH:
            logger.debug(f"Dropping line {line_no}: segment too short ({segment!r})")
            continue
        if index < 1:
            index = len(matches) + 1

        matches.append(PlagiarismMatch(
            index=index,
            source=resolve_source_title(url, citations),
            url=url,
            similarity=0,
            matchedText=segment,
            category=category,
        ))
    return matches


def extract_matches(
    response_text: str,
    citations: Sequence[GroundingCitation],
    document_length: int,
) -> MatchExtraction:
    section = extract_matches_section(response_text)
    if section is None:
        logger.info("No matches block in model response")
        return MatchExtraction()

    parsed = parse_match_lines(section, citations)

    chars = {category: 0 for category in MatchCategory}
    for m in parsed:
        chars[m.category] += len(m.matchedText)

    total = max(document_length, 1)
    internet = round_half_up(chars[MatchCategory.INTERNET] * 100 / total)
    publication = round_half_up(chars[MatchCategory.PUBLICATION] * 100 / total)
    student = round_half_up(chars[MatchCategory.STUDENT] * 100 / total)
    overall = min(internet + publication + student, 100)

    matches = tuple(
        m.model_copy(update={"similarity": min(max(1, round_half_up(len(m.matchedText) * 100 / total)), 100)})
        for m in parsed
    )

    logger.info(
        f"Extracted {len(matches)} matches "
        f"(internet={internet}%, publication={publication}%, student={student}%, overall={overall}%)"
    )
    return MatchExtraction(
        matches=matches,
        internet=internet,
        publication=publication,
        student=student,
        overall=overall,
    )
