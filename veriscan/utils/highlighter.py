"""
Occurrence resolution for the report view.

Maps every match back onto the document text and produces an ordered,
non-overlapping run of segments: plain text interleaved with decorated
match runs. Joining the segments' text always gives back the document.
Output depends only on (content, matches); selection is applied afterwards
as styling.
"""
from functools import lru_cache
from typing import Iterable, List, Optional, Sequence, Tuple

from veriscan.schemas.highlight_schemas import HighlightView, Occurrence, SourceEntry, TextSegment
from veriscan.schemas.report_schemas import AnalysisReport, PlagiarismMatch

# Highlight palette, one colour per source index
SOURCE_COLORS = (
    "#E60000",  # red
    "#A000A0",  # purple
    "#0000FF",  # blue
    "#008080",  # teal
    "#00AA00",  # green
    "#B8860B",  # dark goldenrod
    "#8B4513",  # saddle brown
    "#000080",  # navy
    "#FF1493",  # deep pink
    "#2F4F4F",  # dark slate gray
)


def color_for_index(index: int) -> str:
    return SOURCE_COLORS[(index - 1) % len(SOURCE_COLORS)]


def find_occurrences(content: str, matches: Iterable[PlagiarismMatch]) -> List[Occurrence]:
    """
    Every verbatim occurrence of each match's text.

    The cursor advances past each hit, so a match never overlaps itself;
    occurrences of different matches may overlap.
    """
    occurrences: List[Occurrence] = []
    for m in matches:
        needle = m.matchedText
        if not needle:
            continue
        pos = content.find(needle)
        while pos != -1:
            occurrences.append(Occurrence(start=pos, end=pos + len(needle), match=m))
            pos = content.find(needle, pos + len(needle))
    return occurrences


def _plain(content: str, start: int, end: int) -> TextSegment:
    return TextSegment(text=content[start:end], start=start, end=end)


@lru_cache(maxsize=64)
def _resolve(content: str, matches: Tuple[PlagiarismMatch, ...]) -> Tuple[TextSegment, ...]:
    occurrences = sorted(
        find_occurrences(content, matches),
        key=lambda occ: (occ.start, -occ.length),
    )

    segments: List[TextSegment] = []
    last_index = 0
    for occ in occurrences:
        if occ.start < last_index:
            continue  # overlaps an already emitted run
        if occ.start > last_index:
            segments.append(_plain(content, last_index, occ.start))
        segments.append(TextSegment(
            text=content[occ.start:occ.end],
            start=occ.start,
            end=occ.end,
            matchIndex=occ.match.index,
            color=color_for_index(occ.match.index),
        ))
        last_index = occ.end

    if last_index < len(content):
        segments.append(_plain(content, last_index, len(content)))
    return tuple(segments)


def resolve_segments(content: str, matches: Sequence[PlagiarismMatch]) -> Tuple[TextSegment, ...]:
    return _resolve(content, tuple(matches))


def mark_selected(segments: Sequence[TextSegment], selected_index: Optional[int]) -> List[TextSegment]:
    if selected_index is None:
        return list(segments)
    return [
        seg.model_copy(update={"selected": True}) if seg.matchIndex == selected_index else seg
        for seg in segments
    ]


def build_source_list(matches: Iterable[PlagiarismMatch]) -> List[SourceEntry]:
    return [
        SourceEntry(
            index=m.index,
            source=m.source,
            url=m.url,
            similarity=m.similarity,
            matchedText=m.matchedText,
            category=m.category,
            color=color_for_index(m.index),
        )
        for m in sorted(matches, key=lambda m: m.index)
    ]


def build_highlight_view(report: AnalysisReport, selected_index: Optional[int] = None) -> HighlightView:
    segments = resolve_segments(report.content, report.matches)
    return HighlightView(
        reportId=report.id,
        segments=mark_selected(segments, selected_index),
        sources=build_source_list(report.matches),
    )
