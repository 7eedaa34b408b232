import json

from veriscan.schemas.report_schemas import Level
from veriscan.utils.ai_detector import DEFAULT_AI_RESULT, parse_ai_detection
from veriscan.utils.history import ReportHistory
from veriscan.utils.match_extractor import MatchExtraction
from veriscan.utils.report_builder import build_report


def _report(name, overall=0, ai_score=0):
    ai = DEFAULT_AI_RESULT
    if ai_score:
        ai = parse_ai_detection(json.dumps({
            "aiScore": ai_score, "confidence": 50, "perplexity": "Low",
            "burstiness": "Low", "analysis": "",
        }))
    extraction = MatchExtraction(internet=overall, overall=overall)
    return build_report(f"content of {name}", name, extraction, ai)


def test_add_prepends_and_tracks_current():
    history = ReportHistory()
    assert history.current is None
    first, second = _report("a.txt"), _report("b.txt")
    history.add(first)
    history.add(second)

    assert len(history) == 2
    assert [r.fileName for r in history.list()] == ["b.txt", "a.txt"]
    assert history.current == second
    assert history.get(first.id) == first
    assert history.get("VERI-NOPE00") is None


def test_list_is_a_copy():
    history = ReportHistory()
    history.add(_report("a.txt"))
    history.list().clear()
    assert len(history) == 1


def test_clear():
    history = ReportHistory()
    history.add(_report("a.txt"))
    history.clear()
    assert len(history) == 0
    assert history.current is None


def test_stats_empty():
    stats = ReportHistory().stats()
    assert stats.totalScans == 0
    assert stats.averageSimilarity == 0
    assert stats.aiRiskProfile == Level.LOW
    assert stats.recent == []


def test_stats():
    history = ReportHistory()
    for i, overall in enumerate([10, 20, 35, 0, 0, 5]):
        history.add(_report(f"doc{i}.txt", overall=overall, ai_score=30))

    stats = history.stats()
    assert stats.totalScans == 6
    assert stats.averageSimilarity == 12  # 70 / 6 = 11.67
    assert stats.aiRiskProfile == Level.LOW
    assert [s.fileName for s in stats.recent] == ["doc5.txt", "doc4.txt", "doc3.txt", "doc2.txt", "doc1.txt"]

    history.add(_report("ai.txt", ai_score=71))
    assert history.stats().aiRiskProfile == Level.HIGH
