import asyncio

import pytest

from conftest import SAMPLE_DOCUMENT, FakeGateway
from veriscan.schemas.report_schemas import MatchCategory
from veriscan.utils.ai_detector import DEFAULT_AI_RESULT
from veriscan.utils.model_gateway import GatewayError
from veriscan.utils.analysis_pipeline import run_analysis


def test_pipeline_builds_report():
    gateway = FakeGateway()
    report = asyncio.run(run_analysis("  " + SAMPLE_DOCUMENT + "\n", "climate.txt", gateway))

    assert report.content == SAMPLE_DOCUMENT
    assert {name for name, _ in gateway.calls} == {"find_matches", "detect_ai"}
    assert all(text == SAMPLE_DOCUMENT for _, text in gateway.calls)

    first, second = report.matches
    assert first.source == "news.example.com"
    assert first.category == MatchCategory.INTERNET
    assert second.source == "Journal of Climate"
    assert second.category == MatchCategory.PUBLICATION
    assert report.overallSimilarity == min(
        report.internetSimilarity + report.publicationSimilarity + report.studentSimilarity, 100)
    assert all(m.similarity >= 1 for m in report.matches)
    assert report.aiProbability == 42


def test_pipeline_degrades_on_malformed_output():
    gateway = FakeGateway(matches_text="I could not find anything.", ai_raw="{not json")
    report = asyncio.run(run_analysis(SAMPLE_DOCUMENT, "climate.txt", gateway))

    assert report.matches == ()
    assert report.overallSimilarity == 0
    assert report.aiResult == DEFAULT_AI_RESULT
    assert report.aiProbability == 0


def test_pipeline_fails_atomically():
    gateway = FakeGateway(fail=True)
    with pytest.raises(GatewayError):
        asyncio.run(run_analysis(SAMPLE_DOCUMENT, "climate.txt", gateway))
