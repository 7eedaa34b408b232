import json

import pytest
from fastapi.testclient import TestClient

from veriscan.dependencies.services import get_gateway, get_rate_limiter
from veriscan.main import app
from veriscan.schemas.gateway_schemas import GroundingCitation, MatchesResponse
from veriscan.schemas.report_schemas import MatchCategory, PlagiarismMatch
from veriscan.utils.model_gateway import GatewayError
from veriscan.utils.rate_limiter import RateLimiter

SAMPLE_DOCUMENT = (
    "Climate change impacts are visible across every continent. "
    "Rising sea levels threaten coastal cities and island nations alike. "
    "Researchers agree that rapid emission cuts are required this decade."
)

SAMPLE_MATCHES_TEXT = """Here is the audit.
[MATCHES_START]
- Index: 1 | Segment: "Rising sea levels threaten coastal cities" | Category: Internet Source | Source: https://news.example.com/sea-levels
- Index: 2 | Segment: "rapid emission cuts are required" | Category: Publication | Source: https://doi.org/10.1000/xyz
[MATCHES_END]
"""

SAMPLE_AI_JSON = json.dumps({
    "aiScore": 42,
    "confidence": 80,
    "perplexity": "Low",
    "burstiness": "High",
    "analysis": "Uniform sentence lengths.",
})


def make_match(index, text, category=MatchCategory.INTERNET, similarity=1, url="https://example.com"):
    return PlagiarismMatch(
        index=index,
        source="example.com",
        url=url,
        similarity=similarity,
        matchedText=text,
        category=category,
    )


class FakeGateway:
    def __init__(self, matches_text=SAMPLE_MATCHES_TEXT, ai_raw=SAMPLE_AI_JSON,
                 citations=None, configured=True, fail=False):
        self.matches_text = matches_text
        self.ai_raw = ai_raw
        self.citations = citations or [GroundingCitation(url="https://doi.org/10.1000/xyz", title="Journal of Climate")]
        self.configured = configured
        self.fail = fail
        self.calls = []

    @property
    def is_configured(self):
        return self.configured

    def find_matches(self, text):
        self.calls.append(("find_matches", text))
        if self.fail:
            raise GatewayError("upstream unavailable")
        return MatchesResponse(text=self.matches_text, citations=self.citations)

    def detect_ai(self, text):
        self.calls.append(("detect_ai", text))
        return self.ai_raw


@pytest.fixture
def fake_gateway():
    return FakeGateway()


@pytest.fixture
def limiter():
    return RateLimiter(limit=100, window_seconds=3600)


@pytest.fixture
def client(fake_gateway, limiter):
    app.dependency_overrides[get_gateway] = lambda: fake_gateway
    app.dependency_overrides[get_rate_limiter] = lambda: limiter
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
