"""
Model gateway: the two hosted-model calls behind an analysis.

  1. plagiarism audit  -> free text with a [MATCHES_START]...[MATCHES_END] block
  2. AI detection      -> JSON string shaped like AIDetectionResult

Calls go through huggingface_hub's InferenceClient. Both are blocking; the
pipeline runs them in worker threads.
"""
import logging
from typing import Any, List, Optional

from huggingface_hub import InferenceClient

from veriscan.config import (
    AI_TEXT_BUDGET,
    GATEWAY_TIMEOUT,
    HF_TOKEN,
    MATCH_TEXT_BUDGET,
    MAX_OUTPUT_TOKENS,
    MODEL_NAME,
)
from veriscan.schemas.gateway_schemas import GroundingCitation, MatchesResponse

logger = logging.getLogger("model_gateway")

PLAGIARISM_PROMPT = """You are a professional Plagiarism Auditor working for an academic institution.
TASK: Cross-reference the following text against the global web, scholarly publications, and known academic repositories.

STEP 1: Identify specific, verbatim sequences (7+ words) that match external sources.
STEP 2: For each match, determine if it is an 'Internet Source', 'Publication', or 'Student Paper'.
STEP 3: Return a structured list of these matches with the EXACT segment from the document and the source URL.

TEXT TO AUDIT:
\"\"\"
{text}
\"\"\"

OUTPUT FORMAT:
[MATCHES_START]
- Index: 1 | Segment: "verbatim text segment" | Category: Internet Source | Source: https://example.com/page
- Index: 2 | Segment: "another verbatim segment" | Category: Publication | Source: https://doi.org/reference
[MATCHES_END]"""

AI_DETECTION_PROMPT = """Analyze this text for patterns typical of Large Language Models (LLMs).
Respond with a single JSON object and nothing else, using exactly these keys:
  "aiScore": number from 0 to 100 (likelihood the text is machine-generated),
  "confidence": number from 0 to 100,
  "perplexity": one of "Low", "Medium", "High",
  "burstiness": one of "Low", "Medium", "High",
  "analysis": short explanation.

TEXT: \"\"\"{text}\"\"\""""


class GatewayError(Exception):
    """A model call failed in transport; no analysis result exists."""


class ModelGateway:
    def __init__(
        self,
        token: str = HF_TOKEN,
        model: str = MODEL_NAME,
        timeout: float = GATEWAY_TIMEOUT,
        client: Optional[InferenceClient] = None,
    ):
        self.model = model
        self._client = client
        if self._client is None and token:
            self._client = InferenceClient(api_key=token, timeout=timeout)
            logger.info(f"✓ Inference client initialized for {model}")
        elif self._client is None:
            logger.warning("HF_TOKEN not configured; analysis requests will be rejected")

    @property
    def is_configured(self) -> bool:
        return self._client is not None

    def _complete(self, prompt: str) -> Any:
        if self._client is None:
            raise GatewayError("Model gateway is not configured")
        try:
            return self._client.chat_completion(
                messages=[{"role": "user", "content": prompt}],
                model=self.model,
                max_tokens=MAX_OUTPUT_TOKENS,
                temperature=0.0,
            )
        except Exception as e:
            logger.error(f"❌ Model call failed: {e}", exc_info=True)
            raise GatewayError(str(e)) from e

    @staticmethod
    def _content(response: Any) -> str:
        if not response or not response.choices:
            return ""
        return response.choices[0].message.content or ""

    @staticmethod
    def _citations(response: Any) -> List[GroundingCitation]:
        # Only present when the provider attaches web grounding to the reply
        raw = getattr(response, "citations", None) or []
        citations = []
        for item in raw:
            if isinstance(item, str):
                citations.append(GroundingCitation(url=item))
            elif isinstance(item, dict) and item.get("url"):
                citations.append(GroundingCitation(url=item["url"], title=item.get("title") or ""))
        return citations

    def find_matches(self, text: str) -> MatchesResponse:
        logger.info(f"Requesting plagiarism audit ({min(len(text), MATCH_TEXT_BUDGET)} chars)")
        response = self._complete(PLAGIARISM_PROMPT.format(text=text[:MATCH_TEXT_BUDGET]))
        return MatchesResponse(text=self._content(response), citations=self._citations(response))

    def detect_ai(self, text: str) -> str:
        logger.info(f"Requesting AI detection ({min(len(text), AI_TEXT_BUDGET)} chars)")
        response = self._complete(AI_DETECTION_PROMPT.format(text=text[:AI_TEXT_BUDGET]))
        return self._content(response)
