"""
AI-detection result parsing.
The gateway returns the detector's verdict as a JSON string; this module
turns it into an AIDetectionResult and never lets a bad payload escape.
"""
import json
import logging
import re

from pydantic import ValidationError

from veriscan.schemas.report_schemas import AIDetectionResult, Level

logger = logging.getLogger("ai_detector")

DEFAULT_AI_RESULT = AIDetectionResult(
    aiScore=0,
    confidence=0,
    perplexity=Level.MEDIUM,
    burstiness=Level.MEDIUM,
    analysis="Parsing failed.",
)

# ```json ... ``` wrapper some chat models put around JSON output
_FENCE_RE = re.compile(r"^\s*```(?:json)?\s*(.*?)\s*```\s*$", re.S | re.I)


def _unwrap(raw: str) -> str:
    m = _FENCE_RE.match(raw)
    return m.group(1) if m else raw


def parse_ai_detection(raw: str) -> AIDetectionResult:
    """
    Parse the detector JSON payload.

    Returns:
        AIDetectionResult: the parsed verdict, or DEFAULT_AI_RESULT when the
        payload is not JSON or does not have the expected shape.
    """
    try:
        payload = json.loads(_unwrap(raw or ""))
        if not isinstance(payload, dict):
            raise ValueError(f"expected an object, got {type(payload).__name__}")
        result = AIDetectionResult.model_validate(payload)
    except (ValueError, ValidationError) as e:
        logger.warning(f"⚠️ AI detection payload could not be parsed: {e}")
        return DEFAULT_AI_RESULT

    logger.info(f"AI detection: score={result.aiScore:.1f} confidence={result.confidence}")
    return result
