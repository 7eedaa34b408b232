import asyncio
import logging
from datetime import datetime

from veriscan.schemas.report_schemas import AnalysisReport
from veriscan.utils.ai_detector import parse_ai_detection
from veriscan.utils.match_extractor import extract_matches
from veriscan.utils.model_gateway import ModelGateway
from veriscan.utils.report_builder import build_report

logger = logging.getLogger("analysis_pipeline")


async def run_analysis(text: str, file_name: str, gateway: ModelGateway) -> AnalysisReport:
    """
    Run both model calls and assemble the report.

    The calls run concurrently but are awaited together: if either raises
    GatewayError the whole analysis fails and nothing is assembled.
    """
    t0 = datetime.utcnow()
    clean_text = text.strip()

    logger.info(f"🔍 Analyzing {file_name} ({len(clean_text)} chars)")
    matches_response, ai_raw = await asyncio.gather(
        asyncio.to_thread(gateway.find_matches, clean_text),
        asyncio.to_thread(gateway.detect_ai, clean_text),
    )

    extraction = extract_matches(matches_response.text, matches_response.citations, len(clean_text))
    ai_result = parse_ai_detection(ai_raw)
    report = build_report(clean_text, file_name, extraction, ai_result)

    elapsed = (datetime.utcnow() - t0).total_seconds()
    logger.info(
        f"✅ Report {report.id}: similarity={report.overallSimilarity}% "
        f"ai={report.aiProbability:.0f}% matches={len(report.matches)} in {elapsed:.1f}s"
    )
    return report
