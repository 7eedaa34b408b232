import logging
import threading
from typing import List, Optional

from veriscan.config import AI_RISK_THRESHOLD, RECENT_REPORTS
from veriscan.schemas.report_schemas import AnalysisReport, DashboardStats, Level, ReportSummary

logger = logging.getLogger("history")


def summarize(report: AnalysisReport) -> ReportSummary:
    return ReportSummary(
        id=report.id,
        fileName=report.fileName,
        timestamp=report.timestamp,
        overallSimilarity=report.overallSimilarity,
        aiProbability=report.aiProbability,
        wordCount=report.wordCount,
        matchCount=len(report.matches),
    )


class ReportHistory:
    """
    Reports produced during one server session, newest first.

    Created when the app starts and cleared when it stops; routers get it
    through a dependency rather than a module global.
    """

    def __init__(self):
        self._reports: List[AnalysisReport] = []
        self._lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._reports)

    def add(self, report: AnalysisReport) -> None:
        with self._lock:
            self._reports.insert(0, report)
        logger.info(f"Stored report {report.id} ({len(self._reports)} in history)")

    def list(self) -> List[AnalysisReport]:
        with self._lock:
            return list(self._reports)

    def get(self, report_id: str) -> Optional[AnalysisReport]:
        with self._lock:
            return next((r for r in self._reports if r.id == report_id), None)

    @property
    def current(self) -> Optional[AnalysisReport]:
        with self._lock:
            return self._reports[0] if self._reports else None

    def clear(self) -> None:
        with self._lock:
            count = len(self._reports)
            self._reports.clear()
        logger.info(f"Cleared {count} report(s) from history")

    def stats(self) -> DashboardStats:
        reports = self.list()
        if not reports:
            return DashboardStats(totalScans=0, averageSimilarity=0, aiRiskProfile=Level.LOW)

        avg = sum(r.overallSimilarity for r in reports) / len(reports)
        high_risk = any(r.aiProbability > AI_RISK_THRESHOLD for r in reports)
        return DashboardStats(
            totalScans=len(reports),
            averageSimilarity=int(avg + 0.5),
            aiRiskProfile=Level.HIGH if high_risk else Level.LOW,
            recent=[summarize(r) for r in reports[:RECENT_REPORTS]],
        )
