import time
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, Optional

from pageaudit.schemas.report import (
    AnalysisReport,
    ExtractorFailureInfo,
    LayoutSignals,
    NavigationOutcome,
    PageSnapshot,
    PerformanceMetrics,
    ReportMeta,
    ScoreResult,
    SEOSignals,
)


def assemble_report(
    url: str,
    snapshot: PageSnapshot,
    signals: Dict[str, Any],
    seo_score: ScoreResult,
    started_at: float,
    outcome: Optional[NavigationOutcome] = None,
    quick_mode: bool = False,
    failures: Iterable[ExtractorFailureInfo] = (),
) -> AnalysisReport:
    """
    Combine every signal and the score into one immutable report.

    Args:
        url: Normalized URL that was analyzed
        snapshot: Captured page snapshot (provides the screenshot)
        signals: Signal per extractor name
        seo_score: Output of the SEO scoring engine
        started_at: ``time.perf_counter()`` value taken when the analysis began
        outcome: Navigation outcome, if available
        quick_mode: Whether the request ran in quick mode
        failures: Extractors that fell back to a default signal

    Returns:
        AnalysisReport
    """
    elapsed_ms = int((time.perf_counter() - started_at) * 1000)

    meta = ReportMeta(
        analyzed_at=datetime.now(timezone.utc),
        analysis_time_ms=max(0, elapsed_ms),
        quick_mode=quick_mode,
        strategy_used=outcome.strategy_used if outcome else None,
        failed_extractors=tuple(failures),
    )

    return AnalysisReport(
        url=url,
        screenshot=snapshot.screenshot,
        tech_stack=tuple(signals.get("tech_stack", ())),
        trackers=tuple(signals.get("trackers", ())),
        layout=signals.get("layout") or LayoutSignals(),
        seo=signals.get("seo") or SEOSignals(),
        seo_score=seo_score,
        performance=signals.get("performance") or PerformanceMetrics(),
        accessibility=tuple(signals.get("accessibility", ())),
        security=tuple(signals.get("security", ())),
        meta=meta,
    )
