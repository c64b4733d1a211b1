import asyncio
import time
from typing import Dict, List, Optional, Sequence

from playwright.async_api import Error as PlaywrightError, Page
from loguru import logger

from pageaudit.core.config import settings, Settings
from pageaudit.core.errors import AnalysisError, ExtractionFailure
from pageaudit.schemas.report import (
    AnalysisReport,
    ExtractorFailureInfo,
    LayoutSignals,
    PageSnapshot,
    SEOSignals,
)
from pageaudit.services.browser.navigation import NavigationProfile, NavigationStrategyEngine
from pageaudit.services.browser.session import BrowserSession
from pageaudit.services.browser.snapshot import capture_snapshot
from pageaudit.services.browser.url import normalize_url
from pageaudit.services.extractors.accessibility import AccessibilityChecker
from pageaudit.services.extractors.base import (
    BaseExtractor,
    ExtractionContext,
    ExtractorOutcome,
    run_extractor,
)
from pageaudit.services.extractors.layout import LayoutExtractor
from pageaudit.services.extractors.performance import PerformanceExtractor
from pageaudit.services.extractors.security import SecurityChecker
from pageaudit.services.extractors.seo import SEOExtractor
from pageaudit.services.extractors.technology import TechnologyDetector
from pageaudit.services.extractors.trackers import TrackerDetector
from pageaudit.services.report import assemble_report
from pageaudit.services.scoring import score_seo


def default_extractors() -> List[BaseExtractor]:
    """One instance of every built-in signal extractor."""
    return [
        TechnologyDetector(),
        TrackerDetector(),
        LayoutExtractor(),
        SEOExtractor(),
        PerformanceExtractor(),
        AccessibilityChecker(),
        SecurityChecker(),
    ]


class PageAnalyzer:
    """
    Main class for analyzing a live web page.

    Normalizes the URL, loads it in a fresh page from the browser session,
    captures a snapshot, runs every extractor concurrently over it, scores
    the SEO signals and assembles the report. The page is always released
    before ``analyze`` returns or raises.
    """

    def __init__(
        self,
        session: BrowserSession,
        navigator: Optional[NavigationStrategyEngine] = None,
        extractors: Optional[Sequence[BaseExtractor]] = None,
        config: Settings = settings,
    ):
        self.session = session
        self.navigator = navigator or NavigationStrategyEngine()
        self.extractors = list(extractors) if extractors is not None else default_extractors()
        self.config = config

    async def analyze(self, target_url: str, quick_mode: bool = False) -> AnalysisReport:
        """
        Analyze a URL and build its diagnostic report.

        Args:
            target_url: URL or bare host entered by the user
            quick_mode: Use the shorter navigation timeout and settle delay

        Returns:
            AnalysisReport

        Raises:
            BrowserUnavailable: No page could be obtained
            NavigationFailed: All load strategies failed
            ExtractionFailure: The snapshot could not be captured
        """
        started_at = time.perf_counter()
        url = normalize_url(target_url)
        profile = NavigationProfile.for_mode(quick_mode, self.config)
        logger.info(f"Analyzing: {url}{' (Quick Mode)' if quick_mode else ''}")

        try:
            async with self.session.page() as page:
                outcome = await self.navigator.navigate(page, url, profile)
                snapshot = await capture_snapshot(page, self.config)
                outcomes = await self._run_extractors(page, snapshot)
        except AnalysisError as e:
            logger.error(f"Analysis of {url} failed: {e.message} ({e.detail})")
            raise
        except PlaywrightError as e:
            logger.error(f"Browser error while analyzing {url}: {str(e)}")
            raise ExtractionFailure("browser", str(e)) from e

        signals = {name: result.signal for name, result in outcomes.items()}
        failures = [
            ExtractorFailureInfo(extractor=name, reason=result.error)
            for name, result in outcomes.items()
            if not result.ok
        ]

        seo_score = score_seo(
            signals.get("seo") or SEOSignals(), signals.get("layout") or LayoutSignals()
        )

        report = assemble_report(
            url,
            snapshot,
            signals,
            seo_score,
            started_at,
            outcome=outcome,
            quick_mode=quick_mode,
            failures=failures,
        )
        logger.info(
            f"Finished {url} in {report.meta.analysis_time_ms}ms "
            f"(SEO score {seo_score.score}, {len(failures)} extractor failures)"
        )
        return report

    async def _run_extractors(
        self, page: Optional[Page], snapshot: PageSnapshot
    ) -> Dict[str, ExtractorOutcome]:
        context = ExtractionContext(snapshot=snapshot, page=page)
        results = await asyncio.gather(
            *(run_extractor(extractor, context) for extractor in self.extractors)
        )
        return {result.name: result for result in results}
