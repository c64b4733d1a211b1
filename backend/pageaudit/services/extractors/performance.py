import math
from typing import Any, Dict, Optional

from pageaudit.schemas.report import PerformanceMetrics
from pageaudit.services.browser.snapshot import read_navigation_timing
from pageaudit.services.extractors.base import BaseExtractor, ExtractionContext


def _round(value: float) -> int:
    # Half-up rounding, matching the browser's Math.round
    return int(math.floor(value + 0.5))


def _span(entry: Dict[str, Any], end_key: str, start_key: str) -> int:
    end = entry.get(end_key) or 0
    start = entry.get(start_key) or 0
    # An end mark of 0 means the event never fired
    if end <= 0:
        return 0
    return max(0, _round(end - start))


def metrics_from_timing(entry: Optional[Dict[str, Any]]) -> PerformanceMetrics:
    """
    Derive load metrics from a navigation-timing entry.

    Times are milliseconds relative to ``fetchStart`` (response time is
    ``responseEnd - requestStart``); transfer size is in kilobytes. Every
    metric is 0 when there is no entry.
    """
    if not entry:
        return PerformanceMetrics()

    return PerformanceMetrics(
        load_time=_span(entry, "loadEventEnd", "fetchStart"),
        dom_content_loaded=_span(entry, "domContentLoadedEventEnd", "fetchStart"),
        response_time=_span(entry, "responseEnd", "requestStart"),
        transfer_size=max(0, _round((entry.get("transferSize") or 0) / 1024)),
    )


class PerformanceExtractor(BaseExtractor):
    name = "performance"

    def default(self) -> PerformanceMetrics:
        return PerformanceMetrics()

    async def extract(self, context: ExtractionContext) -> PerformanceMetrics:
        timing = context.snapshot.timing_data
        if timing is None and context.page is not None:
            timing = await read_navigation_timing(context.page)
        return metrics_from_timing(timing)
