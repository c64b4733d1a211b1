from typing import Any, Dict, Optional

from playwright.async_api import Error as PlaywrightError, Page
from loguru import logger

from pageaudit.core.config import settings, Settings
from pageaudit.core.errors import ExtractionFailure
from pageaudit.schemas.report import PageSnapshot

NAVIGATION_TIMING_SCRIPT = """() => {
    const entry = performance.getEntriesByType('navigation')[0];
    return entry ? entry.toJSON() : null;
}"""


async def read_navigation_timing(page: Page) -> Optional[Dict[str, Any]]:
    """Return the page's navigation-timing entry, or None if unavailable."""
    try:
        entry = await page.evaluate(NAVIGATION_TIMING_SCRIPT)
    except PlaywrightError as e:
        logger.warning(f"Navigation timing unavailable: {str(e)}")
        return None
    return entry if isinstance(entry, dict) else None


async def capture_snapshot(page: Page, config: Settings = settings) -> PageSnapshot:
    """
    Capture screenshot, serialized DOM and timing data from a loaded page.

    Raises:
        ExtractionFailure: The screenshot or the document could not be read
    """
    options: Dict[str, Any] = {
        "type": config.SCREENSHOT_TYPE,
        "full_page": config.SCREENSHOT_FULL_PAGE,
    }
    if config.SCREENSHOT_TYPE == "jpeg":
        options["quality"] = config.SCREENSHOT_QUALITY

    try:
        logger.info("Capturing screenshot...")
        screenshot = await page.screenshot(**options)
        html = await page.content()
    except PlaywrightError as e:
        logger.error(f"Snapshot capture failed: {str(e)}")
        raise ExtractionFailure("snapshot", str(e)) from e

    timing = await read_navigation_timing(page)

    return PageSnapshot(rendered_html=html, screenshot=screenshot, timing_data=timing)
