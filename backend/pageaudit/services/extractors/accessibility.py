from typing import List, Sequence, Tuple

from bs4 import BeautifulSoup

from pageaudit.services.extractors.base import BaseExtractor, ExtractionContext
from pageaudit.services.extractors.seo import count_images_without_alt

HEADING_TAGS = ["h1", "h2", "h3", "h4", "h5", "h6"]


def has_skipped_heading(levels: Sequence[int]) -> bool:
    """True if any heading is more than one level deeper than the one before it."""
    return any(current - previous > 1 for previous, current in zip(levels, levels[1:]))


def check_accessibility(soup: BeautifulSoup) -> List[str]:
    """
    Run basic accessibility checks over a parsed document.

    Returns:
        Issue messages in check order; empty when nothing was found
    """
    issues = []

    html_tag = soup.find("html")
    if html_tag is None or not html_tag.get("lang"):
        issues.append("Missing lang attribute on <html>")

    images_without_alt = count_images_without_alt(soup)
    if images_without_alt > 0:
        issues.append(f"{images_without_alt} images missing alt text")

    if any(not anchor.has_attr("href") for anchor in soup.find_all("a")):
        issues.append("Links without href attribute")

    levels = [int(tag.name[1]) for tag in soup.find_all(HEADING_TAGS)]
    if has_skipped_heading(levels):
        issues.append("Skipped heading levels detected")

    return issues


class AccessibilityChecker(BaseExtractor):
    name = "accessibility"

    def default(self) -> Tuple[str, ...]:
        return ()

    async def extract(self, context: ExtractionContext) -> Tuple[str, ...]:
        return tuple(check_accessibility(context.soup))
