from bs4 import BeautifulSoup

from pageaudit.schemas.report import LayoutSignals
from pageaudit.services.extractors.base import BaseExtractor, ExtractionContext

HERO_TEXT_THRESHOLD = 200


def _has_region(soup: BeautifulSoup, tag: str, keyword: str, match_id: bool = True) -> bool:
    """True if a semantic ``tag`` exists or any class (or id) contains ``keyword``."""
    if soup.find(tag) is not None:
        return True
    if soup.select_one(f'[class*="{keyword}"]') is not None:
        return True
    return match_id and soup.select_one(f'[id*="{keyword}"]') is not None


def _has_hero(soup: BeautifulSoup, threshold: int) -> bool:
    if soup.select_one('[class*="hero"]') is not None:
        return True

    # A long block around the first h1 usually acts as the intro section
    first_h1 = soup.find("h1")
    if first_h1 is None or first_h1.parent is None:
        return False
    return len(first_h1.parent.get_text()) > threshold


def extract_layout(
    soup: BeautifulSoup, hero_text_threshold: int = HERO_TEXT_THRESHOLD
) -> LayoutSignals:
    """
    Detect the main page regions and count structural elements.

    Args:
        soup: Parsed document
        hero_text_threshold: Intro-block text length that counts as a hero

    Returns:
        LayoutSignals with region flags and element counts
    """
    body = soup.body or soup

    return LayoutSignals(
        has_header=_has_region(soup, "header", "header"),
        has_nav=_has_region(soup, "nav", "nav"),
        has_footer=_has_region(soup, "footer", "footer"),
        has_hero=_has_hero(soup, hero_text_threshold),
        has_main=_has_region(soup, "main", "main", match_id=False),
        section_count=len(soup.find_all("section")) + len(soup.select('[class*="section"]')),
        article_count=len(soup.find_all("article")),
        form_count=len(soup.find_all("form")),
        button_count=len(soup.find_all("button")),
        image_count=len(soup.find_all("img")),
        link_count=len(soup.find_all("a")),
        body_text_length=len(body.get_text()),
    )


class LayoutExtractor(BaseExtractor):
    name = "layout"

    def default(self) -> LayoutSignals:
        return LayoutSignals()

    async def extract(self, context: ExtractionContext) -> LayoutSignals:
        return extract_layout(
            context.soup,
            self.config.get("hero_text_threshold", HERO_TEXT_THRESHOLD),
        )
