from typing import Optional

from bs4 import BeautifulSoup

from pageaudit.schemas.report import OpenGraph, SEOSignals
from pageaudit.services.extractors.base import BaseExtractor, ExtractionContext


def count_images_without_alt(soup: BeautifulSoup) -> int:
    """Count ``<img>`` elements that have no ``alt`` attribute at all."""
    return sum(1 for img in soup.find_all("img") if not img.has_attr("alt"))


def _text_or_none(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    return value or None


def _meta_content(soup: BeautifulSoup, **attrs) -> Optional[str]:
    tag = soup.find("meta", attrs=attrs)
    if tag is None:
        return None
    return _text_or_none(tag.get("content"))


def extract_seo(soup: BeautifulSoup) -> SEOSignals:
    """
    Pull the on-page SEO fields from a parsed document.

    Args:
        soup: Parsed document

    Returns:
        SEOSignals; absent fields are None and lengths are 0
    """
    title_tag = soup.find("title")
    title = _text_or_none(title_tag.get_text()) if title_tag else None

    meta_description = _meta_content(soup, name="description")

    h1_tags = soup.find_all("h1")
    h1_text = _text_or_none(h1_tags[0].get_text()) if h1_tags else None

    canonical_tag = soup.find("link", rel="canonical")
    canonical = _text_or_none(canonical_tag.get("href")) if canonical_tag else None

    return SEOSignals(
        title=title,
        title_length=len(title) if title else 0,
        meta_description=meta_description,
        meta_description_length=len(meta_description) if meta_description else 0,
        h1_count=len(h1_tags),
        h1_text=h1_text,
        images_without_alt=count_images_without_alt(soup),
        canonical=canonical,
        open_graph=OpenGraph(
            title=_meta_content(soup, property="og:title"),
            description=_meta_content(soup, property="og:description"),
            image=_meta_content(soup, property="og:image"),
        ),
    )


class SEOExtractor(BaseExtractor):
    name = "seo"

    def default(self) -> SEOSignals:
        return SEOSignals()

    async def extract(self, context: ExtractionContext) -> SEOSignals:
        return extract_seo(context.soup)
