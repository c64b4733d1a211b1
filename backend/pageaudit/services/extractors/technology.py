from typing import Iterable, List, Optional, Tuple

from pageaudit.services.extractors.base import BaseExtractor, ExtractionContext

# (substring of lower-cased script URLs, technology name)
SCRIPT_SIGNATURES: Tuple[Tuple[str, str], ...] = (
    ("react", "React"),
    ("vue", "Vue"),
    ("angular", "Angular"),
    ("_next", "Next.js"),
    ("nuxt", "Nuxt.js"),
    ("svelte", "Svelte"),
    ("bootstrap", "Bootstrap"),
    ("tailwind", "Tailwind CSS"),
    ("wp-content", "WordPress"),
    ("woocommerce", "WooCommerce"),
    ("shopify", "Shopify"),
    ("squarespace", "Squarespace"),
    ("wix", "Wix"),
)

# (substring of lower-cased document, technology name)
ROOT_MARKERS: Tuple[Tuple[str, str], ...] = (
    ('id="root"', "React (likely)"),
    ('id="__next"', "Next.js"),
    ('id="__nuxt"', "Nuxt.js"),
)

GENERATOR_QUERY = "els => els.map(el => el.content || '')"
SCRIPT_SRC_QUERY = "els => els.map(el => el.src || '')"


def detect_technologies(
    script_sources: Iterable[str], html: str, generator: Optional[str] = None
) -> List[str]:
    """
    Match script URLs and root-element markers against known signatures.

    Args:
        script_sources: ``src`` of every script element (empty for inline)
        html: Serialized document
        generator: Content of the generator meta tag, reported verbatim

    Returns:
        Detected technology names without duplicates
    """
    found = []
    if generator and generator.strip():
        found.append(generator.strip())

    scripts = " ".join(src or "" for src in script_sources).lower()
    found.extend(name for signature, name in SCRIPT_SIGNATURES if signature in scripts)

    lowered = html.lower()
    found.extend(name for marker, name in ROOT_MARKERS if marker in lowered)

    return list(dict.fromkeys(found))


class TechnologyDetector(BaseExtractor):
    """Detects frameworks and platforms from the live page and its markup."""

    name = "tech_stack"

    def default(self) -> Tuple[str, ...]:
        return ()

    async def extract(self, context: ExtractionContext) -> Tuple[str, ...]:
        if context.page is not None:
            generators = await context.page.eval_on_selector_all(
                'meta[name="generator"]', GENERATOR_QUERY
            )
            sources = await context.page.eval_on_selector_all("script", SCRIPT_SRC_QUERY)
        else:
            generators = [
                meta.get("content", "")
                for meta in context.soup.find_all("meta", attrs={"name": "generator"})
            ]
            sources = [script.get("src", "") for script in context.soup.find_all("script")]

        generator = generators[0] if generators else None
        return tuple(detect_technologies(sources, context.html, generator=generator))
