from typing import List, Tuple

from pageaudit.services.extractors.base import BaseExtractor, ExtractionContext

# tracker name -> substrings of the lower-cased document that reveal it
TRACKER_SIGNATURES: Tuple[Tuple[str, Tuple[str, ...]], ...] = (
    ("Google Tag Manager", ("googletagmanager",)),
    ("Google Analytics", ("google-analytics", "ga.js")),
    ("Facebook Pixel", ("fbq(", "facebook")),
    ("TikTok Pixel", ("tiktok",)),
    ("Hotjar", ("hotjar",)),
    ("Microsoft Clarity", ("clarity.ms",)),
    ("Segment", ("segment.com",)),
    ("Mixpanel", ("mixpanel",)),
    ("Intercom", ("intercom",)),
)


def detect_trackers(html: str) -> List[str]:
    """Return the names of analytics/advertising trackers referenced in ``html``."""
    lowered = html.lower()
    return [
        name
        for name, signatures in TRACKER_SIGNATURES
        if any(signature in lowered for signature in signatures)
    ]


class TrackerDetector(BaseExtractor):
    name = "trackers"

    def default(self) -> Tuple[str, ...]:
        return ()

    async def extract(self, context: ExtractionContext) -> Tuple[str, ...]:
        return tuple(detect_trackers(context.html))
