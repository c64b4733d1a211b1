from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from bs4 import BeautifulSoup
from loguru import logger

from pageaudit.schemas.report import PageSnapshot


@dataclass
class ExtractionContext:
    """Read-only inputs shared by all extractors for one request."""

    snapshot: PageSnapshot
    page: Optional[Any] = None
    soup: BeautifulSoup = field(init=False)

    def __post_init__(self):
        self.soup = BeautifulSoup(self.snapshot.rendered_html, "html.parser")

    @property
    def html(self) -> str:
        return self.snapshot.rendered_html


@dataclass(frozen=True)
class ExtractorOutcome:
    """Result of one extractor: its signal, or a default plus the reason it failed."""

    name: str
    signal: Any
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


class BaseExtractor:
    """Base class for all signal extractors."""

    name = "base"

    def __init__(self, config: Optional[Dict[str, Any]] = None):
        """Initialize with configuration options."""
        self.config = config or {}

    def default(self) -> Any:
        """Signal reported when extraction fails."""
        raise NotImplementedError("Subclasses must implement default method")

    async def extract(self, context: ExtractionContext) -> Any:
        """
        Base extract method to be implemented by subclasses.

        Returns:
            The signal for this extractor's category
        """
        raise NotImplementedError("Subclasses must implement extract method")


async def run_extractor(
    extractor: BaseExtractor, context: ExtractionContext
) -> ExtractorOutcome:
    """Run one extractor, converting any failure into a tagged outcome."""
    try:
        signal = await extractor.extract(context)
    except Exception as e:
        reason = str(e) or type(e).__name__
        logger.warning(f"{extractor.name} extractor failed: {reason}")
        return ExtractorOutcome(name=extractor.name, signal=extractor.default(), error=reason)

    return ExtractorOutcome(name=extractor.name, signal=signal)
