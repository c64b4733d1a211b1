import asyncio
import time
from dataclasses import dataclass
from typing import Awaitable, Callable, List, Optional, Sequence

from playwright.async_api import Error as PlaywrightError, Page
from loguru import logger

from pageaudit.core.config import settings, Settings
from pageaudit.core.errors import NavigationFailed
from pageaudit.schemas.report import LoadStrategy, NavigationAttempt, NavigationOutcome

DEFAULT_STRATEGIES = (
    LoadStrategy.NETWORK_IDLE,
    LoadStrategy.DOM_CONTENT_LOADED,
    LoadStrategy.LOAD,
)


@dataclass(frozen=True)
class NavigationProfile:
    """Timing budget for one navigation, in seconds."""

    timeout: float
    settle_delay: float
    total_budget: Optional[float] = None

    @classmethod
    def for_mode(cls, quick_mode: bool, config: Settings = settings) -> "NavigationProfile":
        if quick_mode:
            return cls(
                timeout=config.QUICK_NAVIGATION_TIMEOUT,
                settle_delay=config.QUICK_SETTLE_DELAY,
                total_budget=config.NAVIGATION_TOTAL_BUDGET,
            )
        return cls(
            timeout=config.NAVIGATION_TIMEOUT,
            settle_delay=config.SETTLE_DELAY,
            total_budget=config.NAVIGATION_TOTAL_BUDGET,
        )


class NavigationStrategyEngine:
    """
    Load a page by cascading through progressively weaker completion signals.

    Each strategy gets the full per-mode timeout on its own. Many sites never
    reach network idle because of polling or analytics beacons, so a failed
    strategy falls through to the next one; the first strategy to finish wins.
    When ``total_budget`` is set on the profile, per-strategy timeouts are
    clipped to whatever is left of it.
    """

    def __init__(
        self,
        strategies: Sequence[LoadStrategy] = DEFAULT_STRATEGIES,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        self.strategies = tuple(strategies)
        self._sleep = sleep

    async def navigate(
        self, page: Page, url: str, profile: NavigationProfile
    ) -> NavigationOutcome:
        """
        Navigate ``page`` to ``url``.

        Args:
            page: Page to drive
            url: Normalized target URL
            profile: Timeouts and settle delay for the request mode

        Returns:
            NavigationOutcome naming the strategy that succeeded

        Raises:
            NavigationFailed: Every strategy errored or timed out
        """
        attempts: List[NavigationAttempt] = []
        started = time.monotonic()

        for strategy in self.strategies:
            timeout = profile.timeout
            if profile.total_budget is not None:
                remaining = profile.total_budget - (time.monotonic() - started)
                if remaining <= 0:
                    logger.warning(f"Navigation budget exhausted before {strategy.value}")
                    attempts.append(
                        NavigationAttempt(strategy=strategy, error="navigation budget exhausted")
                    )
                    continue
                timeout = min(timeout, remaining)

            logger.info(f"Loading {url} with {strategy.value}...")
            try:
                await page.goto(url, wait_until=strategy.value, timeout=timeout * 1000)
            except (PlaywrightError, asyncio.TimeoutError) as e:
                logger.warning(f"{strategy.value} failed for {url}: {str(e)}")
                attempts.append(NavigationAttempt(strategy=strategy, error=str(e)))
                continue

            attempts.append(NavigationAttempt(strategy=strategy))
            logger.info(f"Loaded {url} with {strategy.value}")

            if profile.settle_delay > 0:
                logger.debug(f"Waiting {profile.settle_delay}s for dynamic content")
                await self._sleep(profile.settle_delay)

            return NavigationOutcome(
                strategy_used=strategy, succeeded=True, attempts=tuple(attempts)
            )

        raise NavigationFailed(
            url, [(attempt.strategy.value, attempt.error or "") for attempt in attempts]
        )
