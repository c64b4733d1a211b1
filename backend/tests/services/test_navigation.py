import pytest
from playwright.async_api import Error as PlaywrightError

from fakes import FakePage
from pageaudit.core.config import Settings
from pageaudit.core.errors import NavigationFailed
from pageaudit.schemas.report import LoadStrategy
from pageaudit.services.browser.navigation import (
    NavigationProfile,
    NavigationStrategyEngine,
)


class RecordingSleep:
    def __init__(self):
        self.delays = []

    async def __call__(self, delay):
        self.delays.append(delay)


@pytest.mark.asyncio
async def test_network_idle_wins_when_page_settles():
    page = FakePage()
    sleep = RecordingSleep()
    engine = NavigationStrategyEngine(sleep=sleep)

    outcome = await engine.navigate(
        page, "https://example.com/", NavigationProfile(timeout=60, settle_delay=3.0)
    )

    assert outcome.strategy_used == LoadStrategy.NETWORK_IDLE
    assert outcome.succeeded
    assert page.goto_calls == [("https://example.com/", "networkidle", 60000)]
    assert sleep.delays == [3.0]


@pytest.mark.asyncio
async def test_falls_back_to_load_event():
    page = FakePage(succeeds_with=["load"])
    engine = NavigationStrategyEngine(sleep=RecordingSleep())

    outcome = await engine.navigate(
        page, "https://example.com/", NavigationProfile(timeout=30, settle_delay=1.0)
    )

    assert [call[1] for call in page.goto_calls] == [
        "networkidle",
        "domcontentloaded",
        "load",
    ]
    assert outcome.strategy_used == LoadStrategy.LOAD
    assert [attempt.strategy for attempt in outcome.attempts] == [
        LoadStrategy.NETWORK_IDLE,
        LoadStrategy.DOM_CONTENT_LOADED,
        LoadStrategy.LOAD,
    ]
    assert outcome.attempts[0].error.startswith("Timeout")
    assert outcome.attempts[-1].error is None


@pytest.mark.asyncio
async def test_each_strategy_gets_the_full_timeout():
    page = FakePage(succeeds_with=["load"])
    engine = NavigationStrategyEngine(sleep=RecordingSleep())

    await engine.navigate(page, "https://example.com/", NavigationProfile(30, 0))

    assert [call[2] for call in page.goto_calls] == [30000, 30000, 30000]


@pytest.mark.asyncio
async def test_all_strategies_failing_raises_navigation_failed():
    page = FakePage(succeeds_with=[])
    sleep = RecordingSleep()
    engine = NavigationStrategyEngine(sleep=sleep)

    with pytest.raises(NavigationFailed) as exc_info:
        await engine.navigate(page, "https://down.example/", NavigationProfile(30, 1.0))

    assert exc_info.value.url == "https://down.example/"
    assert [strategy for strategy, _ in exc_info.value.attempts] == [
        "networkidle",
        "domcontentloaded",
        "load",
    ]
    assert "Timeout" in exc_info.value.detail
    assert sleep.delays == []


@pytest.mark.asyncio
async def test_navigation_errors_fall_through():
    class DnsFailingPage(FakePage):
        async def goto(self, url, wait_until=None, timeout=None):
            self.goto_calls.append((url, wait_until, timeout))
            if wait_until == "networkidle":
                raise PlaywrightError("net::ERR_NAME_NOT_RESOLVED")

    page = DnsFailingPage()
    outcome = await NavigationStrategyEngine(sleep=RecordingSleep()).navigate(
        page, "https://example.com/", NavigationProfile(30, 0)
    )

    assert outcome.strategy_used == LoadStrategy.DOM_CONTENT_LOADED


@pytest.mark.asyncio
async def test_total_budget_clips_timeouts():
    page = FakePage(succeeds_with=["load"])
    engine = NavigationStrategyEngine(sleep=RecordingSleep())

    await engine.navigate(
        page, "https://example.com/", NavigationProfile(60, 0, total_budget=10)
    )

    timeouts = [call[2] for call in page.goto_calls]
    assert len(timeouts) == 3
    assert all(timeout <= 10000 for timeout in timeouts)


def test_profile_for_mode(test_settings):
    quick = NavigationProfile.for_mode(True, test_settings)
    normal = NavigationProfile.for_mode(False, test_settings)

    assert quick.timeout == 30
    assert normal.timeout == 60
    assert quick.total_budget is None


def test_default_profiles_settle_after_load():
    config = Settings()

    quick = NavigationProfile.for_mode(True, config)
    normal = NavigationProfile.for_mode(False, config)

    assert (quick.timeout, quick.settle_delay) == (30, 1.0)
    assert (normal.timeout, normal.settle_delay) == (60, 3.0)
