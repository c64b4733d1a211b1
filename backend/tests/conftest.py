from pathlib import Path

import pytest

from pageaudit.core.config import Settings

FIXTURES_DIR = Path(__file__).parent / "fixtures"


@pytest.fixture
def test_settings() -> Settings:
    return Settings(
        SETTLE_DELAY=0,
        QUICK_SETTLE_DELAY=0,
        BROWSER_LAUNCH_ON_STARTUP=False,
    )


@pytest.fixture
def sample_html() -> str:
    return (FIXTURES_DIR / "sample_page.html").read_text(encoding="utf-8")
