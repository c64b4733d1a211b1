import time

from fastapi import Depends, Request

from pageaudit.core.analyzer import PageAnalyzer
from pageaudit.services.browser.session import BrowserSession

PROCESS_STARTED_AT = time.monotonic()


def get_browser_session(request: Request) -> BrowserSession:
    return request.app.state.browser_session


def get_analyzer(session: BrowserSession = Depends(get_browser_session)) -> PageAnalyzer:
    return PageAnalyzer(session)


def get_uptime() -> float:
    return time.monotonic() - PROCESS_STARTED_AT
