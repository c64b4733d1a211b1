import asyncio
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Awaitable, Callable, List, Optional, Set

from playwright.async_api import async_playwright, Browser, BrowserContext, Page
from loguru import logger

from pageaudit.core.config import settings, Settings
from pageaudit.core.errors import BrowserUnavailable


class BrowserSession:
    """
    Owns one long-lived headless browser and hands out isolated pages.

    The browser is launched lazily (or explicitly via ``start``) under a lock,
    so concurrent first requests share a single launch. Every page lives in
    its own browser context which is closed when the request is done. The
    number of simultaneously open pages is capped by a semaphore; callers
    beyond the cap queue for up to ``acquire_timeout`` seconds.
    """

    def __init__(
        self,
        headless: bool = True,
        args: Optional[List[str]] = None,
        viewport: Optional[dict] = None,
        user_agent: Optional[str] = None,
        max_pages: int = 4,
        acquire_timeout: Optional[float] = 30.0,
        launcher: Optional[Callable[[], Awaitable[Any]]] = None,
    ):
        self.headless = headless
        self.args = list(args or [])
        self.viewport = viewport or {"width": 1920, "height": 1080}
        self.user_agent = user_agent
        self.max_pages = max_pages
        self.acquire_timeout = acquire_timeout

        self.browser: Optional[Browser] = None
        self._playwright = None
        self._launcher = launcher or self._launch_chromium
        self._launch_lock = asyncio.Lock()
        self._page_slots = asyncio.Semaphore(max_pages)
        self._contexts: Set[BrowserContext] = set()

    @classmethod
    def from_settings(cls, config: Settings = settings, **kwargs) -> "BrowserSession":
        """Build a session from application settings."""
        options = dict(
            headless=config.BROWSER_HEADLESS,
            args=config.BROWSER_ARGS,
            viewport={
                "width": config.BROWSER_VIEWPORT_WIDTH,
                "height": config.BROWSER_VIEWPORT_HEIGHT,
            },
            user_agent=config.BROWSER_USER_AGENT,
            max_pages=config.MAX_CONCURRENT_PAGES,
            acquire_timeout=config.PAGE_ACQUIRE_TIMEOUT,
        )
        options.update(kwargs)
        return cls(**options)

    @property
    def is_active(self) -> bool:
        return self.browser is not None

    @property
    def open_pages(self) -> int:
        return len(self._contexts)

    async def start(self) -> Browser:
        """Launch the browser if it is not running yet and return it."""
        if self.browser is not None:
            return self.browser

        async with self._launch_lock:
            if self.browser is None:  # Double check under lock
                try:
                    self.browser = await self._launcher()
                except Exception as e:
                    logger.error(f"Failed to launch browser: {str(e)}")
                    raise BrowserUnavailable(
                        "Unable to start the headless browser", str(e)
                    ) from e
                self.browser.on("disconnected", self._on_disconnected)
                logger.info("Headless browser launched")

        return self.browser

    def _on_disconnected(self, browser: Browser) -> None:
        # Drop the dead handle so the next request relaunches
        if self.browser is browser:
            logger.warning("Headless browser disconnected; relaunching on next use")
            self.browser = None
            self._contexts.clear()

    async def _launch_chromium(self) -> Browser:
        if self._playwright is None:
            self._playwright = await async_playwright().start()
        try:
            return await self._playwright.chromium.launch(
                headless=self.headless, args=self.args
            )
        except Exception:
            await self._playwright.stop()
            self._playwright = None
            raise

    @asynccontextmanager
    async def page(self) -> AsyncIterator[Page]:
        """
        Open a fresh page in its own browser context.

        The context is closed on every exit path, including errors raised
        by the body of the ``async with`` block.

        Raises:
            BrowserUnavailable: The browser cannot be launched, no page slot
                frees up in time, or the page cannot be created
        """
        await self._acquire_slot()
        context = None
        try:
            browser = await self.start()
            try:
                context = await browser.new_context(
                    viewport=self.viewport, user_agent=self.user_agent
                )
                self._contexts.add(context)
                page = await context.new_page()
            except Exception as e:
                logger.error(f"Failed to open a browser page: {str(e)}")
                raise BrowserUnavailable("Unable to open a browser page", str(e)) from e

            yield page
        finally:
            if context is not None:
                await self._close_context(context)
            self._page_slots.release()

    async def _acquire_slot(self) -> None:
        if self.acquire_timeout is None:
            await self._page_slots.acquire()
            return

        try:
            await asyncio.wait_for(self._page_slots.acquire(), self.acquire_timeout)
        except asyncio.TimeoutError:
            logger.warning(
                f"No page slot freed within {self.acquire_timeout}s "
                f"({self.max_pages} pages busy)"
            )
            raise BrowserUnavailable(
                "The analyzer is busy, please retry shortly",
                f"all {self.max_pages} page slots in use",
            )

    async def _close_context(self, context: BrowserContext) -> None:
        self._contexts.discard(context)
        try:
            await context.close()
        except Exception as e:
            logger.warning(f"Error closing browser context: {str(e)}")

    async def close(self) -> None:
        """Close every outstanding page and the browser process."""
        async with self._launch_lock:
            for context in list(self._contexts):
                await self._close_context(context)

            if self.browser is not None:
                try:
                    await self.browser.close()
                    logger.info("Closed headless browser")
                except Exception as e:
                    logger.error(f"Error closing browser: {str(e)}")
                finally:
                    self.browser = None

            if self._playwright is not None:
                await self._playwright.stop()
                self._playwright = None
