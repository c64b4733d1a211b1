from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger

from pageaudit import __version__
from pageaudit.api.routes import analysis
from pageaudit.core.config import settings
from pageaudit.core.errors import BrowserUnavailable
from pageaudit.core.logging import setup_logging
from pageaudit.services.browser.session import BrowserSession

app = FastAPI(
    title="PageAudit API",
    description="API for browser-driven website diagnostics",
    version=__version__,
)

app.state.browser_session = BrowserSession.from_settings(settings)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=[str(origin) for origin in settings.BACKEND_CORS_ORIGINS] or ["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(analysis.router, prefix=settings.API_V1_STR, tags=["Analysis"])


@app.on_event("startup")
async def startup_event():
    setup_logging()
    if not settings.BROWSER_LAUNCH_ON_STARTUP:
        return

    try:
        await app.state.browser_session.start()
    except BrowserUnavailable as e:
        logger.error(f"Browser launch at startup failed: {e.detail}")
        logger.warning("Application will continue to run; launch is retried per request.")


@app.on_event("shutdown")
async def shutdown_event():
    await app.state.browser_session.close()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=settings.PORT)
