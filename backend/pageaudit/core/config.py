from typing import List, Union, Optional

from pydantic import AnyHttpUrl, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


DEFAULT_BROWSER_ARGS = [
    "--no-sandbox",
    "--disable-setuid-sandbox",
    "--disable-dev-shm-usage",
    "--disable-accelerated-2d-canvas",
    "--disable-gpu",
    "--disable-web-security",
    "--disable-features=IsolateOrigins,site-per-process",
]


class Settings(BaseSettings):
    # API settings
    API_V1_STR: str = ""
    PORT: int = 5000

    # CORS
    BACKEND_CORS_ORIGINS: List[AnyHttpUrl] = []

    @field_validator("BACKEND_CORS_ORIGINS", mode="before")
    def assemble_cors_origins(cls, v: Union[str, List[str]]) -> List[str]:
        if isinstance(v, str) and not v.startswith("["):
            return [i.strip() for i in v.split(",") if i.strip()]
        elif isinstance(v, (list, str)):
            return v
        raise ValueError(v)

    # Browser settings
    BROWSER_HEADLESS: bool = True
    BROWSER_ARGS: List[str] = DEFAULT_BROWSER_ARGS
    BROWSER_VIEWPORT_WIDTH: int = 1920
    BROWSER_VIEWPORT_HEIGHT: int = 1080
    BROWSER_USER_AGENT: str = (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/121.0.0.0 Safari/537.36"
    )
    BROWSER_LAUNCH_ON_STARTUP: bool = True

    # Admission control for page contexts
    MAX_CONCURRENT_PAGES: int = 4
    PAGE_ACQUIRE_TIMEOUT: Optional[float] = 30.0

    # Navigation settings (seconds)
    NAVIGATION_TIMEOUT: float = 60
    QUICK_NAVIGATION_TIMEOUT: float = 30
    SETTLE_DELAY: float = 3.0
    QUICK_SETTLE_DELAY: float = 1.0
    NAVIGATION_TOTAL_BUDGET: Optional[float] = None

    # Snapshot settings
    SCREENSHOT_TYPE: str = "jpeg"
    SCREENSHOT_QUALITY: int = 85
    SCREENSHOT_FULL_PAGE: bool = False

    # Environment
    ENVIRONMENT: str = "development"  # Default to development
    DEBUG: bool = True  # Default to True for development
    LOG_LEVEL: str = "INFO"

    @model_validator(mode="after")
    def check_limits(self) -> "Settings":
        if self.MAX_CONCURRENT_PAGES < 1:
            raise ValueError("MAX_CONCURRENT_PAGES must be at least 1")
        if self.QUICK_NAVIGATION_TIMEOUT > self.NAVIGATION_TIMEOUT:
            raise ValueError(
                "QUICK_NAVIGATION_TIMEOUT must not exceed NAVIGATION_TIMEOUT"
            )
        return self

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
    )


settings = Settings()
