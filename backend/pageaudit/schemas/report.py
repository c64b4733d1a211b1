import base64
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Literal, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_serializer
from pydantic.alias_generators import to_camel


class ReportModel(BaseModel):
    """Frozen base for every report value; serializes with camelCase keys."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )


class LoadStrategy(str, Enum):
    """Page-load completion criteria, in the order they are attempted."""

    NETWORK_IDLE = "networkidle"
    DOM_CONTENT_LOADED = "domcontentloaded"
    LOAD = "load"


class AnalysisRequest(ReportModel):
    target_url: Optional[str] = None
    quick_mode: bool = False

    model_config = ConfigDict(
        json_schema_extra={
            "example": {"targetUrl": "example.com", "quickMode": True}
        }
    )


class NavigationAttempt(ReportModel):
    strategy: LoadStrategy
    error: Optional[str] = None


class NavigationOutcome(ReportModel):
    strategy_used: LoadStrategy
    succeeded: bool = True
    attempts: Tuple[NavigationAttempt, ...] = ()


class PageSnapshot(ReportModel):
    rendered_html: str
    screenshot: bytes = b""
    timing_data: Optional[Dict[str, Any]] = None


class LayoutSignals(ReportModel):
    has_header: bool = False
    has_nav: bool = False
    has_footer: bool = False
    has_hero: bool = False
    has_main: bool = False
    section_count: int = 0
    article_count: int = 0
    form_count: int = 0
    button_count: int = 0
    image_count: int = 0
    link_count: int = 0
    body_text_length: int = 0


class OpenGraph(ReportModel):
    title: Optional[str] = None
    description: Optional[str] = None
    image: Optional[str] = None


class SEOSignals(ReportModel):
    title: Optional[str] = None
    title_length: int = 0
    meta_description: Optional[str] = None
    meta_description_length: int = 0
    h1_count: int = 0
    h1_text: Optional[str] = None
    images_without_alt: int = 0
    canonical: Optional[str] = None
    open_graph: OpenGraph = Field(default_factory=OpenGraph)


class PerformanceMetrics(ReportModel):
    load_time: int = 0
    dom_content_loaded: int = 0
    response_time: int = 0
    transfer_size: int = 0


class SecurityFinding(ReportModel):
    severity: Literal["warning", "info"]
    message: str


class ScoreResult(ReportModel):
    score: int = Field(ge=0, le=100)
    issues: Tuple[str, ...] = ()


class ExtractorFailureInfo(ReportModel):
    extractor: str
    reason: str


class ReportMeta(ReportModel):
    analyzed_at: datetime
    analysis_time_ms: int
    quick_mode: bool = False
    strategy_used: Optional[LoadStrategy] = None
    failed_extractors: Tuple[ExtractorFailureInfo, ...] = ()


class AnalysisReport(ReportModel):
    url: str
    screenshot: bytes = b""
    tech_stack: Tuple[str, ...] = ()
    trackers: Tuple[str, ...] = ()
    layout: LayoutSignals = Field(default_factory=LayoutSignals)
    seo: SEOSignals = Field(default_factory=SEOSignals)
    seo_score: ScoreResult
    performance: PerformanceMetrics = Field(default_factory=PerformanceMetrics)
    accessibility: Tuple[str, ...] = ()
    security: Tuple[SecurityFinding, ...] = ()
    meta: ReportMeta

    @field_serializer("screenshot", when_used="json")
    def encode_screenshot(self, value: bytes) -> str:
        return base64.b64encode(value).decode("ascii")
