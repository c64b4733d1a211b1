from pageaudit.schemas.report import (
    AnalysisReport,
    AnalysisRequest,
    ExtractorFailureInfo,
    LayoutSignals,
    LoadStrategy,
    NavigationAttempt,
    NavigationOutcome,
    OpenGraph,
    PageSnapshot,
    PerformanceMetrics,
    ReportMeta,
    ScoreResult,
    SecurityFinding,
    SEOSignals,
)
