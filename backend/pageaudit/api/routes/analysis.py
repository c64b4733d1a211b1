from typing import Any

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from loguru import logger

from pageaudit.api import deps
from pageaudit.core.analyzer import PageAnalyzer
from pageaudit.core.errors import AnalysisError, describe_error
from pageaudit import schemas
from pageaudit.services.browser.session import BrowserSession

router = APIRouter()


@router.post("/analyze")
async def analyze_website(
    request_in: schemas.AnalysisRequest,
    analyzer: PageAnalyzer = Depends(deps.get_analyzer),
) -> Any:
    """
    Analyze a website and return its diagnostic report.
    """
    if not (request_in.target_url or "").strip():
        return JSONResponse(status_code=400, content={"error": "URL required"})

    try:
        report = await analyzer.analyze(request_in.target_url, request_in.quick_mode)
    except AnalysisError as e:
        error_type, message = describe_error(e)
        logger.warning(f"Returning {error_type} for {request_in.target_url}")
        return JSONResponse(
            status_code=500,
            content={
                "error": error_type,
                "message": message,
                "technicalDetails": e.detail,
            },
        )

    return JSONResponse(report.model_dump(mode="json", by_alias=True))


@router.get("/health")
async def health_check(
    session: BrowserSession = Depends(deps.get_browser_session),
) -> Any:
    return {
        "status": "ok",
        "browserActive": session.is_active,
        "uptime": deps.get_uptime(),
    }
