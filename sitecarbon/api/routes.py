import logging
from typing import Optional

import httpx
from fastapi import APIRouter, Query, status
from fastapi.responses import JSONResponse

from sitecarbon.audit.browser import run_audit
from sitecarbon.errors import CollaboratorError, FetchError, URLValidationError
from sitecarbon.llm.client import GeminiRecommender, StaticRecommender
from sitecarbon.schemas import AuditReport, CarbonReportResponse, ErrorResponse
from sitecarbon.services.report import build_report, render_report

logger = logging.getLogger(__name__)

router = APIRouter()

MISSING_URL = "Missing URL parameter."
CO2_FAILED = "Failed to fetch the website or calculate CO2."
ANALYSIS_FAILED = "Failed to analyze sustainability."
AUDIT_FAILED = "Failed to run browser audit."
LIGHTHOUSE_FAILED = "Failed to run Lighthouse audit."

ERROR_RESPONSES = {
    400: {"model": ErrorResponse},
    500: {"model": ErrorResponse},
}

def validate_url(url: Optional[str]) -> str:
    if not url:
        raise URLValidationError(MISSING_URL)
    try:
        parsed = httpx.URL(url)
    except httpx.InvalidURL:
        raise URLValidationError(f"Malformed URL: {url}")
    if parsed.scheme not in ("http", "https"):
        raise URLValidationError("URL must start with http:// or https://")
    if not parsed.host:
        raise URLValidationError("URL must include a host name")
    return url

def error_response(status_code: int, error: str, details: Optional[str] = None) -> JSONResponse:
    body = ErrorResponse(error=error, details=details).model_dump(exclude_none=True)
    return JSONResponse(status_code=status_code, content=body)

@router.get("/co2", response_model=CarbonReportResponse, responses=ERROR_RESPONSES)
async def co2_report(
    url: Optional[str] = Query(None, description="Absolute URL of the resource to measure"),
    green: bool = Query(False, description="Whether the site is hosted on renewable energy"),
):
    """
    Estimate the carbon footprint of one load of a URL.

    Returns emissions, annual projection, everyday equivalents, an efficiency
    tier and a fixed list of reduction recommendations.
    """
    try:
        url = validate_url(url)
    except URLValidationError as e:
        return error_response(status.HTTP_400_BAD_REQUEST, str(e))

    try:
        report = await build_report(url, recommender=StaticRecommender(), is_green_hosted=green)
    except FetchError as e:
        logger.error("Error fetching URL: %s", e)
        return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, CO2_FAILED, str(e))
    return render_report(report)

@router.get("/ai-sustainability", response_model=CarbonReportResponse, responses=ERROR_RESPONSES)
async def ai_sustainability(
    url: Optional[str] = Query(None, description="Absolute URL of the resource to measure"),
    green: bool = Query(False, description="Whether the site is hosted on renewable energy"),
):
    """Same report as /co2 with recommendations written by the language model."""
    try:
        url = validate_url(url)
    except URLValidationError as e:
        return error_response(status.HTTP_400_BAD_REQUEST, str(e))

    try:
        report = await build_report(url, recommender=GeminiRecommender(), is_green_hosted=green)
    except FetchError as e:
        logger.error("Error fetching data: %s", e)
        return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, ANALYSIS_FAILED, str(e))
    return render_report(report)

async def _audit_response(url: Optional[str], failure_message: str):
    try:
        url = validate_url(url)
    except URLValidationError as e:
        return error_response(status.HTTP_400_BAD_REQUEST, str(e))

    try:
        return await run_audit(url)
    except CollaboratorError as e:
        logger.error("Error running browser audit: %s", e)
        return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, failure_message, str(e))

@router.get("/audit", response_model=AuditReport, responses=ERROR_RESPONSES)
async def browser_audit(url: Optional[str] = Query(None, description="Absolute URL of the page to audit")):
    """Performance, accessibility, SEO and best-practice audit in a headless browser."""
    return await _audit_response(url, AUDIT_FAILED)

@router.get("/lighthouse", response_model=AuditReport, responses=ERROR_RESPONSES)
async def lighthouse_audit(url: Optional[str] = Query(None, description="Absolute URL of the page to audit")):
    """Same audit as /audit under the path earlier clients call."""
    return await _audit_response(url, LIGHTHOUSE_FAILED)

@router.get("/health")
async def health_check():
    """Health check endpoint"""
    return {"status": "healthy", "service": "Site Carbon Estimator"}
