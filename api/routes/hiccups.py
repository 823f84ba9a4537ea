from __future__ import annotations

from fastapi import APIRouter

from api.requests import AnalyzeRequest, DetectRequest
from api.responses import DetectionResponse, HiccupAnalysisReport
from api.routes.exception import handle_exceptions
from services.analyze_service import run_analysis, run_detection

router = APIRouter(tags=["Hiccups"])


@router.post("/hiccups/detect", response_model=DetectionResponse, summary="Detect hiccups in one response time series")
@handle_exceptions
async def detect_hiccups(req: DetectRequest) -> DetectionResponse:
    return run_detection(req)


@router.post("/hiccups/analyze", response_model=HiccupAnalysisReport, summary="Per-operation hiccup analysis")
@handle_exceptions
async def analyze_hiccups(req: AnalyzeRequest) -> HiccupAnalysisReport:
    return run_analysis(req)
