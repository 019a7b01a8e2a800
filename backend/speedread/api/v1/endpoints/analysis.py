"""
Analysis API Endpoints
REST API for text readability and analysis.
"""
from fastapi import APIRouter, Depends, HTTPException
import logging

from speedread.core.dependencies import get_text_analysis_service
from speedread.models.text_analysis import ReadabilityScores, TextAnalysis
from speedread.schemas.analysis import ReadabilityRequest, TextAnalysisRequest, TextAnalysisResponse
from speedread.services.text_analysis_service import TextAnalysisService
from speedread.utils.readability import score_readability


logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/text", response_model=TextAnalysisResponse)
async def analyze_text(
    request: TextAnalysisRequest,
    service: TextAnalysisService = Depends(get_text_analysis_service)
):
    """
    Analyze a text.

    Returns the cached report when the text id was analyzed before.
    Texts too short to analyze return status "too_short".
    """
    analysis = service.get_analysis(request.text_id, request.content, request.wpm)

    if analysis is None:
        return TextAnalysisResponse(
            text_id=request.text_id,
            status="too_short",
            message="Text is too short to analyze"
        )

    return TextAnalysisResponse(text_id=request.text_id, status="success", analysis=analysis)


@router.get("/text/{text_id}", response_model=TextAnalysis)
async def get_cached_analysis(
    text_id: str,
    service: TextAnalysisService = Depends(get_text_analysis_service)
):
    """Get a previously computed analysis."""
    analysis = service.get_cached(text_id)
    if analysis is None:
        raise HTTPException(status_code=404, detail=f"No analysis for text {text_id}")
    return analysis


@router.delete("/cache")
async def clear_analysis_cache(
    service: TextAnalysisService = Depends(get_text_analysis_service)
):
    cleared = service.cache_size
    service.clear_cache()
    logger.info(f"Cleared {cleared} cached analyses")
    return {"cleared": cleared}


@router.post("/readability", response_model=ReadabilityScores)
async def get_readability(request: ReadabilityRequest):
    """Flesch-Kincaid and SMOG scores for a text."""
    return score_readability(request.content)
