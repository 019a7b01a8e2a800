"""
Analysis Schemas
Request and response schemas for text analysis API endpoints.
"""
from typing import Optional
from pydantic import BaseModel, Field

from speedread.models.text_analysis import TextAnalysis


# ==================== REQUEST SCHEMAS ====================

class TextAnalysisRequest(BaseModel):
    """Request to analyze a text."""
    text_id: str = Field(..., description="Identifier used as cache key")
    content: str = Field(..., description="Raw text")
    wpm: Optional[int] = Field(
        default=None,
        ge=1,
        le=5000,
        description="Reader speed in words per minute (default 250)"
    )


class ReadabilityRequest(BaseModel):
    """Request for raw readability scores."""
    content: str = Field(..., description="Raw text")


# ==================== RESPONSE SCHEMAS ====================

class TextAnalysisResponse(BaseModel):
    """Response containing a text analysis."""
    text_id: str
    status: str = Field(..., description="success or too_short")
    analysis: Optional[TextAnalysis] = None
    message: Optional[str] = None
