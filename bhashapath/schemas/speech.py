"""Speech recognition result schema."""

from pydantic import BaseModel, Field


class RecognitionResult(BaseModel):
    text: str
    confidence: float = Field(..., ge=0.0, le=1.0)
    is_correct: bool
