"""Data models for the grading engine."""

from .analysis_models import (
    MAX_TOTAL_SCORE,
    AnalysisResult,
    CategoryKind,
    RubricCategory,
    preview_text,
)
from .api_responses import ErrorCode, ErrorDetail
from .image_models import (
    MIME_JPEG,
    MIME_PNG,
    ImageAsset,
    NormalizationOutcome,
    NormalizationStatus,
)

__all__ = [
    "MAX_TOTAL_SCORE",
    "AnalysisResult",
    "CategoryKind",
    "RubricCategory",
    "preview_text",
    "ErrorCode",
    "ErrorDetail",
    "MIME_JPEG",
    "MIME_PNG",
    "ImageAsset",
    "NormalizationOutcome",
    "NormalizationStatus",
]
