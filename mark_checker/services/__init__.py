"""Long-lived engine services.

``WritingGraderService`` lives in ``mark_checker.services.writing_grader_service``
and is imported from there; the scorers depend on the lexicon service in this
package.
"""

from .base_service import (
    BaseService,
    ServiceInjector,
    ServiceMetrics,
    ServiceRegistry,
    ServiceStatus,
)
from .image_normalizer_service import ImageNormalizationService, normalize_image
from .lexicon_service import Lexicon, LexiconService, ensure_lexicon, get_lexicon_service

__all__ = [
    "BaseService",
    "ServiceInjector",
    "ServiceMetrics",
    "ServiceRegistry",
    "ServiceStatus",
    "Lexicon",
    "LexiconService",
    "ensure_lexicon",
    "get_lexicon_service",
    "ImageNormalizationService",
    "normalize_image",
]
