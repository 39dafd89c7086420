"""
Image models for the OCR normalization pipeline.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional

MIME_JPEG = "image/jpeg"
MIME_PNG = "image/png"


class NormalizationStatus(Enum):
    """Whether the pipeline produced new bytes or handed back the upload."""
    TRANSFORMED = "transformed"
    ORIGINAL = "original"


@dataclass(frozen=True)
class ImageAsset:
    """Encoded image bytes plus the metadata OCR collaborators need."""
    data: bytes
    format: str
    width: int = 0
    height: int = 0

    @property
    def size(self) -> int:
        return len(self.data)


@dataclass(frozen=True)
class NormalizationOutcome:
    """Result of normalizing an uploaded image."""
    status: NormalizationStatus
    asset: ImageAsset
    compression_ratio: float
    error: Optional[str] = None

    @property
    def is_original(self) -> bool:
        return self.status is NormalizationStatus.ORIGINAL

    @property
    def data(self) -> bytes:
        return self.asset.data

    @property
    def format(self) -> str:
        return self.asset.format

    def to_dict(self) -> Dict[str, Any]:
        return {
            "bytes": self.asset.data,
            "format": self.asset.format,
            "compressionRatio": self.compression_ratio,
        }
