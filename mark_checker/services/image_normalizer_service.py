"""
Image normalization ahead of optical text recognition.

Uploaded photos and scans are resized, sharpened and tonally adjusted so
that text stands out, then re-encoded in the format that suits their content:
palette PNG for document-like images, progressive JPEG for photos. The
pipeline fails open: whatever goes wrong, the caller gets the original bytes
back as an ``ORIGINAL`` outcome.
"""

import io
import threading
import time
from typing import Optional, Tuple, Union

from PIL import Image, ImageEnhance, ImageFilter, ImageOps

from mark_checker.config import ConfigManager, ImageNormalizationConfig
from mark_checker.exceptions import ImageNormalizationError
from mark_checker.models.image_models import (
    MIME_JPEG,
    MIME_PNG,
    ImageAsset,
    NormalizationOutcome,
    NormalizationStatus,
)
from mark_checker.services.base_service import BaseService, ServiceStatus
from mark_checker.utils.logger import logger

GRAYSCALE_MODES = {"1", "L", "LA", "I", "I;16", "F"}

BytesLike = Union[bytes, bytearray, memoryview]


def _as_bytes(data) -> bytes:
    if isinstance(data, (bytes, bytearray, memoryview)):
        return bytes(data)
    return b""


class ImageNormalizationService(BaseService):
    """Prepares uploaded images for text recognition."""

    def __init__(self, config: Optional[ImageNormalizationConfig] = None, **kwargs):
        super().__init__(kwargs.pop("service_name", "image_normalizer"), **kwargs)
        self.image_config = config or ConfigManager().config.image

    def initialize(self) -> bool:
        self._initialized = True
        self.metrics.status = ServiceStatus.HEALTHY
        return True

    def health_check(self) -> bool:
        # Pillow is imported at module load; there is no external backend.
        return True

    def cleanup(self) -> None:
        logger.debug(f"{self.service_name} has no resources to release")

    def normalize(self, data: BytesLike, original_size: Optional[int] = None) -> NormalizationOutcome:
        """Normalize an uploaded image for OCR.

        Args:
            data: Encoded image bytes as uploaded (bytes, bytearray or memoryview)
            original_size: Upload size in bytes; defaults to ``len(data)``

        Returns:
            NormalizationOutcome. Never raises: on any failure the outcome is
            ``ORIGINAL`` with the input bytes, JPEG format and ratio 1.
        """
        payload = _as_bytes(data)
        original_size = original_size or len(payload)
        start_time = time.time()
        try:
            with self.track_request("normalize"):
                outcome = self._run_pipeline(payload, original_size)
        except Exception as e:
            logger.warning(f"Image normalization failed, using original image: {e}")
            logger.log_metric("image_fallbacks")
            self.increment_custom_metric("fallbacks")
            return NormalizationOutcome(
                status=NormalizationStatus.ORIGINAL,
                asset=ImageAsset(data=payload, format=MIME_JPEG),
                compression_ratio=1.0,
                error=str(e),
            )

        logger.log_metric("image_normalizations")
        logger.info(
            f"Image normalized in {time.time() - start_time:.2f}s: "
            f"{original_size / 1024:.1f}KB -> {outcome.asset.size / 1024:.1f}KB "
            f"({outcome.format}, {outcome.compression_ratio:.2f}x smaller)"
        )
        return outcome

    def _run_pipeline(self, data: bytes, original_size: int) -> NormalizationOutcome:
        cfg = self.image_config
        if not data:
            raise ImageNormalizationError("Empty image payload", step="load")

        with Image.open(io.BytesIO(data)) as source:
            source.load()
            width, height = source.size
            if width <= 0 or height <= 0:
                raise ImageNormalizationError(f"Unusable image size {width}x{height}", step="load")

            channels = len(source.getbands())
            density = self._density(source.info.get("dpi"))
            mode = "L" if source.mode in GRAYSCALE_MODES else "RGB"
            img = source.convert(mode)

        logger.debug(
            f"Image metadata: {width}x{height}, channels={channels}, density={density}"
        )

        if img.width > cfg.max_width:
            new_height = max(1, round(img.height * cfg.max_width / img.width))
            img = img.resize((cfg.max_width, new_height), Image.Resampling.LANCZOS)
            logger.debug(f"Resized image to {img.width}x{img.height}")

        img = img.filter(ImageFilter.Kernel((3, 3), cfg.sharpen_kernel, scale=1))
        img = ImageEnhance.Brightness(img).enhance(cfg.brightness)
        if img.mode == "RGB":
            img = ImageEnhance.Color(img).enhance(cfg.saturation)
        img = ImageOps.autocontrast(img)

        document_like = self.is_document_like(channels, density, original_size)
        if document_like:
            output, fmt = self._encode_png(img), MIME_PNG
        else:
            output, fmt = self._encode_jpeg(img, cfg.jpeg_quality), MIME_JPEG

        if len(output) > cfg.max_output_bytes:
            quality = cfg.png_fallback_quality if fmt == MIME_PNG else cfg.jpeg_fallback_quality
            logger.debug(f"Output still {len(output)} bytes, re-encoding as JPEG q{quality}")
            output, fmt = self._encode_jpeg(img, quality), MIME_JPEG

        return NormalizationOutcome(
            status=NormalizationStatus.TRANSFORMED,
            asset=ImageAsset(data=output, format=fmt, width=img.width, height=img.height),
            compression_ratio=original_size / (len(output) or 1),
        )

    def is_document_like(self, channels: int, density: Optional[float], original_size: int) -> bool:
        """Scans and screenshots: single channel, high density or a small upload."""
        cfg = self.image_config
        return (
            channels == 1
            or (density is not None and density > cfg.density_threshold)
            or original_size < cfg.document_size_threshold
        )

    @staticmethod
    def _density(dpi: Optional[Tuple[float, float]]) -> Optional[float]:
        if not dpi:
            return None
        try:
            return float(max(dpi))
        except (TypeError, ValueError):
            return None

    def _encode_png(self, img: Image.Image) -> bytes:
        cfg = self.image_config
        if img.mode == "RGB":
            img = img.quantize(colors=cfg.png_colors)
        buffer = io.BytesIO()
        img.save(buffer, "PNG", optimize=True, compress_level=cfg.png_compress_level)
        return buffer.getvalue()

    @staticmethod
    def _encode_jpeg(img: Image.Image, quality: int) -> bytes:
        buffer = io.BytesIO()
        img.save(buffer, "JPEG", quality=quality, progressive=True, optimize=True)
        return buffer.getvalue()


_default_service: Optional[ImageNormalizationService] = None
_default_lock = threading.Lock()


def get_image_normalizer() -> ImageNormalizationService:
    """Return the process-wide image normalizer, creating it on first use."""
    global _default_service
    with _default_lock:
        if _default_service is None:
            _default_service = ImageNormalizationService()
        return _default_service


def normalize_image(data: BytesLike, original_size: Optional[int] = None) -> NormalizationOutcome:
    """Normalize an image with the process-wide service."""
    return get_image_normalizer().normalize(data, original_size)
