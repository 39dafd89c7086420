"""
Heuristic tuning configuration.

The thresholds below are tuning knobs for the local assessment engine. The
defaults reproduce the behaviour of the hosted grader; deployments can
override them through environment variables (see ``config_manager``).
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Tuple

MEGABYTE = 1024 * 1024


@dataclass
class SpellingConfig:
    """Configuration for the spell checker."""
    max_candidates: int = 400
    max_suggestion_distance: int = 3
    max_issues: int = 30
    lexicon_penalty_cap: int = 8
    fallback_penalty_cap: int = 6
    penalty_per_issue: int = 3

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            'max_candidates': self.max_candidates,
            'max_suggestion_distance': self.max_suggestion_distance,
            'max_issues': self.max_issues,
            'lexicon_penalty_cap': self.lexicon_penalty_cap,
            'fallback_penalty_cap': self.fallback_penalty_cap,
            'penalty_per_issue': self.penalty_per_issue,
        }


@dataclass
class TopicRelevanceConfig:
    """Configuration for topic relevance scoring and the off-topic gate."""
    min_unigram_length: int = 3
    sentence_overlap_threshold: float = 0.2
    overlap_min_denominator: int = 4
    coverage_gate: float = 0.15
    jaccard_gate: float = 0.02
    pass_threshold: int = 10
    # (minimum strength, lowest score, highest score, strength at highest score)
    score_bands: Tuple[Tuple[float, int, int, float], ...] = field(
        default_factory=lambda: (
            (70.0, 19, 20, 100.0),
            (50.0, 16, 19, 70.0),
            (30.0, 12, 16, 50.0),
            (15.0, 8, 12, 30.0),
            (0.0, 6, 10, 15.0),
        )
    )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            'min_unigram_length': self.min_unigram_length,
            'sentence_overlap_threshold': self.sentence_overlap_threshold,
            'overlap_min_denominator': self.overlap_min_denominator,
            'coverage_gate': self.coverage_gate,
            'jaccard_gate': self.jaccard_gate,
            'pass_threshold': self.pass_threshold,
            'score_bands': [list(band) for band in self.score_bands],
        }


@dataclass
class ImageNormalizationConfig:
    """Configuration for the OCR image normalizer."""
    max_width: int = 2000
    max_output_bytes: int = 2 * MEGABYTE
    document_size_threshold: int = MEGABYTE
    density_threshold: float = 150.0
    brightness: float = 1.1
    saturation: float = 0.8
    png_colors: int = 256
    png_compress_level: int = 9
    jpeg_quality: int = 85
    png_fallback_quality: int = 75
    jpeg_fallback_quality: int = 70
    sharpen_kernel: Tuple[int, ...] = (0, -1, 0, -1, 5, -1, 0, -1, 0)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            'max_width': self.max_width,
            'max_output_bytes': self.max_output_bytes,
            'document_size_threshold': self.document_size_threshold,
            'density_threshold': self.density_threshold,
            'brightness': self.brightness,
            'saturation': self.saturation,
            'png_colors': self.png_colors,
            'png_compress_level': self.png_compress_level,
            'jpeg_quality': self.jpeg_quality,
            'png_fallback_quality': self.png_fallback_quality,
            'jpeg_fallback_quality': self.jpeg_fallback_quality,
        }
