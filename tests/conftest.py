"""
Test configuration and fixtures for the Mark Checker test suite.
"""

import io

import pytest
from PIL import Image

from mark_checker.config import Config
from mark_checker.grading.text_profile import tokenize
from mark_checker.services.base_service import ServiceRegistry
from mark_checker.services.lexicon_service import Lexicon, LexiconService

PHOTOSYNTHESIS_ESSAY = (
    "Photosynthesis is the process plants use to make food. "
    "Sunlight provides the energy for photosynthesis. "
    "Plants absorb sunlight through their leaves. "
    "Chlorophyll in plants captures sunlight and water. "
    "Photosynthesis produces oxygen for the planet. "
    "As a result, plants support life on Earth."
)

CAT_ESSAY = (
    "My cat likes to sleep on the sofa all day. "
    "She purrs when I stroke her fur. "
    "Cats are wonderful pets."
)

EXTRA_WORDS = [
    "receive", "garden", "beautiful", "gate", "well", "known", "package",
    "tomorrow", "will", "i", "a", "is", "was", "the", "we", "go", "home",
]


@pytest.fixture
def photosynthesis_essay():
    return PHOTOSYNTHESIS_ESSAY


@pytest.fixture
def cat_essay():
    return CAT_ESSAY


@pytest.fixture
def small_lexicon():
    """Lexicon covering the sample essays plus a few extra words."""
    words = set(tokenize(PHOTOSYNTHESIS_ESSAY)) | set(tokenize(CAT_ESSAY)) | set(EXTRA_WORDS)
    return Lexicon(words)


@pytest.fixture
def lexicon_service(small_lexicon):
    """Lexicon service that never touches the bundled dictionary."""
    return LexiconService(loader=lambda: small_lexicon)


@pytest.fixture
def engine_config():
    return Config()


@pytest.fixture(autouse=True)
def clean_registry():
    """Keep registered services from leaking between tests."""
    yield
    ServiceRegistry.cleanup_all()


def encode_image(img, fmt="PNG", **save_kwargs):
    buffer = io.BytesIO()
    img.save(buffer, fmt, **save_kwargs)
    return buffer.getvalue()


@pytest.fixture
def wide_png():
    """3000x1000 RGB image encoded as PNG."""
    img = Image.new("RGB", (3000, 1000), color=(240, 240, 230))
    return encode_image(img, "PNG")


@pytest.fixture
def small_rgb_png():
    img = Image.new("RGB", (800, 600), color=(200, 180, 160))
    return encode_image(img, "PNG")


@pytest.fixture
def grayscale_png():
    img = Image.new("L", (640, 480), color=200)
    return encode_image(img, "PNG")


@pytest.fixture
def high_density_jpeg():
    img = Image.new("RGB", (600, 400), color=(90, 120, 150))
    return encode_image(img, "JPEG", dpi=(300, 300))
