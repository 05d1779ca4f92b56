"""Pytest fixtures for Exam Scanner tests."""

import io

import pytest
from PIL import Image

from exam_scanner.config import reset_config
from exam_scanner.config.loader import AppConfig
from exam_scanner.utils.logger import reset_tracker


@pytest.fixture(autouse=True)
def _fresh_state():
    """Each test starts with no cached config and an empty usage tracker."""
    reset_config()
    reset_tracker()
    yield
    reset_config()
    reset_tracker()


@pytest.fixture
def app_config():
    """Default configuration, independent of the packaged YAML."""
    return AppConfig()


def _image_bytes(fmt: str) -> bytes:
    buffer = io.BytesIO()
    Image.new("RGB", (8, 8), color=(255, 255, 255)).save(buffer, format=fmt)
    return buffer.getvalue()


@pytest.fixture
def png_bytes():
    return _image_bytes("PNG")


@pytest.fixture
def jpeg_bytes():
    return _image_bytes("JPEG")


@pytest.fixture
def valid_response():
    """A typical chatty model answer wrapping valid JSON."""
    return (
        "Sure! Here are the questions I found:\n"
        "```json\n"
        '{"questions": ['
        '{"que": 1, "type": "mcq", "bbox": [10, 20, 110, 500]}, '
        '{"que": 2, "type": "nat", "bbox": [120, 20, 240, 500]}'
        "]}\n"
        "```\n"
        "Let me know if you need anything else."
    )
