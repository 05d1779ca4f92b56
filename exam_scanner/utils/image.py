"""
Image payload helpers.

Turns the forms a page image arrives in (data URL, raw base64, bytes, file
path) into raw bytes plus a declared MIME type for the model request.
"""

import base64
import binascii
import io
import re
from pathlib import Path

from PIL import Image, UnidentifiedImageError
from pydantic import BaseModel

from .logger import log_debug

DEFAULT_MIME_TYPE = "image/png"

_DATA_URL_RE = re.compile(r"^data:(image/[\w.+-]+);base64,", re.IGNORECASE)


class ImagePayload(BaseModel):
    """Binary image data plus its declared MIME type."""
    data: bytes
    mime_type: str = DEFAULT_MIME_TYPE


def sniff_mime_type(data: bytes, default: str = DEFAULT_MIME_TYPE) -> str:
    """Detect the MIME type of image bytes with Pillow, falling back to `default`."""
    try:
        with Image.open(io.BytesIO(data)) as img:
            mime_type = Image.MIME.get(img.format or "")
    except (UnidentifiedImageError, OSError) as e:
        log_debug(f"Could not identify image format: {e}")
        return default
    return mime_type or default


def decode_base64_image(text: str) -> ImagePayload:
    """
    Decode a data URL or raw base64 string.

    Raises:
        ValueError: If the payload is not valid base64
    """
    mime_type = None
    match = _DATA_URL_RE.match(text.strip())
    if match:
        mime_type = match.group(1).lower()
        text = text.strip()[match.end():]

    try:
        data = base64.b64decode("".join(text.split()), validate=True)
    except (binascii.Error, ValueError) as e:
        raise ValueError(f"Invalid base64 image data: {e}") from e

    if not data:
        raise ValueError("Image payload is empty")

    return ImagePayload(data=data, mime_type=mime_type or sniff_mime_type(data))


def load_image_payload(image: bytes | str | Path) -> ImagePayload:
    """
    Normalise an image argument into an ImagePayload.

    Args:
        image: Raw bytes, a Path to an image file, or a str holding a
               data URL / raw base64 string

    Returns:
        ImagePayload with bytes and MIME type

    Raises:
        FileNotFoundError: If a Path is given and does not exist
        ValueError: If a str payload is not valid base64
    """
    if isinstance(image, Path):
        if not image.exists():
            raise FileNotFoundError(f"Image file not found: {image}")
        data = image.read_bytes()
        return ImagePayload(data=data, mime_type=sniff_mime_type(data))

    if isinstance(image, (bytes, bytearray)):
        data = bytes(image)
        return ImagePayload(data=data, mime_type=sniff_mime_type(data))

    return decode_base64_image(image)
