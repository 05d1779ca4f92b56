"""
Utility modules for Exam Scanner.

Contains image payload handling, prompts, logging and usage tracking.
"""

from .image import ImagePayload, load_image_payload, decode_base64_image, sniff_mime_type
from .logger import (
    log,
    log_debug,
    log_warning,
    log_error,
    log_usage,
    get_tracker,
    reset_tracker,
    UsageTracker,
    UsageRecord,
)
from .prompts import PAGE_SCAN_PROMPT

__all__ = [
    # Image utilities
    "ImagePayload",
    "load_image_payload",
    "decode_base64_image",
    "sniff_mime_type",
    # Prompts
    "PAGE_SCAN_PROMPT",
    # Logging utilities
    "log",
    "log_debug",
    "log_warning",
    "log_error",
    "log_usage",
    "get_tracker",
    "reset_tracker",
    "UsageTracker",
    "UsageRecord",
]
