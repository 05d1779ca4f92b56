"""
Provider implementations for page scanning services.
"""

from .anthropic import AnthropicService
from .google import GoogleService

__all__ = [
    "AnthropicService",
    "GoogleService",
]
