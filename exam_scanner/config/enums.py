"""
Provider and Model Enums for Exam Scanner.

These enums define the available providers and models that can be used
to locate questions on scanned exam pages.
"""

from enum import Enum


class Provider(str, Enum):
    """Available generative model providers."""
    GOOGLE = "google"
    ANTHROPIC = "anthropic"


class GoogleModel(str, Enum):
    """Available Google Gemini models for page scanning."""
    GEMINI_1_5_FLASH = "gemini-1.5-flash"
    GEMINI_2_5_FLASH = "gemini-2.5-flash"
    # Add more Gemini models as needed


class AnthropicModel(str, Enum):
    """Available Anthropic Claude models for page scanning."""
    CLAUDE_HAIKU_4_5 = "claude-haiku-4-5-20251001"
    CLAUDE_SONNET_4_5 = "claude-sonnet-4-5-20250929"


class BraceStrategy(str, Enum):
    """How the JSON object is located inside free-form model output."""
    GREEDY = "greedy"  # first "{" to last "}"
    BALANCED = "balanced"  # first fully balanced top-level object
