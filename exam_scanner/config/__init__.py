"""
Configuration module for Exam Scanner.

Provides provider/model enums and YAML configuration loading.
"""

from .enums import Provider, GoogleModel, AnthropicModel, BraceStrategy
from .loader import (
    load_config,
    get_config,
    reset_config,
    AppConfig,
    ProviderConfig,
    ModelConfig,
    GoogleConfig,
    AnthropicConfig,
    ExtractionConfig,
)

__all__ = [
    "Provider",
    "GoogleModel",
    "AnthropicModel",
    "BraceStrategy",
    "load_config",
    "get_config",
    "reset_config",
    "AppConfig",
    "ProviderConfig",
    "ModelConfig",
    "GoogleConfig",
    "AnthropicConfig",
    "ExtractionConfig",
]
