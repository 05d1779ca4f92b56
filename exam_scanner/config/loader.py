"""
Configuration Loader for Exam Scanner.

Loads and validates configuration from YAML files.
"""

from pathlib import Path
from typing import Any

import yaml  # type: ignore[import-untyped]
from pydantic import BaseModel, Field

from exam_scanner.utils.logger import log_warning

from .enums import BraceStrategy, Provider


class ModelConfig(BaseModel):
    """Configuration for a single model."""
    model_id: str
    max_tokens: int | None = None  # Per-model max tokens (overrides provider default)


class GoogleConfig(BaseModel):
    """Configuration for Google AI provider (Gemini models)."""
    timeout: int = 120
    max_output_tokens: int = 8192
    models: list[ModelConfig] = Field(default_factory=list)


class AnthropicConfig(BaseModel):
    """Configuration for Anthropic provider (Claude models)."""
    timeout: int = 120
    max_tokens: int = 4096
    models: list[ModelConfig] = Field(default_factory=list)


class ExtractionConfig(BaseModel):
    """Response parsing settings."""
    brace_strategy: BraceStrategy = BraceStrategy.GREEDY


class OutputConfig(BaseModel):
    """Input/output directories for batch scanning."""
    input_dir: str = "input"
    output_dir: str = "output"


class ProviderConfig(BaseModel):
    """Container for all provider configurations."""
    google: GoogleConfig = Field(default_factory=GoogleConfig)
    anthropic: AnthropicConfig = Field(default_factory=AnthropicConfig)


class AppConfig(BaseModel):
    """Main application configuration."""
    default_provider: Provider = Provider.GOOGLE
    providers: ProviderConfig = Field(default_factory=ProviderConfig)
    extraction: ExtractionConfig = Field(default_factory=ExtractionConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)


# Global config holder (avoids global statement)
_config_holder: dict[str, Any] = {"config": None}


def _parse_models(models_data: list[dict] | None) -> list[ModelConfig]:
    """Parse a list of model configurations."""
    if not models_data:
        return []
    return [ModelConfig(**m) for m in models_data]


def load_config(config_path: str | Path | None = None) -> AppConfig:
    """
    Load configuration from a YAML file.

    Args:
        config_path: Path to the config file. Defaults to exam_scanner/config/config.yaml

    Returns:
        Loaded and validated AppConfig instance
    """
    if config_path is None:
        config_path = Path(__file__).parent / "config.yaml"
    else:
        config_path = Path(config_path)

    if not config_path.exists():
        log_warning(f"Config file not found at {config_path}, using defaults")
        config = AppConfig()
        _config_holder["config"] = config
        return config

    with open(config_path, "r", encoding="utf-8") as f:
        raw_config = yaml.safe_load(f)

    if raw_config is None:
        config = AppConfig()
        _config_holder["config"] = config
        return config

    providers_data = raw_config.get("providers") or {}

    google_data = dict(providers_data.get("google") or {})
    google_models = _parse_models(google_data.pop("models", None))
    google = GoogleConfig(**google_data, models=google_models)

    anthropic_data = dict(providers_data.get("anthropic") or {})
    anthropic_models = _parse_models(anthropic_data.pop("models", None))
    anthropic = AnthropicConfig(**anthropic_data, models=anthropic_models)

    providers = ProviderConfig(google=google, anthropic=anthropic)

    extraction = ExtractionConfig(**(raw_config.get("extraction") or {}))
    output = OutputConfig(**(raw_config.get("output") or {}))

    default_provider = Provider(raw_config.get("default_provider", Provider.GOOGLE.value))

    config = AppConfig(
        default_provider=default_provider,
        providers=providers,
        extraction=extraction,
        output=output,
    )
    _config_holder["config"] = config

    return config


def get_config() -> AppConfig:
    """
    Get the current configuration.

    Loads from default path if not already loaded.

    Returns:
        Current AppConfig instance
    """
    if _config_holder["config"] is None:
        return load_config()
    return _config_holder["config"]


def reset_config() -> None:
    """Forget the cached configuration so the next get_config() reloads it."""
    _config_holder["config"] = None
