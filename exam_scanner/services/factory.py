"""
Service Factory for Page Scanning.

Provides a strategy-based factory that returns the appropriate
service implementation based on the configured provider.
"""

from exam_scanner.config import Provider, get_config
from exam_scanner.config.loader import AppConfig, ModelConfig

from .base import PageScanService
from .providers import AnthropicService, GoogleService


def get_service(
    provider: Provider | None = None,
    config: AppConfig | None = None,
    model_config: ModelConfig | None = None,
    api_key: str | None = None,
) -> PageScanService:
    """
    Get the appropriate service implementation based on provider.

    Args:
        provider: Provider enum value. Uses config default if not specified.
        config: AppConfig instance. Loads from file if not provided.
        model_config: ModelConfig with model_id. If not provided, uses first
                      model from provider's model list.
        api_key: Opaque API key passed to the provider. Falls back to the
                 provider's environment variable when omitted.

    Returns:
        PageScanService implementation for the specified provider.

    Raises:
        ValueError: If provider is not supported.
    """
    if config is None:
        config = get_config()

    if provider is None:
        provider = config.default_provider

    match provider:
        case Provider.GOOGLE:
            return GoogleService(
                config=config.providers.google,
                model_config=model_config,
                api_key=api_key,
            )
        case Provider.ANTHROPIC:
            return AnthropicService(
                config=config.providers.anthropic,
                model_config=model_config,
                api_key=api_key,
            )
        case _:
            raise ValueError(f"Unsupported provider: {provider}")


def get_provider_models(provider: Provider, config: AppConfig) -> list[ModelConfig]:
    """Get the list of models configured for a provider."""
    match provider:
        case Provider.GOOGLE:
            return config.providers.google.models
        case Provider.ANTHROPIC:
            return config.providers.anthropic.models
        case _:
            return []
