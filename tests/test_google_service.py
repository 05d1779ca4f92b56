"""Tests for the Gemini page scanning backend (SDK mocked)."""

from unittest.mock import MagicMock, patch

import pytest
from google.genai import types

from exam_scanner.config.loader import GoogleConfig, ModelConfig
from exam_scanner.services.base import ServiceError
from exam_scanner.services.providers.google import (
    GoogleConnectionError,
    GoogleModelError,
    GoogleService,
)
from exam_scanner.utils.logger import get_tracker


def _response(text="  {\"questions\": []}  ", usage=True):
    part = MagicMock()
    part.text = text
    response = MagicMock()
    response.candidates = [MagicMock(content=MagicMock(parts=[part]))]
    response.usage_metadata = (
        MagicMock(prompt_token_count=1000, candidates_token_count=50) if usage else None
    )
    return response


def _client_returning(response):
    client = MagicMock()
    client.models.generate_content.return_value = response
    return client


def test_generate_text_sends_prompt_and_image(png_bytes):
    service = GoogleService(api_key="test-key")
    client = _client_returning(_response())

    with patch("exam_scanner.services.providers.google.genai") as mock_genai:
        mock_genai.Client.return_value = client
        service.generate_text(png_bytes, "image/png", "find the questions")

    client.models.generate_content.assert_called_once()
    call_kwargs = client.models.generate_content.call_args.kwargs
    assert call_kwargs["model"] == "gemini-1.5-flash"
    prompt, image_part = call_kwargs["contents"]
    assert prompt == "find the questions"
    assert isinstance(image_part, types.Part)
    assert image_part.inline_data.mime_type == "image/png"
    assert image_part.inline_data.data == png_bytes
    assert call_kwargs["config"].temperature == 0


def test_generate_text_returns_stripped_text(png_bytes):
    service = GoogleService(api_key="test-key")

    with patch("exam_scanner.services.providers.google.genai") as mock_genai:
        mock_genai.Client.return_value = _client_returning(_response())
        result = service.generate_text(png_bytes, "image/png", "prompt")

    assert result == '{"questions": []}'


def test_generate_text_falls_back_to_response_text(png_bytes):
    response = _response(usage=False)
    response.candidates = []
    response.text = " fallback \n"
    service = GoogleService(api_key="test-key")

    with patch("exam_scanner.services.providers.google.genai") as mock_genai:
        mock_genai.Client.return_value = _client_returning(response)
        result = service.generate_text(png_bytes, "image/png", "prompt")

    assert result == "fallback"


def test_generate_text_empty_response_raises(png_bytes):
    response = _response(text="", usage=False)
    response.text = ""
    service = GoogleService(api_key="test-key")

    with patch("exam_scanner.services.providers.google.genai") as mock_genai:
        mock_genai.Client.return_value = _client_returning(response)
        with pytest.raises(GoogleModelError):
            service.generate_text(png_bytes, "image/png", "prompt")


def test_generate_text_wraps_api_errors(png_bytes):
    client = MagicMock()
    client.models.generate_content.side_effect = RuntimeError("quota exceeded")
    service = GoogleService(api_key="test-key")

    with patch("exam_scanner.services.providers.google.genai") as mock_genai:
        mock_genai.Client.return_value = client
        with pytest.raises(GoogleModelError, match="quota exceeded") as exc_info:
            service.generate_text(png_bytes, "image/png", "prompt")

    assert isinstance(exc_info.value, ServiceError)
    assert isinstance(exc_info.value.__cause__, RuntimeError)


def test_missing_api_key_raises_connection_error(monkeypatch, png_bytes):
    monkeypatch.delenv("GOOGLE_API_KEY", raising=False)
    service = GoogleService()

    with pytest.raises(GoogleConnectionError, match="GOOGLE_API_KEY"):
        service.generate_text(png_bytes, "image/png", "prompt")


def test_api_key_falls_back_to_environment(monkeypatch, png_bytes):
    monkeypatch.setenv("GOOGLE_API_KEY", "env-key")
    service = GoogleService()

    with patch("exam_scanner.services.providers.google.genai") as mock_genai:
        mock_genai.Client.return_value = _client_returning(_response())
        service.generate_text(png_bytes, "image/png", "prompt")

    assert mock_genai.Client.call_args.kwargs["api_key"] == "env-key"


def test_explicit_api_key_is_passed_through(monkeypatch, png_bytes):
    monkeypatch.setenv("GOOGLE_API_KEY", "env-key")
    service = GoogleService(api_key="opaque value")

    with patch("exam_scanner.services.providers.google.genai") as mock_genai:
        mock_genai.Client.return_value = _client_returning(_response())
        service.generate_text(png_bytes, "image/png", "prompt")

    assert mock_genai.Client.call_args.kwargs["api_key"] == "opaque value"


def test_usage_is_tracked_with_cost(png_bytes):
    service = GoogleService(api_key="test-key")

    with patch("exam_scanner.services.providers.google.genai") as mock_genai:
        mock_genai.Client.return_value = _client_returning(_response())
        service.generate_text(png_bytes, "image/png", "prompt")

    records = get_tracker().records
    assert len(records) == 1
    assert records[0].provider == "google"
    assert records[0].input_tokens == 1000
    assert records[0].output_tokens == 50
    assert records[0].cost_usd > 0


def test_model_selection():
    config = GoogleConfig(models=[ModelConfig(model_id="gemini-2.5-flash", max_tokens=512)])

    from_config = GoogleService(config=config)
    explicit = GoogleService(config=config, model_config=ModelConfig(model_id="gemini-1.5-flash"))
    default = GoogleService()

    assert from_config.model_id == "gemini-2.5-flash"
    assert from_config.max_output_tokens == 512
    assert explicit.model_id == "gemini-1.5-flash"
    assert explicit.max_output_tokens == config.max_output_tokens
    assert default.model_id == "gemini-1.5-flash"
