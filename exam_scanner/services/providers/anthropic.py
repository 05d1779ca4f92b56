"""
Anthropic Service Implementation.

Uses Anthropic's Claude models (e.g., Claude 4.5 Haiku) to read a scanned page
in a single request.
"""

import base64
import os
from typing import Any

import anthropic
from dotenv import load_dotenv

from exam_scanner.config.loader import AnthropicConfig, ModelConfig
from exam_scanner.config.pricing import calculate_cost
from exam_scanner.services.base import ServiceError
from exam_scanner.utils.logger import log, log_usage

# Load environment variables from .env file
load_dotenv()

DEFAULT_MODEL_ID = "claude-haiku-4-5-20251001"


class AnthropicError(ServiceError):
    """Base exception for Anthropic-related errors."""


class AnthropicConnectionError(AnthropicError):
    """Raised when unable to connect to Anthropic."""


class AnthropicModelError(AnthropicError):
    """Raised when the model is not available or fails."""


class AnthropicService:
    """
    Anthropic implementation of PageScanService.

    Sends the page image and prompt to a Claude model and returns its text.
    """

    def __init__(
        self,
        config: AnthropicConfig | None = None,
        model_config: ModelConfig | None = None,
        api_key: str | None = None,
    ):
        self.config = config or AnthropicConfig()

        if model_config is not None:
            self.model_id = model_config.model_id
            self.max_tokens = model_config.max_tokens or self.config.max_tokens
        elif self.config.models:
            self.model_id = self.config.models[0].model_id
            self.max_tokens = self.config.models[0].max_tokens or self.config.max_tokens
        else:
            self.model_id = DEFAULT_MODEL_ID
            self.max_tokens = self.config.max_tokens

        self._api_key = api_key
        self._client = None

    def _get_client(self) -> anthropic.Anthropic:
        """Get or create the Anthropic client."""
        if self._client is None:
            api_key = self._api_key or os.getenv("ANTHROPIC_API_KEY")
            if not api_key:
                raise AnthropicConnectionError(
                    "ANTHROPIC_API_KEY environment variable not set"
                )

            try:
                self._client = anthropic.Anthropic(
                    api_key=api_key,
                    timeout=self.config.timeout,
                )
            except Exception as e:
                raise AnthropicConnectionError(
                    f"Failed to create Anthropic client: {e}"
                ) from e

        return self._client

    def generate_text(
        self,
        image_bytes: bytes,
        mime_type: str,
        prompt: str,
    ) -> str:
        """Send the page image to Claude and return the response text."""
        client = self._get_client()

        # Images first, then text prompt (Anthropic convention)
        content: list[dict[str, Any]] = [
            {
                "type": "image",
                "source": {
                    "type": "base64",
                    "media_type": mime_type,
                    "data": base64.b64encode(image_bytes).decode("utf-8"),
                },
            },
            {"type": "text", "text": prompt},
        ]

        try:
            log(f"Sending page to Anthropic [{self.model_id}]...")
            response = client.messages.create(
                model=self.model_id,
                max_tokens=self.max_tokens,
                temperature=0,
                messages=[{"role": "user", "content": content}],
            )
        except anthropic.APIError as e:
            log(f"Anthropic API error: {e}")
            raise AnthropicModelError(f"Anthropic API error: {e}") from e
        except Exception as e:
            log(f"Unexpected error calling Anthropic: {e}")
            raise AnthropicError(f"Unexpected error calling Anthropic: {e}") from e

        if getattr(response, "stop_reason", None) == "refusal":
            log("WARNING: Claude refused the request for safety reasons")
            raise AnthropicModelError("Claude refused the request for safety reasons")

        usage = getattr(response, "usage", None)
        if usage:
            input_tokens = usage.input_tokens
            output_tokens = usage.output_tokens

            log_usage(
                provider="anthropic",
                model=self.model_id,
                input_tokens=input_tokens,
                output_tokens=output_tokens,
                cost_usd=calculate_cost("anthropic", self.model_id, input_tokens, output_tokens),
                operation="page_scan",
            )

        # Truncated output is passed on; the extractor rejects it
        if getattr(response, "stop_reason", None) == "max_tokens":
            log(f"WARNING: Response truncated at max_tokens ({self.max_tokens})")

        try:
            text = "".join(
                block.text for block in response.content if getattr(block, "type", None) == "text"
            )
        except (AttributeError, TypeError) as e:
            log(f"Failed to extract response text: {e}")
            raise AnthropicModelError(
                f"Invalid response structure from Anthropic: {e}"
            ) from e

        if not text:
            raise AnthropicModelError("Anthropic returned an empty response")
        return text.strip()
