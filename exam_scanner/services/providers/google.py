"""
Google AI Service Implementation.

Uses Google's Gemini models (e.g., Gemini 1.5 Flash) to read a scanned page
in a single request.
"""

import os

from dotenv import load_dotenv
from google import genai
from google.genai import types

from exam_scanner.config.loader import GoogleConfig, ModelConfig
from exam_scanner.config.pricing import calculate_cost
from exam_scanner.services.base import ServiceError
from exam_scanner.utils.logger import log, log_usage

# Load environment variables from .env file
load_dotenv()

DEFAULT_MODEL_ID = "gemini-1.5-flash"


class GoogleError(ServiceError):
    """Base exception for Google AI-related errors."""


class GoogleConnectionError(GoogleError):
    """Raised when unable to connect to Google AI."""


class GoogleModelError(GoogleError):
    """Raised when the model is not available or fails."""


def _response_text(response) -> str:
    """Pull text out of a generate_content response, or raise GoogleModelError."""
    try:
        text = response.candidates[0].content.parts[0].text
    except (AttributeError, IndexError, TypeError):
        text = None

    if not text:
        try:
            text = response.text
        except (AttributeError, ValueError) as e:
            raise GoogleModelError(f"Invalid response structure from Google AI: {e}") from e

    if not text:
        raise GoogleModelError("Google AI returned an empty response")
    return text.strip()


class GoogleService:
    """
    Google AI implementation of PageScanService.

    Sends the page image and prompt to a Gemini model and returns its text.
    """

    def __init__(
        self,
        config: GoogleConfig | None = None,
        model_config: ModelConfig | None = None,
        api_key: str | None = None,
    ):
        """
        Initialize GoogleService with configuration.

        Args:
            config: GoogleConfig instance. Uses defaults if not provided.
            model_config: ModelConfig with model_id to use. If not provided,
                         uses first model from config or a default.
            api_key: Google AI API key, passed through as-is. Falls back to
                     the GOOGLE_API_KEY environment variable.
        """
        self.config = config or GoogleConfig()

        # Determine which model to use
        if model_config is not None:
            self.model_id = model_config.model_id
            self.max_output_tokens = model_config.max_tokens or self.config.max_output_tokens
        elif self.config.models:
            self.model_id = self.config.models[0].model_id
            self.max_output_tokens = self.config.models[0].max_tokens or self.config.max_output_tokens
        else:
            self.model_id = DEFAULT_MODEL_ID
            self.max_output_tokens = self.config.max_output_tokens

        self._api_key = api_key
        self._client = None

    def _get_client(self) -> genai.Client:
        """Get or create the Gemini client."""
        if self._client is None:
            api_key = self._api_key or os.getenv("GOOGLE_API_KEY")
            if not api_key:
                raise GoogleConnectionError(
                    "GOOGLE_API_KEY environment variable not set"
                )

            try:
                self._client = genai.Client(
                    api_key=api_key,
                    http_options=types.HttpOptions(timeout=self.config.timeout * 1000),
                )
            except Exception as e:
                raise GoogleConnectionError(
                    f"Failed to create Google AI client: {e}"
                ) from e

        return self._client

    def generate_text(
        self,
        image_bytes: bytes,
        mime_type: str,
        prompt: str,
    ) -> str:
        """
        Send the page image to Gemini and return the response text.

        Args:
            image_bytes: Raw image data
            mime_type: Declared MIME type of the image
            prompt: Instruction describing the desired JSON output

        Returns:
            Response text, stripped

        Raises:
            GoogleConnectionError: If no API key is available or the client fails
            GoogleModelError: If the API call fails or returns no text
        """
        client = self._get_client()

        # Prompt first, then the image
        content_parts = [
            prompt,
            types.Part.from_bytes(data=image_bytes, mime_type=mime_type),
        ]

        try:
            log(f"Sending page to Google AI [{self.model_id}]...")
            response = client.models.generate_content(
                model=self.model_id,
                contents=content_parts,
                config=types.GenerateContentConfig(
                    max_output_tokens=self.max_output_tokens,
                    temperature=0,
                ),
            )
        except Exception as e:
            log(f"Google AI error: {e}")
            raise GoogleModelError(f"Google AI API error: {e}") from e

        usage = getattr(response, "usage_metadata", None)
        if usage:
            input_tokens = getattr(usage, "prompt_token_count", 0) or 0
            output_tokens = getattr(usage, "candidates_token_count", 0) or 0

            log_usage(
                provider="google",
                model=self.model_id,
                input_tokens=input_tokens,
                output_tokens=output_tokens,
                cost_usd=calculate_cost("google", self.model_id, input_tokens, output_tokens),
                operation="page_scan",
            )

        return _response_text(response)
