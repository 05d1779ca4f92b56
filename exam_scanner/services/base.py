"""
Base Service Protocol for Page Scanning.

Defines the unified interface that all generative model providers must implement.
"""

from typing import Protocol


class ServiceError(Exception):
    """Base exception for generative model service failures."""


class PageScanService(Protocol):
    """
    Unified interface for all page scanning providers.

    Providers send one image plus an instruction prompt in a single request and
    return the model's free-form text. Parsing that text is not their job.
    """

    model_id: str

    def generate_text(
        self,
        image_bytes: bytes,
        mime_type: str,
        prompt: str,
    ) -> str:
        """
        Send an image and prompt to the model.

        Args:
            image_bytes: Raw image data
            mime_type: Declared MIME type of the image (e.g. "image/png")
            prompt: Instruction describing the desired output

        Returns:
            The response text, stripped of surrounding whitespace

        Raises:
            ServiceError: On connection, authentication or model failures
        """
        ...
