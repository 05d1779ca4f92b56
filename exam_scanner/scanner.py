"""
Page Scanning Pipeline

Sends one exam page image to a generative model and turns its answer into a
validated ScanResult.
"""

from pathlib import Path

from .config import Provider, get_config
from .config.loader import AppConfig, ModelConfig
from .json_extractor import (
    ExtractionFailure,
    ExtractionOutcome,
    LOG_PREVIEW_CHARS,
    parse_scan_response,
)
from .schemas import QuestionKind, ScanResult
from .services import PageScanService, get_service
from .utils.image import load_image_payload
from .utils.logger import OUTCOME_OK, get_tracker, log, log_debug, log_warning
from .utils.prompts import PAGE_SCAN_PROMPT


def build_prompt() -> str:
    """Instruction sent with every page, describing the expected JSON."""
    return PAGE_SCAN_PROMPT.format(
        multiple_choice=QuestionKind.MULTIPLE_CHOICE.value,
        numeric_answer=QuestionKind.NUMERIC_ANSWER.value,
    )


def scan_page_detailed(
    image: bytes | str | Path,
    api_key: str | None = None,
    provider: Provider | None = None,
    config: AppConfig | None = None,
    model_config: ModelConfig | None = None,
    service: PageScanService | None = None,
) -> ExtractionOutcome:
    """
    Scan a page and report how it went.

    Service failures (bad image payload, missing key, network or API errors)
    are tagged SERVICE_FAILURE; parse failures keep the extractor's tag.

    Args:
        image: Data URL, raw base64 string, raw bytes or Path of the page image
        api_key: Opaque API key for the provider
        provider: Provider to use. Uses config default if not specified.
        config: AppConfig instance. Loads from file if not provided.
        model_config: Model to use. Uses the provider's first model if omitted.
        service: Pre-built service, bypassing the factory

    Returns:
        ExtractionOutcome with the ScanResult or the failure kind
    """
    if config is None:
        config = get_config()

    try:
        payload = load_image_payload(image)
        if service is None:
            service = get_service(provider, config, model_config, api_key=api_key)
        raw_text = service.generate_text(payload.data, payload.mime_type, build_prompt())
    except Exception as e:
        log_warning(f"Page scan request failed: {e}")
        get_tracker().record_outcome(ExtractionFailure.SERVICE_FAILURE.value)
        return ExtractionOutcome.failed(ExtractionFailure.SERVICE_FAILURE, str(e))

    log_debug(f"Model response: {raw_text[:LOG_PREVIEW_CHARS]}")

    try:
        outcome = parse_scan_response(raw_text, config.extraction.brace_strategy)
    except Exception as e:
        log_warning(f"Unexpected error while parsing scan response: {e}")
        get_tracker().record_outcome(ExtractionFailure.MALFORMED_PAYLOAD.value)
        return ExtractionOutcome.failed(ExtractionFailure.MALFORMED_PAYLOAD, str(e))

    if outcome.ok:
        log(f"Detected {len(outcome.result.questions)} question(s)")
        get_tracker().record_outcome(OUTCOME_OK)
    else:
        log_warning(f"Scan response rejected ({outcome.failure.value}): {outcome.detail}")
        get_tracker().record_outcome(outcome.failure.value)
    return outcome


def scan_page(
    image: bytes | str | Path,
    api_key: str | None = None,
    provider: Provider | None = None,
    config: AppConfig | None = None,
    model_config: ModelConfig | None = None,
    service: PageScanService | None = None,
) -> ScanResult | None:
    """
    Scan a page image for question locations.

    Returns:
        The validated ScanResult, or None if anything went wrong
    """
    outcome = scan_page_detailed(
        image,
        api_key=api_key,
        provider=provider,
        config=config,
        model_config=model_config,
        service=service,
    )
    return outcome.result
