"""
JSON Extraction Module

Locates the JSON object embedded in a free-form model response, parses it and
validates it against the ScanResult schema.

The public entry point, `extract`, never raises: every failure collapses to
None. `parse_scan_response` keeps the failure kind and detail for logging.
"""

import json
import re
from enum import Enum

from pydantic import BaseModel, ValidationError

from .config.enums import BraceStrategy
from .schemas import ScanResult
from .utils.logger import log_debug, log_warning

_GREEDY_OBJECT_RE = re.compile(r"\{[\s\S]*\}")

# Max characters of the raw response echoed into debug logs
LOG_PREVIEW_CHARS = 2000


class ExtractionFailure(str, Enum):
    """Why a page scan produced no result."""
    NO_PAYLOAD = "no_payload"
    MALFORMED_PAYLOAD = "malformed_payload"
    SCHEMA_MISMATCH = "schema_mismatch"
    SERVICE_FAILURE = "service_failure"


class ExtractionOutcome(BaseModel):
    """Either a validated result or a tagged failure."""
    result: ScanResult | None = None
    failure: ExtractionFailure | None = None
    detail: str = ""

    @property
    def ok(self) -> bool:
        return self.result is not None

    @classmethod
    def success(cls, result: ScanResult) -> "ExtractionOutcome":
        return cls(result=result)

    @classmethod
    def failed(cls, failure: ExtractionFailure, detail: str = "") -> "ExtractionOutcome":
        return cls(failure=failure, detail=detail)


def find_greedy_object(text: str) -> str | None:
    """Return the span from the first "{" to the last "}", or None."""
    match = _GREEDY_OBJECT_RE.search(text)
    return match.group(0) if match else None


def find_balanced_object(text: str) -> str | None:
    """
    Return the first fully balanced top-level {...} span, or None.

    Braces inside JSON string literals (including escaped quotes) do not count
    toward nesting. An opening brace that is never closed is skipped and the
    scan resumes after it.
    """
    start = text.find("{")
    while start != -1:
        depth = 0
        in_string = False
        escaped = False
        for index in range(start, len(text)):
            char = text[index]
            if in_string:
                if escaped:
                    escaped = False
                elif char == "\\":
                    escaped = True
                elif char == '"':
                    in_string = False
                continue

            if char == '"':
                in_string = True
            elif char == "{":
                depth += 1
            elif char == "}":
                depth -= 1
                if depth == 0:
                    return text[start:index + 1]
        start = text.find("{", start + 1)
    return None


def find_json_object(text: str, strategy: BraceStrategy = BraceStrategy.GREEDY) -> str | None:
    """Locate the JSON object candidate in `text` using the given strategy."""
    match strategy:
        case BraceStrategy.GREEDY:
            return find_greedy_object(text)
        case BraceStrategy.BALANCED:
            return find_balanced_object(text)
        case _:
            raise ValueError(f"Unsupported brace strategy: {strategy}")


def format_validation_errors(error: ValidationError, limit: int = 10) -> str:
    """Render pydantic errors as "path: message" lines."""
    lines = []
    errors = error.errors()
    for item in errors[:limit]:
        path_parts = [str(p) for p in item.get("loc", [])]
        path = ".".join(path_parts) if path_parts else "root"
        lines.append(f"{path}: {item.get('msg', 'Unknown validation error')}")
    if len(errors) > limit:
        lines.append(f"... and {len(errors) - limit} more errors")
    return "; ".join(lines)


def parse_scan_response(
    raw_text: str,
    strategy: BraceStrategy = BraceStrategy.GREEDY,
) -> ExtractionOutcome:
    """
    Parse a model response into a tagged ExtractionOutcome.

    Args:
        raw_text: Unstructured response text, possibly with prose or code fences
        strategy: How to locate the JSON object inside the text

    Returns:
        ExtractionOutcome holding either a ScanResult or the failure kind
    """
    candidate = find_json_object(raw_text, strategy)
    if candidate is None:
        return ExtractionOutcome.failed(
            ExtractionFailure.NO_PAYLOAD, "No JSON object found in response"
        )

    try:
        parsed = json.loads(candidate)
    except json.JSONDecodeError as e:
        return ExtractionOutcome.failed(
            ExtractionFailure.MALFORMED_PAYLOAD, f"Invalid JSON in response: {e}"
        )

    try:
        result = ScanResult.model_validate(parsed)
    except ValidationError as e:
        return ExtractionOutcome.failed(
            ExtractionFailure.SCHEMA_MISMATCH, format_validation_errors(e)
        )

    return ExtractionOutcome.success(result)


def extract(
    raw_text: str,
    strategy: BraceStrategy = BraceStrategy.GREEDY,
) -> ScanResult | None:
    """
    Extract a validated ScanResult from model response text.

    Returns None for any failure: no JSON found, malformed JSON, a schema
    mismatch, or an unexpected error while parsing.
    """
    try:
        outcome = parse_scan_response(raw_text, strategy)
    except Exception as e:
        log_warning(f"Unexpected error while parsing scan response: {e}")
        return None

    if not outcome.ok:
        log_warning(f"Scan response rejected ({outcome.failure.value}): {outcome.detail}")
        log_debug(f"Response text: {str(raw_text)[:LOG_PREVIEW_CHARS]}")
    return outcome.result
