"""Tests for the end-to-end page scan."""

import base64
import logging
from unittest.mock import patch

from exam_scanner.config import BraceStrategy
from exam_scanner.config.loader import AppConfig, ExtractionConfig
from exam_scanner.json_extractor import LOG_PREVIEW_CHARS, ExtractionFailure
from exam_scanner.scanner import build_prompt, scan_page, scan_page_detailed
from exam_scanner.schemas import QuestionKind
from exam_scanner.services.base import ServiceError
from exam_scanner.utils.logger import get_tracker


class FakeService:
    """Stands in for a generative model provider."""

    model_id = "fake-model"

    def __init__(self, text="", error=None):
        self.text = text
        self.error = error
        self.calls = []

    def generate_text(self, image_bytes, mime_type, prompt):
        self.calls.append((image_bytes, mime_type, prompt))
        if self.error:
            raise self.error
        return self.text


def test_scan_page_returns_validated_result(png_bytes, app_config, valid_response):
    service = FakeService(valid_response)

    result = scan_page(png_bytes, config=app_config, service=service)

    assert result is not None
    assert [q.number for q in result.questions] == [1, 2]
    assert result.questions[1].kind is QuestionKind.NUMERIC_ANSWER
    assert result.questions[1].bounding_box == (120, 20, 240, 500)


def test_scan_page_sends_image_and_schema_prompt(png_bytes, app_config):
    service = FakeService('{"questions": []}')

    scan_page(png_bytes, config=app_config, service=service)

    image_bytes, mime_type, prompt = service.calls[0]
    assert image_bytes == png_bytes
    assert mime_type == "image/png"
    assert prompt == build_prompt()


def test_prompt_describes_output_schema():
    prompt = build_prompt()

    assert '"que"' in prompt
    assert '"mcq" for multiple choice' in prompt
    assert '"nat" for numeric answer' in prompt
    assert "[ymin, xmin, ymax, xmax]" in prompt
    assert '{"questions":[{"que":number' in prompt


def test_scan_page_strips_data_url(png_bytes, app_config):
    service = FakeService('{"questions": []}')
    data_url = "data:image/webp;base64," + base64.b64encode(png_bytes).decode()

    result = scan_page(data_url, config=app_config, service=service)

    assert result is not None
    assert service.calls[0][0] == png_bytes
    assert service.calls[0][1] == "image/webp"


def test_service_failure_is_tagged(png_bytes, app_config):
    service = FakeService(error=ServiceError("quota exceeded"))

    outcome = scan_page_detailed(png_bytes, config=app_config, service=service)

    assert outcome.failure is ExtractionFailure.SERVICE_FAILURE
    assert "quota exceeded" in outcome.detail
    assert scan_page(png_bytes, config=app_config, service=service) is None


def test_unexpected_service_exception_is_tagged(png_bytes, app_config):
    service = FakeService(error=KeyError("candidates"))

    outcome = scan_page_detailed(png_bytes, config=app_config, service=service)

    assert outcome.failure is ExtractionFailure.SERVICE_FAILURE


def test_invalid_image_never_reaches_service(app_config):
    service = FakeService('{"questions": []}')

    outcome = scan_page_detailed("not base64!!", config=app_config, service=service)

    assert outcome.failure is ExtractionFailure.SERVICE_FAILURE
    assert service.calls == []


def test_parse_failures_keep_their_kind(png_bytes, app_config):
    cases = {
        "I could not find any questions.": ExtractionFailure.NO_PAYLOAD,
        '{"questions": [': ExtractionFailure.NO_PAYLOAD,
        '{"questions": [}': ExtractionFailure.MALFORMED_PAYLOAD,
        '{"questions": [{"que": 1, "type": "essay", "bbox": [1, 2, 3, 4]}]}': ExtractionFailure.SCHEMA_MISMATCH,
    }

    for text, failure in cases.items():
        outcome = scan_page_detailed(png_bytes, config=app_config, service=FakeService(text))
        assert outcome.failure is failure, text


def test_brace_strategy_comes_from_config(png_bytes):
    text = '{"questions": []} and a note {"pages": 1}'
    greedy = AppConfig()
    balanced = AppConfig(extraction=ExtractionConfig(brace_strategy=BraceStrategy.BALANCED))

    assert scan_page(png_bytes, config=greedy, service=FakeService(text)) is None
    assert scan_page(png_bytes, config=balanced, service=FakeService(text)) is not None


def test_factory_used_when_no_service_given(png_bytes, app_config):
    fake = FakeService('{"questions": []}')

    with patch("exam_scanner.scanner.get_service", return_value=fake) as mock_get_service:
        result = scan_page(png_bytes, api_key="opaque", config=app_config)

    assert result is not None
    assert mock_get_service.call_args.kwargs["api_key"] == "opaque"


def test_missing_credentials_yield_none(monkeypatch, png_bytes, app_config):
    monkeypatch.delenv("GOOGLE_API_KEY", raising=False)

    outcome = scan_page_detailed(png_bytes, config=app_config)

    assert outcome.failure is ExtractionFailure.SERVICE_FAILURE
    assert "GOOGLE_API_KEY" in outcome.detail


def test_outcomes_are_tracked(png_bytes, app_config):
    scan_page(png_bytes, config=app_config, service=FakeService('{"questions": []}'))
    scan_page(png_bytes, config=app_config, service=FakeService("nothing"))
    scan_page(png_bytes, config=app_config, service=FakeService(error=ServiceError("down")))

    assert get_tracker().outcomes == {"ok": 1, "no_payload": 1, "service_failure": 1}


def test_response_preview_is_truncated_in_debug_log(caplog, png_bytes, app_config):
    response = "x" * (LOG_PREVIEW_CHARS + 500)

    with caplog.at_level(logging.DEBUG, logger="exam-scanner"):
        scan_page(png_bytes, config=app_config, service=FakeService(response))

    previews = [r.getMessage() for r in caplog.records if r.getMessage().startswith("Model response: ")]
    assert previews == ["Model response: " + "x" * LOG_PREVIEW_CHARS]
