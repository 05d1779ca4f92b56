"""
Exam Scanner: locate questions on scanned exam pages.

Sends a page image to a generative model (Google Gemini or Anthropic Claude)
and validates the JSON it returns into a typed ScanResult.
"""

from .config import Provider, BraceStrategy, load_config, get_config
from .json_extractor import ExtractionFailure, ExtractionOutcome, extract, parse_scan_response
from .scanner import scan_page, scan_page_detailed
from .schemas import Question, QuestionKind, ScanResult
from .services import PageScanService, ServiceError, get_service
from .utils import log, get_tracker, reset_tracker

__all__ = [
    # Config
    "Provider",
    "BraceStrategy",
    "load_config",
    "get_config",
    # Extraction
    "ExtractionFailure",
    "ExtractionOutcome",
    "extract",
    "parse_scan_response",
    # Scanning
    "scan_page",
    "scan_page_detailed",
    # Schemas
    "Question",
    "QuestionKind",
    "ScanResult",
    # Services
    "PageScanService",
    "ServiceError",
    "get_service",
    # Utils
    "log",
    "get_tracker",
    "reset_tracker",
]
