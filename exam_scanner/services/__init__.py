"""
Services module for Exam Scanner.

Provides the page scanning service interface and factory.
"""

from .base import PageScanService, ServiceError
from .factory import get_service, get_provider_models

__all__ = [
    "PageScanService",
    "ServiceError",
    "get_service",
    "get_provider_models",
]
