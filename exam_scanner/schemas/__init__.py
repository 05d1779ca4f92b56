"""
Schema models for Exam Scanner.

Contains Pydantic models for the structured page scan result.
"""

from .scan import (
    QuestionKind,
    Question,
    ScanResult,
    BoundingBox,
)

__all__ = [
    "QuestionKind",
    "Question",
    "ScanResult",
    "BoundingBox",
]
