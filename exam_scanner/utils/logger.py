"""
Logger Module.

Logging helpers for Exam Scanner plus a process-wide tracker of model token
usage, cost and page scan outcomes.
"""

import logging
from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s | %(levelname)s | %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S"
)
logger = logging.getLogger("exam-scanner")

# Outcome key for a page that produced a validated result
OUTCOME_OK = "ok"


class UsageRecord(BaseModel):
    """Token usage of one model call."""
    provider: str
    model: str
    input_tokens: int = 0
    output_tokens: int = 0
    total_tokens: int = 0
    cost_usd: float = 0.0
    timestamp: datetime = Field(default_factory=datetime.now)
    operation: str = ""
    metadata: dict[str, Any] = Field(default_factory=dict)


class UsageTracker(BaseModel):
    """Accumulates model usage and per-page scan outcomes."""
    records: list[UsageRecord] = Field(default_factory=list)
    outcomes: dict[str, int] = Field(default_factory=dict)

    @property
    def total_cost_usd(self) -> float:
        return sum(r.cost_usd for r in self.records)

    @property
    def pages_scanned(self) -> int:
        return sum(self.outcomes.values())

    def add(self, record: UsageRecord) -> None:
        self.records.append(record)

    def record_outcome(self, outcome: str) -> None:
        """Count a page scan outcome: OUTCOME_OK or a failure kind value."""
        self.outcomes[outcome] = self.outcomes.get(outcome, 0) + 1

    def summary(self) -> dict:
        by_model: dict = {}
        for r in self.records:
            stats = by_model.setdefault(f"{r.provider}/{r.model}", {"calls": 0, "tokens": 0, "cost": 0.0})
            stats["calls"] += 1
            stats["tokens"] += r.total_tokens
            stats["cost"] += r.cost_usd

        return {
            "by_model": by_model,
            "total_calls": len(self.records),
            "total_cost": self.total_cost_usd,
            "pages": self.pages_scanned,
            "outcomes": dict(self.outcomes),
        }

    def print_summary(self) -> None:
        s = self.summary()
        log("=" * 50)
        log("USAGE SUMMARY")
        for model, stats in s["by_model"].items():
            log(f"  {model}: {stats['calls']} calls, {stats['tokens']:,} tokens, ${stats['cost']:.4f}")
        log(f"Total: {s['total_calls']} calls, ${s['total_cost']:.4f}")
        if s["pages"]:
            breakdown = ", ".join(f"{kind}={count}" for kind, count in sorted(s["outcomes"].items()))
            log(f"Pages: {s['pages']} ({breakdown})")
        log("=" * 50)


# Global tracker holder (avoids global statement)
_tracker_holder: dict[str, UsageTracker] = {"tracker": UsageTracker()}


def get_tracker() -> UsageTracker:
    """Get the global usage tracker."""
    return _tracker_holder["tracker"]


def reset_tracker() -> None:
    """Reset the global usage tracker."""
    _tracker_holder["tracker"] = UsageTracker()


def log(message: str) -> None:
    logger.info(message)


def log_debug(message: str) -> None:
    logger.debug(message)


def log_warning(message: str) -> None:
    logger.warning(message)


def log_error(message: str) -> None:
    logger.error(message)


def log_usage(
    provider: str,
    model: str,
    input_tokens: int = 0,
    output_tokens: int = 0,
    cost_usd: float = 0.0,
    operation: str = "",
    **metadata: Any
) -> UsageRecord:
    """
    Record and log token usage of a model call.

    Args:
        provider: Provider name (e.g., "google", "anthropic")
        model: Model identifier
        input_tokens: Prompt tokens, image included
        output_tokens: Response tokens
        cost_usd: Cost in USD
        operation: Short label for the call
        **metadata: Extra fields kept on the record

    Returns:
        The created UsageRecord
    """
    record = UsageRecord(
        provider=provider,
        model=model,
        input_tokens=input_tokens,
        output_tokens=output_tokens,
        total_tokens=input_tokens + output_tokens,
        cost_usd=cost_usd,
        operation=operation,
        metadata=metadata
    )
    get_tracker().add(record)

    log(f"[{provider}/{model}] {operation}: {input_tokens:,} in / {output_tokens:,} out, ${cost_usd:.6f}")
    return record
