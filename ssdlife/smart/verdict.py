"""Mapping of percent life used onto alert states."""

import enum
from dataclasses import dataclass


class Verdict(enum.IntEnum):
    """Alert state; the value is the process exit code."""

    OK = 0
    WARNING = 1
    CRITICAL = 2
    UNKNOWN = 3


def evaluate(percent_used: int | None, warning: int, critical: int, bounded: bool = True) -> Verdict:
    """
    Map percent life used onto a verdict.

    Percentages computed from a descending life value must land in
    0..100; outside that range the computation went wrong and the result
    is UNKNOWN rather than clamped into a bucket. Drive-reported wear
    (NVMe Percentage Used) passes 100 once the rated endurance is used
    up, so with bounded=False only negative values are UNKNOWN.
    """
    if percent_used is None or percent_used < 0:
        return Verdict.UNKNOWN
    if bounded and percent_used > 100:
        return Verdict.UNKNOWN
    if percent_used >= critical:
        return Verdict.CRITICAL
    if percent_used >= warning:
        return Verdict.WARNING
    return Verdict.OK


def validate_thresholds(warning: int, critical: int) -> str | None:
    """Error message for unusable thresholds, or None."""
    if not 0 <= warning <= 100 or not 0 <= critical <= 100:
        return "Thresholds must be between 0 and 100"
    if warning > critical:
        return "Warning threshold must be <= critical threshold"
    return None


@dataclass
class CheckResult:
    """Outcome of checking one drive."""

    verdict: Verdict
    message: str
    device: str
    model_key: str | None = None
    percent_used: int | None = None
    source: str | None = None
    telemetry_field: str | None = None

    @property
    def summary(self) -> str:
        """Single status line in monitoring plugin style."""
        return f"SSD {self.verdict.name}: {self.message}"

    def to_dict(self) -> dict:
        """Plain dict for structured output."""
        return {
            "device": self.device,
            "status": self.verdict.name.lower(),
            "model": self.model_key,
            "percent_used": self.percent_used,
            "source": self.source,
            "telemetry_field": self.telemetry_field,
            "message": self.message,
        }
