"""Security verdict models.

``SecurityStatus`` is a str Enum (JSON-friendly) with an explicit severity
ordering SAFE < WARNING < DANGER. The plain ``str`` comparison would order
the values alphabetically, so the rich comparisons are overridden.

``SecurityAnalysisResult.overall`` is always derived from its checks through
``from_checks()``; nothing in the scanner sets it by hand.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterable


class SecurityStatus(str, Enum):
    """Graded verdict of a single check or of a whole analysis."""

    SAFE = "safe"
    WARNING = "warning"
    DANGER = "danger"

    @property
    def severity(self) -> int:
        return _SEVERITY[self.value]

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, SecurityStatus):
            return NotImplemented
        return self.severity < other.severity

    def __le__(self, other: object) -> bool:
        if not isinstance(other, SecurityStatus):
            return NotImplemented
        return self.severity <= other.severity

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, SecurityStatus):
            return NotImplemented
        return self.severity > other.severity

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, SecurityStatus):
            return NotImplemented
        return self.severity >= other.severity


_SEVERITY: dict[str, int] = {
    SecurityStatus.SAFE.value: 0,
    SecurityStatus.WARNING.value: 1,
    SecurityStatus.DANGER.value: 2,
}


def worst(statuses: Iterable[SecurityStatus]) -> SecurityStatus:
    """Return the most severe status, or SAFE when there are none."""
    return max(statuses, default=SecurityStatus.SAFE)


@dataclass(frozen=True)
class SecurityCheck:
    """Outcome of one heuristic.

    Fields:
        name:    Short label (e.g. ``"HTTPS"``).
        status:  SAFE / WARNING / DANGER.
        message: User-facing detail.
    """

    name: str
    status: SecurityStatus
    message: str

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "status": self.status.value, "message": self.message}


@dataclass(frozen=True)
class SecurityAnalysisResult:
    """Aggregate verdict over an ordered sequence of checks.

    INVARIANT: ``overall == worst(c.status for c in checks)``.
    Build instances with ``from_checks()``.
    """

    overall: SecurityStatus
    checks: tuple[SecurityCheck, ...]

    @classmethod
    def from_checks(cls, checks: Iterable[SecurityCheck]) -> "SecurityAnalysisResult":
        ordered = tuple(checks)
        return cls(overall=worst(c.status for c in ordered), checks=ordered)

    def to_dict(self) -> dict[str, Any]:
        return {
            "overall": self.overall.value,
            "checks": [c.to_dict() for c in self.checks],
        }
