from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:  # pragma: no cover
    from .types import BuildContext, EvaluationReport


class FreshnessGateError(Exception):
    """Base class for errors raised by freshness-gate."""


class ConfigurationError(FreshnessGateError):
    """A policy document or exemption pattern could not be loaded."""


class InventoryError(FreshnessGateError):
    """An inventory snapshot is unreadable or malformed."""


class PolicyViolation(FreshnessGateError):
    """Raised when an enforcing build has outdated dependencies."""

    def __init__(self, report: "EvaluationReport", context: "BuildContext") -> None:
        self.report = report
        self.context = context
        count = len(report.blocking_lines)
        super().__init__(
            f"{count} outdated item(s) found for {context.version_label or 'unlabelled build'}"
        )
