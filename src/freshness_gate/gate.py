"""Enforcement gate: whether a freshness verdict may affect the build outcome.

Development (snapshot) builds enforce the verdict; release builds only
report it. The decision is recomputed from an explicit BuildContext on every
invocation and never read from process state.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable

from .errors import PolicyViolation
from .types import BuildContext, EvaluationReport

DEFAULT_DEVELOPMENT_SUFFIXES = ("-SNAPSHOT",)


class EnforcementMode(str, Enum):
    ENFORCING = "enforcing"
    ADVISORY = "advisory"


@dataclass(frozen=True)
class GateDecision:
    mode: EnforcementMode
    exit_non_zero: bool

    @property
    def passed(self) -> bool:
        return not self.exit_non_zero

    def as_dict(self) -> dict:
        return {"mode": self.mode.value, "exit_non_zero": self.exit_non_zero, "passed": self.passed}


def build_context(
    version_label: str, development_suffixes: Iterable[str] = DEFAULT_DEVELOPMENT_SUFFIXES
) -> BuildContext:
    label = version_label or ""
    is_development = any(suffix and label.endswith(suffix) for suffix in development_suffixes)
    return BuildContext(version_label=label, is_development_build=is_development)


def should_enforce(context: BuildContext) -> bool:
    return context.is_development_build


def enforcement_mode(context: BuildContext) -> EnforcementMode:
    return EnforcementMode.ENFORCING if should_enforce(context) else EnforcementMode.ADVISORY


def decide(report: EvaluationReport, context: BuildContext) -> GateDecision:
    return GateDecision(
        mode=enforcement_mode(context),
        exit_non_zero=should_enforce(context) and report.should_fail,
    )


def enforce(report: EvaluationReport, context: BuildContext) -> GateDecision:
    """Return the gate decision, raising PolicyViolation when the build must stop."""

    decision = decide(report, context)
    if decision.exit_non_zero:
        raise PolicyViolation(report, context)
    return decision
