from __future__ import annotations

"""Shared data structures for freshness evaluation.

The definitions live in domain-focused modules (dependencies, policy,
report); this module re-exports them so callers have one stable import path.
"""

from .types_dependencies import (
    DEFAULT_TOOL_COORDINATE,
    DependencyCoordinate,
    DependencyState,
    DependencyStatus,
    ToolVersionStatus,
)
from .types_policy import (
    DEFAULT_QUALIFIERS,
    DEFAULT_VENDOR_MARKERS,
    BuildContext,
    ExemptionRule,
    PolicyConfig,
    QualifierBoundary,
)
from .types_report import EvaluationReport, LineKind, ReportLine

__all__ = [
    "BuildContext",
    "DEFAULT_QUALIFIERS",
    "DEFAULT_TOOL_COORDINATE",
    "DEFAULT_VENDOR_MARKERS",
    "DependencyCoordinate",
    "DependencyState",
    "DependencyStatus",
    "EvaluationReport",
    "ExemptionRule",
    "LineKind",
    "PolicyConfig",
    "QualifierBoundary",
    "ReportLine",
    "ToolVersionStatus",
]
