from __future__ import annotations

import logging
from typing import Iterable, Optional

from .exemptions import is_exempt
from .types import (
    DependencyState,
    DependencyStatus,
    EvaluationReport,
    LineKind,
    PolicyConfig,
    ReportLine,
    ToolVersionStatus,
)

logger = logging.getLogger(__name__)


def _version_text(version: Optional[str]) -> str:
    return version or "unknown"


def evaluate(
    inventory: Iterable[DependencyStatus],
    tool_status: Optional[ToolVersionStatus],
    config: PolicyConfig,
) -> EvaluationReport:
    """Scan an inventory snapshot and build the freshness report.

    Candidate versions are expected to be filtered by the version classifier
    while the inventory is built, so every OUTDATED entry here already points
    at a release. Lines come out as outdated dependencies, then the build
    tool, then unresolved dependencies; input order is kept inside each group.
    Exemptions apply to outdated dependencies and the build tool; unresolved
    dependencies are always reported. A coordinate is only considered the
    first time it appears.
    """

    outdated: list[ReportLine] = []
    unresolved: list[ReportLine] = []
    tool_lines: list[ReportLine] = []
    exempted: list[str] = []
    seen: set[str] = set()

    for status in inventory:
        key = str(status.coordinate)
        if key in seen:
            logger.debug("Ignoring repeated %s entry for %s", status.state.value, key)
            continue
        seen.add(key)

        if status.state is DependencyState.OUTDATED:
            if is_exempt(key, config.exemptions):
                exempted.append(key)
                continue
            outdated.append(
                ReportLine(
                    LineKind.OUTDATED,
                    key,
                    f"Dependency {key} is outdated: "
                    f"{_version_text(status.current_version)} -> {_version_text(status.available_version)}",
                )
            )
        elif status.state is DependencyState.UNRESOLVED:
            unresolved.append(
                ReportLine(
                    LineKind.UNRESOLVED,
                    key,
                    f"Unable to resolve {key} ({_version_text(status.current_version)}): "
                    f"{status.reason or 'no reason given'}",
                )
            )

    if tool_status is not None and tool_status.has_update:
        tool_key = str(tool_status.coordinate)
        if is_exempt(tool_key, config.exemptions):
            exempted.append(tool_key)
        else:
            tool_lines.append(
                ReportLine(
                    LineKind.TOOL,
                    tool_key,
                    f"Build tool {tool_key} is outdated: "
                    f"{tool_status.running_version} -> {tool_status.available_version}",
                )
            )

    has_updates = bool(outdated or tool_lines)
    return EvaluationReport(
        entries=tuple(outdated + tool_lines + unresolved),
        should_fail=has_updates and config.fail_on_update,
        exempted=tuple(exempted),
    )
