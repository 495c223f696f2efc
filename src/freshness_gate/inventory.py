"""Load a normalized inventory snapshot and label each dependency.

The snapshot is produced by whatever resolves dependency metadata (a build
tool plugin, a registry crawler, a CI step). It lists, per dependency, the
version in use and the newer candidate versions, oldest first. Loading
classifies every candidate and only proposes release candidates, so a
dependency whose only newer versions are pre-releases stays CURRENT.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Iterable, List, Mapping, Optional

import yaml

from .errors import InventoryError
from .types import (
    DEFAULT_TOOL_COORDINATE,
    DependencyCoordinate,
    DependencyStatus,
    PolicyConfig,
    ToolVersionStatus,
)
from .version_classifier import VersionClass, classify_with_policy

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Inventory:
    dependencies: tuple[DependencyStatus, ...]
    tool: Optional[ToolVersionStatus] = None


def _text(value: Any) -> Optional[str]:
    if value is None:
        return None
    return str(value).strip()


def _version(value: Any, field: str, where: str) -> Optional[str]:
    # YAML reads 1.10 as the float 1.1, so only strings are trusted as versions
    if value is None:
        return None
    if not isinstance(value, str):
        raise InventoryError(
            f"{where}: '{field}' must be a string, got {value!r}; quote versions such as \"1.10\""
        )
    return value.strip()


def select_update(
    current: Optional[str], candidates: Iterable[str], config: PolicyConfig
) -> Optional[str]:
    """Return the newest release candidate that differs from ``current``."""

    chosen = None
    for candidate in candidates:
        if not candidate or candidate == current:
            continue
        if classify_with_policy(candidate, config) is VersionClass.RELEASE:
            chosen = candidate
        else:
            logger.debug("Skipping pre-release candidate %s", candidate)
    return chosen


def _candidates(entry: Mapping[str, Any], where: str) -> List[str]:
    available = entry.get("available")
    if available is None:
        return []
    if isinstance(available, list):
        return [_version(item, "available", where) or "" for item in available]
    if isinstance(available, (str, int, float)):
        return [_version(available, "available", where) or ""]
    raise InventoryError(f"{where}: 'available' must be a version or a list of versions")


def _coordinate(entry: Mapping[str, Any], where: str) -> DependencyCoordinate:
    if entry.get("coordinate"):
        try:
            return DependencyCoordinate.parse(str(entry["coordinate"]))
        except ValueError as exc:
            raise InventoryError(f"{where}: {exc}") from exc
    group, artifact = _text(entry.get("group")), _text(entry.get("artifact"))
    if not group or not artifact:
        raise InventoryError(f"{where}: expected 'coordinate' or both 'group' and 'artifact'")
    return DependencyCoordinate(group, artifact)


def parse_dependency(entry: Mapping[str, Any], config: PolicyConfig, where: str = "dependency") -> DependencyStatus:
    if not isinstance(entry, Mapping):
        raise InventoryError(f"{where}: expected a mapping, got {type(entry).__name__}")
    coordinate = _coordinate(entry, where)
    current = _version(entry.get("current"), "current", where)

    reason = entry.get("unresolved")
    if reason:
        return DependencyStatus.unresolved(coordinate, current, str(reason))

    update = select_update(current, _candidates(entry, where), config)
    if update:
        return DependencyStatus.outdated(coordinate, current, update)
    return DependencyStatus.current(coordinate, current)


def parse_tool(entry: Mapping[str, Any], config: PolicyConfig) -> ToolVersionStatus:
    if not isinstance(entry, Mapping):
        raise InventoryError("tool: expected a mapping")
    running = _version(entry.get("running"), "running", "tool")
    if not running:
        raise InventoryError("tool: 'running' version is required")
    coordinate = DEFAULT_TOOL_COORDINATE
    if entry.get("coordinate") or entry.get("group") or entry.get("artifact"):
        coordinate = _coordinate(entry, "tool")
    available = select_update(running, _candidates(entry, "tool"), config)
    return ToolVersionStatus(running_version=running, available_version=available, coordinate=coordinate)


def build_inventory(raw: Mapping[str, Any], config: PolicyConfig) -> Inventory:
    if not isinstance(raw, Mapping):
        raise InventoryError("Inventory must be a mapping with 'dependencies' and optional 'tool'")

    entries = raw.get("dependencies") or []
    if not isinstance(entries, list):
        raise InventoryError("'dependencies' must be a list")

    statuses: list[DependencyStatus] = []
    seen: set[str] = set()
    for index, entry in enumerate(entries):
        status = parse_dependency(entry, config, where=f"dependencies[{index}]")
        key = str(status.coordinate)
        if key in seen:
            raise InventoryError(f"dependencies[{index}]: {key} is listed more than once")
        seen.add(key)
        statuses.append(status)

    tool = parse_tool(raw["tool"], config) if raw.get("tool") else None
    logger.debug("Inventory holds %d dependencies (tool: %s)", len(statuses), tool is not None)
    return Inventory(dependencies=tuple(statuses), tool=tool)


def load_inventory(path: Path, config: PolicyConfig) -> Inventory:
    try:
        content = path.read_text()
        raw = json.loads(content) if path.suffix.lower() == ".json" else yaml.safe_load(content)
    except (OSError, json.JSONDecodeError, yaml.YAMLError) as exc:
        raise InventoryError(f"Unable to read inventory {path}: {exc}") from exc
    return build_inventory(raw or {}, config)
