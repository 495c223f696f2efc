from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional


@dataclass(frozen=True)
class DependencyCoordinate:
    group: str
    artifact: str

    @classmethod
    def parse(cls, value: str) -> "DependencyCoordinate":
        group, sep, artifact = value.partition(":")
        if not sep or not group or not artifact:
            raise ValueError(f"Coordinate '{value}' is not in group:artifact form")
        return cls(group=group, artifact=artifact)

    def __str__(self) -> str:
        return f"{self.group}:{self.artifact}"


class DependencyState(str, Enum):
    CURRENT = "current"
    OUTDATED = "outdated"
    UNRESOLVED = "unresolved"


@dataclass(frozen=True)
class DependencyStatus:
    coordinate: DependencyCoordinate
    state: DependencyState
    current_version: Optional[str]
    available_version: Optional[str] = None
    reason: Optional[str] = None

    @classmethod
    def current(cls, coordinate: DependencyCoordinate, version: Optional[str]) -> "DependencyStatus":
        return cls(coordinate, DependencyState.CURRENT, version)

    @classmethod
    def outdated(
        cls, coordinate: DependencyCoordinate, version: Optional[str], available: str
    ) -> "DependencyStatus":
        return cls(coordinate, DependencyState.OUTDATED, version, available_version=available)

    @classmethod
    def unresolved(
        cls, coordinate: DependencyCoordinate, version: Optional[str], reason: str
    ) -> "DependencyStatus":
        return cls(coordinate, DependencyState.UNRESOLVED, version, reason=reason)


DEFAULT_TOOL_COORDINATE = DependencyCoordinate("gradle", "gradle")


@dataclass(frozen=True)
class ToolVersionStatus:
    """Running vs. latest version of the build tool itself."""

    running_version: str
    available_version: Optional[str] = None
    coordinate: DependencyCoordinate = DEFAULT_TOOL_COORDINATE

    @property
    def has_update(self) -> bool:
        return bool(self.available_version) and self.available_version != self.running_version
