from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Tuple


class LineKind(str, Enum):
    OUTDATED = "outdated"
    TOOL = "tool"
    UNRESOLVED = "unresolved"


@dataclass(frozen=True)
class ReportLine:
    kind: LineKind
    coordinate: str
    message: str


@dataclass(frozen=True)
class EvaluationReport:
    entries: Tuple[ReportLine, ...] = ()
    should_fail: bool = False
    exempted: Tuple[str, ...] = ()

    @property
    def lines(self) -> list[str]:
        return [entry.message for entry in self.entries]

    @property
    def blocking_lines(self) -> list[ReportLine]:
        """Lines that count as available updates (outdated dependencies and tool)."""

        return [entry for entry in self.entries if entry.kind is not LineKind.UNRESOLVED]

    @property
    def has_updates(self) -> bool:
        return bool(self.blocking_lines)

    def as_dict(self) -> dict:
        return {
            "should_fail": self.should_fail,
            "lines": [
                {"kind": entry.kind.value, "coordinate": entry.coordinate, "message": entry.message}
                for entry in self.entries
            ],
            "exempted": list(self.exempted),
        }
