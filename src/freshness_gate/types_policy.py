from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Tuple

from .errors import ConfigurationError

DEFAULT_QUALIFIERS: Tuple[str, ...] = ("alpha", "beta", "rc", "cr", "m", "preview")
DEFAULT_VENDOR_MARKERS: Tuple[str, ...] = ("redhat",)


class QualifierBoundary(str, Enum):
    """How a qualifier token must be delimited inside a version string.

    ``word`` uses regular-expression word boundaries, so ``1.0.0.beta`` and
    ``1.3-beta2`` match but ``1.0beta`` and ``1.0_beta`` do not (digits and
    underscores are word characters). ``separator`` requires a ``.`` or ``-``
    before the qualifier and only digits, dots or dashes after it.
    """

    WORD = "word"
    SEPARATOR = "separator"


@dataclass(frozen=True)
class ExemptionRule:
    pattern: str
    regex: "re.Pattern[str]" = field(compare=False, repr=False)

    @classmethod
    def compile(cls, pattern: str) -> "ExemptionRule":
        try:
            regex = re.compile(pattern)
        except re.error as exc:
            raise ConfigurationError(f"Invalid exemption pattern '{pattern}': {exc}") from exc
        return cls(pattern=pattern, regex=regex)

    def matches(self, coordinate: str) -> bool:
        return self.regex.fullmatch(coordinate) is not None


@dataclass(frozen=True)
class PolicyConfig:
    fail_on_update: bool = True
    exemptions: Tuple[ExemptionRule, ...] = ()
    prerelease_qualifiers: Tuple[str, ...] = DEFAULT_QUALIFIERS
    vendor_markers: Tuple[str, ...] = DEFAULT_VENDOR_MARKERS
    qualifier_boundary: QualifierBoundary = QualifierBoundary.WORD

    def as_dict(self) -> dict:
        return {
            "fail_on_update": self.fail_on_update,
            "exemptions": [rule.pattern for rule in self.exemptions],
            "prerelease_qualifiers": list(self.prerelease_qualifiers),
            "vendor_markers": list(self.vendor_markers),
            "qualifier_boundary": self.qualifier_boundary.value,
        }


@dataclass(frozen=True)
class BuildContext:
    version_label: str
    is_development_build: bool
