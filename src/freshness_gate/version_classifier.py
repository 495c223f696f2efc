"""Release vs. pre-release classification of free-form version strings."""

from __future__ import annotations

import re
from enum import Enum
from functools import lru_cache
from typing import Iterable, Optional

from .types_policy import (
    DEFAULT_QUALIFIERS,
    DEFAULT_VENDOR_MARKERS,
    PolicyConfig,
    QualifierBoundary,
)


class VersionClass(str, Enum):
    RELEASE = "release"
    PRE_RELEASE = "pre-release"


@lru_cache(maxsize=64)
def compile_qualifier_pattern(
    qualifiers: tuple[str, ...], boundary: QualifierBoundary = QualifierBoundary.WORD
) -> Optional["re.Pattern[str]"]:
    tokens = [re.escape(q) for q in qualifiers if q]
    if not tokens:
        return None
    alternation = "|".join(tokens)
    if boundary is QualifierBoundary.SEPARATOR:
        return re.compile(rf"[.-](?:{alternation})[\d.-]*$", re.IGNORECASE)
    return re.compile(rf"\b(?:{alternation})\d*\b", re.IGNORECASE)


def classify(
    version: str,
    qualifiers: Iterable[str] = DEFAULT_QUALIFIERS,
    vendor_markers: Iterable[str] = DEFAULT_VENDOR_MARKERS,
    boundary: QualifierBoundary = QualifierBoundary.WORD,
) -> VersionClass:
    """Return PRE_RELEASE when ``version`` carries a vendor marker or qualifier.

    Never raises: anything that does not match a marker is a RELEASE,
    including the empty string.
    """

    if not version:
        return VersionClass.RELEASE

    lowered = version.lower()
    if any(marker and marker.lower() in lowered for marker in vendor_markers):
        return VersionClass.PRE_RELEASE

    pattern = compile_qualifier_pattern(tuple(qualifiers), QualifierBoundary(boundary))
    if pattern is not None and pattern.search(version):
        return VersionClass.PRE_RELEASE
    return VersionClass.RELEASE


def classify_with_policy(version: str, config: PolicyConfig) -> VersionClass:
    return classify(
        version,
        qualifiers=config.prerelease_qualifiers,
        vendor_markers=config.vendor_markers,
        boundary=config.qualifier_boundary,
    )


def is_prerelease(version: str, config: PolicyConfig | None = None) -> bool:
    return classify_with_policy(version, config or PolicyConfig()) is VersionClass.PRE_RELEASE
