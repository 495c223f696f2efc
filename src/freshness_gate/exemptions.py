from __future__ import annotations

import logging
from typing import Iterable, Union

from .types_dependencies import DependencyCoordinate
from .types_policy import ExemptionRule

logger = logging.getLogger(__name__)


def compile_exemptions(patterns: Iterable[str]) -> tuple[ExemptionRule, ...]:
    """Compile pattern strings into rules, failing fast on the first bad one."""

    rules: list[ExemptionRule] = []
    seen: set[str] = set()
    for pattern in patterns:
        pattern = str(pattern)
        if pattern in seen:
            continue
        seen.add(pattern)
        rules.append(ExemptionRule.compile(pattern))
    logger.debug("Compiled %d exemption rule(s)", len(rules))
    return tuple(rules)


def is_exempt(
    coordinate: Union[DependencyCoordinate, str], rules: Iterable[ExemptionRule]
) -> bool:
    """Return True iff some rule matches the whole ``group:artifact`` string.

    Rules are full matches; write ``.*`` explicitly to exempt a family such as
    ``org.codehaus.groovy:groovy.*``. The build tool's pseudo-coordinate goes
    through here exactly like a dependency.
    """

    text = str(coordinate)
    return any(rule.matches(text) for rule in rules)
