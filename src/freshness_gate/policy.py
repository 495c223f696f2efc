from __future__ import annotations

import logging
import os
from dataclasses import replace
from pathlib import Path
from typing import Any, Iterable, Mapping, Optional

try:  # Python < 3.11 compatibility
    import tomllib  # type: ignore
except ModuleNotFoundError:  # pragma: no cover - exercised in older runtimes
    import tomli as tomllib  # type: ignore

import yaml

from .errors import ConfigurationError
from .exemptions import compile_exemptions
from .types import PolicyConfig, QualifierBoundary

logger = logging.getLogger(__name__)

FAIL_ON_UPDATE_ENV = "FRESHNESS_GATE_FAIL_ON_UPDATE"
PYPROJECT_TABLE = "freshness-gate"

_KNOWN_KEYS = {
    "fail_on_update",
    "exemptions",
    "ignore",
    "prerelease_qualifiers",
    "vendor_markers",
    "qualifier_boundary",
}
_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}


def _as_bool(value: Any, key: str) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str) and value.strip().lower() in _TRUE | _FALSE:
        return value.strip().lower() in _TRUE
    raise ConfigurationError(f"'{key}' must be a boolean, got {value!r}")


def _as_strings(value: Any, key: str) -> list[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, (list, tuple)) and all(isinstance(item, str) for item in value):
        return list(value)
    raise ConfigurationError(f"'{key}' must be a string or a list of strings, got {value!r}")


def policy_from_mapping(raw: Mapping[str, Any], source: str = "<policy>") -> PolicyConfig:
    """Build a PolicyConfig from a parsed document, compiling exemption patterns."""

    if not isinstance(raw, Mapping):
        raise ConfigurationError(f"{source}: policy must be a mapping, got {type(raw).__name__}")

    normalized = {str(key).replace("-", "_"): value for key, value in raw.items()}
    unknown = sorted(set(normalized) - _KNOWN_KEYS)
    if unknown:
        raise ConfigurationError(f"{source}: unknown policy key(s): {', '.join(unknown)}")

    defaults = PolicyConfig()
    fail_on_update = defaults.fail_on_update
    if "fail_on_update" in normalized:
        fail_on_update = _as_bool(normalized["fail_on_update"], "fail_on_update")

    patterns = _as_strings(normalized.get("exemptions"), "exemptions") + _as_strings(
        normalized.get("ignore"), "ignore"
    )

    qualifiers = defaults.prerelease_qualifiers
    if "prerelease_qualifiers" in normalized:
        qualifiers = tuple(
            q.strip().lower()
            for q in _as_strings(normalized["prerelease_qualifiers"], "prerelease_qualifiers")
            if q.strip()
        )

    markers = defaults.vendor_markers
    if "vendor_markers" in normalized:
        markers = tuple(m for m in _as_strings(normalized["vendor_markers"], "vendor_markers") if m)

    boundary = defaults.qualifier_boundary
    if "qualifier_boundary" in normalized:
        try:
            boundary = QualifierBoundary(str(normalized["qualifier_boundary"]).lower())
        except ValueError as exc:
            choices = ", ".join(b.value for b in QualifierBoundary)
            raise ConfigurationError(
                f"{source}: qualifier_boundary must be one of {choices}"
            ) from exc

    return PolicyConfig(
        fail_on_update=fail_on_update,
        exemptions=compile_exemptions(patterns),
        prerelease_qualifiers=qualifiers,
        vendor_markers=markers,
        qualifier_boundary=boundary,
    )


def _load_yaml(path: Path) -> Any:
    try:
        return yaml.safe_load(path.read_text()) or {}
    except (OSError, yaml.YAMLError) as exc:
        raise ConfigurationError(f"Unable to read policy file {path}: {exc}") from exc


def load_policy(path: Path) -> PolicyConfig:
    policy = policy_from_mapping(_load_yaml(path), source=str(path))
    logger.info("Loaded policy from %s (%d exemption(s))", path, len(policy.exemptions))
    return policy


def load_pyproject_policy(path: Path) -> PolicyConfig:
    """Read ``[tool.freshness-gate]`` from a pyproject file; defaults when absent."""

    try:
        data = tomllib.loads(path.read_text())
    except (OSError, tomllib.TOMLDecodeError) as exc:
        raise ConfigurationError(f"Unable to read {path}: {exc}") from exc
    table = (data.get("tool") or {}).get(PYPROJECT_TABLE) or {}
    policy = policy_from_mapping(table, source=f"{path} [tool.{PYPROJECT_TABLE}]")
    logger.info("Loaded policy from %s (%d exemption(s))", path, len(policy.exemptions))
    return policy


def apply_environment(policy: PolicyConfig, environ: Optional[Mapping[str, str]] = None) -> PolicyConfig:
    env = os.environ if environ is None else environ
    raw = env.get(FAIL_ON_UPDATE_ENV)
    if raw is None or not raw.strip():
        return policy
    return replace(policy, fail_on_update=_as_bool(raw, FAIL_ON_UPDATE_ENV))


def apply_overrides(
    policy: PolicyConfig,
    fail_on_update: Optional[bool] = None,
    exemptions: Iterable[str] = (),
    qualifiers: Iterable[str] = (),
) -> PolicyConfig:
    """Layer command-line values on top of a loaded policy.

    Extra exemptions are added to the loaded ones; qualifiers, when given,
    replace the configured set.
    """

    updated = policy
    if fail_on_update is not None:
        updated = replace(updated, fail_on_update=fail_on_update)
    extra = [p for p in exemptions if p not in {rule.pattern for rule in updated.exemptions}]
    if extra:
        updated = replace(updated, exemptions=updated.exemptions + compile_exemptions(extra))
    qualifiers = tuple(q.strip().lower() for q in qualifiers if q.strip())
    if qualifiers:
        updated = replace(updated, prerelease_qualifiers=qualifiers)
    return updated
