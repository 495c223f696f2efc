from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Optional

import click

from .errors import ConfigurationError, InventoryError, PolicyViolation
from .evaluator import evaluate
from .gate import DEFAULT_DEVELOPMENT_SUFFIXES, build_context, decide, enforce
from .inventory import load_inventory
from .policy import apply_environment, apply_overrides, load_policy, load_pyproject_policy
from .reporting import write_github_check, write_report
from .types import DEFAULT_QUALIFIERS, BuildContext, PolicyConfig, QualifierBoundary
from .version_classifier import classify

logger = logging.getLogger(__name__)


def _load_config(
    policy: Optional[str],
    pyproject: Optional[str],
    fail_on_update: Optional[bool],
    exempt: tuple[str, ...],
    qualifier: tuple[str, ...],
) -> PolicyConfig:
    if policy:
        config = load_policy(Path(policy))
    elif pyproject:
        config = load_pyproject_policy(Path(pyproject))
    else:
        config = PolicyConfig()
    config = apply_environment(config)
    return apply_overrides(config, fail_on_update=fail_on_update, exemptions=exempt, qualifiers=qualifier)


def _context(version_label: Optional[str], development_suffix: tuple[str, ...]) -> BuildContext:
    if version_label is None:
        return BuildContext(version_label="", is_development_build=True)
    return build_context(version_label, development_suffix or DEFAULT_DEVELOPMENT_SUFFIXES)


@click.group()
def main() -> None:
    """Dependency freshness gate."""


@main.command()
@click.argument("inventory", type=click.Path(exists=True, dir_okay=False, path_type=str))
@click.option(
    "--policy",
    type=click.Path(exists=True, dir_okay=False, path_type=str),
    envvar="FRESHNESS_GATE_POLICY",
    help="Policy YAML file (fail_on_update, exemptions, prerelease_qualifiers, ...).",
)
@click.option(
    "--pyproject",
    type=click.Path(exists=True, dir_okay=False, path_type=str),
    help="Read the policy from [tool.freshness-gate] in this pyproject file.",
)
@click.option(
    "--version-label",
    envvar="FRESHNESS_GATE_VERSION_LABEL",
    help="Version of the project being built; decides between enforcing and advisory mode.",
)
@click.option(
    "--development-suffix",
    multiple=True,
    help="Version label suffix marking a development build (default: -SNAPSHOT).",
)
@click.option(
    "--fail-on-update/--no-fail-on-update",
    default=None,
    help="Override the policy's fail_on_update setting.",
)
@click.option(
    "--exempt",
    multiple=True,
    help="Regular expression matched against group:artifact; matching coordinates are ignored.",
)
@click.option(
    "--qualifier",
    multiple=True,
    help="Pre-release qualifier token (replaces the configured set when given).",
)
@click.option(
    "--format",
    "fmt",
    type=click.Choice(["text", "json", "markdown", "md", "html"], case_sensitive=False),
    default="text",
    show_default=True,
    help="Output format for the report.",
)
@click.option(
    "--output",
    type=click.Path(dir_okay=False, writable=True, path_type=str),
    help="Write the report to a file instead of stdout.",
)
@click.option(
    "--github-check-output",
    type=click.Path(dir_okay=False, writable=True, path_type=str),
    help="Write a GitHub Check-style JSON summary for PR gating.",
)
@click.option("--verbose", is_flag=True, help="Log debug diagnostics to stderr.")
def check(
    inventory: str,
    policy: Optional[str],
    pyproject: Optional[str],
    version_label: Optional[str],
    development_suffix: tuple[str, ...],
    fail_on_update: Optional[bool],
    exempt: tuple[str, ...],
    qualifier: tuple[str, ...],
    fmt: str,
    output: Optional[str],
    github_check_output: Optional[str],
    verbose: bool,
) -> None:
    """Evaluate an inventory snapshot and fail when enforced updates exist."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")
    if policy and pyproject:
        raise click.UsageError("--policy and --pyproject are mutually exclusive.")

    try:
        config = _load_config(policy, pyproject, fail_on_update, exempt, qualifier)
        snapshot = load_inventory(Path(inventory), config)
    except ConfigurationError as exc:
        click.echo(f"Configuration error: {exc}", err=True)
        raise SystemExit(2)
    except InventoryError as exc:
        click.echo(f"Inventory error: {exc}", err=True)
        raise SystemExit(2)

    context = _context(version_label, development_suffix)
    report = evaluate(snapshot.dependencies, snapshot.tool, config)
    for coordinate in report.exempted:
        logger.debug("Exempted %s", coordinate)

    decision = decide(report, context)
    destination = Path(output) if output else None
    rendered = write_report(report, fmt, destination, decision)
    if not destination:
        click.echo(rendered)

    if github_check_output:
        write_github_check(Path(github_check_output), report, decision)

    try:
        enforce(report, context)
    except PolicyViolation as exc:
        click.echo(f"Freshness check failed: {exc}", err=True)
        raise SystemExit(1)


@main.command(name="classify")
@click.argument("versions", nargs=-1, required=True)
@click.option(
    "--qualifier",
    multiple=True,
    help=f"Pre-release qualifier token (default: {', '.join(DEFAULT_QUALIFIERS)}).",
)
@click.option(
    "--boundary",
    type=click.Choice([b.value for b in QualifierBoundary], case_sensitive=False),
    default=QualifierBoundary.WORD.value,
    show_default=True,
    help="How qualifiers must be delimited inside the version string.",
)
@click.option("--json", "json_output", is_flag=True, help="Emit JSON instead of human text.")
def classify_command(versions: tuple[str, ...], qualifier: tuple[str, ...], boundary: str, json_output: bool) -> None:
    """Classify version strings as release or pre-release."""

    qualifiers = qualifier or DEFAULT_QUALIFIERS
    results = {
        version: classify(version, qualifiers=qualifiers, boundary=QualifierBoundary(boundary.lower())).value
        for version in versions
    }
    if json_output:
        click.echo(json.dumps(results, indent=2))
    else:
        for version, result in results.items():
            click.echo(f"{version}: {result}")


if __name__ == "__main__":
    main()
