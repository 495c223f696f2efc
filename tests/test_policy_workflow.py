from pathlib import Path

from click.testing import CliRunner

from freshness_gate.cli import main


INVENTORY = """
tool:
  running: "5.0"
  available: ["5.1", "5.2-rc-1"]
dependencies:
  - coordinate: "org.codehaus.groovy:groovy-all"
    current: "2.4.15"
    available: ["2.5.0-beta-1", "2.5.4"]
  - coordinate: "org.spockframework:spock-core"
    current: "1.2-groovy-2.4"
    available: ["1.3-RC1-groovy-2.4"]
  - coordinate: "com.acme:internal"
    current: "0.9"
    unresolved: could not find version
"""


def test_policy_file_exemptions_gate_snapshot_build(tmp_path: Path):
    runner = CliRunner()
    with runner.isolated_filesystem():
        Path("inventory.yml").write_text(INVENTORY)

        strict_policy = Path("policy-strict.yml")
        strict_policy.write_text("fail_on_update: true\n")

        exemption_policy = Path("policy.yml")
        exemption_policy.write_text(
            """
fail_on_update: true
exemptions:
  - "org.codehaus.groovy:groovy.*"
  - "gradle:gradle"
"""
        )

        failing = runner.invoke(
            main,
            ["check", "inventory.yml", "--policy", str(strict_policy), "--version-label", "3.0-SNAPSHOT"],
        )
        passing = runner.invoke(
            main,
            ["check", "inventory.yml", "--policy", str(exemption_policy), "--version-label", "3.0-SNAPSHOT"],
        )

    assert failing.exit_code == 1
    assert "org.codehaus.groovy:groovy-all is outdated: 2.4.15 -> 2.5.4" in failing.output
    assert "Build tool gradle:gradle is outdated: 5.0 -> 5.1" in failing.output
    # the spock candidate is a release candidate, so it never becomes an update
    assert "spock-core" not in failing.output
    assert "Unable to resolve com.acme:internal (0.9): could not find version" in failing.output

    assert passing.exit_code == 0
    assert "groovy-all" not in passing.output
    assert "Unable to resolve com.acme:internal" in passing.output


def test_environment_disables_failure(tmp_path: Path):
    runner = CliRunner()
    with runner.isolated_filesystem():
        Path("inventory.yml").write_text(INVENTORY)

        result = runner.invoke(
            main,
            ["check", "inventory.yml", "--version-label", "3.0-SNAPSHOT"],
            env={"FRESHNESS_GATE_FAIL_ON_UPDATE": "false"},
        )

    assert result.exit_code == 0
    assert "groovy-all" in result.output


def test_pyproject_policy_and_invalid_policy_file(tmp_path: Path):
    runner = CliRunner()
    with runner.isolated_filesystem():
        Path("inventory.yml").write_text(INVENTORY)
        Path("pyproject.toml").write_text(
            """
[tool.freshness-gate]
exemptions = ["org.codehaus.groovy:.*", "gradle:.*"]
"""
        )
        Path("broken.yml").write_text("exemptions: ['(']\n")

        from_pyproject = runner.invoke(
            main, ["check", "inventory.yml", "--pyproject", "pyproject.toml", "--version-label", "1-SNAPSHOT"]
        )
        broken = runner.invoke(main, ["check", "inventory.yml", "--policy", "broken.yml"])

    assert from_pyproject.exit_code == 0
    assert broken.exit_code == 2
    assert "Invalid exemption pattern" in broken.output
