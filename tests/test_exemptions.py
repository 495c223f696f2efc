import pytest

from freshness_gate.errors import ConfigurationError
from freshness_gate.exemptions import compile_exemptions, is_exempt
from freshness_gate.types import DependencyCoordinate


def test_pattern_must_match_whole_coordinate():
    rules = compile_exemptions(["org.codehaus.groovy:groovy.*"])

    assert is_exempt("org.codehaus.groovy:groovy-all", rules)
    assert is_exempt(DependencyCoordinate("org.codehaus.groovy", "groovy"), rules)
    assert not is_exempt("org.spockframework:spock-core", rules)


def test_unanchored_fragment_does_not_exempt():
    rules = compile_exemptions(["groovy"])

    assert not is_exempt("org.codehaus.groovy:groovy-all", rules)


def test_any_rule_matching_exempts():
    rules = compile_exemptions(["com\\.acme:.*", "org.slf4j:slf4j-api"])

    assert is_exempt("com.acme:widgets", rules)
    assert is_exempt("org.slf4j:slf4j-api", rules)
    assert not is_exempt("org.slf4j:slf4j-simple", rules)


def test_empty_rules_never_exempt():
    assert not is_exempt("any:thing", [])
    assert not is_exempt("", ())


def test_tool_coordinate_uses_same_matcher():
    rules = compile_exemptions(["gradle:.*"])

    assert is_exempt(DependencyCoordinate("gradle", "gradle"), rules)


def test_invalid_pattern_fails_at_compile_time():
    with pytest.raises(ConfigurationError) as excinfo:
        compile_exemptions(["ok:.*", "broken:("])

    assert "broken:(" in str(excinfo.value)


def test_duplicate_patterns_are_compiled_once():
    rules = compile_exemptions(["a:b", "a:b"])

    assert [rule.pattern for rule in rules] == ["a:b"]


def test_coordinate_parse_round_trip():
    coordinate = DependencyCoordinate.parse("org.spockframework:spock-core")

    assert coordinate.group == "org.spockframework"
    assert str(coordinate) == "org.spockframework:spock-core"
    with pytest.raises(ValueError):
        DependencyCoordinate.parse("no-colon")


@pytest.mark.parametrize("value", ["group:", ":artifact", ":"])
def test_coordinate_parse_rejects_empty_parts(value):
    with pytest.raises(ValueError):
        DependencyCoordinate.parse(value)
