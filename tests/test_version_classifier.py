import pytest

from freshness_gate.types import PolicyConfig, QualifierBoundary
from freshness_gate.version_classifier import VersionClass, classify, is_prerelease


@pytest.mark.parametrize(
    "version",
    ["1.3-beta2", "2.0-RC1", "1.0.0.beta", "1.0-M1", "3.0.0-preview.5", "1.3-rc1", "4.0-alpha", "1.1-CR2"],
)
def test_qualified_versions_are_prereleases(version):
    assert classify(version) is VersionClass.PRE_RELEASE


@pytest.mark.parametrize(
    "version",
    ["1.3", "", "2.5.0-groovy-2.5", "1.2.3.Final", "alphabet-1.0", "1.0-milestone"],
)
def test_plain_versions_are_releases(version):
    assert classify(version) is VersionClass.RELEASE


def test_word_boundary_ignores_glued_qualifiers():
    # digits and underscores are word characters, so there is no boundary before the qualifier
    assert classify("1.0beta") is VersionClass.RELEASE
    assert classify("1.0_beta") is VersionClass.RELEASE


def test_vendor_marker_is_case_insensitive():
    assert classify("7.1.0.redhat-00001") is VersionClass.PRE_RELEASE
    assert classify("7.1.0.RedHat") is VersionClass.PRE_RELEASE
    assert classify("7.1.0.redhat", vendor_markers=()) is VersionClass.RELEASE


def test_separator_boundary_requires_leading_separator_and_clean_tail():
    boundary = QualifierBoundary.SEPARATOR
    assert classify("1.3-beta2", boundary=boundary) is VersionClass.PRE_RELEASE
    assert classify("1.0.0.beta", boundary=boundary) is VersionClass.PRE_RELEASE
    assert classify("beta-1.0", boundary=boundary) is VersionClass.RELEASE
    assert classify("1.0-rc1-final", boundary=boundary) is VersionClass.RELEASE

    assert classify("beta-1.0") is VersionClass.PRE_RELEASE
    assert classify("1.0-rc1-final") is VersionClass.PRE_RELEASE


def test_custom_qualifiers_replace_defaults():
    assert classify("1.0-dev3") is VersionClass.RELEASE
    assert classify("1.0-dev3", qualifiers=("dev",)) is VersionClass.PRE_RELEASE
    assert classify("1.0-beta", qualifiers=("dev",)) is VersionClass.RELEASE


def test_classifier_never_raises_on_odd_qualifiers():
    assert classify("1.0", qualifiers=("a(b", "[", "")) is VersionClass.RELEASE
    assert classify("1.0", qualifiers=()) is VersionClass.RELEASE


def test_is_prerelease_reads_policy():
    config = PolicyConfig(prerelease_qualifiers=("snapshot",))
    assert is_prerelease("2.0-SNAPSHOT", config)
    assert not is_prerelease("2.0-rc1", config)
    assert is_prerelease("2.0-rc1")
