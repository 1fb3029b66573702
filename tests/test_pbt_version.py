# SPDX-License-Identifier: MIT
"""Property-based tests for versions.

These tests validate:
- Rendering then parsing reproduces every field
- Increments reset less significant fields
- Precedence is a total order over branch/major/minor/patch/hotfix
- Required and forbidden settings are complementary
"""

from hypothesis import given, settings, strategies as st

from semver_policy import MAX_SAFE_INTEGER, ComplianceField, Version
from semver_policy.grammar import is_branch


# =============================================================================
# Strategies for generating test data
# =============================================================================

numbers = st.integers(min_value=0, max_value=MAX_SAFE_INTEGER)
small_numbers = st.integers(min_value=0, max_value=20)

prerelease_identifier = st.from_regex(r"[1-9a-zA-Z-][0-9a-zA-Z-]{0,8}", fullmatch=True)
build_identifier = st.from_regex(r"[0-9a-zA-Z-]{1,8}", fullmatch=True)

prereleases = st.lists(prerelease_identifier, min_size=1, max_size=4).map(".".join)
builds = st.lists(build_identifier, min_size=1, max_size=4).map(".".join)

labels = st.sampled_from(["v", "V", "ver", "Ver", "version", "VERSION"])

branches = st.text(
    alphabet=st.sampled_from("abcdefghijklmnopqrstuvwxyz0123456789-_/. "),
    min_size=1,
    max_size=20,
).filter(is_branch)


@st.composite
def versions(draw, numeric=numbers):
    return Version(
        major=draw(numeric),
        minor=draw(numeric),
        patch=draw(numeric),
        hotfix=draw(st.none() | numeric),
        prerelease=draw(st.none() | prereleases),
        build=draw(st.none() | builds),
        branch=draw(st.none() | branches),
        label=draw(st.none() | labels),
    )


FIELDS = ("branch", "label", "major", "minor", "patch", "hotfix", "prerelease", "build")


class TestRoundTrip:
    """Rendering a version and parsing it back gives the same fields."""

    @given(version=versions())
    @settings(max_examples=300)
    def test_parse_render(self, version: Version):
        parsed = Version.parse(str(version))
        for name in FIELDS:
            assert getattr(parsed, name) == getattr(version, name), name
        assert str(parsed) == str(version)

    @given(version=versions())
    def test_snapshot(self, version: Version):
        assert Version.from_json(version.to_json()) == version


class TestIncrementProperties:
    """Increments reset every less significant field."""

    @given(version=versions(numeric=st.integers(min_value=0, max_value=10**6)))
    def test_increment_major(self, version: Version):
        bumped = version.increment_major()
        assert bumped.major == version.major + 1
        assert (bumped.minor, bumped.patch) == (0, 0)
        assert (bumped.hotfix, bumped.prerelease, bumped.build) == (None, None, None)
        assert (bumped.branch, bumped.label) == (version.branch, version.label)

    @given(version=versions(numeric=st.integers(min_value=0, max_value=10**6)))
    def test_increment_minor(self, version: Version):
        bumped = version.increment_minor()
        assert (bumped.major, bumped.minor, bumped.patch) == (
            version.major,
            version.minor + 1,
            0,
        )
        assert (bumped.hotfix, bumped.prerelease, bumped.build) == (None, None, None)

    @given(version=versions(numeric=st.integers(min_value=0, max_value=10**6)))
    def test_increment_patch(self, version: Version):
        bumped = version.increment_patch()
        assert (bumped.major, bumped.minor, bumped.patch) == (
            version.major,
            version.minor,
            version.patch + 1,
        )
        assert (bumped.hotfix, bumped.prerelease, bumped.build) == (None, None, None)

    @given(version=versions(numeric=st.integers(min_value=0, max_value=10**6)))
    def test_increment_hotfix(self, version: Version):
        bumped = version.increment_hotfix()
        assert (bumped.major, bumped.minor, bumped.patch) == (
            version.major,
            version.minor,
            version.patch,
        )
        assert bumped.hotfix == (version.hotfix or 0) + 1
        assert (bumped.prerelease, bumped.build) == (None, None)

    @given(version=versions(numeric=st.integers(min_value=0, max_value=10**6)))
    def test_increments_sort_later(self, version: Version):
        for bumped in (
            version.increment_major(),
            version.increment_minor(),
            version.increment_patch(),
            version.increment_hotfix(),
        ):
            assert version.compare_precedence(bumped) == -1


class TestOrderProperties:
    """Precedence is a total order."""

    @given(version=versions())
    def test_reflexive(self, version: Version):
        assert Version.compare(version, version) == 0

    @given(a=versions(numeric=small_numbers), b=versions(numeric=small_numbers))
    def test_antisymmetric(self, a: Version, b: Version):
        assert Version.compare(a, b) == -Version.compare(b, a)

    @given(
        a=versions(numeric=small_numbers),
        b=versions(numeric=small_numbers),
        c=versions(numeric=small_numbers),
    )
    def test_transitive(self, a: Version, b: Version, c: Version):
        if Version.compare(a, b) <= 0 and Version.compare(b, c) <= 0:
            assert Version.compare(a, c) <= 0

    @given(version=versions(), prerelease=st.none() | prereleases, build=st.none() | builds)
    def test_prerelease_and_build_ignored(self, version: Version, prerelease, build):
        other = version.change_prerelease(prerelease).change_build(build)
        assert Version.compare(version, other) == 0


class TestPolicyComplement:
    """Required and forbidden cannot both hold for the same field."""

    @given(version=versions(), field=st.sampled_from(list(ComplianceField)))
    def test_required_forbidden(self, version: Version, field: ComplianceField):
        required = Version.from_fields(
            version.to_json(), compliance_settings={field.value: "required"}
        )
        forbidden = Version.from_fields(
            version.to_json(), compliance_settings={field.value: "forbidden"}
        )
        value = getattr(version, field.attribute)

        assert forbidden.is_custom_compliant() == (value is None)
        if value is None:
            assert not required.is_custom_compliant()
        assert not (required.is_custom_compliant() and forbidden.is_custom_compliant())
