"""Tests for version parsing and ordering."""

import itertools

import pytest
from packaging.version import InvalidVersion

from satisfy.domain import (
    NumericVersion,
    OpaqueVersion,
    Prerelease,
    parse_version,
    compare_versions,
    version_key,
)
from satisfy.domain.version import parse_version_bound, parse_dotted


class TestParseVersion:
    """Tests for parse_version."""

    def test_parse_plain_triple(self):
        assert parse_version("1.2.3") == NumericVersion(1, 2, 3)

    def test_parse_v_prefix(self):
        assert parse_version("v10.0.7") == NumericVersion(10, 0, 7)

    def test_parse_leading_zeros_allowed(self):
        assert parse_version("01.002.3") == NumericVersion(1, 2, 3)

    def test_parse_prerelease_with_dot_ordinal(self):
        version = parse_version("v2.1.0-beta.1")
        assert version == NumericVersion(2, 1, 0, Prerelease("beta", 1))

    def test_parse_prerelease_without_separator(self):
        assert parse_version("1.0.0-rc2") == NumericVersion(1, 0, 0, Prerelease("rc", 2))

    def test_parse_prerelease_without_ordinal(self):
        assert parse_version("1.0.0-alpha") == NumericVersion(1, 0, 0, Prerelease("alpha"))

    @pytest.mark.parametrize("raw", [
        "main",
        "v1.2",
        "1.2.3.4",
        "1.2.3-dev",
        "1.2.3-beta.x",
        "1.2.3-rc.",
        "release-1.0.0",
        "",
    ])
    def test_unparseable_is_opaque(self, raw):
        """Parsing never fails; anything else stays verbatim."""
        assert parse_version(raw) == OpaqueVersion(raw)
        assert str(parse_version(raw)) == raw

    def test_version_key_format(self):
        assert version_key(parse_version("v2.1.0-beta.1")) == "2.1.0-beta1"
        assert version_key(parse_version("v2.0.0")) == "2.0.0"
        assert version_key(parse_version("2.0.0-rc")) == "2.0.0-rc"
        assert version_key(parse_version("feature/x")) == "feature/x"

    @pytest.mark.parametrize("version", [
        NumericVersion(0, 0, 0),
        NumericVersion(3, 14, 159),
        NumericVersion(1, 0, 0, Prerelease("rc")),
        NumericVersion(1, 0, 0, Prerelease("alpha", 0)),
        NumericVersion(1, 0, 0, Prerelease("beta", 12)),
    ])
    def test_format_then_parse(self, version):
        assert parse_version(str(version)) == version


class TestCompareVersions:
    """Tests for compare_versions."""

    def test_numeric_fields(self):
        assert compare_versions(parse_version("1.2.3"), parse_version("1.10.0")) == -1
        assert compare_versions(parse_version("2.0.0"), parse_version("1.99.99")) == 1
        assert compare_versions(parse_version("v1.2.3"), parse_version("1.2.3")) == 0

    def test_release_after_prerelease(self):
        release = parse_version("1.2.3")
        rc = parse_version("1.2.3-rc.1")
        assert compare_versions(release, rc) == 1
        assert not release < rc

    def test_labels_alphabetical(self):
        assert parse_version("1.0.0-alpha.5") < parse_version("1.0.0-beta.1")
        assert parse_version("1.0.0-beta.9") < parse_version("1.0.0-rc.1")

    def test_missing_ordinal_sorts_first(self):
        assert parse_version("1.2.3-alpha") < parse_version("1.2.3-alpha.1")
        assert parse_version("1.2.3-alpha.1") < parse_version("1.2.3-alpha.2")

    def test_opaque_not_ordered(self):
        with pytest.raises(TypeError):
            compare_versions(parse_version("main"), parse_version("1.0.0"))

    def test_total_order(self):
        """Antisymmetric and transitive over a mixed sample."""
        sample = [parse_version(raw) for raw in [
            "0.9.9", "1.0.0-alpha", "1.0.0-alpha.1", "1.0.0-beta",
            "1.0.0-rc.1", "1.0.0", "1.0.1", "1.1.0-rc2", "2.0.0",
        ]]
        for a, b in itertools.product(sample, repeat=2):
            assert compare_versions(a, b) == -compare_versions(b, a)
        for a, b, c in itertools.product(sample, repeat=3):
            if compare_versions(a, b) <= 0 and compare_versions(b, c) <= 0:
                assert compare_versions(a, c) <= 0
        assert sorted(reversed(sample)) == sample


class TestVersionBound:
    """Tests for minimum-version bound parsing."""

    def test_short_bound_pads_with_zero(self):
        assert parse_version_bound("2.0") == parse_dotted("2.0.0")
        assert parse_dotted("1.9.9") < parse_version_bound("2")

    def test_invalid_bound(self):
        with pytest.raises(InvalidVersion):
            parse_version_bound("not-a-version")

    @pytest.mark.parametrize("raw", ["v2.0", "2.0rc1", "1!2.0", "2.0.post1"])
    def test_only_dotted_numbers_are_bounds(self, raw):
        with pytest.raises(InvalidVersion):
            parse_version_bound(raw)

    def test_bound_whitespace_stripped(self):
        assert parse_version_bound(" 2.0 ") == parse_dotted("2.0")

    def test_malformed_dotted(self):
        assert parse_dotted("1..2") is None
