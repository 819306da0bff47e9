"""Tests for describe decoding, stability, dirty suffix and component split."""

import pytest
from hypothesis import given
from hypothesis import strategies as st

from vercompute_core.models import UNKNOWN, DescribeResult, VersionComponents
from vercompute_core.parser import (
    is_stable,
    parse_describe,
    split_version,
    strip_tag_prefix,
    with_dirty_suffix,
)

numbers = st.integers(min_value=0, max_value=999).map(str)
hashes = st.text(alphabet="0123456789abcdef", min_size=4, max_size=12)


class TestParseDescribe:
    def test_exact_tag(self) -> None:
        result = parse_describe("v0.5\n")
        assert result == DescribeResult(tag="v0.5", text="v0.5")
        assert result.exact
        assert result.version() == "0.5"

    def test_commits_past_tag(self) -> None:
        result = parse_describe("v0.5-2-034f")
        assert result.tag == "v0.5"
        assert result.commits_since == 2
        assert result.sha_prefix == "034f"
        assert not result.exact
        assert result.version() == "0.5-2-034f"

    def test_git_object_name_marker_is_kept(self) -> None:
        result = parse_describe("v1.2.3-14-g0a1b")
        assert result.sha_prefix == "g0a1b"
        assert result.version() == "1.2.3-14-g0a1b"

    def test_dirty_marker(self) -> None:
        assert parse_describe("v0.5-2-034f-dirty").dirty
        exact = parse_describe("v0.5-dirty")
        assert exact.dirty
        assert exact.tag == "v0.5"
        # describe runs without --dirty, so the text belongs to the tag name
        assert exact.version() == "0.5-dirty"

    def test_date_tag_keeps_zero_padding(self) -> None:
        result = parse_describe("v2024-01-15")
        assert result.version() == "2024-01-15"
        assert parse_describe("v2024-01-15-3-gbeef").version() == "2024-01-15-3-gbeef"

    def test_hand_built_result_is_formatted(self) -> None:
        assert DescribeResult(tag="v0.5").version() == "0.5"
        assert DescribeResult(tag="v0.5", commits_since=2, sha_prefix="g034f").version() == "0.5-2-g034f"

    def test_hyphenated_tag(self) -> None:
        assert parse_describe("v1.0-rc1").tag == "v1.0-rc1"
        result = parse_describe("v1.0-rc1-3-gbeef")
        assert result.tag == "v1.0-rc1"
        assert result.commits_since == 3
        assert result.version() == "1.0-rc1-3-gbeef"

    def test_bare_prefix_formats_empty(self) -> None:
        assert parse_describe("v").version() == ""
        assert parse_describe("v-3-abcd").version() == ""

    def test_custom_prefix(self) -> None:
        assert parse_describe("release-2.0").version("release-") == "2.0"

    @given(major=numbers, minor=numbers, patch=numbers, commits=st.integers(1, 5000), sha=hashes)
    def test_decode_then_format_preserves_version(self, major, minor, patch, commits, sha) -> None:
        tag = f"v{major}.{minor}.{patch}"
        result = parse_describe(f"{tag}-{commits}-{sha}")
        assert result.tag == tag
        assert result.commits_since == commits
        assert result.version() == f"{major}.{minor}.{patch}-{commits}-{sha}"

    @given(text=st.from_regex(r"\Av[0-9][0-9a-z.-]{0,20}\Z"))
    def test_format_returns_output_without_prefix(self, text: str) -> None:
        assert parse_describe(text).version() == text[1:]


class TestHelpers:
    def test_strip_tag_prefix_only_once(self) -> None:
        assert strip_tag_prefix("vv1.0") == "v1.0"
        assert strip_tag_prefix("1.0") == "1.0"
        assert strip_tag_prefix("v1.0", "") == "v1.0"

    @pytest.mark.parametrize("raw,expected", [
        ("1.0", True),
        ("2", True),
        ("0.1.3", True),
        ("0.2.4-1-dg43", False),
        ("1.0-rc1", False),
        (UNKNOWN, False),
    ])
    def test_is_stable(self, raw: str, expected: bool) -> None:
        assert is_stable(raw) is expected

    def test_dirty_suffix_appended_once(self) -> None:
        assert with_dirty_suffix("0.5-2-034f", True) == "0.5-2-034f-dirty"
        assert with_dirty_suffix("0.5-2-034f-dirty", True) == "0.5-2-034f-dirty"
        assert with_dirty_suffix("0.5", False) == "0.5"

    def test_dirty_suffix_never_applied_to_unknown(self) -> None:
        assert with_dirty_suffix(UNKNOWN, True) == UNKNOWN

    @given(raw=st.from_regex(r"\A[0-9]+(\.[0-9]+){0,2}(-[0-9]+-[0-9a-f]{4})?\Z"))
    def test_dirty_suffix_idempotent(self, raw: str) -> None:
        once = with_dirty_suffix(raw, True)
        assert with_dirty_suffix(once, True) == once
        assert once.count("-dirty") == 1


class TestSplitVersion:
    def test_unknown(self) -> None:
        assert split_version(UNKNOWN) == VersionComponents(UNKNOWN, UNKNOWN, UNKNOWN)

    @pytest.mark.parametrize("raw", ["0.5.2", "0.5-2-034f", "0.5.2-7-g1234", "0.5.2-dirty"])
    def test_distance_suffix_is_discarded(self, raw: str) -> None:
        assert split_version(raw) == VersionComponents("0", "5", "2")

    def test_patch_keeps_only_first_hyphen_token(self) -> None:
        # Components lose the distance and hash; raw still carries them.
        assert split_version("1.2.3-4-abcd").patch == "3"

    def test_missing_segments_are_none(self) -> None:
        assert split_version("7") == VersionComponents("7", None, None)
        assert split_version("7.1") == VersionComponents("7", "1", None)

    def test_extra_segments_ignored(self) -> None:
        assert split_version("1.2.3.4.5") == VersionComponents("1", "2", "3")

    def test_two_segment_dirty_keeps_minor_text(self) -> None:
        assert split_version("0.5-dirty") == VersionComponents("0", "5-dirty", None)

    @given(major=numbers, minor=numbers, patch=numbers)
    def test_three_numbers(self, major, minor, patch) -> None:
        assert split_version(f"{major}.{minor}.{patch}") == VersionComponents(major, minor, patch)

    @given(major=numbers, minor=numbers, patch=numbers, commits=st.integers(1, 500), sha=hashes,
           dirty=st.booleans())
    def test_suffix_never_leaks_into_patch(self, major, minor, patch, commits, sha, dirty) -> None:
        raw = with_dirty_suffix(f"{major}.{minor}.{patch}-{commits}-{sha}", dirty)
        assert split_version(raw) == VersionComponents(major, minor, patch)
