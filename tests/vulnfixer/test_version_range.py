"""Tests for the version range parser."""

from __future__ import annotations

import pytest

from vulnfixer.engines.version_range.parser import (
    RangeOperator,
    parse_range,
    parse_target_version,
)
from vulnfixer.exceptions import UnsupportedRangeFormat


class TestParseTargetVersion:
    def test_less_or_equal(self):
        assert parse_target_version("<= 1.2.3") == "1.2.3"

    def test_equal(self):
        assert parse_target_version("= 2.0.0") == "2.0.0"

    def test_less_than_unsupported(self):
        with pytest.raises(UnsupportedRangeFormat):
            parse_target_version("< 1.0.0")

    def test_bounded_range_uses_upper_bound(self):
        assert parse_target_version(">= 1.0, <= 1.2.3") == "1.2.3"

    def test_no_space_after_marker(self):
        assert parse_target_version("<=4.1") == "4.1"

    def test_double_equals(self):
        assert parse_target_version("== 0.9.1") == "0.9.1"

    def test_trailing_whitespace_trimmed(self):
        assert parse_target_version("<= 3.0.0   ") == "3.0.0"

    def test_lower_bound_only_takes_equality_path(self):
        assert parse_target_version(">= 1.0") == "1.0"

    def test_not_equal_unsupported(self):
        with pytest.raises(UnsupportedRangeFormat):
            parse_target_version("!= 1.0")

    def test_free_text_unsupported(self):
        with pytest.raises(UnsupportedRangeFormat):
            parse_target_version("all versions")

    def test_marker_without_version_unsupported(self):
        with pytest.raises(UnsupportedRangeFormat):
            parse_target_version("<= ")

    def test_error_carries_context(self):
        with pytest.raises(UnsupportedRangeFormat) as exc_info:
            parse_target_version("< 1.0.0", cve="CVE-2024-1234")
        assert exc_info.value.cve == "CVE-2024-1234"
        assert exc_info.value.range_text == "< 1.0.0"
        assert "CVE-2024-1234" in str(exc_info.value)


class TestParseRange:
    def test_less_or_equal_wins_over_equal(self):
        parsed = parse_range("= 1.0, <= 1.5")
        assert parsed.operator is RangeOperator.LESS_OR_EQUAL
        assert parsed.boundary == "1.5"

    def test_less_than(self):
        parsed = parse_range("< 2.4.1")
        assert parsed.operator is RangeOperator.LESS_THAN
        assert parsed.boundary == "2.4.1"

    def test_greater_or_equal_wins_over_less_than(self):
        parsed = parse_range(">= 2.0, < 2.4.1")
        assert parsed.operator is RangeOperator.EQUAL
        assert parsed.boundary == "2.0"

    def test_unknown(self):
        parsed = parse_range("")
        assert parsed.operator is RangeOperator.UNKNOWN
        assert parsed.boundary == ""

    def test_raw_preserved(self):
        assert parse_range("= 2.0.0").raw == "= 2.0.0"
