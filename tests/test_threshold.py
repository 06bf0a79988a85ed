"""Tests for stalebranch.policy.threshold: parsing, units, round trips."""

import pytest

from stalebranch.policy.threshold import (
    DISABLED,
    Threshold,
    ThresholdConfigError,
    TimeUnit,
)


# ── TimeUnit ────────────────────────────────────────────────────────


class TestTimeUnit:
    def test_to_millis(self):
        assert TimeUnit.DAYS.to_millis(3) == 3 * 86_400_000
        assert TimeUnit.HOURS.to_millis(2) == 7_200_000
        assert TimeUnit.MILLISECONDS.to_millis(5) == 5

    def test_convert_truncates(self):
        # 36 hours is one whole day
        assert TimeUnit.DAYS.convert(36, TimeUnit.HOURS) == 1
        assert TimeUnit.SECONDS.convert(1_999, TimeUnit.MILLISECONDS) == 1

    def test_convert_truncates_toward_zero_for_negatives(self):
        assert TimeUnit.SECONDS.convert(-1_500, TimeUnit.MILLISECONDS) == -1

    def test_convert_to_smaller_unit(self):
        assert TimeUnit.MINUTES.convert(2, TimeUnit.HOURS) == 120


# ── Threshold.from_days ─────────────────────────────────────────────


class TestFromDays:
    def test_none_is_disabled(self):
        t = Threshold.from_days(None)
        assert not t.enabled
        assert t.millis == DISABLED

    @pytest.mark.parametrize("text", ["", "   ", "\t"])
    def test_blank_is_disabled(self, text):
        assert not Threshold.from_days(text).enabled

    def test_integer_days(self):
        t = Threshold.from_days("7")
        assert t.enabled
        assert t.millis == 7 * 86_400_000

    def test_zero_days_is_enabled(self):
        t = Threshold.from_days("0")
        assert t.enabled
        assert t.millis == 0

    def test_negative_days_disabled(self):
        assert not Threshold.from_days("-3").enabled

    def test_surrounding_whitespace_tolerated(self):
        assert Threshold.from_days(" 5 ").millis == 5 * 86_400_000

    @pytest.mark.parametrize("text", ["seven", "1.5", "7d", "1_000", "--1"])
    def test_non_integer_raises(self, text):
        with pytest.raises(ThresholdConfigError) as exc_info:
            Threshold.from_days(text)
        assert exc_info.value.value == text

    def test_config_error_is_value_error(self):
        with pytest.raises(ValueError):
            Threshold.from_days("abc")

    @pytest.mark.parametrize(
        "text", ["9223372036854775808", "99999999999999999999", "-9223372036854775809"]
    )
    def test_out_of_64_bit_range_raises(self, text):
        with pytest.raises(ThresholdConfigError):
            Threshold.from_days(text)

    def test_64_bit_bounds_accepted(self):
        assert Threshold.from_days("9223372036854775807").enabled
        assert not Threshold.from_days("-9223372036854775808").enabled


# ── Threshold.of ────────────────────────────────────────────────────


class TestOf:
    def test_none_amount_disabled(self):
        assert not Threshold.of(TimeUnit.DAYS, None).enabled

    def test_negative_amount_disabled(self):
        t = Threshold.of(TimeUnit.HOURS, -1)
        assert not t.enabled
        assert t.millis == DISABLED

    def test_amount_in_unit(self):
        assert Threshold.of(TimeUnit.HOURS, 12).millis == 12 * 3_600_000

    def test_float_amount_truncated(self):
        assert Threshold.of(TimeUnit.SECONDS, 2.9).millis == 2_000


# ── Accessors ───────────────────────────────────────────────────────


class TestAccessors:
    def test_days_round_trip(self):
        for days in ("0", "1", "7", "365"):
            assert Threshold.from_days(days).days == days

    def test_disabled_days_is_empty_string(self):
        assert Threshold.from_days("").days == ""

    def test_disabled_in_unit_is_none(self):
        assert Threshold.from_days("").in_unit(TimeUnit.HOURS) is None

    def test_in_unit(self):
        t = Threshold.from_days("2")
        assert t.in_unit(TimeUnit.HOURS) == 48
        assert t.in_unit(TimeUnit.DAYS) == 2

    def test_partial_days_truncate(self):
        assert Threshold.of(TimeUnit.HOURS, 30).days == "1"

    def test_frozen(self):
        t = Threshold.from_days("1")
        with pytest.raises(Exception):
            t.millis = 5
