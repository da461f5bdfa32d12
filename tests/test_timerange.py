"""Tests for hour ranges and UTC offsets."""

import math
from datetime import datetime, timedelta, timezone

import pytest

from globalsync.core.timerange import (
    ALL_TIMEZONES,
    TimeRange,
    detect_local_timezone,
    format_offset,
    format_timezone_display,
    is_hour_in_range,
    is_offset_label,
    is_time_in_range,
    local_time,
    migrate_timezone,
    normalize_hour,
    parse_offset,
    timezone_info,
)


class TestParseOffset:
    @pytest.mark.parametrize(
        "text, expected",
        [
            ("UTC+0", 0.0),
            ("UTC-8", -8.0),
            ("UTC+5.5", 5.5),
            ("UTC+5.75", 5.75),
            ("GMT+9", 9.0),
            ("GMT-3.5", -3.5),
            ("Team (UTC+2)", 2.0),
        ],
    )
    def test_valid_labels(self, text, expected):
        assert parse_offset(text) == expected

    @pytest.mark.parametrize("text", ["", "EST", "America/Toronto", "UTC", "UTC 5"])
    def test_unrecognized_returns_zero(self, text):
        assert parse_offset(text) == 0.0

    def test_non_string_returns_zero(self):
        assert parse_offset(None) == 0.0

    def test_is_offset_label(self):
        assert is_offset_label("UTC+5.5") is True
        assert is_offset_label("GMT-8") is True
        assert is_offset_label("PST") is False


class TestFormatOffset:
    def test_whole_hours(self):
        assert format_offset(0) == "UTC+0"
        assert format_offset(-8) == "UTC-8"
        assert format_offset(9.0) == "UTC+9"

    def test_fractional(self):
        assert format_offset(5.5) == "UTC+5.5"
        assert format_offset(5.75) == "UTC+5.75"
        assert format_offset(-3.5) == "UTC-3.5"

    def test_roundtrip_with_parse(self):
        for label in ALL_TIMEZONES:
            assert format_offset(parse_offset(label)) == label


class TestMigrateTimezone:
    def test_gmt_prefix_rewritten(self):
        assert migrate_timezone("GMT+5") == "UTC+5"
        assert migrate_timezone("GMT-3.5") == "UTC-3.5"

    def test_utc_untouched(self):
        assert migrate_timezone("UTC+1") == "UTC+1"


class TestNormalizeHour:
    def test_wraps_negative(self):
        assert normalize_hour(-3) == 21

    def test_wraps_past_24(self):
        assert normalize_hour(26) == 2
        assert normalize_hour(50) == 2

    def test_keeps_fraction(self):
        assert normalize_hour(20 + 5.5) == 1.5
        assert normalize_hour(2 - 4.5) == 21.5


class TestTimeRange:
    def test_parse(self):
        r = TimeRange.parse("9-17")
        assert (r.start, r.end) == (9, 17)
        assert r.wraps is False
        assert r.valid is True

    def test_parse_wrapping(self):
        r = TimeRange.parse("23-7")
        assert r.wraps is True

    def test_parse_empty(self):
        assert TimeRange.parse("") is None

    def test_parse_missing_separator(self):
        r = TimeRange.parse("9")
        assert r.start == 9
        assert math.isnan(r.end)
        assert r.valid is False

    def test_parse_leading_digits(self):
        r = TimeRange.parse("9am-5pm")
        assert (r.start, r.end) == (9, 5)

    def test_parse_non_numeric(self):
        r = TimeRange.parse("nine-five")
        assert math.isnan(r.start)
        assert math.isnan(r.end)


class TestIsHourInRange:
    def test_regular_range_half_open(self):
        assert is_hour_in_range(9, "9-17") is True
        assert is_hour_in_range(16, "9-17") is True
        assert is_hour_in_range(17, "9-17") is False
        assert is_hour_in_range(8, "9-17") is False

    def test_wraparound(self):
        for hour in (23, 0, 6):
            assert is_hour_in_range(hour, "23-7") is True
        for hour in (7, 12, 22):
            assert is_hour_in_range(hour, "23-7") is False

    def test_empty_range_matches_nothing(self):
        assert all(not is_hour_in_range(h, "") for h in range(24))
        assert is_hour_in_range(3, None) is False

    def test_full_day(self):
        assert all(is_hour_in_range(h, "0-24") for h in range(24))

    def test_malformed_never_matches(self):
        for text in ("garbage", "9", "-", "x-7", "9-y"):
            assert all(not is_hour_in_range(h, text) for h in range(24)), text

    def test_fractional_hour_against_integer_bounds(self):
        assert is_hour_in_range(1.5, "1-2") is True
        assert is_hour_in_range(1.5, "2-3") is False
        assert is_hour_in_range(22.5, "23-7") is False
        assert is_hour_in_range(6.5, "23-7") is True

    def test_accepts_parsed_range(self):
        assert is_hour_in_range(10, TimeRange.parse("9-17")) is True


class TestIsTimeInRange:
    def test_uses_hour_of_day(self):
        assert is_time_in_range(datetime(2025, 1, 15, 9, 59), "9-17") is True
        assert is_time_in_range(datetime(2025, 1, 15, 17, 0), "9-17") is False
        assert is_time_in_range(datetime(2025, 1, 15, 2, 30), "23-7") is True


class TestLocalTime:
    def test_negative_offset(self):
        now = datetime(2025, 1, 15, 17, 0, tzinfo=timezone.utc)
        assert local_time("UTC-8", now) == datetime(2025, 1, 15, 9, 0)

    def test_fractional_offset_crosses_midnight(self):
        now = datetime(2025, 1, 15, 20, 0, tzinfo=timezone.utc)
        assert local_time("UTC+5.5", now) == datetime(2025, 1, 16, 1, 30)

    def test_numeric_offset(self):
        now = datetime(2025, 1, 15, 12, 0, tzinfo=timezone.utc)
        assert local_time(3, now).hour == 15

    def test_naive_now_treated_as_utc(self):
        assert local_time("UTC+1", datetime(2025, 1, 15, 12, 0)).hour == 13

    def test_unparsable_label_is_utc(self):
        now = datetime(2025, 1, 15, 12, 0, tzinfo=timezone.utc)
        assert local_time("Somewhere", now).hour == 12


class TestDetectLocalTimezone:
    def test_uses_offset_of_given_time(self):
        tz = timezone(timedelta(hours=5, minutes=30))
        assert detect_local_timezone(datetime(2025, 1, 15, tzinfo=tz)) == "UTC+5.5"

    def test_negative(self):
        tz = timezone(timedelta(hours=-8))
        assert detect_local_timezone(datetime(2025, 1, 15, tzinfo=tz)) == "UTC-8"


class TestTimezoneCatalogue:
    def test_covers_full_offset_range(self):
        assert ALL_TIMEZONES[0] == "UTC-12"
        assert ALL_TIMEZONES[-1] == "UTC+14"
        assert "UTC+5.75" in ALL_TIMEZONES

    def test_info_accepts_gmt_prefix(self):
        assert timezone_info("GMT+9").abbreviations[0] == "JST"

    def test_unknown_label(self):
        info = timezone_info("UTC+99")
        assert info.abbreviations == ()
        assert info.cities == ()

    def test_display(self):
        assert format_timezone_display("UTC+5.5") == "UTC+5.5 (IST/Mumbai)"
        assert format_timezone_display("UTC+99") == "UTC+99"
