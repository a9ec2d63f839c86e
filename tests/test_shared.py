from datetime import date, datetime, time, timezone

import pytest

from physioclinic.shared.timeutils import (
    day_range,
    parse_range_bound,
    parse_timestamp,
    to_wire,
    week_range,
)
from physioclinic.shared.validators import validate_br_phone, validate_email, validate_required_text


class TestTimestamps:
    def test_naive_timestamp_is_kept_as_is(self):
        assert parse_timestamp("2024-06-03T08:00:00") == datetime(2024, 6, 3, 8, 0)

    def test_utc_timestamp_is_converted_to_clinic_time(self):
        assert parse_timestamp("2024-06-03T11:00:00Z") == datetime(2024, 6, 3, 8, 0)
        aware = datetime(2024, 6, 3, 11, 0, tzinfo=timezone.utc)
        assert parse_timestamp(aware) == datetime(2024, 6, 3, 8, 0)

    def test_sub_second_precision_is_dropped(self):
        assert parse_timestamp("2024-06-03T08:00:00.750") == datetime(2024, 6, 3, 8, 0)
        assert parse_timestamp(datetime(2024, 6, 3, 8, 0, 0, 1)) == datetime(2024, 6, 3, 8, 0)

    def test_garbage_raises_value_error(self):
        with pytest.raises(ValueError):
            parse_timestamp("next tuesday")
        with pytest.raises(ValueError):
            parse_timestamp("")

    def test_date_only_bounds_cover_the_whole_day(self):
        assert parse_range_bound("2024-06-03") == datetime(2024, 6, 3, 0, 0)
        assert parse_range_bound("2024-06-03", end=True) == datetime.combine(date(2024, 6, 3), time.max)
        assert parse_range_bound("2024-06-03T10:30:00", end=True) == datetime(2024, 6, 3, 10, 30)

    def test_wire_format_has_no_offset(self):
        assert to_wire(datetime(2024, 6, 3, 8, 0, 0, 500)) == "2024-06-03T08:00:00"
        assert to_wire(None) is None

    def test_week_runs_monday_to_sunday(self):
        start, end = week_range(date(2024, 6, 5))
        assert start == datetime(2024, 6, 3, 0, 0)
        assert end.date() == date(2024, 6, 9)

        sunday_start, _ = week_range(date(2024, 6, 9))
        assert sunday_start == start

    def test_day_range(self):
        start, end = day_range(date(2024, 6, 3))
        assert start == datetime(2024, 6, 3)
        assert end == datetime.combine(date(2024, 6, 3), time.max)


class TestValidators:
    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("11987654321", "(11) 98765-4321"),
            ("(11) 98765-4321", "(11) 98765-4321"),
            ("+55 11 98765-4321", "(11) 98765-4321"),
            ("1134567890", "(11) 3456-7890"),
        ],
    )
    def test_phone_is_normalized(self, raw, expected):
        assert validate_br_phone(raw) == expected

    @pytest.mark.parametrize("raw", ["123", "119876543210000", "abc"])
    def test_invalid_phone(self, raw):
        with pytest.raises(ValueError):
            validate_br_phone(raw)

    def test_email_is_lowercased(self):
        assert validate_email("  Maria@Email.COM ") == "maria@email.com"

    def test_invalid_email(self):
        with pytest.raises(ValueError):
            validate_email("maria@")

    def test_required_text(self):
        assert validate_required_text("  Maria ", "nome") == "Maria"
        with pytest.raises(ValueError, match="nome is required"):
            validate_required_text("  ", "nome")
