"""Tests for birth date and time parsing."""

from datetime import date

import pytest

from cosmic_wealth_mcp.utils.date_parsing import (
    InvalidBirthDateError,
    day_of_year,
    parse_birth_date,
    parse_birth_time,
)


class TestParseBirthDate:

    def test_iso(self):
        assert parse_birth_date("1990-05-15") == date(1990, 5, 15)

    def test_strips_whitespace(self):
        assert parse_birth_date("  1990-05-15 ") == date(1990, 5, 15)

    def test_day_first(self):
        assert parse_birth_date("15/05/1990") == date(1990, 5, 15)

    def test_ambiguous_slash_date_is_day_first(self):
        assert parse_birth_date("03/04/1990") == date(1990, 4, 3)

    def test_month_first_when_day_first_impossible(self):
        assert parse_birth_date("05/15/1990") == date(1990, 5, 15)

    @pytest.mark.parametrize("bad", [
        "",
        "   ",
        "yesterday",
        "31/02/2020",
        "1/2",
        "aa/bb/cccc",
        "1990-02-30",
    ])
    def test_invalid(self, bad):
        with pytest.raises(InvalidBirthDateError, match="Invalid birth date"):
            parse_birth_date(bad)

    def test_error_is_a_value_error(self):
        with pytest.raises(ValueError):
            parse_birth_date("nope")


class TestParseBirthTime:

    @pytest.mark.parametrize("text,expected", [
        ("14:30", (14, 30)),
        ("14:30:59", (14, 30)),
        ("14.30", (14, 30)),
        ("1430", (14, 30)),
        ("0905", (9, 5)),
        ("9", (9, 0)),
        ("00:00", (0, 0)),
        ("23:59", (23, 59)),
    ])
    def test_accepted_forms(self, text, expected):
        assert parse_birth_time(text) == expected

    @pytest.mark.parametrize("text", [None, "", "24:00", "12:60", "143", "noon", "12:", "ab:cd", "²:30", "1²30"])
    def test_rejected_forms(self, text):
        assert parse_birth_time(text) is None


class TestDayOfYear:

    def test_first_and_last(self):
        assert day_of_year(date(1993, 1, 1)) == 1
        assert day_of_year(date(1993, 12, 30)) == 364
        assert day_of_year(date(2024, 12, 31)) == 366
