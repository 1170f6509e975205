import pandas as pd
import pytest

from sales_lens.utils import (
    clean_text, format_date, match_key, parse_date, parse_dates, round_half_away, to_number,
)


class TestText:

    def test_clean_text_trims(self):
        assert clean_text("  Georgia ") == "Georgia"

    @pytest.mark.parametrize("value", [None, "", "   ", 42, ["Georgia"]])
    def test_clean_text_absent(self, value):
        assert clean_text(value) is None

    def test_match_key_ignores_case_and_whitespace(self):
        assert match_key(" georgia ") == match_key("Georgia") == "georgia"

    def test_match_key_blank(self):
        assert match_key("  ") is None


class TestNumbers:

    @pytest.mark.parametrize("value,expected", [
        (12, 12.0),
        (12.5, 12.5),
        ("12.5", 12.5),
        (None, 0.0),
        ("abc", 0.0),
        (True, 0.0),
        (float('nan'), 0.0),
    ])
    def test_to_number(self, value, expected):
        assert to_number(value) == expected

    def test_round_half_away_from_zero(self):
        assert round_half_away(0.125) == 0.13
        assert round_half_away(-0.125) == -0.13
        assert round_half_away(12.5, 0) == 13
        assert round_half_away(17.499999999) == 17.5

    def test_round_never_returns_negative_zero(self):
        assert str(round_half_away(-0.001)) == '0.0'


class TestDates:

    def test_us_and_iso_formats(self):
        assert parse_date("11/8/2016") == pd.Timestamp("2016-11-08")
        assert parse_date("2016-11-08") == pd.Timestamp("2016-11-08")

    def test_time_component_dropped(self):
        assert parse_date("2016-11-08 17:45:00") == pd.Timestamp("2016-11-08")

    def test_offset_converted_to_utc_date(self):
        assert parse_date("2016-11-08T23:30:00-05:00") == pd.Timestamp("2016-11-09")

    @pytest.mark.parametrize("value", ["not a date", "", None, 20160101])
    def test_unparseable(self, value):
        assert parse_date(value) is None

    def test_parse_dates_keeps_alignment(self):
        parsed = parse_dates(["2016-01-05", None, "bad", "2/1/2016"])
        assert len(parsed) == 4
        assert parsed.isna().tolist() == [False, True, True, False]
        assert format_date(parsed.iloc[3]) == "2016-02-01"

    def test_parse_dates_empty(self):
        assert len(parse_dates([])) == 0
