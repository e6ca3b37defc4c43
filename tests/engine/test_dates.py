from src.engine.dates import (
    absolute_month,
    add_months,
    clamp_month_index,
    format_month_year,
    from_absolute,
    month_short_name,
)


class TestMonthArithmetic:
    def test_round_trip(self):
        assert from_absolute(absolute_month(7, 2031)) == (7, 2031)

    def test_add_months_rolls_year(self):
        assert add_months(10, 2024, 3) == (1, 2025)
        assert add_months(0, 2024, 359) == (11, 2053)

    def test_add_negative_months(self):
        assert add_months(0, 2024, -1) == (11, 2023)

    def test_clamp_month_index(self):
        assert clamp_month_index(-4) == 0
        assert clamp_month_index(15) == 11


class TestLabels:
    def test_month_short_name(self):
        assert month_short_name(0) == "Jan"
        assert month_short_name(11) == "Dec"
        assert month_short_name(12) == ""

    def test_format_month_year(self):
        assert format_month_year(5, 2027) == "Jun 2027"
