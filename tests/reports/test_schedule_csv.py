from dataclasses import replace
from decimal import Decimal

from src.engine.mortgage import calculate_mortgage
from src.reports.schedule_csv import HEADER, create_schedule_csv, money


class TestMoney:
    def test_two_places_half_up(self):
        assert money(Decimal("1.005")) == "1.01"
        assert money(Decimal("1438.9155")) == "1438.92"
        assert money(Decimal("0")) == "0.00"

    def test_non_finite(self):
        assert money(Decimal("NaN")) == "0.00"
        assert money(Decimal("Infinity")) == "0.00"


class TestCreateScheduleCsv:
    def test_header_and_row_count(self, canonical_calculation):
        content = create_schedule_csv(canonical_calculation.schedule, Decimal("0"))
        lines = content.split("\r\n")
        assert lines[0] == ",".join(HEADER)
        # Header + 360 payments, no terminator after the last row
        assert len(lines) == 361
        assert lines[-1].startswith("30,360,Dec 2053,")
        assert not content.endswith("\r\n")

    def test_first_row(self, canonical_calculation):
        lines = create_schedule_csv(canonical_calculation.schedule, Decimal("0")).split("\r\n")
        assert lines[1] == "1,1,Jan 2024,1438.92,1438.92,0.00,0.00,1200.00,238.92,239761.08"

    def test_taxes_and_extras(self, canonical_inputs):
        calc = calculate_mortgage(replace(canonical_inputs, extra_monthly=Decimal("100")))
        lines = create_schedule_csv(calc.schedule, Decimal("475")).split("\r\n")
        fields = lines[1].split(",")
        assert fields[3] == "2013.92"  # 1438.92 + 100 + 475
        assert fields[5] == "100.00"
        assert fields[6] == "475.00"
        assert fields[8] == "338.92"

    def test_loan_year_column(self, canonical_calculation):
        lines = create_schedule_csv(canonical_calculation.schedule, Decimal("0")).split("\r\n")
        assert lines[12].startswith("1,12,Dec 2024,")
        assert lines[13].startswith("2,13,Jan 2025,")

    def test_empty_schedule(self):
        assert create_schedule_csv((), Decimal("0")) == ",".join(HEADER)
