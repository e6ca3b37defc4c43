"""CLI for the mortgage engine: prints a terminal report.

Usage:
    python -m src.cli --price 300000 --down 20 --rate 6 --term 30 --start 1/2024
    python -m src.cli --price 450000 --down 90000 --down-type amount --extra-monthly 250 --years
    python -m src.cli --price 300000 --rate 5.5 --arm 5/1 --arm-index-rate 7.5 --csv schedule.csv
    python -m src.cli --price 300000 --refi-at 60 --refi-rate 4.5 --refi-term 25 --refi-costs 4000
"""

import argparse
import logging
from dataclasses import replace
from decimal import Decimal
from pathlib import Path

from src.config import settings
from src.engine.arm import build_arm_preset
from src.engine.dates import format_month_year
from src.engine.input_parser import parse_mortgage_inputs
from src.engine.loan_years import group_by_loan_year
from src.engine.mortgage import calculate_mortgage
from src.engine.refinance import refinance_at_payment
from src.models.inputs import ArmPreset, DownPaymentType, InterestType, MortgageInputsRaw
from src.models.results import MortgageSummary, RefinanceResult
from src.reports.schedule_csv import create_schedule_csv

logger = logging.getLogger(__name__)


def _dollar(v) -> str:
    return f"${float(v):,.2f}"


def _duration(months: int) -> str:
    years, rem = divmod(months, 12)
    return f"{years}y {rem}m"


def _header(title: str) -> None:
    print(f"\n{'=' * 60}")
    print(f"  {title}")
    print(f"{'=' * 60}")


def month_year(text: str) -> tuple[int, str]:
    """Parse M/YYYY (1-based month) into (month_index, year text)."""
    month, _, year = text.partition("/")
    if not month.isdigit() or not 1 <= int(month) <= 12 or not year.isdigit():
        raise argparse.ArgumentTypeError(f"expected M/YYYY, got {text!r}")
    return int(month) - 1, year


def print_summary(summary: MortgageSummary) -> None:
    _header("Loan Summary")
    print(f"  Home Price:           {_dollar(summary.home_price)}")
    print(f"  Down Payment:         {_dollar(summary.down_payment_amount)} ({float(summary.down_payment_percent):.2f}%)")
    print(f"  Loan Amount:          {_dollar(summary.loan_amount)}")
    print(f"  Rate / Term:          {float(summary.annual_rate_percent):.3f}% / {summary.term_months} months")
    print(f"  Monthly P&I:          {_dollar(summary.scheduled_monthly_pi)}")
    if summary.monthly_taxes_costs:
        print(f"  Taxes & Costs:        {_dollar(summary.monthly_taxes_costs)}/mo")

    _header("Payoff")
    payoff = format_month_year(summary.payoff_month_index, summary.payoff_year)
    print(f"  Payoff Date:          {payoff} ({_duration(summary.months_to_payoff)})")
    print(f"  Total Interest:       {_dollar(summary.total_interest)}")
    print(f"  Total to Lender:      {_dollar(summary.total_to_lender)}")
    print(f"  Total Out of Pocket:  {_dollar(summary.total_out_of_pocket)}")
    if summary.months_saved or summary.interest_saved:
        print(f"  Interest Saved:       {_dollar(summary.interest_saved)}")
        print(f"  Time Saved:           {_duration(summary.months_saved)}")


def print_loan_years(groups) -> None:
    _header("Loan Years")
    print(f"  {'Year':>4}  {'Period':<19}  {'Interest':>12}  {'Principal':>12}  {'Balance':>13}")
    for g in groups:
        period = f"{g.start_label} - {g.end_label}"
        print(
            f"  {g.loan_year:>4}  {period:<19}  {_dollar(g.totals.interest):>12}"
            f"  {_dollar(g.totals.principal):>12}  {_dollar(g.end_balance):>13}"
        )


def print_refinance(result: RefinanceResult | None, payment_index: int) -> None:
    _header(f"Refinance After Payment {payment_index}")
    if result is None:
        print("  Nothing left to refinance at that payment.")
        return
    print(f"  Remaining Balance:    {_dollar(result.remaining_balance)}")
    print(f"  Current P&I:          {_dollar(result.old_monthly_pi)}")
    print(f"  New P&I:              {_dollar(result.new_monthly_pi)}")
    print(f"  Monthly Savings:      {_dollar(result.monthly_savings)}")
    if result.break_even_months is None:
        print("  Break-even:           never")
    else:
        print(f"  Break-even:           {result.break_even_months} months")
    print(f"  Net Savings:          {_dollar(result.total_savings_over_remaining_term)}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Mortgage amortization calculator")
    parser.add_argument("--price", required=True, help="Home price")
    parser.add_argument("--down", default="20", help="Down payment (default: 20)")
    parser.add_argument("--down-type", choices=["percent", "amount"], default="percent")
    parser.add_argument("--term", default="30", help="Loan term in years (default: 30)")
    parser.add_argument("--rate", default="6", help="Annual interest rate in percent (default: 6)")
    parser.add_argument("--start", type=month_year, default=None, help="First payment month as M/YYYY")

    parser.add_argument("--property-tax", default="", help="Annual property tax")
    parser.add_argument("--insurance", default="", help="Annual home insurance")
    parser.add_argument("--pmi", default="", help="Monthly PMI")
    parser.add_argument("--hoa", default="", help="Monthly HOA")

    parser.add_argument("--extra-monthly", default="", help="Extra principal every month")
    parser.add_argument("--extra-yearly", default="", help="Extra principal once a year")
    parser.add_argument("--extra-yearly-month", type=int, default=1, help="Month (1-12) for the yearly extra")
    parser.add_argument("--one-time", default="", help="One-time extra principal")
    parser.add_argument("--one-time-date", type=month_year, default=None, help="One-time extra date as M/YYYY")

    parser.add_argument("--arm", choices=[p.value for p in ArmPreset if p is not ArmPreset.CUSTOM])
    parser.add_argument("--arm-index-rate", default=None, help="Fully indexed ARM rate in percent")

    parser.add_argument("--years", action="store_true", help="Print loan-year subtotals")
    parser.add_argument("--csv", default=None, help="Write the schedule to this CSV file")

    parser.add_argument("--refi-at", type=int, default=None, help="Refinance after this payment number")
    parser.add_argument("--refi-rate", default="0", help="New rate in percent")
    parser.add_argument("--refi-term", type=int, default=30, help="New term in years")
    parser.add_argument("--refi-costs", default="0", help="Refinance closing costs")
    return parser


def main() -> None:
    logging.basicConfig(level=settings.log_level)
    parser = build_parser()
    args = parser.parse_args()

    start_month_index, start_year_raw = args.start or (0, "")
    one_time_month_index, one_time_year_raw = args.one_time_date or (start_month_index, start_year_raw)

    raw = MortgageInputsRaw(
        home_price_raw=args.price,
        down_payment_type=DownPaymentType(args.down_type),
        down_payment_raw=args.down,
        loan_term_years_raw=args.term,
        interest_rate_raw=args.rate,
        start_month_index=start_month_index,
        start_year_raw=start_year_raw,
        include_taxes_costs=any([args.property_tax, args.insurance, args.pmi, args.hoa]),
        property_tax_annual_raw=args.property_tax,
        home_insurance_annual_raw=args.insurance,
        pmi_monthly_raw=args.pmi,
        hoa_monthly_raw=args.hoa,
        extra_monthly_raw=args.extra_monthly,
        extra_monthly_start_year_raw=start_year_raw,
        extra_yearly_raw=args.extra_yearly,
        extra_yearly_month_index=min(11, max(0, args.extra_yearly_month - 1)),
        extra_yearly_start_year_raw=start_year_raw,
        extra_one_time_raw=args.one_time,
        extra_one_time_month_index=one_time_month_index,
        extra_one_time_year_raw=one_time_year_raw,
    )
    inputs = parse_mortgage_inputs(raw).inputs

    if args.arm:
        if args.arm_index_rate is None:
            parser.error("--arm-index-rate is required with --arm")
        changes = build_arm_preset(
            ArmPreset(args.arm),
            start_month_index=inputs.start_month_index,
            start_year=inputs.start_year,
            term_months=int(inputs.loan_term_years * 12),
            initial_rate_percent=inputs.interest_rate_annual_percent,
            fully_indexed_rate_percent=Decimal(args.arm_index_rate),
        )
        inputs = replace(
            inputs,
            interest_type=InterestType.ARM,
            arm_rate_changes=changes,
            arm_rate_changes_valid=True,
        )

    calc = calculate_mortgage(inputs, payoff_threshold=settings.payoff_threshold)
    print_summary(calc.summary)

    monthly_costs = calc.summary.monthly_taxes_costs if inputs.include_taxes_costs else Decimal("0")
    if args.years:
        print_loan_years(group_by_loan_year(calc.schedule, monthly_costs, calc.summary.loan_amount))

    if args.refi_at is not None:
        result = refinance_at_payment(
            calc,
            payment_index=args.refi_at,
            new_rate_annual_percent=Decimal(args.refi_rate),
            new_term_months=args.refi_term * 12,
            closing_costs=Decimal(args.refi_costs),
        )
        print_refinance(result, args.refi_at)

    if args.csv:
        path = Path(args.csv)
        path.write_text(create_schedule_csv(calc.schedule, monthly_costs), newline="")
        logger.info("Wrote %d payments to %s", len(calc.schedule), path)
    print()


if __name__ == "__main__":
    main()
