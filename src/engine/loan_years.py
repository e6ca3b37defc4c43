"""Group an amortization schedule into 12-payment loan years."""

from decimal import Decimal

from src.engine.dates import format_month_year
from src.models.results import AmortizationRow, LoanYearGroup, LoanYearTotals


def group_by_loan_year(
    schedule: tuple[AmortizationRow, ...],
    monthly_taxes_costs: Decimal,
    loan_amount: Decimal,
) -> list[LoanYearGroup]:
    """Aggregate rows 1-12, 13-24, ... with subtotals.

    Loan years are independent of calendar years. Principal totals include
    extra principal; total payment includes taxes/costs.
    """
    groups: list[LoanYearGroup] = []
    prior_balance = loan_amount

    for row in schedule:
        label = format_month_year(row.month_index, row.year)
        if not groups or groups[-1].loan_year != row.loan_year:
            groups.append(LoanYearGroup(
                loan_year=row.loan_year,
                start_label=label,
                end_label=label,
                start_balance=prior_balance,
                end_balance=row.balance,
            ))

        group = groups[-1]
        group.end_label = label
        group.end_balance = row.balance
        group.rows.append(row)

        totals: LoanYearTotals = group.totals
        totals.pi += row.payment_pi
        totals.extra += row.extra_principal
        totals.interest += row.interest
        totals.principal += row.principal + row.extra_principal
        totals.taxes_costs += monthly_taxes_costs
        totals.total_payment += row.total_to_lender + monthly_taxes_costs

        prior_balance = row.balance

    return groups
