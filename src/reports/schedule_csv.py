"""CSV export of an amortization schedule: one line per payment."""

import csv
import io
from decimal import Decimal, ROUND_HALF_UP

from src.engine.dates import format_month_year
from src.models.results import AmortizationRow

TWO_PLACES = Decimal("0.01")

HEADER = [
    "LoanYear",
    "PaymentNumber",
    "Date",
    "TotalPayment",
    "PI",
    "ExtraPrincipal",
    "TaxesCosts",
    "Interest",
    "PrincipalPaid",
    "Balance",
]


def money(value: Decimal) -> str:
    """Two-decimal fixed format; non-finite values become "0.00"."""
    if not isinstance(value, Decimal):
        value = Decimal(str(value))
    if not value.is_finite():
        return "0.00"
    return str(value.quantize(TWO_PLACES, ROUND_HALF_UP))


def create_schedule_csv(rows: tuple[AmortizationRow, ...], monthly_taxes_costs: Decimal) -> str:
    buf = io.StringIO()
    # Lines are CRLF-separated with no terminator after the last one
    writer = csv.writer(buf)
    writer.writerow(HEADER)
    for r in rows:
        writer.writerow([
            r.loan_year,
            r.index,
            format_month_year(r.month_index, r.year),
            money(r.total_to_lender + monthly_taxes_costs),
            money(r.payment_pi),
            money(r.extra_principal),
            money(monthly_taxes_costs),
            money(r.interest),
            money(r.principal + r.extra_principal),
            money(r.balance),
        ])
    return buf.getvalue().removesuffix("\r\n")
