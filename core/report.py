"""Display and export shaping for priced batches."""
from __future__ import annotations
import math
from typing import List, Optional

import pandas as pd

from core.models import PricingResult

EXPORT_COLUMNS = [
    "Client Name",
    "Property Value",
    "Loan Amount",
    "Income",
    "Zip Code",
    "Credit Score",
    "Current Loan Program",
    "LTV",
    "Current Rate",
    "Current Payment",
    "New Rate",
    "New Payment",
    "Payment Change",
    "Total Adjustments",
    "Final Points",
    "Point Cost",
]

SORTABLE_COLUMNS = [
    "client_name",
    "property_value",
    "loan_amount",
    "income",
    "credit_score",
    "ltv",
    "current_rate",
    "new_payment",
    "payment_diff",
    "point_cost",
    "total_adjustments",
    "break_even_months",
]


def _missing(n) -> bool:
    return n is None or (isinstance(n, float) and math.isnan(n))


def fmt_money(n) -> str:
    if _missing(n):
        return "$0"
    prefix = "-$" if n < 0 else "$"
    return f"{prefix}{abs(n):,.0f}"


def fmt_percent(n, decimals: int = 3) -> str:
    if _missing(n):
        return f"{0:.{decimals}f}%"
    return f"{n:.{decimals}f}%"


def fmt_points(n) -> str:
    if _missing(n):
        return "0.000"
    return f"{n:.3f}"


def filter_results(results: List[PricingResult], query: str = "") -> List[PricingResult]:
    """Results whose client name contains ``query`` (case-insensitive)."""
    q = (query or "").strip().lower()
    if not q:
        return list(results)
    return [r for r in results if q in r.client_name.lower()]


def sort_results(
    results: List[PricingResult], column: Optional[str] = None, descending: bool = False
) -> List[PricingResult]:
    """Sort by any result field; text sorts case-insensitively, missing values last."""
    if not column:
        return list(results)

    present = [r for r in results if getattr(r, column, None) is not None]
    absent = [r for r in results if getattr(r, column, None) is None]

    def key(r):
        v = getattr(r, column)
        return v.lower() if isinstance(v, str) else v

    return sorted(present, key=key, reverse=descending) + absent


def results_frame(results: List[PricingResult]) -> pd.DataFrame:
    """One row per borrower with raw numeric values, for on-screen tables."""
    cols = [f for f in PricingResult.model_fields if f != "adjustments"]
    rows = [r.model_dump(exclude={"adjustments"}) for r in results]
    return pd.DataFrame(rows, columns=cols)


def breakdown_frame(result: PricingResult) -> pd.DataFrame:
    return pd.DataFrame(
        [{"Adjustment": a.name, "Points": a.points, "Reason": a.reason} for a in result.adjustments],
        columns=["Adjustment", "Points", "Reason"],
    )


def export_frame(results: List[PricingResult]) -> pd.DataFrame:
    """Rows in export layout: currency to 2 places, rates and points to 3."""
    rows = [
        {
            "Client Name": r.client_name,
            "Property Value": r.property_value,
            "Loan Amount": r.loan_amount,
            "Income": r.income,
            "Zip Code": r.zip_code or "",
            "Credit Score": r.credit_score,
            "Current Loan Program": r.current_loan_program or "",
            "LTV": f"{r.ltv:.2f}%",
            "Current Rate": f"{r.current_rate:.3f}%",
            "Current Payment": f"{r.current_payment:.2f}",
            "New Rate": f"{r.adjusted_rate:.3f}%",
            "New Payment": f"{r.new_payment:.2f}",
            "Payment Change": f"{r.payment_diff:.2f}",
            "Total Adjustments": f"{r.total_adjustments:.3f}",
            "Final Points": f"{r.final_points:.3f}",
            "Point Cost": f"{r.point_cost:.2f}",
        }
        for r in results
    ]
    return pd.DataFrame(rows, columns=EXPORT_COLUMNS)
