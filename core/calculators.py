from __future__ import annotations
import math
from typing import NamedTuple, Optional

from core.presets import RATE_SOLVER


def nz(x, default=0.0):
    """Return a float for ``x`` or a fallback value.

    Uploaded borrower files often carry blank cells that arrive as ``None``
    or ``NaN``.  This helper mirrors the spreadsheet ``NZ()`` function and
    keeps later math from breaking when a value is missing.
    """

    try:
        if x is None or (isinstance(x, float) and math.isnan(x)):
            return default
        return float(x)
    except (TypeError, ValueError):
        return default


def monthly_payment(principal, annual_rate_pct, term_years=30):
    """Calculate the fully amortizing monthly payment for a fixed-rate loan.

    ``principal`` is the loan amount, ``annual_rate_pct`` is the nominal
    yearly rate (e.g. ``6.5`` for 6.5%) and ``term_years`` the amortization
    period.  A non-positive principal or rate returns ``0.0``, which callers
    treat as "not computable" rather than an error.
    """

    L = nz(principal)
    rate = nz(annual_rate_pct)
    if L <= 0 or rate <= 0:
        return 0.0
    r = rate / 100 / 12
    n = int(nz(term_years, 30) * 12)
    if n <= 0:
        return 0.0
    growth = (1 + r) ** n
    if growth == 1:
        # rate too small to register in float math
        return L / n
    return L * (r * growth) / (growth - 1)


class RateEstimate(NamedTuple):
    rate: float
    iterations: int
    converged: bool


def solve_rate_from_payment(principal, payment, term_years=30) -> RateEstimate:
    """Walk the annual rate toward the one that reproduces ``payment``.

    The search starts at 6% and moves a fixed 0.01 percentage points per
    iteration: down when the computed payment is too high, up when it is too
    low.  It stops as soon as the payment is within the tolerance or after the
    iteration cap, in which case the last rate reached is returned with
    ``converged=False``.
    """

    L = nz(principal)
    P = nz(payment)
    if L <= 0 or P <= 0:
        return RateEstimate(0.0, 0, False)

    rate = RATE_SOLVER["start_rate"]
    step = RATE_SOLVER["step"]
    for i in range(RATE_SOLVER["max_iterations"]):
        diff = monthly_payment(L, rate, term_years) - P
        if abs(diff) < RATE_SOLVER["tolerance"]:
            return RateEstimate(rate, i + 1, True)
        if diff > 0:
            rate -= step
        else:
            rate += step
        if rate <= 0:
            rate = RATE_SOLVER["floor_rate"]
    return RateEstimate(rate, RATE_SOLVER["max_iterations"], False)


def estimate_rate_from_payment(principal, payment, term_years=30):
    """Approximate the annual rate implied by a known monthly payment.

    Returns ``0.0`` when either input is non-positive.  The result is a best
    effort: see :func:`solve_rate_from_payment` for the convergence flag.
    """

    return solve_rate_from_payment(principal, payment, term_years).rate


def compute_ltv(property_value, loan_amount):
    """Compute loan‑to‑value percentage."""

    if nz(property_value) <= 0:
        return 0.0
    return 100.0 * nz(loan_amount) / nz(property_value)


def point_cost(loan_amount, points):
    """Dollar cost of ``points`` on ``loan_amount``; negative values are a credit."""

    return nz(loan_amount) * nz(points) / 100


def break_even_months(cost, payment_diff) -> Optional[float]:
    """Months of payment savings needed to recoup an up-front point cost.

    Only meaningful when the borrower pays points and the new payment is
    lower; every other combination returns ``None``.
    """

    cost = nz(cost)
    payment_diff = nz(payment_diff)
    if cost > 0 and payment_diff < 0:
        return abs(cost / payment_diff)
    return None
