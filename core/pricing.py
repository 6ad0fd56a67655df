"""Per-borrower refinance pricing and batch runs."""
from __future__ import annotations
import copy
import time
from concurrent.futures import ThreadPoolExecutor
from typing import Dict, Iterable, List, Optional

from core.calculators import (
    break_even_months,
    monthly_payment,
    point_cost,
    solve_rate_from_payment,
)
from core.config import get_settings
from core.llpa import evaluate_adjustments
from core.logging_utils import get_logger
from core.models import AdjustmentMatrix, BorrowerRecord, PricingResult, ScenarioInputs

logger = get_logger(__name__)


def price_borrower(
    borrower: BorrowerRecord,
    scenario: ScenarioInputs,
    matrix: AdjustmentMatrix,
    term_years: int = 30,
) -> PricingResult:
    """Price a refinance for one borrower.

    Points move the cash due at closing, not the quoted rate: the new payment
    is always computed at ``scenario.base_rate``.
    """

    adj = evaluate_adjustments(borrower, scenario, matrix)
    final_points = scenario.starting_points + adj.total
    cost = point_cost(borrower.loan_amount, final_points)
    adjusted_rate = scenario.base_rate

    current = solve_rate_from_payment(borrower.loan_amount, borrower.current_payment, term_years)
    new_payment = monthly_payment(borrower.loan_amount, adjusted_rate, term_years)
    payment_diff = new_payment - borrower.current_payment
    logger.debug(
        "priced borrower",
        extra={
            "context": {
                "client": borrower.client_name,
                "adjustments": len(adj.line_items),
                "final_points": final_points,
                "rate_converged": current.converged,
            }
        },
    )

    return PricingResult(
        client_name=borrower.client_name,
        property_value=borrower.property_value,
        loan_amount=borrower.loan_amount,
        income=borrower.income,
        zip_code=borrower.zip_code,
        credit_score=borrower.credit_score,
        current_loan_program=borrower.loan_program,
        ltv=adj.ltv,
        current_rate=current.rate,
        current_rate_converged=current.converged,
        current_payment=borrower.current_payment,
        adjusted_rate=adjusted_rate,
        new_payment=new_payment,
        payment_diff=payment_diff,
        total_adjustments=adj.total,
        final_points=final_points,
        point_cost=cost,
        break_even_months=break_even_months(cost, payment_diff),
        adjustments=adj.line_items,
    )


def price_batch(
    borrowers: Iterable[BorrowerRecord],
    scenario: ScenarioInputs,
    matrix: AdjustmentMatrix,
    max_workers: Optional[int] = None,
) -> List[PricingResult]:
    """Price every borrower against one snapshot of ``matrix``.

    Results keep the input order.  With ``max_workers`` above one the
    borrowers are fanned out over a thread pool.
    """

    settings = get_settings()
    workers = settings.max_workers if max_workers is None else max_workers
    snapshot = copy.deepcopy(matrix)
    borrowers = list(borrowers)
    started = time.perf_counter()

    def _price(b: BorrowerRecord) -> PricingResult:
        return price_borrower(b, scenario, snapshot, settings.term_years)

    if workers > 1 and len(borrowers) > 1:
        with ThreadPoolExecutor(max_workers=workers) as ex:
            results = list(ex.map(_price, borrowers))
    else:
        results = [_price(b) for b in borrowers]

    logger.info(
        "priced batch",
        extra={
            "context": {
                "borrowers": len(results),
                "workers": workers,
                "duration_ms": round((time.perf_counter() - started) * 1000, 2),
            }
        },
    )
    return results


def summarize_results(results: List[PricingResult]) -> Dict[str, float]:
    """Headline numbers for a priced batch."""

    total = len(results)
    if total == 0:
        return {
            "total_loans": 0,
            "loans_saving": 0,
            "total_volume": 0.0,
            "avg_adjustment": 0.0,
            "avg_payment_change": 0.0,
        }
    return {
        "total_loans": total,
        "loans_saving": sum(1 for r in results if r.payment_diff < 0),
        "total_volume": sum(r.loan_amount for r in results),
        "avg_adjustment": sum(r.total_adjustments for r in results) / total,
        "avg_payment_change": sum(r.payment_diff for r in results) / total,
    }
