from __future__ import annotations
from typing import Literal, List, Dict, Any
from pydantic import BaseModel, Field

from core.models import PricingResult, ScenarioInputs

HIGH_LTV_PCT = 97.0


class RuleResult(BaseModel):
    code: str
    severity: Literal["info", "warn", "critical"]
    message: str
    context: Dict[str, Any] = Field(default_factory=dict)


def evaluate_result_rules(result: PricingResult, scenario: ScenarioInputs) -> List[RuleResult]:
    res: List[RuleResult] = []

    if result.loan_amount <= 0 or result.property_value <= 0:
        res.append(
            RuleResult(
                code="MISSING_LOAN_DATA",
                severity="critical",
                message="Loan amount or property value is missing; LTV and point cost cannot be priced.",
                context={"loan_amount": result.loan_amount, "property_value": result.property_value},
            )
        )

    threshold = int(scenario.break_even_threshold)
    if result.break_even_months is not None and result.break_even_months < threshold:
        res.append(
            RuleResult(
                code="BREAK_EVEN_WITHIN_THRESHOLD",
                severity="info",
                message="Point cost is recouped within the break-even threshold.",
                context={"months": result.break_even_months, "threshold": threshold},
            )
        )

    if result.payment_diff > 0:
        res.append(
            RuleResult(
                code="PAYMENT_INCREASE",
                severity="warn",
                message="New payment is higher than the current payment.",
                context={"payment_diff": result.payment_diff},
            )
        )

    if result.current_payment <= 0:
        res.append(
            RuleResult(
                code="NO_CURRENT_PAYMENT",
                severity="warn",
                message="No current payment on file; current rate could not be estimated.",
            )
        )
    elif not result.current_rate_converged:
        res.append(
            RuleResult(
                code="RATE_ESTIMATE_NOT_CONVERGED",
                severity="info",
                message="Current rate is an approximation; the estimate did not converge.",
                context={"current_rate": result.current_rate},
            )
        )

    if result.ltv > HIGH_LTV_PCT:
        res.append(
            RuleResult(
                code="HIGH_LTV",
                severity="warn",
                message="LTV exceeds 97%; confirm program eligibility.",
                context={"ltv": result.ltv},
            )
        )

    return res


def highlight_break_even(result: PricingResult, scenario: ScenarioInputs) -> bool:
    return any(r.code == "BREAK_EVEN_WITHIN_THRESHOLD" for r in evaluate_result_rules(result, scenario))


def has_blocking(res: List[RuleResult]) -> bool:
    return any(r.severity == "critical" for r in res)
