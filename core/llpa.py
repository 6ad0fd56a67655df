"""Loan-level price adjustment (LLPA) evaluation.

A borrower's attributes are looked up against the adjustment table of the
effective loan program.  Each category contributes a signed number of points;
unknown programs, buckets and categories contribute nothing.
"""
from __future__ import annotations
from typing import Callable, List, Mapping, NamedTuple

from core.calculators import compute_ltv, nz
from core.logging_utils import get_logger
from core.models import (
    AdjustmentLineItem,
    AdjustmentMatrix,
    AdjustmentResult,
    BorrowerRecord,
    ScenarioInputs,
)
from core.presets import LTV_TIERS, TOP_LTV_TIER

logger = get_logger(__name__)

DEFAULT_PROGRAM = "Conventional"


def ltv_tier(ltv) -> str:
    """Map an LTV percentage to its pricing tier label."""

    value = nz(ltv)
    for upper, label in LTV_TIERS:
        if value <= upper:
            return label
    return TOP_LTV_TIER


def lookup(table, key) -> float:
    """Points for ``key`` in ``table``; anything missing or malformed is ``0``."""

    if not isinstance(table, Mapping):
        return 0.0
    return nz(table.get(key), 0.0)


def effective_program(borrower: BorrowerRecord, scenario: ScenarioInputs) -> str:
    return scenario.new_loan_program or borrower.loan_program or DEFAULT_PROGRAM


def program_adjustments(matrix: AdjustmentMatrix, program: str) -> Mapping:
    """Adjustment table for ``program``, falling back to Conventional."""

    table = matrix.get(program)
    if table is None:
        logger.debug("unknown loan program, using %s", DEFAULT_PROGRAM, extra={"context": {"program": program}})
        table = matrix.get(DEFAULT_PROGRAM, {})
    return table


class PropertyTypeRule(NamedTuple):
    matches: Callable[[str], bool]
    key: str
    label: str
    reason: str


# Property type is free text; each rule that matches adds its adjustment,
# even when the configured value is zero.
PROPERTY_TYPE_RULES: List[PropertyTypeRule] = [
    PropertyTypeRule(lambda t: "condo" in t, "Condo", "Condo", "Condo property adjustment"),
    PropertyTypeRule(
        lambda t: "manufactured" in t,
        "ManufacturedHome",
        "Manufactured Home",
        "Manufactured home adjustment",
    ),
]


def _units_label(units: str) -> str:
    return f"{units} Unit{'s' if units != '1' else ''}"


def evaluate_adjustments(
    borrower: BorrowerRecord,
    scenario: ScenarioInputs,
    matrix: AdjustmentMatrix,
) -> AdjustmentResult:
    """Itemize the point adjustments for one borrower.

    Categories are evaluated in a fixed order (LTV, credit, product,
    occupancy, refinance type, property type, units) and a line item is
    recorded only for a non-zero value, except for property-type matches
    which are always recorded.  When the scenario is HomeReady eligible and
    the running total is positive, a waiver line item cancels it.
    """

    table = program_adjustments(matrix, effective_program(borrower, scenario))
    ltv = compute_ltv(borrower.property_value, borrower.loan_amount)
    tier = ltv_tier(ltv)

    product_type = borrower.product_type or "Fixed"
    occupancy = borrower.occupancy or "Primary"
    refinance_type = scenario.new_refinance_type or "RateTerm"
    units = borrower.units or "1"

    candidates = [
        (f"LTV {tier}", lookup(table.get("ltv"), tier), "Loan-to-value adjustment"),
        (
            f"Credit {borrower.credit_score}",
            lookup(table.get("creditScore"), borrower.credit_score),
            "Credit score tier adjustment",
        ),
        (f"Product {product_type}", lookup(table.get("productType"), product_type), "Product type adjustment"),
        (f"Occupancy {occupancy}", lookup(table.get("occupancy"), occupancy), "Occupancy type adjustment"),
        (f"Refi {refinance_type}", lookup(table.get("refinanceType"), refinance_type), "Refinance type adjustment"),
    ]
    items: List[AdjustmentLineItem] = [
        AdjustmentLineItem(name=name, points=points, reason=reason)
        for name, points, reason in candidates
        if points != 0
    ]

    property_type = (borrower.property_type or "").lower()
    for rule in PROPERTY_TYPE_RULES:
        if rule.matches(property_type):
            points = lookup(table.get("propertyType"), rule.key)
            items.append(AdjustmentLineItem(name=rule.label, points=points, reason=rule.reason))

    units_points = lookup(table.get("units"), units)
    if units_points != 0:
        items.append(
            AdjustmentLineItem(name=_units_label(units), points=units_points, reason="Number of units adjustment")
        )

    total = sum(item.points for item in items)
    if scenario.home_ready_eligible and total > 0:
        items.append(AdjustmentLineItem(name="HomeReady® Waiver", points=-total, reason="HomeReady program credit"))
        total = 0.0

    return AdjustmentResult(line_items=tuple(items), total=total, ltv=ltv)
