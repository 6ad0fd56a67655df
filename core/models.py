from __future__ import annotations
from typing import Dict, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

AdjustmentMatrix = Dict[str, Dict[str, Dict[str, float]]]


class BorrowerRecord(BaseModel):
    model_config = ConfigDict(frozen=True)

    client_name: str = "Unknown"
    property_value: float = Field(0.0, ge=0)
    loan_amount: float = Field(0.0, ge=0)
    income: float = Field(0.0, ge=0)
    zip_code: str = ""
    credit_score: str = ">=780"
    loan_program: str = "Conventional"
    product_type: str = "Fixed"
    property_type: str = "Single Family"
    occupancy: str = "Primary"
    units: str = "1"
    current_payment: float = Field(0.0, ge=0)


class ScenarioInputs(BaseModel):
    model_config = ConfigDict(frozen=True)

    base_rate: float = Field(6.75, gt=0)
    starting_points: float = 0.0
    new_loan_program: Optional[str] = None
    new_refinance_type: str = "RateTerm"
    home_ready_eligible: bool = False
    break_even_threshold: int = 18


class AdjustmentLineItem(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    points: float
    reason: str


class AdjustmentResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    line_items: Tuple[AdjustmentLineItem, ...] = ()
    total: float = 0.0
    ltv: float = 0.0


class PricingResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    client_name: str
    property_value: float
    loan_amount: float
    income: float
    zip_code: str
    credit_score: str
    current_loan_program: str
    ltv: float
    current_rate: float
    current_rate_converged: bool = False
    current_payment: float
    adjusted_rate: float
    new_payment: float
    payment_diff: float
    total_adjustments: float
    final_points: float
    point_cost: float
    break_even_months: Optional[float] = None
    adjustments: Tuple[AdjustmentLineItem, ...] = ()

    @property
    def starting_points(self) -> float:
        return self.final_points - self.total_adjustments


class ProgramAdjustments(BaseModel):
    """Shape check for one loan program's adjustment table."""

    model_config = ConfigDict(extra="allow")

    ltv: Dict[str, float]
    creditScore: Dict[str, float]
    productType: Dict[str, float]
    occupancy: Dict[str, float] = Field(default_factory=dict)
    refinanceType: Dict[str, float] = Field(default_factory=dict)
    propertyType: Dict[str, float] = Field(
        default_factory=lambda: {"Condo": 0.0, "ManufacturedHome": 0.0}
    )
    units: Dict[str, float] = Field(default_factory=dict)
