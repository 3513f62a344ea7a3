"""
Response models for evaluation API.
"""

from pydantic import BaseModel
from typing import Any, Dict, List, Optional


class CharacteristicsResponse(BaseModel):
    """Cost and value record for one lever configuration."""
    case_number: int
    withdrawal_height: float
    dike_base_height: float
    resiliency_height: float
    resistance_fraction: float
    dike_height: float
    residual_damage_fraction: float
    zone1_value: float
    zone2_value: float
    zone3_value: float
    zone4_value: float
    zone1_top: float
    zone2_top: float
    zone3_top: float
    zone4_top: float
    initial_city_value: float
    fraction_withdrawn: float
    infrastructure_lost_from_withdrawal: float
    value_after_withdrawal: float
    final_city_value: float
    withdrawal_cost: float
    dike_cost: float
    resiliency_cost: float
    total_investment_cost: float
    total_cost: float


class EvaluationResponse(BaseModel):
    """Complete evaluation response."""
    levers: Dict[str, float]
    characteristics: CharacteristicsResponse
    warnings: List[Dict[str, Any]] = []
    index: Optional[int] = None


class BatchFailure(BaseModel):
    """A rejected lever configuration in a batch."""
    index: int
    levers: Dict[str, float]
    error: str


class BatchEvaluationResponse(BaseModel):
    """Batch evaluation response."""
    results: List[EvaluationResponse]
    failures: List[BatchFailure] = []


class SweepResponse(BaseModel):
    """Rows of a one-lever sweep."""
    lever: str
    rows: List[Dict[str, Any]]
