"""
Request models for evaluation API.
"""

from pydantic import BaseModel, Field
from typing import Dict, List, Literal, Optional


class LeverRequest(BaseModel):
    """One lever configuration, in (W, B, R, P, D) order."""
    W: float = Field(..., description="Withdrawal height (m), 100 = inactive")
    B: float = Field(..., description="Dike base height / setback (m), 100 = inactive")
    R: float = Field(..., description="Resiliency height (m), 100 = inactive")
    P: float = Field(..., description="Resiliency resistance fraction")
    D: float = Field(..., description="Dike height (m), 100 = inactive")


class EvaluationRequest(LeverRequest):
    """Request model for the evaluate endpoint."""
    constants: Optional[Dict[str, float]] = None  # Overrides by published or field name


class BatchEvaluationRequest(BaseModel):
    """Request model for batch evaluation."""
    levers: List[LeverRequest] = Field(..., min_length=1)
    constants: Optional[Dict[str, float]] = None


class SweepRequest(BaseModel):
    """Request model for a one-lever sweep."""
    base: LeverRequest
    lever: Literal["W", "B", "R", "P", "D"]
    values: List[float] = Field(..., min_length=1)
    constants: Optional[Dict[str, float]] = None
