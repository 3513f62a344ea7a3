"""
Backend models package.
"""

from backend.models.request import (
    LeverRequest,
    EvaluationRequest,
    BatchEvaluationRequest,
    SweepRequest,
)
from backend.models.response import (
    CharacteristicsResponse,
    EvaluationResponse,
    BatchFailure,
    BatchEvaluationResponse,
    SweepResponse,
)

__all__ = [
    "LeverRequest",
    "EvaluationRequest",
    "BatchEvaluationRequest",
    "SweepRequest",
    "CharacteristicsResponse",
    "EvaluationResponse",
    "BatchFailure",
    "BatchEvaluationResponse",
    "SweepResponse",
]
