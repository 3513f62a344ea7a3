"""
Lever Sweep.

Evaluates the model along one lever while holding the others fixed.
"""

import logging
from dataclasses import replace
from typing import Any, Dict, Iterable, List, Optional

from data_models import CityLevers, LeverName, ModelConstants
from city_characterizer import DomainError, characterize_city

logger = logging.getLogger(__name__)


def sweep_lever(
    base_levers: CityLevers,
    lever: LeverName,
    values: Iterable[float],
    constants: Optional[ModelConstants] = None,
) -> List[Dict[str, Any]]:
    """
    Evaluate base_levers with one lever replaced by each value.

    Args:
        base_levers: Levers held fixed
        lever: LeverName to vary
        values: Values for the varied lever
        constants: ModelConstants (published defaults if None)

    Returns:
        One row per value with case number and cost totals, or the
        rejection message for values outside the model domain
    """
    rows = []
    for value in values:
        levers = replace(base_levers, **{lever.value: value})
        try:
            record = characterize_city(levers, constants)
        except DomainError as e:
            logger.warning(f"Sweep of {lever.value} rejected value {value}: {e}")
            rows.append({"value": value, "error": str(e)})
            continue
        rows.append({
            "value": value,
            "case_number": record.case_number.value,
            "withdrawal_cost": record.withdrawal_cost,
            "dike_cost": record.dike_cost,
            "resiliency_cost": record.resiliency_cost,
            "total_investment_cost": record.total_investment_cost,
            "total_cost": record.total_cost,
            "final_city_value": record.final_city_value,
        })
    return rows
