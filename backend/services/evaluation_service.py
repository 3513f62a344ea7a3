"""
Evaluation Service Module.

Wraps the city characterizer into a reusable service.
Used by both CLI (main.py) and API (api.py).
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Dict, List, Optional, Sequence

from data_models import CityLevers, ModelConstants
from city_characterizer import DomainError, characterize_city
from model_config import build_model_constants
from backend.services.sanity_checks import check_characteristics

logger = logging.getLogger(__name__)


LEVER_KEYS = {
    "W": "withdrawal_height",
    "B": "dike_base_height",
    "R": "resiliency_height",
    "P": "resistance_fraction",
    "D": "dike_height",
}


def parse_lever_dict(input_dict: Dict[str, Any]) -> CityLevers:
    """
    Parse a lever dictionary into CityLevers.

    Args:
        input_dict: Dictionary keyed by lever letter (W, B, R, P, D)
            or by CityLevers field name

    Returns:
        CityLevers

    Raises:
        ValueError: If a lever is missing or not numeric
    """
    values = {}
    for letter, field_name in LEVER_KEYS.items():
        if letter in input_dict:
            raw = input_dict[letter]
        elif field_name in input_dict:
            raw = input_dict[field_name]
        else:
            raise ValueError(f"Lever {letter} ({field_name}) is required")
        try:
            values[field_name] = float(raw)
        except (TypeError, ValueError):
            raise ValueError(f"Lever {letter} must be numeric, got {raw!r}")
    return CityLevers(**values)


def _result_dict(levers: CityLevers, constants: ModelConstants) -> Dict[str, Any]:
    record = characterize_city(levers, constants)
    return {
        "levers": dict(zip(LEVER_KEYS, levers.as_tuple())),
        "characteristics": record.to_dict(),
        "warnings": check_characteristics(record, constants),
    }


def run_evaluation(
    input_dict: Dict[str, Any],
    constants: Optional[ModelConstants] = None
) -> Dict[str, Any]:
    """
    Evaluate one lever configuration.

    Args:
        input_dict: Lever dictionary, optionally with a "constants" mapping
            of overrides (ignored when constants is given)
        constants: ModelConstants

    Returns:
        Dict with levers, characteristics and sanity warnings

    Raises:
        ValueError: For malformed input (DomainError for out-of-domain levers)
    """
    if constants is None:
        constants = build_model_constants(input_dict.get("constants"))
    levers = parse_lever_dict(input_dict)
    return _result_dict(levers, constants)


def run_batch(
    lever_list: Sequence[CityLevers],
    constants: Optional[ModelConstants] = None,
    max_workers: Optional[int] = None
) -> Dict[str, List[Dict[str, Any]]]:
    """
    Evaluate many lever configurations concurrently.

    Rejected configurations are reported and the rest of the batch continues.

    Args:
        lever_list: CityLevers to evaluate
        constants: ModelConstants (published defaults if None)
        max_workers: Thread pool size (executor default if None)

    Returns:
        Dict with "results" (input order, successes only) and "failures"
        (index, levers, error)
    """
    if constants is None:
        constants = build_model_constants()

    def _evaluate(levers: CityLevers):
        try:
            return _result_dict(levers, constants), None
        except DomainError as e:
            return None, str(e)

    logger.info(f"Evaluating batch of {len(lever_list)} lever configurations")
    with ThreadPoolExecutor(max_workers=max_workers) as executor:
        outcomes = list(executor.map(_evaluate, lever_list))

    results = []
    failures = []
    for index, (levers, (result, error)) in enumerate(zip(lever_list, outcomes)):
        if error is None:
            result["index"] = index
            results.append(result)
        else:
            logger.warning(f"Lever tuple {index} {levers.as_tuple()} rejected: {error}")
            failures.append({
                "index": index,
                "levers": dict(zip(LEVER_KEYS, levers.as_tuple())),
                "error": error,
            })

    return {"results": results, "failures": failures}
