"""
Model Configuration Module.

Builds validated ModelConstants from overrides.

Overrides may use the published parameter names (CEC, BH,
UnitCostPerVolumeDike, ...) or the ModelConstants field names.
Unknown names are rejected rather than ignored.
"""

import json
import logging
from dataclasses import fields, replace
from typing import Any, Dict, List, Optional

from data_models import ModelConstants

logger = logging.getLogger(__name__)


# Published parameter names -> ModelConstants fields
CONSTANT_ALIASES = {
    "resistanceAdjustment": "resistance_adjustment",
    "CEC": "city_elevation_change",
    "CityWidth": "city_width",
    "CityLength": "city_length",
    "TotalCityValueInitial": "total_city_value_initial",
    "WithdrawelPercentLost": "withdrawal_percent_lost",
    "WithdrawalPercentLost": "withdrawal_percent_lost",
    "BH": "building_height",
    "ProtectedValueRatio": "protected_value_ratio",
    "SlopeDike": "dike_side_slope",
    "DikeUnprotectedValuationRatio": "dike_unprotected_valuation_ratio",
    "WidthDikeTop": "dike_top_width",
    "DikeStartingCostPoint": "dike_starting_cost_point",
    "UnitCostPerVolumeDike": "unit_cost_per_volume_dike",
    "WithdrawelCostFactor": "withdrawal_cost_factor",
    "WithdrawalCostFactor": "withdrawal_cost_factor",
    "resistanceExponentialFactor": "resistance_exponential_factor",
    "resistanceLinearFactor": "resistance_linear_factor",
    "resistanceExponentialThreshold": "resistance_exponential_threshold",
    "damageFactor": "damage_factor",
    "FailedDikeDamageFactor": "failed_dike_damage_factor",
    "intactDikeDamageFactor": "intact_dike_damage_factor",
    "pfThreshold": "pf_threshold",
    "pfBase": "pf_base",
    "minHeight": "min_height",
    "Basement": "basement",
    "thresholdDamageFraction": "threshold_damage_fraction",
    "thresholdDamageExponent": "threshold_damage_exponent",
    "lengthSurgeSequences": "length_surge_sequences",
    "baseValue": "base_value",
    "PBase": "default_resistance_fraction",
    "Seawall": "seawall_height",
    "runUpWave": "run_up_wave_factor",
    "maxSurgeBlock": "max_surge_block",
}

_INTEGER_FIELDS = {"length_surge_sequences", "max_surge_block"}


def validate_constants(constants: ModelConstants) -> List[str]:
    """
    Check ModelConstants for physical consistency.

    Args:
        constants: ModelConstants to check

    Returns:
        List of violation descriptions (empty if consistent)
    """
    violations = []

    positive = [
        "city_elevation_change", "city_width", "city_length",
        "total_city_value_initial", "building_height", "dike_side_slope",
        "unit_cost_per_volume_dike", "min_height",
    ]
    for name in positive:
        value = getattr(constants, name)
        if not value > 0:
            violations.append(f"{name} must be positive, got {value}")

    non_negative = [
        "basement", "dike_top_width", "dike_starting_cost_point",
        "withdrawal_cost_factor", "resistance_adjustment",
        "resistance_exponential_factor", "resistance_linear_factor",
        "protected_value_ratio", "dike_unprotected_valuation_ratio",
    ]
    for name in non_negative:
        value = getattr(constants, name)
        if value < 0:
            violations.append(f"{name} must be non-negative, got {value}")

    fractions = [
        "withdrawal_percent_lost", "resistance_exponential_threshold",
        "default_resistance_fraction", "pf_threshold", "pf_base",
    ]
    for name in fractions:
        value = getattr(constants, name)
        if not 0.0 <= value <= 1.0:
            violations.append(f"{name} must be in [0, 1], got {value}")

    if constants.city_elevation_change <= constants.seawall_height:
        violations.append(
            f"city_elevation_change ({constants.city_elevation_change}) must exceed "
            f"seawall_height ({constants.seawall_height})"
        )

    # The inactive sentinel must not collide with a usable height
    if constants.base_value <= constants.city_elevation_change:
        violations.append(
            f"base_value ({constants.base_value}) must exceed "
            f"city_elevation_change ({constants.city_elevation_change})"
        )

    return violations


def build_model_constants(overrides: Optional[Dict[str, Any]] = None) -> ModelConstants:
    """
    Build ModelConstants from the published defaults plus overrides.

    Args:
        overrides: Mapping of published names or field names to values

    Returns:
        Validated ModelConstants

    Raises:
        ValueError: On unknown names, non-numeric values or inconsistent constants
    """
    constants = ModelConstants()
    if overrides:
        field_names = {f.name for f in fields(ModelConstants)}
        changes = {}
        for key, value in overrides.items():
            field_name = CONSTANT_ALIASES.get(key, key)
            if field_name not in field_names:
                raise ValueError(f"Unknown model constant: {key}")
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise ValueError(f"Model constant {key} must be numeric, got {value!r}")
            changes[field_name] = int(value) if field_name in _INTEGER_FIELDS else float(value)
        constants = replace(constants, **changes)
        logger.info(f"Model constants overridden: {sorted(changes)}")

    violations = validate_constants(constants)
    if violations:
        raise ValueError("Invalid model constants: " + "; ".join(violations))
    return constants


def load_model_constants(path: Optional[str] = None) -> ModelConstants:
    """
    Load constant overrides from a JSON object file.

    Args:
        path: JSON file path, or None for the published defaults

    Returns:
        Validated ModelConstants
    """
    if path is None:
        return build_model_constants()

    with open(path, "r", encoding="utf-8") as f:
        overrides = json.load(f)

    if not isinstance(overrides, dict):
        raise ValueError(f"Constants file {path} must contain a JSON object")

    logger.info(f"Loaded model constants from {path}")
    return build_model_constants(overrides)
