"""
City Characterizer Module.

Classifies a lever configuration into one of nine geometric cases and
computes zone values, zone boundaries and cost totals for it.

CRITICAL PRINCIPLES:
- Pure and reentrant: no shared state between calls
- Levers are validated at the boundary, before any formula runs
- Each case owns exactly one formula block
- No partial records are ever returned

Zone layout (bottom to top, above the withdrawal height):
- Zone 1: resilient, in front of the dike
- Zone 2: unprotected, in front of the dike
- Zone 3: protected by the dike
- Zone 4: above the dike
"""

import logging
import math
from typing import Callable, Dict, Optional

from data_models import (
    CaseNumber,
    CityCharacteristics,
    CityLevers,
    ModelConstants,
    NormalizedLevers,
    ZoneAllocation,
)
from cost_engine import (
    calculate_city_dike_cost,
    calculate_infrastructure_lost_from_withdrawal,
    calculate_resiliency_cost_capped,
    calculate_resiliency_cost_unconstrained,
    calculate_value_after_withdrawal,
    calculate_withdrawal_cost,
)

logger = logging.getLogger(__name__)

DEFAULT_CONSTANTS = ModelConstants()


class DomainError(ValueError):
    """Lever values outside the domain where the model formulas are defined."""


# ============================================================================
# NORMALIZATION & VALIDATION
# ============================================================================

def normalize_levers(levers: CityLevers, constants: ModelConstants) -> NormalizedLevers:
    """
    Apply sentinel values and minimum heights to raw levers.

    Args:
        levers: Raw CityLevers
        constants: ModelConstants (base_value, min_height, default resistance)

    Returns:
        NormalizedLevers
    """
    base_value = constants.base_value
    min_height = constants.min_height

    wh = 0.0 if levers.withdrawal_height == base_value else levers.withdrawal_height

    if levers.resiliency_height == base_value or levers.resiliency_height < min_height:
        rh = 0.0
        rp = constants.default_resistance_fraction
    else:
        rh = levers.resiliency_height
        rp = levers.resistance_fraction

    dh = 0.0 if levers.dike_height == base_value else levers.dike_height

    # A setback below minimum invalidates any resiliency height
    if levers.dike_base_height < min_height:
        dbh = 0.0
        rh = 0.0
    elif levers.dike_base_height == base_value:
        dbh = 0.0
    else:
        dbh = levers.dike_base_height

    # A dike with no setback cannot carry a resiliency zone
    if dh >= min_height and dbh < min_height and rh >= min_height:
        dbh = 0.0
        rh = 0.0

    return NormalizedLevers(
        withdrawal_height=wh,
        dike_base_height=dbh,
        resiliency_height=rh,
        resistance_fraction=rp,
        dike_height=dh,
    )


def validate_levers(levers: CityLevers, constants: ModelConstants) -> NormalizedLevers:
    """
    Reject levers outside the model domain and return them normalized.

    Args:
        levers: Raw CityLevers
        constants: ModelConstants

    Returns:
        NormalizedLevers

    Raises:
        DomainError: If any lever is outside the domain of the formulas
    """
    raw = {
        "withdrawal_height": levers.withdrawal_height,
        "dike_base_height": levers.dike_base_height,
        "resiliency_height": levers.resiliency_height,
        "resistance_fraction": levers.resistance_fraction,
        "dike_height": levers.dike_height,
    }
    for name, value in raw.items():
        if not math.isfinite(value):
            raise DomainError(f"{name} must be finite, got {value}")
    for name in ("withdrawal_height", "dike_base_height", "resiliency_height", "dike_height"):
        if raw[name] < 0:
            raise DomainError(f"{name} must be non-negative, got {raw[name]}")

    normalized = normalize_levers(levers, constants)
    cec = constants.city_elevation_change

    if normalized.withdrawal_height >= cec:
        raise DomainError(
            f"withdrawal_height ({normalized.withdrawal_height}) must be strictly "
            f"less than the city elevation change ({cec})"
        )

    if normalized.resiliency_height > 0 and not 0.0 <= normalized.resistance_fraction < 1.0:
        raise DomainError(
            f"resistance_fraction must be in [0, 1) when resiliency is active, "
            f"got {normalized.resistance_fraction}"
        )

    stack_top = _protected_stack_top(normalized)
    if stack_top > cec:
        raise DomainError(
            f"Zone stack rises to {stack_top} m, above the city elevation change ({cec} m). "
            f"Reduce withdrawal, setback, resiliency or dike height."
        )

    return normalized


def _protected_stack_top(levers: NormalizedLevers) -> float:
    """Elevation of the top of zone 3 for the configuration."""
    if levers.dike_base_height == 0 and levers.dike_height == 0:
        return levers.withdrawal_height + levers.resiliency_height
    return levers.withdrawal_height + levers.dike_base_height + levers.dike_height


# ============================================================================
# CLASSIFICATION
# ============================================================================

def classify_case(levers: NormalizedLevers) -> CaseNumber:
    """
    Select the geometric case for normalized levers.

    Guard clauses are evaluated in table order; the table is total.
    """
    dh = levers.dike_height
    dbh = levers.dike_base_height
    rh = levers.resiliency_height

    if dh > 0:
        if dbh > 0:
            if rh > 0:
                if rh < dbh:
                    return CaseNumber.DIKE_SETBACK_RESILIENCY_PARTIAL
                return CaseNumber.DIKE_SETBACK_RESILIENCY_FULL
            return CaseNumber.DIKE_SETBACK
        return CaseNumber.DIKE_ONLY

    if dbh > 0:
        if rh > 0:
            if rh < dbh:
                return CaseNumber.SETBACK_RESILIENCY_PARTIAL
            return CaseNumber.SETBACK_RESILIENCY_FULL
        return CaseNumber.SETBACK_ONLY

    if rh > 0:
        return CaseNumber.RESILIENCY_ONLY
    return CaseNumber.NO_INTERVENTION


# ============================================================================
# CASE FORMULA BLOCKS
# ============================================================================
# Each block receives the normalized levers, the value after withdrawal and
# the constants, and returns the zones and strategy costs of its case.

def _case_1(lv: NormalizedLevers, tcvaw: float, c: ModelConstants) -> ZoneAllocation:
    # All four zones
    H = c.city_elevation_change - lv.withdrawal_height
    u = c.dike_unprotected_valuation_ratio
    wh, rh, dbh, dh = lv.withdrawal_height, lv.resiliency_height, lv.dike_base_height, lv.dike_height
    return ZoneAllocation(
        zone1_value=tcvaw * u * rh / H,
        zone2_value=tcvaw * u * (dbh - rh) / H,
        zone3_value=tcvaw * c.protected_value_ratio * dh / H,
        zone4_value=tcvaw * (H - dbh - dh) / H,
        zone1_top=wh + rh,
        zone2_top=wh + dbh,
        zone3_top=wh + dbh + dh,
        zone4_top=c.city_elevation_change,
        dike_cost=calculate_city_dike_cost(dh, c),
        resiliency_cost=calculate_resiliency_cost_unconstrained(lv, tcvaw, c),
    )


def _case_2(lv: NormalizedLevers, tcvaw: float, c: ModelConstants) -> ZoneAllocation:
    # Resiliency covers the whole setback, no unprotected zone in front of the dike
    H = c.city_elevation_change - lv.withdrawal_height
    wh, dbh, dh = lv.withdrawal_height, lv.dike_base_height, lv.dike_height
    return ZoneAllocation(
        zone1_value=tcvaw * c.dike_unprotected_valuation_ratio * dbh / H,
        zone2_value=0.0,
        zone3_value=tcvaw * c.protected_value_ratio * dh / H,
        zone4_value=tcvaw * (H - dbh - dh) / H,
        zone1_top=wh + dbh,
        zone2_top=wh + dbh,
        zone3_top=wh + dbh + dh,
        zone4_top=c.city_elevation_change,
        dike_cost=calculate_city_dike_cost(dh, c),
        resiliency_cost=calculate_resiliency_cost_capped(lv, tcvaw, c),
    )


def _case_3(lv: NormalizedLevers, tcvaw: float, c: ModelConstants) -> ZoneAllocation:
    H = c.city_elevation_change - lv.withdrawal_height
    wh, dbh, dh = lv.withdrawal_height, lv.dike_base_height, lv.dike_height
    return ZoneAllocation(
        zone1_value=0.0,
        zone2_value=tcvaw * c.dike_unprotected_valuation_ratio * dbh / H,
        zone3_value=tcvaw * c.protected_value_ratio * dh / H,
        zone4_value=tcvaw * (H - dbh - dh) / H,
        zone1_top=wh,
        zone2_top=wh + dbh,
        zone3_top=wh + dbh + dh,
        zone4_top=c.city_elevation_change,
        dike_cost=calculate_city_dike_cost(dh, c),
        resiliency_cost=0.0,
    )


def _case_4(lv: NormalizedLevers, tcvaw: float, c: ModelConstants) -> ZoneAllocation:
    # Dike at the seawall, nothing in front of it
    H = c.city_elevation_change - lv.withdrawal_height
    wh, dh = lv.withdrawal_height, lv.dike_height
    return ZoneAllocation(
        zone1_value=0.0,
        zone2_value=0.0,
        zone3_value=tcvaw * c.protected_value_ratio * dh / H,
        zone4_value=tcvaw * (H - dh) / H,
        zone1_top=wh,
        zone2_top=wh,
        zone3_top=wh + dh,
        zone4_top=c.city_elevation_change,
        dike_cost=calculate_city_dike_cost(dh, c),
        resiliency_cost=0.0,
    )


def _case_5(lv: NormalizedLevers, tcvaw: float, c: ModelConstants) -> ZoneAllocation:
    H = c.city_elevation_change - lv.withdrawal_height
    u = c.dike_unprotected_valuation_ratio
    wh, rh, dbh = lv.withdrawal_height, lv.resiliency_height, lv.dike_base_height
    return ZoneAllocation(
        zone1_value=tcvaw * u * rh / H,
        zone2_value=tcvaw * u * (dbh - rh) / H,
        zone3_value=0.0,
        zone4_value=tcvaw * (H - dbh) / H,
        zone1_top=wh + rh,
        zone2_top=wh + dbh,
        zone3_top=wh + dbh,
        zone4_top=c.city_elevation_change,
        # Setback still carries the dike startup cost
        dike_cost=calculate_city_dike_cost(lv.dike_height, c),
        resiliency_cost=calculate_resiliency_cost_unconstrained(lv, tcvaw, c),
    )


def _case_6(lv: NormalizedLevers, tcvaw: float, c: ModelConstants) -> ZoneAllocation:
    H = c.city_elevation_change - lv.withdrawal_height
    wh, dbh = lv.withdrawal_height, lv.dike_base_height
    return ZoneAllocation(
        zone1_value=tcvaw * c.dike_unprotected_valuation_ratio * dbh / H,
        zone2_value=0.0,
        zone3_value=0.0,
        zone4_value=tcvaw * (H - dbh) / H,
        zone1_top=wh + dbh,
        zone2_top=wh + dbh,
        zone3_top=wh + dbh,
        zone4_top=c.city_elevation_change,
        dike_cost=0.0,
        resiliency_cost=calculate_resiliency_cost_capped(lv, tcvaw, c),
    )


def _case_7(lv: NormalizedLevers, tcvaw: float, c: ModelConstants) -> ZoneAllocation:
    H = c.city_elevation_change - lv.withdrawal_height
    wh, dbh = lv.withdrawal_height, lv.dike_base_height
    return ZoneAllocation(
        zone1_value=0.0,
        zone2_value=tcvaw * c.dike_unprotected_valuation_ratio * dbh / H,
        zone3_value=0.0,
        zone4_value=tcvaw * (H - dbh) / H,
        zone1_top=wh,
        zone2_top=wh + dbh,
        zone3_top=wh + dbh,
        zone4_top=c.city_elevation_change,
        dike_cost=calculate_city_dike_cost(lv.dike_height, c),
        resiliency_cost=0.0,
    )


def _case_8(lv: NormalizedLevers, tcvaw: float, c: ModelConstants) -> ZoneAllocation:
    # Resilient zone is valued at ratio 1, there is no dike to discount it
    H = c.city_elevation_change - lv.withdrawal_height
    wh, rh = lv.withdrawal_height, lv.resiliency_height
    return ZoneAllocation(
        zone1_value=tcvaw * rh / H,
        zone2_value=0.0,
        zone3_value=0.0,
        zone4_value=tcvaw * (H - rh) / H,
        zone1_top=wh + rh,
        zone2_top=wh + rh,
        zone3_top=wh + rh,
        zone4_top=c.city_elevation_change,
        dike_cost=0.0,
        resiliency_cost=calculate_resiliency_cost_unconstrained(lv, tcvaw, c),
    )


def _case_9(lv: NormalizedLevers, tcvaw: float, c: ModelConstants) -> ZoneAllocation:
    wh = lv.withdrawal_height
    return ZoneAllocation(
        zone1_value=0.0,
        zone2_value=0.0,
        zone3_value=0.0,
        zone4_value=tcvaw,
        zone1_top=wh,
        zone2_top=wh,
        zone3_top=wh,
        zone4_top=c.city_elevation_change,
        dike_cost=0.0,
        resiliency_cost=0.0,
    )


CASE_EVALUATORS: Dict[CaseNumber, Callable[[NormalizedLevers, float, ModelConstants], ZoneAllocation]] = {
    CaseNumber.DIKE_SETBACK_RESILIENCY_PARTIAL: _case_1,
    CaseNumber.DIKE_SETBACK_RESILIENCY_FULL: _case_2,
    CaseNumber.DIKE_SETBACK: _case_3,
    CaseNumber.DIKE_ONLY: _case_4,
    CaseNumber.SETBACK_RESILIENCY_PARTIAL: _case_5,
    CaseNumber.SETBACK_RESILIENCY_FULL: _case_6,
    CaseNumber.SETBACK_ONLY: _case_7,
    CaseNumber.RESILIENCY_ONLY: _case_8,
    CaseNumber.NO_INTERVENTION: _case_9,
}


# ============================================================================
# ENTRY POINTS
# ============================================================================

def characterize_city(
    levers: CityLevers,
    constants: Optional[ModelConstants] = None
) -> CityCharacteristics:
    """
    Compute the complete cost and value record for one lever configuration.

    Withdrawal is evaluated first because it sets the value base for every
    zone. The case block then fills zones and strategy costs, and totals are
    aggregated last.

    Args:
        levers: Raw CityLevers
        constants: ModelConstants (published defaults if None)

    Returns:
        CityCharacteristics

    Raises:
        DomainError: If the levers fall outside the model domain
    """
    if constants is None:
        constants = DEFAULT_CONSTANTS

    normalized = validate_levers(levers, constants)
    case = classify_case(normalized)
    if case is CaseNumber.NOT_COMPUTED:
        raise AssertionError(f"Levers {levers.as_tuple()} were not classified")

    logger.debug(
        f"Levers {levers.as_tuple()} normalized to "
        f"wh={normalized.withdrawal_height}, dbh={normalized.dike_base_height}, "
        f"rh={normalized.resiliency_height}, rp={normalized.resistance_fraction}, "
        f"dh={normalized.dike_height} -> case {case.value}"
    )

    wh = normalized.withdrawal_height
    initial_value = constants.total_city_value_initial
    withdrawal_cost = calculate_withdrawal_cost(wh, initial_value, constants)
    fraction_withdrawn = wh / constants.city_elevation_change
    infrastructure_lost = calculate_infrastructure_lost_from_withdrawal(
        initial_value, fraction_withdrawn, constants
    )
    value_after_withdrawal = calculate_value_after_withdrawal(wh, initial_value, constants)

    zones = CASE_EVALUATORS[case](normalized, value_after_withdrawal, constants)

    final_city_value = zones.final_city_value
    total_investment_cost = withdrawal_cost + zones.dike_cost + zones.resiliency_cost
    if case is CaseNumber.NO_INTERVENTION:
        # No strategy costs to add, the total is the value lost
        total_cost = initial_value - final_city_value
    else:
        total_cost = total_investment_cost + final_city_value - initial_value

    return CityCharacteristics(
        case_number=case,
        withdrawal_height=wh,
        dike_base_height=normalized.dike_base_height,
        resiliency_height=normalized.resiliency_height,
        resistance_fraction=normalized.resistance_fraction,
        dike_height=normalized.dike_height,
        residual_damage_fraction=normalized.residual_damage_fraction,
        zone1_value=zones.zone1_value,
        zone2_value=zones.zone2_value,
        zone3_value=zones.zone3_value,
        zone4_value=zones.zone4_value,
        zone1_top=zones.zone1_top,
        zone2_top=zones.zone2_top,
        zone3_top=zones.zone3_top,
        zone4_top=zones.zone4_top,
        initial_city_value=initial_value,
        fraction_withdrawn=fraction_withdrawn,
        infrastructure_lost_from_withdrawal=infrastructure_lost,
        value_after_withdrawal=value_after_withdrawal,
        final_city_value=final_city_value,
        withdrawal_cost=withdrawal_cost,
        dike_cost=zones.dike_cost,
        resiliency_cost=zones.resiliency_cost,
        total_investment_cost=total_investment_cost,
        total_cost=total_cost,
    )


def evaluate(
    W: float,
    B: float,
    R: float,
    P: float,
    D: float,
    constants: Optional[ModelConstants] = None
) -> CityCharacteristics:
    """
    Evaluate one lever tuple.

    Args:
        W: Withdrawal height
        B: Dike base height (setback)
        R: Resiliency height
        P: Resiliency resistance fraction
        D: Dike height
        constants: ModelConstants (published defaults if None)

    Returns:
        CityCharacteristics
    """
    levers = CityLevers(
        withdrawal_height=W,
        dike_base_height=B,
        resiliency_height=R,
        resistance_fraction=P,
        dike_height=D,
    )
    return characterize_city(levers, constants)
