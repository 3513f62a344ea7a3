"""
Cost Engine Module.

This module calculates the capital costs of the city adaptation strategies.

CRITICAL PRINCIPLES:
- Pure cost calculation functions
- Has NO case classification logic
- Does NOT validate levers (callers enforce withdrawal_height < CEC)
- Deterministic, no side effects

Cost components:
- Dike construction (volume of a trapezoidal dike on a sloped wedge)
- Withdrawal (relocating value below the withdrawal height)
- Resiliency (flood-proofing buildings in the resiliency zone)
- Infrastructure written off by withdrawal

THIS IS A DECISION-SUPPORT COST MODEL, NOT A CONSTRUCTION ESTIMATE.
"""

import math

from data_models import ModelConstants, NormalizedLevers


# ============================================================================
# DIKE
# ============================================================================

def _tetrahedron_radicand(ch: float, S: float, sd: float) -> float:
    """
    Term under the square root of the tetrahedral corner volume.

    Args:
        ch: Cost height (dike height plus startup height)
        S: Ground slope
        sd: Dike side slope

    Returns:
        Radicand T, which is negative for most realistic parameters
    """
    rise = ch + 1.0 / sd
    return (
        -ch ** 4 * rise ** 2 / sd ** 2
        - 2.0 * ch ** 5 * rise / S ** 4
        - 4.0 * ch ** 6 / (sd ** 2 * S ** 4)
        + 4.0 * ch ** 4 * (2.0 * ch * rise - 3.0 * ch ** 2 / sd ** 2) / (sd ** 2 * S ** 2)
        + 2.0 * ch ** 3 * rise / S ** 2
    )


def calculate_dike_cost(
    hd: float,
    cd: float,
    S: float,
    W: float,
    sd: float,
    wdt: float,
    ich: float
) -> float:
    """
    Calculate construction cost of a dike.

    Volume = front prism + straight side wedges + tetrahedral corners:
    vd = W*ch*(wdt + ch/sd^2) + sqrt(T)/6 + wdt*ch^2/S^2

    A negative radicand T is clamped to zero. This is an approximation at
    the edge of the closed-form derivation's validity, not a geometric
    result.

    Args:
        hd: Dike height (m)
        cd: Cost per unit volume ($/m^3)
        S: Slope of the ground
        W: Width of the city along the coast (m)
        sd: Slope of the dike sides
        wdt: Width of the dike top (m)
        ich: Startup cost expressed as an equivalent height (m)

    Returns:
        Dike cost in dollars
    """
    ch = hd + ich
    ch2 = ch ** 2

    T = _tetrahedron_radicand(ch, S, sd)
    corner_volume = math.sqrt(max(T, 0.0)) / 6.0

    vd = (
        W * ch * (wdt + ch / sd ** 2)
        + corner_volume
        + wdt * (ch2 / S ** 2)
    )
    return vd * cd


def calculate_city_dike_cost(dike_height: float, constants: ModelConstants) -> float:
    """Dike cost using the city geometry and dike parameters from constants."""
    return calculate_dike_cost(
        dike_height,
        constants.unit_cost_per_volume_dike,
        constants.city_slope,
        constants.city_width,
        constants.dike_side_slope,
        constants.dike_top_width,
        constants.dike_starting_cost_point,
    )


# ============================================================================
# WITHDRAWAL
# ============================================================================

def calculate_withdrawal_cost(
    withdrawal_height: float,
    initial_value: float,
    constants: ModelConstants
) -> float:
    """
    Calculate cost of relocating city value below the withdrawal height.

    Args:
        withdrawal_height: Normalized withdrawal height (m), < CEC
        initial_value: Initial total city value
        constants: ModelConstants

    Returns:
        Withdrawal cost, 0 when nothing is withdrawn
    """
    if withdrawal_height == 0:
        return 0.0
    return (
        initial_value * withdrawal_height
        / (constants.city_elevation_change - withdrawal_height)
        * constants.withdrawal_cost_factor
    )


def calculate_value_after_withdrawal(
    withdrawal_height: float,
    initial_value: float,
    constants: ModelConstants
) -> float:
    """Total city value after withdrawal: vi * (1 - fl * wh / CEC)."""
    loss_fraction = (
        constants.withdrawal_percent_lost * withdrawal_height
        / constants.city_elevation_change
    )
    return initial_value * (1.0 - loss_fraction)


def calculate_infrastructure_lost_from_withdrawal(
    initial_value: float,
    fraction_withdrawn: float,
    constants: ModelConstants
) -> float:
    """Value written off because it leaves rather than relocates."""
    return initial_value * fraction_withdrawn * constants.withdrawal_percent_lost


# ============================================================================
# RESILIENCY
# ============================================================================

def calculate_resistance_cost_fraction(
    resistance_fraction: float,
    constants: ModelConstants
) -> float:
    """
    Unitless resistance cost factor fcR.

    Linear below the exponential threshold; above it an extra term grows
    without bound as the resistance fraction approaches 1. Undefined at
    exactly 1.

    Args:
        resistance_fraction: rp in [0, 1)
        constants: ModelConstants

    Returns:
        Resistance cost factor
    """
    rp = resistance_fraction
    exponential_term = (
        constants.resistance_exponential_factor
        * max(0.0, rp - constants.resistance_exponential_threshold)
        / (1.0 - rp)
    )
    linear_term = rp * constants.resistance_linear_factor
    return constants.resistance_adjustment * (exponential_term + linear_term)


def calculate_resiliency_cost_unconstrained(
    levers: NormalizedLevers,
    value_after_withdrawal: float,
    constants: ModelConstants
) -> float:
    """
    Resiliency cost when an unprotected nonresilient zone exists (rh < dbh)
    or there is no setback at all.

    C_R = V_w * fcR * rh * (rh/2 + basement) / (BH * (CEC - wh))
    """
    fcR = calculate_resistance_cost_fraction(levers.resistance_fraction, constants)
    rh = levers.resiliency_height
    return (
        value_after_withdrawal * fcR * rh * (rh / 2.0 + constants.basement)
        / (constants.building_height
           * (constants.city_elevation_change - levers.withdrawal_height))
    )


def calculate_resiliency_cost_capped(
    levers: NormalizedLevers,
    value_after_withdrawal: float,
    constants: ModelConstants
) -> float:
    """
    Resiliency cost when the resiliency height reaches the dike base (rh >= dbh).

    The cost-bearing height is the dike base; rh still sets the exposure depth.
    C_R = V_w * fcR * dbh * (rh - dbh/2 + basement) / (BH * (CEC - wh))
    """
    fcR = calculate_resistance_cost_fraction(levers.resistance_fraction, constants)
    rh = levers.resiliency_height
    dbh = levers.dike_base_height
    return (
        value_after_withdrawal * fcR * dbh * (rh - dbh / 2.0 + constants.basement)
        / (constants.building_height
           * (constants.city_elevation_change - levers.withdrawal_height))
    )
