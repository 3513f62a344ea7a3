"""
Data models for the island City On a Wedge (iCOW) adaptation cost model.

This module defines the core data structures used throughout the system.
All models follow strict separation of concerns: lever inputs, model
constants, and the computed city characteristics are kept separate.
"""

from dataclasses import dataclass, asdict
from enum import Enum
from typing import Dict, Tuple


class CaseNumber(Enum):
    """Geometric configurations of active levers.

    NOT_COMPUTED is never a valid classification result.
    """
    NOT_COMPUTED = 0
    DIKE_SETBACK_RESILIENCY_PARTIAL = 1  # rh < dbh, unprotected sub-zone exists
    DIKE_SETBACK_RESILIENCY_FULL = 2  # rh >= dbh
    DIKE_SETBACK = 3
    DIKE_ONLY = 4  # No setback, resiliency ignored
    SETBACK_RESILIENCY_PARTIAL = 5  # No dike, rh < dbh
    SETBACK_RESILIENCY_FULL = 6  # No dike, rh >= dbh
    SETBACK_ONLY = 7
    RESILIENCY_ONLY = 8
    NO_INTERVENTION = 9


class LeverName(Enum):
    """Names of the five policy levers."""
    WITHDRAWAL = "withdrawal_height"
    DIKE_BASE = "dike_base_height"
    RESILIENCY = "resiliency_height"
    RESISTANCE = "resistance_fraction"
    DIKE = "dike_height"


@dataclass(frozen=True)
class ModelConstants:
    """
    Exogenous parameters of the city model.

    Defaults match the published parameter set (Ceres, Forest, Keller 2019).
    Heights are in meters, values and costs in dollars.
    """
    # City geometry and value
    city_elevation_change: float = 17.0  # CEC, m
    city_width: float = 43000.0  # m, length of the coastline
    city_length: float = 2000.0  # m, seawall to highest point
    total_city_value_initial: float = 1.5e12
    building_height: float = 30.0  # BH, m
    basement: float = 3.0  # m
    seawall_height: float = 1.75  # m

    # Withdrawal
    withdrawal_percent_lost: float = 0.01
    withdrawal_cost_factor: float = 1.0

    # Dike
    dike_side_slope: float = 0.5
    dike_top_width: float = 3.0  # m
    dike_starting_cost_point: float = 2.0  # m, startup cost expressed as height
    unit_cost_per_volume_dike: float = 10.0  # $/m^3
    protected_value_ratio: float = 1.1
    dike_unprotected_valuation_ratio: float = 0.95

    # Resistance cost curve
    resistance_adjustment: float = 1.25
    resistance_exponential_factor: float = 0.115
    resistance_linear_factor: float = 0.35
    resistance_exponential_threshold: float = 0.4

    # Damage and dike failure (consumed by the damage model contract only)
    damage_factor: float = 0.39
    failed_dike_damage_factor: float = 1.5
    intact_dike_damage_factor: float = 0.03
    pf_threshold: float = 0.95
    pf_base: float = 0.05
    threshold_damage_fraction: float = 1.0
    threshold_damage_exponent: float = 1.01
    run_up_wave_factor: float = 1.1
    length_surge_sequences: int = 200
    max_surge_block: int = 5000

    # Lever normalization
    base_value: float = 100.0  # "inactive" sentinel
    min_height: float = 0.1  # m
    default_resistance_fraction: float = 0.5

    @property
    def city_slope(self) -> float:
        """Ground slope of the wedge (city width over city length)."""
        return self.city_width / self.city_length

    @property
    def damage_threshold(self) -> float:
        """Damage level considered unacceptable."""
        return self.total_city_value_initial / 375.0


@dataclass(frozen=True)
class CityLevers:
    """
    Raw lever values for one evaluation, in (W, B, R, P, D) order.

    Any height lever may carry the base_value sentinel to mark it inactive.
    """
    withdrawal_height: float  # W
    dike_base_height: float  # B
    resiliency_height: float  # R
    resistance_fraction: float  # P
    dike_height: float  # D

    def as_tuple(self) -> Tuple[float, float, float, float, float]:
        return (
            self.withdrawal_height,
            self.dike_base_height,
            self.resiliency_height,
            self.resistance_fraction,
            self.dike_height,
        )


@dataclass(frozen=True)
class NormalizedLevers:
    """Effective lever values after sentinel and minimum-height handling."""
    withdrawal_height: float  # wh
    dike_base_height: float  # dbh
    resiliency_height: float  # rh
    resistance_fraction: float  # rp
    dike_height: float  # dh

    @property
    def residual_damage_fraction(self) -> float:
        """Damage that still results at the resistance fraction (dtr)."""
        return max(1.0 - self.resistance_fraction, 0.0)


@dataclass(frozen=True)
class ZoneAllocation:
    """
    Values and boundaries produced by one case formula block.

    Zones absent from a case carry exactly 0.
    """
    zone1_value: float
    zone2_value: float
    zone3_value: float
    zone4_value: float
    zone1_top: float
    zone2_top: float
    zone3_top: float
    zone4_top: float
    dike_cost: float
    resiliency_cost: float

    @property
    def final_city_value(self) -> float:
        return self.zone1_value + self.zone2_value + self.zone3_value + self.zone4_value


@dataclass(frozen=True)
class CityCharacteristics:
    """
    Complete cost and value record for one lever configuration.

    Produced fresh by every evaluation and never mutated.
    """
    case_number: CaseNumber

    # Normalized heights
    withdrawal_height: float  # wh
    dike_base_height: float  # dbh
    resiliency_height: float  # rh
    resistance_fraction: float  # rp
    dike_height: float  # dh
    residual_damage_fraction: float  # dtr

    # Zones
    zone1_value: float
    zone2_value: float
    zone3_value: float
    zone4_value: float
    zone1_top: float
    zone2_top: float
    zone3_top: float
    zone4_top: float

    # Value bases
    initial_city_value: float  # tcvi
    fraction_withdrawn: float  # fw
    infrastructure_lost_from_withdrawal: float  # ilfw
    value_after_withdrawal: float  # tcvaw
    final_city_value: float  # fcv

    # Costs
    withdrawal_cost: float  # wc
    dike_cost: float  # dc
    resiliency_cost: float  # rc
    total_investment_cost: float  # tic
    total_cost: float  # tc, investment plus change in city value

    @property
    def zone_values(self) -> Tuple[float, float, float, float]:
        return (self.zone1_value, self.zone2_value, self.zone3_value, self.zone4_value)

    @property
    def zone_tops(self) -> Tuple[float, float, float, float]:
        return (self.zone1_top, self.zone2_top, self.zone3_top, self.zone4_top)

    def to_dict(self) -> Dict[str, float]:
        """Flat dict with the case number as a plain int."""
        result = asdict(self)
        result["case_number"] = self.case_number.value
        return result
