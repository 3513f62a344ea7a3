"""
Reference Scenario Registry Module.

Named lever configurations covering typical strategies and edge cases.

CRITICAL PRINCIPLES:
- INFORMATIONAL ONLY - a scenario is just a lever tuple with a name
- Surge heights are carried as metadata for the damage model contract;
  the cost model never reads them
"""

from dataclasses import dataclass
from typing import Dict, List

from data_models import CityLevers


@dataclass(frozen=True)
class Scenario:
    """A named lever configuration."""
    name: str
    levers: CityLevers
    surge_height: float  # m, metadata only
    description: str


def _scenario(name: str, W: float, R: float, P: float, D: float, B: float,
              surge_height: float, description: str) -> Scenario:
    return Scenario(
        name=name,
        levers=CityLevers(
            withdrawal_height=W,
            dike_base_height=B,
            resiliency_height=R,
            resistance_fraction=P,
            dike_height=D,
        ),
        surge_height=surge_height,
        description=description,
    )


REFERENCE_SCENARIOS: Dict[str, Scenario] = {
    s.name: s for s in [
        _scenario("zero_case", 0, 0, 0, 0, 0, 0,
                  "No intervention, no surge"),
        _scenario("dike_only", 0, 0, 0, 5, 0, 3,
                  "5 m dike at the seawall"),
        _scenario("full_protection", 2, 3, 0.8, 5, 1, 4,
                  "Withdrawal, setback, resiliency and dike together"),
        # Setback below minimum height disables the resiliency lever
        _scenario("resistance_only", 0, 4, 0.5, 0, 0, 2,
                  "Resiliency requested without a setback"),
        _scenario("withdrawal_only", 5, 0, 0, 0, 0, 3,
                  "Withdraw the lowest 5 m of the city"),
        _scenario("edge_r_geq_b", 0, 6, 0.5, 3, 5, 4,
                  "Resiliency height above the dike base"),
        _scenario("high_surge", 2, 3, 0.8, 5, 1, 15,
                  "Full protection against an overtopping surge"),
        _scenario("below_seawall", 0, 0, 0, 0, 0, 1.5,
                  "Surge that stays below the seawall"),
    ]
}


def get_scenario(name: str) -> Scenario:
    """
    Look up a reference scenario by name (case-insensitive).

    Raises:
        ValueError: If the name is unknown
    """
    key = name.lower().strip()
    if key not in REFERENCE_SCENARIOS:
        raise ValueError(
            f"Unknown scenario: {name}. "
            f"Available: {', '.join(REFERENCE_SCENARIOS)}"
        )
    return REFERENCE_SCENARIOS[key]


def list_scenarios() -> List[Scenario]:
    """All reference scenarios in registry order."""
    return list(REFERENCE_SCENARIOS.values())
