"""
Base Damage Model Abstract Class.

This defines the interface that a surge damage model must implement.
The damage model is responsible ONLY for damage from a surge event on an
already characterized city - no lever normalization, no capital costs.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass

from data_models import CityCharacteristics, ModelConstants


@dataclass(frozen=True)
class DamageVector:
    """Damage from one surge event, in dollars, with event flags."""
    total: float
    zone1: float
    zone2: float
    zone3: float
    zone4: float
    flood_event: bool  # Some damage occurs
    breach_event: bool  # Dike breached
    threshold_event: bool  # Damage above the unacceptable threshold


class DamageModel(ABC):
    """
    Abstract base class for surge damage models.

    RESPONSIBILITIES:
    - Compute per-zone damage for a surge height
    - Flag flood, breach and threshold events

    NOT RESPONSIBLE FOR:
    - Case classification
    - Capital costs
    - Surge generation or sequencing
    """

    def __init__(self, constants: ModelConstants):
        """
        Initialize damage model.

        Args:
            constants: ModelConstants carrying damage, failure and seawall parameters
        """
        self.constants = constants

    @abstractmethod
    def calculate_damage(
        self,
        characteristics: CityCharacteristics,
        surge_height: float
    ) -> DamageVector:
        """
        Compute damage for one surge event.

        Args:
            characteristics: CityCharacteristics of the evaluated levers
            surge_height: Raw surge height at the coast (m)

        Returns:
            DamageVector

        Note:
            This method must be deterministic and have no side effects.
        """
        pass

    def effective_surge(self, surge_height: float) -> float:
        """
        Surge height that reaches the city after the seawall and wave runup.

        Args:
            surge_height: Raw surge height (m)

        Returns:
            0 at or below the seawall, else surge * runup - seawall
        """
        if surge_height <= self.constants.seawall_height:
            return 0.0
        return surge_height * self.constants.run_up_wave_factor - self.constants.seawall_height
