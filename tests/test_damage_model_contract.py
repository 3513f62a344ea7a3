"""
Contract Tests for the Damage Model Interface.

The damage model is a collaborator: these tests only pin down the
interface and the shared surge helper.
"""

import pytest

from city_characterizer import evaluate
from damage_model import DamageModel, DamageVector
from data_models import ModelConstants


class ZoneFourOnlyModel(DamageModel):
    """Minimal concrete model: damage proportional to flooded zone 4 depth."""

    def calculate_damage(self, characteristics, surge_height):
        depth = self.effective_surge(surge_height)
        flooded = min(depth, characteristics.zone4_top) / characteristics.zone4_top
        zone4 = characteristics.zone4_value * flooded * self.constants.damage_factor
        return DamageVector(
            total=zone4, zone1=0.0, zone2=0.0, zone3=0.0, zone4=zone4,
            flood_event=zone4 > 0, breach_event=False,
            threshold_event=zone4 > self.constants.damage_threshold,
        )


class TestDamageModelContract:
    """Test suite for the damage model interface."""

    def setup_method(self):
        """Setup test fixtures."""
        self.model = ZoneFourOnlyModel(ModelConstants())

    def test_abstract(self):
        """Test: The base class cannot be instantiated."""
        with pytest.raises(TypeError):
            DamageModel(ModelConstants())

    @pytest.mark.parametrize("surge", [0.0, 1.0, 1.75])
    def test_surge_below_seawall(self, surge):
        """Test: Surge at or below the seawall does not reach the city."""
        assert self.model.effective_surge(surge) == 0.0

    def test_surge_above_seawall(self):
        """Test: Runup applies before the seawall is subtracted."""
        assert self.model.effective_surge(4.0) == pytest.approx(4.0 * 1.1 - 1.75)

    def test_concrete_model_consumes_characteristics(self):
        """Test: A concrete model reads the characterized city."""
        record = evaluate(0, 0, 0, 0, 0)
        calm = self.model.calculate_damage(record, 1.5)
        assert calm.total == 0.0
        assert not calm.flood_event
        storm = self.model.calculate_damage(record, 4.0)
        assert storm.flood_event
        assert storm.total == storm.zone4
