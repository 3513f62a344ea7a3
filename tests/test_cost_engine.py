"""
Unit Tests for the Cost Engine.

Tests dike volume cost, withdrawal cost and the resistance cost curve.
"""

import math

import pytest

import cost_engine
from cost_engine import (
    calculate_dike_cost,
    calculate_city_dike_cost,
    calculate_withdrawal_cost,
    calculate_value_after_withdrawal,
    calculate_infrastructure_lost_from_withdrawal,
    calculate_resistance_cost_fraction,
    calculate_resiliency_cost_unconstrained,
    calculate_resiliency_cost_capped,
)
from data_models import ModelConstants, NormalizedLevers


# Reference dike parameters: S=21.5, sd=0.5, wdt=3, ich=2, W=43000, cd=10
DIKE_ARGS = dict(cd=10.0, S=21.5, W=43000.0, sd=0.5, wdt=3.0, ich=2.0)


def _prism_and_wedge_cost(hd):
    ch = hd + 2.0
    return 10.0 * (43000.0 * ch * (3.0 + ch / 0.25) + 3.0 * ch ** 2 / 21.5 ** 2)


class TestDikeCost:
    """Test suite for the dike volume-cost function."""

    @pytest.mark.parametrize("hd", [0.0, 1.0, 5.0, 30.0])
    def test_cost_finite_and_non_negative(self, hd):
        """Test: Reference constants give a finite, non-negative cost."""
        cost = calculate_dike_cost(hd, **DIKE_ARGS)
        assert math.isfinite(cost)
        assert cost >= 0

    def test_radicand_negative_for_reference_constants(self):
        """Test: Corner radicand is negative at the startup height."""
        assert cost_engine._tetrahedron_radicand(2.0, 21.5, 0.5) < 0

    def test_zero_height_carries_startup_cost(self):
        """Test: hd=0 still costs the startup height volume."""
        cost = calculate_dike_cost(0.0, **DIKE_ARGS)
        assert cost == pytest.approx(10.0 * (946000.0 + 12.0 / 462.25))

    @pytest.mark.parametrize("hd", [1.0, 5.0])
    def test_negative_radicand_contributes_nothing(self, hd):
        """Test: Clamped corner term leaves prism and wedge volumes only."""
        assert calculate_dike_cost(hd, **DIKE_ARGS) == pytest.approx(_prism_and_wedge_cost(hd))

    def test_radicand_clamped_not_absolute(self, monkeypatch):
        """Test: A negative radicand is clamped to zero, not taken as abs."""
        baseline = _prism_and_wedge_cost(5.0)

        monkeypatch.setattr(cost_engine, "_tetrahedron_radicand", lambda ch, S, sd: -36.0)
        assert calculate_dike_cost(5.0, **DIKE_ARGS) == pytest.approx(baseline)

        # sqrt(36) / 6 = 1 m^3 of corner volume at $10/m^3
        monkeypatch.setattr(cost_engine, "_tetrahedron_radicand", lambda ch, S, sd: 36.0)
        assert calculate_dike_cost(5.0, **DIKE_ARGS) == pytest.approx(baseline + 10.0)

    def test_cost_increases_with_height(self):
        """Test: Taller dikes cost more."""
        costs = [calculate_dike_cost(hd, **DIKE_ARGS) for hd in (0.0, 1.0, 5.0, 30.0)]
        assert costs == sorted(costs)

    def test_city_wrapper_uses_constants(self):
        """Test: City wrapper passes the model geometry through."""
        assert calculate_city_dike_cost(5.0, ModelConstants()) == pytest.approx(
            calculate_dike_cost(5.0, **DIKE_ARGS)
        )


class TestWithdrawalCost:
    """Test suite for withdrawal cost and value after withdrawal."""

    def setup_method(self):
        """Set up test fixtures."""
        self.constants = ModelConstants()
        self.vi = self.constants.total_city_value_initial

    def test_no_withdrawal_costs_nothing(self):
        """Test: wh=0 costs exactly 0."""
        assert calculate_withdrawal_cost(0.0, self.vi, self.constants) == 0.0

    def test_withdrawal_cost_formula(self):
        """Test: wh=5 costs vi * 5 / 12."""
        assert calculate_withdrawal_cost(5.0, self.vi, self.constants) == pytest.approx(self.vi * 5.0 / 12.0)

    def test_withdrawal_cost_factor_scales(self):
        """Test: Cost factor multiplies the withdrawal cost."""
        doubled = ModelConstants(withdrawal_cost_factor=2.0)
        assert calculate_withdrawal_cost(5.0, self.vi, doubled) == pytest.approx(
            2.0 * calculate_withdrawal_cost(5.0, self.vi, self.constants)
        )

    def test_value_after_withdrawal(self):
        """Test: Value after withdrawal follows vi * (1 - fl * wh / CEC)."""
        assert calculate_value_after_withdrawal(5.0, self.vi, self.constants) == pytest.approx(
            self.vi * (1.0 - 0.01 * 5.0 / 17.0)
        )

    def test_infrastructure_lost(self):
        """Test: Lost infrastructure is vi * fw * fl."""
        assert calculate_infrastructure_lost_from_withdrawal(
            self.vi, 5.0 / 17.0, self.constants
        ) == pytest.approx(self.vi * 5.0 / 17.0 * 0.01)


class TestResistanceCurve:
    """Test suite for the resistance cost fraction."""

    def setup_method(self):
        """Set up test fixtures."""
        self.constants = ModelConstants()

    @pytest.mark.parametrize("rp", [0.0, 0.1, 0.3, 0.4])
    def test_linear_below_threshold(self, rp):
        """Test: Only the linear term contributes at or below the threshold."""
        assert calculate_resistance_cost_fraction(rp, self.constants) == pytest.approx(1.25 * 0.35 * rp)

    def test_known_values(self):
        """Test: Published curve values."""
        assert calculate_resistance_cost_fraction(0.5, self.constants) == pytest.approx(0.2475)
        assert calculate_resistance_cost_fraction(0.8, self.constants) == pytest.approx(0.6375)

    def test_continuous_at_threshold(self):
        """Test: No jump at the exponential threshold."""
        at = calculate_resistance_cost_fraction(0.4, self.constants)
        above = calculate_resistance_cost_fraction(0.4 + 1e-9, self.constants)
        assert above == pytest.approx(at, abs=1e-6)

    def test_strictly_increasing_above_threshold(self):
        """Test: Curve rises and blows up towards rp = 1."""
        values = [calculate_resistance_cost_fraction(rp, self.constants) for rp in (0.45, 0.6, 0.9, 0.99, 0.999)]
        assert all(a < b for a, b in zip(values, values[1:]))
        assert values[-1] > 100 * values[0]

    def test_undefined_at_full_resistance(self):
        """Test: rp = 1 is outside the curve's domain."""
        with pytest.raises(ZeroDivisionError):
            calculate_resistance_cost_fraction(1.0, self.constants)


class TestResiliencyCost:
    """Test suite for the two resiliency cost variants."""

    def setup_method(self):
        """Set up test fixtures."""
        self.constants = ModelConstants()
        self.tcvaw = 1.0e12

    def test_unconstrained_variant(self):
        """Test: Cost scales with rh * (rh/2 + basement)."""
        levers = NormalizedLevers(
            withdrawal_height=0.0, dike_base_height=4.0, resiliency_height=2.0,
            resistance_fraction=0.5, dike_height=0.0,
        )
        expected = self.tcvaw * 0.2475 * 2.0 * (1.0 + 3.0) / (30.0 * 17.0)
        assert calculate_resiliency_cost_unconstrained(levers, self.tcvaw, self.constants) == pytest.approx(expected)

    def test_capped_variant(self):
        """Test: Cost-bearing height is the dike base."""
        levers = NormalizedLevers(
            withdrawal_height=2.0, dike_base_height=1.0, resiliency_height=3.0,
            resistance_fraction=0.8, dike_height=5.0,
        )
        expected = self.tcvaw * 0.6375 * 1.0 * (3.0 - 0.5 + 3.0) / (30.0 * 15.0)
        assert calculate_resiliency_cost_capped(levers, self.tcvaw, self.constants) == pytest.approx(expected)

    def test_variants_agree_when_heights_equal(self):
        """Test: At rh == dbh both variants give the same cost."""
        levers = NormalizedLevers(
            withdrawal_height=1.0, dike_base_height=3.0, resiliency_height=3.0,
            resistance_fraction=0.6, dike_height=2.0,
        )
        assert calculate_resiliency_cost_unconstrained(levers, self.tcvaw, self.constants) == pytest.approx(
            calculate_resiliency_cost_capped(levers, self.tcvaw, self.constants)
        )
