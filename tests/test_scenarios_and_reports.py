"""
Unit Tests for Reference Scenarios and Report Formatting.
"""

import os

import pytest

from city_characterizer import characterize_city
from data_models import CaseNumber
from report_formatter import (
    format_costs_block,
    format_summary,
    format_zones_block,
    write_reports,
)
from scenarios import REFERENCE_SCENARIOS, get_scenario, list_scenarios


EXPECTED_CASES = {
    "zero_case": CaseNumber.NO_INTERVENTION,
    "dike_only": CaseNumber.DIKE_ONLY,
    "full_protection": CaseNumber.DIKE_SETBACK_RESILIENCY_FULL,
    "resistance_only": CaseNumber.NO_INTERVENTION,
    "withdrawal_only": CaseNumber.NO_INTERVENTION,
    "edge_r_geq_b": CaseNumber.DIKE_SETBACK_RESILIENCY_FULL,
    "high_surge": CaseNumber.DIKE_SETBACK_RESILIENCY_FULL,
    "below_seawall": CaseNumber.NO_INTERVENTION,
}


class TestScenarios:
    """Test suite for the scenario registry."""

    def test_registry_contents(self):
        """Test: All reference scenarios are registered in order."""
        assert [s.name for s in list_scenarios()] == list(EXPECTED_CASES)

    @pytest.mark.parametrize("name", list(EXPECTED_CASES))
    def test_scenario_cases(self, name):
        """Test: Each scenario resolves to its expected case."""
        record = characterize_city(get_scenario(name).levers)
        assert record.case_number is EXPECTED_CASES[name]

    def test_lookup_case_insensitive(self):
        """Test: Names are matched case-insensitively."""
        assert get_scenario(" Dike_Only ") is REFERENCE_SCENARIOS["dike_only"]

    def test_unknown_scenario(self):
        """Test: Unknown names list the available scenarios."""
        with pytest.raises(ValueError, match="Available"):
            get_scenario("tsunami")

    def test_surge_is_metadata_only(self):
        """Test: Scenarios differing only in surge give identical records."""
        a = characterize_city(get_scenario("full_protection").levers)
        b = characterize_city(get_scenario("high_surge").levers)
        assert a == b


class TestReports:
    """Test suite for key:value report blocks and files."""

    def setup_method(self):
        """Setup test fixtures."""
        self.scenario = get_scenario("dike_only")
        self.record = characterize_city(self.scenario.levers)

    def test_costs_block(self):
        """Test: Costs block carries every cost key."""
        block = format_costs_block("dike_only", self.scenario.levers, self.record)
        lines = block.splitlines()
        assert lines[0] == "# Scenario: dike_only"
        assert lines[1] == "# Levers: W=0, B=0, R=0, P=0, D=5"
        keys = [line.split(":")[0] for line in lines[2:]]
        assert keys == [
            "withdrawal_cost", "value_after_withdrawal", "resistance_cost",
            "dike_cost", "total_investment_cost",
        ]
        assert f"dike_cost: {self.record.dike_cost:.15g}" in lines

    def test_zones_block(self):
        """Test: Zones block starts with the case number."""
        block = format_zones_block("dike_only", self.scenario.levers, self.record)
        lines = block.splitlines()
        assert lines[2] == "case_number: 4"
        assert "zone3_top: 5" in lines
        assert "zone4_top: 17" in lines

    def test_summary(self):
        """Test: Console summary names the case."""
        summary = format_summary(self.record)
        assert "CASE 4: DIKE_ONLY" in summary
        assert "Final City Value" in summary

    def test_write_reports(self, tmp_path):
        """Test: Three report files are written."""
        results = [
            (s.name, s.levers, characterize_city(s.levers)) for s in list_scenarios()
        ]
        out = tmp_path / "outputs"
        paths = write_reports(results, str(out))
        assert [os.path.basename(p) for p in paths] == [
            "costs.txt", "zones.txt", "summary.txt",
        ]
        summary = (out / "summary.txt").read_text()
        assert "# Scenarios: 8" in summary
        assert "zero_case: case=9 tic=0 tc=0" in summary
        zones = (out / "zones.txt").read_text()
        assert zones.count("case_number:") == 8
