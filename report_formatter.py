"""
Report Formatter Module.

Formats CityCharacteristics as key:value text blocks and writes them to
report files. Formatting only: no model logic lives here.
"""

import logging
import os
from typing import List, Sequence, Tuple

from data_models import CityCharacteristics, CityLevers

logger = logging.getLogger(__name__)


COSTS_FIELDS = [
    ("withdrawal_cost", "withdrawal_cost"),
    ("value_after_withdrawal", "value_after_withdrawal"),
    ("resistance_cost", "resiliency_cost"),
    ("dike_cost", "dike_cost"),
    ("total_investment_cost", "total_investment_cost"),
]

ZONES_FIELDS = [
    ("zone1_value", "zone1_value"),
    ("zone2_value", "zone2_value"),
    ("zone3_value", "zone3_value"),
    ("zone4_value", "zone4_value"),
    ("zone1_top", "zone1_top"),
    ("zone2_top", "zone2_top"),
    ("zone3_top", "zone3_top"),
    ("zone4_top", "zone4_top"),
]


def _format_number(value: float) -> str:
    return f"{value:.15g}"


def _header(name: str, levers: CityLevers) -> List[str]:
    return [
        f"# Scenario: {name}",
        f"# Levers: W={_format_number(levers.withdrawal_height)}, "
        f"B={_format_number(levers.dike_base_height)}, "
        f"R={_format_number(levers.resiliency_height)}, "
        f"P={_format_number(levers.resistance_fraction)}, "
        f"D={_format_number(levers.dike_height)}",
    ]


def format_costs_block(name: str, levers: CityLevers, record: CityCharacteristics) -> str:
    """Costs block: one key:value line per strategy cost."""
    lines = _header(name, levers)
    for key, attr in COSTS_FIELDS:
        lines.append(f"{key}: {_format_number(getattr(record, attr))}")
    return "\n".join(lines) + "\n"


def format_zones_block(name: str, levers: CityLevers, record: CityCharacteristics) -> str:
    """Zones block: case number then zone values and tops."""
    lines = _header(name, levers)
    lines.append(f"case_number: {record.case_number.value}")
    for key, attr in ZONES_FIELDS:
        lines.append(f"{key}: {_format_number(getattr(record, attr))}")
    return "\n".join(lines) + "\n"


def format_summary(record: CityCharacteristics) -> str:
    """Human-readable summary for console output."""
    lines = []
    lines.append("=" * 70)
    lines.append(f"CASE {record.case_number.value}: {record.case_number.name}")
    lines.append("=" * 70)
    lines.append(f"  Withdrawal Height:     {record.withdrawal_height:.2f} m")
    lines.append(f"  Dike Base Height:      {record.dike_base_height:.2f} m")
    lines.append(f"  Resiliency Height:     {record.resiliency_height:.2f} m")
    lines.append(f"  Resistance Fraction:   {record.resistance_fraction:.2f}")
    lines.append(f"  Dike Height:           {record.dike_height:.2f} m")
    lines.append("")
    lines.append("Costs:")
    lines.append(f"  Withdrawal Cost:       ${record.withdrawal_cost:,.2f}")
    lines.append(f"  Dike Cost:             ${record.dike_cost:,.2f}")
    lines.append(f"  Resiliency Cost:       ${record.resiliency_cost:,.2f}")
    lines.append(f"  Total Investment Cost: ${record.total_investment_cost:,.2f}")
    lines.append(f"  Total Net Cost:        ${record.total_cost:,.2f}")
    lines.append("")
    lines.append("Zones (value / top elevation):")
    for i, (value, top) in enumerate(zip(record.zone_values, record.zone_tops), 1):
        lines.append(f"  Zone {i}: ${value:,.2f} / {top:.2f} m")
    lines.append(f"  Final City Value:      ${record.final_city_value:,.2f}")
    lines.append("=" * 70)
    return "\n".join(lines)


def write_reports(
    results: Sequence[Tuple[str, CityLevers, CityCharacteristics]],
    output_dir: str
) -> List[str]:
    """
    Write costs.txt, zones.txt and summary.txt for a set of results.

    Args:
        results: (name, levers, record) triples
        output_dir: Directory to write into (created if missing)

    Returns:
        Paths of the written files
    """
    os.makedirs(output_dir, exist_ok=True)
    costs_path = os.path.join(output_dir, "costs.txt")
    zones_path = os.path.join(output_dir, "zones.txt")
    summary_path = os.path.join(output_dir, "summary.txt")

    with open(costs_path, "w", encoding="utf-8") as f:
        f.write("\n".join(format_costs_block(n, lv, r) for n, lv, r in results))

    with open(zones_path, "w", encoding="utf-8") as f:
        f.write("\n".join(format_zones_block(n, lv, r) for n, lv, r in results))

    with open(summary_path, "w", encoding="utf-8") as f:
        f.write("# iCOW city cost model outputs\n")
        f.write(f"# Scenarios: {len(results)}\n\n")
        for name, _, record in results:
            f.write(
                f"{name}: case={record.case_number.value} "
                f"tic={_format_number(record.total_investment_cost)} "
                f"tc={_format_number(record.total_cost)}\n"
            )

    logger.info(f"Wrote {len(results)} results to {output_dir}")
    return [costs_path, zones_path, summary_path]
