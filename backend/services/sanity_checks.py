"""
Characteristics Sanity Checks.

Compares a CityCharacteristics record against the invariants every case
must satisfy. Reports deviations; never raises.
"""

from typing import Any, Dict, List

from data_models import CaseNumber, CityCharacteristics, ModelConstants


RELATIVE_TOLERANCE = 1e-9

# Fields each case forces to exactly zero
CASE_ZERO_FIELDS = {
    CaseNumber.DIKE_SETBACK_RESILIENCY_PARTIAL: [],
    CaseNumber.DIKE_SETBACK_RESILIENCY_FULL: ["zone2_value"],
    CaseNumber.DIKE_SETBACK: ["zone1_value", "resiliency_cost"],
    CaseNumber.DIKE_ONLY: ["zone1_value", "zone2_value", "resiliency_cost"],
    CaseNumber.SETBACK_RESILIENCY_PARTIAL: ["zone3_value"],
    CaseNumber.SETBACK_RESILIENCY_FULL: ["zone2_value", "zone3_value", "dike_cost"],
    CaseNumber.SETBACK_ONLY: ["zone1_value", "zone3_value", "resiliency_cost"],
    CaseNumber.RESILIENCY_ONLY: ["zone2_value", "zone3_value", "dike_cost"],
    CaseNumber.NO_INTERVENTION: [
        "zone1_value", "zone2_value", "zone3_value", "dike_cost", "resiliency_cost",
    ],
}


def check_characteristics(
    record: CityCharacteristics,
    constants: ModelConstants,
) -> List[Dict[str, Any]]:
    """
    Check a record against the model invariants.

    Args:
        record: CityCharacteristics
        constants: ModelConstants used to produce it

    Returns:
        List of violation dicts (empty if consistent)
    """
    violations = []

    if record.case_number is CaseNumber.NOT_COMPUTED:
        violations.append({
            "check": "Classification",
            "detail": "Record was never classified",
        })
        return violations

    # Zone monotonicity
    tops = record.zone_tops
    for lower, upper in zip(tops, tops[1:]):
        if lower > upper:
            violations.append({
                "check": "Zone Monotonicity",
                "detail": f"Zone tops not non-decreasing: {tops}",
            })
            break
    if record.zone4_top != constants.city_elevation_change:
        violations.append({
            "check": "Zone Monotonicity",
            "detail": (
                f"zone4_top ({record.zone4_top}) must equal the city elevation "
                f"change ({constants.city_elevation_change})"
            ),
        })

    # Value conservation
    zone_sum = sum(record.zone_values)
    if zone_sum != record.final_city_value:
        violations.append({
            "check": "Value Conservation",
            "detail": f"Zone values sum to {zone_sum}, final city value is {record.final_city_value}",
        })
    ceiling = (
        record.value_after_withdrawal
        * max(1.0, constants.protected_value_ratio)
        * (1.0 + RELATIVE_TOLERANCE)
    )
    if record.final_city_value > ceiling:
        violations.append({
            "check": "Value Conservation",
            "detail": f"Final city value {record.final_city_value} exceeds ceiling {ceiling}",
        })

    # Case consistency
    for field in CASE_ZERO_FIELDS[record.case_number]:
        if getattr(record, field) != 0:
            violations.append({
                "check": "Case Consistency",
                "detail": f"Case {record.case_number.value} requires {field} = 0, got {getattr(record, field)}",
            })

    # Aggregation
    expected_tic = record.withdrawal_cost + record.dike_cost + record.resiliency_cost
    if abs(record.total_investment_cost - expected_tic) > RELATIVE_TOLERANCE * max(1.0, abs(expected_tic)):
        violations.append({
            "check": "Aggregation",
            "detail": f"Total investment cost {record.total_investment_cost} != {expected_tic}",
        })

    return violations
