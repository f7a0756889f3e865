"""Scenario definitions and multi-scenario execution.

An overlay value is either a fixed number or a callable taking the base
``PlanParams`` and returning the new value.
"""

import dataclasses

from fi_planner.params import PlanParams, Property
from fi_planner.simulation import SimulationResult, simulate

RATE_SHOCK = 0.02


def _shift(field: str, delta: float):
    return lambda params: getattr(params, field) + delta


SCENARIOS = {
    "conservative": {
        "dividend_yield": 0.035,
        "total_return": 0.045,
        "inflation": 0.03,
        "heloc_rate": 0.072,
    },
    "base": {},
    "optimistic": {
        "dividend_yield": 0.05,
        "total_return": 0.08,
        "inflation": 0.02,
        "heloc_rate": 0.06,
    },
    "high-rate": {
        # +2pt on every borrowing rate of the base plan; returns unchanged
        "primary_rate": _shift("primary_rate", RATE_SHOCK),
        "heloc_rate": _shift("heloc_rate", RATE_SHOCK),
        "rental_rate": _shift("rental_rate", RATE_SHOCK),
    },
}
SCENARIO_ORDER = ["conservative", "base", "optimistic", "high-rate"]


def apply_scenario(params: PlanParams, overrides: dict) -> PlanParams:
    resolved = {k: v(params) if callable(v) else v for k, v in overrides.items()}
    return dataclasses.replace(params, **resolved)


def run_scenarios(
    params: PlanParams,
    properties: tuple[Property, ...] | list[Property] = (),
    scenarios: dict[str, dict] | None = None,
) -> dict[str, SimulationResult]:
    """Run the plan once per scenario overlay. Runs share no state."""
    if scenarios is None:
        scenarios = SCENARIOS
    return {
        name: simulate(apply_scenario(params, overrides), properties)
        for name, overrides in scenarios.items()
    }
