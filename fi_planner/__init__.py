"""FI planner: Smith manoeuvre and rental projection package."""

from fi_planner.params import DEFAULT_PROPERTIES, PlanParams, Property
from fi_planner.amortization import monthly_payment, yearly_inflate
from fi_planner.simulation import (
    SimulationResult,
    TimeSeries,
    YearSummary,
    available_room,
    simulate,
    step_month,
    year_summary,
)
from fi_planner.analysis import (
    CapacitySnapshot,
    TargetAssessment,
    assess_result,
    assess_target,
    capacity_snapshot,
)
from fi_planner.scenarios import SCENARIOS, run_scenarios

__all__ = [
    "DEFAULT_PROPERTIES",
    "PlanParams",
    "Property",
    "monthly_payment",
    "yearly_inflate",
    "SimulationResult",
    "TimeSeries",
    "YearSummary",
    "available_room",
    "simulate",
    "step_month",
    "year_summary",
    "CapacitySnapshot",
    "TargetAssessment",
    "assess_result",
    "assess_target",
    "capacity_snapshot",
    "SCENARIOS",
    "run_scenarios",
]
