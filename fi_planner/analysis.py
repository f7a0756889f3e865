"""Target comparison and credit-capacity helpers for simulation results."""

from dataclasses import dataclass

from fi_planner.params import PlanParams
from fi_planner.simulation import SimulationResult, YearSummary


@dataclass(frozen=True)
class CapacitySnapshot:
    """Credit ceilings at the start of the plan (before any reborrowing)."""

    max_cltv: float
    heloc_cap: float
    heloc_room: float
    existing_mortgage: float


@dataclass(frozen=True)
class TargetAssessment:
    year: float
    target: float
    net_invest_income: float
    on_track: bool
    shortfall: float
    # Extra portfolio needed to close the gap at the configured dividend yield
    additional_investment_needed: float | None
    additional_rental_income_needed: float


def capacity_snapshot(params: PlanParams) -> CapacitySnapshot:
    max_cltv = params.max_combined_credit
    heloc_cap = params.max_heloc_credit
    return CapacitySnapshot(
        max_cltv=max_cltv,
        heloc_cap=heloc_cap,
        heloc_room=max(0.0, min(max_cltv - params.mortgage_balance, heloc_cap)),
        existing_mortgage=params.mortgage_balance,
    )


def assess_target(
    summary: YearSummary | None, target: float, year: float, params: PlanParams,
) -> TargetAssessment | None:
    """Compare milestone net investment income with the inflation-adjusted target."""
    if summary is None:
        return None
    income = summary.net_invest_income
    shortfall = max(0.0, target - income)
    additional_investment = None
    if params.dividend_yield > 0:
        additional_investment = shortfall / params.dividend_yield
    return TargetAssessment(
        year=year,
        target=target,
        net_invest_income=income,
        on_track=income >= target,
        shortfall=shortfall,
        additional_investment_needed=additional_investment,
        additional_rental_income_needed=shortfall,
    )


def assess_result(result: SimulationResult) -> list[TargetAssessment]:
    """Assessments for both milestones, skipping any the horizon cannot reach."""
    assessments = [
        assess_target(result.s5, result.target5, result.year5, result.params),
        assess_target(result.s10, result.target10, result.year10, result.params),
    ]
    return [a for a in assessments if a is not None]
