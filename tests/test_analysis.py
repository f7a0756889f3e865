"""Tests for target assessment and capacity snapshot."""

import pytest
from fi_planner import (
    DEFAULT_PROPERTIES,
    PlanParams,
    YearSummary,
    assess_result,
    assess_target,
    capacity_snapshot,
    simulate,
)


def _summary(net_income: float) -> YearSummary:
    return YearSummary(
        mort=0, loc=0, port=0, ann_div=net_income, ann_loc_int=0,
        ann_rental_net=0, ann_tax_savings=0, net_invest_income=net_income,
    )


class TestCapacitySnapshot:
    def test_defaults(self):
        cap = capacity_snapshot(PlanParams())
        assert cap.max_cltv == pytest.approx(960_000)
        assert cap.heloc_cap == pytest.approx(780_000)
        assert cap.heloc_room == pytest.approx(960_000 - 320_836.56)
        assert cap.existing_mortgage == 320_836.56

    def test_heloc_cap_binds(self):
        cap = capacity_snapshot(PlanParams(mortgage_balance=0))
        assert cap.heloc_room == pytest.approx(780_000)

    def test_underwater_room_is_zero(self):
        cap = capacity_snapshot(PlanParams(mortgage_balance=1_000_000))
        assert cap.heloc_room == 0


class TestAssessTarget:
    def test_shortfall(self):
        a = assess_target(_summary(100_000), 150_000, 5, PlanParams(dividend_yield=0.05))
        assert not a.on_track
        assert a.shortfall == pytest.approx(50_000)
        assert a.additional_investment_needed == pytest.approx(1_000_000)
        assert a.additional_rental_income_needed == pytest.approx(50_000)

    def test_on_track(self):
        a = assess_target(_summary(160_000), 150_000, 10, PlanParams())
        assert a.on_track
        assert a.shortfall == 0
        assert a.additional_investment_needed == 0

    def test_exactly_on_target(self):
        a = assess_target(_summary(150_000), 150_000, 5, PlanParams())
        assert a.on_track

    def test_zero_yield(self):
        a = assess_target(_summary(0), 150_000, 5, PlanParams(dividend_yield=0))
        assert a.additional_investment_needed is None

    def test_absent_summary(self):
        assert assess_target(None, 150_000, 5, PlanParams()) is None


class TestAssessResult:
    def test_two_milestones(self):
        r = simulate(PlanParams(), DEFAULT_PROPERTIES)
        assessments = assess_result(r)
        assert [a.year for a in assessments] == [5, 10]
        assert assessments[0].target == r.target5
        assert assessments[1].net_invest_income == r.s10.net_invest_income

    def test_zero_horizon_has_none(self):
        r = simulate(PlanParams(horizon_years=0), [])
        assert assess_result(r) == []
