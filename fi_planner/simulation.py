"""Core simulation engine.

Monthly walk over four coupled balances: primary mortgage, HELOC
(investment line of credit), portfolio and per-property rental mortgages.
Each month is a pure transition ``(state, month) -> (state, sample)``;
``simulate`` folds it over the horizon and derives the milestone summaries.
"""

import dataclasses
from dataclasses import dataclass

from fi_planner.amortization import months_in, monthly_payment, yearly_inflate
from fi_planner.params import PlanParams, Property

MIN_MONTHS = 12
MILESTONE_YEARS = (5, 10)
TRAILING_MONTHS = 12


@dataclass(frozen=True)
class RentalState:
    """Rental sub-ledger: the property's own mortgage and activation flag."""

    prop: Property
    mortgage_balance: float
    payment: float
    active: bool = False


@dataclass(frozen=True)
class SimState:
    mortgage_balance: float
    loc_balance: float
    portfolio_balance: float
    rentals: tuple[RentalState, ...] = ()
    interest_this_year: float = 0.0  # HELOC interest since the last tax rebate


@dataclass(frozen=True)
class MonthSample:
    month: int
    mortgage_balance: float
    loc_balance: float
    portfolio_balance: float
    dividends: float
    heloc_interest: float
    rental_net: float
    net_cashflow: float
    tax_savings_applied: float


@dataclass(frozen=True)
class TimeSeries:
    """Nine index-aligned monthly series."""

    months: tuple[int, ...] = ()
    mortgage_balance: tuple[float, ...] = ()
    loc_balance: tuple[float, ...] = ()
    portfolio_balance: tuple[float, ...] = ()
    dividends: tuple[float, ...] = ()
    heloc_interest: tuple[float, ...] = ()
    rental_net: tuple[float, ...] = ()
    net_cashflow: tuple[float, ...] = ()
    tax_savings_applied: tuple[float, ...] = ()

    @classmethod
    def from_samples(cls, samples: list[MonthSample]) -> "TimeSeries":
        columns = {
            f.name: tuple(getattr(s, f.name) for s in samples)
            for f in dataclasses.fields(MonthSample)
        }
        columns["months"] = columns.pop("month")
        return cls(**columns)

    def __len__(self) -> int:
        return len(self.months)


@dataclass(frozen=True)
class YearSummary:
    """Point balances and trailing-12-month flows at a milestone year."""

    mort: float
    loc: float
    port: float
    ann_div: float
    ann_loc_int: float
    ann_rental_net: float
    ann_tax_savings: float
    net_invest_income: float


@dataclass(frozen=True)
class SimulationResult:
    params: PlanParams
    properties: tuple[Property, ...]
    series: TimeSeries
    s5: YearSummary | None
    s10: YearSummary | None
    target5: float
    target10: float
    year5: float   # milestone years actually used (capped to the horizon)
    year10: float

    @property
    def total_months(self) -> int:
        return len(self.series)


def total_months(params: PlanParams) -> int:
    return max(MIN_MONTHS, months_in(params.horizon_years))


def available_room(params: PlanParams, mortgage_balance: float, loc_balance: float) -> float:
    """HELOC room left under the tighter of the combined and HELOC-only ceilings."""
    return max(0.0, min(
        params.max_combined_credit - (mortgage_balance + loc_balance),
        params.max_heloc_credit - loc_balance,
    ))


def initial_state(params: PlanParams, properties: tuple[Property, ...] | list[Property]) -> SimState:
    """Opening balances; rental mortgages are sized and amortized once here."""
    rentals = []
    for prop in properties:
        loan = prop.price * params.rental_ltv
        rentals.append(RentalState(
            prop=prop,
            mortgage_balance=loan,
            payment=monthly_payment(loan, params.rental_rate, params.rental_amort_years),
        ))
    return SimState(
        mortgage_balance=params.mortgage_balance,
        loc_balance=0.0,
        portfolio_balance=0.0,
        rentals=tuple(rentals),
    )


def _service_loan(balance: float, payment: float, annual_rate: float) -> float:
    """Principal portion of one monthly payment, never below zero or above balance."""
    interest = balance * annual_rate / 12
    return max(0.0, min(payment - interest, balance))


def step_month(
    params: PlanParams, mortgage_payment: float, state: SimState, month: int,
) -> tuple[SimState, MonthSample]:
    """Advance one month. Step order matters: each draw sees the balances left by the previous step."""
    mort = state.mortgage_balance
    loc = state.loc_balance
    port = state.portfolio_balance

    # Activate rentals whose purchase month has arrived; HELOC-funded down payments are capped by room
    rentals = []
    for r in state.rentals:
        if not r.active and month >= r.prop.purchase_month:
            r = dataclasses.replace(r, active=True)
            if r.prop.use_heloc:
                desired = r.prop.down_payment(params.rental_ltv)
                loc += min(desired, available_room(params, mort, loc))
        rentals.append(r)

    # Primary mortgage payment, then fixed extra prepayment
    principal = _service_loan(mort, mortgage_payment, params.primary_rate)
    mort = max(0.0, mort - principal)
    extra = min(params.extra_prepay, mort)
    mort = max(0.0, mort - extra)

    # Reborrow freed principal into the portfolio
    reborrow = min(principal + extra, available_room(params, mort, loc))
    loc += reborrow
    port += reborrow

    # HELOC interest; capitalized portion limited to room, remainder dropped
    loc_interest = loc * params.heloc_rate / 12
    interest_this_year = state.interest_this_year + loc_interest
    if params.capitalize_interest:
        loc += min(loc_interest, available_room(params, mort, loc))

    # Portfolio growth, fully reinvested
    dividends = port * params.dividend_yield / 12
    growth = port * params.price_return / 12
    port += growth + dividends

    rental_net = 0.0
    serviced = []
    for r in rentals:
        if r.active:
            rental_principal = _service_loan(r.mortgage_balance, r.payment, params.rental_rate)
            r = dataclasses.replace(r, mortgage_balance=max(0.0, r.mortgage_balance - rental_principal))
            rental_net += r.prop.monthly_noi() - r.payment
        serviced.append(r)

    # Year-end: tax refund on deductible interest prepays the mortgage and is reborrowed
    tax_applied = 0.0
    if month % 12 == 0:
        tax_savings = interest_this_year * params.tax_rate
        tax_applied = min(tax_savings, mort, available_room(params, mort, loc))
        mort = max(0.0, mort - tax_applied)
        loc += tax_applied
        port += tax_applied
        interest_this_year = 0.0

    interest_paid = 0.0 if params.capitalize_interest else loc_interest
    net_cashflow = rental_net - interest_paid

    new_state = SimState(
        mortgage_balance=mort,
        loc_balance=loc,
        portfolio_balance=port,
        rentals=tuple(serviced),
        interest_this_year=interest_this_year,
    )
    sample = MonthSample(
        month=month,
        mortgage_balance=mort,
        loc_balance=loc,
        portfolio_balance=port,
        dividends=dividends,
        heloc_interest=loc_interest,
        rental_net=rental_net,
        net_cashflow=net_cashflow,
        tax_savings_applied=tax_applied,
    )
    return new_state, sample


def year_summary(
    series: TimeSeries, year: float, tax_rate: float, capitalize_interest: bool,
) -> YearSummary | None:
    """Summarize ``series`` at the end of ``year``. None when the horizon is too short."""
    idx = min(len(series), months_in(year)) - 1
    if idx < 0:
        return None
    lo = max(0, idx - (TRAILING_MONTHS - 1))
    window = slice(lo, idx + 1)

    ann_div = sum(series.dividends[window])
    ann_loc_int = sum(series.heloc_interest[window])
    ann_rental_net = sum(series.rental_net[window])
    interest_paid = 0.0 if capitalize_interest else ann_loc_int

    return YearSummary(
        mort=series.mortgage_balance[idx],
        loc=series.loc_balance[idx],
        port=series.portfolio_balance[idx],
        ann_div=ann_div,
        ann_loc_int=ann_loc_int,
        ann_rental_net=ann_rental_net,
        ann_tax_savings=ann_loc_int * tax_rate,
        net_invest_income=ann_div + ann_rental_net - interest_paid,
    )


def simulate(
    params: PlanParams, properties: tuple[Property, ...] | list[Property] = (),
) -> SimulationResult:
    """Run the monthly projection and derive the year-5 / year-10 milestones."""
    properties = tuple(properties)
    mortgage_payment = monthly_payment(
        params.mortgage_balance, params.primary_rate, params.amort_years,
    )

    state = initial_state(params, properties)
    samples = []
    for month in range(1, total_months(params) + 1):
        state, sample = step_month(params, mortgage_payment, state, month)
        samples.append(sample)
    series = TimeSeries.from_samples(samples)

    y5, y10 = (min(y, params.horizon_years) for y in MILESTONE_YEARS)
    return SimulationResult(
        params=params,
        properties=properties,
        series=series,
        s5=year_summary(series, y5, params.tax_rate, params.capitalize_interest),
        s10=year_summary(series, y10, params.tax_rate, params.capitalize_interest),
        target5=yearly_inflate(params.salary_target, params.inflation, y5),
        target10=yearly_inflate(params.salary_target, params.inflation, y10),
        year5=y5,
        year10=y10,
    )
