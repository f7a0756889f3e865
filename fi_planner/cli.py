"""CLI entry point for a single plan projection."""

import argparse
import sys
from pathlib import Path

from fi_planner.amortization import monthly_payment
from fi_planner.analysis import TargetAssessment, assess_result, capacity_snapshot
from fi_planner.config import parse_args
from fi_planner.params import PlanParams, Property
from fi_planner.simulation import SimulationResult, YearSummary, simulate


def _money(v: float) -> str:
    return f"${v:,.0f}"


def _pct(v: float) -> str:
    return f"{v * 100:.2f}%"


def _add_output_args(parser: argparse.ArgumentParser):
    parser.add_argument("--csv", type=Path, default=None, help="Write monthly series as CSV to this path")
    parser.add_argument("--json", type=Path, default=None, help="Write inputs and results as JSON to this path")
    parser.add_argument("--chart-dir", type=Path, default=None, help="Write PNG charts to this directory")
    parser.add_argument("--name", type=str, default="", help="Chart filename suffix (e.g. a → balances-a.png)")
    parser.add_argument("--yearly", action="store_true", help="Print a year-end log")


def _print_header(params: PlanParams, properties: list[Property]):
    cap = capacity_snapshot(params)
    print("=" * 80)
    print(f"FI plan: Smith manoeuvre + rentals ({params.horizon_years:g} years)")
    print(f"  Home value: {_money(params.home_value)} / Mortgage: {_money(params.mortgage_balance)}"
          f" at {_pct(params.primary_rate)}, {params.amort_years:g}y amortization, +{_money(params.extra_prepay)}/mo")
    payment = monthly_payment(params.mortgage_balance, params.primary_rate, params.amort_years)
    print(f"  Mortgage payment: {_money(payment)}/mo level, {_money(payment + params.extra_prepay)}/mo with prepayment")
    print(f"  HELOC: {_pct(params.heloc_rate)}, max CLTV {_pct(params.max_ltv)} ({_money(cap.max_cltv)}),"
          f" HELOC cap {_pct(params.max_heloc_ltv)} ({_money(cap.heloc_cap)}), opening room {_money(cap.heloc_room)}")
    interest_mode = "capitalized" if params.capitalize_interest else "paid in cash"
    print(f"  HELOC interest {interest_mode}, tax rate {_pct(params.tax_rate)}")
    print(f"  Portfolio: dividend {_pct(params.dividend_yield)}, total return {_pct(params.total_return)},"
          f" inflation {_pct(params.inflation)}")
    if properties:
        for p in properties:
            source = "HELOC" if p.use_heloc else "cash"
            print(f"  Rental: {p.name} {_money(p.price)} cap {_pct(p.cap_rate)} month {p.purchase_month} (down payment: {source})")
    else:
        print("  Rentals: none")
    print(f"  Salary target: {_money(params.salary_target)} (today's dollars)")
    print("=" * 80)
    print()


def _print_summary(label: str, summary: YearSummary | None):
    print(label)
    print("-" * 42)
    if summary is None:
        print("  (horizon too short)")
        return
    rows = [
        ("Mortgage balance", summary.mort),
        ("Investment LOC", summary.loc),
        ("Portfolio", summary.port),
        ("Dividends (12m)", summary.ann_div),
        ("HELOC interest (12m)", summary.ann_loc_int),
        ("Rental net (12m)", summary.ann_rental_net),
        ("Tax savings (12m)", summary.ann_tax_savings),
        ("Net investment income", summary.net_invest_income),
    ]
    for name, value in rows:
        print(f"  {name:<24} {value:>16,.2f}")


def _print_assessment(a: TargetAssessment):
    status = "On track" if a.on_track else "Shortfall"
    print(f"  Year {a.year:g}: income {_money(a.net_invest_income)} vs target {_money(a.target)} → {status}")
    if a.on_track:
        return
    print(f"    Need {_money(a.shortfall)} more annual income")
    if a.additional_investment_needed is not None:
        print(f"    Additional investment needed at current yield: {_money(a.additional_investment_needed)}")
    print(f"    Or additional rental net income: {_money(a.additional_rental_income_needed)}")


def _print_yearly_log(result: SimulationResult):
    series = result.series
    print("\nYear-end log")
    print("-" * 100)
    print(f"{'Month':>6} {'Mortgage':>14} {'LOC':>14} {'Portfolio':>14} {'Dividends':>12} {'Interest':>12} {'Rental net':>12} {'Tax applied':>12}")
    print("-" * 100)
    for i, m in enumerate(series.months):
        if m % 12 == 0 or i == len(series) - 1:
            print(
                f"{m:>6} "
                f"{series.mortgage_balance[i]:>14,.0f} "
                f"{series.loc_balance[i]:>14,.0f} "
                f"{series.portfolio_balance[i]:>14,.0f} "
                f"{series.dividends[i]:>12,.0f} "
                f"{series.heloc_interest[i]:>12,.0f} "
                f"{series.rental_net[i]:>12,.0f} "
                f"{series.tax_savings_applied[i]:>12,.0f}"
            )
    print("-" * 100)


def print_report(result: SimulationResult, yearly: bool = False):
    _print_header(result.params, list(result.properties))
    _print_summary(f"Year {result.year5:g} summary", result.s5)
    print()
    _print_summary(f"Year {result.year10:g} summary", result.s10)
    print()
    print("Target check")
    print("-" * 42)
    for a in assess_result(result):
        _print_assessment(a)
    if yearly:
        _print_yearly_log(result)


def main(argv: list[str] | None = None):
    """Run one projection and print the milestone report."""
    params, properties, args = parse_args("FI planner projection", _add_output_args, argv)
    result = simulate(params, properties)
    print_report(result, yearly=args.yearly)

    if args.csv is not None:
        from fi_planner.export import write_csv
        path = write_csv(result, args.csv)
        print(f"CSV: {path}", file=sys.stderr)
    if args.json is not None:
        from fi_planner.export import write_json
        path = write_json(result, args.json)
        print(f"JSON: {path}", file=sys.stderr)
    if args.chart_dir is not None:
        from fi_planner.charts import plot_balances, plot_income
        print("Generating charts...", file=sys.stderr)
        for plot in (plot_balances, plot_income):
            path = plot(result, args.chart_dir, args.name)
            print(f"  {path}", file=sys.stderr)


if __name__ == "__main__":
    main()
