"""CLI entry point for scenario comparison."""

import argparse
import sys
from pathlib import Path

from fi_planner.analysis import assess_target
from fi_planner.config import parse_args
from fi_planner.scenarios import SCENARIO_ORDER, SCENARIOS, apply_scenario, run_scenarios


def _add_args(parser: argparse.ArgumentParser):
    parser.add_argument("--chart-dir", type=Path, default=None, help="Write a portfolio comparison chart to this directory")
    parser.add_argument("--name", type=str, default="", help="Chart filename suffix")


def print_parameters(base):
    """Print the scenario overlays on top of the base plan."""
    print("=" * 100)
    print("SCENARIO COMPARISON")
    print("=" * 100)
    print(f"{'Scenario':<14} {'Div yield':>10} {'Total ret':>10} {'Inflation':>10} {'Mortgage':>10} {'HELOC':>10} {'Rental':>10}")
    print("-" * 100)
    for name in SCENARIO_ORDER:
        p = apply_scenario(base, SCENARIOS[name])
        cells = [
            getattr(p, key) * 100
            for key in ("dividend_yield", "total_return", "inflation", "primary_rate", "heloc_rate", "rental_rate")
        ]
        print(f"{name:<14} " + " ".join(f"{c:>9.2f}%" for c in cells))
    print("-" * 100)
    print()


def _format_cell(summary, target, year, params):
    a = assess_target(summary, target, year, params)
    if a is None:
        return f"{'---':>22}"
    mark = "✓" if a.on_track else "✗"
    return f"{a.net_invest_income:>12,.0f}/{a.target:>8,.0f}{mark}"


def print_results(results: dict):
    print(f"{'Scenario':<14} {'Portfolio@Y5':>14} {'LOC@Y5':>12} {'Income/target Y5':>22} {'Portfolio@Y10':>14} {'Income/target Y10':>22}")
    print("-" * 110)
    for name in SCENARIO_ORDER:
        r = results[name]
        p5 = f"{r.s5.port:>14,.0f}" if r.s5 else f"{'---':>14}"
        l5 = f"{r.s5.loc:>12,.0f}" if r.s5 else f"{'---':>12}"
        p10 = f"{r.s10.port:>14,.0f}" if r.s10 else f"{'---':>14}"
        print(
            f"{name:<14} {p5} {l5} "
            f"{_format_cell(r.s5, r.target5, r.year5, r.params)} "
            f"{p10} {_format_cell(r.s10, r.target10, r.year10, r.params)}"
        )
    print("-" * 110)


def main(argv: list[str] | None = None):
    params, properties, args = parse_args("FI planner scenario comparison", _add_args, argv)
    print_parameters(params)
    results = run_scenarios(params, properties)
    print_results(results)

    if args.chart_dir is not None:
        from fi_planner.charts import plot_scenarios
        path = plot_scenarios(results, args.chart_dir, args.name)
        print(f"Chart: {path}", file=sys.stderr)


if __name__ == "__main__":
    main()
