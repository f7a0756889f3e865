"""Chart generation for plan simulation results."""

import math
from pathlib import Path

import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt
import matplotlib.ticker as ticker

from fi_planner.amortization import yearly_inflate
from fi_planner.simulation import SimulationResult, year_summary

BALANCE_COLORS = {
    "mortgage_balance": "#d62728",   # red
    "loc_balance": "#ff7f0e",        # orange
    "portfolio_balance": "#2ca02c",  # green
}
BALANCE_LABELS = {
    "mortgage_balance": "Mortgage",
    "loc_balance": "Investment LOC",
    "portfolio_balance": "Portfolio",
}

# Scenario color mapping
SCENARIO_COLORS = {
    "conservative": "#1f77b4",
    "base": "#2ca02c",
    "optimistic": "#ff7f0e",
    "high-rate": "#d62728",
}

DEFAULT_COLOR = "#7f7f7f"


def _format_dollar_axis(ax: plt.Axes):
    ax.yaxis.set_major_formatter(
        ticker.FuncFormatter(lambda x, _: f"${x / 1000:,.0f}k" if x != 0 else "0")
    )


def _save(fig: plt.Figure, output_path: Path, stem: str, name: str) -> Path:
    output_path.mkdir(parents=True, exist_ok=True)
    suffix = f"-{name}" if name else ""
    filepath = output_path / f"{stem}{suffix}.png"
    fig.tight_layout()
    fig.savefig(filepath, dpi=150)
    plt.close(fig)
    return filepath


def plot_balances(result: SimulationResult, output_path: Path, name: str = "") -> Path:
    """Line chart of mortgage, LOC and portfolio balances by month.

    Args:
        result: simulate() return value.
        output_path: directory to save the PNG.
        name: optional suffix for the output filename (e.g. "a" → "balances-a.png").

    Returns:
        Path to the generated PNG file.
    """
    series = result.series
    if not len(series):
        raise ValueError("No monthly samples for balance chart")

    fig, ax = plt.subplots(figsize=(14, 8))
    for attr, color in BALANCE_COLORS.items():
        ax.plot(series.months, getattr(series, attr), label=BALANCE_LABELS[attr], color=color, linewidth=2)

    # Property purchase markers
    y_lo, y_hi = ax.get_ylim()
    for i, prop in enumerate(result.properties):
        if prop.purchase_month > result.total_months:
            continue
        ax.axvline(prop.purchase_month, color="#888888", linewidth=0.7, linestyle=":", alpha=0.6, zorder=3)
        ax.annotate(
            prop.name,
            xy=(prop.purchase_month, y_lo + (y_hi - y_lo) * (0.85 - 0.07 * (i % 4))),
            fontsize=10, ha="center", va="bottom",
            bbox=dict(boxstyle="round,pad=0.4", fc="white", ec="#888888", alpha=0.9, linewidth=0.8),
            zorder=10,
        )

    ax.set_xlabel("Month")
    ax.set_ylabel("Balance")
    ax.set_title("Balances over time")
    ax.legend(loc="upper left")
    ax.grid(True, alpha=0.3)
    _format_dollar_axis(ax)
    return _save(fig, output_path, "balances", name)


def income_year_ends(n_months: int) -> list[float]:
    """Year-end points for the income chart; the last one may close a partial year."""
    return [min(y * 12, n_months) / 12 for y in range(1, math.ceil(n_months / 12) + 1)]


def plot_income(result: SimulationResult, output_path: Path, name: str = "") -> Path:
    """Year-end trailing-12-month income against the inflation-adjusted target."""
    params = result.params
    series = result.series
    year_ends = income_year_ends(len(series))
    if not year_ends:
        raise ValueError("No monthly samples for income chart")
    years = list(range(1, len(year_ends) + 1))

    summaries = [
        year_summary(series, y, params.tax_rate, params.capitalize_interest) for y in year_ends
    ]
    fig, ax = plt.subplots(figsize=(14, 8))
    ax.bar(
        [y - 0.2 for y in years], [s.ann_div for s in summaries],
        width=0.4, color="#2ca02c", alpha=0.75, label="Dividends",
    )
    ax.bar(
        [y + 0.2 for y in years], [s.ann_rental_net for s in summaries],
        width=0.4, color="#8da0cb", alpha=0.75, label="Rental net",
    )
    ax.plot(
        years, [s.net_invest_income for s in summaries],
        color="#1f77b4", linewidth=2, marker="o", label="Net investment income",
    )
    if not params.capitalize_interest:
        ax.plot(
            years, [s.ann_loc_int for s in summaries],
            color="#ff7f0e", linewidth=1.5, marker="s", label="HELOC interest (paid cash)",
        )
    ax.plot(
        years, [yearly_inflate(params.salary_target, params.inflation, y) for y in year_ends],
        color="#d62728", linewidth=1.8, linestyle="--", label="Salary target (inflated)",
    )
    ax.axhline(0, color="black", linewidth=1.0)
    ax.set_xlabel("Year")
    ax.set_ylabel("Annual amount")
    ax.set_title("Passive income vs. target")
    ax.legend(loc="upper left")
    ax.grid(True, alpha=0.3)
    _format_dollar_axis(ax)
    return _save(fig, output_path, "income", name)


def plot_scenarios(results: dict[str, SimulationResult], output_path: Path, name: str = "") -> Path:
    """Portfolio balance trajectory per scenario."""
    if not results:
        raise ValueError("No scenario results for comparison chart")

    fig, ax = plt.subplots(figsize=(14, 8))
    for scenario_name, result in results.items():
        color = SCENARIO_COLORS.get(scenario_name, DEFAULT_COLOR)
        ax.plot(
            result.series.months, result.series.portfolio_balance,
            label=scenario_name, color=color, linewidth=2,
        )
    ax.set_xlabel("Month")
    ax.set_ylabel("Portfolio balance")
    ax.set_title("Portfolio by scenario")
    ax.legend(loc="upper left")
    ax.grid(True, alpha=0.3)
    _format_dollar_axis(ax)
    return _save(fig, output_path, "scenarios", name)
