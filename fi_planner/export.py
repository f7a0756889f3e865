"""CSV and JSON projections of a simulation result."""

import dataclasses
import json
from pathlib import Path

import pandas as pd

from fi_planner.simulation import SimulationResult

DEFAULT_CSV_NAME = "fi-planner-export.csv"
DEFAULT_JSON_NAME = "fi-plan.json"

# series attribute → CSV header
CSV_COLUMNS = {
    "months": "Month",
    "mortgage_balance": "Mortgage",
    "loc_balance": "Investment LOC",
    "portfolio_balance": "Portfolio",
    "dividends": "Dividends",
    "heloc_interest": "HELOC Interest",
    "rental_net": "Rental Net",
    "net_cashflow": "Net Cashflow",
    "tax_savings_applied": "Tax Savings Applied",
}


def to_dataframe(result: SimulationResult) -> pd.DataFrame:
    """One row per simulated month, one column per series."""
    series = result.series
    return pd.DataFrame(
        {header: list(getattr(series, attr)) for attr, header in CSV_COLUMNS.items()}
    )


def write_csv(result: SimulationResult, path: Path) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    to_dataframe(result).to_csv(path, index=False, float_format="%.2f")
    return path


def to_json_dict(result: SimulationResult) -> dict:
    """Plain-dict document: inputs, properties and results (absent summaries are None)."""
    series = result.series
    return {
        "inputs": dataclasses.asdict(result.params),
        "properties": [dataclasses.asdict(p) for p in result.properties],
        "results": {
            **{attr: list(getattr(series, attr)) for attr in CSV_COLUMNS},
            "s5": dataclasses.asdict(result.s5) if result.s5 is not None else None,
            "s10": dataclasses.asdict(result.s10) if result.s10 is not None else None,
            "target5": result.target5,
            "target10": result.target10,
            "year5": result.year5,
            "year10": result.year10,
        },
    }


def write_json(result: SimulationResult, path: Path) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(to_json_dict(result), f, indent=2)
    return path
