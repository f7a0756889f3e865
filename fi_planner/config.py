"""TOML config loader with CLI > config > default resolution."""

import argparse
import dataclasses
import sys
import tomllib
from pathlib import Path
from typing import Callable

from fi_planner.params import DEFAULT_PROPERTIES, PlanParams, Property

DEFAULT_CONFIG_PATH = Path("fi_planner.toml")

DEFAULTS = {f.name: f.default for f in dataclasses.fields(PlanParams)}
DEFAULTS["properties"] = [dataclasses.asdict(p) for p in DEFAULT_PROPERTIES]

_HELP = {
    "home_value": "Home value",
    "mortgage_balance": "Primary mortgage balance",
    "primary_rate": "Primary mortgage annual rate (fraction)",
    "amort_years": "Primary mortgage amortization (years)",
    "extra_prepay": "Extra monthly prepayment",
    "heloc_rate": "HELOC annual rate (fraction)",
    "max_ltv": "Max combined LTV (fraction)",
    "max_heloc_ltv": "Max HELOC-only LTV (fraction)",
    "tax_rate": "Marginal tax rate (fraction)",
    "dividend_yield": "Portfolio dividend yield (fraction)",
    "total_return": "Portfolio total return (fraction)",
    "inflation": "Inflation rate (fraction)",
    "rental_rate": "Rental mortgage annual rate (fraction)",
    "rental_amort_years": "Rental mortgage amortization (years)",
    "rental_ltv": "Rental mortgage LTV (fraction)",
    "horizon_years": "Simulation horizon (years)",
    "retirement_year": "Nominal retirement year (display only)",
    "salary_target": "Salary replacement target in today's dollars",
}

# field → (min, max); None means unbounded
_RANGES = {
    "home_value": (0, None),
    "mortgage_balance": (0, None),
    "primary_rate": (0, 1),
    "amort_years": (1, None),
    "extra_prepay": (0, None),
    "heloc_rate": (0, 1),
    "max_ltv": (0, 0.95),
    "max_heloc_ltv": (0, 0.95),
    "tax_rate": (0, 1),
    "dividend_yield": (0, 1),
    "total_return": (0, 1),
    "inflation": (0, 1),
    "rental_rate": (0, 1),
    "rental_amort_years": (1, None),
    "rental_ltv": (0, 1),
    "horizon_years": (1, None),
    "retirement_year": (1, None),
    "salary_target": (0, None),
}


def load_config(path: Path | None = None) -> dict:
    """Load TOML config file. Returns empty dict if file doesn't exist."""
    if path is None:
        path = DEFAULT_CONFIG_PATH
    if not path.exists():
        return {}
    try:
        with open(path, "rb") as f:
            raw = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        print(f"Failed to read config file: {path}: {e}", file=sys.stderr)
        raise SystemExit(1)
    unknown = sorted(set(raw) - set(DEFAULTS))
    if unknown:
        print(f"Ignoring unknown config keys in {path}: {', '.join(unknown)}", file=sys.stderr)
    return {k: v for k, v in raw.items() if k in DEFAULTS}


def create_parser(description: str) -> argparse.ArgumentParser:
    """Create argparse parser with shared plan flags."""
    d = DEFAULTS
    parser = argparse.ArgumentParser(description=description)
    parser.add_argument("--config", type=Path, default=None, help=f"Config file path (default: {DEFAULT_CONFIG_PATH})")
    for key, help_text in _HELP.items():
        arg_type = int if key == "retirement_year" else float
        parser.add_argument(
            f"--{key.replace('_', '-')}", type=arg_type, default=None,
            help=f"{help_text} (default: {d[key]})",
        )
    parser.add_argument(
        "--capitalize-interest", action=argparse.BooleanOptionalAction, default=None,
        help="Add HELOC interest to the line instead of paying it in cash (default: capitalize)",
    )
    parser.add_argument(
        "--properties", type=str, default=None,
        help="Rental purchases as name:price:cap_rate:month[:heloc|cash], comma separated; none for no rentals",
    )
    return parser


def _parse_flag(value: str) -> bool:
    v = value.strip().lower()
    if v in ("heloc", "true", "yes", "1"):
        return True
    if v in ("cash", "false", "no", "0"):
        return False
    raise ValueError(f"Unknown down-payment source: {value!r} (expected heloc or cash)")


def parse_properties(entries: str | list[dict]) -> list[Property]:
    """Parse properties from a CLI string or a TOML array of tables.

    String form: "Rental #1:750000:0.065:6:heloc,Duplex:500000:0.07:24:cash"
    """
    if isinstance(entries, list):
        return [
            Property(
                name=str(item.get("name", f"Rental #{i + 1}")),
                price=float(item["price"]),
                cap_rate=float(item["cap_rate"]),
                purchase_month=int(item["purchase_month"]),
                use_heloc=bool(item.get("use_heloc", True)),
            )
            for i, item in enumerate(entries)
        ]
    s = str(entries).strip()
    if not s or s.lower() == "none":
        return []
    result = []
    for entry in s.split(","):
        entry = entry.strip()
        if not entry:
            continue
        parts = entry.split(":")
        if len(parts) not in (4, 5):
            raise ValueError(f"Invalid property entry: {entry!r} (expected name:price:cap_rate:month[:heloc|cash])")
        try:
            prop = Property(
                name=parts[0].strip(),
                price=float(parts[1]),
                cap_rate=float(parts[2]),
                purchase_month=int(parts[3]),
                use_heloc=_parse_flag(parts[4]) if len(parts) == 5 else True,
            )
        except ValueError as e:
            raise ValueError(f"Invalid property entry: {entry!r}: {e}") from e
        result.append(prop)
    return result


def resolve(args: argparse.Namespace, config: dict) -> dict:
    """Resolve values with priority: CLI flag > config file > hardcoded default."""
    resolved = {}
    for key, default in DEFAULTS.items():
        cli_val = getattr(args, key, None)
        resolved[key] = cli_val if cli_val is not None else config.get(key, default)
    return resolved


def build_params(r: dict) -> PlanParams:
    """Build PlanParams from resolved config dict."""
    return PlanParams(**{f.name: r[f.name] for f in dataclasses.fields(PlanParams)})


def validate_params(params: PlanParams, properties: list[Property]) -> list[str]:
    """Check input ranges. Returns list of error messages."""
    errors = []
    if not isinstance(params.capitalize_interest, bool):
        errors.append(f"capitalize_interest={params.capitalize_interest!r} must be true or false")
    for key, (lo, hi) in _RANGES.items():
        v = getattr(params, key)
        if isinstance(v, bool) or not isinstance(v, (int, float)):
            errors.append(f"{key}={v!r} must be a number")
            continue
        if lo is not None and v < lo:
            errors.append(f"{key}={v} is below the minimum {lo}")
        if hi is not None and v > hi:
            errors.append(f"{key}={v} is above the maximum {hi}")
    for i, prop in enumerate(properties):
        label = prop.name or f"property #{i + 1}"
        if prop.price < 0:
            errors.append(f"{label}: price {prop.price} must be >= 0")
        if not 0 <= prop.cap_rate <= 1:
            errors.append(f"{label}: cap_rate {prop.cap_rate} must be within [0, 1]")
        if prop.purchase_month < 1:
            errors.append(f"{label}: purchase_month {prop.purchase_month} must be >= 1")
    return errors


def parse_args(
    description: str,
    add_args_fn: Callable[[argparse.ArgumentParser], None] | None = None,
    argv: list[str] | None = None,
) -> tuple[PlanParams, list[Property], argparse.Namespace]:
    """Parse CLI args, load config, resolve and validate values.

    Returns (params, properties, namespace). Exits with status 1 on invalid input.
    """
    parser = create_parser(description)
    if add_args_fn:
        add_args_fn(parser)
    args = parser.parse_args(argv)
    config = load_config(args.config)
    r = resolve(args, config)
    try:
        properties = parse_properties(r["properties"])
    except (ValueError, KeyError, TypeError) as e:
        print(f"Invalid properties: {e}", file=sys.stderr)
        raise SystemExit(1)
    params = build_params(r)
    errors = validate_params(params, properties)
    if errors:
        print("Invalid plan inputs:", file=sys.stderr)
        for e in errors:
            print(f"  ✗ {e}", file=sys.stderr)
        raise SystemExit(1)
    return params, properties, args
