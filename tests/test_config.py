"""Tests for config loading, resolution and validation."""

import pytest
from fi_planner.config import (
    DEFAULTS,
    build_params,
    create_parser,
    load_config,
    parse_args,
    parse_properties,
    resolve,
    validate_params,
)
from fi_planner.params import DEFAULT_PROPERTIES, PlanParams, Property

CONFIG_TOML = """\
home_value = 900000
mortgage_balance = 250000
capitalize_interest = false
horizon_years = 8

[[properties]]
name = "Duplex"
price = 500000
cap_rate = 0.07
purchase_month = 12
use_heloc = false
"""


class TestParseProperties:
    def test_string(self):
        props = parse_properties("Rental #1:750000:0.065:6:heloc,Duplex:500000:0.07:24:cash")
        assert props == [
            Property("Rental #1", 750_000, 0.065, 6, True),
            Property("Duplex", 500_000, 0.07, 24, False),
        ]

    def test_default_source_is_heloc(self):
        assert parse_properties("A:100:0.05:3")[0].use_heloc is True

    @pytest.mark.parametrize("s", ["", "none", "NONE", "  "])
    def test_empty(self, s):
        assert parse_properties(s) == []

    def test_table_list(self):
        props = parse_properties([{"price": 1000, "cap_rate": 0.05, "purchase_month": 2}])
        assert props == [Property("Rental #1", 1000, 0.05, 2, True)]

    def test_defaults_round_trip(self):
        assert tuple(parse_properties(DEFAULTS["properties"])) == DEFAULT_PROPERTIES

    @pytest.mark.parametrize(
        "s",
        ["A:100:0.05", "A:abc:0.05:3", "A:100:0.05:3:maybe", "A:100:0.05:3:heloc:x"],
    )
    def test_invalid(self, s):
        with pytest.raises(ValueError, match="Invalid property entry"):
            parse_properties(s)


class TestLoadConfig:
    def test_missing_file(self, tmp_path):
        assert load_config(tmp_path / "missing.toml") == {}

    def test_reads_toml(self, tmp_path):
        path = tmp_path / "plan.toml"
        path.write_text(CONFIG_TOML)
        config = load_config(path)
        assert config["home_value"] == 900000
        assert config["capitalize_interest"] is False
        assert config["properties"][0]["name"] == "Duplex"

    def test_unknown_keys_dropped(self, tmp_path, capsys):
        path = tmp_path / "plan.toml"
        path.write_text("home_value = 1\nfoo = 2\n")
        assert load_config(path) == {"home_value": 1}
        assert "foo" in capsys.readouterr().err

    def test_invalid_toml(self, tmp_path):
        path = tmp_path / "bad.toml"
        path.write_text("home_value = = 1\n")
        with pytest.raises(SystemExit):
            load_config(path)


class TestResolve:
    def test_priority(self):
        args = create_parser("test").parse_args(["--home-value", "500000"])
        r = resolve(args, {"home_value": 700000, "tax_rate": 0.3})
        assert r["home_value"] == 500000        # CLI
        assert r["tax_rate"] == 0.3             # config
        assert r["heloc_rate"] == DEFAULTS["heloc_rate"]  # default

    def test_boolean_flag(self):
        args = create_parser("test").parse_args(["--no-capitalize-interest"])
        assert resolve(args, {})["capitalize_interest"] is False
        args = create_parser("test").parse_args([])
        assert resolve(args, {"capitalize_interest": False})["capitalize_interest"] is False

    def test_build_params_defaults(self):
        args = create_parser("test").parse_args([])
        assert build_params(resolve(args, {})) == PlanParams()


class TestValidateParams:
    def test_defaults_valid(self):
        assert validate_params(PlanParams(), list(DEFAULT_PROPERTIES)) == []

    def test_zero_heloc_room_allowed(self):
        assert validate_params(PlanParams(max_heloc_ltv=0), []) == []

    def test_out_of_range(self):
        errors = validate_params(PlanParams(max_ltv=0.99, amort_years=0, tax_rate=-0.1), [])
        assert any("max_ltv" in e for e in errors)
        assert any("amort_years" in e for e in errors)
        assert any("tax_rate" in e for e in errors)

    def test_wrong_types(self):
        errors = validate_params(PlanParams(horizon_years="10", max_ltv=True, capitalize_interest="no"), [])
        assert any("horizon_years" in e and "number" in e for e in errors)
        assert any("max_ltv" in e for e in errors)
        assert any("capitalize_interest" in e for e in errors)

    def test_bad_property(self):
        errors = validate_params(PlanParams(), [Property("X", -1, 0.05, 0)])
        assert any("price" in e for e in errors)
        assert any("purchase_month" in e for e in errors)


class TestParseArgs:
    def test_config_and_cli(self, tmp_path):
        path = tmp_path / "plan.toml"
        path.write_text(CONFIG_TOML)
        params, props, _ = parse_args("test", argv=["--config", str(path), "--horizon-years", "7"])
        assert params.home_value == 900000
        assert params.capitalize_interest is False
        assert params.horizon_years == 7
        assert props == [Property("Duplex", 500_000, 0.07, 12, False)]

    def test_cli_properties_override(self, tmp_path):
        path = tmp_path / "plan.toml"
        path.write_text(CONFIG_TOML)
        _, props, _ = parse_args("test", argv=["--config", str(path), "--properties", "none"])
        assert props == []

    def test_invalid_exits(self, tmp_path, capsys):
        with pytest.raises(SystemExit):
            parse_args("test", argv=["--config", str(tmp_path / "x.toml"), "--max-ltv", "1.5"])
        assert "max_ltv" in capsys.readouterr().err

    def test_string_value_in_toml_exits(self, tmp_path, capsys):
        path = tmp_path / "plan.toml"
        path.write_text('horizon_years = "10"\n')
        with pytest.raises(SystemExit) as exc:
            parse_args("test", argv=["--config", str(path)])
        assert exc.value.code == 1
        assert "horizon_years" in capsys.readouterr().err

    def test_bad_properties_exit(self, tmp_path):
        with pytest.raises(SystemExit):
            parse_args("test", argv=["--config", str(tmp_path / "x.toml"), "--properties", "oops"])
