"""Tests for configuration loading and saving."""

from __future__ import annotations

import json

import pytest
import yaml

from editcost.calculator import CostModel
from editcost.config import (
    CostSettings,
    EditcostConfig,
    RuntimeSettings,
    load_config,
    read_config,
    save_config,
)
from editcost.validation import ConfigError


def write_yaml(path, data) -> None:
    path.write_text(yaml.safe_dump(data), encoding="utf-8")


def test_defaults_without_files() -> None:
    config = load_config()
    assert config.cost_model() == CostModel()
    assert config.default_method == "iterative"
    assert config.verbose is False


def test_explicit_yaml_file(tmp_path) -> None:
    path = tmp_path / "costs.yaml"
    write_yaml(path, {"costs": {"add_cost": 2, "change_cost": 0.5}, "runtime": {"default_method": "memoized"}})

    config = load_config(path)
    assert config.cost_model() == CostModel(add_cost=2, remove_cost=1, change_cost=0.5)
    assert config.default_method == "memoized"


def test_json_file(tmp_path) -> None:
    path = tmp_path / "costs.json"
    path.write_text(json.dumps({"costs": {"remove_cost": 4}}), encoding="utf-8")

    assert load_config(path).costs.remove_cost == 4.0


def test_project_file_in_working_directory(isolated_config) -> None:
    write_yaml(isolated_config / "editcost.yaml", {"costs": {"add_cost": 3}})
    assert load_config().costs.add_cost == 3.0


def test_user_file(tmp_path) -> None:
    path = tmp_path / "home" / ".editcost" / "config.yaml"
    path.parent.mkdir(parents=True)
    write_yaml(path, {"costs": {"change_cost": 2}})
    assert load_config().costs.change_cost == 2.0


def test_explicit_file_wins_over_project_file(tmp_path, isolated_config) -> None:
    write_yaml(isolated_config / "editcost.yaml", {"costs": {"add_cost": 3}})
    explicit = tmp_path / "explicit.yaml"
    write_yaml(explicit, {"costs": {"add_cost": 7}})
    assert load_config(explicit).costs.add_cost == 7.0


def test_environment_overrides_file(tmp_path, monkeypatch: pytest.MonkeyPatch) -> None:
    path = tmp_path / "costs.yaml"
    write_yaml(path, {"costs": {"add_cost": 2, "remove_cost": 2}})
    monkeypatch.setenv("EDITCOST_ADD_COST", "0.5")
    monkeypatch.setenv("EDITCOST_METHOD", "naive")

    config = load_config(path)
    assert config.costs.add_cost == 0.5
    assert config.costs.remove_cost == 2.0
    assert config.default_method == "naive"


def test_missing_explicit_file(tmp_path) -> None:
    with pytest.raises(ConfigError, match="does not exist"):
        load_config(tmp_path / "nope.yaml")


def test_negative_cost_in_file(tmp_path) -> None:
    path = tmp_path / "costs.yaml"
    write_yaml(path, {"costs": {"change_cost": -1}})
    with pytest.raises(ConfigError, match="must not be negative"):
        load_config(path)


def test_non_numeric_cost_in_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("EDITCOST_REMOVE_COST", "cheap")
    with pytest.raises(ConfigError, match="Invalid configuration"):
        load_config()


def test_unknown_default_method(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("EDITCOST_METHOD", "quantum")
    with pytest.raises(ConfigError, match="Unknown default method"):
        load_config()


def test_malformed_yaml(tmp_path) -> None:
    path = tmp_path / "broken.yaml"
    path.write_text("costs: [add_cost: 1\n", encoding="utf-8")
    with pytest.raises(ConfigError, match="Could not read"):
        load_config(path)


def test_top_level_must_be_mapping(tmp_path) -> None:
    path = tmp_path / "list.yaml"
    write_yaml(path, [1, 2, 3])
    with pytest.raises(ConfigError, match="must contain a mapping"):
        load_config(path)


def test_save_and_reload(tmp_path) -> None:
    config = EditcostConfig(
        costs=CostSettings(add_cost=2, remove_cost=0.5, change_cost=1),
        runtime=RuntimeSettings(default_method="memoized", naive_max_length=8),
    )
    path = save_config(config, tmp_path / "nested" / "config.yaml")

    assert path.exists()
    reloaded = load_config(path)
    assert reloaded == config


def test_save_defaults_to_user_path(tmp_path) -> None:
    path = save_config(EditcostConfig())
    assert path == tmp_path / "home" / ".editcost" / "config.yaml"
    assert yaml.safe_load(path.read_text(encoding="utf-8"))["costs"]["change_cost"] == 1.5


def test_create_calculator_uses_settings() -> None:
    config = EditcostConfig(
        costs=CostSettings(add_cost=1, remove_cost=1, change_cost=1),
        runtime=RuntimeSettings(naive_max_length=4),
    )
    calculator = config.create_calculator()
    assert calculator.naive_max_length == 4
    assert calculator.distance_iterative("CAT", "DOG") == 3.0


def test_empty_section_in_file(tmp_path) -> None:
    path = tmp_path / "costs.yaml"
    path.write_text("costs:\nruntime:\n  default_method: naive\n", encoding="utf-8")

    config = load_config(path)
    assert config.cost_model() == CostModel()
    assert config.default_method == "naive"


def test_environment_fills_empty_section(tmp_path, monkeypatch: pytest.MonkeyPatch) -> None:
    path = tmp_path / "costs.yaml"
    path.write_text("costs:\n", encoding="utf-8")
    monkeypatch.setenv("EDITCOST_ADD_COST", "2")

    config = load_config(path)
    assert config.costs.add_cost == 2.0
    assert config.costs.remove_cost == 1.0


def test_environment_with_non_mapping_section(tmp_path, monkeypatch: pytest.MonkeyPatch) -> None:
    path = tmp_path / "costs.yaml"
    path.write_text("costs: 5\n", encoding="utf-8")
    monkeypatch.setenv("EDITCOST_ADD_COST", "2")

    with pytest.raises(ConfigError, match="Section 'costs' must be a mapping"):
        load_config(path)


def test_non_mapping_section_without_environment(tmp_path) -> None:
    path = tmp_path / "costs.yaml"
    path.write_text("costs: 5\n", encoding="utf-8")

    with pytest.raises(ConfigError, match="Invalid configuration"):
        load_config(path)


@pytest.mark.parametrize("name", ["broken.yaml", "broken.json"])
def test_invalid_utf8(tmp_path, name) -> None:
    path = tmp_path / name
    path.write_bytes(b"costs: \xff\xfe\n")

    with pytest.raises(ConfigError, match="Could not read"):
        load_config(path)


def test_read_config_ignores_environment(tmp_path, monkeypatch: pytest.MonkeyPatch) -> None:
    path = tmp_path / "costs.yaml"
    write_yaml(path, {"costs": {"add_cost": 3}})
    monkeypatch.setenv("EDITCOST_ADD_COST", "9")

    assert read_config(path).costs.add_cost == 3.0
