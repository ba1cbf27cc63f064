"""
Configuration management for Editcost
"""

import os
from dotenv import load_dotenv
import json
import yaml
from pathlib import Path
from typing import Any, Dict, Optional
from pydantic import BaseModel, Field, ValidationError as PydanticValidationError

from editcost.calculator import CostModel, StringDistanceCalculator
from editcost.constants import (
    CONFIG_FILENAME,
    DEFAULT_ADD_COST,
    DEFAULT_CHANGE_COST,
    DEFAULT_METHOD,
    DEFAULT_REMOVE_COST,
    ENV_PREFIX,
    METHODS,
    NAIVE_RECOMMENDED_MAX_LENGTH,
)
from editcost.validation import ConfigError

DEFAULT_USER_CONFIG_PATH = Path.home() / ".editcost" / "config.yaml"


class CostSettings(BaseModel):
    """Weights of the three transformations"""
    add_cost: float = DEFAULT_ADD_COST
    remove_cost: float = DEFAULT_REMOVE_COST
    change_cost: float = DEFAULT_CHANGE_COST


class RuntimeSettings(BaseModel):
    """Evaluation settings"""
    default_method: str = DEFAULT_METHOD
    verbose: bool = False
    naive_max_length: int = NAIVE_RECOMMENDED_MAX_LENGTH


class EditcostConfig(BaseModel):
    """Main Editcost configuration"""
    costs: CostSettings = Field(default_factory=CostSettings)
    runtime: RuntimeSettings = Field(default_factory=RuntimeSettings)

    @property
    def verbose(self) -> bool:
        return self.runtime.verbose

    @property
    def default_method(self) -> str:
        return self.runtime.default_method

    def cost_model(self) -> CostModel:
        """Build the validated cost model. Raises ConfigError on negative costs."""
        return CostModel(
            add_cost=self.costs.add_cost,
            remove_cost=self.costs.remove_cost,
            change_cost=self.costs.change_cost,
        )

    def create_calculator(self) -> StringDistanceCalculator:
        return StringDistanceCalculator(
            self.cost_model(),
            naive_max_length=self.runtime.naive_max_length,
        )


_ENV_OVERRIDES = {
    "ADD_COST": ("costs", "add_cost"),
    "REMOVE_COST": ("costs", "remove_cost"),
    "CHANGE_COST": ("costs", "change_cost"),
    "METHOD": ("runtime", "default_method"),
}


def _read_config_file(path: Path) -> Dict[str, Any]:
    try:
        with open(path, "r", encoding="utf-8") as f:
            if path.suffix in [".yaml", ".yml"]:
                data = yaml.safe_load(f) or {}
            else:
                data = json.load(f)
    except (OSError, UnicodeDecodeError, yaml.YAMLError, json.JSONDecodeError) as exc:
        raise ConfigError(f"Could not read config file {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigError(f"Config file {path} must contain a mapping")
    return data


def _drop_empty_sections(config_data: Dict[str, Any]) -> None:
    # "costs:" with no value loads as None
    for section in ("costs", "runtime"):
        if section in config_data and config_data[section] is None:
            del config_data[section]


def _build_config(config_data: Dict[str, Any]) -> EditcostConfig:
    try:
        return EditcostConfig(**config_data)
    except PydanticValidationError as exc:
        raise ConfigError(f"Invalid configuration: {exc}") from exc


def read_config(path: Path) -> EditcostConfig:
    """Read a single config file, without search paths or environment overrides."""
    config_data = _read_config_file(path)
    _drop_empty_sections(config_data)
    return _build_config(config_data)


def user_config_path() -> Path:
    return DEFAULT_USER_CONFIG_PATH


def load_config(config_path: Optional[Path] = None) -> EditcostConfig:
    """
    Load configuration from YAML/JSON file or use defaults.

    Priority:
    1. EDITCOST_* environment variables (also read from .env)
    2. Provided config_path
    3. ./editcost.yaml
    4. ~/.editcost/config.yaml
    5. Defaults
    """
    config_data: Dict[str, Any] = {}

    # Load environment variables from .env (if present)
    load_dotenv()

    if config_path and not Path(config_path).exists():
        raise ConfigError(f"Config file does not exist: {config_path}")

    search_paths = []
    if config_path:
        search_paths.append(Path(config_path))

    search_paths.extend([
        Path.cwd() / CONFIG_FILENAME,
        DEFAULT_USER_CONFIG_PATH,
    ])

    for path in search_paths:
        if path.exists():
            config_data = _read_config_file(path)
            break

    _drop_empty_sections(config_data)

    for suffix, (section, key) in _ENV_OVERRIDES.items():
        value = os.getenv(f"{ENV_PREFIX}{suffix}")
        if value is None:
            continue
        if config_data.get(section) is None:
            config_data[section] = {}
        elif not isinstance(config_data[section], dict):
            raise ConfigError(f"Section '{section}' must be a mapping")
        config_data[section][key] = value

    config = _build_config(config_data)
    if config.runtime.default_method not in METHODS:
        known = ", ".join(METHODS)
        raise ConfigError(
            f"Unknown default method '{config.runtime.default_method}' (expected one of: {known})"
        )
    # Raises ConfigError on negative costs
    config.cost_model()
    return config


def save_config(config: EditcostConfig, path: Optional[Path] = None) -> Path:
    """Save configuration to YAML file."""
    if path is None:
        path = user_config_path()

    path.parent.mkdir(parents=True, exist_ok=True)

    with open(path, 'w', encoding="utf-8") as f:
        yaml.dump(config.model_dump(), f, default_flow_style=False, sort_keys=False)
    return path
