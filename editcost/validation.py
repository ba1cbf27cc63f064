"""Standardized validation utilities for cost configuration and string inputs."""

from __future__ import annotations

import math
from typing import Any

from editcost.constants import METHODS


class ValidationError(ValueError):
    """Base class for validation errors."""


class ConfigError(ValidationError):
    """Configuration validation error."""


class InvalidArgumentError(ValidationError):
    """Invalid argument passed to an evaluator."""


def require_cost(
    value: Any,
    name: str,
    message: str | None = None,
) -> float:
    """Validate that a cost is a finite, non-negative number and return it as a float."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        msg = message or f"Cost '{name}' must be a number, got {type(value).__name__}"
        raise ConfigError(msg)
    cost = float(value)
    if math.isnan(cost) or math.isinf(cost):
        msg = message or f"Cost '{name}' must be finite, got {value}"
        raise ConfigError(msg)
    if cost < 0:
        msg = message or f"Cost '{name}' must not be negative, got {value}"
        raise ConfigError(msg)
    return cost


def require_string(
    value: Any,
    name: str,
    message: str | None = None,
) -> str:
    """Validate that an evaluator input is a string. Empty strings are valid."""
    if value is None:
        raise InvalidArgumentError(message or f"Argument '{name}' must not be None")
    if not isinstance(value, str):
        msg = message or f"Argument '{name}' must be a string, got {type(value).__name__}"
        raise InvalidArgumentError(msg)
    return value


def require_method(method: str) -> str:
    """Validate that an evaluation method name is known."""
    if method not in METHODS:
        known = ", ".join(METHODS)
        raise InvalidArgumentError(f"Unknown method '{method}' (expected one of: {known})")
    return method
