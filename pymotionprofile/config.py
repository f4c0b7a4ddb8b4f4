"""
Loading of motion profile definitions from TOML files.

A profile file has a mandatory `[constraints]` and `[target]` table and
optional `[initial]` and `[sampling]` tables:

```toml
[constraints]
max_velocity = 1.0
max_acceleration = 1.0
max_deceleration = 2.0   # optional, defaults to max_acceleration

[initial]
position = 0.0
velocity = 0.0

[target]
position = 4.0
velocity = 0.0

[sampling]
period = 0.02
```
"""
from __future__ import annotations
from dataclasses import dataclass
from pathlib import Path
from typing import Any
import logging
import math
import tomllib

from pymotionprofile.core.exceptions import ConfigError
from pymotionprofile.motion_profiles import (
    State,
    Constraints,
    TrapezoidConstraints,
    AsymmetricTrapezoidProfile,
    TrapezoidProfile
)


logger = logging.getLogger(__name__)

DEFAULT_PERIOD = 0.02


def _get_float(table: dict[str, Any], key: str, section: str, default: float | None = None) -> float:
    value = table.get(key, default)
    if value is None:
        raise ConfigError(f"Missing key `{key}` in section [{section}].")
    # bool is a subclass of int
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ConfigError(
            f"Key `{key}` in section [{section}] must be a number, got {value!r}."
        )
    return float(value)


def _get_table(data: dict[str, Any], section: str, required: bool = True) -> dict[str, Any]:
    table = data.get(section)
    if table is None:
        if required:
            raise ConfigError(f"Missing section [{section}].")
        return {}
    if not isinstance(table, dict):
        raise ConfigError(f"[{section}] must be a table.")
    return table


@dataclass
class ProfileConfig:
    """
    Definition of a trapezoidal motion profile read from a configuration file.

    Attributes
    ----------
    max_velocity : float
        Maximum velocity.
    max_acceleration : float
        Maximum acceleration.
    max_deceleration : float | None
        Maximum deceleration. If None, a symmetric `TrapezoidProfile` is built.
    target : State
        Goal state of the profile.
    initial : State
        Initial state of the profile.
    period : float
        Sampling period (s) of the setpoints, e.g. the control-loop period.
    """
    max_velocity: float
    max_acceleration: float
    target: State
    initial: State
    max_deceleration: float | None = None
    period: float = DEFAULT_PERIOD

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ProfileConfig:
        constraints = _get_table(data, "constraints")
        target = _get_table(data, "target")
        initial = _get_table(data, "initial", required=False)
        sampling = _get_table(data, "sampling", required=False)

        max_deceleration = None
        if "max_deceleration" in constraints:
            max_deceleration = _get_float(constraints, "max_deceleration", "constraints")

        period = _get_float(sampling, "period", "sampling", DEFAULT_PERIOD)
        if not math.isfinite(period) or period <= 0.0:
            raise ConfigError(f"Sampling period must be a positive number, got {period}.")

        return cls(
            max_velocity=_get_float(constraints, "max_velocity", "constraints"),
            max_acceleration=_get_float(constraints, "max_acceleration", "constraints"),
            max_deceleration=max_deceleration,
            target=State(
                _get_float(target, "position", "target"),
                _get_float(target, "velocity", "target", 0.0)
            ),
            initial=State(
                _get_float(initial, "position", "initial", 0.0),
                _get_float(initial, "velocity", "initial", 0.0)
            ),
            period=period
        )

    def build_profile(self) -> AsymmetricTrapezoidProfile:
        """Returns the motion profile defined by this configuration.

        Raises
        ------
        ConstraintError, StateError, ProfileError
            If the profile can't be planned from the configured values.
        """
        if self.max_deceleration is None:
            return TrapezoidProfile(
                TrapezoidConstraints(self.max_velocity, self.max_acceleration),
                self.target,
                self.initial
            )
        return AsymmetricTrapezoidProfile(
            Constraints(self.max_velocity, self.max_acceleration, self.max_deceleration),
            self.target,
            self.initial
        )


def load_profile_config(file_path: str | Path) -> ProfileConfig:
    """Reads a `ProfileConfig` from a TOML file.

    Raises
    ------
    ConfigError
        If the file can't be parsed or misses required values.
    """
    try:
        with Path(file_path).open("rb") as f:
            data = tomllib.load(f)
    except (tomllib.TOMLDecodeError, UnicodeDecodeError) as err:
        raise ConfigError(f"Invalid TOML in {file_path}: {err}") from err
    logger.debug("Loaded profile configuration from %s.", file_path)
    return ProfileConfig.from_dict(data)
