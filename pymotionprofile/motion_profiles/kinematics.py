# Closed-form kinematics of a single constant-acceleration phase. The
# functions of time also accept numpy arrays, which is how the profiles are
# sampled as a whole.

import math

import numpy as np


def position(t: float | np.ndarray, **conds: float) -> float | np.ndarray:
    """Position at `t` of a phase starting at `t0` (default 0) in position
    `s0` with velocity `v0` and acceleration `a0` (all default 0).
    """
    dt = t - conds.get("t0", 0.0)
    return conds.get("s0", 0.0) + displacement(dt, conds.get("v0", 0.0), conds.get("a0", 0.0))


def velocity(t: float | np.ndarray, **conds: float) -> float | np.ndarray:
    """Velocity at `t`; takes the same keywords as `position()`."""
    return conds.get("v0", 0.0) + conds.get("a0", 0.0) * (t - conds.get("t0", 0.0))


def acceleration(t: float | np.ndarray, **conds: float) -> float | np.ndarray:
    a0 = conds.get("a0", 0.0)
    if isinstance(t, np.ndarray):
        return np.full_like(t, a0, dtype=float)
    return a0


def displacement(dt, v0: float, a0: float):
    return v0 * dt + 0.5 * a0 * dt ** 2


def time_to_displacement(
    ds: float,
    v0: float,
    a0: float,
    direction: int = 1
) -> float:
    """
    Inverse of `displacement()`: time needed to cover `ds`.

    `direction` (+1 or -1) picks the root of the quadratic that is the first
    crossing for motion in that sense. With `a0` zero, `ds / v0` is returned
    (`ZeroDivisionError` if `v0` is zero as well).
    """
    if a0 == 0.0:
        return ds / v0
    # rounding may push the discriminant just below zero at a velocity reversal
    discriminant = max(v0 ** 2 + 2 * a0 * ds, 0.0)
    return (-v0 + direction * math.sqrt(discriminant)) / a0
