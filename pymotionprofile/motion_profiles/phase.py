"""
Value types shared by all motion profiles.

- Class `State` holds a position and velocity, either an endpoint of a profile
  or a sampled point along it.
- Class `ProfilePhase` holds one interval of constant acceleration.

Both types compare equal within `EPSILON`, as profiles are computed with
floating-point arithmetic and accumulate rounding noise.
"""
from __future__ import annotations
from dataclasses import dataclass

from .kinematics import displacement


EPSILON = 1e-4


def _close(a: float, b: float) -> bool:
    return abs(a - b) < EPSILON


@dataclass(frozen=True, eq=False)
class State:
    """
    Position and velocity of a motion profile at some moment.

    Attributes
    ----------
    position : float
        Position of the profile.
    velocity : float
        Velocity of the profile.
    """
    position: float = 0.0
    velocity: float = 0.0

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, State):
            return NotImplemented
        return (
            _close(self.position, other.position)
            and _close(self.velocity, other.velocity)
        )


@dataclass(frozen=True, eq=False)
class ProfilePhase:
    """
    Interval of constant acceleration within a motion profile.

    Attributes
    ----------
    time : float
        Duration of the phase (s).
    position : float
        Net change in position through the phase.
    acceleration : float
        Acceleration throughout the phase (0.0 for a coast phase).
    initial_velocity : float
        Velocity at the start of the phase.
    """
    time: float
    position: float
    acceleration: float
    initial_velocity: float

    @classmethod
    def from_kinematics(
        cls,
        acceleration: float,
        initial_velocity: float,
        time: float
    ) -> ProfilePhase:
        """Creates a phase whose displacement follows from the given
        acceleration, initial velocity and duration.
        """
        return cls(
            time=time,
            position=displacement(time, initial_velocity, acceleration),
            acceleration=acceleration,
            initial_velocity=initial_velocity
        )

    @property
    def final_velocity(self) -> float:
        return self.initial_velocity + self.acceleration * self.time

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ProfilePhase):
            return NotImplemented
        return (
            self.time == other.time
            and _close(self.position, other.position)
            and _close(self.acceleration, other.acceleration)
            and _close(self.initial_velocity, other.initial_velocity)
        )
