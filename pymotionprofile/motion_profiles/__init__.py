from .phase import State, ProfilePhase, EPSILON

from .motion_profile import MotionProfile

from .trapezoid import (
    Constraints,
    TrapezoidConstraints,
    AsymmetricTrapezoidProfile,
    TrapezoidProfile
)


__all__ = [
    "State",
    "ProfilePhase",
    "EPSILON",
    "MotionProfile",
    "Constraints",
    "TrapezoidConstraints",
    "AsymmetricTrapezoidProfile",
    "TrapezoidProfile"
]
