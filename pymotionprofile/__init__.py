from .motion_profiles import (
    State,
    ProfilePhase,
    MotionProfile,
    Constraints,
    TrapezoidConstraints,
    AsymmetricTrapezoidProfile,
    TrapezoidProfile
)
from .core.exceptions import (
    ProfileError,
    ConstraintError,
    StateError,
    ConfigError
)

__version__ = "0.1.0"

__all__ = [
    "State",
    "ProfilePhase",
    "MotionProfile",
    "Constraints",
    "TrapezoidConstraints",
    "AsymmetricTrapezoidProfile",
    "TrapezoidProfile",
    "ProfileError",
    "ConstraintError",
    "StateError",
    "ConfigError"
]
