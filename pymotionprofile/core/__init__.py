from .exceptions import (
    ProfileError,
    ConstraintError,
    StateError,
    ConfigError
)

__all__ = [
    "ProfileError",
    "ConstraintError",
    "StateError",
    "ConfigError"
]
