class ProfileError(ValueError):
    """Base class of all errors raised while building a motion profile."""
    pass


class ConstraintError(ProfileError):
    pass


class StateError(ProfileError):
    pass


class ConfigError(ProfileError):
    pass
