import numpy as np
import pytest

from pymotionprofile.core.exceptions import ConstraintError
from pymotionprofile.motion_profiles import (
    AsymmetricTrapezoidProfile,
    Constraints,
    ProfilePhase,
    State,
    TrapezoidConstraints,
    TrapezoidProfile
)


@pytest.fixture
def profile():
    return TrapezoidProfile(TrapezoidConstraints(1.0, 1.0), State(4.0, 0.0))


def test_constraints_equality_and_conversion():
    constraints = TrapezoidConstraints(2.0, 1.5)
    assert constraints == TrapezoidConstraints(2.00001, 1.49999)
    assert constraints.to_asymmetric() == Constraints(2.0, 1.5, 1.5)


@pytest.mark.parametrize("limits", [(0.0, 1.0), (1.0, 0.0), (-1.0, 1.0), (1.0, -1.0)])
def test_invalid_constraints_are_rejected(limits):
    with pytest.raises(ConstraintError):
        TrapezoidConstraints(*limits)


def test_phases(profile):
    assert list(profile.phases) == [
        ProfilePhase(1.0, 0.5, 1.0, 0.0),
        ProfilePhase(3.0, 3.0, 0.0, 1.0),
        ProfilePhase(1.0, 0.5, -1.0, 1.0),
    ]
    assert profile.total_time() == pytest.approx(5.0)
    assert profile.sample(5.0) == State(4.0, 0.0)


@pytest.mark.parametrize("target, initial", [
    (State(5.0, 0.5), State(1.0, 0.0)),
    (State(0.4, 0.0), State(0.0, 0.0)),
    (State(-6.0, 0.0), State(2.0, 1.0)),
    (State(3.0, 1.0), State(0.0, 3.0)),
])
def test_same_as_asymmetric_profile_with_equal_limits(target, initial):
    symmetric = TrapezoidProfile(TrapezoidConstraints(2.0, 1.5), target, initial)
    asymmetric = AsymmetricTrapezoidProfile(Constraints(2.0, 1.5, 1.5), target, initial)
    assert symmetric.phases == asymmetric.phases
    assert symmetric.initial_state == asymmetric.initial_state
    assert symmetric.total_time() == asymmetric.total_time()


@pytest.mark.parametrize("position, expected", [
    (0.125, 0.5),
    (0.5, 1.0),
    (2.0, 2.5),
    (3.875, 4.5),
    (4.0, 5.0),
])
def test_time_left_until(profile, position, expected):
    assert profile.time_left_until(position) == pytest.approx(expected)


def test_time_left_until_saturates_outside_the_travel(profile):
    assert profile.time_left_until(0.0) == 0.0
    assert profile.time_left_until(-1.0) == 0.0
    assert profile.time_left_until(10.0) == pytest.approx(5.0)


@pytest.mark.parametrize("target, initial", [
    (State(4.0, 0.0), State(0.0, 0.0)),
    (State(-1.0, 0.0), State(3.0, 0.0)),
    (State(0.3, 0.0), State(0.0, 0.0)),
    (State(7.0, 0.5), State(1.0, 0.25)),
])
def test_time_left_until_inverts_sample(target, initial):
    profile = TrapezoidProfile(TrapezoidConstraints(2.0, 1.0), target, initial)
    for t in np.linspace(0.01, profile.total_time() - 0.01, 37):
        s = profile.sample(float(t)).position
        assert profile.time_left_until(s) == pytest.approx(t, abs=1e-6)
