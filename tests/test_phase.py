import dataclasses

import pytest

from pymotionprofile.motion_profiles import ProfilePhase, State


def test_from_kinematics_derives_displacement():
    phase = ProfilePhase.from_kinematics(acceleration=1.0, initial_velocity=0.0, time=5.0)
    assert phase.time == 5.0
    assert phase.position == pytest.approx(12.5)
    assert phase.final_velocity == pytest.approx(5.0)


def test_phase_equality_tolerates_rounding_noise():
    phase = ProfilePhase(1.0, 2.0, 3.0, 4.0)
    assert phase == ProfilePhase(1.0, 2.00001, 2.99999, 4.00001)
    assert phase != ProfilePhase(1.0, 2.001, 3.0, 4.0)


def test_phase_equality_requires_exact_duration():
    assert ProfilePhase(1.0, 2.0, 3.0, 4.0) != ProfilePhase(1.00001, 2.0, 3.0, 4.0)


def test_state_equality_tolerates_rounding_noise():
    assert State(1.0, 2.0) == State(1.00005, 1.99995)
    assert State(1.0, 2.0) != State(1.001, 2.0)
    assert State() == State(0.0, 0.0)


def test_comparison_with_other_types_is_false():
    assert State(0.0, 0.0) != (0.0, 0.0)
    assert ProfilePhase(1.0, 1.0, 0.0, 1.0) != State(1.0, 1.0)


def test_values_are_immutable():
    state = State(1.0, 2.0)
    phase = ProfilePhase(1.0, 2.0, 3.0, 4.0)
    with pytest.raises(dataclasses.FrozenInstanceError):
        state.position = 3.0
    with pytest.raises(dataclasses.FrozenInstanceError):
        phase.time = 2.0
