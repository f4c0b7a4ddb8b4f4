"""
Generic single-axis motion profile built from an ordered sequence of
constant-acceleration phases.

Class `MotionProfile` can be created from user-defined phases directly. The
planners in module `trapezoid` derive from it and compute their phases from
kinematic constraints and endpoint states.
"""
from __future__ import annotations

import numpy as np

from .phase import State, ProfilePhase
from .kinematics import position, velocity, acceleration


class MotionProfile:
    """
    A group of phases that represents an arbitrary trajectory of compound
    accelerations, coasts, and decelerations.

    A motion profile is most often used as the setpoint for a feedback
    controller: call `sample()` once per control cycle with the time elapsed
    since the start of the motion.

    A motion profile is never modified after it has been created, so it can
    safely be sampled from several threads at once.
    """
    def __init__(
        self,
        *phases: ProfilePhase,
        initial_state: State | None = None
    ) -> None:
        """Creates a `MotionProfile` object.

        Parameters
        ----------
        *phases:
            The phases of the profile, in chronological order.
        initial_state:
            Position and velocity at the start of the profile. Default is
            zero position and zero velocity.
        """
        self._initial_state = initial_state if initial_state is not None else State()
        self._phases: tuple[ProfilePhase, ...] = tuple(phases)

    @property
    def phases(self) -> tuple[ProfilePhase, ...]:
        """Ordered phases of the profile."""
        return self._phases

    @property
    def initial_state(self) -> State:
        return self._initial_state

    @property
    def final_state(self) -> State:
        """State at the end of the last phase. This is also what `sample()`
        returns for any time at or beyond `total_time()`.
        """
        s = self._initial_state.position + sum(p.position for p in self._phases)
        if self._phases:
            v = self._phases[-1].final_velocity
        else:
            v = self._initial_state.velocity
        return State(s, v)

    def sample(self, t: float) -> State:
        """Returns the position and velocity of the profile at time `t`.

        Parameters
        ----------
        t:
            Time elapsed since the start of the profile (s).

        If `t` is not positive, the initial state is returned. If `t` lies
        beyond the timespan of the profile, `final_state` is returned.
        """
        if t <= 0:
            return self._initial_state
        s = self._initial_state.position
        for phase in self._phases:
            if t < phase.time:
                return State(
                    position(t, s0=s, v0=phase.initial_velocity, a0=phase.acceleration),
                    velocity(t, v0=phase.initial_velocity, a0=phase.acceleration)
                )
            t -= phase.time
            s += phase.position
        return self.final_state

    def total_time(self) -> float:
        """Returns the time needed for the profile to finish."""
        return sum(phase.time for phase in self._phases)

    def is_finished(self, t: float) -> bool:
        """Returns `True` if the profile has finished at time `t`."""
        return t >= self.total_time()

    def sample_array(self, t_arr: np.ndarray) -> tuple[np.ndarray, np.ndarray]:
        """Vectorized version of `sample()`.

        Returns
        -------
        A tuple with two Numpy arrays: the positions and the velocities at the
        time moments in `t_arr`.
        """
        t_arr = np.asarray(t_arr, dtype=float)
        final = self.final_state
        s_arr = np.full_like(t_arr, final.position)
        v_arr = np.full_like(t_arr, final.velocity)

        t0, s0 = 0.0, self._initial_state.position
        for phase in self._phases:
            mask = (t_arr >= t0) & (t_arr < t0 + phase.time)
            conds = dict(t0=t0, s0=s0, v0=phase.initial_velocity, a0=phase.acceleration)
            s_arr[mask] = position(t_arr[mask], **conds)
            v_arr[mask] = velocity(t_arr[mask], **conds)
            t0 += phase.time
            s0 += phase.position

        before = t_arr <= 0.0
        s_arr[before] = self._initial_state.position
        v_arr[before] = self._initial_state.velocity
        return s_arr, v_arr

    def _time_axis(self, num: int) -> np.ndarray:
        return np.linspace(0.0, self.total_time(), num, endpoint=True)

    def position_profile(self, num: int = 50) -> tuple[np.ndarray, np.ndarray]:
        """Calculates the position profile.

        Returns
        -------
        A tuple with two Numpy arrays. The first array are `num` time values
        between 0 and `total_time()`. The second array are the corresponding
        values of position.
        """
        t_arr = self._time_axis(num)
        s_arr, _ = self.sample_array(t_arr)
        return t_arr, s_arr

    def velocity_profile(self, num: int = 50) -> tuple[np.ndarray, np.ndarray]:
        """Calculates the velocity profile.

        Returns
        -------
        A tuple with two Numpy arrays. The first array are `num` time values
        between 0 and `total_time()`. The second array are the corresponding
        values of velocity.
        """
        t_arr = self._time_axis(num)
        _, v_arr = self.sample_array(t_arr)
        return t_arr, v_arr

    def acceleration_profile(self, num: int = 50) -> tuple[np.ndarray, np.ndarray]:
        """Calculates the acceleration profile.

        Returns
        -------
        A tuple with two Numpy arrays. The first array are `num` time values
        between 0 and `total_time()`. The second array are the corresponding
        values of acceleration (zero outside the phases).
        """
        t_arr = self._time_axis(num)
        a_arr = np.zeros_like(t_arr)
        t0 = 0.0
        for phase in self._phases:
            mask = (t_arr >= t0) & (t_arr < t0 + phase.time)
            a_arr[mask] = acceleration(t_arr[mask], a0=phase.acceleration)
            t0 += phase.time
        return t_arr, a_arr

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(initial_state={self._initial_state!r}, "
            f"phases={list(self._phases)!r})"
        )
