"""
Trapezoidal motion profiles between two states.

Two planners are implemented in this module:
- Class `AsymmetricTrapezoidProfile` limits velocity, and limits acceleration
  differently in the first phase of motion (acceleration) and in the final
  phase of motion (deceleration).
- Class `TrapezoidProfile` is the special case where acceleration and
  deceleration have the same limit.

The velocity of these profiles forms a trapezoid when plotted against time,
or a triangle if the velocity limit cannot be reached before the profile
needs to decelerate. Their most useful application is to feed the setpoint of
a feedback controller, to avoid saturating the control effort or the initial
spike of a proportional term.
"""
from __future__ import annotations
import logging
import math
from dataclasses import dataclass

from pymotionprofile.core.exceptions import ConstraintError, StateError, ProfileError

from .phase import EPSILON, State, ProfilePhase
from .motion_profile import MotionProfile
from .kinematics import displacement, time_to_displacement


logger = logging.getLogger(__name__)


def _check_magnitude(name: str, value: float) -> None:
    if not math.isfinite(value) or value <= 0.0:
        raise ConstraintError(
            f"`{name}` must be a finite, strictly positive number, got {value!r}."
        )


@dataclass(frozen=True, eq=False)
class Constraints:
    """
    Maximum allowable rates of an `AsymmetricTrapezoidProfile`.

    All limits are magnitudes; their sign is chosen by the planner from the
    direction of travel. It's best to think of `max_acceleration` as the limit
    for the first phase of motion and of `max_deceleration` as the limit for
    the final phase of motion.

    Attributes
    ----------
    max_velocity : float
        Maximum velocity.
    max_acceleration : float
        Maximum acceleration.
    max_deceleration : float
        Maximum deceleration.

    Raises
    ------
    ConstraintError
        If any limit is zero, negative, or not finite.
    """
    max_velocity: float
    max_acceleration: float
    max_deceleration: float

    def __post_init__(self) -> None:
        _check_magnitude("max_velocity", self.max_velocity)
        _check_magnitude("max_acceleration", self.max_acceleration)
        _check_magnitude("max_deceleration", self.max_deceleration)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Constraints):
            return NotImplemented
        return (
            abs(self.max_velocity - other.max_velocity) < EPSILON
            and abs(self.max_acceleration - other.max_acceleration) < EPSILON
            and abs(self.max_deceleration - other.max_deceleration) < EPSILON
        )


@dataclass(frozen=True, eq=False)
class TrapezoidConstraints:
    """
    Maximum allowable rates of a `TrapezoidProfile`.

    Attributes
    ----------
    max_velocity : float
        Maximum velocity.
    max_acceleration : float
        Maximum acceleration, used in both directions.
    """
    max_velocity: float
    max_acceleration: float

    def __post_init__(self) -> None:
        _check_magnitude("max_velocity", self.max_velocity)
        _check_magnitude("max_acceleration", self.max_acceleration)

    def to_asymmetric(self) -> Constraints:
        return Constraints(self.max_velocity, self.max_acceleration, self.max_acceleration)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TrapezoidConstraints):
            return NotImplemented
        return (
            abs(self.max_velocity - other.max_velocity) < EPSILON
            and abs(self.max_acceleration - other.max_acceleration) < EPSILON
        )


class AsymmetricTrapezoidProfile(MotionProfile):
    """
    Motion profile between two states, generated with velocity, acceleration
    and deceleration constraints.

    The whole profile is calculated when the object is created. After
    instantiation, the following properties are available besides those of
    `MotionProfile`:

    Attributes
    ----------
    `constraints`:
        The constraints the profile was planned with.
    `target_state`:
        The goal state, with its velocity limited to the maximum velocity.
    `direction`:
        +1 if the target lies at or beyond the initial position, -1 otherwise.

    If the target velocity cannot be reached at the target position within
    the constraints, the profile still ends exactly at the target position:
    if the target velocity is too high, the profile accelerates all the way;
    if it is too low, the profile decelerates all the way at whatever rate
    lands on the target velocity.
    """
    def __init__(
        self,
        constraints: Constraints,
        target: State,
        initial: State | None = None
    ) -> None:
        """Creates an `AsymmetricTrapezoidProfile` object.

        Parameters
        ----------
        constraints:
            Maximum velocity, acceleration and deceleration.
        target:
            Desired state when the profile is complete.
        initial:
            Initial state, usually the current state of the mechanism.
            Default is zero position and zero velocity.

        Raises
        ------
        StateError
            If the target velocity points against the direction of travel,
            or if the target position equals the initial position while a
            non-zero target velocity is requested.
        ProfileError
            If the endpoints admit no finite profile.
        """
        if initial is None:
            initial = State()
        self.constraints = constraints

        # Everything below is calculated as if the motion were positive; the
        # direction is applied to the limits so that the resulting phases
        # carry the right signs.
        ds_tot = target.position - initial.position
        self.direction = direction = -1 if ds_tot < 0 else 1
        self._check_endpoints(ds_tot, target)

        v_max = constraints.max_velocity * direction
        a_acc = constraints.max_acceleration * direction
        a_dec = -constraints.max_deceleration * direction

        # The initial velocity may point the wrong way when starting.
        if direction == 1:
            v_i = min(initial.velocity, v_max)
            v_f = min(target.velocity, v_max)
        else:
            v_i = max(initial.velocity, v_max)
            v_f = max(target.velocity, v_max)

        super().__init__(initial_state=State(initial.position, v_i))
        self.target_state = State(target.position, v_f)

        if ds_tot == 0.0 and v_i == v_f:
            logger.debug("Target coincides with initial state: empty profile.")
            return

        # Time and position to reach top velocity (possibly overshooting).
        dt_acc = (v_max - v_i) / a_acc
        ds_acc = displacement(dt_acc, v_i, a_acc)

        # Time and position to decelerate from top velocity to target velocity.
        dt_dec = (v_f - v_max) / a_dec
        ds_dec = displacement(dt_dec, v_max, a_dec)

        # The remainder is travelled at top velocity.
        ds_cov = ds_tot - (ds_acc + ds_dec)
        dt_cov = ds_cov / v_max

        if ds_cov * direction < 0:
            # Top velocity can't be reached without overshooting: the
            # acceleration and deceleration ramps intersect below it.
            dt_acc, dt_dec, a_dec = self._calc_ramp_intersection(
                ds_tot, v_i, v_f, a_acc, a_dec
            )
            if dt_dec > 0:
                ds_acc = displacement(dt_acc, v_i, a_acc)
            else:
                ds_acc = ds_tot
            ds_dec = ds_tot - ds_acc
            dt_cov = ds_cov = 0.0
        else:
            logger.debug(
                "Trapezoid profile: accel %.6g s, coast %.6g s, decel %.6g s.",
                dt_acc, dt_cov, dt_dec
            )

        accel_phase = ProfilePhase(dt_acc, ds_acc, a_acc, v_i)
        coast_phase = ProfilePhase(dt_cov, ds_cov, 0.0, v_max)
        decel_phase = ProfilePhase(dt_dec, ds_dec, a_dec, v_i + dt_acc * a_acc)

        for phase in (accel_phase, coast_phase, decel_phase):
            if not math.isfinite(phase.time):
                raise ProfileError(
                    f"Cannot create the motion profile from {initial} to "
                    f"{target}: a phase has no finite duration."
                )
        self._phases = tuple(
            phase for phase in (accel_phase, coast_phase, decel_phase)
            if phase.time > 0
        )

    @property
    def final_state(self) -> State:
        """State at the end of the profile. Its velocity is the velocity
        actually reached, which is the target velocity whenever that is
        reachable within the constraints.
        """
        if not self._phases:
            return self.target_state
        return super().final_state

    @staticmethod
    def _check_endpoints(ds_tot: float, target: State) -> None:
        if ds_tot == 0.0 and target.velocity != 0.0:
            raise StateError(
                "The target position equals the initial position, but a "
                "non-zero target velocity is requested."
            )
        if ds_tot != 0.0 and target.velocity * ds_tot < 0.0:
            raise StateError(
                "The target velocity points against the direction of travel."
            )

    def _calc_ramp_intersection(
        self,
        ds_tot: float,
        v_i: float,
        v_f: float,
        a_acc: float,
        a_dec: float
    ) -> tuple[float, float, float]:
        """
        Returns the acceleration time, the deceleration time and the
        (possibly adjusted) deceleration of a profile without coast phase.

        The total displacement is split into three integrals: the acceleration
        up to the intersection point, the deceleration back down to the
        initial velocity, and the deceleration from there to the target
        velocity (negative if the target velocity exceeds the initial one).
        Using `a_acc * dt_acc = -a_dec * dt_back` and `dt_end = -dv / a_dec`,
        their sum is a quadratic in the acceleration time.
        """
        direction = self.direction
        dv = v_i - v_f
        a = 0.5 * a_acc - a_acc ** 2 / (2 * a_dec)
        b = v_i - v_i * a_acc / a_dec
        c = -(dv ** 2 / (2 * a_dec) + v_f * dv / a_dec + ds_tot)

        discriminant = b ** 2 - 4 * a * c
        if discriminant < 0.0:
            if discriminant < -EPSILON:
                raise ProfileError(
                    "The acceleration and deceleration ramps don't intersect."
                )
            discriminant = 0.0

        # Subtracting the square root always gives a negative time for
        # positive travel and vice versa, so the root is fixed.
        dt_acc = (-b + direction * math.sqrt(discriminant)) / (2 * a)
        dt_dec = -((a_acc / a_dec) * dt_acc + dv / a_dec)

        if dt_dec < 0:
            # Target velocity is higher than can be reached: accelerate over
            # the whole distance.
            dt_acc = time_to_displacement(ds_tot, v_i, a_acc, direction)
            logger.debug(
                "Target velocity %.6g unreachable (too high); accelerating "
                "for %.6g s.", v_f, dt_acc
            )
            return dt_acc, 0.0, a_dec

        if dt_acc < 0:
            # Target velocity is lower than can be reached: decelerate over
            # the whole distance, faster than the limit if needed.
            v_sum = v_i + v_f
            if v_sum == 0.0:
                raise ProfileError(
                    "Cannot decelerate onto the target position: the initial "
                    "and target velocities cancel out."
                )
            dt_dec = 2 * ds_tot / v_sum
            a_dec = (v_f - v_i) / dt_dec if dt_dec != 0.0 else a_dec
            logger.debug(
                "Target velocity %.6g unreachable (too low); decelerating "
                "at %.6g for %.6g s.", v_f, a_dec, dt_dec
            )
            return 0.0, dt_dec, a_dec

        logger.debug(
            "Triangular profile: accel %.6g s, decel %.6g s.", dt_acc, dt_dec
        )
        return dt_acc, dt_dec, a_dec

    def time_left_until(self, target_position: float) -> float:
        """Returns the time, measured from the start of the profile, at which
        the profile reaches `target_position`.

        Positions before the initial position return 0.0; positions at or
        beyond the target position return `total_time()`.
        """
        direction = self.direction
        ds = target_position - self.initial_state.position
        if ds * direction <= 0.0:
            return 0.0
        t = 0.0
        for phase in self._phases:
            if (ds - phase.position) * direction < 0:
                return t + time_to_displacement(
                    ds, phase.initial_velocity, phase.acceleration, direction
                )
            t += phase.time
            ds -= phase.position
        return t


class TrapezoidProfile(AsymmetricTrapezoidProfile):
    """
    Special case of an `AsymmetricTrapezoidProfile` where the acceleration
    and deceleration limits are the same.
    """
    def __init__(
        self,
        constraints: TrapezoidConstraints,
        target: State,
        initial: State | None = None
    ) -> None:
        """Creates a `TrapezoidProfile` object.

        Parameters
        ----------
        constraints:
            Maximum velocity and acceleration.
        target:
            Desired state when the profile is complete.
        initial:
            Initial state. Default is zero position and zero velocity.
        """
        super().__init__(constraints.to_asymmetric(), target, initial)
        self.trapezoid_constraints = constraints
