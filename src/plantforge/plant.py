from __future__ import annotations
from dataclasses import dataclass
import logging
import math
import numpy as np

from .errors import InvalidParameter
from .motor import MotorConstants
from .system import LinearSystem

_logger = logging.getLogger(__name__)


# =============================
# Parameter checks
# =============================

def _positive(name: str, value: float) -> float:
    value = float(value)
    if not math.isfinite(value) or value <= 0.0:
        raise InvalidParameter(f"{name} must be a positive finite number, got {value!r}")
    return value


def _nonzero(name: str, value: float) -> float:
    value = float(value)
    if not math.isfinite(value) or value == 0.0:
        raise InvalidParameter(f"{name} must be a non-zero finite number, got {value!r}")
    return value


def _motor_terms(motor: MotorConstants) -> tuple[float, float, float]:
    """Returns validated (R, Kt, Kb)."""
    if not isinstance(motor, MotorConstants):
        raise TypeError(f"motor must expose R, Kt and Kb, got {type(motor).__name__}")
    return _positive("motor.R", motor.R), _positive("motor.Kt", motor.Kt), _positive("motor.Kb", motor.Kb)


# =============================
# Plants
# =============================

def flywheel_system(motor: MotorConstants, J: float, G: float) -> LinearSystem:
    """
    Flywheel driven through a gear reduction.

    States:  [angular velocity]  (rad/s)
    Inputs:  [voltage]           (V)
    Outputs: [angular velocity]  (rad/s)

    J: moment of inertia (kg m^2), > 0
    G: motor turns per output turn, != 0; a negative G reverses the output direction
    """
    R, Kt, Kb = _motor_terms(motor)
    J = _positive("J", J)
    G = _nonzero("G", G)

    # J dω/dt = G τ_motor,  τ_motor = Kt/R V - Kt Kb/R (G ω)
    A = np.array([[-(G ** 2) * Kt * Kb / (R * J)]])
    B = np.array([[G * Kt / (R * J)]])
    C = np.array([[1.0]])
    D = np.array([[0.0]])

    _logger.debug("flywheel_system J=%g G=%g -> A=%g B=%g", J, G, A[0, 0], B[0, 0])
    return LinearSystem(A, B, C, D, states=1, inputs=1, outputs=1)


def elevator_system(motor: MotorConstants, mass: float, radius: float, G: float) -> LinearSystem:
    """
    Carriage lifted by a drum of the given radius.

    States:  [position (m), velocity (m/s)]
    Inputs:  [voltage (V)]
    Outputs: [position (m)]
    """
    R, Kt, Kb = _motor_terms(motor)
    m = _positive("mass", mass)
    r = _positive("radius", radius)
    G = _nonzero("G", G)

    A = np.array([[0.0, 1.0], [0.0, -(G ** 2) * Kt * Kb / (R * r ** 2 * m)]])
    B = np.array([[0.0], [G * Kt / (R * r * m)]])
    C = np.array([[1.0, 0.0]])
    D = np.array([[0.0]])

    _logger.debug("elevator_system mass=%g radius=%g G=%g -> A=%s B=%s", m, r, G, A.tolist(), B.tolist())
    return LinearSystem(A, B, C, D, states=2, inputs=1, outputs=1)


def single_jointed_arm_system(motor: MotorConstants, J: float, G: float) -> LinearSystem:
    """
    States:  [angle (rad), angular velocity (rad/s)]
    Inputs:  [voltage (V)]
    Outputs: [angle (rad)]
    """
    R, Kt, Kb = _motor_terms(motor)
    J = _positive("J", J)
    G = _nonzero("G", G)

    A = np.array([[0.0, 1.0], [0.0, -(G ** 2) * Kt * Kb / (R * J)]])
    B = np.array([[0.0], [G * Kt / (R * J)]])
    C = np.array([[1.0, 0.0]])
    D = np.array([[0.0]])

    _logger.debug("single_jointed_arm_system J=%g G=%g -> A=%s B=%s", J, G, A.tolist(), B.tolist())
    return LinearSystem(A, B, C, D, states=2, inputs=1, outputs=1)


def drivetrain_velocity_system(
    motor: MotorConstants,
    mass: float,
    r: float,
    rb: float,
    J: float,
    G: float,
) -> LinearSystem:
    """
    Differential drive, one gearbox per side.

    States:  [left velocity, right velocity]  (m/s)
    Inputs:  [left voltage, right voltage]    (V)
    Outputs: [left velocity, right velocity]  (m/s)

    mass: robot mass (kg), r: wheel radius (m), rb: half the track width (m),
    J: robot moment of inertia about its centre (kg m^2), G: gear reduction
    """
    R, Kt, Kb = _motor_terms(motor)
    m = _positive("mass", mass)
    r = _positive("r", r)
    rb = _positive("rb", rb)
    J = _positive("J", J)
    G = _nonzero("G", G)

    C1 = -(G ** 2) * Kt * Kb / (R * r ** 2)
    C2 = G * Kt / (R * r)
    C3 = 1.0 / m + rb ** 2 / J
    C4 = 1.0 / m - rb ** 2 / J

    A = np.array([[C3 * C1, C4 * C1], [C4 * C1, C3 * C1]])
    B = np.array([[C3 * C2, C4 * C2], [C4 * C2, C3 * C2]])
    C = np.eye(2)
    D = np.zeros((2, 2))

    _logger.debug("drivetrain_velocity_system -> A=%s B=%s", A.tolist(), B.tolist())
    return LinearSystem(A, B, C, D, states=2, inputs=2, outputs=2)


@dataclass(frozen=True)
class FlywheelParams:
    J: float = 0.001   # moment of inertia (kg m^2)
    G: float = 1.0     # motor turns per flywheel turn

    def system(self, motor: MotorConstants) -> LinearSystem:
        return flywheel_system(motor, J=self.J, G=self.G)
