from __future__ import annotations
import logging
import math
import numpy as np

from .errors import InvalidParameter
from .system import LinearSystem

_logger = logging.getLogger(__name__)


def _gain(name: str, value: float) -> float:
    value = float(value)
    if not math.isfinite(value) or value <= 0.0:
        raise InvalidParameter(f"{name} must be greater than zero, got {value!r}")
    return value


def identify_velocity_system(kV: float, kA: float) -> LinearSystem:
    """
    Velocity plant from feedforward gains.

    kV: volts per (unit/s)
    kA: volts per (unit/s^2)

    States/Outputs: [velocity], Inputs: [voltage]
    """
    kV = _gain("kV", kV)
    kA = _gain("kA", kA)

    sys = LinearSystem(
        A=np.array([[-kV / kA]]),
        B=np.array([[1.0 / kA]]),
        C=np.array([[1.0]]),
        D=np.array([[0.0]]),
    )
    _logger.debug("identify_velocity_system kV=%g kA=%g", kV, kA)
    return sys


def identify_position_system(kV: float, kA: float) -> LinearSystem:
    """States: [position, velocity], Inputs: [voltage], Outputs: [position]"""
    kV = _gain("kV", kV)
    kA = _gain("kA", kA)

    sys = LinearSystem(
        A=np.array([[0.0, 1.0], [0.0, -kV / kA]]),
        B=np.array([[0.0], [1.0 / kA]]),
        C=np.array([[1.0, 0.0]]),
        D=np.array([[0.0]]),
    )
    _logger.debug("identify_position_system kV=%g kA=%g", kV, kA)
    return sys


def identify_drivetrain_system(
    kv_linear: float,
    ka_linear: float,
    kv_angular: float,
    ka_angular: float,
) -> LinearSystem:
    """
    Differential drive velocity plant from linear and angular feedforward gains.

    States/Outputs: [left velocity, right velocity]
    Inputs: [left voltage, right voltage]
    """
    kv_linear = _gain("kv_linear", kv_linear)
    ka_linear = _gain("ka_linear", ka_linear)
    kv_angular = _gain("kv_angular", kv_angular)
    ka_angular = _gain("ka_angular", ka_angular)

    c = 0.5 / (ka_linear * ka_angular)
    A1 = c * (-ka_linear * kv_angular - kv_linear * ka_angular)
    A2 = c * (ka_linear * kv_angular - kv_linear * ka_angular)
    B1 = c * (ka_linear + ka_angular)
    B2 = c * (ka_angular - ka_linear)

    sys = LinearSystem(
        A=np.array([[A1, A2], [A2, A1]]),
        B=np.array([[B1, B2], [B2, B1]]),
        C=np.eye(2),
        D=np.zeros((2, 2)),
    )
    _logger.debug("identify_drivetrain_system A=%s B=%s", sys.A.tolist(), sys.B.tolist())
    return sys
