from __future__ import annotations
from dataclasses import dataclass
from typing import Protocol, runtime_checkable
import math

from .errors import InvalidParameter


RPM_TO_RAD_PER_SEC = 2.0 * math.pi / 60.0


@runtime_checkable
class MotorConstants(Protocol):
    """Electromechanical constants a plant builder needs from a motor."""

    @property
    def R(self) -> float: ...     # winding resistance (ohm)

    @property
    def Kt(self) -> float: ...    # torque constant (N*m per A)

    @property
    def Kb(self) -> float: ...    # back-EMF constant (V per rad/s)


@dataclass(frozen=True)
class MotorParams:
    """Motor constants given directly, e.g. from a bench characterization."""
    R: float = 0.5      # winding resistance (ohm)
    Kt: float = 0.02    # torque constant (N*m per A)
    Kb: float = 0.02    # back-EMF constant (V per rad/s)

    def __post_init__(self) -> None:
        for name in ("R", "Kt", "Kb"):
            value = getattr(self, name)
            if not math.isfinite(value) or value <= 0.0:
                raise InvalidParameter(f"{name} must be a positive finite number, got {value!r}")


@dataclass(frozen=True)
class DCMotor:
    # Datasheet values for a single motor
    nominal_voltage: float = 12.0  # V
    stall_torque: float = 2.42     # N*m
    stall_current: float = 133.0   # A
    free_current: float = 2.7      # A
    free_speed: float = 556.0      # rad/s

    # Motors ganged on the same gearbox
    num_motors: int = 1

    def __post_init__(self) -> None:
        for name in ("nominal_voltage", "stall_torque", "stall_current", "free_speed"):
            value = getattr(self, name)
            if not math.isfinite(value) or value <= 0.0:
                raise InvalidParameter(f"{name} must be a positive finite number, got {value!r}")
        if not math.isfinite(self.free_current) or self.free_current < 0.0:
            raise InvalidParameter(f"free_current must be non-negative, got {self.free_current!r}")
        if isinstance(self.num_motors, bool) or not isinstance(self.num_motors, int) or self.num_motors < 1:
            raise InvalidParameter(f"num_motors must be an integer of at least 1, got {self.num_motors!r}")
        if self.R * self.total_free_current >= self.nominal_voltage:
            raise InvalidParameter(
                "free_current leaves no back-EMF at nominal voltage "
                f"(R * I_free = {self.R * self.total_free_current:.4g} V)"
            )

    @property
    def total_stall_torque(self) -> float:
        return self.stall_torque * self.num_motors

    @property
    def total_stall_current(self) -> float:
        return self.stall_current * self.num_motors

    @property
    def total_free_current(self) -> float:
        return self.free_current * self.num_motors

    @property
    def R(self) -> float:
        return self.nominal_voltage / self.total_stall_current

    @property
    def Kv(self) -> float:
        """Speed per volt of back-EMF (rad/s per V)."""
        return self.free_speed / (self.nominal_voltage - self.R * self.total_free_current)

    @property
    def Kb(self) -> float:
        return 1.0 / self.Kv

    @property
    def Kt(self) -> float:
        return self.total_stall_torque / self.total_stall_current

    def current(self, speed: float, voltage: float) -> float:
        """Current drawn at the given motor speed (rad/s) and applied voltage (V)."""
        return (voltage - self.Kb * speed) / self.R

    def torque(self, current: float) -> float:
        return self.Kt * current

    def voltage(self, torque: float, speed: float) -> float:
        return self.Kb * speed + self.R * torque / self.Kt

    def speed(self, torque: float, voltage: float) -> float:
        return (voltage - self.R * torque / self.Kt) * self.Kv

    # Common FRC motors, 12 V datasheet values

    @classmethod
    def cim(cls, num_motors: int = 1) -> DCMotor:
        return cls(12.0, 2.42, 133.0, 2.7, 5310.0 * RPM_TO_RAD_PER_SEC, num_motors)

    @classmethod
    def mini_cim(cls, num_motors: int = 1) -> DCMotor:
        return cls(12.0, 1.41, 89.0, 3.0, 5840.0 * RPM_TO_RAD_PER_SEC, num_motors)

    @classmethod
    def bag(cls, num_motors: int = 1) -> DCMotor:
        return cls(12.0, 0.43, 53.0, 1.8, 13180.0 * RPM_TO_RAD_PER_SEC, num_motors)

    @classmethod
    def vex775pro(cls, num_motors: int = 1) -> DCMotor:
        return cls(12.0, 0.71, 134.0, 0.7, 18730.0 * RPM_TO_RAD_PER_SEC, num_motors)

    @classmethod
    def neo(cls, num_motors: int = 1) -> DCMotor:
        return cls(12.0, 2.6, 105.0, 1.8, 5676.0 * RPM_TO_RAD_PER_SEC, num_motors)

    @classmethod
    def neo550(cls, num_motors: int = 1) -> DCMotor:
        return cls(12.0, 0.97, 100.0, 1.4, 11000.0 * RPM_TO_RAD_PER_SEC, num_motors)

    @classmethod
    def falcon500(cls, num_motors: int = 1) -> DCMotor:
        return cls(12.0, 4.69, 257.0, 1.5, 6380.0 * RPM_TO_RAD_PER_SEC, num_motors)
