from __future__ import annotations

from dataclasses import dataclass, replace
import numpy as np
from scipy import signal

from .errors import DimensionMismatch, InvalidParameter


def _real_array(name: str, v) -> np.ndarray:
    """Fresh float copy of v; never a view of the caller's data."""
    try:
        raw = np.asarray(v)
    except ValueError as e:
        raise DimensionMismatch(f"{name} is not a rectangular numeric array") from e
    if np.iscomplexobj(raw):
        raise InvalidParameter(f"{name} must be real-valued")
    try:
        return np.array(raw, dtype=float)
    except (TypeError, ValueError) as e:
        raise InvalidParameter(f"{name} must contain real numbers") from e


def _as_matrix(name: str, m) -> np.ndarray:
    """Copy m into a read-only 2-D float array. Scalars become 1x1, vectors a single row."""
    arr = _real_array(name, m)

    if arr.ndim == 0:
        arr = arr.reshape(1, 1)
    elif arr.ndim == 1:
        arr = arr.reshape(1, -1)
    elif arr.ndim > 2:
        raise DimensionMismatch(f"{name} must be at most 2-D, got shape {arr.shape}")

    if not np.isfinite(arr).all():
        raise InvalidParameter(
            f"Elements of {name} aren't finite. This is usually due to model implementation errors."
        )

    arr.flags.writeable = False
    return arr


def _as_column(name: str, v, n: int) -> np.ndarray:
    arr = _real_array(name, v)
    if arr.size != n:
        raise DimensionMismatch(f"{name} must have {n} elements, got shape {arr.shape}")
    if not np.isfinite(arr).all():
        raise InvalidParameter(f"Elements of {name} aren't finite")
    return arr.reshape(n, 1)


def _count(name: str, n) -> int:
    if isinstance(n, bool) or not isinstance(n, (int, np.integer)) or n < 1:
        raise DimensionMismatch(f"{name} must be a positive integer, got {n!r}")
    return int(n)


@dataclass(frozen=True, eq=False)
class LinearSystem:
    """
    Continuous-time LTI plant:
      x' = A x + B u
      y  = C x + D u

    Shapes are fixed at construction and checked once:
      A: states x states, B: states x inputs,
      C: outputs x states, D: outputs x inputs.

    Counts left as None are inferred from A (rows), B (columns) and C (rows).
    The matrices are private read-only copies.
    """
    A: np.ndarray
    B: np.ndarray
    C: np.ndarray
    D: np.ndarray
    states: int | None = None
    inputs: int | None = None
    outputs: int | None = None

    def __post_init__(self) -> None:
        A = _as_matrix("A", self.A)
        B = _as_matrix("B", self.B)
        C = _as_matrix("C", self.C)
        D = _as_matrix("D", self.D)

        states = _count("states", A.shape[0] if self.states is None else self.states)
        inputs = _count("inputs", B.shape[1] if self.inputs is None else self.inputs)
        outputs = _count("outputs", C.shape[0] if self.outputs is None else self.outputs)

        expected = {
            "A": (A, (states, states)),
            "B": (B, (states, inputs)),
            "C": (C, (outputs, states)),
            "D": (D, (outputs, inputs)),
        }
        for name, (mat, shape) in expected.items():
            if mat.shape != shape:
                raise DimensionMismatch(
                    f"{name} has shape {mat.shape}, expected {shape} "
                    f"for {states} states, {inputs} inputs, {outputs} outputs"
                )

        object.__setattr__(self, "A", A)
        object.__setattr__(self, "B", B)
        object.__setattr__(self, "C", C)
        object.__setattr__(self, "D", D)
        object.__setattr__(self, "states", states)
        object.__setattr__(self, "inputs", inputs)
        object.__setattr__(self, "outputs", outputs)

    def __copy__(self) -> LinearSystem:
        return replace(self)

    def __deepcopy__(self, memo) -> LinearSystem:
        return replace(self)

    @property
    def dims(self) -> tuple[int, int, int]:
        return self.states, self.inputs, self.outputs

    def isclose(self, other: LinearSystem, rtol: float = 1e-9, atol: float = 0.0) -> bool:
        """Element-wise comparison of all four matrices within tolerance."""
        if self.dims != other.dims:
            return False
        pairs = ((self.A, other.A), (self.B, other.B), (self.C, other.C), (self.D, other.D))
        return all(np.allclose(a, b, rtol=rtol, atol=atol) for a, b in pairs)

    def calculate_y(self, x, u) -> np.ndarray:
        """Output y = Cx + Du as a column vector."""
        x = _as_column("x", x, self.states)
        u = _as_column("u", u, self.inputs)
        return self.C @ x + self.D @ u

    def clamp_input(self, u, max_magnitude: float) -> np.ndarray:
        """
        Scale u down so no element exceeds max_magnitude, keeping its direction.
        Inputs already within the limit are returned unchanged (as a column).
        """
        if not max_magnitude > 0.0:
            raise InvalidParameter(f"max_magnitude must be positive, got {max_magnitude!r}")
        u = _as_column("u", u, self.inputs)
        peak = float(np.max(np.abs(u)))
        if peak > max_magnitude:
            return u * (max_magnitude / peak)
        return u

    def poles(self) -> np.ndarray:
        return np.linalg.eigvals(self.A)

    def dc_gain(self) -> np.ndarray:
        """Steady-state output per unit constant input: D - C A^-1 B."""
        try:
            x_per_u = np.linalg.solve(self.A, self.B)
        except np.linalg.LinAlgError as e:
            raise InvalidParameter("A is singular; the system has no finite DC gain") from e
        return self.D - self.C @ x_per_u

    def to_scipy(self) -> signal.StateSpace:
        return signal.StateSpace(self.A, self.B, self.C, self.D)

    def __str__(self) -> str:
        return f"Linear System: A\n{self.A}\n\nB:\n{self.B}\n\nC:\n{self.C}\n\nD:\n{self.D}\n"
