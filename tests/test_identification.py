import numpy as np
import pytest

from plantforge.errors import InvalidParameter
from plantforge.identification import (
    identify_drivetrain_system,
    identify_position_system,
    identify_velocity_system,
)


def test_velocity_system():
    sys = identify_velocity_system(kV=0.12, kA=0.01)

    assert sys.dims == (1, 1, 1)
    assert sys.A[0, 0] == pytest.approx(-12.0)
    assert sys.B[0, 0] == pytest.approx(100.0)
    # one volt holds a speed of 1 / kV
    assert sys.dc_gain()[0, 0] == pytest.approx(1.0 / 0.12)


def test_position_system():
    sys = identify_position_system(kV=0.12, kA=0.01)

    assert sys.dims == (2, 1, 1)
    np.testing.assert_allclose(sys.A, [[0.0, 1.0], [0.0, -12.0]])
    np.testing.assert_allclose(sys.B, [[0.0], [100.0]])
    np.testing.assert_array_equal(sys.C, [[1.0, 0.0]])


def test_drivetrain_system_modes():
    kv_lin, ka_lin, kv_ang, ka_ang = 2.0, 0.5, 3.0, 0.8
    sys = identify_drivetrain_system(kv_lin, ka_lin, kv_ang, ka_ang)

    assert sys.dims == (2, 2, 2)
    gain = sys.dc_gain()

    # equal voltages only move forward, opposite voltages only turn
    np.testing.assert_allclose(gain @ [1.0, 1.0], [1.0 / kv_lin, 1.0 / kv_lin])
    np.testing.assert_allclose(gain @ [1.0, -1.0], [1.0 / kv_ang, -1.0 / kv_ang])


@pytest.mark.parametrize("kV, kA", [(0.0, 0.01), (0.12, 0.0), (-0.1, 0.01), (0.12, np.nan)])
def test_gains_must_be_positive(kV, kA):
    with pytest.raises(InvalidParameter):
        identify_velocity_system(kV, kA)
    with pytest.raises(InvalidParameter):
        identify_position_system(kV, kA)


def test_drivetrain_gains_must_be_positive():
    with pytest.raises(InvalidParameter):
        identify_drivetrain_system(2.0, 0.5, 3.0, 0.0)


def test_drivetrain_system_matrices():
    kv_lin, ka_lin, kv_ang, ka_ang = 2.0, 0.5, 3.0, 0.8
    sys = identify_drivetrain_system(kv_lin, ka_lin, kv_ang, ka_ang)

    c = 0.5 / (ka_lin * ka_ang)
    A1 = c * (-ka_lin * kv_ang - kv_lin * ka_ang)
    A2 = c * (ka_lin * kv_ang - kv_lin * ka_ang)
    B1 = c * (ka_lin + ka_ang)
    B2 = c * (ka_ang - ka_lin)

    np.testing.assert_allclose(sys.A, [[A1, A2], [A2, A1]], rtol=1e-12)
    np.testing.assert_allclose(sys.B, [[B1, B2], [B2, B1]], rtol=1e-12)
    np.testing.assert_array_equal(sys.C, np.eye(2))
    np.testing.assert_array_equal(sys.D, np.zeros((2, 2)))


def test_drivetrain_acceleration_gains_set_the_time_scale():
    slow = identify_drivetrain_system(2.0, 1.0, 3.0, 1.6)
    fast = identify_drivetrain_system(2.0, 0.5, 3.0, 0.8)

    # halving both kA doubles every entry of A and B
    np.testing.assert_allclose(fast.A, 2.0 * slow.A, rtol=1e-12)
    np.testing.assert_allclose(fast.B, 2.0 * slow.B, rtol=1e-12)
