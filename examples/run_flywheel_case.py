from __future__ import annotations
import logging

from plantforge.motor import DCMotor
from plantforge.plant import FlywheelParams


def main() -> None:
    logging.basicConfig(level=logging.DEBUG)

    motor = DCMotor.falcon500(num_motors=2)
    p = FlywheelParams(J=0.004, G=1.5)

    sys = p.system(motor)
    print(sys)

    print("Pole (1/s):", float(sys.poles()[0].real))
    print("Steady speed at 12 V (rad/s):", float(sys.dc_gain()[0, 0] * 12.0))


if __name__ == "__main__":
    main()
