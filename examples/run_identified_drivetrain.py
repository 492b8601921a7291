from __future__ import annotations
import numpy as np

from plantforge.identification import identify_drivetrain_system


def main() -> None:
    sys = identify_drivetrain_system(kv_linear=2.2, ka_linear=0.45, kv_angular=2.8, ka_angular=0.3)
    print(sys)

    u = sys.clamp_input(np.array([14.0, -10.0]), max_magnitude=12.0)
    print("Clamped input (V):", u.ravel())
    print("Steady wheel speeds for that input (m/s):", (sys.dc_gain() @ u).ravel())


if __name__ == "__main__":
    main()
