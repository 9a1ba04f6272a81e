import os, logging
import numpy as np
import jc_mle as jm
import fixed_pairs
import simulated_pairs

# Distance params
START_T     = 0.05
END_T       = 0.5
NUM_T       = 4

# Functions
FXN_LIST    = [
    simulated_pairs.jc_pair,
    #fixed_pairs.mismatch_pair,
    #fixed_pairs.identical_pair,
]

# Optimizer
T0          = 0.05
STEP_SIZE   = 0.1

# Other
REPS        = 200
N_SITES_VALS = np.logspace(1, 3, 10, base=10, dtype=int).tolist()
RNG         = np.random.default_rng(42)
LOG_LEVEL   = os.environ.get("JC_MLE_LOG_LEVEL", "INFO")

def main():
    logging.basicConfig(
        level=LOG_LEVEL.upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    distances = np.linspace(
        START_T, END_T, NUM_T, dtype=float
    ).tolist()

    for fxn in FXN_LIST:
        for distance in distances:

            print(f"\n    FXN   = {fxn.__name__}")
            print(f"--- t     = {distance:.2f} ------------------------")

            jm.run_jc_mle(
                build_pair   = fxn,
                reps         = REPS,
                distance     = distance,
                n_sites_vals = N_SITES_VALS,
                t0           = T0,
                step_size    = STEP_SIZE,
                rng          = RNG
            )

if __name__ == "__main__":
    main()
