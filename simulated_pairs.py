import jc_mle as jm
import numpy as np

# --- JC69 simulated pair builder ---------------------------------------------
def jc_pair(n_sites: int, distance: float, rng) -> tuple[np.ndarray, np.ndarray]:
    """
    Random root sequence and one descendant evolved for `distance`
    substitutions per site; states are coded 0..3 (A, C, G, T).
    """
    if n_sites < 0:
        raise ValueError("n_sites must be non-negative")
    return jm.simulate_jc_pair(n_sites, distance, rng)

def to_string(seq: np.ndarray) -> str:
    return "".join(jm.NUCLEOTIDES[int(s)] for s in seq)

# --- Main ------------------------------------------------------------------
def main():
    rng = np.random.default_rng(42)
    distance = 0.2
    n_sites_vals = np.logspace(1, 3, 10, base=10, dtype=int).tolist()
    reps = 200

    jm.run_jc_mle(jc_pair, reps=reps, distance=distance, n_sites_vals=n_sites_vals, rng=rng)


if __name__ == '__main__':
    main()
