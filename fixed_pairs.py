import jc_mle as jm
import numpy as np

# --- Deterministic pair builders ---------------------------------------------
def _base_sequence(n_sites: int) -> str:
    if n_sites < 0:
        raise ValueError("n_sites must be non-negative.")
    reps = n_sites // len(jm.NUCLEOTIDES) + 1
    return (jm.NUCLEOTIDES * reps)[:n_sites]

def _substitute(seq: str, positions) -> str:
    out = list(seq)
    for i in positions:
        # next base in ACGT order, always different from the current one
        out[i] = jm.NUCLEOTIDES[(jm.NUCLEOTIDES.index(out[i]) + 1) % 4]
    return "".join(out)

def identical_pair(n_sites: int, distance: float) -> tuple[str, str]:
    seq = _base_sequence(n_sites)
    return seq, seq

def saturated_pair(n_sites: int, distance: float) -> tuple[str, str]:
    """Every site differs, so the closed-form MLE does not exist."""
    seq = _base_sequence(n_sites)
    return seq, _substitute(seq, range(n_sites))

def mismatch_pair(n_sites: int, distance: float, n_mismatches: int | None = None) -> tuple[str, str]:
    """
    Pair whose mismatch count is the expected number of differing sites
    after `distance` under JC69 (rounded), unless n_mismatches is given.
    Mismatches are spread evenly along the sequence.
    """
    seq = _base_sequence(n_sites)
    if n_mismatches is None:
        n_mismatches = int(round(n_sites * 3.0 * jm.prob_changed(distance)))
    if not 0 <= n_mismatches <= n_sites:
        raise ValueError(f"cannot place {n_mismatches} mismatches in {n_sites} sites.")
    positions = np.linspace(0, n_sites, n_mismatches, endpoint=False, dtype=int)
    return seq, _substitute(seq, positions)

# --- Main ------------------------------------------------------------------
def main():
    distance = 0.3
    n_sites_vals = [8, 16, 64, 256, 1024]
    reps = 1

    jm.run_jc_mle(mismatch_pair, reps=reps, distance=distance, n_sites_vals=n_sites_vals)

if __name__ == '__main__':
    main()
