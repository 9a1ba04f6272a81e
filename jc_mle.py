import math, inspect, logging, warnings
import numpy as np
from typing import Callable, List, NamedTuple, Sequence, Tuple
from numpy.random import Generator

logger = logging.getLogger(__name__)

NUCLEOTIDES = "ACGT"
EXP_COEF = -4.0 / 3.0
MIN_STEP = 0.0001   # refinement stops once the step is at or below this

# --- Errors -------------------------------------------------------------------
class LengthMismatchError(ValueError):
    """Two sequences handed to a pairwise routine are not the same length."""
    def __init__(self, len_a: int, len_b: int):
        self.len_a = len_a
        self.len_b = len_b
        super().__init__(f"sequences differ in length: {len_a} != {len_b}")

class DegenerateInputWarning(UserWarning):
    """Input is allowed but gives an uninteresting answer (t0 < 0, step <= 0)."""

# --- Jukes–Cantor transition probabilities ------------------------------------
def prob_unchanged(t: float) -> float:
    if t < 0:
        return 0.0
    return abs(0.25 + 0.75 * math.exp(EXP_COEF * float(t)))

def prob_changed(t: float) -> float:
    """Probability of moving to one *specific* other base after distance t."""
    if t < 0:
        return 0.0
    return abs(0.25 - 0.25 * math.exp(EXP_COEF * float(t)))

def jc_probs(t: float) -> tuple[float, float]:
    """Return (stay_prob, change_prob) for JC69 at distance t."""
    return prob_unchanged(t), prob_changed(t)

def jc_matrix(t: float) -> np.ndarray:
    """4x4 transition matrix over NUCLEOTIDES (rows: from, cols: to)."""
    stay, change = jc_probs(t)
    P = np.full((4, 4), change, dtype=float)
    np.fill_diagonal(P, stay)
    return P

# --- Site handling ------------------------------------------------------------
def _as_sites(seq) -> np.ndarray:
    if isinstance(seq, str):
        return np.array(list(seq))
    return np.asarray(seq)

def _aligned(seq_a, seq_b) -> tuple[np.ndarray, np.ndarray]:
    if len(seq_a) != len(seq_b):
        raise LengthMismatchError(len(seq_a), len(seq_b))
    return _as_sites(seq_a), _as_sites(seq_b)

def count_mismatches(seq_a, seq_b) -> int:
    a, b = _aligned(seq_a, seq_b)
    return int(np.count_nonzero(a != b))

def p_distance(seq_a, seq_b) -> float:
    """Proportion of aligned sites that differ."""
    a, b = _aligned(seq_a, seq_b)
    if len(a) == 0:
        return 0.0
    return float(np.count_nonzero(a != b)) / len(a)

def jc_distance(seq_a, seq_b) -> float:
    """Closed-form JC69 MLE; inf once the pair is saturated (p >= 3/4)."""
    p = p_distance(seq_a, seq_b)
    if p >= 0.75:
        return float("inf")
    return max(0.0, -0.75 * math.log(1.0 - (4.0 / 3.0) * p))

# --- Pairwise log-likelihood --------------------------------------------------
def _site_log_likelihood(a: np.ndarray, b: np.ndarray, t: float) -> float:
    stay, change = jc_probs(t)
    # log(0) is -inf here, not an error
    with np.errstate(divide="ignore"):
        log_stay, log_change = np.log([stay, change])
    # select per site before summing so an unused -inf never meets a 0 weight
    return float(np.where(a == b, log_stay, log_change).sum())

def log_likelihood(seq_a, seq_b, t: float) -> float:
    """
    Sum over sites of ln P(b_i | a_i, t). Sites are i.i.d., so the sequence
    log-likelihood is a sum of logs rather than a log of a product.

    Both sequences must use the same encoding (two strings, or two arrays of
    state codes); a string compared against an int array mismatches everywhere.
    """
    a, b = _aligned(seq_a, seq_b)
    return _site_log_likelihood(a, b, t)

def sweep(seq_a, seq_b, values: Sequence[float]) -> List[Tuple[float, float]]:
    """(t, log-likelihood) for every t in `values`, in the order given."""
    a, b = _aligned(seq_a, seq_b)
    return [(float(t), _site_log_likelihood(a, b, t)) for t in values]

# --- Hill-climbing optimizer --------------------------------------------------
def _climb(a: np.ndarray, b: np.ndarray, t: float, step: float) -> float:
    """One refinement level: walk up in +t, then in -t, at a fixed step."""
    like = _site_log_likelihood(a, b, t)

    while _site_log_likelihood(a, b, t + step) > like:
        t += step
        like = _site_log_likelihood(a, b, t)

    while _site_log_likelihood(a, b, t - step) > like:
        t -= step
        like = _site_log_likelihood(a, b, t)

    logger.debug("step=%g t=%.6f like=%.6f", step, t, like)
    return t

def optimize(seq_a, seq_b, t0: float, step_size0: float) -> float:
    """
    Maximum-likelihood JC distance between two aligned sequences.

    Walks uphill in +t, then in -t, from t0 with step_size0, then repeats from
    the new point with half the step until the step is at most MIN_STEP.
    A non-positive or non-finite step makes no moves and returns t0.
    """
    a, b = _aligned(seq_a, seq_b)
    t = float(t0)
    if t < 0:
        warnings.warn(f"negative starting distance t0={t}", DegenerateInputWarning, stacklevel=2)
    step = float(step_size0)
    if not math.isfinite(step) or step <= 0:
        warnings.warn(f"step size {step_size0} is not a positive finite number; returning t0",
                      DegenerateInputWarning, stacklevel=2)
        return t

    t = _climb(a, b, t, step)
    while step > MIN_STEP:
        step /= 2.0
        t = _climb(a, b, t, step)
    return t

# --- JC pair simulation -------------------------------------------------------
def simulate_jc_pair(n_sites: int, t: float, rng: Generator) -> tuple[np.ndarray, np.ndarray]:
    """Uniform random root of states 0..3 plus a JC69 descendant at distance t."""
    root = rng.integers(0, 4, size=n_sites)
    p_any_change = 3.0 * prob_changed(t)
    u = rng.random(n_sites)
    child = root.copy()
    muts = np.where(u < p_any_change)[0]
    # shifting by 1..3 (mod 4) lands on each of the other three bases equally
    child[muts] = (root[muts] + rng.integers(1, 4, size=len(muts))) % 4
    return root, child

# --- Single experimental replicate --------------------------------------------
class Replicate(NamedTuple):
    t_hat: float
    t_closed: float
    mismatches: int
    saturated: bool

def run_replicate(build_pair, n_sites: int, distance: float, rng: Generator,
                  t0: float = 0.05, step_size: float = 0.1) -> Replicate:
    if 'rng' in inspect.signature(build_pair).parameters:
        seq_a, seq_b = build_pair(n_sites, distance, rng=rng)
    else:
        seq_a, seq_b = build_pair(n_sites, distance)

    t_hat = optimize(seq_a, seq_b, t0, step_size)
    t_closed = jc_distance(seq_a, seq_b)
    return Replicate(t_hat, t_closed, count_mismatches(seq_a, seq_b), math.isinf(t_closed))

# --- Main logic ---------------------------------------------------------------
def run_jc_mle(build_pair: Callable, reps=100, distance=0.1, n_sites_vals=None,
               t0=0.05, step_size=0.1, rng=None) -> list[dict]:
    if n_sites_vals is None:
        n_sites_vals = np.logspace(1, 3, 10, base=10, dtype=int).tolist()
    if rng is None:
        rng = np.random.default_rng()

    def mean_or_nan(x):
        return float(np.mean(x)) if x else float('nan')

    header = (
        f"{'n_sites':>7} | {'mean_t̂':>8} | {'|t̂−t|':>8} | "
        f"{'|t̂−t*|':>9} | {'saturated':>14}"
    )
    print(header); print("-" * len(header))

    rows = []
    for n_sites in n_sites_vals:
        t_hats, true_errs, closed_errs = [], [], []
        saturated = 0

        for _ in range(reps):
            rep = run_replicate(build_pair, n_sites, distance, rng, t0, step_size)
            if rep.saturated:
                saturated += 1
                continue
            t_hats.append(rep.t_hat)
            true_errs.append(abs(rep.t_hat - distance))
            closed_errs.append(abs(rep.t_hat - rep.t_closed))

        row = {
            "n_sites": n_sites,
            "mean_t_hat": mean_or_nan(t_hats),
            "mean_err_true": mean_or_nan(true_errs),
            "mean_err_closed": mean_or_nan(closed_errs),
            "saturated": saturated,
        }
        rows.append(row)
        sat_rate = saturated / reps if reps else float('nan')
        logger.info("%s n_sites=%d t=%.3f done (%d saturated)",
                    build_pair.__name__, n_sites, distance, saturated)

        print(
            f"{n_sites:7d} | "
            f"{row['mean_t_hat']:8.4f} | "
            f"{row['mean_err_true']:8.4f} | "
            f"{row['mean_err_closed']:9.6f} | "
            f"{saturated:3d}/{reps:<3d} ({sat_rate:>4.1%})"
        )

    return rows
