import math

import numpy as np
import pytest

from jc_mle import jc_matrix, jc_probs, prob_changed, prob_unchanged


@pytest.mark.parametrize("t", [0.0, 1e-6, 0.01, 0.3041, 1.0, 3.5, 50.0])
def test_probabilities_sum_to_one(t):
    assert prob_unchanged(t) + 3 * prob_changed(t) == pytest.approx(1.0, abs=1e-9)


@pytest.mark.parametrize("t", [-1e-9, -0.05, -1.0, -100.0])
def test_negative_distance_gives_zero(t):
    assert prob_unchanged(t) == 0.0
    assert prob_changed(t) == 0.0


def test_zero_distance():
    assert prob_unchanged(0) == 1.0
    assert prob_changed(0) == 0.0


def test_long_distance_reaches_stationary():
    assert prob_unchanged(1000.0) == pytest.approx(0.25)
    assert prob_changed(1000.0) == pytest.approx(0.25)


def test_closed_form_values():
    t = 0.3
    e = math.exp(-4.0 * t / 3.0)
    assert prob_unchanged(t) == pytest.approx(0.25 + 0.75 * e)
    assert prob_changed(t) == pytest.approx(0.25 - 0.25 * e)


def test_integer_input_uses_real_division():
    # an int t must not truncate the 1/4, 3/4 fractions
    assert prob_changed(1) == pytest.approx(0.25 - 0.25 * math.exp(-4.0 / 3.0))


def test_stay_prob_decreases_with_distance():
    ts = np.linspace(0, 5, 50)
    stay = [prob_unchanged(t) for t in ts]
    assert all(a > b for a, b in zip(stay, stay[1:]))


def test_jc_probs_pairs_both():
    assert jc_probs(0.4) == (prob_unchanged(0.4), prob_changed(0.4))


def test_jc_matrix():
    P = jc_matrix(0.2)
    assert P.shape == (4, 4)
    assert np.allclose(P.sum(axis=1), 1.0)
    assert np.allclose(np.diag(P), prob_unchanged(0.2))
    off = P[~np.eye(4, dtype=bool)]
    assert np.allclose(off, prob_changed(0.2))
    assert np.allclose(P, P.T)


def test_jc_matrix_negative_distance():
    assert not jc_matrix(-0.1).any()
