"""
Numba-accelerated core functions for the Glicko-2 recalculation.

Design principles:
1. All hot-path functions compiled with @njit(cache=True)
2. Plain floats and contiguous float64 arrays only (no Python objects)
3. error_model="numpy" so degenerate divisions yield inf/nan instead of raising
4. No fastmath: inf and nan must propagate exactly as IEEE arithmetic dictates
"""

import math

import numpy as np
from numba import njit

SCALE = 173.7178  # Conversion factor from Glicko to Glicko-2 scale
BASE_RATING = 1500.0
PI_SQ = math.pi * math.pi


# =============================================================================
# Scale conversion
# =============================================================================

@njit(cache=True, inline="always")
def to_internal(rating: float, deviation: float) -> tuple:
    """Map a public (rating, deviation) pair to Glicko-2 (mu, phi)."""
    return (rating - BASE_RATING) / SCALE, deviation / SCALE


@njit(cache=True, inline="always")
def to_public(mu: float, phi: float) -> tuple:
    """Map Glicko-2 (mu, phi) back to a public (rating, deviation) pair."""
    return mu * SCALE + BASE_RATING, phi * SCALE


# =============================================================================
# Evidence aggregation
# =============================================================================

@njit(cache=True, error_model="numpy", inline="always")
def _g(phi: float) -> float:
    """Calculate g(phi), the impact factor of an opponent's uncertainty."""
    return 1.0 / math.sqrt(1.0 + 3.0 * (phi * phi) / PI_SQ)


@njit(cache=True, error_model="numpy", inline="always")
def _expected_score(mu: float, opp_mu: float, g_phi: float) -> float:
    """Logistic expected score against an opponent with impact factor g_phi."""
    return 1.0 / (1.0 + math.exp(-g_phi * (mu - opp_mu)))


@njit(cache=True, error_model="numpy")
def aggregate_evidence(
    mu: float,
    opp_ratings: np.ndarray,
    opp_deviations: np.ndarray,
    scores: np.ndarray,
) -> tuple:
    """
    Fold a rating period's matches into (v_inv, delta_sum).

    v_inv is the reciprocal of the estimated variance of the player's rating
    based on game outcomes; delta_sum is the g-weighted sum of score residuals.
    Matches are accumulated in input order so rounding is reproducible.

    Args:
        mu: Player rating on the Glicko-2 scale
        opp_ratings: (N,) Opponent ratings on the public scale
        opp_deviations: (N,) Opponent deviations on the public scale
        scores: (N,) Player scores (1.0 win, 0.5 draw, 0.0 loss)

    Returns:
        (v_inv, delta_sum)
    """
    v_inv = 0.0
    delta_sum = 0.0

    for j in range(len(scores)):
        opp_mu, opp_phi = to_internal(opp_ratings[j], opp_deviations[j])
        g_phi = _g(opp_phi)
        e_val = _expected_score(mu, opp_mu, g_phi)

        v_inv += g_phi * g_phi * e_val * (1.0 - e_val)
        delta_sum += g_phi * (scores[j] - e_val)

    return v_inv, delta_sum


# =============================================================================
# Volatility solver
# =============================================================================

@njit(cache=True, error_model="numpy", inline="always")
def volatility_f(
    x: float,
    a: float,
    delta_sq: float,
    phi_sq: float,
    v: float,
    tau_sq: float,
) -> float:
    """The function whose root gives ln(sigma'^2)."""
    ex = math.exp(x)
    denom = phi_sq + v + ex
    return (ex * (delta_sq - phi_sq - v - ex)) / (2.0 * denom * denom) - (x - a) / tau_sq


@njit(cache=True, error_model="numpy")
def find_upper_bound(
    a: float,
    delta_sq: float,
    phi_sq: float,
    v: float,
    tau: float,
    max_iterations: int,
) -> tuple:
    """
    Choose the second bracket endpoint B for the volatility root.

    If delta^2 exceeds phi^2 + v the endpoint has a closed form. Otherwise
    probe a - k*tau for k = 1, 2, ... until f is non-negative. The probe is
    unbounded unless max_iterations > 0.

    Returns:
        (B, found) where found is False only if the probe hit max_iterations
    """
    if delta_sq > phi_sq + v:
        return math.log(delta_sq - phi_sq - v), True

    tau_sq = tau * tau
    found = True
    x = a
    k = 1
    while True:
        x = a - k * tau
        if volatility_f(x, a, delta_sq, phi_sq, v, tau_sq) >= 0.0:
            break
        if max_iterations > 0 and k >= max_iterations:
            found = False
            break
        k += 1

    return x, found


@njit(cache=True, error_model="numpy")
def solve_volatility(
    sigma: float,
    phi_sq: float,
    delta: float,
    v: float,
    tau: float,
    epsilon: float,
    max_iterations: int,
) -> tuple:
    """
    Solve for the new volatility with the Illinois algorithm.

    The Illinois variant of regula falsi halves the function value at an
    endpoint that survives two consecutive steps, which stops the one-sided
    stalling plain false position suffers on convex functions.

    Neither the bracket probe nor the refinement loop is capped when
    max_iterations <= 0. Convergence then relies on the bracket containing a
    sign change of f, which holds for well-conditioned inputs but is not
    re-checked here: ill-conditioned inputs (e.g. nan from an opponent with
    infinite deviation) can loop forever. A positive max_iterations bounds
    each loop separately and reports the early stop through the flag.

    Args:
        sigma: Current volatility
        phi_sq: Squared player deviation on the Glicko-2 scale
        delta: Estimated rating improvement
        v: Estimated variance from game outcomes
        tau: System constant
        epsilon: Convergence tolerance on |B - A|
        max_iterations: Diagnostic ceiling per loop, <= 0 for none

    Returns:
        (new_sigma, converged)
    """
    a = math.log(sigma * sigma)
    delta_sq = delta * delta
    tau_sq = tau * tau

    A = a
    B, found = find_upper_bound(a, delta_sq, phi_sq, v, tau, max_iterations)
    if not found:
        return math.exp(A / 2.0), False

    f_A = volatility_f(A, a, delta_sq, phi_sq, v, tau_sq)
    f_B = volatility_f(B, a, delta_sq, phi_sq, v, tau_sq)

    iterations = 0
    while abs(B - A) > epsilon:
        if max_iterations > 0 and iterations >= max_iterations:
            return math.exp(A / 2.0), False

        C = A + (A - B) * f_A / (f_B - f_A)
        f_C = volatility_f(C, a, delta_sq, phi_sq, v, tau_sq)

        if f_C * f_B <= 0.0:
            A = B
            f_A = f_B
        else:
            f_A = f_A / 2.0

        B = C
        f_B = f_C
        iterations += 1

    return math.exp(A / 2.0), True


# =============================================================================
# Full recalculation
# =============================================================================

@njit(cache=True, error_model="numpy")
def recalculate_rating(
    rating: float,
    deviation: float,
    volatility: float,
    opp_ratings: np.ndarray,
    opp_deviations: np.ndarray,
    scores: np.ndarray,
    tau: float,
    epsilon: float,
    max_iterations: int,
) -> tuple:
    """
    Recalculate one player's rating for a rating period.

    All inputs and outputs are on the public scale.

    Returns:
        (new_rating, new_deviation, new_volatility, converged)
    """
    mu, phi = to_internal(rating, deviation)
    sigma = volatility
    phi_sq = phi * phi

    # Inactive period: only uncertainty grows
    if len(scores) == 0:
        new_phi = math.sqrt(phi_sq + sigma * sigma)
        new_rating, new_deviation = to_public(mu, new_phi)
        return new_rating, new_deviation, sigma, True

    v_inv, delta_sum = aggregate_evidence(mu, opp_ratings, opp_deviations, scores)
    v = 1.0 / v_inv
    delta = v * delta_sum

    new_sigma, converged = solve_volatility(
        sigma, phi_sq, delta, v, tau, epsilon, max_iterations
    )

    phi_star_sq = phi_sq + new_sigma * new_sigma
    new_phi = 1.0 / math.sqrt(1.0 / phi_star_sq + v_inv)
    new_mu = mu + new_phi * new_phi * delta_sum

    new_rating, new_deviation = to_public(new_mu, new_phi)
    return new_rating, new_deviation, new_sigma, converged
