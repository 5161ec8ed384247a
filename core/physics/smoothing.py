# File: hvac_component_models/core/physics/smoothing.py
"""
Smooth Limiting Functions

Differentiable replacements for abs(), max(), min() and two-sided clamping.
Every function here is exact (equal to its hard counterpart) once the
arguments are further apart than the smoothing width, and has a continuous
first derivative everywhere, so results stay usable by gradient-based and
continuous-time solvers.

These functions sit on the hot path of every component evaluation and do no
input checking or logging.
"""


def reg_non_zero_power(x: float, n: float, delta: float = 0.01) -> float:
    """
    Regularized |x|^n that stays strictly positive.

    Outside [-delta, delta] this is |x|^n. Inside, it is replaced by the even
    polynomial a5 + x²·(a3 + x²·a1) whose value, first and second derivative
    match |x|^n at |x| = delta.

    Args:
        x: Abscissa
        n: Exponent
        delta: Half-width of the regularization interval (> 0)

    Returns:
        Regularized value of |x|^n
    """
    if abs(x) > delta:
        return abs(x) ** n

    delta2 = delta * delta
    x2 = x * x
    y_d = delta ** n
    y_p_d = n * delta ** (n - 1)
    y_pp_d = n * (n - 1) * delta ** (n - 2)
    a1 = -(y_p_d / delta - y_pp_d) / delta2 / 8
    a3 = (y_pp_d - 12 * a1 * delta2) / 2
    a5 = y_d - delta2 * (a3 + delta2 * a1)
    return a5 + x2 * (a3 + x2 * a1)


def smooth_max(x1: float, x2: float, delta: float) -> float:
    """Once continuously differentiable approximation to max(x1, x2)."""
    if abs(x1 - x2) > delta:
        # Exact branch; the closed form gives inf - inf for an infinite argument
        return max(x1, x2)
    return (x1 + x2) / 2 + reg_non_zero_power(x1 - x2, 1, delta) / 2


def smooth_min(x1: float, x2: float, delta: float) -> float:
    """Once continuously differentiable approximation to min(x1, x2)."""
    if abs(x1 - x2) > delta:
        return min(x1, x2)
    return (x1 + x2) / 2 - reg_non_zero_power(x1 - x2, 1, delta) / 2


def smooth_limit(x: float, lower: float, upper: float, delta: float) -> float:
    """
    Once continuously differentiable approximation to min(max(x, lower), upper).

    The bounds are pulled in by delta and blended over delta/10, so the result
    never leaves [lower, upper] and converges to the hard clamp as delta -> 0.
    An interval narrower than 2·delta shrinks delta to half its width; an
    empty or degenerate interval returns upper, as the hard clamp does.
    Either bound may be infinite.
    """
    if not upper > lower:
        return upper
    delta = min(delta, (upper - lower) / 2)
    cor = delta / 10
    y = smooth_max(x, lower + delta, cor)
    return smooth_min(y, upper - delta, cor)
