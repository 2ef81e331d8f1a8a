"""
Closed-form ordinary least squares for one predictor.

    slope     = (n Σxy - Σx Σy) / (n Σx² - (Σx)²)
    intercept = (Σy - slope Σx) / n
    R²        = 1 - Σ(y - ŷ)² / Σ(y - ȳ)²

No centering or other conditioning is applied; inputs with huge x
magnitudes or near-zero x spread lose precision.
"""

from dataclasses import dataclass
from typing import Optional, Tuple

import numpy as np

from ._utils import check_vector
from .datasets import Sample, as_xy


@dataclass(frozen=True)
class RegressionResult:
    """Best-fit line and its goodness of fit."""
    slope: float
    intercept: float
    r_squared: float

    @property
    def explained_variance_pct(self) -> float:
        """R² as a percentage."""
        return 100.0 * self.r_squared

    def __repr__(self):
        return (f"RegressionResult(slope={self.slope:.4f}, "
                f"intercept={self.intercept:.4f}, R²={self.r_squared:.3f})")


class DegenerateInputError(ValueError):
    """
    Samples for which the least-squares line or R² is undefined.

    Attributes
    ----------
    reason : str
        'too_few_samples', 'zero_x_variance' or 'zero_y_variance'
    result : RegressionResult or None
        For 'zero_y_variance' the line is still well defined; it is kept
        here with ``r_squared = nan`` so callers can show it anyway.
    """

    def __init__(self, message: str, reason: str,
                 result: Optional[RegressionResult] = None):
        super().__init__(message)
        self.reason = reason
        self.result = result


def fit_simple(samples) -> RegressionResult:
    """
    Fit y = slope·x + intercept by ordinary least squares.

    Parameters
    ----------
    samples : sequence of Sample or (x, y) pairs
        At least two observations with distinct x and non-constant y.

    Returns
    -------
    RegressionResult

    Raises
    ------
    DegenerateInputError
        Fewer than two samples, zero x variance, or identical y values.
    ValueError
        NaN or Inf in x or y.

    Examples
    --------
    >>> fit_simple([(0, 10), (1, 12.5), (2, 15)])
    RegressionResult(slope=2.5000, intercept=10.0000, R²=1.000)
    """
    x, y = as_xy(samples)
    x = check_vector(x, name='x')
    y = check_vector(y, name='y')
    n = len(x)

    if n < 2:
        raise DegenerateInputError(
            f"Need at least 2 samples for a regression line, got {n}",
            reason='too_few_samples',
        )

    sum_x = np.sum(x)
    sum_y = np.sum(y)
    sum_xy = np.sum(x * y)
    sum_xx = np.sum(x * x)

    denominator = n * sum_xx - sum_x * sum_x
    if denominator == 0 or np.all(x == x[0]):
        raise DegenerateInputError(
            "x values have zero (or numerically zero) variance; the slope is undefined",
            reason='zero_x_variance',
        )

    slope = (n * sum_xy - sum_x * sum_y) / denominator
    intercept = (sum_y - slope * sum_x) / n

    mean_y = sum_y / n
    total_ss = np.sum((y - mean_y) ** 2)
    resid_ss = np.sum((y - (slope * x + intercept)) ** 2)

    if total_ss == 0 or np.all(y == y[0]):
        raise DegenerateInputError(
            "All y values are identical; R² is undefined",
            reason='zero_y_variance',
            result=RegressionResult(float(slope), float(intercept), float('nan')),
        )

    r_squared = 1 - resid_ss / total_ss
    return RegressionResult(float(slope), float(intercept), float(r_squared))


def predict(result: RegressionResult, x):
    """Value of the fitted line at ``x`` (scalar or array)."""
    if np.ndim(x) == 0:
        return result.slope * float(x) + result.intercept
    return result.slope * np.asarray(x, dtype=np.float64) + result.intercept


def regression_line(samples, result: RegressionResult) -> Tuple[Sample, Sample]:
    """
    Endpoints of the fitted line over the observed x range.

    Returns the points at min(x) and max(x), enough to draw the line
    across the scatter.
    """
    x, _ = as_xy(samples)
    if len(x) == 0:
        raise DegenerateInputError("No samples to span a line over",
                                   reason='too_few_samples')
    lo = float(np.min(x))
    hi = float(np.max(x))
    return Sample(lo, predict(result, lo)), Sample(hi, predict(result, hi))
