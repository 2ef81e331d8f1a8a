"""
Input validation helpers.
"""

import numbers

import numpy as np


def check_array(X, name='X', dtype=np.float64):
    """Validate a 2-D design matrix (a 1-D input is one column)."""
    X = np.asarray(X, dtype=dtype)
    if X.ndim == 1:
        X = X.reshape(-1, 1)
    if X.ndim != 2:
        raise ValueError(f"{name} must be 2-dimensional")
    if not np.all(np.isfinite(X)):
        raise ValueError(f"{name} contains NaN or Inf")
    return X


def check_vector(y, name='y', dtype=np.float64):
    """Validate vector input."""
    y = np.asarray(y, dtype=dtype)
    if y.ndim != 1:
        raise ValueError(f"{name} must be 1-dimensional")
    if not np.all(np.isfinite(y)):
        raise ValueError(f"{name} contains NaN or Inf")
    return y


def check_count(count, name='count'):
    """Validate a record count (non-negative integer)."""
    if isinstance(count, bool) or not isinstance(count, numbers.Integral):
        raise ValueError(f"{name} must be an integer, got {count!r}")
    if count < 0:
        raise ValueError(f"{name} must be non-negative, got {count}")
    return int(count)
