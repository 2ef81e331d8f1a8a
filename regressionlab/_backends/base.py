"""
Abstract base class for least-squares backends.

Defines the interface every backend implements.
"""

from abc import ABC, abstractmethod
import numpy as np
from dataclasses import dataclass


@dataclass
class LinearModelResult:
    """Raw least-squares fit returned by a backend."""
    coef: np.ndarray          # Intercept first, NaN for aliased columns
    residuals: np.ndarray
    fitted_values: np.ndarray
    rank: int
    df_residual: int
    qr_R: np.ndarray          # Upper triangle of the pivoted QR
    qr_pivot: np.ndarray      # 0-indexed column order used by qr_R
    qr_tol: float


class BackendBase(ABC):
    """Abstract base class for all backends."""

    name = "base"
    precision = "fp64"

    @abstractmethod
    def fit_linear_model(self, X: np.ndarray, y: np.ndarray) -> LinearModelResult:
        """
        Fit ``y ~ 1 + X`` by least squares.

        Parameters
        ----------
        X : ndarray, shape (n, p)
            Design matrix (WITHOUT intercept)
        y : ndarray, shape (n,)
            Response vector

        Returns
        -------
        LinearModelResult
            Fit results as numpy arrays, whatever the backend computes in
        """

    @abstractmethod
    def get_device_info(self) -> dict:
        """Get backend information."""

    def __repr__(self):
        return f"{type(self).__name__}(name={self.name!r})"


def rank_from_diagonal(R_diag: np.ndarray, tol: float) -> int:
    """Numerical rank from the absolute diagonal of a pivoted R."""
    if len(R_diag) == 0 or R_diag[0] == 0:
        return 0
    return int(np.sum(R_diag >= tol * R_diag[0]))
