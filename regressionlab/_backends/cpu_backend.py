"""
CPU backend using NumPy + SciPy.

Reference implementation; the other backends are checked against it.
"""

import numpy as np
from scipy.linalg import qr, solve_triangular

from .base import BackendBase, LinearModelResult, rank_from_diagonal


class CPUBackend(BackendBase):
    """
    Least squares via Householder QR with column pivoting (LAPACK).

    Always FP64.
    """

    def __init__(self):
        self.name = "cpu_fp64"
        self.precision = "fp64"

    def fit_linear_model(self, X: np.ndarray, y: np.ndarray) -> LinearModelResult:
        """Fit linear model; all computation stays in NumPy."""
        X = np.asarray(X, dtype=np.float64)
        y = np.asarray(y, dtype=np.float64)
        n = len(y)

        # Add intercept
        X_full = np.column_stack([np.ones(n), X])
        p = X_full.shape[1]

        tol = max(n, p) * np.finfo(np.float64).eps

        Q, R, P = qr(X_full, mode='economic', pivoting=True)
        rank = rank_from_diagonal(np.abs(np.diag(R)), tol)

        # Solve R b = Q'y on the leading non-aliased block
        qty = Q.T @ y
        coef = np.full(p, np.nan, dtype=np.float64)
        if rank > 0:
            coef[P[:rank]] = solve_triangular(R[:rank, :rank], qty[:rank], lower=False)

        valid = ~np.isnan(coef)
        if np.any(valid):
            fitted = X_full[:, valid] @ coef[valid]
        else:
            fitted = np.zeros(n, dtype=np.float64)

        return LinearModelResult(
            coef=coef,
            residuals=y - fitted,
            fitted_values=fitted,
            rank=rank,
            df_residual=n - rank,
            qr_R=R[:p, :p],
            qr_pivot=P.astype(np.int64),
            qr_tol=tol,
        )

    def get_device_info(self) -> dict:
        """Get backend information."""
        import scipy
        return {
            'backend': 'cpu',
            'precision': 'fp64',
            'library': f'NumPy {np.__version__}, SciPy {scipy.__version__}',
        }
