"""
PyTorch backend with FP64 precision.

Runs on CUDA when a GPU is present, otherwise on torch's CPU device.
"""

import numpy as np
import warnings
from typing import Optional

from .base import BackendBase, LinearModelResult


class TorchBackend(BackendBase):
    """
    Least squares via ``torch.linalg.qr``.

    torch has no pivoted QR, so aliased columns are found from the
    unpivoted diagonal (a column dependent on earlier ones leaves a ~0
    entry) and the fit is redone on the remaining columns.
    """

    def __init__(self, device: Optional[str] = None):
        self.name = "torch_fp64"
        self.precision = "fp64"

        try:
            import torch
            self.torch = torch
        except ImportError:
            raise RuntimeError(
                "PyTorch required for the torch backend.\n"
                "Install: pip install regressionlab[torch]"
            )

        if device == 'mps':
            raise RuntimeError(
                "FP64 not supported on Apple Metal. "
                "Use backend='cpu'."
            )

        if device is None:
            if torch.cuda.is_available():
                device = 'cuda'
            else:
                warnings.warn("No CUDA GPU available, torch backend using CPU")
                device = 'cpu'

        self.device = torch.device(device)

    def fit_linear_model(self, X: np.ndarray, y: np.ndarray) -> LinearModelResult:
        """Fit linear model with float64 tensors on ``self.device``."""
        torch = self.torch
        X = np.ascontiguousarray(X, dtype=np.float64)
        y = np.ascontiguousarray(y, dtype=np.float64)
        n = len(y)

        y_t = torch.from_numpy(y).to(self.device)
        X_full = torch.cat([
            torch.ones(n, 1, dtype=torch.float64, device=self.device),
            torch.from_numpy(X).reshape(n, -1).to(self.device)
        ], dim=1)
        p = X_full.shape[1]

        tol = max(n, p) * torch.finfo(torch.float64).eps

        _, R0 = torch.linalg.qr(X_full, mode='reduced')
        R_diag = torch.abs(torch.diagonal(R0))
        scale = torch.max(R_diag)
        if scale == 0:
            keep = torch.zeros(p, dtype=torch.bool, device=self.device)
        else:
            keep = R_diag >= tol * scale
        pivot = torch.cat([
            torch.nonzero(keep).flatten(),
            torch.nonzero(~keep).flatten()
        ])
        rank = int(torch.sum(keep).item())

        coef = torch.full((p,), float('nan'), dtype=torch.float64, device=self.device)
        fitted = torch.zeros(n, dtype=torch.float64, device=self.device)
        R = torch.zeros((p, p), dtype=torch.float64, device=self.device)

        if rank > 0:
            X_keep = X_full[:, keep]
            Q, R_keep = torch.linalg.qr(X_keep, mode='reduced')
            qty = Q.T @ y_t
            coef_active = torch.linalg.solve_triangular(
                R_keep,
                qty.unsqueeze(1),
                upper=True
            ).squeeze(1)
            coef[keep] = coef_active
            fitted = X_keep @ coef_active
            R[:rank, :rank] = R_keep[:rank, :rank]

        residuals = y_t - fitted

        return LinearModelResult(
            coef=coef.cpu().numpy(),
            residuals=residuals.cpu().numpy(),
            fitted_values=fitted.cpu().numpy(),
            rank=rank,
            df_residual=n - rank,
            qr_R=R.cpu().numpy(),
            qr_pivot=pivot.cpu().numpy().astype(np.int64),
            qr_tol=float(tol),
        )

    def get_device_info(self) -> dict:
        """Get backend information."""
        return {
            'backend': 'torch',
            'precision': 'fp64',
            'device': str(self.device),
            'library': f'PyTorch {self.torch.__version__}',
        }
