"""
Backend selection and management.

Provides a unified interface over the NumPy/SciPy CPU backend and the
optional PyTorch backend.
"""

from .base import BackendBase, LinearModelResult
from .cpu_backend import CPUBackend
from .torch_backend import TorchBackend

try:
    import torch  # noqa: F401
    TORCH_AVAILABLE = True
except ImportError:
    TORCH_AVAILABLE = False


VALID_BACKENDS = ('auto', 'cpu', 'torch')


def get_backend(backend: str = 'auto') -> BackendBase:
    """
    Get computational backend.

    Parameters
    ----------
    backend : str
        Backend selection:
        - 'auto': CPU (the demo datasets are far too small to gain from a GPU)
        - 'cpu': NumPy + SciPy (FP64)
        - 'torch': PyTorch FP64, CUDA if available

    Returns
    -------
    BackendBase
        Backend instance

    Examples
    --------
    >>> backend = get_backend('cpu')
    >>> backend.name
    'cpu_fp64'
    """
    if isinstance(backend, BackendBase):
        return backend

    if backend in ('auto', 'cpu'):
        return CPUBackend()

    elif backend == 'torch':
        if not TORCH_AVAILABLE:
            raise RuntimeError(
                "PyTorch backend unavailable.\n"
                "Install: pip install regressionlab[torch]"
            )
        return TorchBackend()

    else:
        raise ValueError(
            f"Unknown backend: '{backend}'\n"
            f"Valid options: {', '.join(repr(b) for b in VALID_BACKENDS)}"
        )


def list_available_backends() -> list:
    """List names of available backends."""
    backends = ['cpu']
    if TORCH_AVAILABLE:
        backends.append('torch')
    return backends


def print_backend_info():
    """Print backend availability (diagnostic)."""
    print("regressionlab Backend Status")
    print("=" * 50)
    print(f"\nAvailable Backends:")
    print(f"  CPU (FP64):     ✓ - pivoted QR (NumPy/SciPy)")
    print(f"  PyTorch (FP64): {'✓' if TORCH_AVAILABLE else '✗'} - QR (torch.linalg)")

    print(f"\nDefault Backend:")
    print(f"  {get_backend('auto').name}")


__all__ = [
    'get_backend',
    'list_available_backends',
    'print_backend_info',
    'BackendBase',
    'LinearModelResult',
    'CPUBackend',
    'TorchBackend',
    'TORCH_AVAILABLE',
    'VALID_BACKENDS',
]


if __name__ == "__main__":
    print_backend_info()
