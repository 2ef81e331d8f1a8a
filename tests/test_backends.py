"""
Test backend implementations.

- CPU: Always tested
- PyTorch: Tested if torch is installed
"""

import warnings

import pytest
import numpy as np
from regressionlab._backends import (
    get_backend,
    list_available_backends,
    print_backend_info,
    CPUBackend,
    TORCH_AVAILABLE,
)


class TestBackendSelection:
    """Test backend lookup and availability."""

    def test_list_backends(self):
        """CPU is always listed; torch only when installed."""
        backends = list_available_backends()
        assert isinstance(backends, list)
        assert 'cpu' in backends
        assert ('torch' in backends) == TORCH_AVAILABLE

    def test_auto_is_cpu(self):
        """'auto' picks the CPU backend."""
        assert isinstance(get_backend('auto'), CPUBackend)

    def test_instance_passthrough(self):
        """An existing backend instance is returned as-is."""
        backend = CPUBackend()
        assert get_backend(backend) is backend

    def test_unknown_backend(self):
        """Unknown names list the valid options."""
        with pytest.raises(ValueError, match="Valid options"):
            get_backend('mlx')

    @pytest.mark.skipif(TORCH_AVAILABLE, reason="torch is installed")
    def test_torch_missing(self):
        """Requesting torch without it installed explains how to get it."""
        with pytest.raises(RuntimeError, match="pip install"):
            get_backend('torch')

    def test_print_backend_info(self, capsys):
        """Test diagnostic printing."""
        print_backend_info()
        captured = capsys.readouterr()
        assert 'Backend Status' in captured.out
        assert 'CPU' in captured.out


class TestCPUBackend:
    """Test CPU backend (always available)."""

    def test_cpu_backend_creation(self):
        """Test CPU backend initializes correctly."""
        backend = get_backend('cpu')
        assert backend.name == 'cpu_fp64'
        assert backend.precision == 'fp64'

    def test_cpu_device_info(self):
        """Test CPU backend device info."""
        info = get_backend('cpu').get_device_info()
        assert info['backend'] == 'cpu'
        assert info['precision'] == 'fp64'
        assert 'NumPy' in info['library']

    def test_cpu_simple_regression(self):
        """Test regression on CPU."""
        backend = get_backend('cpu')

        rng = np.random.default_rng(42)
        n, p = 100, 3
        X = rng.standard_normal((n, p))
        beta_true = np.array([1.0, 2.0, -1.5])
        y = X @ beta_true + 0.1 * rng.standard_normal(n)

        result = backend.fit_linear_model(X, y)

        assert result.coef.shape == (p + 1,)  # +1 for intercept
        assert result.residuals.shape == (n,)
        assert result.fitted_values.shape == (n,)
        assert result.rank == p + 1
        assert result.df_residual == n - p - 1

        assert np.allclose(result.coef[1:], beta_true, atol=0.1)
        np.testing.assert_allclose(result.fitted_values + result.residuals, y)

    def test_cpu_matches_lstsq(self):
        """Coefficients agree with numpy.linalg.lstsq."""
        rng = np.random.default_rng(0)
        X = rng.uniform(0, 10, (40, 2))
        y = rng.normal(size=40)
        expected, *_ = np.linalg.lstsq(np.column_stack([np.ones(40), X]), y, rcond=None)

        result = get_backend('cpu').fit_linear_model(X, y)
        np.testing.assert_allclose(result.coef, expected, rtol=1e-10, atol=1e-12)

    def test_cpu_collinear_column(self):
        """A duplicated column is aliased (NaN), not solved."""
        rng = np.random.default_rng(1)
        x = rng.normal(size=30)
        X = np.column_stack([x, 2 * x])
        y = 3 * x + 1

        result = get_backend('cpu').fit_linear_model(X, y)
        assert result.rank == 2
        assert np.isnan(result.coef).sum() == 1
        np.testing.assert_allclose(result.fitted_values, y, atol=1e-10)


@pytest.mark.skipif(not TORCH_AVAILABLE, reason="torch not installed")
class TestTorchBackend:
    """Test PyTorch backend (CUDA if present, else torch CPU)."""

    @pytest.fixture
    def backend(self):
        with warnings.catch_warnings():
            # CPU fallback warning when there is no CUDA device
            warnings.simplefilter("ignore", UserWarning)
            return get_backend('torch')

    def test_torch_backend_creation(self, backend):
        """Test torch backend initializes."""
        assert backend.name == 'torch_fp64'
        assert backend.precision == 'fp64'
        info = backend.get_device_info()
        assert info['backend'] == 'torch'
        assert 'PyTorch' in info['library']

    def test_torch_vs_cpu_consistency(self, backend):
        """Test torch gives the same results as CPU."""
        rng = np.random.default_rng(42)
        X = rng.standard_normal((100, 3))
        y = rng.standard_normal(100)

        cpu_result = get_backend('cpu').fit_linear_model(X, y)
        torch_result = backend.fit_linear_model(X, y)

        np.testing.assert_allclose(cpu_result.coef, torch_result.coef, rtol=1e-8, atol=1e-10)
        np.testing.assert_allclose(cpu_result.residuals, torch_result.residuals,
                                   rtol=1e-8, atol=1e-10)
        assert cpu_result.rank == torch_result.rank

    def test_torch_collinear_column(self, backend):
        """Dependent column is aliased like on CPU."""
        rng = np.random.default_rng(1)
        x = rng.normal(size=30)
        X = np.column_stack([x, 2 * x])
        y = 3 * x + 1

        result = backend.fit_linear_model(X, y)
        assert result.rank == 2
        assert np.isnan(result.coef[2])
        np.testing.assert_allclose(result.fitted_values, y, atol=1e-10)

    def test_torch_rejects_mps(self):
        """FP64 is not available on Apple Metal."""
        from regressionlab._backends.torch_backend import TorchBackend
        with pytest.raises(RuntimeError, match="Metal"):
            TorchBackend(device='mps')
