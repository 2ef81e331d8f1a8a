"""
Multiple and polynomial linear regression with R-style output.

Where ``ols.fit_simple`` is the one-predictor textbook formula, this module
fits any number of predictors through a QR backend and reports the usual
inference (standard errors, t and F tests, confidence intervals).
"""

import warnings
import numpy as np
import pandas as pd
from typing import Optional, Union, List
from scipy import stats

from ._backends import get_backend
from ._utils import check_array, check_vector
from .datasets import MULTIPLE_FEATURES, as_xy, to_frame, HouseRecord
from .ols import DegenerateInputError


class LinearModel:
    """
    Fit linear regression model (like R's lm()).

    Examples
    --------
    >>> from regressionlab import generate_multiple, to_frame, lm
    >>> houses = to_frame(generate_multiple(100))
    >>> model = lm(y='price', X=['size', 'bedrooms', 'age', 'location'],
    ...            data=houses)
    >>> model.summary()
    >>> model.coef         # Named coefficients
    >>> model.pvalues      # P-values for each coefficient
    >>> model.conf_int()   # Confidence intervals
    """

    def __init__(
        self,
        y: Union[str, np.ndarray],
        X: Union[List[str], np.ndarray],
        data: Optional[pd.DataFrame] = None,
        backend: str = 'auto',
        X_names: Optional[List[str]] = None,
    ):
        """
        Fit linear regression model.

        Parameters
        ----------
        y : str or array
            Response variable
            - If string: column name in data
            - If array: numeric values
        X : list of str or array
            Predictor variables
            - If list of strings: column names in data
            - If array: numeric matrix (n × p), or a vector for one predictor
        data : DataFrame, optional
            Dataset containing y and X variables
        backend : str
            Computational backend: 'auto', 'cpu', 'torch'
        X_names : list of str, optional
            Predictor names when X is an array
        """
        if isinstance(y, str):
            if data is None:
                raise ValueError("Must provide data when y is a string")
            self.y_values = check_vector(data[y].values, name=y)
            self.y_name = y
        else:
            self.y_values = check_vector(y)
            self.y_name = 'y'

        if isinstance(X, list) and len(X) > 0 and all(isinstance(x, str) for x in X):
            if data is None:
                raise ValueError("Must provide data when X is list of strings")
            self.X_values = check_array(data[X].values)
            self.X_names = list(X)
        else:
            self.X_values = check_array(X)
            if X_names is not None:
                self.X_names = list(X_names)
            else:
                self.X_names = [f'x{i}' for i in range(self.X_values.shape[1])]

        if len(self.X_names) != self.X_values.shape[1]:
            raise ValueError(
                f"Got {len(self.X_names)} predictor names for "
                f"{self.X_values.shape[1]} columns"
            )
        if self.X_values.shape[0] != len(self.y_values):
            raise ValueError(
                f"X has {self.X_values.shape[0]} rows but y has "
                f"{len(self.y_values)} values"
            )

        self.n_obs = len(self.y_values)
        self.n_coef = self.X_values.shape[1] + 1  # +1 for intercept
        self.var_names = ['Intercept'] + self.X_names

        if self.n_obs < self.n_coef:
            raise DegenerateInputError(
                f"{self.n_obs} observations cannot determine "
                f"{self.n_coef} coefficients",
                reason='too_few_samples',
            )

        self.backend = get_backend(backend)
        self._backend_result = self.backend.fit_linear_model(
            self.X_values,
            self.y_values,
        )

        self._compute_statistics()

    def _compute_statistics(self):
        """Compute standard errors, t-stats, p-values, etc."""
        result = self._backend_result

        self.coefficients = result.coef
        self.residuals = result.residuals
        self.fitted_values = result.fitted_values
        self.rank = result.rank
        self.df_residual = result.df_residual

        if self.rank < self.n_coef:
            aliased = [name for name, c in zip(self.var_names, self.coefficients)
                       if np.isnan(c)]
            warnings.warn(
                f"Rank-deficient fit (rank {self.rank} < {self.n_coef}); "
                f"aliased coefficients: {', '.join(aliased)}",
                UserWarning
            )

        # Residual standard error
        rss = float(np.sum(self.residuals**2))
        if self.df_residual > 0:
            self.sigma = np.sqrt(rss / self.df_residual)
        else:
            self.sigma = np.nan

        # Var(b) = sigma² (R'R)⁻¹ on the non-aliased block, placed back
        # through the pivot
        var_beta = np.full((self.n_coef, self.n_coef), np.nan)
        if self.rank > 0:
            R = result.qr_R[:self.rank, :self.rank]
            R_inv = np.linalg.inv(R)
            var_active = (R_inv @ R_inv.T) * (self.sigma ** 2)
            active = result.qr_pivot[:self.rank]
            var_beta[np.ix_(active, active)] = var_active
        self.vcov = var_beta

        with np.errstate(divide='ignore', invalid='ignore'):
            self.std_errors = np.sqrt(np.diag(self.vcov))
            self.t_values = self.coefficients / self.std_errors

        if self.df_residual > 0:
            self.pvalues = 2 * stats.t.sf(np.abs(self.t_values), self.df_residual)
        else:
            self.pvalues = np.full(self.n_coef, np.nan)

        # R-squared is undefined when y has no variance
        tss = float(np.sum((self.y_values - np.mean(self.y_values))**2))
        self.r_squared = 1 - (rss / tss) if tss > 0 else np.nan

        n = self.n_obs
        p = self.rank - 1  # Exclude intercept
        if self.df_residual > 0 and not np.isnan(self.r_squared):
            self.adj_r_squared = 1 - (1 - self.r_squared) * (n - 1) / self.df_residual
        else:
            self.adj_r_squared = np.nan

        if p > 0 and self.df_residual > 0 and tss > 0 and rss > 0:
            self.f_statistic = ((tss - rss) / p) / (rss / self.df_residual)
            self.f_pvalue = stats.f.sf(self.f_statistic, p, self.df_residual)
        else:
            self.f_statistic = np.nan
            self.f_pvalue = np.nan

    @property
    def coef(self):
        """Named coefficients (pandas Series)."""
        return pd.Series(self.coefficients, index=self.var_names)

    def conf_int(self, alpha: float = 0.05):
        """
        Confidence intervals for coefficients.

        Parameters
        ----------
        alpha : float
            Significance level (default: 0.05 for 95% CI)

        Returns
        -------
        DataFrame
            Confidence intervals with columns 'lower' and 'upper'
        """
        if not 0 < alpha < 1:
            raise ValueError(f"alpha must be in (0, 1), got {alpha}")
        if self.df_residual > 0:
            t_crit = stats.t.ppf(1 - alpha/2, self.df_residual)
        else:
            t_crit = np.nan
        lower = self.coefficients - t_crit * self.std_errors
        upper = self.coefficients + t_crit * self.std_errors

        return pd.DataFrame({
            'lower': lower,
            'upper': upper
        }, index=self.var_names)

    def summary(self):
        """Print summary of regression results (like R's summary.lm)."""
        print()
        print("="*80)
        print("LINEAR REGRESSION RESULTS")
        print("="*80)
        print()

        print(f"Dependent variable: {self.y_name}")
        print(f"Number of observations: {self.n_obs}")
        print(f"Degrees of freedom: {self.df_residual} (residual), {self.rank - 1} (model)")
        print()

        print("Residuals:")
        residual_summary = pd.Series(self.residuals).describe()
        print(f"  Min:    {residual_summary['min']:>10.4f}")
        print(f"  1Q:     {residual_summary['25%']:>10.4f}")
        print(f"  Median: {residual_summary['50%']:>10.4f}")
        print(f"  3Q:     {residual_summary['75%']:>10.4f}")
        print(f"  Max:    {residual_summary['max']:>10.4f}")
        print()

        print("Coefficients:")
        print("-"*80)
        print(f"{'Variable':<20} {'Estimate':>12} {'Std. Error':>12} {'t value':>10} {'Pr(>|t|)':>12}")
        print("-"*80)

        for i, name in enumerate(self.var_names):
            p = self.pvalues[i]
            if np.isnan(self.coefficients[i]):
                sig = ' (aliased)'
                p_str = 'NA'
            elif np.isnan(p):
                sig = ''
                p_str = 'NA'
            else:
                if p < 0.001:
                    sig = ' ***'
                elif p < 0.01:
                    sig = ' **'
                elif p < 0.05:
                    sig = ' *'
                elif p < 0.1:
                    sig = ' .'
                else:
                    sig = ''

                p_str = f"{p:.4f}" if p >= 0.0001 else "<.0001"

            print(f"{name:<20} {self.coefficients[i]:>12.4f} {self.std_errors[i]:>12.4f} "
                  f"{self.t_values[i]:>10.3f} {p_str:>12}{sig}")

        print("-"*80)
        print("Signif. codes:  0 '***' 0.001 '**' 0.01 '*' 0.05 '.' 0.1 ' ' 1")
        print()

        print(f"Residual standard error: {self.sigma:.4f} on {self.df_residual} degrees of freedom")
        print(f"Multiple R-squared:      {self.r_squared:.4f}")
        print(f"Adjusted R-squared:      {self.adj_r_squared:.4f}")

        if not np.isnan(self.f_statistic):
            f_pval_str = f"{self.f_pvalue:.4e}" if self.f_pvalue >= 2.2e-16 else "< 2.2e-16"
            print(f"F-statistic:             {self.f_statistic:.2f} on {self.rank-1} and {self.df_residual} DF, p-value: {f_pval_str}")

        print()
        print(f"Backend: {self.backend.name}")
        print("="*80)
        print()

    def predict(self, newdata: Union[pd.DataFrame, np.ndarray]) -> np.ndarray:
        """
        Predict response for new data.

        Parameters
        ----------
        newdata : DataFrame or array
            New predictor values
            - If DataFrame: must have columns matching self.X_names
            - If array: must have same number of columns as X

        Returns
        -------
        array
            Predicted values
        """
        if isinstance(newdata, pd.DataFrame):
            X_new = check_array(newdata[self.X_names].values, name='newdata')
        else:
            X_new = check_array(newdata, name='newdata')

        if X_new.shape[1] != len(self.X_names):
            raise ValueError(
                f"newdata has {X_new.shape[1]} columns, model has {len(self.X_names)}"
            )

        X_new_full = np.column_stack([np.ones(len(X_new)), X_new])

        # Aliased (NaN) coefficients contribute nothing
        valid = ~np.isnan(self.coefficients)
        return X_new_full[:, valid] @ self.coefficients[valid]

    def __repr__(self):
        return f"LinearModel(n={self.n_obs}, p={self.rank-1}, R²={self.r_squared:.3f})"


def lm(y, X, data=None, **kwargs):
    """
    Fit linear regression model (convenience function).

    Parameters
    ----------
    y : str or array
        Response variable
    X : list of str or array
        Predictor variables
    data : DataFrame, optional
        Dataset
    **kwargs
        Additional arguments passed to LinearModel

    Returns
    -------
    LinearModel
        Fitted model object
    """
    return LinearModel(y=y, X=X, data=data, **kwargs)


def fit_multiple(records, backend: str = 'auto') -> LinearModel:
    """
    Regress price on size, bedrooms, age and location.

    Parameters
    ----------
    records : sequence of HouseRecord
        Typically ``generate_multiple(...)``

    Returns
    -------
    LinearModel
    """
    data = to_frame(records, default=HouseRecord)
    return LinearModel(y='price', X=list(MULTIPLE_FEATURES), data=data, backend=backend)


def polynomial_features(x, degree: int) -> np.ndarray:
    """Columns x, x², ..., x^degree (no constant column)."""
    if isinstance(degree, bool) or not isinstance(degree, (int, np.integer)) or degree < 1:
        raise ValueError(f"degree must be a positive integer, got {degree!r}")
    x = np.asarray(x, dtype=np.float64)
    return np.column_stack([x ** k for k in range(1, degree + 1)])


def fit_polynomial(samples, degree: int = 3, backend: str = 'auto') -> LinearModel:
    """
    Regress y on powers of x up to ``degree``.

    Coefficients are named ``x``, ``x^2``, ... after the intercept.
    """
    x, y = as_xy(samples)
    X = polynomial_features(x, degree)
    names = ['x'] + [f'x^{k}' for k in range(2, degree + 1)]
    return LinearModel(y=y, X=X, X_names=names, backend=backend)
