"""
The three worked examples: what each one shows and how its fit reads.
"""

from dataclasses import dataclass, field
from typing import Optional, Tuple, Union

import numpy as np
import pandas as pd

from .datasets import DatasetKind, Sample
from .export import PREVIEW_ROWS, preview, preview_caption
from .lm import LinearModel, fit_multiple, fit_polynomial
from .ols import DegenerateInputError, RegressionResult, fit_simple, regression_line


@dataclass
class Example:
    """Everything the report shows for one example."""
    kind: DatasetKind
    title: str
    description: str
    equation: str
    insights: Tuple[str, ...]
    table: pd.DataFrame
    caption: str
    r_squared_text: Optional[str] = None
    simple_fit: Optional[RegressionResult] = None
    line: Optional[Tuple[Sample, Sample]] = None
    model: Optional[LinearModel] = field(default=None, repr=False)
    fit_error: Optional[str] = None     # why no fit is available


def format_equation(result: RegressionResult) -> str:
    """``y = 2.50x + 10.00`` style equation for a simple fit."""
    return f"y = {result.slope:.2f}x + {result.intercept:.2f}"


def format_r_squared(r_squared: float) -> str:
    """R² to three decimals plus the share of variance explained."""
    if np.isnan(r_squared):
        return "undefined (no variance in y)"
    return f"{r_squared:.3f} (explains {100 * round(r_squared, 3):.1f}% of variance)"


def _fitted_terms(model: LinearModel) -> str:
    parts = []
    for name, value in model.coef.items():
        parts.append(f"{name}={value:,.2f}" if not np.isnan(value) else f"{name}=NA")
    return ", ".join(parts)


def build_example(kind: Union[DatasetKind, str], dataset, backend: str = 'auto',
                  rows: int = PREVIEW_ROWS) -> Example:
    """
    Fit ``dataset`` as the ``kind`` example and assemble its report.

    Degenerate simple datasets do not raise: the equation reads
    "insufficient variance" (or keeps the line when only y is constant).
    """
    kind = DatasetKind(kind)
    table = preview(dataset, rows=rows, kind=kind)
    caption = preview_caption(dataset, rows=rows)

    if kind is DatasetKind.SIMPLE:
        fit_error = None
        try:
            result = fit_simple(dataset)
        except DegenerateInputError as exc:
            result = exc.result
            fit_error = str(exc)
        insights = ["Simple linear regression finds the best straight line through data points"]
        if result is None:
            equation = "insufficient variance"
            r_text = None
            line = None
        else:
            equation = format_equation(result)
            r_text = format_r_squared(result.r_squared)
            line = regression_line(dataset, result)
            if not np.isnan(result.r_squared):
                r3 = round(result.r_squared, 3)
                insights.append(
                    f"R-squared of {r3:.3f} means the model explains "
                    f"{100 * r3:.1f}% of the variance"
                )
            insights.append(
                f"Each unit increase in X is associated with a "
                f"{result.slope:.2f} unit change in Y"
            )
        insights = tuple(insights)
        return Example(
            kind=kind,
            title="Simple Linear Regression",
            description="Single predictor variable (x) predicting outcome (y)",
            equation=equation,
            insights=insights,
            table=table,
            caption=caption,
            r_squared_text=r_text,
            simple_fit=result,
            line=line,
            fit_error=fit_error,
        )

    elif kind is DatasetKind.MULTIPLE:
        model, fit_error = _try_fit(fit_multiple, dataset, backend=backend)
        equation = "Price = β₀ + β₁(Size) + β₂(Bedrooms) + β₃(Age) + β₄(Location)"
        if model is not None:
            equation += f"\n  fitted: {_fitted_terms(model)}"
        return Example(
            kind=kind,
            title="Multiple Linear Regression",
            description="Multiple predictors: House Size, Bedrooms, Age, Location → Price",
            equation=equation,
            insights=(
                "Multiple regression considers several factors simultaneously",
                "Each coefficient shows the effect of that variable while holding others constant",
                "More complex but can capture real-world relationships better",
            ),
            table=table,
            caption=caption,
            r_squared_text=format_r_squared(model.r_squared) if model is not None else None,
            model=model,
            fit_error=fit_error,
        )

    elif kind is DatasetKind.POLYNOMIAL:
        model, fit_error = _try_fit(fit_polynomial, dataset, backend=backend)
        equation = "y = β₀ + β₁x + β₂x² + β₃x³"
        if model is not None:
            equation += f"\n  fitted: {_fitted_terms(model)}"
        return Example(
            kind=kind,
            title="Polynomial Regression",
            description="Non-linear relationship using polynomial features",
            equation=equation,
            insights=(
                "Polynomial regression can capture non-linear relationships",
                "Uses powers of X (x², x³) as additional features",
                "Be careful of overfitting with high degree polynomials",
            ),
            table=table,
            caption=caption,
            r_squared_text=format_r_squared(model.r_squared) if model is not None else None,
            model=model,
            fit_error=fit_error,
        )

    raise ValueError(f"Unknown example kind: {kind!r}")


def _try_fit(fit, dataset, **kwargs) -> Tuple[Optional[LinearModel], Optional[str]]:
    try:
        return fit(dataset, **kwargs), None
    except DegenerateInputError as exc:
        return None, str(exc)
