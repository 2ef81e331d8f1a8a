"""
regressionlab: simple, multiple and polynomial regression on synthetic data.

Copyright (C) 2024 SGCX
Licensed under GPL-3.0
"""

__version__ = "1.0.0"

# Datasets
from .datasets import (
    DatasetKind,
    Sample,
    HouseRecord,
    generate,
    generate_simple,
    generate_multiple,
    generate_polynomial,
    to_frame,
)

# Closed-form simple regression
from .ols import fit_simple, predict, regression_line, RegressionResult, DegenerateInputError

# QR-based models
from .lm import lm, LinearModel, fit_multiple, fit_polynomial

# Report pieces
from .examples import build_example, Example
from .export import to_csv, write_csv, preview

# Backend utilities (for advanced users)
from ._backends import get_backend, list_available_backends

__all__ = [
    'DatasetKind',
    'Sample',
    'HouseRecord',
    'generate',
    'generate_simple',
    'generate_multiple',
    'generate_polynomial',
    'to_frame',
    'fit_simple',
    'predict',
    'regression_line',
    'RegressionResult',
    'DegenerateInputError',
    'lm',
    'LinearModel',
    'fit_multiple',
    'fit_polynomial',
    'build_example',
    'Example',
    'to_csv',
    'write_csv',
    'preview',
    'get_backend',
    'list_available_backends',
]
