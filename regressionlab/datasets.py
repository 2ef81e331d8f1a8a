"""
Synthetic datasets for the regression examples.

Three generators, one per example:

- simple:     y = 2.5x + 10 + noise
- multiple:   house price from size, bedrooms, age and location
- polynomial: y = 0.5x³ - 2x² + x + 5 + noise

Every generator takes an optional ``numpy.random.Generator``. Without one
the output differs on every call; pass ``np.random.default_rng(seed)`` for
reproducible values.
"""

import dataclasses
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Sequence, Tuple, Union

import numpy as np
import pandas as pd

from ._utils import check_count


class DatasetKind(Enum):
    """The three regression examples."""
    SIMPLE = "simple"
    MULTIPLE = "multiple"
    POLYNOMIAL = "polynomial"


@dataclass(frozen=True)
class Sample:
    """One (x, y) observation."""
    x: float
    y: float


@dataclass(frozen=True)
class HouseRecord:
    """One house: four features and the price they generate."""
    size: float       # square feet, 500-3000
    bedrooms: int     # 1-5
    age: float        # years, 0-50
    location: int     # 1 = good location, 0 = average
    price: float


Record = Union[Sample, HouseRecord]

DEFAULT_COUNTS = {
    DatasetKind.SIMPLE: 50,
    DatasetKind.MULTIPLE: 100,
    DatasetKind.POLYNOMIAL: 50,
}

# Generating coefficients, intercept first
SIMPLE_TRUE_COEF = (10.0, 2.5)
MULTIPLE_TRUE_COEF = (0.0, 50.0, 5000.0, -200.0, 20000.0)
POLYNOMIAL_TRUE_COEF = (5.0, 1.0, -2.0, 0.5)

MULTIPLE_FEATURES = ['size', 'bedrooms', 'age', 'location']


def _rng(rng: Optional[np.random.Generator]) -> np.random.Generator:
    return np.random.default_rng() if rng is None else rng


def generate_simple(count: int = 50,
                    rng: Optional[np.random.Generator] = None) -> Tuple[Sample, ...]:
    """
    Noisy points around y = 2.5x + 10.

    x_i = 2i + U[0, 10), y_i = 2.5 x_i + 10 + U[-10, 10); both rounded to
    two decimals after y is computed.
    """
    count = check_count(count)
    rng = _rng(rng)

    i = np.arange(count)
    x = 2 * i + rng.uniform(0, 10, count)
    y = 2.5 * x + 10 + rng.uniform(-10, 10, count)

    return tuple(
        Sample(float(xi), float(yi))
        for xi, yi in zip(np.round(x, 2), np.round(y, 2))
    )


def generate_multiple(count: int = 100,
                      rng: Optional[np.random.Generator] = None) -> Tuple[HouseRecord, ...]:
    """
    House records with price = 50 size + 5000 bedrooms - 200 age
    + 20000 location + U[-10000, 10000).

    Price is computed from the unrounded features; size and price are then
    rounded to whole numbers and age to one decimal.
    """
    count = check_count(count)
    rng = _rng(rng)

    size = 500 + rng.uniform(0, 2500, count)
    bedrooms = rng.integers(1, 6, count)
    age = rng.uniform(0, 50, count)
    location = (rng.random(count) > 0.5).astype(np.int64)

    price = (50 * size + 5000 * bedrooms - 200 * age + 20000 * location
             + rng.uniform(-10000, 10000, count))

    return tuple(
        HouseRecord(
            size=float(s),
            bedrooms=int(b),
            age=float(a),
            location=int(loc),
            price=float(p),
        )
        for s, b, a, loc, p in zip(np.round(size), bedrooms, np.round(age, 1),
                                   location, np.round(price))
    )


def generate_polynomial(count: int = 50,
                        rng: Optional[np.random.Generator] = None) -> Tuple[Sample, ...]:
    """
    Noisy points around the cubic y = 0.5x³ - 2x² + x + 5.

    x is evenly spaced over [-5, 5); noise is U[-2, 2).
    """
    count = check_count(count)
    rng = _rng(rng)

    x = -5 + 10 * np.arange(count) / count if count else np.zeros(0)
    y = 0.5 * x ** 3 - 2 * x ** 2 + x + 5 + rng.uniform(-2, 2, count)

    return tuple(
        Sample(float(xi), float(yi))
        for xi, yi in zip(np.round(x, 2), np.round(y, 2))
    )


_GENERATORS = {
    DatasetKind.SIMPLE: generate_simple,
    DatasetKind.MULTIPLE: generate_multiple,
    DatasetKind.POLYNOMIAL: generate_polynomial,
}


def generate(kind: Union[DatasetKind, str], count: Optional[int] = None,
             rng: Optional[np.random.Generator] = None) -> Tuple[Record, ...]:
    """Generate the dataset of ``kind`` (default size from DEFAULT_COUNTS)."""
    kind = DatasetKind(kind)
    if count is None:
        count = DEFAULT_COUNTS[kind]
    return _GENERATORS[kind](count, rng=rng)


def record_type(kind: Union[DatasetKind, str]) -> type:
    """Record class produced for ``kind``."""
    return HouseRecord if DatasetKind(kind) is DatasetKind.MULTIPLE else Sample


def field_names(records: Sequence[Record], default: type = Sample) -> list:
    """Column names of a dataset (``default`` decides for an empty one)."""
    cls = type(records[0]) if len(records) else default
    return [f.name for f in dataclasses.fields(cls)]


def to_frame(records: Sequence[Record], default: type = Sample) -> pd.DataFrame:
    """Dataset as a DataFrame, one column per record field."""
    columns = field_names(records, default)
    return pd.DataFrame(
        [dataclasses.astuple(r) for r in records],
        columns=columns,
    )


def as_xy(samples) -> Tuple[np.ndarray, np.ndarray]:
    """
    Split samples into float64 ``x`` and ``y`` arrays.

    Accepts Sample objects (anything with ``x``/``y`` attributes) or
    ``(x, y)`` pairs.
    """
    xs = []
    ys = []
    for s in samples:
        if hasattr(s, 'x') and hasattr(s, 'y'):
            xs.append(s.x)
            ys.append(s.y)
        else:
            x, y = s
            xs.append(x)
            ys.append(y)
    return np.asarray(xs, dtype=np.float64), np.asarray(ys, dtype=np.float64)
