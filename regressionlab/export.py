"""
CSV export and the first-rows sample table.

CSV layout: a header row (``x,y`` or ``size,bedrooms,age,location,price``)
then one comma-joined row per record, ``\\n`` separated, no quoting and no
trailing newline. All fields are numeric so no escaping is needed.
"""

from pathlib import Path
from typing import Optional, Sequence, Union

import numpy as np
import pandas as pd

from .datasets import DatasetKind, field_names, record_type, to_frame, Sample

PREVIEW_ROWS = 10


def format_number(value) -> str:
    """Integral values without a decimal point, others in shortest form."""
    if isinstance(value, (bool, np.bool_)):
        return str(int(value))
    if isinstance(value, (int, np.integer)):
        return str(int(value))
    value = float(value)
    if value.is_integer():
        return str(int(value))
    return repr(value)


def to_csv(records: Sequence, kind: Optional[Union[DatasetKind, str]] = None) -> str:
    """Dataset as CSV text (``kind`` picks the header for an empty dataset)."""
    default = record_type(kind) if kind is not None else Sample
    columns = field_names(records, default)
    frame = to_frame(records, default=default)
    lines = [",".join(columns)]
    for row in frame.itertuples(index=False):
        lines.append(",".join(format_number(v) for v in row))
    return "\n".join(lines)


def write_csv(records: Sequence, path, kind: Optional[Union[DatasetKind, str]] = None) -> Path:
    """Write ``to_csv(records)`` to ``path`` and return the path."""
    path = Path(path)
    path.write_text(to_csv(records, kind=kind), encoding='utf-8')
    return path


def default_filename(kind: Union[DatasetKind, str]) -> str:
    """Download name used by the demo, e.g. ``simple_regression_data.csv``."""
    return f"{DatasetKind(kind).value}_regression_data.csv"


def preview(records: Sequence, rows: int = PREVIEW_ROWS,
            kind: Optional[Union[DatasetKind, str]] = None) -> pd.DataFrame:
    """
    First ``rows`` records as a display table.

    House records get readable headers, a Good/Average location and a
    dollar-formatted price.
    """
    if rows < 0:
        raise ValueError(f"rows must be non-negative, got {rows}")
    default = record_type(kind) if kind is not None else Sample
    frame = to_frame(records[:rows], default=default)

    if 'price' in frame.columns:
        frame = pd.DataFrame({
            'Size (sq ft)': frame['size'].map(format_number),
            'Bedrooms': frame['bedrooms'].map(format_number),
            'Age': frame['age'].map(format_number),
            'Location': frame['location'].map(lambda v: 'Good' if v else 'Average'),
            'Price ($)': frame['price'].map(lambda v: f"${v:,.0f}"),
        })
    else:
        frame = pd.DataFrame({
            'X': frame['x'].map(format_number),
            'Y': frame['y'].map(format_number),
        })
    return frame


def preview_caption(records: Sequence, rows: int = PREVIEW_ROWS) -> str:
    """Caption under the sample table."""
    return f"Showing first {min(rows, len(records))} rows of {len(records)} total records"
