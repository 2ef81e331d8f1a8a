"""
Test CSV export and the sample-table preview.
"""

import pytest
import numpy as np

from regressionlab import DatasetKind, HouseRecord, Sample, generate, to_csv, write_csv, preview
from regressionlab.export import default_filename, format_number, preview_caption


class TestCSV:
    """Header row, one line per record, no quoting."""

    def test_simple_rows(self):
        """x,y header and values as written."""
        csv = to_csv([Sample(0.0, 10.0), Sample(1.25, 12.5)])
        assert csv == "x,y\n0,10\n1.25,12.5"

    def test_house_rows(self):
        """Five-column header; integers print without decimals."""
        csv = to_csv([HouseRecord(1500.0, 3, 12.5, 1, 98000.0)])
        assert csv.split("\n") == [
            "size,bedrooms,age,location,price",
            "1500,3,12.5,1,98000",
        ]

    @pytest.mark.parametrize("kind", list(DatasetKind))
    def test_row_count(self, kind):
        """Header plus one line per record, no trailing newline."""
        data = generate(kind, rng=np.random.default_rng(0))
        csv = to_csv(data, kind=kind)
        lines = csv.split("\n")
        assert len(lines) == len(data) + 1
        assert not csv.endswith("\n")
        assert '"' not in csv
        expected = 5 if kind is DatasetKind.MULTIPLE else 2
        assert all(len(line.split(",")) == expected for line in lines)

    def test_empty_dataset(self):
        """Only the header for an empty dataset."""
        assert to_csv((), kind=DatasetKind.MULTIPLE) == "size,bedrooms,age,location,price"
        assert to_csv(()) == "x,y"

    def test_write_csv(self, tmp_path):
        """File contents equal to_csv()."""
        data = generate(DatasetKind.SIMPLE, count=5, rng=np.random.default_rng(0))
        path = write_csv(data, tmp_path / default_filename(DatasetKind.SIMPLE))
        assert path.name == "simple_regression_data.csv"
        assert path.read_text(encoding='utf-8') == to_csv(data)

    @pytest.mark.parametrize("value, text", [
        (3, "3"),
        (3.0, "3"),
        (-2.5, "-2.5"),
        (np.int64(4), "4"),
        (np.float64(0.1), "0.1"),
    ])
    def test_format_number(self, value, text):
        """Whole floats drop the '.0'."""
        assert format_number(value) == text


class TestPreview:
    """First-rows table and caption."""

    def test_sample_preview(self):
        """X/Y columns, at most `rows` rows."""
        data = generate(DatasetKind.SIMPLE, rng=np.random.default_rng(0))
        table = preview(data)
        assert list(table.columns) == ['X', 'Y']
        assert len(table) == 10

    def test_house_preview(self):
        """Location shown as Good/Average and price in dollars."""
        houses = [
            HouseRecord(1500.0, 3, 12.5, 1, 98000.0),
            HouseRecord(800.0, 1, 40.0, 0, 35000.0),
        ]
        table = preview(houses)
        assert list(table.columns) == ['Size (sq ft)', 'Bedrooms', 'Age', 'Location', 'Price ($)']
        assert list(table['Location']) == ['Good', 'Average']
        assert table['Price ($)'].iloc[0] == '$98,000'

    def test_caption(self):
        """Caption names shown and total counts."""
        data = generate(DatasetKind.MULTIPLE, rng=np.random.default_rng(0))
        assert preview_caption(data) == "Showing first 10 rows of 100 total records"
        assert preview_caption(data[:3]) == "Showing first 3 rows of 3 total records"

    def test_negative_rows(self):
        """rows must be non-negative."""
        with pytest.raises(ValueError):
            preview((), rows=-1)
