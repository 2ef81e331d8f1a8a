"""
Command-line report for one regression example.

    python -m regressionlab simple
    python -m regressionlab multiple --seed 42 --summary
    python -m regressionlab polynomial --csv poly.csv
    python -m regressionlab polynomial --save-csv
"""

import argparse
import sys

import numpy as np

from . import __version__
from ._backends import VALID_BACKENDS
from .datasets import DatasetKind, generate
from .examples import build_example
from .export import PREVIEW_ROWS, default_filename, write_csv
from .lm import fit_polynomial


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='regressionlab',
        description="Linear regression: simple to advanced, on synthetic data.",
    )
    parser.add_argument('example', nargs='?', default=DatasetKind.SIMPLE.value,
                        choices=[k.value for k in DatasetKind],
                        help="which example to run (default: simple)")
    parser.add_argument('--count', type=int, default=None,
                        help="number of records to generate")
    parser.add_argument('--seed', type=int, default=None,
                        help="random seed for reproducible data")
    parser.add_argument('--rows', type=int, default=PREVIEW_ROWS,
                        help="rows shown in the sample table")
    csv_group = parser.add_mutually_exclusive_group()
    csv_group.add_argument('--csv', default=None, metavar='PATH',
                           help="write the full dataset as CSV to PATH")
    csv_group.add_argument('--save-csv', action='store_true',
                           help="write the full dataset as <example>_regression_data.csv")
    parser.add_argument('--backend', default='auto', choices=VALID_BACKENDS,
                        help="least-squares backend for multiple/polynomial fits")
    parser.add_argument('--summary', action='store_true',
                        help="print the full model summary")
    parser.add_argument('--version', action='version', version=f'%(prog)s {__version__}')
    return parser


def print_report(example) -> None:
    print("=" * 80)
    print(example.title.upper())
    print("=" * 80)
    print(example.description)
    print()
    print(f"Equation: {example.equation}")
    if example.r_squared_text is not None:
        print(f"R-squared: {example.r_squared_text}")
    if example.line is not None:
        start, end = example.line
        print(f"Regression line: ({start.x:.2f}, {start.y:.2f}) -> ({end.x:.2f}, {end.y:.2f})")
    print()

    print("Sample Data")
    print("-" * 80)
    print(example.table.to_string(index=False))
    print(example.caption)
    print()

    print("Key Insights")
    print("-" * 80)
    for insight in example.insights:
        print(f"  * {insight}")
    print()


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.count is not None and args.count < 0:
        parser.error("--count must be non-negative")
    if args.rows < 0:
        parser.error("--rows must be non-negative")

    kind = DatasetKind(args.example)
    rng = np.random.default_rng(args.seed)
    dataset = generate(kind, count=args.count, rng=rng)

    example = build_example(kind, dataset, backend=args.backend, rows=args.rows)
    print_report(example)

    if args.summary:
        model = example.model
        if model is None and example.simple_fit is not None:
            model = fit_polynomial(dataset, degree=1, backend=args.backend)
        if model is not None:
            model.summary()
        else:
            print(f"No fit available: {example.fit_error}", file=sys.stderr)

    if args.csv is not None or args.save_csv:
        path = write_csv(dataset, args.csv or default_filename(kind), kind=kind)
        print(f"Wrote {len(dataset)} records to {path}")

    if kind is DatasetKind.SIMPLE and example.simple_fit is None:
        return 1
    if kind is not DatasetKind.SIMPLE and example.model is None:
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
