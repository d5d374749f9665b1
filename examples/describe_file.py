"""Print shape, schema and a preview of a parquet or CSV file.

Usage:
    python -m examples.describe_file path/to/data.parquet
    python -m examples.describe_file path/to/data.csv
"""

import logging
import sys

from dsutil.io import open_source
from dsutil.stats import get_mean, get_percentiles
from dsutil.errors import TabularError


def main(argv=None) -> int:
    args = list(sys.argv[1:] if argv is None else argv)
    if not args:
        print("Usage: describe_file <path_to.parquet|path_to.csv>", file=sys.stderr)
        return 0

    logging.basicConfig(level=logging.INFO)
    path = args[0]
    df = open_source(path)

    print(f"shape   : {df.shape()}")
    print(f"names   : {df.column_names()}")
    print(f"types   : {df.column_types()}")

    names = df.column_names()
    if not names:
        return 0

    values = df.read_column_f64(names[0])
    print(f"{names[0]}[:10] : {values[:10]}")
    print(f"mean    : {get_mean(values)}")
    p5, p50, p95 = get_percentiles(values, [5, 50, 95])
    print(f"p5/p50/p95 : {p5} / {p50} / {p95}")

    try:
        index = df.read_index_microsecond()
    except TabularError as exc:
        print(f"index   : unavailable ({exc})")
    else:
        print(f"index[:10] : {index[:10].astype('datetime64[us]')}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
