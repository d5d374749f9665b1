import os
from dataclasses import replace
from typing import Optional, Sequence, Union

from ..config import DEFAULT_OPTIONS, ReaderOptions
from ..data.source import TabularSource
from .csv_source import CsvSource, read_csv
from .parquet_source import ParquetSource, read_parquet
from .parquet_writer import write_parquet

PARQUET_SUFFIXES = (".parquet", ".pq")
TAB_SUFFIXES = (".tsv", ".tab")


def open_source(
    path: Union[str, os.PathLike],
    *,
    column_names: Optional[Sequence[str]] = None,
    options: Optional[ReaderOptions] = None,
) -> TabularSource:
    """Pick a loader from the file suffix (parquet, tab-separated, else CSV)."""
    suffix = os.path.splitext(os.fspath(path))[1].lower()
    if suffix in PARQUET_SUFFIXES:
        return read_parquet(path, options)
    opts = options
    if suffix in TAB_SUFFIXES and opts is None:
        opts = replace(DEFAULT_OPTIONS, delimiter="\t")
    return read_csv(path, column_names, opts)


__all__ = [
    "CsvSource",
    "ParquetSource",
    "open_source",
    "read_csv",
    "read_parquet",
    "write_parquet",
]
