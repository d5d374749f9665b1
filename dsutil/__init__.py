"""ds-util: column-oriented access to parquet and delimited files, plus descriptive stats."""

from .config import DEFAULT_OPTIONS, INDEX_NAME, ReaderOptions
from .data.schema import Field, Schema
from .data.source import TabularSource
from .data.frame import to_dataframe
from .errors import (
    TabularError,
    SourceLoadError,
    EmptySourceError,
    CorruptSourceError,
    ColumnNotFoundError,
    TypeMismatchError,
    IndexTypeMismatchError,
    IndexNullError,
    InvalidPercentileError,
    UnsupportedOperationError,
)
from .io import CsvSource, ParquetSource, open_source, read_csv, read_parquet, write_parquet
from .stats import get_corr, get_mean, get_percentile, get_percentiles

__all__ = [
    "DEFAULT_OPTIONS",
    "INDEX_NAME",
    "ReaderOptions",
    "Field",
    "Schema",
    "TabularSource",
    "to_dataframe",
    "TabularError",
    "SourceLoadError",
    "EmptySourceError",
    "CorruptSourceError",
    "ColumnNotFoundError",
    "TypeMismatchError",
    "IndexTypeMismatchError",
    "IndexNullError",
    "InvalidPercentileError",
    "UnsupportedOperationError",
    "CsvSource",
    "ParquetSource",
    "open_source",
    "read_csv",
    "read_parquet",
    "write_parquet",
    "get_corr",
    "get_mean",
    "get_percentile",
    "get_percentiles",
]
