from __future__ import annotations

import logging
import os
from typing import Mapping, Optional, Sequence, Union

import numpy as np
import pandas as pd
import pyarrow as pa
import pyarrow.parquet as pq

from ..config import INDEX_NAME
from .parquet_source import INDEX_TYPE

logger = logging.getLogger(__name__)


def _index_array(index) -> pa.Array:
    """Coerce int64 microseconds, datetime64 values or a DatetimeIndex to timestamp[us, UTC]."""
    if isinstance(index, pd.DatetimeIndex) or (
        isinstance(index, np.ndarray) and np.issubdtype(index.dtype, np.datetime64)
    ):
        ts = pd.DatetimeIndex(index)
        ts = ts.tz_localize("UTC") if ts.tz is None else ts.tz_convert("UTC")
        micros = ts.as_unit("us").asi8
    else:
        micros = np.asarray(index, dtype=np.int64)
    return pa.array(micros, type=pa.int64()).cast(INDEX_TYPE)


def write_parquet(
    path: Union[str, os.PathLike],
    columns: Mapping[str, Sequence[float]],
    index: Optional[Sequence] = None,
    *,
    row_group_size: Optional[int] = None,
) -> None:
    """Write float columns (and an optional UTC microsecond index) to parquet.

    NaN values are stored as nulls. The index, when given, is written under
    the reserved ``__index_level_0__`` name after the data columns, the
    same place pandas puts it.
    """
    if INDEX_NAME in columns:
        raise ValueError(f"'{INDEX_NAME}' is reserved for the index column")

    arrays = []
    names = []
    lengths = set()
    for name, values in columns.items():
        data = np.asarray(values, dtype=np.float64)
        arrays.append(pa.array(data, type=pa.float64(), from_pandas=True))
        names.append(str(name))
        lengths.add(len(data))

    if index is not None:
        idx = _index_array(index)
        arrays.append(idx)
        names.append(INDEX_NAME)
        lengths.add(len(idx))

    if len(lengths) > 1:
        raise ValueError(f"All columns must have the same length, got {sorted(lengths)}")

    table = pa.Table.from_arrays(arrays, names=names)
    pq.write_table(table, os.fspath(path), row_group_size=row_group_size)
    logger.debug(
        f"write_parquet: {os.fspath(path)} rows={table.num_rows} cols={len(names)}"
    )
