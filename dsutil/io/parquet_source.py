from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Dict, Iterator, List, Optional, Sequence, Tuple, Union

import numpy as np
import pyarrow as pa
import pyarrow.parquet as pq

from ..config import DEFAULT_OPTIONS, ReaderOptions
from ..data.schema import Schema
from ..errors import (
    ColumnNotFoundError,
    CorruptSourceError,
    IndexNullError,
    IndexTypeMismatchError,
    SourceLoadError,
    TypeMismatchError,
    UnsupportedOperationError,
)

logger = logging.getLogger(__name__)

INDEX_TYPE = pa.timestamp("us", tz="UTC")


def _is_index_type(dtype: pa.DataType) -> bool:
    return (
        pa.types.is_timestamp(dtype) and dtype.unit == "us" and dtype.tz == "UTC"
    )


def footer_row_count(meta: pq.FileMetaData) -> int:
    """File-level row count, checked against the sum of row-group counts."""
    file_rows = int(meta.num_rows)
    group_rows = sum(
        int(meta.row_group(i).num_rows) for i in range(meta.num_row_groups)
    )
    if file_rows != group_rows:
        raise CorruptSourceError(
            f"footer row count {file_rows} disagrees with row groups total {group_rows}"
        )
    return file_rows


@dataclass(frozen=True)
class ParquetSource:
    """Parquet file described by its footer; column data is read per call.

    Nothing but the path, schema and row count is held. Every read re-opens
    the file and streams record batches from the start.
    """

    path: str
    arrow_schema: pa.Schema
    row_count: int
    options: ReaderOptions = DEFAULT_OPTIONS

    @property
    def index_name(self) -> str:
        return self.options.index_name

    def index_column(self) -> str:
        return self.index_name

    def shape(self) -> Tuple[int, int]:
        return self.row_count, len(self.column_names())

    def column_names(self) -> List[str]:
        return [n for n in self.arrow_schema.names if n != self.index_name]

    def column_types(self) -> Dict[str, str]:
        return {f.name: str(f.type) for f in self.arrow_schema}

    def schema(self) -> Schema:
        return Schema.from_pairs([(f.name, str(f.type)) for f in self.arrow_schema])

    def read_column_string(self, column_name: str) -> List[str]:
        raise UnsupportedOperationError(
            "read_column_string is not supported for parquet sources"
        )

    def read_column_i64(self, column_name: str) -> np.ndarray:
        raise UnsupportedOperationError(
            "read_column_i64 is not supported for parquet sources"
        )

    # ---------------------------
    # Streaming
    # ---------------------------
    def _batches(self, columns: Sequence[str]) -> Iterator[pa.RecordBatch]:
        for name in columns:
            if self.arrow_schema.get_field_index(name) < 0:
                raise ColumnNotFoundError(name, self.path)

        with open(self.path, "rb") as f:
            try:
                pf = pq.ParquetFile(f)
                batches = pf.iter_batches(
                    batch_size=self.options.batch_size, columns=list(columns)
                )
                for batch in batches:
                    yield batch
            except (pa.ArrowException, OSError) as exc:
                raise CorruptSourceError(
                    f"error reading batch from {self.path}: {exc}"
                ) from exc

    def _column(self, batch: pa.RecordBatch, name: str) -> pa.Array:
        idx = batch.schema.get_field_index(name)
        if idx < 0:
            raise ColumnNotFoundError(name, self.path)
        return batch.column(idx)

    def _check_length(self, name: str, n: int) -> None:
        if n != self.row_count:
            raise CorruptSourceError(
                f"column '{name}' in {self.path} has {n} values, footer declares {self.row_count}"
            )

    @staticmethod
    def _to_f64(name: str, col: pa.Array) -> np.ndarray:
        if not pa.types.is_float64(col.type):
            raise TypeMismatchError(f"column '{name}' is {col.type}, expected double")
        if col.null_count:
            col = col.fill_null(np.nan)
        return col.to_numpy(zero_copy_only=False)

    def read_column_f64(self, column_name: str) -> np.ndarray:
        return self.read_columns_f64([column_name])[column_name]

    def read_columns_f64(self, column_names: Sequence[str]) -> Dict[str, np.ndarray]:
        names = list(dict.fromkeys(column_names))
        parts: Dict[str, List[np.ndarray]] = {name: [] for name in names}
        if not names:
            return {}

        for batch in self._batches(names):
            for name in names:
                parts[name].append(self._to_f64(name, self._column(batch, name)))

        out: Dict[str, np.ndarray] = {}
        for name in names:
            values = (
                np.concatenate(parts[name])
                if parts[name]
                else np.empty(0, dtype=np.float64)
            )
            self._check_length(name, len(values))
            out[name] = values
        logger.debug(f"read_columns_f64: {self.path} columns={names} rows={self.row_count}")
        return out

    @staticmethod
    def _check_index_type(name: str, dtype: pa.DataType) -> None:
        if not _is_index_type(dtype):
            raise IndexTypeMismatchError(
                f"index column '{name}' has dtype {dtype}, expected {INDEX_TYPE}"
            )

    def read_index_microsecond(self) -> np.ndarray:
        name = self.index_name
        parts: List[np.ndarray] = []
        global_row = 0

        # declared type first, so files without batches are checked too
        idx = self.arrow_schema.get_field_index(name)
        if idx >= 0:
            self._check_index_type(name, self.arrow_schema.field(idx).type)

        for batch in self._batches([name]):
            col = self._column(batch, name)
            # validate once per batch
            self._check_index_type(name, batch.schema.field(name).type)
            if col.null_count:
                nulls = np.flatnonzero(col.is_null().to_numpy(zero_copy_only=False))
                raise IndexNullError(name, global_row + int(nulls[0]))
            parts.append(col.cast(pa.int64()).to_numpy())
            global_row += len(col)

        values = np.concatenate(parts) if parts else np.empty(0, dtype=np.int64)
        self._check_length(name, len(values))
        logger.debug(f"read_index_microsecond: {self.path} rows={len(values)}")
        return values


def read_parquet(
    path: Union[str, os.PathLike], options: Optional[ReaderOptions] = None
) -> ParquetSource:
    """Open a parquet file reading only its footer (schema and row counts)."""
    opts = options or DEFAULT_OPTIONS
    path = os.fspath(path)

    with open(path, "rb") as f:
        try:
            pf = pq.ParquetFile(f)
            meta = pf.metadata
            row_count = footer_row_count(meta)
            arrow_schema = pf.schema_arrow
        except (pa.ArrowException, OSError) as exc:
            raise SourceLoadError(f"cannot read parquet footer of {path}: {exc}") from exc

    logger.debug(
        f"read_parquet: {path} rows={row_count} row_groups={meta.num_row_groups} "
        f"fields={len(arrow_schema)}"
    )
    return ParquetSource(
        path=path, arrow_schema=arrow_schema, row_count=row_count, options=opts
    )
