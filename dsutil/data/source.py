from typing import Dict, List, Protocol, Sequence, Tuple

import numpy as np

from .schema import Schema


class TabularSource(Protocol):
    """Read-only, column-oriented view over one tabular file.

    Implementations are immutable after construction and may be shared
    between threads. Each column read is self-contained.
    """

    path: str

    def shape(self) -> Tuple[int, int]:
        """(row_count, column_count); column_count == len(column_names())."""
        ...

    def column_names(self) -> List[str]: ...

    def column_types(self) -> Dict[str, str]: ...

    def schema(self) -> Schema: ...

    def index_column(self) -> str:
        """Name of the column read by read_index_microsecond()."""
        ...

    def read_column_string(self, column_name: str) -> List[str]: ...

    def read_column_i64(self, column_name: str) -> np.ndarray: ...

    def read_column_f64(self, column_name: str) -> np.ndarray:
        """Float64 values with missing entries as NaN."""
        ...

    def read_columns_f64(self, column_names: Sequence[str]) -> Dict[str, np.ndarray]:
        """Several float columns in one pass; same semantics per column."""
        ...

    def read_index_microsecond(self) -> np.ndarray:
        """Per-row timestamps as int64 microseconds since the UTC epoch."""
        ...
