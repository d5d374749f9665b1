from typing import Optional, Sequence

import pandas as pd

from .source import TabularSource


def to_dataframe(
    source: TabularSource,
    columns: Optional[Sequence[str]] = None,
    *,
    with_index: bool = True,
) -> pd.DataFrame:
    """
    Materialize float columns of ``source`` into a DataFrame.

    - columns default to every name in ``source.column_names()``
    - with_index=True uses ``read_index_microsecond()`` as a UTC DatetimeIndex
      named ``ts_utc``; the index column is left out of the default columns
    """
    names = list(source.column_names() if columns is None else columns)

    index = None
    if with_index:
        micros = source.read_index_microsecond()
        index = pd.DatetimeIndex(
            pd.to_datetime(micros, unit="us", utc=True), name="ts_utc"
        )
        if columns is None:
            index_name = source.index_column()
            names = [n for n in names if n != index_name]

    data = source.read_columns_f64(names)
    # pandas raises ValueError when a column length differs from the index
    return pd.DataFrame({n: data[n] for n in names}, index=index)
