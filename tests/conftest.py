import numpy as np
import pandas as pd
import pytest

from dsutil.io.parquet_writer import write_parquet


@pytest.fixture
def index_us():
    ts = pd.date_range("2020-01-01", periods=10, freq="D", tz="UTC")
    return ts.as_unit("us").asi8


@pytest.fixture
def prices_parquet(tmp_path, index_us):
    """10 rows in row groups of 4, one explicit null in 'close'."""
    close = 100.0 + np.arange(10, dtype=float)
    close[3] = np.nan
    volume = np.arange(10, dtype=float) * 10.0
    path = tmp_path / "prices.parquet"
    write_parquet(
        path,
        {"close": close, "volume": volume},
        index=index_us,
        row_group_size=4,
    )
    return path


@pytest.fixture
def write_text(tmp_path):
    def _write(name: str, text: str):
        path = tmp_path / name
        path.write_text(text, encoding="utf-8")
        return path

    return _write
