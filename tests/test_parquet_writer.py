import numpy as np
import pandas as pd
import pyarrow.parquet as pq
import pytest

from dsutil.config import INDEX_NAME
from dsutil.io import read_parquet, write_parquet


def test_roundtrip_across_row_groups(tmp_path):
    n = 25
    idx = pd.date_range("2021-03-01 09:30", periods=n, freq="min", tz="America/New_York")
    values = np.linspace(-1.0, 1.0, n)
    values[[0, 13]] = np.nan

    path = tmp_path / "out.parquet"
    write_parquet(path, {"signal": values, "count": np.arange(n)}, index=idx, row_group_size=7)

    assert pq.ParquetFile(path).metadata.num_row_groups == 4
    df = read_parquet(path)
    assert df.shape() == (n, 2)
    assert df.column_names() == ["signal", "count"]
    np.testing.assert_array_equal(df.read_column_f64("signal"), values)
    np.testing.assert_array_equal(df.read_column_f64("count"), np.arange(n, dtype=float))
    np.testing.assert_array_equal(
        df.read_index_microsecond(), idx.tz_convert("UTC").as_unit("us").asi8
    )


def test_naive_datetime64_index_is_treated_as_utc(tmp_path):
    stamps = np.array(["2020-01-01T00:00:00", "2020-01-01T00:00:01"], dtype="datetime64[s]")
    path = tmp_path / "naive.parquet"
    write_parquet(path, {"x": [1.0, 2.0]}, index=stamps)

    got = read_parquet(path).read_index_microsecond()
    assert got.tolist() == [1577836800000000, 1577836801000000]


def test_without_index(tmp_path):
    path = tmp_path / "plain.parquet"
    write_parquet(path, {"x": [1.0, 2.0, 3.0]})
    df = read_parquet(path)
    assert INDEX_NAME not in df.column_types()
    assert df.shape() == (3, 1)


def test_length_mismatch_rejected(tmp_path):
    with pytest.raises(ValueError):
        write_parquet(tmp_path / "bad.parquet", {"a": [1.0, 2.0], "b": [1.0]})
    with pytest.raises(ValueError):
        write_parquet(tmp_path / "bad.parquet", {"a": [1.0, 2.0]}, index=[1])


def test_reserved_name_rejected(tmp_path):
    with pytest.raises(ValueError):
        write_parquet(tmp_path / "bad.parquet", {INDEX_NAME: [1.0]})
