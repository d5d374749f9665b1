from dataclasses import dataclass
from typing import Sequence


INDEX_NAME = "__index_level_0__"


@dataclass(frozen=True)
class ReaderOptions:
    delimiter: str = ","
    encoding: str = "utf-8"

    # parquet: reserved index field (pandas' name for an unnamed index)
    index_name: str = INDEX_NAME
    # csv: first match wins, otherwise the first column is the index
    index_candidates: Sequence[str] = (
        INDEX_NAME,
        "timestamp",
        "ts_utc",
        "ts",
        "datetime",
        "time",
        "date",
    )

    # rows per record batch when streaming parquet columns
    batch_size: int = 65536

    def __post_init__(self) -> None:
        if len(self.delimiter) != 1:
            raise ValueError(
                f"delimiter must be a single character, got {self.delimiter!r}"
            )
        if self.batch_size <= 0:
            raise ValueError(f"batch_size must be positive, got {self.batch_size}")
        object.__setattr__(self, "index_candidates", tuple(self.index_candidates))


DEFAULT_OPTIONS = ReaderOptions()
