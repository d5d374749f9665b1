from __future__ import annotations

import logging
import math
import os
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Tuple, Union

import numpy as np

from ..config import DEFAULT_OPTIONS, ReaderOptions
from ..data.schema import Schema
from ..errors import ColumnNotFoundError, EmptySourceError

logger = logging.getLogger(__name__)

_I64_MIN = -(2**63)
_I64_MAX = 2**63 - 1

STRING_DTYPE = "string"


def normalize_header(names: Sequence[str], width: Optional[int] = None) -> List[str]:
    """Fill blanks with ``col<position>`` and suffix duplicates with ``_2``, ``_3``...

    When ``width`` exceeds ``len(names)`` the header is extended with
    generated names before normalization.
    """
    raw = [str(n).strip() for n in names]
    if width is not None and width > len(raw):
        raw.extend([""] * (width - len(raw)))

    filled = [n if n else f"col{i + 1}" for i, n in enumerate(raw)]

    out: List[str] = []
    seen = set()
    for name in filled:
        candidate = name
        k = 2
        while candidate in seen:
            candidate = f"{name}_{k}"
            k += 1
        seen.add(candidate)
        out.append(candidate)
    return out


def _strip_quotes(text: str) -> str:
    return text.strip().strip('"').strip()


def parse_i64(text: str) -> int:
    """Lossy integer parse: blanks and garbage become 0."""
    s = _strip_quotes(text).replace("_", "").strip()
    if not s or not s.isascii():
        return 0
    try:
        value = int(s)
    except ValueError:
        return 0
    if value < _I64_MIN or value > _I64_MAX:
        return 0
    return value


def parse_f64(text: str) -> float:
    """Lossy float parse: blanks and garbage become NaN, ``1,5`` reads as 1.5."""
    s = _strip_quotes(text)
    if not s or "_" in s or not s.isascii():
        return math.nan
    try:
        return float(s)
    except ValueError:
        pass
    try:
        return float(s.replace(",", "."))
    except ValueError:
        return math.nan


def _split(line: str, delimiter: str) -> List[str]:
    return [field.strip() for field in line.split(delimiter)]


@dataclass(frozen=True)
class CsvSource:
    """Delimited text file held in memory as raw string columns."""

    path: str
    columns: Dict[str, List[str]]
    names: Tuple[str, ...]
    options: ReaderOptions = DEFAULT_OPTIONS

    def shape(self) -> Tuple[int, int]:
        n_rows = max((len(v) for v in self.columns.values()), default=0)
        return n_rows, len(self.names)

    def column_names(self) -> List[str]:
        return list(self.names)

    def column_types(self) -> Dict[str, str]:
        return {name: STRING_DTYPE for name in self.names}

    def schema(self) -> Schema:
        return Schema.from_pairs([(name, STRING_DTYPE) for name in self.names])

    def _raw(self, column_name: str) -> List[str]:
        try:
            return self.columns[column_name]
        except KeyError:
            raise ColumnNotFoundError(column_name, self.path) from None

    def read_column_string(self, column_name: str) -> List[str]:
        return list(self._raw(column_name))

    def read_column_i64(self, column_name: str) -> np.ndarray:
        raw = self._raw(column_name)
        return np.fromiter((parse_i64(v) for v in raw), dtype=np.int64, count=len(raw))

    def read_column_f64(self, column_name: str) -> np.ndarray:
        raw = self._raw(column_name)
        return np.fromiter(
            (parse_f64(v) for v in raw), dtype=np.float64, count=len(raw)
        )

    def read_columns_f64(self, column_names: Sequence[str]) -> Dict[str, np.ndarray]:
        return {name: self.read_column_f64(name) for name in column_names}

    def index_column(self) -> str:
        for candidate in self.options.index_candidates:
            if candidate in self.columns:
                return candidate
        if not self.names:
            raise ColumnNotFoundError("<index>", self.path)
        return self.names[0]

    def read_index_microsecond(self) -> np.ndarray:
        # no type check: the index column is parsed lossily as integers
        return self.read_column_i64(self.index_column())


def read_csv(
    path: Union[str, os.PathLike],
    column_names: Optional[Sequence[str]] = None,
    options: Optional[ReaderOptions] = None,
) -> CsvSource:
    """Load a delimited text file.

    The header comes from ``column_names`` when given (every line is then
    data), otherwise from the first non-blank line. Rows wider than the
    header extend it with generated names; shorter rows are padded with "".
    Whitespace-only lines are skipped.
    """
    opts = options or DEFAULT_OPTIONS
    path = os.fspath(path)

    header: Optional[List[str]] = (
        None if column_names is None else [str(c) for c in column_names]
    )
    rows: List[List[str]] = []
    with open(path, "r", encoding=opts.encoding, newline="") as f:
        for line in f:
            line = line.rstrip("\r\n")
            if not line.strip():
                continue
            fields = _split(line, opts.delimiter)
            if header is None:
                header = fields
            else:
                rows.append(fields)

    if header is None:
        raise EmptySourceError(f"{path}: empty file and no header supplied")

    width = max([len(header)] + [len(r) for r in rows])
    names = normalize_header(header, width)
    if names[: len(header)] != [h.strip() for h in header] or width > len(header):
        logger.warning(f"read_csv: normalized header of {path} to {names}")

    columns: Dict[str, List[str]] = {name: [] for name in names}
    for fields in rows:
        padded = fields + [""] * (width - len(fields))
        for name, value in zip(names, padded):
            columns[name].append(value)

    logger.debug(f"read_csv: {path} rows={len(rows)} cols={len(names)}")
    return CsvSource(path=path, columns=columns, names=tuple(names), options=opts)
