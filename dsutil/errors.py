"""Exception hierarchy for tabular sources and statistics."""


class TabularError(Exception):
    """Base class for every error raised by dsutil."""


class SourceLoadError(TabularError):
    """A source could not be constructed from its file."""


class EmptySourceError(SourceLoadError, ValueError):
    """Delimited file has no header to infer and none was supplied."""


class CorruptSourceError(SourceLoadError):
    """File metadata or data pages are inconsistent or undecodable."""


class ColumnNotFoundError(TabularError, KeyError):
    def __init__(self, column: str, source: str = ""):
        self.column = column
        self.source = source
        where = f" in {source}" if source else ""
        super().__init__(f"column '{column}' not found{where}")

    def __str__(self) -> str:
        # KeyError quotes its argument; keep the plain message
        return self.args[0]


class TypeMismatchError(TabularError, TypeError):
    """Column physical type differs from the type the reader expects."""


class IndexTypeMismatchError(TypeMismatchError):
    """Index column is not a microsecond UTC timestamp."""


class IndexNullError(TabularError, ValueError):
    def __init__(self, column: str, row: int):
        self.column = column
        self.row = row
        super().__init__(f"index column '{column}' contains a NULL at row {row}")


class InvalidPercentileError(TabularError, ValueError):
    """Requested percentile lies outside [0, 100]."""


class UnsupportedOperationError(TabularError, NotImplementedError):
    """Reader is not available for this source type."""
