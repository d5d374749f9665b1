from .frame import to_dataframe
from .schema import Field, Schema
from .source import TabularSource

__all__ = ["Field", "Schema", "TabularSource", "to_dataframe"]
