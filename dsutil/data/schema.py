from dataclasses import dataclass
from typing import Dict, List, Sequence, Tuple


@dataclass(frozen=True)
class Field:
    name: str
    dtype: str


@dataclass(frozen=True)
class Schema:
    """Ordered (name, type descriptor) pairs of one source."""

    fields: Tuple[Field, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "fields", tuple(self.fields))
        names = [f.name for f in self.fields]
        if len(set(names)) != len(names):
            dupes = sorted({n for n in names if names.count(n) > 1})
            raise ValueError(f"Duplicate column names in schema: {dupes}")

    @classmethod
    def from_pairs(cls, pairs: Sequence[Tuple[str, str]]) -> "Schema":
        return cls(tuple(Field(name, dtype) for name, dtype in pairs))

    @property
    def names(self) -> List[str]:
        return [f.name for f in self.fields]

    def types(self) -> Dict[str, str]:
        return {f.name: f.dtype for f in self.fields}
