"""
Copy-on-write mapping from sample id to that sample's annotations.
"""

from types import MappingProxyType
from typing import Any, Dict, Iterator, Mapping, Optional

from .annotation import Annotations


class AnnotationsMap:
    """
    Immutable mapping of sample id -> Annotations.

    `set` returns a new map; entries for other samples are shared with the
    previous version, so unchanged entries keep their identity.
    """

    __slots__ = ("_entries",)

    def __init__(self, entries: Optional[Mapping[str, Annotations]] = None):
        self._entries = MappingProxyType(dict(entries or {}))

    def get(self, sample_id: str) -> Optional[Annotations]:
        return self._entries.get(sample_id)

    def set(self, sample_id: str, annotations: Annotations) -> "AnnotationsMap":
        entries = dict(self._entries)
        entries[sample_id] = annotations
        return AnnotationsMap(entries)

    def is_empty(self) -> bool:
        return not self._entries

    def items(self):
        return self._entries.items()

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, sample_id: object) -> bool:
        return sample_id in self._entries

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, AnnotationsMap):
            return NotImplemented
        return dict(self._entries) == dict(other._entries)

    def __repr__(self) -> str:
        return f"AnnotationsMap({len(self)} entries)"

    def to_dict(self) -> Dict[str, Any]:
        return {sample_id: entry.to_dict() for sample_id, entry in self._entries.items()}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "AnnotationsMap":
        """
        Parse a stored id -> annotations object.

        Raises:
            ValueError: If data is not a mapping or an entry is malformed
        """
        if not isinstance(data, Mapping):
            raise ValueError(f"Annotations must be a JSON object, got {type(data).__name__}")
        try:
            return cls({str(k): Annotations.from_dict(v) for k, v in data.items()})
        except (TypeError, AttributeError) as e:
            raise ValueError(f"Malformed annotations entry: {e}") from e
