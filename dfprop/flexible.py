"""Case-insensitive, insertion-ordered mapping for table and column names."""

from collections.abc import Mapping
from typing import Any, Dict, Iterable, Iterator, Optional, Tuple


class FlexibleMap(Mapping):
    """Read-only mapping whose string keys match regardless of case.

    The first spelling of a key is kept for iteration; a later entry whose key
    differs only by case replaces the value in place.

    Usage:
        columns = FlexibleMap({"MEMBER_ID": "INTEGER"})
        columns["member_id"]  # 'INTEGER'
    """

    def __init__(self, data: Optional[Any] = None):
        self._store: Dict[str, Tuple[str, Any]] = {}
        if data is None:
            return
        pairs: Iterable = data.items() if hasattr(data, "items") else data
        for key, value in pairs:
            self._put(key, value)

    @staticmethod
    def normalize(key: str) -> str:
        return key.lower()

    def _put(self, key: str, value: Any) -> None:
        normalized = self.normalize(key)
        if normalized in self._store:
            spelling, _ = self._store[normalized]
            self._store[normalized] = (spelling, value)
        else:
            self._store[normalized] = (key, value)

    def __getitem__(self, key: str) -> Any:
        if not isinstance(key, str):
            raise KeyError(key)
        try:
            return self._store[self.normalize(key)][1]
        except KeyError:
            raise KeyError(key) from None

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and self.normalize(key) in self._store

    def __iter__(self) -> Iterator[str]:
        return (spelling for spelling, _ in self._store.values())

    def __len__(self) -> int:
        return len(self._store)

    def __repr__(self) -> str:
        return f"FlexibleMap({dict(self.items())!r})"
