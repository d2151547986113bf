from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Generic, Iterable, Iterator, Optional, TypeVar

K = TypeVar("K")
V = TypeVar("V")


@dataclass
class Registry(Generic[K, V]):
    """Minimal registry mapping keys to values.

    Typical usage:
        REG = Registry[str, MeasureSpec](_name="measures")
        REG.add("tpr", spec)
        spec = REG.try_get("tpr")

    Keys are registered once; re-registering a key is a programming error.
    """

    _items: Dict[K, V] = field(default_factory=dict)
    _name: str = "registry"

    def add(self, key: K, value: V) -> V:
        if key in self._items:
            raise KeyError(f"{self._name}: key {key!r} is already registered")
        self._items[key] = value
        return value

    def try_get(self, key: K, default: Optional[V] = None) -> Optional[V]:
        return self._items.get(key, default)

    def keys(self) -> Iterable[K]:
        return self._items.keys()

    def values(self) -> Iterable[V]:
        return self._items.values()

    def __contains__(self, key: object) -> bool:
        return key in self._items

    def __iter__(self) -> Iterator[K]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)
