"""Hash table with separate chaining and load-factor driven resizing."""

from __future__ import annotations

from typing import Any, Iterable

from .. import constants
from ..step_types import StepSink, StructureKind
from ._base import TrackedStructure


def string_hash(key: Any) -> int:
    """Deterministic 32-bit signed rolling hash over the key's string form.

    For each character: ``h = (h << 5) - h + ord(ch)``, wrapped to a signed
    32-bit integer.
    """
    h = 0
    for ch in str(key):
        h = ((h << 5) - h + ord(ch)) & 0xFFFFFFFF
    if h >= 0x80000000:
        h -= 0x100000000
    return h


class TrackedHashMap(TrackedStructure):
    """Chained hash table; the snapshot is the bucket array of ``[key, value]`` pairs."""

    kind = StructureKind.HASH_MAP

    def __init__(
        self,
        capacity: int = constants.DEFAULT_HASH_CAPACITY,
        load_factor: float = constants.DEFAULT_LOAD_FACTOR,
        sink: StepSink | None = None,
    ):
        if capacity < 1:
            raise ValueError(f"capacity must be positive, got {capacity}")
        super().__init__(sink)
        self._capacity = capacity
        self._threshold = load_factor
        self._buckets: list[list[list[Any]]] = [[] for _ in range(capacity)]
        self._size = 0

    @classmethod
    def from_items(
        cls,
        items: Iterable[tuple[Any, Any]],
        capacity: int = constants.DEFAULT_HASH_CAPACITY,
        load_factor: float = constants.DEFAULT_LOAD_FACTOR,
        sink: StepSink | None = None,
    ):
        table = cls(capacity=capacity, load_factor=load_factor)
        for key, value in items:
            table.set(key, value)
        table.attach(sink)
        return table

    @property
    def capacity(self) -> int:
        return self._capacity

    def load_factor(self) -> float:
        return self._size / self._capacity

    def _locate(self, key: Any) -> tuple[int, int]:
        hash_value = string_hash(key)
        return hash_value, abs(hash_value) % self._capacity

    def set(self, key: Any, value: Any) -> None:
        hash_value, index = self._locate(key)
        bucket = self._buckets[index]
        for entry in bucket:
            if entry[0] == key:
                old_value = entry[1]
                entry[1] = value
                self._emit(
                    "set",
                    (key, value),
                    key=key,
                    value=value,
                    index=index,
                    hash_value=hash_value,
                    updated=True,
                    old_value=old_value,
                )
                return
        collision = len(bucket) > 0
        bucket.append([key, value])
        self._size += 1
        self._emit(
            "set",
            (key, value),
            key=key,
            value=value,
            index=index,
            hash_value=hash_value,
            collision=collision,
            updated=False,
        )
        if self.load_factor() > self._threshold:
            self.resize()

    def resize(self) -> None:
        """Double the capacity and rehash every entry into the new buckets."""
        old_capacity = self._capacity
        entries = self.entries()
        self._capacity = old_capacity * 2
        self._buckets = [[] for _ in range(self._capacity)]
        for key, value in entries:
            _, index = self._locate(key)
            self._buckets[index].append([key, value])
        self._emit(
            "resize",
            (),
            old_capacity=old_capacity,
            new_capacity=self._capacity,
        )

    def get(self, key: Any) -> Any:
        hash_value, index = self._locate(key)
        for position, entry in enumerate(self._buckets[index]):
            if entry[0] == key:
                self._emit(
                    "get",
                    (key,),
                    key=key,
                    value=entry[1],
                    index=index,
                    hash_value=hash_value,
                    found=True,
                    position=position,
                )
                return entry[1]
        self._emit(
            "get", (key,), key=key, index=index, hash_value=hash_value, found=False
        )
        return None

    def delete(self, key: Any) -> bool:
        hash_value, index = self._locate(key)
        bucket = self._buckets[index]
        for position, entry in enumerate(bucket):
            if entry[0] == key:
                del bucket[position]
                self._size -= 1
                self._emit(
                    "delete",
                    (key,),
                    key=key,
                    deleted_value=entry[1],
                    index=index,
                    hash_value=hash_value,
                    deleted=True,
                )
                return True
        self._emit(
            "delete", (key,), key=key, index=index, hash_value=hash_value, deleted=False
        )
        return False

    def has(self, key: Any) -> bool:
        _, index = self._locate(key)
        return any(entry[0] == key for entry in self._buckets[index])

    def __contains__(self, key: Any) -> bool:
        return self.has(key)

    def keys(self) -> list[Any]:
        return [key for key, _ in self.entries()]

    def values(self) -> list[Any]:
        return [value for _, value in self.entries()]

    def entries(self) -> list[tuple[Any, Any]]:
        return [(key, value) for bucket in self._buckets for key, value in bucket]

    def clear(self) -> None:
        self._buckets = [[] for _ in range(self._capacity)]
        self._size = 0
        self._emit("clear", (), cleared=True, capacity=self._capacity)

    def size(self) -> int:
        return self._size

    def snapshot(self) -> list[list[list[Any]]]:
        return [[list(entry) for entry in bucket] for bucket in self._buckets]
