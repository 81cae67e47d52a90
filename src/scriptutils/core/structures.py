from __future__ import annotations

from collections.abc import Iterable, Iterator
from typing import Any, Generic, TypeVar

T = TypeVar("T")


def array_contains(items: Iterable[Any], element: Any) -> bool:
    return any(item == element for item in items)


def maximum(*values: T) -> T:
    if not values:
        raise ValueError("maximum() needs at least one value")
    best = values[0]
    for value in values[1:]:
        if value > best:  # type: ignore[operator]
            best = value
    return best


def minimum(*values: T) -> T:
    if not values:
        raise ValueError("minimum() needs at least one value")
    best = values[0]
    for value in values[1:]:
        if value < best:  # type: ignore[operator]
            best = value
    return best


class Stack(Generic[T]):
    """LIFO stack; popping or peeking an empty stack returns None."""

    def __init__(self, items: Iterable[T] = ()) -> None:
        self._items: list[T] = list(items)

    def push(self, *items: T) -> None:
        self._items.extend(items)

    def pop(self) -> T | None:
        if not self._items:
            return None
        return self._items.pop()

    def tos(self) -> T | None:
        if not self._items:
            return None
        return self._items[-1]

    def __len__(self) -> int:
        return len(self._items)

    def __bool__(self) -> bool:
        return bool(self._items)

    def __iter__(self) -> Iterator[T]:
        return iter(self._items)

    def __repr__(self) -> str:
        return f"Stack({self._items!r})"


__all__ = ["Stack", "array_contains", "maximum", "minimum"]
