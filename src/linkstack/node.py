"""Chain node owning one element and the rest of the chain."""

from __future__ import annotations

from typing import Generic, TypeVar

T = TypeVar("T")


class Node(Generic[T]):
    __slots__ = ("elem", "next")

    def __init__(self, elem: T, next: Node[T] | None = None) -> None:
        self.elem = elem
        self.next = next

    def __repr__(self) -> str:
        return f"Node({self.elem!r})"
