"""Run-time borrow tracking for stack views.

Every stack owns a ``BorrowState``. Views into the chain (borrowing
iterators and ``RefMut`` handles) remember the epoch they were created in
and refuse to work once the epoch has moved on.

The epoch advances when:

- the chain changes shape (push, pop, clear, move into a consuming iterator);
- an exclusive borrow starts (``peek_mut``, ``iter_mut``);
- a shared read happens while an exclusive borrow is outstanding.

Shared reads that happen while no exclusive borrow is outstanding leave the
epoch alone, so any number of read-only iterators can coexist.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Generic, TypeVar

from linkstack.errors import BorrowError

if TYPE_CHECKING:
    from linkstack.node import Node

T = TypeVar("T")


class BorrowState:
    __slots__ = ("epoch", "exclusive", "enabled")

    def __init__(self, enabled: bool = True) -> None:
        self.epoch = 0
        self.exclusive = False
        self.enabled = enabled

    def mutate(self) -> None:
        """End every outstanding borrow before the chain changes shape."""
        self.epoch += 1
        self.exclusive = False

    def share(self) -> int:
        """Start (or join) a shared borrow and return its epoch."""
        if self.exclusive:
            self.epoch += 1
            self.exclusive = False
        return self.epoch

    def lend_exclusive(self) -> int:
        """Start a new exclusive borrow, invalidating all earlier views."""
        self.epoch += 1
        self.exclusive = True
        return self.epoch

    def check(self, epoch: int, what: str) -> None:
        if self.enabled and epoch != self.epoch:
            raise BorrowError(what, epoch, self.epoch)


class RefMut(Generic[T]):
    """Exclusive handle on one element of a stack.

    Reads and writes go straight to the node, so a write is visible to the
    next ``peek``/``pop``. The handle stops working as soon as the stack is
    touched through any other path. It keeps ``owner`` alive so the chain
    cannot be torn down underneath it.
    """

    __slots__ = ("_owner", "_node", "_borrows", "_epoch")

    def __init__(self, owner: object, node: Node[T], borrows: BorrowState, epoch: int) -> None:
        self._owner = owner
        self._node = node
        self._borrows = borrows
        self._epoch = epoch

    def is_valid(self) -> bool:
        return not self._borrows.enabled or self._epoch == self._borrows.epoch

    def get(self) -> T:
        self._borrows.check(self._epoch, "RefMut")
        return self._node.elem

    def set(self, value: T) -> None:
        self._borrows.check(self._epoch, "RefMut")
        self._node.elem = value

    def replace(self, value: T) -> T:
        """Store ``value`` and return the element it replaced."""
        self._borrows.check(self._epoch, "RefMut")
        old = self._node.elem
        self._node.elem = value
        return old

    @property
    def value(self) -> T:
        return self.get()

    @value.setter
    def value(self, value: T) -> None:
        self.set(value)

    def __eq__(self, other: Any) -> bool:
        if isinstance(other, RefMut):
            return self.get() == other.get()
        return self.get() == other

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        if not self.is_valid():
            return "RefMut(<expired>)"
        return f"RefMut({self._node.elem!r})"
