"""The three ways to walk a stack.

``IntoIter`` owns the chain and pops it. ``Iter`` and ``IterMut`` hold a
cursor into a chain that the stack still owns; both stop working once the
stack's borrow epoch moves on.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Iterator, TypeVar

from linkstack.borrow import BorrowState, RefMut

if TYPE_CHECKING:
    from linkstack.node import Node
    from linkstack.stack import Stack

T = TypeVar("T")


class IntoIter(Iterator[T]):
    """Consuming iterator: yields elements by popping the stack it owns."""

    def __init__(self, stack: Stack[T]) -> None:
        self._stack = stack

    def __iter__(self) -> IntoIter[T]:
        return self

    def __next__(self) -> T:
        # Test emptiness first: a stored None must still be yielded.
        if self._stack.is_empty():
            raise StopIteration
        return self._stack.pop()  # type: ignore[return-value]

    def __len__(self) -> int:
        return self._stack.length


class Iter(Iterator[T]):
    """Read-only cursor over the chain, head first.

    Holds a reference to the stack so the chain outlives the cursor. Until
    it has reported exhaustion, every step checks the borrow epoch, even
    when the cursor started on an empty chain.
    """

    __slots__ = ("_stack", "_next", "_borrows", "_epoch", "_exhausted")

    def __init__(self, stack: Stack[T], head: Node[T] | None, borrows: BorrowState, epoch: int) -> None:
        self._stack = stack
        self._next = head
        self._borrows = borrows
        self._epoch = epoch
        self._exhausted = False

    def __iter__(self) -> Iter[T]:
        return self

    def __next__(self) -> T:
        if self._exhausted:
            raise StopIteration
        self._borrows.check(self._epoch, "Iter")
        node = self._next
        if node is None:
            self._exhausted = True
            raise StopIteration
        self._next = node.next
        return node.elem


class IterMut(Iterator[RefMut[T]]):
    """Exclusive cursor over the chain, yielding one ``RefMut`` per node.

    The cursor slot is emptied before the successor is installed, so the
    iterator never holds the node it just handed out.
    """

    __slots__ = ("_stack", "_next", "_borrows", "_epoch", "_exhausted")

    def __init__(self, stack: Stack[T], head: Node[T] | None, borrows: BorrowState, epoch: int) -> None:
        self._stack = stack
        self._next = head
        self._borrows = borrows
        self._epoch = epoch
        self._exhausted = False

    def __iter__(self) -> IterMut[T]:
        return self

    def __next__(self) -> RefMut[T]:
        if self._exhausted:
            raise StopIteration
        self._borrows.check(self._epoch, "IterMut")
        node, self._next = self._next, None
        if node is None:
            self._exhausted = True
            raise StopIteration
        self._next = node.next
        return RefMut(self._stack, node, self._borrows, self._epoch)
