"""Singly linked LIFO stack.

The stack owns the head node and every node owns its successor, so the
chain has exactly one owner per node. Views into the chain are policed by
a ``BorrowState`` (see ``linkstack.borrow``).
"""

from __future__ import annotations

import logging
from typing import Generic, Iterable, TypeVar

from linkstack.borrow import BorrowState, RefMut
from linkstack.config import DEFAULT_SETTINGS, StackSettings
from linkstack.errors import StackMovedError
from linkstack.iterators import IntoIter, Iter, IterMut
from linkstack.node import Node

logger = logging.getLogger(__name__)

T = TypeVar("T")


class Stack(Generic[T]):
    """LIFO stack over a chain of nodes.

    ``pop``, ``peek`` and ``peek_mut`` return None when the stack is empty.
    Since None is also a storable element, use ``is_empty()`` when that
    distinction matters.
    """

    def __init__(self, iterable: Iterable[T] = (), *, settings: StackSettings | None = None) -> None:
        self._head: Node[T] | None = None
        self._length = 0
        self._moved = False
        self._settings = settings if settings is not None else DEFAULT_SETTINGS
        self._borrows = BorrowState(enabled=self._settings.check_borrows)
        self.extend(iterable)

    @property
    def settings(self) -> StackSettings:
        return self._settings

    def _ensure_live(self, operation: str) -> None:
        if self._moved:
            raise StackMovedError(operation)

    # -- ownership transfer ---------------------------------------------

    def push(self, elem: T) -> None:
        """Put ``elem`` on top; the old head becomes its successor."""
        self._ensure_live("push")
        self._borrows.mutate()
        self._head = Node(elem, self._head)
        self._length += 1

    def extend(self, iterable: Iterable[T]) -> None:
        """Push every item of ``iterable`` in order; the last one ends on top."""
        self._ensure_live("extend")
        for elem in iterable:
            self.push(elem)

    def pop(self) -> T | None:
        """Remove the top element and return it, or None if empty."""
        self._ensure_live("pop")
        node = self._head
        if node is None:
            return None
        self._borrows.mutate()
        self._head = node.next
        node.next = None
        self._length -= 1
        return node.elem

    # -- inspection -----------------------------------------------------

    def peek(self) -> T | None:
        """Return the top element without removing it, or None if empty."""
        self._ensure_live("peek")
        self._borrows.share()
        if self._head is None:
            return None
        return self._head.elem

    def peek_mut(self) -> RefMut[T] | None:
        """Return an exclusive handle on the top element, or None if empty.

        Writing ``handle.value`` replaces the element in place. The handle
        expires on the next push, pop, read or exclusive borrow of the stack.
        """
        self._ensure_live("peek_mut")
        if self._head is None:
            return None
        epoch = self._borrows.lend_exclusive()
        return RefMut(self, self._head, self._borrows, epoch)

    def is_empty(self) -> bool:
        self._ensure_live("is_empty")
        self._borrows.share()
        return self._head is None

    @property
    def length(self) -> int:
        self._ensure_live("length")
        self._borrows.share()
        return self._length

    def __len__(self) -> int:
        return self.length

    def __bool__(self) -> bool:
        return not self.is_empty()

    def __repr__(self) -> str:
        # Diagnostic only: walks the chain without touching the borrow state.
        if self._moved:
            return "Stack(<moved>)"
        items = []
        node = self._head
        while node is not None:
            items.append(node.elem)
            node = node.next
        return f"Stack({items!r})"

    # -- iteration ------------------------------------------------------

    def into_iter(self) -> IntoIter[T]:
        """Move the whole chain into a consuming iterator.

        This stack is unusable afterwards; every later call raises
        ``StackMovedError``.
        """
        self._ensure_live("into_iter")
        target: Stack[T] = Stack(settings=self._settings)
        target._head, self._head = self._head, None
        target._length, self._length = self._length, 0
        self._borrows.mutate()
        self._moved = True
        logger.debug("Moved %d elements into a consuming iterator", target._length)
        return IntoIter(target)

    def iter(self) -> Iter[T]:
        """Read-only iterator from the top of the stack down."""
        self._ensure_live("iter")
        epoch = self._borrows.share()
        return Iter(self, self._head, self._borrows, epoch)

    def iter_mut(self) -> IterMut[T]:
        """Exclusive iterator yielding a ``RefMut`` per element, top first."""
        self._ensure_live("iter_mut")
        epoch = self._borrows.lend_exclusive()
        return IterMut(self, self._head, self._borrows, epoch)

    def __iter__(self) -> Iter[T]:
        return self.iter()

    # -- teardown -------------------------------------------------------

    def clear(self) -> None:
        """Release every node, ending all outstanding borrows."""
        self._ensure_live("clear")
        self._borrows.mutate()
        released = self._unwind()
        if released and released >= self._settings.log_teardown_threshold:
            logger.debug("Released %d nodes while clearing stack", released)

    def _unwind(self) -> int:
        # Detach each successor before the current node is dropped, so
        # releasing a node never cascades into releasing the rest.
        link, self._head = self._head, None
        self._length = 0
        released = 0
        while link is not None:
            successor = link.next
            link.next = None
            link = successor
            released += 1
        return released

    def __enter__(self) -> Stack[T]:
        return self

    def __exit__(self, *exc_info: object) -> None:
        if not self._moved:
            self.clear()

    def __copy__(self) -> Stack[T]:
        raise TypeError("Stack owns its chain and cannot be copied; build a new one with Stack(reversed(list(stack)))")

    def __deepcopy__(self, memo: dict) -> Stack[T]:
        raise TypeError("Stack owns its chain and cannot be copied; build a new one with Stack(reversed(list(stack)))")

    def __del__(self) -> None:
        # __init__ may not have run (e.g. object created via __new__).
        if getattr(self, "_head", None) is not None:
            self._unwind()
