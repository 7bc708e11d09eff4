"""Exceptions raised when a stack is used outside its borrowing rules."""

from __future__ import annotations


class StackError(Exception):
    """Base class for all linkstack errors."""


class BorrowError(StackError):
    """A view into the chain was used after its borrow ended.

    Raised by borrowing iterators and ``RefMut`` handles once the stack
    has been mutated or re-borrowed through another path.
    """

    def __init__(self, what: str, created: int, current: int) -> None:
        super().__init__(f"{what} used after its borrow ended (borrowed at epoch {created}, stack now at epoch {current})")
        self.created = created
        self.current = current


class StackMovedError(StackError):
    """The stack's chain was moved into a consuming iterator."""

    def __init__(self, operation: str) -> None:
        super().__init__(f"cannot call {operation}() on a stack moved into a consuming iterator")
        self.operation = operation
