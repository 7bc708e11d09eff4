"""linkstack: singly linked LIFO stack with run-time checked borrowing."""

from linkstack.borrow import BorrowState, RefMut
from linkstack.config import DEFAULT_SETTINGS, StackSettings
from linkstack.errors import BorrowError, StackError, StackMovedError
from linkstack.iterators import IntoIter, Iter, IterMut
from linkstack.node import Node
from linkstack.stack import Stack

__all__ = [
    # Stack
    "Node",
    "Stack",
    # Iterators
    "IntoIter",
    "Iter",
    "IterMut",
    # Borrowing
    "BorrowState",
    "RefMut",
    # Settings
    "DEFAULT_SETTINGS",
    "StackSettings",
    # Errors
    "BorrowError",
    "StackError",
    "StackMovedError",
]
