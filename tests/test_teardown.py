"""Tests for stack teardown -- long chains are released iteratively."""

from __future__ import annotations

import gc
import logging

from linkstack import Stack, StackSettings

LONG_CHAIN = 200_000


def _nodes(stack: Stack[int]) -> list:
    nodes = []
    node = stack._head
    while node is not None:
        nodes.append(node)
        node = node.next
    return nodes


class TestLongChains:
    """Building and dropping very long chains must not exhaust the call stack."""

    def test_dropping_long_stack(self) -> None:
        stack = Stack(range(LONG_CHAIN))
        assert len(stack) == LONG_CHAIN
        del stack
        gc.collect()

    def test_clearing_long_stack(self) -> None:
        stack = Stack(range(LONG_CHAIN))
        stack.clear()
        assert stack.is_empty()
        assert stack.pop() is None

    def test_dropping_long_consuming_iterator(self) -> None:
        it = Stack(range(LONG_CHAIN)).into_iter()
        assert next(it) == LONG_CHAIN - 1
        del it
        gc.collect()

    def test_draining_long_stack(self) -> None:
        stack = Stack(range(LONG_CHAIN))
        total = sum(1 for _ in stack.iter())
        assert total == LONG_CHAIN
        assert sum(1 for _ in stack.into_iter()) == LONG_CHAIN


class TestUnwinding:
    """Every link is detached before its node is released."""

    def test_clear_detaches_every_link(self) -> None:
        stack = Stack([1, 2, 3, 4])
        nodes = _nodes(stack)
        assert len(nodes) == 4
        stack.clear()
        assert all(node.next is None for node in nodes)

    def test_dropping_stack_detaches_every_link(self) -> None:
        stack = Stack([1, 2, 3, 4])
        nodes = _nodes(stack)
        assert len(nodes) == 4
        del stack
        gc.collect()
        assert all(node.next is None for node in nodes)

    def test_dropping_long_stack_detaches_every_link(self) -> None:
        stack = Stack(range(LONG_CHAIN))
        nodes = _nodes(stack)
        del stack
        gc.collect()
        assert all(node.next is None for node in nodes)

    def test_leaving_context_detaches_every_link(self) -> None:
        with Stack([1, 2, 3]) as stack:
            nodes = _nodes(stack)
        assert all(node.next is None for node in nodes)

    def test_pop_detaches_popped_node(self) -> None:
        stack = Stack([1, 2])
        top = stack._head
        assert top is not None
        stack.pop()
        assert top.next is None
        assert stack.peek() == 1

    def test_moved_stack_keeps_chain_intact(self) -> None:
        stack = Stack([1, 2, 3])
        nodes = _nodes(stack)
        it = stack.into_iter()
        del stack
        gc.collect()
        assert nodes[0].next is nodes[1]
        assert list(it) == [3, 2, 1]


class TestTeardownLogging:
    """Large teardowns are reported at DEBUG level."""

    def test_clear_above_threshold_logs(self, caplog) -> None:
        stack = Stack(range(10), settings=StackSettings(log_teardown_threshold=5))
        with caplog.at_level(logging.DEBUG, logger="linkstack.stack"):
            stack.clear()
        assert "Released 10 nodes" in caplog.text

    def test_clear_below_threshold_is_quiet(self, caplog) -> None:
        stack = Stack(range(3), settings=StackSettings(log_teardown_threshold=5))
        with caplog.at_level(logging.DEBUG, logger="linkstack.stack"):
            stack.clear()
        assert "Released" not in caplog.text

    def test_clear_of_empty_stack_is_quiet(self, caplog) -> None:
        stack: Stack[int] = Stack(settings=StackSettings(log_teardown_threshold=0))
        with caplog.at_level(logging.DEBUG, logger="linkstack.stack"):
            stack.clear()
        assert caplog.records == []

    def test_into_iter_logs_move(self, caplog) -> None:
        stack = Stack([1, 2, 3])
        with caplog.at_level(logging.DEBUG, logger="linkstack.stack"):
            stack.into_iter()
        assert "Moved 3 elements" in caplog.text
