"""Binary min-heap with a position index, so keys can be re-prioritized in place."""

from __future__ import annotations

import itertools


class KeyedPriorityQueue:
    """Min-priority queue keyed by hashable items.

    Each key appears at most once. :meth:`decrease` and :meth:`set_priority`
    move an entry in place in O(log n) instead of pushing a duplicate.

    Entries with equal priority pop in insertion order of their *current*
    priority (a monotone counter breaks ties).

    Examples
    --------
    >>> q = KeyedPriorityQueue()
    >>> q.push("a", 3); q.push("b", 1)
    >>> q.decrease("a", 0)
    >>> q.pop()
    ('a', 0)

    """

    def __init__(self, items=None):
        self._heap = []  # [priority, tiebreak, key]
        self._pos = {}  # key -> slot in _heap
        self._counter = itertools.count()
        if items is not None:
            for key, priority in items:
                self.push(key, priority)

    def __len__(self):
        return len(self._heap)

    def __contains__(self, key):
        return key in self._pos

    def __repr__(self):
        return f"KeyedPriorityQueue(size={len(self._heap)})"

    # ==================== Queue API ====================

    def push(self, key, priority):
        """Insert ``key``.

        Raises
        ------
        KeyError
            If ``key`` is already queued; use :meth:`set_priority` instead.

        """
        if key in self._pos:
            raise KeyError(f"{key!r} is already queued")
        entry = [priority, next(self._counter), key]
        self._heap.append(entry)
        self._pos[key] = len(self._heap) - 1
        self._sift_up(len(self._heap) - 1)

    def pop(self):
        """Remove and return the ``(key, priority)`` pair with the smallest priority.

        Raises
        ------
        IndexError
            If the queue is empty.

        """
        heap = self._heap
        if not heap:
            raise IndexError("pop from an empty priority queue")
        last = heap.pop()
        if heap:
            top = heap[0]
            heap[0] = last
            self._pos[last[2]] = 0
            self._sift_down(0)
        else:
            top = last
        del self._pos[top[2]]
        return top[2], top[0]

    def peek(self):
        """``(key, priority)`` with the smallest priority, without removing it."""
        if not self._heap:
            raise IndexError("peek at an empty priority queue")
        priority, _, key = self._heap[0]
        return key, priority

    def priority(self, key):
        """Current priority of ``key``; ``KeyError`` if not queued."""
        return self._heap[self._pos[key]][0]

    def decrease(self, key, priority):
        """Lower the priority of ``key`` in place.

        Raises
        ------
        KeyError
            If ``key`` is not queued.
        ValueError
            If ``priority`` is larger than the current one.

        """
        i = self._pos[key]
        entry = self._heap[i]
        if priority > entry[0]:
            raise ValueError(f"decrease() got {priority}, above current {entry[0]}")
        entry[0] = priority
        entry[1] = next(self._counter)
        self._sift_up(i)

    def set_priority(self, key, priority):
        """Change the priority of ``key`` in either direction; returns the old one."""
        i = self._pos[key]
        entry = self._heap[i]
        old = entry[0]
        entry[0] = priority
        entry[1] = next(self._counter)
        if priority < old:
            self._sift_up(i)
        else:
            self._sift_down(i)
        return old

    # ==================== Heap internals ====================

    def _swap(self, i, j):
        heap = self._heap
        heap[i], heap[j] = heap[j], heap[i]
        self._pos[heap[i][2]] = i
        self._pos[heap[j][2]] = j

    def _less(self, i, j):
        a, b = self._heap[i], self._heap[j]
        return (a[0], a[1]) < (b[0], b[1])

    def _sift_up(self, i):
        while i > 0:
            parent = (i - 1) >> 1
            if not self._less(i, parent):
                break
            self._swap(i, parent)
            i = parent

    def _sift_down(self, i):
        n = len(self._heap)
        while True:
            left = 2 * i + 1
            if left >= n:
                break
            child = left
            right = left + 1
            if right < n and self._less(right, left):
                child = right
            if not self._less(child, i):
                break
            self._swap(i, child)
            i = child
