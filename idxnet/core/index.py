"""Allocation and recycling of dense vertex/edge indices."""

from __future__ import annotations

import numpy as np


class IndexSpace:
    """Free-list plus high-water mark.

    Parameters
    ----------
    recycle : bool, default True
        When True, :meth:`allocate` hands out released indices before growing
        the high-water mark. When False, allocation is monotonic and released
        indices are never reused.
    capacity : int, default 0
        Pre-size hint for the liveness table.

    Notes
    -----
    A recycled index is a new logical entity. Every release bumps the index's
    :meth:`generation`, so a holder can keep ``(index, generation)`` and tell a
    reused index apart from the entity it used to name.

    """

    def __init__(self, recycle: bool = True, capacity: int = 0):
        self.recycle = bool(recycle)
        self._live = [False] * max(int(capacity), 0)
        self._gen = [0] * len(self._live)  # release count per index
        self._high_water = 0
        self._free = []  # stack of released indices
        self._count = 0

    def allocate(self) -> int:
        """Return an index that is not currently live and mark it live."""
        if self.recycle and self._free:
            idx = self._free.pop()
        else:
            idx = self._high_water
            self._high_water += 1
            if idx >= len(self._live):
                # geometric bump
                grow = max(8, len(self._live) >> 1)
                self._live.extend([False] * grow)
                self._gen.extend([0] * grow)
        self._live[idx] = True
        self._count += 1
        return idx

    def release(self, idx: int) -> None:
        """Mark ``idx`` free and bump its generation.

        Raises
        ------
        KeyError
            If ``idx`` is not currently live.

        """
        if not self.is_live(idx):
            raise KeyError(f"Index {idx} is not live")
        self._live[idx] = False
        self._gen[idx] += 1
        self._count -= 1
        if self.recycle:
            self._free.append(idx)

    def is_live(self, idx) -> bool:
        return (
            isinstance(idx, (int, np.integer))
            and not isinstance(idx, bool)
            and 0 <= idx < self._high_water
            and self._live[idx]
        )

    def generation(self, idx) -> int:
        """How many times ``idx`` has been released; 0 if never handed out."""
        if 0 <= idx < self._high_water:
            return self._gen[idx]
        return 0

    @property
    def high_water(self) -> int:
        """One past the largest index ever handed out."""
        return self._high_water

    def live_mask(self) -> np.ndarray:
        """Boolean array of length ``high_water``; True where the index is live."""
        return np.asarray(self._live[: self._high_water], dtype=bool)

    def copy(self) -> "IndexSpace":
        other = IndexSpace(self.recycle)
        other._live = list(self._live)
        other._gen = list(self._gen)
        other._high_water = self._high_water
        other._free = list(self._free)
        other._count = self._count
        return other

    def __contains__(self, idx) -> bool:
        return self.is_live(idx)

    def __iter__(self):
        live = self._live
        return (i for i in range(self._high_water) if live[i])

    def __len__(self) -> int:
        return self._count

    def __repr__(self):
        return f"IndexSpace(live={self._count}, high_water={self._high_water}, free={len(self._free)})"
