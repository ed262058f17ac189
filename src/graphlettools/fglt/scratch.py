"""Worker-private scratch arenas for the neighborhood scans."""
from __future__ import annotations

from typing import List

import numpy as np
from loguru import logger


class ScratchAllocationError(MemoryError):
    """A scratch arena or the per-edge buffer could not be allocated."""


class Scratch:
    """
    Scratch owned by exactly one worker, reused across the vertices it scans.

    is_ngbh[k]: 1-based edge position of k in the current vertex's row, 0 if
                k is not a neighbor of the current vertex
    fl[j]:      how many neighbors of the current vertex reach j
    is_used[j]: whether fl[j] is live for the current vertex
    pos:        touched columns, so cleanup costs O(touched) rather than O(n)
    mark[c]:    neighbors of the second vertex during the 4-clique scan

    Between vertices every array is back to all-zero; the scans only ever
    undo the entries they set.
    """

    __slots__ = ("n", "is_ngbh", "fl", "is_used", "pos", "mark")

    def __init__(self, n: int, counters: bool = True) -> None:
        self.n = n
        self.is_ngbh: List[int] = [0] * n
        self.fl: List[int] = [0] * n if counters else []
        self.is_used: List[bool] = [False] * n if counters else []
        self.pos: List[int] = []
        self.mark: List[bool] = [False] * n

    @classmethod
    def allocate(cls, n: int, counters: bool = True) -> "Scratch":
        try:
            return cls(n, counters)
        except MemoryError as exc:
            logger.error("Scratch allocation failed for n={}", n)
            raise ScratchAllocationError(
                f"working memory allocation failed for a scratch arena of size {n}"
            ) from exc

    def release_counters(self) -> None:
        """Drop the 2-hop counters once the common-neighbor pass is done."""
        self.fl = []
        self.is_used = []
        self.pos = []

    def is_clean(self) -> bool:
        return (
            not any(self.is_ngbh)
            and not any(self.is_used)
            and not self.pos
            and not any(self.mark)
        )


class ScratchPool:
    """
    One Scratch per worker, addressed by worker id.

    Sized before a pass starts; a worker always goes back to its own arena.
    """

    def __init__(self, n: int, workers: int) -> None:
        if workers < 1:
            raise ValueError(f"workers must be >= 1, got {workers}")
        self.n = n
        self._arenas = [Scratch.allocate(n) for _ in range(workers)]

    def __len__(self) -> int:
        return len(self._arenas)

    def acquire(self, worker_id: int) -> Scratch:
        return self._arenas[worker_id]

    def release_counters(self) -> None:
        for s in self._arenas:
            s.release_counters()


def allocate_edge_buffer(m: int) -> np.ndarray:
    """Per-edge shared-neighbor buffer (c3), one float per adjacency entry."""
    try:
        return np.zeros(m, dtype=np.float64)
    except MemoryError as exc:
        logger.error("Edge buffer allocation failed for m={}", m)
        raise ScratchAllocationError(
            f"working memory allocation failed for the edge buffer of size {m}"
        ) from exc
