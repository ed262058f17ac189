"""
Fast graphlet transform: per-vertex orbit counts for graphlets up to 4 vertices.

Passes, each a fork-join over vertex chunks with a barrier in between:
  1. degrees
  2. common-neighbor scan (raw orbits 0, 2-4, 6-8, 11, 12, 14, 15 and the
     per-edge shared-neighbor counts c3)
  3. second scan (raw orbits 5, 9, 10, 13), which reads d2, d4 and c3 of
     arbitrary vertices and so must wait for pass 2
  4. raw-to-net transform

With workers > 1 the scans run on a multiprocessing Pool; each process is a
worker and keeps one private Scratch for all chunks it is handed.
"""
from __future__ import annotations

import os
import time
from dataclasses import dataclass
from multiprocessing import Pool, cpu_count
from typing import Iterable, List, Optional, Sequence, Tuple

import numpy as np
from loguru import logger

from graphlettools.fglt.counters import (
    claw_leaf_count,
    degree_pass,
    fill_closed_forms,
    path_center_count,
    paw_center_count,
    two_path_count,
)
from graphlettools.fglt.scanner import (
    count_cliques4,
    remove_neighbors,
    scan_common_neighbors,
    scan_second_pass,
)
from graphlettools.fglt.scratch import Scratch, ScratchPool, allocate_edge_buffer
from graphlettools.fglt.transform import NUM_ORBITS, raw2net
from graphlettools.sparse.adjacency import SparseAdjacency


GRAPHLETTOOLS_WORKERS = os.environ.get("GRAPHLETTOOLS_WORKERS", "")
GRAPHLETTOOLS_CHUNK_SIZE = os.environ.get("GRAPHLETTOOLS_CHUNK_SIZE", "256")

FIRST_PASS_ORBITS = (0, 2, 3, 4, 6, 7, 8, 11, 12, 14, 15)
SECOND_PASS_ORBITS = (5, 9, 10, 13)


@dataclass(frozen=True)
class GraphletCounts:
    """
    raw: (16, n) raw orbit counts, overlapping
    net: (16, n) net orbit counts, the graphlet degree vectors (one column
         per vertex)
    """

    raw: np.ndarray
    net: np.ndarray


def get_workers() -> int:
    """Default worker count: $GRAPHLETTOOLS_WORKERS, else one less than the CPUs."""
    if GRAPHLETTOOLS_WORKERS.strip():
        return max(1, int(GRAPHLETTOOLS_WORKERS))
    return max(1, cpu_count() - 1)


def _chunked(n: int, size: int) -> Iterable[Tuple[int, int]]:
    for start in range(0, n, size):
        yield start, min(start + size, n)


# ---------------------------------------------------------------------------
# Per-chunk kernels (shared by the serial path and the pool workers)
# ---------------------------------------------------------------------------

def _first_pass_chunk(
    start: int,
    stop: int,
    ro: Sequence[int],
    ci: Sequence[int],
    deg: Sequence[float],
    scratch: Scratch,
) -> Tuple[np.ndarray, List[float]]:
    base = ro[start]
    c3: List[float] = [0.0] * (ro[stop] - base)
    out = np.empty((len(FIRST_PASS_ORBITS), stop - start), dtype=np.float64)
    col = [0.0] * NUM_ORBITS

    for i in range(start, stop):
        d = deg[i]

        # d_4 d_12, then d_15 while i's neighbors are still marked
        d4, d12 = scan_common_neighbors(i, ro, ci, c3, scratch, base)
        d15 = count_cliques4(i, ro, ci, c3, scratch, base)
        remove_neighbors(scratch.is_ngbh, i, ro, ci)

        # d_2
        d2 = two_path_count(i, ro, ci, deg)

        # d_0 d_3 d_8
        fill_closed_forms(col, d)

        lo = ro[i] - base
        d14 = 0.0
        for c in c3[lo : lo + (ro[i + 1] - ro[i])]:
            d14 += c * (c - 1) * 0.5

        col[2] = d2
        col[4] = d4
        col[6] = path_center_count(d, d2, d4)
        col[7] = claw_leaf_count(i, ro, ci, deg)
        col[11] = paw_center_count(d, d4)
        col[12] = d12
        col[14] = d14
        col[15] = d15
        out[:, i - start] = [col[o] for o in FIRST_PASS_ORBITS]

    return out, c3


def _second_pass_chunk(
    start: int,
    stop: int,
    ro: Sequence[int],
    ci: Sequence[int],
    deg: Sequence[float],
    d2: Sequence[float],
    d4: Sequence[float],
    c3: Sequence[float],
    scratch: Scratch,
) -> np.ndarray:
    out = np.empty((len(SECOND_PASS_ORBITS), stop - start), dtype=np.float64)
    for i in range(start, stop):
        out[:, i - start] = scan_second_pass(i, ro, ci, deg, d2, d4, c3, scratch)
    return out


def _edge_pass_chunk(
    start: int,
    stop: int,
    ro: Sequence[int],
    ci: Sequence[int],
    scratch: Scratch,
) -> List[float]:
    base = ro[start]
    c3: List[float] = [0.0] * (ro[stop] - base)
    for i in range(start, stop):
        scan_common_neighbors(i, ro, ci, c3, scratch, base)
        remove_neighbors(scratch.is_ngbh, i, ro, ci)
    return c3


# ---------------------------------------------------------------------------
# Pool workers
# ---------------------------------------------------------------------------

_GRAPH: Optional[tuple] = None
_SCRATCH: Optional[Scratch] = None


def _worker_init(graph: tuple) -> None:
    global _GRAPH, _SCRATCH
    _GRAPH = graph
    _SCRATCH = None


def _worker_scratch(n: int, counters: bool) -> Scratch:
    # allocated on first use so a failure surfaces through the pool iterator
    global _SCRATCH
    if _SCRATCH is None:
        _SCRATCH = Scratch.allocate(n, counters=counters)
    return _SCRATCH


def _first_pass_worker(job: Tuple[int, int]) -> Tuple[int, int, np.ndarray, List[float]]:
    start, stop = job
    ro, ci, deg = _GRAPH
    out, c3 = _first_pass_chunk(start, stop, ro, ci, deg, _worker_scratch(len(deg), True))
    return start, stop, out, c3


def _second_pass_worker(job: Tuple[int, int]) -> Tuple[int, int, np.ndarray]:
    start, stop = job
    ro, ci, deg, d2, d4, c3 = _GRAPH
    scratch = _worker_scratch(len(deg), False)
    return start, stop, _second_pass_chunk(start, stop, ro, ci, deg, d2, d4, c3, scratch)


def _edge_pass_worker(job: Tuple[int, int]) -> Tuple[int, int, List[float]]:
    start, stop = job
    ro, ci = _GRAPH
    return start, stop, _edge_pass_chunk(start, stop, ro, ci, _worker_scratch(len(ro) - 1, True))


# ---------------------------------------------------------------------------
# Orchestration
# ---------------------------------------------------------------------------

def _raw_counts(adjacency: SparseAdjacency, workers: int, chunk_size: int) -> np.ndarray:
    n, m = adjacency.n, adjacency.m
    raw = np.zeros((NUM_ORBITS, n), dtype=np.float64)
    first_rows = list(FIRST_PASS_ORBITS)
    second_rows = list(SECOND_PASS_ORBITS)

    t = time.perf_counter()
    degree_pass(adjacency, raw)
    logger.debug("degree pass: n={} m={} ({:.4f} sec)", n, m, time.perf_counter() - t)

    c3 = allocate_edge_buffer(m)
    ro, ci = adjacency.to_lists()
    deg = raw[1].tolist()

    if workers == 1 or n == 0:
        pool = ScratchPool(n, 1)
        scratch = pool.acquire(0)

        t = time.perf_counter()
        out, c3_list = _first_pass_chunk(0, n, ro, ci, deg, scratch)
        raw[first_rows, :] = out
        c3[:] = c3_list
        logger.debug("common-neighbor pass ({:.4f} sec)", time.perf_counter() - t)

        pool.release_counters()
        t = time.perf_counter()
        raw[second_rows, :] = _second_pass_chunk(
            0, n, ro, ci, deg, raw[2].tolist(), raw[4].tolist(), c3_list, scratch
        )
        logger.debug("second pass ({:.4f} sec)", time.perf_counter() - t)
        return raw

    jobs = list(_chunked(n, chunk_size))
    processes = max(1, min(workers, len(jobs)))
    logger.debug("{} chunks of <= {} vertices on {} workers", len(jobs), chunk_size, processes)

    t = time.perf_counter()
    with Pool(processes=processes, initializer=_worker_init, initargs=((ro, ci, deg),)) as pool:
        for start, stop, out, c3_chunk in pool.imap_unordered(_first_pass_worker, jobs):
            raw[first_rows, start:stop] = out
            c3[ro[start] : ro[stop]] = c3_chunk
    logger.debug("common-neighbor pass ({:.4f} sec)", time.perf_counter() - t)

    t = time.perf_counter()
    graph = (ro, ci, deg, raw[2].tolist(), raw[4].tolist(), c3.tolist())
    with Pool(processes=processes, initializer=_worker_init, initargs=(graph,)) as pool:
        for start, stop, out in pool.imap_unordered(_second_pass_worker, jobs):
            raw[second_rows, start:stop] = out
    logger.debug("second pass ({:.4f} sec)", time.perf_counter() - t)

    return raw


def _resolve(workers: Optional[int], chunk_size: Optional[int]) -> Tuple[int, int]:
    if workers is None:
        workers = get_workers()
    if chunk_size is None:
        try:
            chunk_size = int(GRAPHLETTOOLS_CHUNK_SIZE)
        except ValueError:
            raise ValueError(
                f"GRAPHLETTOOLS_CHUNK_SIZE must be an integer, got {GRAPHLETTOOLS_CHUNK_SIZE!r}"
            ) from None
    if workers < 1:
        raise ValueError(f"workers must be >= 1, got {workers}")
    if chunk_size < 1:
        raise ValueError(f"chunk_size must be >= 1, got {chunk_size}")
    return workers, chunk_size


def compute(
    adjacency: SparseAdjacency,
    *,
    workers: Optional[int] = None,
    chunk_size: Optional[int] = None,
) -> GraphletCounts:
    """
    Raw and net orbit counts (graphlets on up to 4 vertices) of every vertex.

    workers: number of worker processes (default get_workers()); 1 runs
             in-process.
    chunk_size: vertices per task handed to a worker.

    Raises ScratchAllocationError if working memory cannot be allocated.
    The adjacency is not validated; see check_adjacency.
    """
    workers, chunk_size = _resolve(workers, chunk_size)
    timer_all = time.perf_counter()

    raw = _raw_counts(adjacency, workers, chunk_size)

    t = time.perf_counter()
    net = raw2net(raw)
    logger.debug("raw-to-net transform ({:.4f} sec)", time.perf_counter() - t)

    logger.debug("Total elapsed time: {:.4f} sec", time.perf_counter() - timer_all)
    return GraphletCounts(raw=raw, net=net)


def compute_into(
    adjacency: SparseAdjacency,
    raw: np.ndarray,
    net: np.ndarray,
    *,
    workers: Optional[int] = None,
    chunk_size: Optional[int] = None,
) -> None:
    """
    Like compute, writing into caller-allocated (16, n) matrices.

    Nothing is written unless the whole computation succeeds.
    """
    shape = (NUM_ORBITS, adjacency.n)
    for name, arr in (("raw", raw), ("net", net)):
        if arr.shape != shape:
            raise ValueError(f"{name} must have shape {shape}, got {arr.shape}")
    res = compute(adjacency, workers=workers, chunk_size=chunk_size)
    raw[...] = res.raw
    net[...] = res.net


def edge_common_neighbors(
    adjacency: SparseAdjacency,
    *,
    workers: Optional[int] = None,
    chunk_size: Optional[int] = None,
) -> np.ndarray:
    """
    Shared-neighbor count of every adjacency entry.

    out[p] is the number of triangles through the edge (i, col_index[p]),
    where row_offset[i] <= p < row_offset[i+1]. Only the common-neighbor
    scan runs; no orbit is computed.
    """
    workers, chunk_size = _resolve(workers, chunk_size)
    n = adjacency.n
    c3 = allocate_edge_buffer(adjacency.m)
    ro, ci = adjacency.to_lists()

    t = time.perf_counter()
    if workers == 1 or n == 0:
        scratch = ScratchPool(n, 1).acquire(0)
        c3[:] = _edge_pass_chunk(0, n, ro, ci, scratch)
    else:
        jobs = list(_chunked(n, chunk_size))
        processes = max(1, min(workers, len(jobs)))
        with Pool(processes=processes, initializer=_worker_init, initargs=((ro, ci),)) as pool:
            for start, stop, c3_chunk in pool.imap_unordered(_edge_pass_worker, jobs):
                c3[ro[start] : ro[stop]] = c3_chunk
    logger.debug("edge common-neighbor pass ({:.4f} sec)", time.perf_counter() - t)
    return c3
