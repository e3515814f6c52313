# src/bedanno/annotation/sweep.py
from __future__ import annotations
from typing import Iterator, List, Optional, Sequence

from ..gff.io import Target
from ..interval import Interval


def find_overlaps(queries: Sequence[Interval], targets: Sequence[Target]) -> List[List[Target]]:
    """
    For each query (sorted), list the targets (sorted) that overlap it.

    One forward pass over `targets`: a target the cursor passes because it ends
    before the current query is never looked at again. `window` holds the
    targets newly collected for the previous query; those still overlapping
    the current query are reported ahead of the newly collected ones.
    """
    result: List[List[Target]] = []
    cursor: Iterator[Target] = iter(targets)
    held: Optional[Target] = None
    window: List[Target] = []

    for q in queries:
        # skip targets that end before the query
        while True:
            t = held if held is not None else next(cursor, None)
            held = None
            if t is None:
                break
            if t.interval.end >= q.start:
                held = t
                break

        # take overlapping targets, holding back the first one that is not
        fresh: List[Target] = []
        while True:
            t = held if held is not None else next(cursor, None)
            held = None
            if t is None:
                break
            if t.interval.overlapping(q):
                fresh.append(t)
            else:
                held = t
                break

        # a target may span consecutive queries
        carried = [t for t in window if q.overlapping(t.interval)]
        result.append(carried + fresh)
        window = fresh
    return result

