# src/bedanno/annotation/sync.py
from __future__ import annotations
import sys, logging
from typing import Dict, Generic, Iterable, Iterator, List, NamedTuple, Optional, Set, TypeVar

from ..bed.io import QueryRecord
from ..errors import EmptyInput, OutOfOrderContig
from ..gff.io import Target
from ..interval import Interval

log = logging.getLogger("bedanno")
if not log.handlers:
    h = logging.StreamHandler(sys.stderr)
    h.setFormatter(logging.Formatter("[%(asctime)s] %(levelname)s: %(message)s"))
    log.addHandler(h)
log.setLevel(logging.INFO)

T = TypeVar("T")


class PeekableCursor(Generic[T]):
    """Iterator wrapper with one item of lookahead."""

    _EMPTY = object()

    def __init__(self, items: Iterable[T]):
        self._it = iter(items)
        self._head = self._EMPTY

    def peek(self) -> Optional[T]:
        """Return the next item without consuming it, or None at the end."""
        if self._head is self._EMPTY:
            self._head = next(self._it, None)
        return self._head

    def __iter__(self) -> "PeekableCursor[T]":
        return self

    def __next__(self) -> T:
        item = self.peek()
        if item is None:
            raise StopIteration
        self._head = self._EMPTY
        return item


class ContigBlock(NamedTuple):
    contig: str
    queries: List[Interval]   # sorted, duplicates merged
    targets: List[Target]     # sorted by interval, input order kept on ties


class ContigSynchronizer:
    """
    Walk the query and target streams together, one query contig at a time.

    Query contigs must come in contiguous blocks. Target contigs may come in
    any block order: targets met before their query block are held in
    `pending` until that block is reached.
    """

    def __init__(self, queries: Iterable[QueryRecord], targets: Iterable[Target], strict_empty: bool = False):
        self._queries: PeekableCursor[QueryRecord] = PeekableCursor(queries)
        self._targets: PeekableCursor[Target] = PeekableCursor(targets)
        self.strict_empty = strict_empty
        self.current: Optional[str] = None
        self.processed: Set[str] = set()
        self.pending: Dict[str, List[Target]] = {}

    def __iter__(self) -> Iterator[ContigBlock]:
        while True:
            first = self._queries.peek()
            if first is None:
                if self.current is None:
                    if self.strict_empty:
                        raise EmptyInput()
                    log.warning("No records found in BED input; nothing to annotate.")
                break
            contig = first.contig
            if contig in self.processed:
                raise OutOfOrderContig(contig, first.line)
            self.current = contig
            queries = self._take_queries(contig)
            targets = self._take_targets(contig)
            self.processed.add(contig)
            yield ContigBlock(contig, queries, targets)

    def _take_queries(self, contig: str) -> List[Interval]:
        seen: Set[Interval] = set()
        while True:
            rec = self._queries.peek()
            if rec is None or rec.contig != contig:
                break
            next(self._queries)
            seen.add(Interval(rec.start, rec.end))
        return sorted(seen)

    def _take_targets(self, contig: str) -> List[Target]:
        if contig in self.pending:
            found = self.pending.pop(contig)
        else:
            found = []
            while True:
                rec = self._targets.peek()
                if rec is None:
                    break
                if rec.contig != contig:
                    if found:
                        break
                    self.pending.setdefault(rec.contig, []).append(next(self._targets))
                    continue
                found.append(next(self._targets))
        found.sort(key=lambda t: t.interval)
        return found
