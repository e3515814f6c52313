# src/bedanno/annotation/emit.py
from __future__ import annotations
from typing import IO, Optional, Sequence

from ..bed.io import write_bed_row
from ..gff.io import Target
from ..interval import Interval

PLACEHOLDER = "."


def annotation_name(target: Optional[Target]) -> str:
    """gene_name of the chosen target, or '.' when there is none."""
    if target is None:
        return PLACEHOLDER
    return target.attributes.get("gene_name", PLACEHOLDER)

def emit_contig(
    f: IO[str],
    contig: str,
    queries: Sequence[Interval],
    picks: Sequence[Optional[Target]],
) -> int:
    """Write one BED4 row per query in order; returns the number annotated."""
    annotated = 0
    for q, t in zip(queries, picks):
        if t is not None:
            annotated += 1
        write_bed_row(f, contig, q.start, q.end, annotation_name(t))
    return annotated
