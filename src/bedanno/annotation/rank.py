# src/bedanno/annotation/rank.py
from __future__ import annotations
from typing import Dict, List, Optional, Sequence, Tuple

from ..errors import OverlapInvariantError
from ..gff.io import Target
from ..interval import Interval

UNRANKED = 255

FEATURE_TYPE_ORDER = ("CDS", "stop_codon", "start_codon", "UTR", "exon", "transcript", "gene")
TSL_ORDER = ("1", "2", "3", "4", "5", "NA")

_FEATURE_RANK: Dict[str, int] = {t: i for i, t in enumerate(FEATURE_TYPE_ORDER)}
_TSL_RANK: Dict[str, int] = {t: i for i, t in enumerate(TSL_ORDER)}

RankKey = Tuple[int, int, int, int, int, int]


def feature_type_rank(feature_type: str) -> int:
    return _FEATURE_RANK.get(feature_type, UNRANKED)

def mane_rank(attributes: Dict[str, str]) -> int:
    return 0 if attributes.get("tag") == "MANE_Select" else UNRANKED

def tsl_rank(attributes: Dict[str, str]) -> int:
    return _TSL_RANK.get(attributes.get("transcript_support_level", ""), UNRANKED)

def level_rank(attributes: Dict[str, str]) -> int:
    v = attributes.get("level", "")
    return int(v) if v.isdecimal() else UNRANKED

def coding_rank(attributes: Dict[str, str]) -> int:
    return 0 if attributes.get("transcript_type") == "protein_coding" else UNRANKED

def overlap_extent(q: Interval, t: Interval) -> int:
    """One-sided extent: from the later start to the end of the other interval."""
    if q.start < t.start:
        return q.end - t.start
    return t.end - q.start

def target_rank_fields(target: Target) -> Tuple[int, ...]:
    """Attribute-derived ranks of a target, computed once and cached on it."""
    if target.rank_fields is None:
        a = target.attributes
        target.rank_fields = (
            feature_type_rank(target.feature_type),
            mane_rank(a),
            tsl_rank(a),
            level_rank(a),
            coding_rank(a),
        )
    return target.rank_fields

def rank_key(q: Interval, target: Target) -> RankKey:
    """Ascending sort key; the lowest key is the best annotation for `q`."""
    return target_rank_fields(target) + (overlap_extent(q, target.interval),)  # type: ignore[return-value]

def resolve_best(q: Interval, overlaps: Sequence[Target]) -> Optional[Target]:
    """
    Pick the single best target for a query, or None if nothing overlaps.
    Ties on the full key go to the earliest target in `overlaps`.
    """
    for t in overlaps:
        # the sweep collects with t.overlapping(q) and carries with q.overlapping(t)
        if not (q.overlapping(t.interval) or t.interval.overlapping(q)):
            raise OverlapInvariantError(
                f"target {t.contig}:{t.interval} (line {t.line}) reached ranking without overlapping query {q}"
            )
    if not overlaps:
        return None
    return min(overlaps, key=lambda t: rank_key(q, t))

def resolve_all(queries: Sequence[Interval], overlaps: Sequence[Sequence[Target]]) -> List[Optional[Target]]:
    return [resolve_best(q, ts) for q, ts in zip(queries, overlaps)]
