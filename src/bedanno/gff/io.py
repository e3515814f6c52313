# src/bedanno/gff/io.py
from __future__ import annotations
import os
from dataclasses import dataclass, field
from typing import Dict, Iterable, Iterator, Optional, Tuple

from ..bed.io import numbered_lines
from ..errors import BedannoError, MalformedAttribute, ParseError
from ..interval import Interval
from .attributes import parse_attributes

GENOME_ALIASES: Dict[str, str] = {
    "hg38": os.path.join("hg38", "gencode.v43.basic.annotation.gtf.gz"),
}

_FORMAT_BY_SUFFIX = {
    ".gff": "gff3",
    ".gff3": "gff3",
    ".gff2": "gff2",
    ".gtf": "gtf",
}


@dataclass
class Target:
    """One annotation feature; `interval` is already 0-based half-open."""
    contig: str
    interval: Interval
    feature_type: str
    attributes: Dict[str, str]
    line: int = 0
    # filled lazily by the rank resolver
    rank_fields: Optional[Tuple[int, ...]] = field(default=None, init=False, repr=False, compare=False)


# -------- reference resolution --------

def resolve_annotation_path(name: str, data_dir: str = "data") -> str:
    """Map a genome alias (e.g. 'hg38') to its annotation file; other names pass through."""
    rel = GENOME_ALIASES.get(name)
    if rel is None:
        return name
    return os.path.join(data_dir, rel)

def detect_annotation_format(path: str) -> str:
    """Return 'gff3', 'gff2' or 'gtf' from the file name (a trailing .gz is ignored)."""
    p = path[:-3] if path.endswith(".gz") else path
    for suffix, fmt in _FORMAT_BY_SUFFIX.items():
        if p.endswith(suffix):
            return fmt
    raise BedannoError(f"Reference must be a GFF or GTF file, or a genome alias ({', '.join(GENOME_ALIASES)}): {path}")

# -------- record parsing --------

def parse_gff_line(line: str, ln: int) -> Target:
    parts = line.rstrip("\r\n").split("\t")
    if len(parts) != 9:
        raise ParseError(ln, f"expected 9 tab-separated columns, got {len(parts)}", "GFF")
    seqid, _source, ftype, start_s, end_s, _score, _strand, _phase, attrs = parts
    try:
        start = int(start_s)
        end = int(end_s)
    except ValueError:
        raise ParseError(ln, f"non-integer coordinates {start_s!r}-{end_s!r}", "GFF") from None
    if start < 1:
        raise ParseError(ln, f"start {start} is not a 1-based coordinate", "GFF")
    if start - 1 > end:
        raise ParseError(ln, f"start {start} is past end {end}", "GFF")
    if attrs.strip() == ".":
        # GFF3 placeholder for an empty attribute column
        attributes: Dict[str, str] = {}
    else:
        try:
            attributes = parse_attributes(attrs)
        except MalformedAttribute as e:
            raise MalformedAttribute(ln, e.fragment, "GFF") from None
    return Target(seqid, Interval(start - 1, end), ftype, attributes, ln)

def read_gff_records(lines: Iterable[str]) -> Iterator[Target]:
    """
    Lazily parse GFF3/GTF/GFF2 lines into Target records.
    Comment and directive lines are skipped; '##FASTA' ends the feature section.
    """
    for ln, line in numbered_lines(lines, "GFF"):
        if line.startswith("#"):
            if line.startswith("##FASTA"):
                return
            continue
        if not line.strip():
            continue
        yield parse_gff_line(line, ln)
