# src/bedanno/annotation/pipeline.py
from __future__ import annotations
import sys, logging
from dataclasses import dataclass, asdict
from typing import IO, Iterable, List, Optional

import pandas as pd

from ..bed.io import QueryRecord, close_unless_std, open_maybe_gzip, open_output, read_bed_records
from ..errors import BedannoError
from ..gff.io import Target, detect_annotation_format, read_gff_records, resolve_annotation_path
from .emit import emit_contig
from .rank import resolve_all
from .sweep import find_overlaps
from .sync import ContigSynchronizer

log = logging.getLogger("bedanno")
if not log.handlers:
    h = logging.StreamHandler(sys.stderr)
    h.setFormatter(logging.Formatter("[%(asctime)s] %(levelname)s: %(message)s"))
    log.addHandler(h)
log.setLevel(logging.INFO)

SUMMARY_COLUMNS = ["contig", "queries", "targets", "annotated", "unannotated", "annotated_fraction"]


@dataclass
class ContigStats:
    contig: str
    queries: int
    targets: int
    annotated: int


# -------- core run --------

def annotate_streams(
    query_records: Iterable[QueryRecord],
    target_records: Iterable[Target],
    out: IO[str],
    strict_empty: bool = False,
) -> List[ContigStats]:
    """
    Annotate every query with its best overlapping target, one contig at a time,
    writing BED4 rows (chrom, start, end, gene_name or '.') to `out`.
    """
    sync = ContigSynchronizer(query_records, target_records, strict_empty=strict_empty)
    stats: List[ContigStats] = []
    for block in sync:
        overlaps = find_overlaps(block.queries, block.targets)
        picks = resolve_all(block.queries, overlaps)
        annotated = emit_contig(out, block.contig, block.queries, picks)
        log.debug("%s: %d queries, %d targets, %d annotated",
                  block.contig, len(block.queries), len(block.targets), annotated)
        stats.append(ContigStats(block.contig, len(block.queries), len(block.targets), annotated))

    if sync.pending:
        names = sorted(sync.pending)
        preview = ", ".join(names[:6]) + (" ..." if len(names) > 6 else "")
        log.warning("Targets on %d contig(s) had no query block: %s", len(names), preview)
    return stats

# -------- summary --------

def summary_frame(stats: List[ContigStats]) -> pd.DataFrame:
    """Per-contig counts plus a TOTAL row."""
    rows = [asdict(s) for s in stats]
    rows.append({
        "contig": "TOTAL",
        "queries": sum(s.queries for s in stats),
        "targets": sum(s.targets for s in stats),
        "annotated": sum(s.annotated for s in stats),
    })
    df = pd.DataFrame(rows, columns=["contig", "queries", "targets", "annotated"])
    df["unannotated"] = df["queries"] - df["annotated"]
    frac = df["annotated"] / df["queries"].where(df["queries"] > 0)
    df["annotated_fraction"] = frac.fillna(0.0).round(4)
    return df[SUMMARY_COLUMNS]

def write_summary(stats: List[ContigStats], path: str) -> None:
    df = summary_frame(stats)
    if path == "-":
        df.to_csv(sys.stdout, sep="\t", index=False)
    else:
        df.to_csv(path, sep="\t", index=False)

# -------- library / CLI entry points --------

def annotate_paths(
    regions_path: str,
    annotation: str,
    output_path: str,
    data_dir: str = "data",
    summary_path: Optional[str] = None,
    strict_empty: bool = False,
) -> List[ContigStats]:
    """
    Library entry point: annotate a BED file (or '-') against a GFF/GTF file
    or genome alias, writing BED4 to `output_path` (or '-').
    """
    if summary_path == "-" and output_path == "-":
        raise BedannoError("--summary - and --output - would both write to stdout; send one of them to a file")
    ref_path = resolve_annotation_path(annotation, data_dir)
    fmt = detect_annotation_format(ref_path)
    log.info("Regions: %s", regions_path)
    log.info("Reference: %s (%s)", ref_path, fmt)

    qf = open_maybe_gzip(regions_path)
    try:
        tf = open_maybe_gzip(ref_path)
        try:
            out = open_output(output_path)
            try:
                stats = annotate_streams(read_bed_records(qf), read_gff_records(tf), out, strict_empty)
            finally:
                close_unless_std(out)
        finally:
            close_unless_std(tf)
    finally:
        close_unless_std(qf)

    n_q = sum(s.queries for s in stats)
    n_a = sum(s.annotated for s in stats)
    log.info("Annotated %d/%d regions across %d contig(s)", n_a, n_q, len(stats))
    if summary_path:
        write_summary(stats, summary_path)
        log.info("Summary: %s", summary_path)
    return stats

def annotate_cmd(args) -> None:
    """CLI adapter for the 'annotate' subcommand."""
    annotate_paths(
        regions_path=args.regions,
        annotation=args.annotation,
        output_path=args.output,
        data_dir=args.data_dir,
        summary_path=args.summary,
        strict_empty=args.strict_empty,
    )
