# src/bedanno/annotation/__init__.py

from .sync import PeekableCursor, ContigBlock, ContigSynchronizer
from .sweep import find_overlaps
from .rank import rank_key, resolve_best, resolve_all
from .emit import PLACEHOLDER, annotation_name, emit_contig
from .pipeline import (
    ContigStats,
    annotate_streams,
    summary_frame,
    write_summary,
    annotate_paths,
    annotate_cmd,
)
