# src/bedanno/cli.py
from __future__ import annotations
import os
import sys
import logging
import argparse

from . import __version__
from .errors import BedannoError
from .annotation.pipeline import annotate_cmd

DEFAULT_ANNOTATION = "hg38"
DEFAULT_DATA_DIR = "data"

log = logging.getLogger("bedanno")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="bedanno",
        description="bedanno: annotate BED regions with the best overlapping gene from a GFF/GTF reference"
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    sub = parser.add_subparsers(dest="cmd", required=True)

    # annotate
    p = sub.add_parser(
        "annotate",
        help="Append the gene_name of the best overlapping feature to each BED region ('.' if none)."
    )
    p.add_argument("--regions", default="-", help="Query BED file (.bed or .bed.gz), sorted within contig blocks. Default: stdin")
    p.add_argument("--annotation", default=DEFAULT_ANNOTATION,
                   help="Reference GFF3/GTF/GFF2 file (optionally .gz) or genome alias (default: hg38)")
    p.add_argument("--output", default="-", help="Output BED4 path (.gz compresses). Default: stdout")
    p.add_argument("--data-dir", default=os.environ.get("BEDANNO_DATA_DIR", DEFAULT_DATA_DIR),
                   help="Directory holding genome alias references (default: $BEDANNO_DATA_DIR or 'data')")
    p.add_argument("--summary", default=None, help="Optional per-contig summary TSV path ('-' for stdout)")
    p.add_argument("--strict-empty", action="store_true",
                   help="Fail when the regions input has no records (default: succeed with empty output)")
    g = p.add_mutually_exclusive_group()
    g.add_argument("-v", "--verbose", action="store_true", help="Log per-contig details")
    g.add_argument("-q", "--quiet", action="store_true", help="Only log warnings and errors")
    p.set_defaults(func=annotate_cmd)

    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)
    if getattr(args, "verbose", False):
        log.setLevel(logging.DEBUG)
    elif getattr(args, "quiet", False):
        log.setLevel(logging.WARNING)
    else:
        log.setLevel(logging.INFO)
    try:
        args.func(args)
    except (BedannoError, OSError) as e:
        log.error("%s", e)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
