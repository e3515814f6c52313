# src/bedanno/__init__.py
"""bedanno: label genomic regions with their best overlapping gene annotation."""

__version__ = "0.1.0"

from .errors import (
    BedannoError,
    ParseError,
    MalformedAttribute,
    OutOfOrderContig,
    EmptyInput,
    OverlapInvariantError,
)
from .interval import Interval
from .annotation import annotate_paths, annotate_streams
