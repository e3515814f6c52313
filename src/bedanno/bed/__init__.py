# src/bedanno/bed/__init__.py
from .io import (
    QueryRecord,
    open_maybe_gzip,
    open_output,
    close_unless_std,
    numbered_lines,
    read_bed_records,
    write_bed_row,
)
