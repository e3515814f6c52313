# src/bedanno/gff/__init__.py
from .attributes import parse_attributes
from .io import (
    GENOME_ALIASES,
    Target,
    detect_annotation_format,
    parse_gff_line,
    read_gff_records,
    resolve_annotation_path,
)
