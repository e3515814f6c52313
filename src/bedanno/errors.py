# src/bedanno/errors.py
from __future__ import annotations
from typing import Optional


class BedannoError(ValueError):
    """Base class for all input-level failures of an annotation run."""


class ParseError(BedannoError):
    """A query or target line could not be decoded."""

    def __init__(self, line: Optional[int], reason: str, source: str = ""):
        self.line = line
        self.reason = reason
        self.source = source
        where = f"{source} line {line}" if source else f"line {line}"
        super().__init__(f"Parsing {where}: {reason}" if line is not None else reason)


class MalformedAttribute(ParseError):
    """An attribute fragment had neither '=' nor whitespace between key and value."""

    def __init__(self, line: Optional[int], fragment: str, source: str = ""):
        self.fragment = fragment
        super().__init__(line, f"malformed attribute fragment {fragment!r}", source)


class OutOfOrderContig(BedannoError):
    """A query contig block reappeared after another contig was started."""

    def __init__(self, contig: str, line: int):
        self.contig = contig
        self.line = line
        super().__init__(f"Parsing BED line {line}: contig {contig} is out of order")


class EmptyInput(BedannoError):
    def __init__(self, message: str = "No records found in BED input"):
        super().__init__(message)


class OverlapInvariantError(RuntimeError):
    """Raised when a non-overlapping target reaches ranking (a sweep bug)."""
