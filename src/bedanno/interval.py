# src/bedanno/interval.py
from __future__ import annotations
from dataclasses import dataclass


@dataclass(frozen=True, order=True)
class Interval:
    """Half-open [start, end) range; ordered by (start, end)."""
    start: int
    end: int

    def overlapping(self, other: "Interval") -> bool:
        """
        Overlap test used throughout the sweep.

        Not symmetric: the second clause compares against self.end inclusively,
        so self touching other at self.end == other.start counts as overlapping.
        """
        return (other.start <= self.start < other.end) or (self.start <= other.start <= self.end)

    def __str__(self) -> str:
        return f"[{self.start}, {self.end})"
