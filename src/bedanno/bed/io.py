# src/bedanno/bed/io.py
from __future__ import annotations
import sys, gzip
from typing import IO, Iterable, Iterator, NamedTuple, Tuple

from ..errors import ParseError

_HEADER_PREFIXES = ("#", "track", "browser")


class QueryRecord(NamedTuple):
    contig: str
    start: int
    end: int
    line: int


# -------- file helpers --------

def open_maybe_gzip(path: str) -> IO[str]:
    """
    Open a UTF-8 text input; '-' is stdin, '.gz' is decompressed on the fly.
    Undecodable bytes are kept as surrogates so numbered_lines can report the line.
    """
    if path == "-":
        if hasattr(sys.stdin, "reconfigure"):
            sys.stdin.reconfigure(encoding="utf-8", errors="surrogateescape")
        return sys.stdin
    if path.endswith(".gz"):
        return gzip.open(path, "rt", encoding="utf-8", errors="surrogateescape")
    return open(path, "r", encoding="utf-8", errors="surrogateescape")

def open_output(path: str) -> IO[str]:
    """Open a text output; '-' is stdout, '.gz' is gzip-compressed."""
    if path == "-":
        return sys.stdout
    if path.endswith(".gz"):
        return gzip.open(path, "wt", encoding="utf-8", newline="\n")
    return open(path, "w", encoding="utf-8", newline="\n")

def close_unless_std(f: IO[str]) -> None:
    if f is not sys.stdin and f is not sys.stdout:
        f.close()

# -------- line iteration --------

def numbered_lines(lines: Iterable[str], source: str) -> Iterator[Tuple[int, str]]:
    """
    Yield (1-based line number, line). Bytes that are not valid UTF-8 raise
    ParseError on the line that holds them.
    """
    it = iter(lines)
    ln = 0
    while True:
        try:
            line = next(it)
        except StopIteration:
            return
        except UnicodeDecodeError:
            # strictly decoding handle: the failure belongs to the next line
            raise ParseError(ln + 1, "invalid UTF-8", source) from None
        ln += 1
        try:
            line.encode("utf-8")
        except UnicodeEncodeError:
            raise ParseError(ln, "invalid UTF-8", source) from None
        yield ln, line

# -------- BED reading / writing --------

def _parse_coord(value: str, name: str, ln: int) -> int:
    try:
        v = int(value)
    except ValueError:
        raise ParseError(ln, f"{name} {value!r} is not an integer", "BED") from None
    if v < 0:
        raise ParseError(ln, f"{name} {v} is negative", "BED")
    return v

def read_bed_records(lines: Iterable[str]) -> Iterator[QueryRecord]:
    """
    Lazily parse BED lines into QueryRecord(contig, start, end, line).
    Coordinates are 0-based half-open; columns beyond the third are ignored.
    """
    for ln, line in numbered_lines(lines, "BED"):
        s = line.rstrip("\r\n")
        if not s.strip() or s.startswith(_HEADER_PREFIXES):
            continue
        parts = s.split("\t")
        if len(parts) < 3:
            raise ParseError(ln, f"expected at least 3 tab-separated columns, got {len(parts)}", "BED")
        start = _parse_coord(parts[1], "start", ln)
        end = _parse_coord(parts[2], "end", ln)
        if start > end:
            raise ParseError(ln, f"start {start} is greater than end {end}", "BED")
        yield QueryRecord(parts[0], start, end, ln)

def write_bed_row(f: IO[str], contig: str, start: int, end: int, name: str) -> None:
    f.write(f"{contig}\t{start}\t{end}\t{name}\n")
