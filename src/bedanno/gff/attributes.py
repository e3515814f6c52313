# src/bedanno/gff/attributes.py
from __future__ import annotations
import re
from typing import Dict, Optional

from ..errors import MalformedAttribute

# first '=' or whitespace separates key from value
_SEP = re.compile(r"[=\s]")


def _unquote(value: str) -> str:
    if len(value) >= 2 and value[0] == '"' and value[-1] == '"':
        return value[1:-1]
    return value


def parse_attributes(field: str, line: Optional[int] = None) -> Dict[str, str]:
    """
    Parse the 9th GFF/GTF column into a flat key -> value mapping.

    Both dialects are accepted in the same string:
      GTF:  gene_id "ENSG0001"; level 2;
      GFF3: ID=gene1;gene_name=ABC
    Repeated keys keep the last value. A fragment without a separator raises
    MalformedAttribute (carrying `line` when the caller knows it).
    """
    out: Dict[str, str] = {}
    for chunk in field.split(";"):
        frag = chunk.strip(" ")
        if not frag:
            continue
        m = _SEP.search(frag)
        if m is None or m.start() == 0:
            raise MalformedAttribute(line, frag)
        key = frag[:m.start()]
        value = frag[m.end():].strip()
        out[key] = _unquote(value)
    return out
