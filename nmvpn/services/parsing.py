"""Parsing of terse ``nmcli`` listings.

Terse mode prints one record per line with fields separated by ``:``.
Colons and backslashes inside a value are escaped with a backslash.
"""

import re

from nmvpn.core.models import ConnectionEntry

_ESCAPE = re.compile(r"\\(.)")


def split_terse_line(line: str) -> list[str]:
    """Split one terse line into unescaped fields."""
    fields = []
    start = 0
    i = 0
    while i < len(line):
        char = line[i]
        if char == "\\":
            i += 2
            continue
        if char == ":":
            fields.append(line[start:i])
            start = i + 1
        i += 1
    fields.append(line[start:])
    return [_ESCAPE.sub(r"\1", field) for field in fields]


def parse_entries(output: str) -> list[ConnectionEntry]:
    """
    Parse a ``NAME,TYPE`` listing into connection entries.

    Lines without at least two fields or with an empty name are skipped,
    so unknown record shapes never raise.

    Args:
        output: Raw listing output

    Returns:
        Entries in listing order
    """
    entries = []
    for line in output.splitlines():
        line = line.strip()
        if not line:
            continue
        fields = split_terse_line(line)
        if len(fields) < 2 or not fields[0]:
            continue
        entries.append(ConnectionEntry(name=fields[0], kind=fields[1]))
    return entries
