"""
Parse the summary line `xz --verbose` prints when stderr is not a terminal.

Sample output:
    /tmp/big-grid.xml: 453.4 KiB / 2,585.8 KiB = 0.175
Newer xz releases append throughput and elapsed time:
    /tmp/big-grid.xml: 453.4 KiB / 2,585.8 KiB = 0.175, 12 MiB/s, 0:02

This is the only place that knows xz's text format.
"""
from __future__ import annotations

import re
from decimal import Decimal, InvalidOperation
from pathlib import Path

from .errors import OutputParseError
from .results import CompressionResult


UNIT_BYTES = {
    "B": 1,
    "KiB": 1024,
    "MiB": 1024**2,
    "GiB": 1024**3,
    "TiB": 1024**4,
}

_NUMBER = r"[0-9][0-9,]*(?:\.[0-9]+)?"

# Greedy path group: a file name may itself contain ": ".
_SUMMARY_RE = re.compile(
    r"^(?P<path>.+):\s+"
    rf"(?P<csize>{_NUMBER})\s+(?P<cunit>\S+)\s+/\s+"
    rf"(?P<usize>{_NUMBER})\s+(?P<uunit>\S+)\s+=\s+"
    r"(?P<ratio>[^\s,]+)"
)


def parse_xz_output(raw: str, suffix: str = ".xz") -> CompressionResult:
    """
    Turn xz's combined output into a CompressionResult.

    The last matching line wins. Anything unexpected raises OutputParseError
    instead of producing zeroed statistics.
    """
    match = None
    for line in raw.splitlines():
        # rstrip only: leading spaces can belong to the file name
        m = _SUMMARY_RE.match(line.rstrip())
        if m:
            match = m

    if match is None:
        raise OutputParseError(f"Unrecognized xz output: {raw.strip()!r}", raw=raw)

    bytes_compressed = _to_bytes(match.group("csize"), match.group("cunit"), raw)
    bytes_uncompressed = _to_bytes(match.group("usize"), match.group("uunit"), raw)

    try:
        ratio = float(match.group("ratio"))
    except ValueError:
        raise OutputParseError(f"Bad compression ratio {match.group('ratio')!r}", raw=raw) from None

    path_uncompressed = Path(match.group("path"))
    path_compressed = Path(str(path_uncompressed) + suffix)

    return CompressionResult(
        bytes_compressed=bytes_compressed,
        bytes_uncompressed=bytes_uncompressed,
        compression_ratio=ratio,
        path_compressed=path_compressed,
        path_uncompressed=path_uncompressed,
    )


def _to_bytes(size: str, unit: str, raw: str) -> int:
    multiplier = UNIT_BYTES.get(unit)
    if multiplier is None:
        raise OutputParseError(f"Unknown size unit {unit!r}", raw=raw)
    try:
        value = Decimal(size.replace(",", ""))
    except InvalidOperation:
        raise OutputParseError(f"Bad size {size!r}", raw=raw) from None
    # int() truncates toward zero: 2,585.8 KiB -> 2647859 bytes
    return int(value * multiplier)
