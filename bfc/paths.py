from __future__ import annotations

from pathlib import Path
from typing import Iterable, Iterator


def read_paths(lines: Iterable[str]) -> Iterator[Path]:
    """
    Yield one Path per input line.

    Lines are expected to be decoded with errors="surrogateescape" so that
    names which are not valid UTF-8 survive. Trailing CR/LF is stripped
    (lists produced on Windows work too) but other whitespace is kept, since
    it can be part of a file name. Blank lines are ignored.
    """
    for line in lines:
        line = line.rstrip("\r\n")
        if not line:
            continue
        yield Path(line)


def display_path(path: Path) -> str:
    """
    Printable form of a path read with surrogateescape.

    Names that are not valid UTF-8 keep their undecodable bytes as lone
    surrogates, which a strict stdout or a JSON file cannot encode.
    """
    return str(path).encode("utf-8", "surrogateescape").decode("utf-8", "replace")
