from __future__ import annotations

import stat
from pathlib import Path

from .results import Eligibility
from .settings import CompressSettings


REASON_MISSING = "missing"
REASON_NOT_FILE = "not a regular file"
REASON_TOO_SMALL = "too small"


def check_eligible(path: Path, settings: CompressSettings) -> Eligibility:
    """
    Decide whether `path` should be handed to xz.

    Fails closed: anything that does not resolve to an existing regular file
    (dangling symlink, directory, socket, FIFO, device) is rejected.
    """
    path = Path(path)

    try:
        st = path.stat()
    except FileNotFoundError:
        return Eligibility(path, False, REASON_MISSING)
    except OSError:
        # Permission denied on a parent, name too long, symlink loop...
        return Eligibility(path, False, REASON_NOT_FILE)

    if not stat.S_ISREG(st.st_mode):
        return Eligibility(path, False, REASON_NOT_FILE)

    if st.st_size < settings.min_size_bytes:
        return Eligibility(path, False, REASON_TOO_SMALL)

    return Eligibility(path, True)
