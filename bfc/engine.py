from __future__ import annotations

import logging
import os
import subprocess
from pathlib import Path
from typing import Callable, List, Optional

from .errors import CompressionError, CompressorFailed
from .parser import parse_xz_output
from .results import CompressionResult
from .settings import CompressSettings


logger = logging.getLogger(__name__)

Runner = Callable[..., "subprocess.CompletedProcess[str]"]


def compress_file(
    path: Path,
    settings: CompressSettings,
    run: Optional[Runner] = None,
) -> CompressionResult:
    """
    Compress `path` in place with xz and return what xz reported.

    Safe to call without running the eligibility filter first: the file and
    size checks are repeated here, and failing them is an error, not a skip.
    Any xz failure (ENOSPC, existing .xz, bad exit status) raises; retrying
    would not help.
    """
    path = Path(path)

    if not path.is_file():
        raise CompressionError(f"Not a file: {path}")

    size = _file_size(path)
    if size < settings.min_size_bytes:
        # If we're going to handle files this small, reconsider the xz
        # settings first. This tool is meant to reclaim space from big files.
        raise CompressionError(f"file too small: {path} ({size} bytes)")

    artifact = Path(str(path) + settings.suffix)
    if artifact.exists():
        raise CompressionError(f"Refusing to overwrite existing {artifact}")

    output = _run_xz(path, settings, run or subprocess.run)
    result = parse_xz_output(output, suffix=settings.suffix)

    if path.exists():
        raise CompressionError(f"xz reported success but {path} is still present")

    return result


def build_command(path: Path, settings: CompressSettings) -> List[str]:
    cmd = [
        settings.xz_path,
        f"-{settings.preset}",
        f"--threads={settings.threads}",
        "--verbose",
    ]
    if settings.extreme:
        cmd.append("--extreme")
    # argv list: no shell, so whitespace in names needs no quoting.
    # "--" keeps names starting with "-" from being read as options.
    cmd += ["--", str(path)]
    return cmd


def _run_xz(path: Path, settings: CompressSettings, run: Runner) -> str:
    cmd = build_command(path, settings)
    logger.debug("running: %s", " ".join(cmd))

    # C locale keeps the summary line in the format the parser expects.
    env = {**os.environ, "LC_ALL": "C"}

    try:
        p = run(
            cmd,
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
            encoding="utf-8",
            errors="surrogateescape",
            env=env,
            check=False,
        )
    except OSError as e:
        raise CompressorFailed(f"Could not run {settings.xz_path}: {e}") from e

    output = p.stdout or ""
    logger.debug("xz exited %d: %s", p.returncode, output.strip())

    if p.returncode != 0:
        raise CompressorFailed(
            f"xz failed on {path} (exit {p.returncode}): {output.strip()}",
            returncode=p.returncode,
            output=output,
        )
    return output


def _file_size(p: Path) -> int:
    try:
        return p.stat().st_size
    except FileNotFoundError:
        return 0
