from __future__ import annotations

import argparse
import contextlib
import fileinput
import io
import logging
import math
import sys
import time
from datetime import datetime

from .batch import process_paths
from .errors import CompressionError
from .paths import display_path, read_paths
from .report import build_report, print_summary, save_report_json
from .results import CompressionResult
from .settings import CompressSettings, ONE_GIB_IN_BYTES, ONE_KIB_IN_BYTES, ONE_MIB_IN_BYTES
from .timefmt import format_duration


logger = logging.getLogger(__name__)

_SIZE_SUFFIXES = {
    "K": ONE_KIB_IN_BYTES,
    "M": ONE_MIB_IN_BYTES,
    "G": ONE_GIB_IN_BYTES,
}


def _parse_size(text: str) -> int:
    """
    Accept either:
      - "1048576"
      - "1M", "512K", "2G" (binary units; "1MiB" also works)
    """
    t = text.strip().upper()
    if t.endswith("IB"):
        t = t[:-2]
    mult = 1
    if t and t[-1] in _SIZE_SUFFIXES:
        mult = _SIZE_SUFFIXES[t[-1]]
        t = t[:-1]
    try:
        value = float(t)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid size: {text!r}") from None
    if not math.isfinite(value):
        raise argparse.ArgumentTypeError(f"invalid size: {text!r}")
    if value < 0:
        raise argparse.ArgumentTypeError("size cannot be negative")
    return int(value * mult)


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="bfc",
        description=(
            "Bulk File Compressor: read file paths (one per line) and replace "
            "each large file with a maximally compressed .xz version."
        ),
        epilog="Generate input with something like: find /ssd -type f -size +1G | bfc",
    )
    p.add_argument(
        "lists",
        nargs="*",
        help="Files containing paths, one per line (default: stdin)",
    )

    # Eligibility
    p.add_argument(
        "--min-size",
        type=_parse_size,
        default=ONE_MIB_IN_BYTES,
        help="Skip files smaller than this, e.g. 1M, 512K (default: 1M)",
    )

    # xz
    p.add_argument("--xz", default="xz", help="Path to the xz binary (default: xz in $PATH)")
    p.add_argument("--threads", type=int, default=0, help="xz worker threads, 0 = all cores (default: 0)")
    p.add_argument("--extreme", action="store_true", help="Pass --extreme to xz (slower)")

    # Safety
    p.add_argument(
        "--grace",
        type=float,
        default=10.0,
        help="Seconds to wait before the first file is touched (default: 10)",
    )

    # Output
    p.add_argument("--report", default=None, help="Also write a JSON report to this path")
    p.add_argument("-v", "--verbose", action="store_true", help="Debug logging (xz command lines and output)")
    p.add_argument("-q", "--quiet", action="store_true", help="Only log errors and skip warnings")

    return p


def _configure_logging(verbose: bool, quiet: bool) -> None:
    level = logging.INFO
    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.WARNING
    logging.basicConfig(level=level, format="%(levelname)s: %(message)s", stream=sys.stderr)


def _open_lines(lists: list[str]):
    # File names are bytes on POSIX; surrogateescape keeps names that are not
    # valid UTF-8 intact all the way to the xz argv.
    if lists:
        return fileinput.input(files=lists, encoding="utf-8", errors="surrogateescape")
    buffer = getattr(sys.stdin, "buffer", None)
    if buffer is None:
        return contextlib.nullcontext(sys.stdin)
    return contextlib.nullcontext(io.TextIOWrapper(buffer, encoding="utf-8", errors="surrogateescape"))


def _print_result(r: CompressionResult) -> None:
    print("%0.3f%%  %s" % (r.compression_ratio, display_path(r.path_uncompressed)))


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    _configure_logging(args.verbose, args.quiet)

    if not args.lists and (sys.stdin is None or sys.stdin.isatty()):
        print("bfc: stdin is a terminal or closed; pipe the paths in", file=sys.stderr)
        return 2

    settings = CompressSettings(
        min_size_bytes=args.min_size,
        xz_path=str(args.xz),
        threads=int(args.threads),
        extreme=bool(args.extreme),
        grace_seconds=max(0.0, float(args.grace)),
    )

    t_start = time.monotonic()
    print("startup at %s." % datetime.now().strftime("%Y-%m-%d %H:%M:%S"), flush=True)

    try:
        if settings.grace_seconds:
            time.sleep(settings.grace_seconds)
        with _open_lines(args.lists) as lines:
            results, stats = process_paths(read_paths(lines), settings, on_result=_print_result)
    except (CompressionError, OSError) as e:
        # OSError: unreadable list file
        logger.error("%s", e)
        return 1
    except KeyboardInterrupt:
        logger.error("interrupted")
        return 130

    elapsed = time.monotonic() - t_start
    print("Finished in %s." % format_duration(elapsed))
    print_summary(stats)

    if args.report:
        save_report_json(build_report(results, stats, elapsed), args.report)
        logger.info("Report written: %s", args.report)

    return 0
