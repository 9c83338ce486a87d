from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Iterable, List, Optional

from .eligibility import check_eligible
from .engine import compress_file
from .paths import display_path
from .results import CompressionResult
from .settings import CompressSettings


logger = logging.getLogger(__name__)


@dataclass
class BatchStatistics:
    """Running totals for one run. Only ever grows."""
    files_processed: int = 0
    total_bytes_uncompressed: int = 0
    total_bytes_compressed: int = 0

    def accumulate(self, result: CompressionResult) -> None:
        self.files_processed += 1
        self.total_bytes_uncompressed += result.bytes_uncompressed
        self.total_bytes_compressed += result.bytes_compressed

    @property
    def saved_bytes(self) -> int:
        return self.total_bytes_uncompressed - self.total_bytes_compressed


def process_paths(
    paths: Iterable[Path],
    settings: CompressSettings,
    on_result: Optional[Callable[[CompressionResult], None]] = None,
    compress: Callable[[Path, CompressSettings], CompressionResult] = compress_file,
) -> tuple[List[CompressionResult], BatchStatistics]:
    """
    Compress every eligible path, strictly in input order.

    Ineligible paths are logged and skipped. CompressionError from the
    invoker (and KeyboardInterrupt) propagate: the batch stops there.
    """
    results: List[CompressionResult] = []
    stats = BatchStatistics()

    for path in paths:
        verdict = check_eligible(path, settings)
        if not verdict.eligible:
            logger.warning("discarding %s file %s", verdict.reason, display_path(path))
            continue

        # Found a viable candidate for compression.
        r = compress(path, settings)
        results.append(r)
        stats.accumulate(r)

        if on_result:
            on_result(r)

    return results, stats
