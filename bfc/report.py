from __future__ import annotations

import json
from dataclasses import asdict, dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import List

from .batch import BatchStatistics
from .paths import display_path
from .results import CompressionResult
from .settings import ONE_GIB_IN_BYTES


def summary_lines(stats: BatchStatistics) -> List[str]:
    lines = [f"Updated {stats.files_processed:d} files."]
    if stats.files_processed == 0:
        return lines

    before = stats.total_bytes_uncompressed / ONE_GIB_IN_BYTES
    after = stats.total_bytes_compressed / ONE_GIB_IN_BYTES
    saved = stats.saved_bytes / ONE_GIB_IN_BYTES

    lines.append("GiB before: %7.1f" % before)
    lines.append("GiB after:  %7.1f" % after)
    lines.append("GiB saved:  %7.1f" % saved)
    return lines


def print_summary(stats: BatchStatistics) -> None:
    for line in summary_lines(stats):
        print(line)


@dataclass(frozen=True)
class FileReport:
    path_uncompressed: str
    path_compressed: str
    bytes_uncompressed: int
    bytes_compressed: int
    compression_ratio: float
    saved_bytes: int
    saved_percent: float


@dataclass(frozen=True)
class BatchReport:
    created_utc: str
    summary: dict
    files: List[FileReport]


def build_report(
    results: List[CompressionResult],
    stats: BatchStatistics,
    elapsed_seconds: float,
) -> BatchReport:
    created_utc = datetime.now(timezone.utc).isoformat(timespec="seconds").replace("+00:00", "Z")

    files: List[FileReport] = []
    for r in results:
        files.append(
            FileReport(
                path_uncompressed=display_path(r.path_uncompressed),
                path_compressed=display_path(r.path_compressed),
                bytes_uncompressed=r.bytes_uncompressed,
                bytes_compressed=r.bytes_compressed,
                compression_ratio=r.compression_ratio,
                saved_bytes=r.saved_bytes,
                saved_percent=round(r.saved_percent, 2),
            )
        )

    summary_dict = {
        "files_processed": stats.files_processed,
        "total_bytes_uncompressed": stats.total_bytes_uncompressed,
        "total_bytes_compressed": stats.total_bytes_compressed,
        "saved_bytes": stats.saved_bytes,
        "elapsed_seconds": round(elapsed_seconds, 1),
    }

    return BatchReport(created_utc=created_utc, summary=summary_dict, files=files)


def save_report_json(report: BatchReport, path: Path) -> None:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    with path.open("w", encoding="utf-8") as f:
        json.dump(asdict(report), f, indent=2, ensure_ascii=False)
