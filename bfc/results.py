from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional


@dataclass(frozen=True)
class CompressionResult:
    """
    Outcome of compressing a single file, as reported by xz.

    Built once from the parsed summary line and then only read by the
    accumulator and the reporters.
    """
    bytes_compressed: int
    bytes_uncompressed: int
    compression_ratio: float  # compressed / uncompressed, lower is better
    path_compressed: Path
    path_uncompressed: Path

    @property
    def saved_bytes(self) -> int:
        # Negative when xz expanded the file. Rare, still reported.
        return self.bytes_uncompressed - self.bytes_compressed

    @property
    def saved_percent(self) -> float:
        if self.bytes_uncompressed <= 0:
            return 0.0
        return (self.saved_bytes / self.bytes_uncompressed) * 100.0


@dataclass(frozen=True)
class Eligibility:
    path: Path
    eligible: bool
    reason: Optional[str] = None  # None when eligible
