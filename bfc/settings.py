from __future__ import annotations

from dataclasses import dataclass


ONE_KIB_IN_BYTES = 1024
ONE_MIB_IN_BYTES = 1024**2
ONE_GIB_IN_BYTES = 1024**3


@dataclass(frozen=True)
class CompressSettings:
    """
    All user-configurable knobs for a compression run.

    Pure data (no logic) so the CLI can build it from flags and tests can
    construct it directly.
    """

    # ----- Eligibility -----
    # Files below this size are skipped by the filter and refused by the
    # invoker. The tool is meant to reclaim space from large files; reconsider
    # the xz settings before lowering this much.
    min_size_bytes: int = ONE_MIB_IN_BYTES

    # ----- xz invocation -----
    xz_path: str = "xz"
    preset: int = 9  # 0-9, higher = smaller but slower
    threads: int = 0  # 0 means one worker per available core
    extreme: bool = False  # --extreme: slower still, sometimes a bit smaller

    # Naming: xz always writes <path>.xz
    suffix: str = ".xz"

    # ----- Safety -----
    # Pause between printing the startup line and the first destructive
    # action, so an operator can still abort.
    grace_seconds: float = 10.0
