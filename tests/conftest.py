import subprocess
from pathlib import Path

import pytest

from bfc.settings import ONE_MIB_IN_BYTES


def make_file(path: Path, size: int) -> Path:
    """Sparse file of the given size (cheap even for GiB sizes)."""
    with path.open("wb") as f:
        f.truncate(size)
    return path


class FakeXz:
    """
    Stands in for subprocess.run when the command is xz.

    Emulates a successful run: writes <path>.xz, removes the original and
    prints the verbose summary line. Set `fail_with` to simulate an error exit.
    """

    def __init__(self, ratio: float = 0.25, fail_with: str | None = None):
        self.ratio = ratio
        self.fail_with = fail_with
        self.calls: list[list[str]] = []

    def __call__(self, cmd, **kwargs):
        self.calls.append(list(cmd))
        target = Path(cmd[-1])

        if self.fail_with is not None:
            return subprocess.CompletedProcess(cmd, 1, stdout=f"xz: {target}: {self.fail_with}\n")

        size = target.stat().st_size
        compressed = int(size * self.ratio)
        make_file(Path(str(target) + ".xz"), compressed)
        target.unlink()

        line = "%s: %s KiB / %s KiB = %.3f\n" % (
            target,
            format(compressed / 1024, ",.1f"),
            format(size / 1024, ",.1f"),
            self.ratio,
        )
        return subprocess.CompletedProcess(cmd, 0, stdout=line)


@pytest.fixture
def fake_xz():
    return FakeXz()


@pytest.fixture
def big_file(tmp_path):
    return make_file(tmp_path / "big.log", 2 * ONE_MIB_IN_BYTES)
