from __future__ import annotations


class CompressionError(Exception):
    """Fatal error: stops the whole batch."""


class CompressorFailed(CompressionError):
    """xz could not be run or exited non-zero (disk full, artifact exists, ...)."""

    def __init__(self, message: str, returncode: int = 1, output: str = ""):
        super().__init__(message)
        self.returncode = returncode
        self.output = output


class OutputParseError(CompressionError):
    """xz output did not contain a summary line we understand."""

    def __init__(self, message: str, raw: str = ""):
        super().__init__(message)
        self.raw = raw
