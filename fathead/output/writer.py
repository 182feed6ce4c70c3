"""Tab-separated writer for the Fathead output file."""

from __future__ import annotations

from pathlib import Path
from typing import TextIO

from ..core.types import OUTPUT_FIELDS, OutputRow


class TsvWriter:
    """Writes OutputRows as tab-separated lines.

    Values are written verbatim: no quoting and no escaping. Callers are
    expected to have flattened newlines already.

    Example:
        with TsvWriter(Path("output.txt")) as writer:
            writer.write(row)
    """

    def __init__(self, path: Path, header: bool = False):
        self.path = path
        self.header = header
        self.rows_written = 0
        self._handle: TextIO | None = None

    def __enter__(self) -> "TsvWriter":
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self._handle = self.path.open("w", encoding="utf-8", newline="\n")
        if self.header:
            self._handle.write("\t".join(OUTPUT_FIELDS) + "\n")
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if self._handle is not None:
            self._handle.close()
            self._handle = None

    def write(self, row: OutputRow) -> None:
        if self._handle is None:
            raise RuntimeError("TsvWriter must be used as a context manager")
        self._handle.write("\t".join(row.values()) + "\n")
        self.rows_written += 1
