from __future__ import annotations

"""wgtest/services/tester/results_log.py

Results log: every line goes to the log file and is echoed to the console,
like piping the whole run through `tee -a`.
"""

import sys
from datetime import datetime
from pathlib import Path
from typing import IO, Iterable

SECTION_SEPARATOR = "==============================================="
RECORD_SEPARATOR = "-----------------------------------------------"


def format_header(now: datetime | None = None) -> str:
    now = now or datetime.now().astimezone()
    return f"WireGuard Config Test Results - {now.strftime('%a %b %d %H:%M:%S %Z %Y')}"


class ResultsLog:
    """Append-only, single-writer results log."""

    def __init__(self, path: Path, *, console: IO[str] | None = None) -> None:
        self.path = path
        self._console = console if console is not None else sys.stdout
        self._handle: IO[str] | None = None

    def open(self, header: str | None = None) -> "ResultsLog":
        """Truncate the log and write the run header (file only)."""
        self._handle = self.path.open("w", encoding="utf-8")
        self._handle.write((header or format_header()) + "\n")
        self._handle.flush()
        return self

    def close(self) -> None:
        if self._handle is not None:
            self._handle.close()
            self._handle = None

    def __enter__(self) -> "ResultsLog":
        if self._handle is None:
            self.open()
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def write(self, line: str = "") -> None:
        if self._handle is None:
            raise RuntimeError(f"results log {self.path} is not open")
        self._handle.write(line + "\n")
        self._handle.flush()
        print(line, file=self._console)

    def write_lines(self, lines: Iterable[str]) -> None:
        for line in lines:
            self.write(line)
