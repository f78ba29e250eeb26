# wgtest/services/tester/workspace.py
from __future__ import annotations

"""
On-disk layout for a batch run.

By default everything lives next to the configs being tested:

    <configs_dir>/
      *.conf               - configurations under test (not descended into)
      working_configs/     - copies of every configuration that passed
      test_results.log     - human-readable results log
      test_results.json    - BatchResult as JSON
      test_results.md      - markdown summary

Relative names from Settings resolve against the configs directory;
absolute ones are used as-is.
"""

from dataclasses import dataclass
from pathlib import Path

from wgtest.config import Settings, get_settings


@dataclass
class RunLayout:
    """
    Explicit paths handed to the batch runner at construction.

    The runner reads nothing from the current working directory or any
    other ambient state; everything it touches on disk is listed here.
    """

    source_dir: Path
    working_dir: Path
    log_file: Path
    summary_file: Path | None = None
    report_file: Path | None = None

    def ensure_created(self) -> None:
        """
        Create the working-set directory and the parents of result files.
        """
        self.working_dir.mkdir(parents=True, exist_ok=True)
        for path in (self.log_file, self.summary_file, self.report_file):
            if path is not None:
                path.parent.mkdir(parents=True, exist_ok=True)

    @classmethod
    def from_settings(cls, configs_dir: str | Path, settings: Settings | None = None) -> "RunLayout":
        settings = settings or get_settings()
        source_dir = Path(configs_dir)
        return cls(
            source_dir=source_dir,
            working_dir=source_dir / settings.working_dir_name,
            log_file=source_dir / settings.log_file_name,
            summary_file=source_dir / settings.summary_file_name if settings.summary_file_name else None,
            report_file=source_dir / settings.report_file_name if settings.report_file_name else None,
        )
