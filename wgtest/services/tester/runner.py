from __future__ import annotations

"""wgtest/services/tester/runner.py

Batch runner orchestration.

Responsibilities:
- Enumerate `*.conf` files directly under the source directory
- Write the debug section for each config to the results log
- Drive each config through InterfaceLifecycleController, one at a time
- Copy configs that passed into the working-set directory
- Persist the BatchResult as JSON and a markdown summary

Configs are processed strictly sequentially: each test owns the interface
named after the config and the routing table while it runs.
"""

import logging
import os
import shutil
import tempfile
import time
from contextlib import ExitStack
from datetime import datetime
from pathlib import Path
from typing import IO, Callable, List

from wgtest.config import Settings, get_settings
from wgtest.models import LineEndingPolicy, VerdictStatus
from wgtest.schemas import BatchResult, Verdict
from wgtest.services.diagnostics.config_linter import format_inspection, inspect_config
from wgtest.services.reports.markdown_builder import build_batch_markdown
from wgtest.services.tester.lifecycle import (
    InterfaceDriverProtocol,
    InterfaceLifecycleController,
    interface_name_for,
)
from wgtest.services.tester.results_log import (
    RECORD_SEPARATOR,
    SECTION_SEPARATOR,
    ResultsLog,
)
from wgtest.services.tester.workspace import RunLayout

logger = logging.getLogger(__name__)

CONFIG_SUFFIX = ".conf"


def discover_configs(source_dir: Path) -> List[Path]:
    """Regular `*.conf` files directly under `source_dir`, sorted by name.

    Subdirectories are not descended into and symlinks are skipped.
    """
    found: List[Path] = []
    with os.scandir(source_dir) as entries:
        for entry in entries:
            if entry.name.endswith(CONFIG_SUFFIX) and entry.is_file(follow_symlinks=False):
                found.append(Path(entry.path))
    return sorted(found, key=lambda p: p.name)


def _failure(config_path: Path, reason: str, text: str) -> Verdict:
    now = datetime.utcnow()
    return Verdict(
        config_path=str(config_path),
        interface_name=interface_name_for(config_path),
        status=VerdictStatus.FAILURE,
        raw_text=text,
        failure_reason=reason,
        started_at=now,
        finished_at=now,
        duration_seconds=0.0,
    )


class BatchRunner:
    """Tests every config in a directory and records one Verdict per config."""

    def __init__(
        self,
        layout: RunLayout,
        driver: InterfaceDriverProtocol,
        *,
        settings: Settings | None = None,
        sleep: Callable[[float], None] = time.sleep,
        console: IO[str] | None = None,
    ) -> None:
        self.layout = layout
        self.driver = driver
        self.settings = settings or get_settings()
        self._sleep = sleep
        self._console = console

    def run(self) -> BatchResult:
        """Run the whole batch. Only I/O errors on the layout itself propagate."""
        self.layout.ensure_created()
        batch = BatchResult(
            source_dir=str(self.layout.source_dir),
            working_dir=str(self.layout.working_dir),
            log_file=str(self.layout.log_file),
            started_at=datetime.utcnow(),
        )

        configs = discover_configs(self.layout.source_dir)
        logger.info(
            "found %d config(s) in %s, testing with the %s driver",
            len(configs),
            self.layout.source_dir,
            self.driver.name,
        )

        with ExitStack() as stack:
            log = stack.enter_context(ResultsLog(self.layout.log_file, console=self._console))
            staging_dir: Path | None = None
            if self.settings.line_ending_policy is LineEndingPolicy.STAGED_COPY:
                staging_dir = Path(stack.enter_context(tempfile.TemporaryDirectory(prefix="wgtest-")))

            controller = InterfaceLifecycleController(
                self.driver,
                settle_delay_seconds=self.settings.settle_delay_seconds,
                sleep=self._sleep,
                emit=log.write,
            )
            for config_path in configs:
                batch.verdicts.append(
                    self._process(config_path, log=log, controller=controller, staging_dir=staging_dir)
                )

        batch.finished_at = datetime.utcnow()
        self._persist(batch)
        logger.info(
            "tested %d config(s): %d passed, %d failed",
            len(batch.verdicts),
            len(batch.passed),
            len(batch.failed),
        )
        return batch

    def _process(
        self,
        config_path: Path,
        *,
        log: ResultsLog,
        controller: InterfaceLifecycleController,
        staging_dir: Path | None,
    ) -> Verdict:
        log.write(SECTION_SEPARATOR)
        log.write(f"Processing: {config_path}")

        try:
            inspection = inspect_config(
                config_path,
                policy=self.settings.line_ending_policy,
                staging_dir=staging_dir,
            )
        except OSError as exc:
            log.write(f"Error: cannot read config {config_path}: {exc}")
            verdict = _failure(config_path, "config-read-error", str(exc))
        else:
            log.write_lines(format_inspection(inspection))
            try:
                verdict = controller.test(config_path, activation_path=inspection.activation_path)
            except Exception as exc:  # noqa: BLE001
                # Convert anything unexpected into a FAILED verdict for this config only.
                logger.exception("testing %s raised", config_path)
                log.write(f"Error: testing {config_path} raised: {exc}")
                verdict = _failure(config_path, "runner-exception", str(exc))
            verdict.structure_warnings = list(inspection.structure_warnings)
            if inspection.conversion_error:
                verdict.file_errors.append(inspection.conversion_error)

        if verdict.succeeded:
            log.write("SUCCESS: Config works")
            verdict.working_copy = self._copy_to_working_set(config_path, log=log, verdict=verdict)
        else:
            log.write("FAILED: Config does not work")

        log.write(RECORD_SEPARATOR)
        return verdict

    def _copy_to_working_set(self, config_path: Path, *, log: ResultsLog, verdict: Verdict) -> str | None:
        destination = self.layout.working_dir / config_path.name
        try:
            shutil.copyfile(config_path, destination)
        except OSError as exc:
            message = f"could not copy {config_path} to {destination}: {exc}"
            logger.error("%s", message)
            log.write(f"Error: {message}")
            verdict.file_errors.append(message)
            return None
        return str(destination)

    def _persist(self, batch: BatchResult) -> None:
        if self.layout.summary_file is not None:
            self.layout.summary_file.write_text(batch.model_dump_json(indent=2), encoding="utf-8")
        if self.layout.report_file is not None:
            self.layout.report_file.write_text(build_batch_markdown(batch), encoding="utf-8")
