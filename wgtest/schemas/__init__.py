# wgtest/schemas/__init__.py
from __future__ import annotations

"""
Pydantic schemas for the records a test run produces.

This module depends on:
- wgtest.models.VerdictStatus
- wgtest.models.DiagnosticTag

It is used by:
- the lifecycle controller (builds a Verdict per configuration)
- the batch runner (aggregates a BatchResult and writes it as JSON)
- the markdown report builder
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from wgtest.models import DiagnosticTag, VerdictStatus


# ---------- Verdict ----------


class Verdict(BaseModel):
    """
    Outcome of testing one configuration.

    Only `status` decides pass/fail. The error lists are observational:
    structure warnings, inspection and cleanup problems are recorded here
    but never flip a SUCCESS into a FAILURE.
    """

    config_path: str
    interface_name: str
    status: VerdictStatus
    tags: List[DiagnosticTag] = Field(default_factory=list)
    raw_text: str = ""
    exit_code: Optional[int] = None
    failure_reason: Optional[str] = None
    structure_warnings: List[str] = Field(default_factory=list)
    inspection_errors: List[str] = Field(default_factory=list)
    cleanup_errors: List[str] = Field(default_factory=list)
    file_errors: List[str] = Field(default_factory=list)
    working_copy: Optional[str] = None
    started_at: Optional[datetime] = None
    finished_at: Optional[datetime] = None
    duration_seconds: Optional[float] = None

    @property
    def succeeded(self) -> bool:
        return self.status is VerdictStatus.SUCCESS


# ---------- Batch ----------


class BatchResult(BaseModel):
    """Ordered, append-only record of one batch run."""

    source_dir: str
    working_dir: str
    log_file: str
    started_at: datetime
    finished_at: Optional[datetime] = None
    verdicts: List[Verdict] = Field(default_factory=list)

    @property
    def passed(self) -> List[Verdict]:
        return [v for v in self.verdicts if v.succeeded]

    @property
    def failed(self) -> List[Verdict]:
        return [v for v in self.verdicts if not v.succeeded]

    @property
    def all_passed(self) -> bool:
        return not self.failed
