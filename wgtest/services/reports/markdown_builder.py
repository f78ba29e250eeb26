# wgtest/services/reports/markdown_builder.py
from __future__ import annotations

"""
Markdown summary of a batch run.

This module is pure and side-effect free: it takes a BatchResult and
returns a markdown string. The runner decides where it is written.
"""

from collections import Counter
from datetime import datetime

from wgtest.schemas import BatchResult, Verdict


def _format_dt(dt: datetime | None) -> str:
    if not dt:
        return "-"
    return dt.strftime("%Y-%m-%d %H:%M:%S UTC")


def _tag_counts(batch: BatchResult) -> dict[str, int]:
    counter: Counter[str] = Counter()
    for verdict in batch.failed:
        for tag in verdict.tags:
            counter[tag.value] += 1
    return dict(counter)


def _notes(verdict: Verdict) -> str:
    notes = [
        *verdict.structure_warnings,
        *verdict.inspection_errors,
        *verdict.cleanup_errors,
        *verdict.file_errors,
    ]
    return "; ".join(notes) or "-"


def build_batch_markdown(batch: BatchResult) -> str:
    lines: list[str] = []

    lines.append("# WireGuard Config Test Report")
    lines.append("")
    lines.append(f"**Source directory:** `{batch.source_dir}`")
    lines.append(f"**Working set:** `{batch.working_dir}`")
    lines.append(f"**Results log:** `{batch.log_file}`")
    lines.append(f"**Started at:** {_format_dt(batch.started_at)}")
    lines.append(f"**Finished at:** {_format_dt(batch.finished_at)}")
    lines.append("")

    lines.append("## Summary")
    lines.append("")
    lines.append(f"- **Configs tested:** {len(batch.verdicts)}")
    lines.append(f"- **Passed:** {len(batch.passed)}")
    lines.append(f"- **Failed:** {len(batch.failed)}")
    tag_counts = _tag_counts(batch)
    if tag_counts:
        lines.append("- **Failures by diagnostic:**")
        for tag, count in sorted(tag_counts.items()):
            lines.append(f"  - {tag}: {count}")
    lines.append("")

    lines.append("## Configs")
    lines.append("")
    if not batch.verdicts:
        lines.append("_No configuration files were found._")
        return "\n".join(lines) + "\n"

    lines.append("| Config | Interface | Verdict | Exit Code | Tags | Failure Reason | Notes |")
    lines.append("|--------|-----------|---------|-----------|------|----------------|-------|")
    for v in batch.verdicts:
        exit_code = v.exit_code if v.exit_code is not None else "-"
        tags = ", ".join(t.value for t in v.tags) or "-"
        reason = v.failure_reason or "-"
        lines.append(
            f"| `{v.config_path}` | {v.interface_name} | {v.status.value} | {exit_code} "
            f"| {tags} | {reason} | {_notes(v)} |"
        )
    lines.append("")
    return "\n".join(lines)
