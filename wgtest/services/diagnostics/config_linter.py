from __future__ import annotations

"""wgtest/services/diagnostics/config_linter.py

Debug section for a single configuration file.

Collects what an operator needs to see before the activation attempt:
- the file permission line
- the contents with every PrivateKey line removed
- whether the file uses Windows line endings (and what was done about it)
- structure warnings for missing [Interface] / [Peer] sections or Address field

Structure warnings never block an activation attempt.
"""

import logging
import re
import stat
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import List

from wgtest.models import LineEndingPolicy

logger = logging.getLogger(__name__)

_ADDRESS_LINE = re.compile(r"^Address", re.MULTILINE)


@dataclass
class ConfigInspection:
    """Result of inspecting one config file."""

    path: Path
    activation_path: Path
    permissions: str
    redacted_lines: List[str] = field(default_factory=list)
    has_crlf: bool = False
    normalized: bool = False
    conversion_error: str | None = None
    structure_warnings: List[str] = field(default_factory=list)


def normalize_line_endings(data: bytes) -> bytes:
    """Convert CRLF terminators to LF, leaving every other byte untouched."""
    return data.replace(b"\r\n", b"\n")


def check_structure(text: str) -> List[str]:
    warnings: List[str] = []
    if "[Interface]" not in text:
        warnings.append("Missing [Interface] section")
    if "[Peer]" not in text:
        warnings.append("Missing [Peer] section")
    if not _ADDRESS_LINE.search(text):
        warnings.append("Missing Address field")
    return warnings


def redact_private_keys(text: str) -> List[str]:
    return [line for line in text.splitlines() if "PrivateKey" not in line]


def describe_permissions(path: Path) -> str:
    """`ls -l` style one-liner: mode, size, mtime, path."""
    st = path.stat()
    modified = datetime.fromtimestamp(st.st_mtime).strftime("%b %d %H:%M")
    return f"{stat.filemode(st.st_mode)} {st.st_size} {modified} {path}"


def inspect_config(
    path: Path,
    *,
    policy: LineEndingPolicy = LineEndingPolicy.IN_PLACE,
    staging_dir: Path | None = None,
) -> ConfigInspection:
    """Inspect `path` and apply the line-ending policy.

    A failed conversion is recorded on the inspection and the original
    file is activated as-is.

    Raises:
        OSError: if the file cannot be stat-ed or read.
    """
    permissions = describe_permissions(path)
    data = path.read_bytes()
    has_crlf = b"\r\n" in data

    activation_path = path
    normalized = False
    conversion_error: str | None = None
    if has_crlf and policy is LineEndingPolicy.STAGED_COPY and staging_dir is None:
        raise ValueError("staging_dir is required for the staged_copy policy")
    if has_crlf and policy is not LineEndingPolicy.OFF:
        converted = normalize_line_endings(data)
        # Same file name, so wg-quick derives the same interface name.
        target = path if policy is LineEndingPolicy.IN_PLACE else staging_dir / path.name
        try:
            target.write_bytes(converted)
        except OSError as exc:
            conversion_error = f"could not convert line endings of {path}: {exc}"
            logger.warning("%s", conversion_error)
        else:
            data = converted
            activation_path = target
            normalized = True

    text = data.decode("utf-8", errors="replace")
    inspection = ConfigInspection(
        path=path,
        activation_path=activation_path,
        permissions=permissions,
        redacted_lines=redact_private_keys(text),
        has_crlf=has_crlf,
        normalized=normalized,
        conversion_error=conversion_error,
        structure_warnings=check_structure(text),
    )
    if inspection.structure_warnings:
        logger.debug("%s: %s", path, "; ".join(inspection.structure_warnings))
    return inspection


def format_inspection(inspection: ConfigInspection) -> List[str]:
    """Render the debug section written to the results log."""
    lines: List[str] = [f"=== Debugging Config: {inspection.path} ==="]
    lines.append("File permissions:")
    lines.append(inspection.permissions)
    lines.append("")
    lines.append("Config file contents (excluding private keys):")
    lines.extend(inspection.redacted_lines)

    if inspection.has_crlf:
        lines.append("")
        if inspection.normalized and inspection.activation_path == inspection.path:
            lines.append("Warning: File has Windows-style line endings. Converting...")
        elif inspection.normalized:
            lines.append(
                "Warning: File has Windows-style line endings. "
                f"Testing a converted copy: {inspection.activation_path}"
            )
        else:
            lines.append("Warning: File has Windows-style line endings.")
        if inspection.conversion_error:
            lines.append(f"Warning: {inspection.conversion_error}")

    lines.append("")
    lines.append("Checking config structure:")
    for warning in inspection.structure_warnings:
        lines.append(f"Warning: {warning}")
    return lines
