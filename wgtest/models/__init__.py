# wgtest/models/__init__.py
from __future__ import annotations

"""
Closed vocabularies shared across the tester.

It is used by:
- wgtest.schemas (verdict and batch records)
- the diagnostics classifier (tags)
- the lifecycle controller (states)
- wgtest.config (line-ending policy)
"""

import enum


class VerdictStatus(str, enum.Enum):
    SUCCESS = "SUCCESS"
    FAILURE = "FAILURE"


class DiagnosticTag(str, enum.Enum):
    INVALID_ADDRESS = "InvalidAddress"
    NETWORK_INTERFACE_ERROR = "NetworkInterfaceError"
    PERMISSION_ERROR = "PermissionError"


class LifecycleState(str, enum.Enum):
    IDLE = "IDLE"
    PRE_CLEANUP = "PRE_CLEANUP"
    ACTIVATING = "ACTIVATING"
    ACTIVE = "ACTIVE"
    ACTIVATION_FAILED = "ACTIVATION_FAILED"
    INSPECTING = "INSPECTING"
    POST_CLEANUP = "POST_CLEANUP"
    DONE = "DONE"


class LineEndingPolicy(str, enum.Enum):
    """How configs with Windows line endings are handled before activation."""

    IN_PLACE = "in_place"  # rewrite the source file (CRLF -> LF)
    STAGED_COPY = "staged_copy"  # activate a normalized temporary copy
    OFF = "off"  # warn only
