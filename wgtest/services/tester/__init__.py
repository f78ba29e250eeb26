# wgtest/services/tester/__init__.py
from __future__ import annotations

"""
Tester service package.

This package provides:
- The interface lifecycle controller (lifecycle.py)
- Run layout and results log helpers (workspace.py, results_log.py)
- Precondition checks (preflight.py)
- Batch orchestration (runner.py)

The real wg-quick driver lives under wgtest.services.tools and is wired
in by the CLI.
"""

from .lifecycle import InterfaceDriverProtocol, InterfaceLifecycleController  # noqa: F401
from .preflight import PreconditionError, check_preconditions  # noqa: F401
from .runner import BatchRunner, discover_configs  # noqa: F401
from .workspace import RunLayout  # noqa: F401
