from __future__ import annotations

"""wgtest/services/tester/preflight.py

Checks that must hold before any configuration is tested. A failure here
aborts the whole run; every later problem is scoped to one configuration.
"""

import os
import shutil
from typing import Callable

from wgtest.config import Settings


class PreconditionError(RuntimeError):
    """The run cannot start: missing privilege or a missing external tool."""


def _current_euid() -> int:
    return os.geteuid()


def check_preconditions(
    settings: Settings,
    *,
    euid: Callable[[], int] = _current_euid,
    which: Callable[[str], str | None] = shutil.which,
) -> None:
    """
    Raise PreconditionError unless the run can bring interfaces up.

    Requires root (unless `settings.require_root` is off) and the wg,
    wg-quick and ip binaries on PATH.
    """
    if settings.require_root and euid() != 0:
        raise PreconditionError("Please run as root (sudo)")

    if which(settings.wg_binary) is None:
        raise PreconditionError("WireGuard is not installed. Please install it first.")

    for binary in (settings.wg_quick_binary, settings.ip_binary):
        if which(binary) is None:
            raise PreconditionError(f"Required tool '{binary}' was not found on PATH.")
