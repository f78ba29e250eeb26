from __future__ import annotations

"""wgtest/services/tester/lifecycle.py

Interface lifecycle controller.

Drives one configuration through

    IDLE -> PRE_CLEANUP -> ACTIVATING -> (ACTIVE | ACTIVATION_FAILED)
         -> [INSPECTING] -> POST_CLEANUP -> DONE

and returns a Verdict. Only the activation exit status decides the
verdict; pre-cleanup, inspection and post-cleanup problems are logged and
recorded on the verdict without changing it.

Post-cleanup runs in a `finally` block, so no interface is left up after a
test regardless of how the test ended.
"""

import logging
import time
from datetime import datetime
from pathlib import Path
from typing import TYPE_CHECKING, Callable, List, Protocol

from wgtest.models import LifecycleState, VerdictStatus
from wgtest.schemas import Verdict
from wgtest.services.diagnostics.error_classifier import (
    classify_activation_failure,
    describe_tag,
)

if TYPE_CHECKING:
    from wgtest.services.tools.base import ToolResult

logger = logging.getLogger(__name__)

Emit = Callable[[str], None]


class InterfaceDriverProtocol(Protocol):
    """Narrow surface over the external interface tools."""

    name: str

    def activate(self, config_path: Path) -> "ToolResult":
        """Bring `config_path` up as an interface named after its stem."""
        ...

    def deactivate(self, interface_name: str) -> "ToolResult":
        ...

    def exists(self, interface_name: str) -> bool:
        ...

    def status(self, interface_name: str) -> "ToolResult":
        ...

    def addresses(self, interface_name: str) -> "ToolResult":
        ...


def interface_name_for(config_path: Path) -> str:
    """Interface name derived from a config path (its stem)."""
    return config_path.stem


def _emit_block(emit: Emit, text: str) -> None:
    for line in text.rstrip("\n").splitlines():
        emit(line)


class InterfaceLifecycleController:
    """Runs the cleanup -> activate -> inspect -> cleanup cycle for one config.

    Not reentrant: a controller tests one configuration at a time, and the
    batch runner never runs two controllers concurrently.
    """

    def __init__(
        self,
        driver: InterfaceDriverProtocol,
        *,
        settle_delay_seconds: float = 2.0,
        sleep: Callable[[float], None] = time.sleep,
        emit: Emit | None = None,
    ) -> None:
        self.driver = driver
        self.settle_delay_seconds = settle_delay_seconds
        self._sleep = sleep
        self._emit: Emit = emit or (lambda line: logger.info("%s", line))
        self.state = LifecycleState.IDLE
        self.history: List[LifecycleState] = [LifecycleState.IDLE]

    def _transition(self, state: LifecycleState) -> None:
        logger.debug("lifecycle: %s -> %s", self.state.value, state.value)
        self.state = state
        self.history.append(state)

    def _reset(self) -> None:
        self.state = LifecycleState.IDLE
        self.history = [LifecycleState.IDLE]

    # ---- phases ----

    def _pre_cleanup(self, name: str, cleanup_errors: List[str]) -> None:
        self._transition(LifecycleState.PRE_CLEANUP)
        if not self.driver.exists(name):
            return

        self._emit("Interface already exists, cleaning up...")
        result = self.driver.deactivate(name)
        _emit_block(self._emit, result.text)
        if not result.success:
            message = f"pre-cleanup of {name} failed (exit {result.return_code})"
            logger.warning("%s", message)
            cleanup_errors.append(message)
        self._sleep(self.settle_delay_seconds)

    def _activate(self, config_path: Path, verdict_kwargs: dict) -> bool:
        self._transition(LifecycleState.ACTIVATING)
        self._emit("Attempting to bring up interface...")
        result = self.driver.activate(config_path)
        text = result.text
        verdict_kwargs["exit_code"] = result.return_code
        verdict_kwargs["raw_text"] = text

        if result.success:
            self._transition(LifecycleState.ACTIVE)
            return True

        self._transition(LifecycleState.ACTIVATION_FAILED)
        self._emit("Failed to bring up interface. Error output:")
        _emit_block(self._emit, text)
        tags = classify_activation_failure(text)
        for tag in tags:
            self._emit(f"Issue detected: {describe_tag(tag)}")
        verdict_kwargs["tags"] = tags
        verdict_kwargs["failure_reason"] = result.failure_reason or "activation-non-zero-exit"
        return False

    def _inspect(self, name: str, inspection_errors: List[str]) -> None:
        self._transition(LifecycleState.INSPECTING)
        self._emit("")
        self._emit("Interface details:")
        for label, query in (("status", self.driver.status), ("addresses", self.driver.addresses)):
            result = query(name)
            _emit_block(self._emit, result.text)
            if not result.success:
                message = f"{label} query for {name} failed (exit {result.return_code})"
                logger.warning("%s", message)
                inspection_errors.append(message)

    def _post_cleanup(self, name: str, cleanup_errors: List[str]) -> None:
        self._transition(LifecycleState.POST_CLEANUP)
        if not self.driver.exists(name):
            return
        result = self.driver.deactivate(name)
        _emit_block(self._emit, result.text)
        if not result.success:
            message = f"post-cleanup of {name} failed (exit {result.return_code})"
            logger.warning("%s", message)
            cleanup_errors.append(message)

    # ---- entrypoint ----

    def test(self, config_path: Path, *, activation_path: Path | None = None) -> Verdict:
        """Test one configuration and return its Verdict.

        `activation_path` lets the caller activate a staged copy of the
        config; it must share the file name of `config_path`.
        """
        self._reset()
        name = interface_name_for(config_path)
        cleanup_errors: List[str] = []
        inspection_errors: List[str] = []
        verdict_kwargs: dict = {}
        started_at = datetime.utcnow()

        self._emit(f"=== Testing Interface: {name} ===")
        activated = False
        try:
            try:
                self._pre_cleanup(name, cleanup_errors)
            except Exception as exc:  # noqa: BLE001
                # Pre-cleanup never blocks the activation attempt.
                message = f"pre-cleanup of {name} raised: {exc}"
                logger.warning("%s", message)
                cleanup_errors.append(message)

            activated = self._activate(activation_path or config_path, verdict_kwargs)

            if activated:
                try:
                    self._inspect(name, inspection_errors)
                except Exception as exc:  # noqa: BLE001
                    message = f"inspection of {name} raised: {exc}"
                    logger.warning("%s", message)
                    inspection_errors.append(message)
        finally:
            try:
                self._post_cleanup(name, cleanup_errors)
            except Exception as exc:  # noqa: BLE001
                message = f"post-cleanup of {name} raised: {exc}"
                logger.warning("%s", message)
                cleanup_errors.append(message)
            self._transition(LifecycleState.DONE)

        finished_at = datetime.utcnow()
        return Verdict(
            config_path=str(config_path),
            interface_name=name,
            status=VerdictStatus.SUCCESS if activated else VerdictStatus.FAILURE,
            cleanup_errors=cleanup_errors,
            inspection_errors=inspection_errors,
            started_at=started_at,
            finished_at=finished_at,
            duration_seconds=(finished_at - started_at).total_seconds(),
            **verdict_kwargs,
        )
