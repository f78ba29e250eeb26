from __future__ import annotations

"""wgtest/services/tools/wireguard_tool.py

Adapter that drives real WireGuard interfaces through `wg-quick`, `wg`
and iproute2's `ip`.

The lifecycle controller only sees the narrow driver surface
(activate / deactivate / exists / status / addresses); everything it
knows about an operation is the exit status and the captured text.
"""

from pathlib import Path
from typing import List

from wgtest.config import Settings, get_settings
from wgtest.services.tools.base import ToolResult, ToolSettings, run_command


class WgQuickInterfaceDriver:
    """InterfaceDriverProtocol implementation backed by wg-quick."""

    name = "wg-quick"

    def __init__(self, settings: Settings | None = None) -> None:
        self.settings = settings or get_settings()
        # Activation may hang on DNS/resolvconf hooks; it only gets a timeout
        # when one is configured explicitly.
        self.activation_config = ToolSettings(
            timeout_seconds=self.settings.activation_timeout_seconds,
            env=dict(self.settings.command_env),
        )
        self.command_config = ToolSettings(
            timeout_seconds=self.settings.command_timeout_seconds,
            env=dict(self.settings.command_env),
        )

    def _run(self, cmd: List[str], config: ToolSettings) -> ToolResult:
        return run_command(cmd, timeout=config.timeout_seconds, env=config.env)

    def activate(self, config_path: Path) -> ToolResult:
        # wg-quick derives the interface name from the file stem.
        cmd = [self.settings.wg_quick_binary, "up", str(config_path)]
        return self._run(cmd, self.activation_config)

    def deactivate(self, interface_name: str) -> ToolResult:
        cmd = [self.settings.wg_quick_binary, "down", interface_name]
        return self._run(cmd, self.command_config)

    def exists(self, interface_name: str) -> bool:
        cmd = [self.settings.ip_binary, "link", "show", interface_name]
        return self._run(cmd, self.command_config).success

    def status(self, interface_name: str) -> ToolResult:
        cmd = [self.settings.wg_binary, "show", interface_name]
        return self._run(cmd, self.command_config)

    def addresses(self, interface_name: str) -> ToolResult:
        cmd = [self.settings.ip_binary, "addr", "show", interface_name]
        return self._run(cmd, self.command_config)
