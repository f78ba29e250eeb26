"""Shared fixtures: a scripted interface driver and config directories."""

from __future__ import annotations

from pathlib import Path

import pytest

from wgtest.config import Settings
from wgtest.models import LineEndingPolicy
from wgtest.services.tools.base import ToolResult

VALID_CONFIG = """[Interface]
PrivateKey = cHJpdmF0ZS1rZXktZG8tbm90LXByaW50
Address = 10.8.0.2/24
DNS = 1.1.1.1

[Peer]
PublicKey = cHVibGljLWtleQ==
Endpoint = vpn.example.com:51820
AllowedIPs = 0.0.0.0/0
"""

NO_PEER_CONFIG = """[Interface]
PrivateKey = cHJpdmF0ZS1rZXk=
Address = 10.8.0.3/24
"""


def ok(output: str = "") -> ToolResult:
    return ToolResult(success=True, output=output, return_code=0)


def fail(output: str = "", return_code: int = 1) -> ToolResult:
    return ToolResult(success=False, output=output, return_code=return_code)


class FakeInterfaceDriver:
    """In-memory stand-in for wg-quick / wg / ip.

    `activation_results` maps an interface name to the ToolResult its
    activation returns (default: success). Successful activations mark the
    interface as up; deactivation brings it down unless the name is in
    `stuck`.
    """

    name = "fake"

    def __init__(
        self,
        *,
        activation_results: dict[str, ToolResult] | None = None,
        existing: set[str] | None = None,
        stuck: set[str] | None = None,
        status_result: ToolResult | None = None,
        addresses_result: ToolResult | None = None,
    ) -> None:
        self.activation_results = activation_results or {}
        self.up: set[str] = set(existing or ())
        self.stuck = stuck or set()
        self.status_result = status_result or ok("interface: wg0\n  listening port: 51820")
        self.addresses_result = addresses_result or ok("5: wg0: <POINTOPOINT,NOARP,UP> mtu 1420")
        self.calls: list[tuple[str, str]] = []

    def activate(self, config_path: Path) -> ToolResult:
        name = Path(config_path).stem
        self.calls.append(("activate", str(config_path)))
        result = self.activation_results.get(name, ok(f"[#] ip link add {name} type wireguard"))
        if result.success:
            self.up.add(name)
        return result

    def deactivate(self, interface_name: str) -> ToolResult:
        self.calls.append(("deactivate", interface_name))
        if interface_name in self.stuck:
            return fail(f"wg-quick: `{interface_name}' is not a WireGuard interface")
        self.up.discard(interface_name)
        return ok(f"[#] ip link delete dev {interface_name}")

    def exists(self, interface_name: str) -> bool:
        self.calls.append(("exists", interface_name))
        return interface_name in self.up

    def status(self, interface_name: str) -> ToolResult:
        self.calls.append(("status", interface_name))
        return self.status_result

    def addresses(self, interface_name: str) -> ToolResult:
        self.calls.append(("addresses", interface_name))
        return self.addresses_result

    def call_names(self) -> list[str]:
        return [call for call, _ in self.calls]


@pytest.fixture
def settings() -> Settings:
    return Settings(
        settle_delay_seconds=0.0,
        line_ending_policy=LineEndingPolicy.IN_PLACE,
        _env_file=None,
    )


@pytest.fixture
def configs_dir(tmp_path: Path) -> Path:
    path = tmp_path / "configs"
    path.mkdir()
    return path


@pytest.fixture
def write_config(configs_dir: Path):
    def _write(name: str, content: str = VALID_CONFIG, *, newline: str = "\n") -> Path:
        path = configs_dir / name
        path.write_bytes(content.replace("\n", newline).encode("utf-8"))
        return path

    return _write
