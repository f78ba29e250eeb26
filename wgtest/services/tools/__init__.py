from __future__ import annotations

"""wgtest/services/tools/__init__.py

Tool adapter registry.

`get_default_interface_driver` builds the driver the CLI uses against
real interfaces. Tests inject their own implementation of
`InterfaceDriverProtocol` instead.
"""

from wgtest.config import Settings
from wgtest.services.tester.lifecycle import InterfaceDriverProtocol
from wgtest.services.tools.wireguard_tool import WgQuickInterfaceDriver


def get_default_interface_driver(settings: Settings | None = None) -> InterfaceDriverProtocol:
    return WgQuickInterfaceDriver(settings)
