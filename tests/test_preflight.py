from __future__ import annotations

import pytest

from wgtest.services.tester.preflight import PreconditionError, check_preconditions


def which_all(binary):
    return f"/usr/bin/{binary}"


class TestCheckPreconditions:
    def test_root_with_tools_passes(self, settings):
        check_preconditions(settings, euid=lambda: 0, which=which_all)

    def test_non_root_is_rejected(self, settings):
        with pytest.raises(PreconditionError, match="run as root"):
            check_preconditions(settings, euid=lambda: 1000, which=which_all)

    def test_root_check_can_be_disabled(self, settings):
        settings.require_root = False
        check_preconditions(settings, euid=lambda: 1000, which=which_all)

    def test_missing_wg(self, settings):
        def which(binary):
            return None if binary == "wg" else which_all(binary)

        with pytest.raises(PreconditionError, match="WireGuard is not installed"):
            check_preconditions(settings, euid=lambda: 0, which=which)

    @pytest.mark.parametrize("missing", ["wg-quick", "ip"])
    def test_missing_helper_tools(self, settings, missing):
        def which(binary):
            return None if binary == missing else which_all(binary)

        with pytest.raises(PreconditionError, match=missing):
            check_preconditions(settings, euid=lambda: 0, which=which)
