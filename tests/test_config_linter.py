from __future__ import annotations

from pathlib import Path

import pytest

from tests.conftest import NO_PEER_CONFIG, VALID_CONFIG
from wgtest.models import LineEndingPolicy
from wgtest.services.diagnostics.config_linter import (
    check_structure,
    format_inspection,
    inspect_config,
    normalize_line_endings,
    redact_private_keys,
)


class TestCheckStructure:
    def test_valid_config_has_no_warnings(self):
        assert check_structure(VALID_CONFIG) == []

    def test_missing_peer(self):
        assert check_structure(NO_PEER_CONFIG) == ["Missing [Peer] section"]

    def test_everything_missing(self):
        assert check_structure("garbage") == [
            "Missing [Interface] section",
            "Missing [Peer] section",
            "Missing Address field",
        ]

    def test_address_must_start_a_line(self):
        text = "[Interface]\n# Address = 10.0.0.1/24\n[Peer]\n"
        assert check_structure(text) == ["Missing Address field"]


class TestNormalizeLineEndings:
    def test_only_crlf_pairs_change(self):
        assert normalize_line_endings(b"a\r\nb\rc\n") == b"a\nb\rc\n"

    def test_lf_input_is_unchanged(self):
        data = VALID_CONFIG.encode()
        assert normalize_line_endings(data) == data


class TestRedaction:
    def test_private_key_lines_removed(self):
        lines = redact_private_keys(VALID_CONFIG)
        assert not any("PrivateKey" in line for line in lines)
        assert "Address = 10.8.0.2/24" in lines


class TestInspectConfig:
    def test_missing_file_raises(self, tmp_path):
        with pytest.raises(OSError):
            inspect_config(tmp_path / "missing.conf")

    def test_staged_copy_requires_staging_dir(self, configs_dir, write_config):
        path = write_config("wg0.conf", newline="\r\n")
        with pytest.raises(ValueError):
            inspect_config(path, policy=LineEndingPolicy.STAGED_COPY)

    def test_lf_file_is_activated_from_source(self, configs_dir, write_config):
        path = write_config("wg0.conf")
        inspection = inspect_config(path, policy=LineEndingPolicy.STAGED_COPY, staging_dir=configs_dir)
        assert inspection.activation_path == path
        assert not inspection.has_crlf

    def test_in_place_conversion_message(self, configs_dir, write_config):
        path = write_config("wg0.conf", newline="\r\n")
        inspection = inspect_config(path, policy=LineEndingPolicy.IN_PLACE)

        assert inspection.has_crlf and inspection.normalized
        lines = format_inspection(inspection)
        assert "Warning: File has Windows-style line endings. Converting..." in lines
        assert lines[0] == f"=== Debugging Config: {path} ==="
        assert lines[1] == "File permissions:"
        assert lines[2].startswith("-rw")


class TestConversionFailure:
    @pytest.fixture
    def read_only_writes(self, monkeypatch):
        def refuse(self, data):
            raise PermissionError(13, "Read-only file system", str(self))

        return lambda: monkeypatch.setattr(Path, "write_bytes", refuse)

    def test_in_place_failure_keeps_original_file(self, configs_dir, write_config, read_only_writes):
        path = write_config("wg0.conf", newline="\r\n")
        read_only_writes()

        inspection = inspect_config(path, policy=LineEndingPolicy.IN_PLACE)

        assert inspection.has_crlf
        assert not inspection.normalized
        assert inspection.activation_path == path
        assert "could not convert line endings" in inspection.conversion_error
        assert b"\r\n" in path.read_bytes()
        assert inspection.structure_warnings == []

    def test_staged_copy_failure_falls_back_to_source(self, configs_dir, write_config, read_only_writes, tmp_path):
        path = write_config("wg0.conf", newline="\r\n")
        read_only_writes()

        inspection = inspect_config(path, policy=LineEndingPolicy.STAGED_COPY, staging_dir=tmp_path)

        assert inspection.activation_path == path
        assert inspection.conversion_error is not None

    def test_failure_is_reported_in_debug_section(self, configs_dir, write_config, read_only_writes):
        path = write_config("wg0.conf", newline="\r\n")
        read_only_writes()

        lines = format_inspection(inspect_config(path))

        assert "Warning: File has Windows-style line endings." in lines
        assert any(line.startswith("Warning: could not convert line endings") for line in lines)
