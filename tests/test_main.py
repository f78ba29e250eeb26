from __future__ import annotations

import pytest

from tests.conftest import FakeInterfaceDriver, fail
from wgtest import main as main_module
from wgtest.services.tester.preflight import PreconditionError


@pytest.fixture
def fake_driver(monkeypatch):
    driver = FakeInterfaceDriver()
    monkeypatch.setattr(main_module, "get_default_interface_driver", lambda settings: driver)
    monkeypatch.setattr(main_module, "check_preconditions", lambda settings: None)
    return driver


class TestHelp:
    @pytest.mark.parametrize("flag", ["-h", "--help"])
    def test_help_exits_zero_without_side_effects(self, flag, settings, capsys, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        with pytest.raises(SystemExit) as excinfo:
            main_module.main([flag], settings=settings)

        assert excinfo.value.code == 0
        out = capsys.readouterr().out
        assert "configs_directory" in out
        assert "./configs will be used" in " ".join(out.split())
        assert "does not exist is a usage error" in " ".join(out.split())
        assert list(tmp_path.iterdir()) == []


class TestMain:
    def test_precondition_failure_exits_one(self, settings, monkeypatch, configs_dir, capsys):
        def refuse(settings):
            raise PreconditionError("Please run as root (sudo)")

        monkeypatch.setattr(main_module, "check_preconditions", refuse)

        assert main_module.main([str(configs_dir)], settings=settings) == main_module.EXIT_PRECONDITION
        assert "Please run as root" in capsys.readouterr().err
        assert not (configs_dir / "test_results.log").exists()

    def test_missing_directory(self, settings, fake_driver, tmp_path):
        code = main_module.main([str(tmp_path / "nope")], settings=settings)
        assert code == main_module.EXIT_USAGE

    def test_all_passed(self, settings, fake_driver, configs_dir, write_config):
        write_config("wg0.conf")
        assert main_module.main([str(configs_dir)], settings=settings) == main_module.EXIT_OK
        assert (configs_dir / "working_configs" / "wg0.conf").exists()

    def test_any_failure(self, settings, fake_driver, configs_dir, write_config):
        write_config("wg0.conf")
        write_config("wg1.conf")
        fake_driver.activation_results["wg1"] = fail("RTNETLINK answers: File exists")

        assert main_module.main([str(configs_dir)], settings=settings) == main_module.EXIT_CONFIG_FAILURES

    def test_default_directory(self, settings, fake_driver, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        (tmp_path / "configs").mkdir()

        assert main_module.main([], settings=settings) == main_module.EXIT_OK
        assert (tmp_path / "configs" / "test_results.log").exists()
