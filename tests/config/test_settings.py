"""Tests for ParamatrixSettings: unified settings with TOML source."""

from pathlib import Path

import click
import pytest

from paramatrix.config.settings import ParamatrixSettings


class TestDefaults:
    def test_all_defaults(self, isolated_cwd: Path) -> None:
        settings = ParamatrixSettings.from_cli()
        assert settings.config_path is None
        assert settings.json_output is False
        assert settings.quiet is False
        assert settings.verbose is False
        assert settings.engine.setter_prefix == "set"
        assert settings.engine.operation_prefix == "test"
        assert settings.engine.default_tests == ".*"
        assert settings.engine.check_types is True

    def test_frozen(self, isolated_cwd: Path) -> None:
        settings = ParamatrixSettings.from_cli()
        with pytest.raises(Exception):
            settings.quiet = True  # type: ignore[misc]


class TestTomlSource:
    def test_discovered_from_cwd(self, isolated_cwd: Path) -> None:
        (isolated_cwd / "paramatrix.toml").write_text('[engine]\nsetter_prefix = "with"\n')
        settings = ParamatrixSettings.from_cli()
        assert settings.engine.setter_prefix == "with"
        assert settings.engine.operation_prefix == "test"
        assert settings.config_path == isolated_cwd / "paramatrix.toml"

    def test_pyproject_tool_table(self, isolated_cwd: Path) -> None:
        (isolated_cwd / "pyproject.toml").write_text(
            "[tool.paramatrix.engine]\ncheck_types = false\n"
        )
        settings = ParamatrixSettings.from_cli()
        assert settings.engine.check_types is False

    def test_explicit_config_path(self, isolated_cwd: Path) -> None:
        custom = isolated_cwd / "conf" / "custom.toml"
        custom.parent.mkdir()
        custom.write_text('[engine]\ndefault_tests = "test_fast.*"\n')
        settings = ParamatrixSettings.from_cli(config_path=str(custom))
        assert settings.engine.default_tests == "test_fast.*"
        assert settings.config_path == custom

    def test_missing_explicit_path_uses_defaults(self, isolated_cwd: Path) -> None:
        (isolated_cwd / "paramatrix.toml").write_text('[engine]\nsetter_prefix = "with"\n')
        settings = ParamatrixSettings.from_cli(config_path=str(isolated_cwd / "absent.toml"))
        assert settings.engine.setter_prefix == "set"

    def test_invalid_toml(self, isolated_cwd: Path) -> None:
        (isolated_cwd / "paramatrix.toml").write_text("[engine\n")
        with pytest.raises(click.ClickException, match="Invalid TOML"):
            ParamatrixSettings.from_cli()


class TestPriority:
    def test_cli_flags(self, isolated_cwd: Path) -> None:
        settings = ParamatrixSettings.from_cli(json_output=True, quiet=True, verbose=True)
        assert settings.json_output is True
        assert settings.quiet is True
        assert settings.verbose is True

    def test_cli_flag_beats_toml(self, isolated_cwd: Path) -> None:
        (isolated_cwd / "paramatrix.toml").write_text("quiet = true\n")
        assert ParamatrixSettings.from_cli(quiet=False).quiet is False

    def test_env_var(self, isolated_cwd: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("PARAMATRIX_VERBOSE", "true")
        assert ParamatrixSettings.from_cli().verbose is True

    def test_nested_env_var_beats_toml(
        self, isolated_cwd: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        (isolated_cwd / "paramatrix.toml").write_text('[engine]\noperation_prefix = "check"\n')
        monkeypatch.setenv("PARAMATRIX_ENGINE__OPERATION_PREFIX", "spec")
        assert ParamatrixSettings.from_cli().engine.operation_prefix == "spec"
