"""Unit tests for the CLI: Typer command registration, exit codes, output."""

from __future__ import annotations

import json

from typer.testing import CliRunner

from hydrapin.cli.app import app
from hydrapin.core import resolver as resolver_module
from hydrapin.core.overlay_store import OverlayStore, render_overlay
from hydrapin.models.package import Overlay

runner = CliRunner()


class TestCliApp:
    """The CLI must register both subcommands and show help."""

    def test_no_args_shows_help(self):
        result = runner.invoke(app, [])
        # Typer's no_args_is_help may exit with 0 or 2 depending on version
        assert result.exit_code in (0, 2)
        assert "usage" in result.output.lower()

    def test_help_flag(self):
        result = runner.invoke(app, ["--help"])
        assert result.exit_code == 0
        assert "pin" in result.output
        assert "unpin" in result.output
        assert "--package" in result.output

    def test_subcommand_help(self, tmp_path):
        result = runner.invoke(app, ["-p", "hello", "-o", str(tmp_path / "o.nix"), "pin", "--help"])
        assert result.exit_code == 0

    def test_package_required(self, tmp_path):
        result = runner.invoke(app, ["--output", str(tmp_path / "o.nix"), "unpin"])
        assert result.exit_code != 0


class TestUnpinCommand:
    def test_unpin_missing_file(self, tmp_path):
        output = tmp_path / "pins.nix"
        result = runner.invoke(app, ["--package", "hello", "--output", str(output), "unpin"])
        assert result.exit_code == 0
        assert output.read_text(encoding="utf-8") == render_overlay(Overlay())
        assert "was not pinned" in result.output

    def test_unpin_existing(self, tmp_path, make_package):
        output = tmp_path / "pins.nix"
        OverlayStore(output).save(Overlay(packages=[make_package("hello"), make_package("jq")]))
        result = runner.invoke(app, ["-p", "hello", "-o", str(output), "unpin"])
        assert result.exit_code == 0
        assert "Unpinned" in result.output
        assert OverlayStore(output).load().names() == ["jq"]

    def test_unpin_unwritable_output(self, tmp_path):
        result = runner.invoke(app, ["-p", "hello", "-o", str(tmp_path), "unpin"])
        assert result.exit_code == 1
        assert "Error" in result.output


class TestPinCommand:
    def test_pin_end_to_end(
        self, tmp_path, monkeypatch, hydra_check_tool, prefetch_tool, hydra_client, prefetch_hash
    ):
        monkeypatch.setattr(resolver_module.config, "prefetch_binary", str(prefetch_tool))
        monkeypatch.setattr(resolver_module, "HydraClient", lambda *a, **kw: hydra_client)
        output = tmp_path / "pins.nix"

        result = runner.invoke(
            app,
            ["--hydra-check", str(hydra_check_tool), "-p", "hello", "-o", str(output), "pin"],
        )

        assert result.exit_code == 0, result.output
        assert "Pinned" in result.output
        overlay = OverlayStore(output).load()
        assert overlay.names() == ["hello"]
        assert overlay.packages[0].sha256 == prefetch_hash

    def test_pin_failure_exits_nonzero(self, tmp_path, make_tool):
        tool = make_tool("hydra-check", stdout=json.dumps({}))
        output = tmp_path / "pins.nix"
        result = runner.invoke(app, ["-b", str(tool), "-p", "hello", "-o", str(output), "pin"])
        assert result.exit_code == 1
        assert "no packages" in result.output
        assert not output.exists()

    def test_hydra_check_from_env(self, tmp_path, make_tool, monkeypatch):
        from hydrapin.cli import app as app_module

        tool = make_tool("hydra-check", stdout=json.dumps({"hello": []}))
        monkeypatch.setattr(app_module.config, "hydra_check", str(tool))
        result = runner.invoke(app, ["-p", "hello", "-o", str(tmp_path / "pins.nix"), "pin"])
        assert result.exit_code == 1
        assert "no succeeding builds" in result.output


class TestLogLevel:
    def test_unknown_level_is_usage_error(self, tmp_path):
        output = tmp_path / "pins.nix"
        result = runner.invoke(
            app, ["--log-level", "bogus", "-p", "hello", "-o", str(output), "unpin"]
        )
        assert result.exit_code == 2
        assert not isinstance(result.exception, ValueError)
        assert "Invalid value" in result.output
        assert not output.exists()

    def test_unknown_level_from_config(self, tmp_path, monkeypatch):
        from hydrapin.cli import app as app_module

        monkeypatch.setattr(app_module.config, "log_level", "verbose")
        result = runner.invoke(app, ["-p", "hello", "-o", str(tmp_path / "pins.nix"), "unpin"])
        assert result.exit_code == 2
        assert not isinstance(result.exception, ValueError)

    def test_level_is_case_insensitive(self, tmp_path):
        result = runner.invoke(
            app, ["--log-level", "debug", "-p", "hello", "-o", str(tmp_path / "pins.nix"), "unpin"]
        )
        assert result.exit_code == 0, result.output


class TestInvalidPackageName:
    def test_pin_name_with_space(self, tmp_path, hydra_check_tool):
        output = tmp_path / "pins.nix"
        result = runner.invoke(
            app, ["-b", str(hydra_check_tool), "-p", "a b", "-o", str(output), "pin"]
        )
        assert result.exit_code == 1
        assert "whitespace" in result.output
        assert not output.exists()
