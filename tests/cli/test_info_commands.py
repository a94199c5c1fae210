"""Tests for the kinds and detect CLI commands."""

import json

import pytest
from typer.testing import CliRunner

from dsflint.cli.main import app
from dsflint.models.enums import LintKind


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


class TestKindsCommand:
    def test_json_lists_every_kind(self, runner):
        result = runner.invoke(app, ["kinds", "--json"])

        assert result.exit_code == 0
        assert json.loads(result.output) == [kind.value for kind in LintKind]

    def test_prefix_filter(self, runner):
        result = runner.invoke(app, ["kinds", "--prefix", "FHIR_TASK", "--json"])

        kinds = json.loads(result.output)
        assert kinds
        assert all(kind.startswith("fhir_task") for kind in kinds)

    def test_table_output(self, runner):
        result = runner.invoke(app, ["kinds", "--prefix", "bpmn_process"])

        assert result.exit_code == 0
        assert "Finding kinds (2)" in result.output
        assert "BPMN_PROCESS_ID_EMPTY" in result.output


class TestDetectCommand:
    def test_undeclared_generation(self, runner, plugin_root):
        result = runner.invoke(app, ["detect", str(plugin_root), "--json"])

        assert result.exit_code == 0
        assert json.loads(result.output) == {
            "project_root": str(plugin_root.resolve()),
            "api_version": "unknown",
            "evidence": None,
        }

    def test_declared_generation(self, runner, plugin_root):
        services = plugin_root / "src" / "main" / "resources" / "META-INF" / "services"
        services.mkdir(parents=True)
        (services / "dev.dsf.bpe.v2.ProcessPluginDefinition").write_text("org.example.PingPlugin\n")

        result = runner.invoke(app, ["detect", str(plugin_root / "src" / "main" / "resources" / "bpe"), "--json"])

        data = json.loads(result.output)
        assert data["project_root"] == str(plugin_root.resolve())
        assert data["api_version"] == "v2"
        assert data["evidence"].endswith("dev.dsf.bpe.v2.ProcessPluginDefinition")

    def test_text_output(self, runner, plugin_root):
        result = runner.invoke(app, ["detect", str(plugin_root)])

        assert result.exit_code == 0
        assert "API version:" in result.output
