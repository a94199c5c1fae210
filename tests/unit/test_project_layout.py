"""Tests for project root resolution, file discovery and API detection."""

import logging

from dsflint.common.constants import ENV_DSF_PROJECT_ROOT, ENV_PROJECT_ROOT
from dsflint.models.enums import ApiVersion
from dsflint.project import (
    bpmn_files,
    detect_api_version,
    fhir_files,
    find_project_root,
    list_resource_files,
)


class TestProjectRoot:
    """Resolution of the directory anchoring all relative lookups."""

    def test_walks_up_to_marker(self, plugin_root, write_bpmn):
        path = write_bpmn("ping.bpmn", "<definitions/>")

        assert find_project_root(path) == plugin_root.resolve()

    def test_build_file_marks_root(self, tmp_path):
        (tmp_path / "plugin" / "docs").mkdir(parents=True)
        (tmp_path / "plugin" / "pom.xml").write_text("<project/>", encoding="utf-8")

        assert find_project_root(tmp_path / "plugin" / "docs") == (tmp_path / "plugin").resolve()

    def test_explicit_override_wins(self, plugin_root, tmp_path):
        other = tmp_path / "other"
        other.mkdir()

        assert find_project_root(plugin_root, override=other) == other.resolve()

    def test_environment_override(self, plugin_root, tmp_path, monkeypatch):
        other = tmp_path / "from-env"
        other.mkdir()
        monkeypatch.setenv(ENV_PROJECT_ROOT, str(other))

        assert find_project_root(plugin_root) == other.resolve()

    def test_legacy_environment_override(self, plugin_root, tmp_path, monkeypatch):
        other = tmp_path / "legacy"
        other.mkdir()
        monkeypatch.setenv(ENV_DSF_PROJECT_ROOT, str(other))

        assert find_project_root(plugin_root) == other.resolve()

    def test_override_that_is_not_a_directory_is_ignored(self, plugin_root, tmp_path):
        assert find_project_root(plugin_root, override=tmp_path / "missing") == plugin_root.resolve()


class TestFileDiscovery:
    def test_bpmn_and_fhir_files(self, plugin_root, write_bpmn, write_resource):
        write_bpmn("ping.bpmn", "<definitions/>")
        write_bpmn("notes.txt", "ignored")
        write_resource("Task", "task.xml", "<Task/>")
        write_resource("ValueSet", "vs.json", "{}")
        write_resource("ValueSet", "README.md", "ignored")

        assert [p.name for p in bpmn_files(plugin_root)] == ["ping.bpmn"]
        assert [p.name for p in fhir_files(plugin_root)] == ["task.xml", "vs.json"]
        assert [p.name for p in list_resource_files(plugin_root, "ValueSet")] == ["vs.json"]

    def test_flat_layout(self, tmp_path):
        (tmp_path / "bpe").mkdir()
        (tmp_path / "bpe" / "ping.bpmn").write_text("<definitions/>", encoding="utf-8")
        (tmp_path / "fhir" / "Task").mkdir(parents=True)
        (tmp_path / "fhir" / "Task" / "task.xml").write_text("<Task/>", encoding="utf-8")

        assert [p.name for p in bpmn_files(tmp_path)] == ["ping.bpmn"]
        assert [p.name for p in list_resource_files(tmp_path, "Task")] == ["task.xml"]

    def test_missing_directories_are_logged(self, tmp_path, caplog):
        with caplog.at_level(logging.WARNING, logger="dsflint.project"):
            assert bpmn_files(tmp_path) == []
            assert fhir_files(tmp_path) == []

        assert "No process directory" in caplog.text
        assert "No resource directory" in caplog.text


class TestApiDetection:
    """The service registration file names the plugin API generation."""

    def test_v2_service_file(self, plugin_root):
        services = plugin_root / "src/main/resources/META-INF/services"
        services.mkdir(parents=True)
        (services / "dev.dsf.bpe.v2.ProcessPluginDefinition").write_text("org.example.PingPlugin", encoding="utf-8")

        detected = detect_api_version(plugin_root)

        assert detected.version == ApiVersion.V2
        assert detected.is_known
        assert detected.evidence.name == "dev.dsf.bpe.v2.ProcessPluginDefinition"

    def test_v2_wins_over_v1_in_the_same_directory(self, plugin_root):
        services = plugin_root / "META-INF/services"
        services.mkdir(parents=True)
        (services / "dev.dsf.bpe.v1.ProcessPluginDefinition").write_text("", encoding="utf-8")
        (services / "dev.dsf.bpe.v2.ProcessPluginDefinition").write_text("", encoding="utf-8")

        assert detect_api_version(plugin_root).version == ApiVersion.V2

    def test_v1_from_build_output(self, plugin_root):
        classes = plugin_root / "target/classes"
        classes.mkdir(parents=True)
        (classes / "dev.dsf.bpe.v1.ProcessPluginDefinition").write_text("", encoding="utf-8")

        assert detect_api_version(plugin_root).version == ApiVersion.V1

    def test_unknown_without_evidence(self, plugin_root):
        detected = detect_api_version(plugin_root)

        assert detected.version == ApiVersion.UNKNOWN
        assert not detected.is_known
        assert detected.evidence is None
