"""Tests for the ontoguard command line."""

import json
import logging

import pytest
from typer.testing import CliRunner

from ontoguard.cli import app


@pytest.fixture(autouse=True)
def isolated_env(tmp_path, monkeypatch):
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setattr("pathlib.Path.home", lambda: home)
    for key in ("ONTOGUARD_VERBOSITY", "ONTOGUARD_FAIL_ON_WARNINGS", "ONTOGUARD_LOG_FILE"):
        monkeypatch.delenv(key, raising=False)


@pytest.fixture
def runner():
    return CliRunner()


def _write(path, data):
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data), encoding="utf-8")


@pytest.fixture
def changes_file(tmp_path):
    def _make(*changes):
        path = tmp_path / "changes.json"
        _write(path, [{"file": f, "changeType": t} for f, t in changes])
        return path

    return _make


class TestValidateCommand:
    def test_clean_repository(self, runner, ontology_repo):
        result = runner.invoke(app, ["validate", str(ontology_repo)])
        assert result.exit_code == 0, result.output
        assert "passed reference validation" in result.output

    def test_missing_reference_fails(self, runner, ontology_repo):
        _write(ontology_repo / "modules" / "Core.json", {"id": "Core", "categories": ["Agent", "Ghost"]})
        result = runner.invoke(app, ["validate", str(ontology_repo)])
        assert result.exit_code == 1
        assert "modules/Core.json" in result.output
        assert "missing-reference" in result.output

    def test_json_output(self, runner, ontology_repo):
        _write(
            ontology_repo / "categories" / "Agent.json",
            {"id": "Agent", "parents": ["Equipment"]},
        )
        result = runner.invoke(app, ["validate", str(ontology_repo), "--format", "json"])
        assert result.exit_code == 1
        report = json.loads(result.stdout)
        assert [e["type"] for e in report["errors"]] == ["scope-violation"]
        assert report["errors"][0]["file"] == "categories/Agent.json"

    def test_module_cycle_reported(self, runner, ontology_repo):
        _write(ontology_repo / "modules" / "Core.json", {"id": "Core", "dependencies": ["Lab"]})
        result = runner.invoke(app, ["validate", str(ontology_repo), "-f", "json"])
        assert result.exit_code == 1
        types = {e["type"] for e in json.loads(result.stdout)["errors"]}
        assert "dependency-cycle" in types


class TestCascadeCommand:
    def test_json_output(self, runner, ontology_repo, changes_file):
        path = changes_file(("categories/Agent.json", "minor"))
        result = runner.invoke(
            app, ["cascade", str(path), "--root", str(ontology_repo), "--format", "json"]
        )
        assert result.exit_code == 0, result.output
        data = json.loads(result.stdout)
        assert data["moduleBumps"] == {"Core": "minor", "Lab": "minor"}
        assert data["bundleBumps"] == {"Default": "minor"}
        assert data["ontologyBump"] == "minor"
        assert data["cascadeSkipped"] is None

    def test_overrides_file_used(self, runner, ontology_repo, changes_file):
        _write(ontology_repo / "VERSION_OVERRIDES.json", {"Lab": "patch"})
        path = changes_file(("categories/Agent.json", "major"))
        args = ["cascade", str(path), "-r", str(ontology_repo), "-f", "json"]

        data = json.loads(runner.invoke(app, args).stdout)
        assert data["moduleBumps"]["Lab"] == "patch"
        assert data["overrideWarnings"] == ["Override downgrades Lab from major to patch"]

        data = json.loads(runner.invoke(app, args + ["--no-overrides"]).stdout)
        assert data["moduleBumps"]["Lab"] == "major"

    def test_bad_overrides_file(self, runner, ontology_repo, changes_file):
        (ontology_repo / "VERSION_OVERRIDES.json").write_text("{", encoding="utf-8")
        path = changes_file(("categories/Agent.json", "patch"))
        result = runner.invoke(app, ["cascade", str(path), "-r", str(ontology_repo)])
        assert result.exit_code == 1
        assert "Failed to parse VERSION_OVERRIDES.json" in result.output

    def test_rich_output(self, runner, ontology_repo, changes_file):
        path = changes_file(("categories/Equipment.json", "patch"))
        result = runner.invoke(app, ["cascade", str(path), "-r", str(ontology_repo)])
        assert result.exit_code == 0, result.output
        assert "Module bumps" in result.output
        assert "Ontology bump: patch" in result.output


class TestBumpCommand:
    def test_major_change(self, runner, ontology_repo, changes_file):
        path = changes_file(("categories/Agent.json", "major"))
        result = runner.invoke(app, ["bump", str(path), "--root", str(ontology_repo)])
        assert result.exit_code == 0, result.output
        assert "1.2.3 -> 2.0.0" in result.output
        assert (ontology_repo / "VERSION").read_text(encoding="utf-8") == "1.2.3\n"

    def test_missing_version_file(self, runner, ontology_repo, changes_file):
        (ontology_repo / "VERSION").unlink()
        path = changes_file(("categories/Agent.json", "patch"))
        result = runner.invoke(app, ["bump", str(path), "--root", str(ontology_repo)])
        assert result.exit_code == 1
        assert "VERSION file not found" in result.output

    def test_unparseable_version(self, runner, ontology_repo, changes_file):
        (ontology_repo / "VERSION").write_text("v1\n", encoding="utf-8")
        path = changes_file(("categories/Agent.json", "patch"))
        result = runner.invoke(app, ["bump", str(path), "--root", str(ontology_repo)])
        assert result.exit_code == 1
        assert "Cannot parse version" in result.output


def _share_agent(repo):
    _write(
        repo / "modules" / "Lab.json",
        {"id": "Lab", "categories": ["Equipment", "Agent"], "dependencies": ["Core"]},
    )


class TestValidateWarnings:
    def test_shared_member_warns_without_failing(self, runner, ontology_repo):
        _share_agent(ontology_repo)
        result = runner.invoke(app, ["validate", str(ontology_repo)])
        assert result.exit_code == 0, result.output
        output = " ".join(result.output.split())
        assert "Warning:" in output
        assert '"Lab" takes ownership' in output

    def test_fail_on_warnings_from_project_config(self, runner, ontology_repo):
        _share_agent(ontology_repo)
        (ontology_repo / "ontoguard.toml").write_text("fail_on_warnings = true\n", encoding="utf-8")
        result = runner.invoke(app, ["validate", str(ontology_repo), "-f", "json"])
        assert result.exit_code == 1
        report = json.loads(result.stdout)
        assert report["errors"] == []
        assert len(report["warnings"]) == 1

    def test_fail_on_warnings_from_env(self, runner, ontology_repo, monkeypatch):
        _share_agent(ontology_repo)
        monkeypatch.setenv("ONTOGUARD_FAIL_ON_WARNINGS", "true")
        assert runner.invoke(app, ["validate", str(ontology_repo)]).exit_code == 1


class TestLoggingVerbosity:
    def test_env_quiet(self, runner, ontology_repo, monkeypatch):
        monkeypatch.setenv("ONTOGUARD_VERBOSITY", "quiet")
        result = runner.invoke(app, ["validate", str(ontology_repo)])
        assert result.exit_code == 0, result.output
        assert logging.getLogger("ontoguard").level == logging.ERROR

    def test_project_config_verbose(self, runner, ontology_repo):
        (ontology_repo / "ontoguard.toml").write_text('verbosity = "verbose"\n', encoding="utf-8")
        runner.invoke(app, ["validate", str(ontology_repo)])
        assert logging.getLogger("ontoguard").level == logging.DEBUG

    def test_flag_beats_env(self, runner, ontology_repo, monkeypatch, changes_file):
        monkeypatch.setenv("ONTOGUARD_VERBOSITY", "quiet")
        path = changes_file(("categories/Agent.json", "patch"))
        result = runner.invoke(app, ["cascade", str(path), "-r", str(ontology_repo), "-v"])
        assert result.exit_code == 0, result.output
        assert logging.getLogger("ontoguard").level == logging.DEBUG

    def test_log_file_from_env(self, runner, ontology_repo, monkeypatch, tmp_path):
        log_file = tmp_path / "run.log"
        monkeypatch.setenv("ONTOGUARD_LOG_FILE", str(log_file))
        _write(ontology_repo / "categories" / "Agent2.json", {"id": "Agent"})
        runner.invoke(app, ["validate", str(ontology_repo)])
        for handler in logging.getLogger().handlers:
            handler.flush()
        assert "Duplicate categories id 'Agent'" in log_file.read_text(encoding="utf-8")


class TestErrorOutput:
    def test_json_error(self, runner, ontology_repo, changes_file):
        (ontology_repo / "VERSION_OVERRIDES.json").write_text('{"Core": "huge"}', encoding="utf-8")
        path = changes_file(("categories/Agent.json", "patch"))
        result = runner.invoke(app, ["cascade", str(path), "-r", str(ontology_repo), "-f", "json"])
        assert result.exit_code == 1
        error = json.loads(result.stdout)
        assert error["error"] == "OverrideFileError"
        assert error["message"].startswith("Failed to parse VERSION_OVERRIDES.json")

    def test_invalid_config_value(self, runner, ontology_repo):
        (ontology_repo / "ontoguard.toml").write_text('verbosity = "loud"\n', encoding="utf-8")
        result = runner.invoke(app, ["validate", str(ontology_repo)])
        assert result.exit_code == 1
        assert "Invalid configuration for verbosity" in result.output
        assert "Unexpected error" not in result.output
