"""Tests for configuration loading and merging."""

import pytest

from ontoguard.config import OntoguardConfig, load_config
from ontoguard.exceptions import ConfigurationError, InvalidConfigError


@pytest.fixture(autouse=True)
def isolated_env(tmp_path, monkeypatch):
    """Keep the user's global config and ONTOGUARD_* variables out of the tests."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setattr("pathlib.Path.home", lambda: home)
    for key in (
        "ONTOGUARD_OVERRIDES_FILE",
        "ONTOGUARD_VERSION_FILE",
        "ONTOGUARD_FAIL_ON_WARNINGS",
        "ONTOGUARD_VERBOSITY",
        "ONTOGUARD_EXCLUDE_PATTERNS",
        "ONTOGUARD_LOG_FILE",
    ):
        monkeypatch.delenv(key, raising=False)
    return home


@pytest.fixture
def repo(tmp_path):
    root = tmp_path / "repo"
    root.mkdir()
    return root


class TestDefaults:
    def test_defaults(self, repo):
        config = load_config(repo)
        assert config == OntoguardConfig()
        assert config.overrides_file == "VERSION_OVERRIDES.json"
        assert config.verbosity == "normal"
        assert config.log_file is None
        assert "*/versions/*" in config.exclude_patterns

    def test_paths(self, repo):
        config = OntoguardConfig()
        assert config.overrides_path(repo) == repo / "VERSION_OVERRIDES.json"
        assert config.version_path(repo) == repo / "VERSION"


class TestFiles:
    def test_project_file(self, repo):
        (repo / "ontoguard.toml").write_text(
            'version_file = "ONTOLOGY_VERSION"\nfail_on_warnings = true\n', encoding="utf-8"
        )
        config = load_config(repo)
        assert config.version_file == "ONTOLOGY_VERSION"
        assert config.fail_on_warnings is True

    def test_section_table(self, repo):
        (repo / "ontoguard.toml").write_text(
            '[ontoguard]\nexclude_patterns = ["drafts/*"]\n', encoding="utf-8"
        )
        assert load_config(repo).exclude_patterns == ["drafts/*"]

    def test_global_file_below_project(self, repo, isolated_env):
        (isolated_env / ".ontoguard.toml").write_text(
            'version_file = "GLOBAL"\noverrides_file = "g.json"\n', encoding="utf-8"
        )
        (repo / "ontoguard.toml").write_text('version_file = "PROJECT"\n', encoding="utf-8")
        config = load_config(repo)
        assert config.version_file == "PROJECT"
        assert config.overrides_file == "g.json"

    def test_explicit_file_missing(self, repo):
        with pytest.raises(ConfigurationError, match="not found"):
            load_config(repo, config_file=repo / "missing.toml")

    def test_invalid_toml(self, repo):
        (repo / "ontoguard.toml").write_text("version_file = ", encoding="utf-8")
        with pytest.raises(ConfigurationError, match="Invalid config file"):
            load_config(repo)

    def test_unknown_keys_ignored(self, repo):
        (repo / "ontoguard.toml").write_text('colour = "blue"\n', encoding="utf-8")
        assert load_config(repo) == OntoguardConfig()


class TestEnvironmentAndOverrides:
    def test_env_var(self, repo, monkeypatch):
        monkeypatch.setenv("ONTOGUARD_VERBOSITY", "quiet")
        monkeypatch.setenv("ONTOGUARD_FAIL_ON_WARNINGS", "yes")
        config = load_config(repo)
        assert config.verbosity == "quiet"
        assert config.fail_on_warnings is True

    def test_env_log_file(self, repo, monkeypatch):
        monkeypatch.setenv("ONTOGUARD_LOG_FILE", "ontoguard.log")
        assert load_config(repo).log_file == "ontoguard.log"

    def test_bad_env_bool(self, repo, monkeypatch):
        monkeypatch.setenv("ONTOGUARD_FAIL_ON_WARNINGS", "maybe")
        with pytest.raises(InvalidConfigError):
            load_config(repo)

    def test_verbose_flag(self, repo):
        assert load_config(repo, verbose=True, quiet=False).verbosity == "verbose"

    def test_unset_flags_keep_env_verbosity(self, repo, monkeypatch):
        monkeypatch.setenv("ONTOGUARD_VERBOSITY", "quiet")
        assert load_config(repo, verbose=False, quiet=False).verbosity == "quiet"

    def test_quiet_wins_over_verbose(self, repo):
        assert load_config(repo, verbose=True, quiet=True).verbosity == "quiet"

    def test_none_overrides_ignored(self, repo):
        assert load_config(repo, version_file=None).version_file == "VERSION"

    def test_invalid_value(self, repo):
        with pytest.raises(InvalidConfigError) as exc_info:
            load_config(repo, verbosity="loud")
        assert exc_info.value.key == "verbosity"
