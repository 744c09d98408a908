"""Tests for repository configuration and log level selection."""

import io

import pytest
from loguru import logger

from twig.config import DEFAULT_BRANCH, RepoConfig
from twig.logging_config import LOG_LEVEL_ENV, configure_logging, resolve_level


class TestRepoConfig:
    def test_defaults_when_missing(self, tmp_path):
        config = RepoConfig.load(tmp_path / "config")
        assert config.default_branch == DEFAULT_BRANCH
        assert config.log_level == "WARNING"

    def test_round_trip(self, tmp_path):
        path = tmp_path / "config"
        RepoConfig.default("trunk").save(path)
        assert "[core]" in path.read_text()
        assert RepoConfig.load(path).default_branch == "trunk"

    def test_log_level_from_file(self, repo):
        repo.layout.config_file.write_text("[log]\nlevel = debug\n")
        assert repo.config.log_level == "DEBUG"


class TestResolveLevel:
    def test_verbose_wins(self, monkeypatch):
        monkeypatch.setenv(LOG_LEVEL_ENV, "ERROR")
        assert resolve_level(True, "INFO") == "DEBUG"

    def test_environment_over_config(self, monkeypatch):
        monkeypatch.setenv(LOG_LEVEL_ENV, "error")
        assert resolve_level(False, "INFO") == "ERROR"

    def test_config_then_default(self, monkeypatch):
        monkeypatch.delenv(LOG_LEVEL_ENV, raising=False)
        assert resolve_level(False, "info") == "INFO"
        assert resolve_level() == "WARNING"


class TestConfigureLogging:
    @pytest.fixture(autouse=True)
    def reset_logging(self):
        yield
        logger.remove()
        logger.disable("twig")

    def test_library_messages_reach_sink(self, repo, write):
        sink = io.StringIO()
        configure_logging("DEBUG", sink=sink)
        write("a.txt", "a")
        repo.add("a.txt")
        repo.commit("logged")
        assert "logged" in sink.getvalue()

    def test_level_filters(self, repo, write):
        sink = io.StringIO()
        configure_logging("ERROR", sink=sink)
        write("a.txt", "a")
        repo.add("a.txt")
        repo.commit("quiet")
        assert sink.getvalue() == ""
