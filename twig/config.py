"""
Repository configuration stored as a git-style INI file.
"""
import configparser
from pathlib import Path
from typing import Optional

DEFAULT_BRANCH = "master"
DEFAULT_LOG_LEVEL = "WARNING"

class RepoConfig:
    """Values read from ``.twig/config``, with defaults for anything missing."""

    def __init__(self, parser: Optional[configparser.ConfigParser] = None):
        self.parser = parser or configparser.ConfigParser()

    @classmethod
    def load(cls, config_file: Path) -> 'RepoConfig':
        parser = configparser.ConfigParser()
        if Path(config_file).is_file():
            parser.read(config_file, encoding='utf-8')
        return cls(parser)

    @classmethod
    def default(cls, default_branch: str = DEFAULT_BRANCH) -> 'RepoConfig':
        parser = configparser.ConfigParser()
        parser["core"] = {
            "repositoryformatversion": "0",
            "defaultbranch": default_branch,
        }
        parser["log"] = {"level": DEFAULT_LOG_LEVEL}
        return cls(parser)

    def save(self, config_file: Path) -> None:
        with open(config_file, 'w', encoding='utf-8') as f:
            self.parser.write(f)

    @property
    def default_branch(self) -> str:
        return self.parser.get("core", "defaultbranch", fallback=DEFAULT_BRANCH)

    @property
    def log_level(self) -> str:
        return self.parser.get("log", "level", fallback=DEFAULT_LOG_LEVEL).upper()
