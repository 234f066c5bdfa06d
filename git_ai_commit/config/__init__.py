"""Configuration Management Package

Settings come from a JSON `.gitaicommitrc` (working directory first, then
home), overlaid by GAC_* environment variables and finally by CLI flags.
Secrets are never read from the file.
"""

import json
import os
import sys
from dataclasses import dataclass, asdict, fields
from pathlib import Path
from typing import Optional

VALID_PROVIDERS = {"auto", "gemini", "claude"}

ENV_PROVIDER = "GAC_PROVIDER"
ENV_MODEL = "GAC_MODEL"
ENV_BASE_BRANCH = "GAC_BASE_BRANCH"

# Config field each environment override replaces
ENV_OVERRIDES = {
    ENV_PROVIDER: "provider",
    ENV_MODEL: "model",
    ENV_BASE_BRANCH: "base_branch",
}

# Checked in order; first non-empty wins
GITHUB_TOKEN_VARS = ("GH_ACCESS_TOKEN", "GITHUB_TOKEN")


def _warn(message: str) -> None:
    print(f"Config warning: {message}", file=sys.stderr)


@dataclass
class Config:
    provider: str = "auto"
    model: Optional[str] = None
    base_branch: str = "main"
    remote: str = "origin"
    max_subject_length: int = 72

    def to_dict(self) -> dict:
        return {k: v for k, v in asdict(self).items() if v is not None}

    def validate(self) -> list[str]:
        """Reset invalid values to their defaults; return one warning per reset."""
        problems = []
        defaults = Config()

        if not isinstance(self.provider, str) or self.provider not in VALID_PROVIDERS:
            problems.append(f"Invalid provider '{self.provider}', using '{defaults.provider}'")
            self.provider = defaults.provider

        if self.model is not None and not (isinstance(self.model, str) and self.model.strip()):
            problems.append(f"Invalid model '{self.model}', using the provider default")
            self.model = None

        for name in ("base_branch", "remote"):
            value = getattr(self, name)
            if not isinstance(value, str) or not value.strip():
                problems.append(f"Invalid {name} '{value}', using '{getattr(defaults, name)}'")
                setattr(self, name, getattr(defaults, name))

        limit = self.max_subject_length
        if isinstance(limit, bool) or not isinstance(limit, int) or limit <= 0:
            problems.append(f"Invalid max_subject_length '{limit}', using {defaults.max_subject_length}")
            self.max_subject_length = defaults.max_subject_length

        return problems

    @classmethod
    def from_dict(cls, data: dict) -> 'Config':
        """Build from parsed JSON. Unknown keys are ignored."""
        known = {f.name for f in fields(cls)}
        config = cls(**{k: v for k, v in data.items() if k in known})
        for problem in config.validate():
            _warn(problem)
        return config

    def apply_env(self) -> 'Config':
        """Overlay GAC_* environment variables onto this config."""
        for var, name in ENV_OVERRIDES.items():
            value = os.environ.get(var)
            if value:
                setattr(self, name, value)
        for problem in self.validate():
            _warn(problem)
        return self


class ConfigManager:
    """Finds and loads the nearest `.gitaicommitrc`, once per process."""

    CONFIG_FILENAME = ".gitaicommitrc"

    def __init__(self):
        self._config: Optional[Config] = None
        self._config_path: Optional[Path] = None

    def candidates(self) -> list[Path]:
        return [Path.cwd() / self.CONFIG_FILENAME, Path.home() / self.CONFIG_FILENAME]

    def load(self) -> Config:
        if self._config is None:
            path = next((p for p in self.candidates() if p.is_file()), None)
            self._config_path = path
            self._config = self._read(path) if path else Config()
        return self._config

    def _read(self, path: Path) -> Config:
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except (ValueError, OSError) as e:
            print(f"Warning: Could not load {path}: {e}", file=sys.stderr)
            return Config()
        if not isinstance(data, dict):
            print(f"Warning: Could not load {path}: expected a JSON object", file=sys.stderr)
            return Config()
        return Config.from_dict(data)

    def get_config_path(self) -> Optional[Path]:
        return self._config_path


def github_token() -> Optional[str]:
    return next((os.environ[v] for v in GITHUB_TOKEN_VARS if os.environ.get(v)), None)


_manager = ConfigManager()


def load_config() -> Config:
    return _manager.load()


def get_config_path() -> Optional[Path]:
    return _manager.get_config_path()


__all__ = [
    "Config",
    "ConfigManager",
    "load_config",
    "get_config_path",
    "github_token",
    "VALID_PROVIDERS",
    "ENV_PROVIDER",
    "ENV_MODEL",
    "ENV_BASE_BRANCH",
    "ENV_OVERRIDES",
    "GITHUB_TOKEN_VARS",
]
