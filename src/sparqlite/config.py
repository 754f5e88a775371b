"""
Configuration for sparqlite runs.

Provides:
- Run configuration with dict round-tripping
- Environment defaults (SPARQLITE_* variables)
- Command-line overrides
- Validation
"""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

ENV_DB = "SPARQLITE_DB"
ENV_HISTORY_FILE = "SPARQLITE_HISTORY_FILE"
ENV_LOG_LEVEL = "SPARQLITE_LOG_LEVEL"

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class ConfigValidationError(Exception):
    """Configuration validation error."""
    pass


def _optional_path(value: Any) -> Optional[Path]:
    if value is None or value == "":
        return None
    return Path(value)


@dataclass
class SparqliteConfig:
    """Settings for one run."""
    directory: Optional[Path] = None
    query: Optional[str] = None
    print_query: bool = False
    db: Optional[Path] = None
    toggle_prefix: bool = False
    history_file: Optional[Path] = None
    log_level: str = "WARNING"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "directory": str(self.directory) if self.directory else None,
            "query": self.query,
            "print_query": self.print_query,
            "db": str(self.db) if self.db else None,
            "toggle_prefix": self.toggle_prefix,
            "history_file": str(self.history_file) if self.history_file else None,
            "log_level": self.log_level,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SparqliteConfig":
        return cls(
            directory=_optional_path(data.get("directory")),
            query=data.get("query"),
            print_query=data.get("print_query", False),
            db=_optional_path(data.get("db")),
            toggle_prefix=data.get("toggle_prefix", False),
            history_file=_optional_path(data.get("history_file")),
            log_level=data.get("log_level", "WARNING"),
        )

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "SparqliteConfig":
        """Defaults taken from SPARQLITE_* environment variables."""
        env = os.environ if environ is None else environ
        return cls(
            db=_optional_path(env.get(ENV_DB)),
            history_file=_optional_path(env.get(ENV_HISTORY_FILE)),
            log_level=env.get(ENV_LOG_LEVEL, "WARNING").upper(),
        )

    def merge_args(self, args: Any) -> "SparqliteConfig":
        """
        Return a copy with command-line values applied.

        Only options actually given on the command line (not None / not
        False) override the current values.
        """
        data = self.to_dict()
        for key in ("directory", "query", "db", "history_file"):
            value = getattr(args, key, None)
            if value is not None:
                data[key] = value
        for key in ("print_query", "toggle_prefix"):
            if getattr(args, key, False):
                data[key] = True
        if getattr(args, "verbose", False):
            data["log_level"] = "DEBUG"
        return SparqliteConfig.from_dict(data)

    def validate(self) -> None:
        """
        Check the configuration.

        Raises:
            ConfigValidationError: on the first problem found
        """
        if self.directory is not None and not self.directory.is_dir():
            raise ConfigValidationError(f"Dataset directory not found: {self.directory}")
        if self.db is not None and self.db.exists() and not self.db.is_dir():
            raise ConfigValidationError(f"Database path is not a directory: {self.db}")
        if self.log_level.upper() not in LOG_LEVELS:
            raise ConfigValidationError(
                f"Unknown log level {self.log_level!r}, expected one of {', '.join(LOG_LEVELS)}"
            )

    @property
    def log_level_value(self) -> int:
        return getattr(logging, self.log_level.upper())
