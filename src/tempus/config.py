"""
Configuration for tempus.

Defines TempusSettings, a frozen dataclass carrying runtime configuration, loaded with
precedence environment > TOML > defaults.

Import DAG discipline
- Depends only on the standard library.
- Imported by tempus.core.grammar (description cache size); never imports tempus.core.

Notes
- ``description_cache_size`` bounds the LRU cache behind
  ``tempus.core.grammar.cached_format_description``; 0 disables caching.
- ``log_level`` is applied to the "tempus" logger by ``configure_logging``; the library
  never installs handlers.
"""

from __future__ import annotations

import logging
import os
import tomllib
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any

__all__ = [
    "TempusSettings",
    "get_settings",
    "reset_settings",
    "configure_logging",
]

_LOG_LEVELS = {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}


@dataclass(frozen=True)
class TempusSettings:
    """
    Runtime settings for tempus.

    Attributes:
        description_cache_size (int): Maximum number of compiled format descriptions kept
            by ``cached_format_description`` (0 disables caching).
        log_level (str): Level name applied to the "tempus" logger by configure_logging.

    Examples:
        >>> from tempus.config import TempusSettings
        >>> TempusSettings(description_cache_size=16)  # doctest: +ELLIPSIS
        TempusSettings(...)
    """

    description_cache_size: int = 128
    log_level: str = "WARNING"

    @classmethod
    def _apply_mapping(cls, base: TempusSettings, cfg: dict[str, Any] | None) -> TempusSettings:
        """Apply a loose config mapping onto TempusSettings, returning a new instance."""
        if not isinstance(cfg, dict):
            return base

        s = base

        if "description_cache_size" in cfg:
            try:
                size = int(cfg["description_cache_size"])
            except (TypeError, ValueError):
                size = s.description_cache_size
            s = replace(s, description_cache_size=max(size, 0))

        if "log_level" in cfg and isinstance(cfg["log_level"], str):
            level = cfg["log_level"].strip().upper()
            if level in _LOG_LEVELS:
                s = replace(s, log_level=level)

        return s

    @classmethod
    def from_env(
        cls, base: TempusSettings | None = None, prefix: str = "TEMPUS_"
    ) -> TempusSettings:
        """
        Build TempusSettings from environment variables. Precedence is env > base > defaults.

        Recognized variables:
            - TEMPUS_DESCRIPTION_CACHE_SIZE
            - TEMPUS_LOG_LEVEL (CRITICAL | ERROR | WARNING | INFO | DEBUG)
        """
        s = base or cls()

        mapping: dict[str, Any] = {}
        v = os.getenv(prefix + "DESCRIPTION_CACHE_SIZE")
        if v:
            mapping["description_cache_size"] = v
        v = os.getenv(prefix + "LOG_LEVEL")
        if v:
            mapping["log_level"] = v

        return cls._apply_mapping(s, mapping)

    @classmethod
    def from_toml(cls, path: str | os.PathLike[str] | None = None) -> TempusSettings:
        """
        Build TempusSettings from a TOML file.

        Search order when `path` is None:
            1) ./tempus.toml (with either a top-level [tempus] table or direct keys)
            2) ./pyproject.toml under [tool.tempus]

        Returns defaults if no file is present or none of them configures tempus.
        """
        s = cls()

        cand: list[Path] = []
        if path is not None:
            cand.append(Path(path))
        else:
            cand.append(Path.cwd() / "tempus.toml")
            cand.append(Path.cwd() / "pyproject.toml")

        cfg: dict[str, Any] | None = None
        for p in cand:
            if not p.exists():
                continue
            with p.open("rb") as fh:
                data = tomllib.load(fh)
            if p.name == "pyproject.toml":
                tool = data.get("tool", {})
                cfg = tool.get("tempus") if isinstance(tool, dict) else None
            elif isinstance(data.get("tempus"), dict):
                cfg = data["tempus"]
            else:
                cfg = data
            if cfg:
                break

        return cls._apply_mapping(s, cfg)

    @classmethod
    def load(cls, path: str | os.PathLike[str] | None = None) -> TempusSettings:
        """
        Load TempusSettings applying precedence: environment > TOML > defaults.

        Args:
            path: Optional explicit TOML path. If None, search tempus.toml, pyproject.toml.

        Raises:
            tomllib.TOMLDecodeError: If a candidate file is not valid TOML.
        """
        s = cls.from_toml(path)
        s = cls.from_env(base=s)
        return s


_settings: TempusSettings | None = None


def get_settings() -> TempusSettings:
    """Return the process-wide settings, loading them on first use."""
    global _settings
    if _settings is None:
        _settings = TempusSettings.load()
    return _settings


def reset_settings() -> None:
    """Forget loaded settings so the next get_settings() call reloads them."""
    global _settings
    _settings = None


def configure_logging(settings: TempusSettings | None = None) -> None:
    """Set the level of the "tempus" logger from settings."""
    settings = settings or get_settings()
    logging.getLogger("tempus").setLevel(settings.log_level)
