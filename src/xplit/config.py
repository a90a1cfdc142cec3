"""Configuration loading and validation."""

from __future__ import annotations

import os
import tomllib
from dataclasses import dataclass, field
from pathlib import Path

import structlog

log = structlog.get_logger()

_SEARCH_PATHS = [
    lambda: os.environ.get("XPLIT_CONFIG"),
    lambda: "config.toml",
    lambda: str(Path.home() / ".config" / "xplit" / "config.toml"),
]


@dataclass
class XrandrConfig:
    tool: str = "xrandr"
    timeout: float = 0

    def __post_init__(self) -> None:
        if not self.tool.strip():
            raise ValueError("xrandr.tool must not be empty")
        if self.timeout < 0:
            raise ValueError(f"xrandr.timeout must be >= 0, got {self.timeout}")

    @property
    def timeout_seconds(self) -> float | None:
        """Timeout as passed to the runner; 0 means wait forever."""
        return self.timeout or None


@dataclass
class SplitConfig:
    default_percent: int = 50
    presets: list[int] = field(default_factory=lambda: [25, 33, 50, 67, 75])

    def __post_init__(self) -> None:
        if not 0 <= self.default_percent <= 100:
            raise ValueError(
                f"split.default_percent must be 0-100, got {self.default_percent}"
            )
        for p in self.presets:
            if not 0 <= p <= 100:
                raise ValueError(f"split.presets must be 0-100, got {p}")


@dataclass
class LoggingConfig:
    level: str = "INFO"


@dataclass
class Config:
    xrandr: XrandrConfig = field(default_factory=XrandrConfig)
    split: SplitConfig = field(default_factory=SplitConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    _config_path: str | None = None


def _find_config() -> Path | None:
    for getter in _SEARCH_PATHS:
        path_str = getter()
        if path_str and Path(path_str).is_file():
            return Path(path_str).resolve()
    return None


def _build_section(cls: type, data: dict) -> object:
    known = {f.name for f in cls.__dataclass_fields__.values()}
    filtered = {k: v for k, v in data.items() if k in known}
    return cls(**filtered)


def load_config(path: str | Path | None = None) -> Config:
    """Load configuration from TOML file."""
    if path is not None:
        config_path = Path(path).resolve()
        if not config_path.is_file():
            raise FileNotFoundError(f"Config not found: {config_path}")
    else:
        config_path = _find_config()

    if config_path is None:
        log.debug("no_config_found, using defaults")
        return Config()

    log.info("loading_config", path=str(config_path))
    with open(config_path, "rb") as f:
        raw = tomllib.load(f)

    cfg = Config(
        xrandr=_build_section(XrandrConfig, raw.get("xrandr", {})),
        split=_build_section(SplitConfig, raw.get("split", {})),
        logging=_build_section(LoggingConfig, raw.get("logging", {})),
        _config_path=str(config_path),
    )
    return cfg
