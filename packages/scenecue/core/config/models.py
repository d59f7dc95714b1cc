"""Configuration models for SceneCue."""

from __future__ import annotations

from pathlib import Path
from typing import Self

from pydantic import BaseModel, ConfigDict, Field

from scenecue.core.sequencer.player import DEFAULT_NAME_PREFIX, DEFAULT_PADDING_MS


class ConfigBase(BaseModel):
    """Base class for SceneCue configurations.

    Provides loading from JSON/YAML files with defaults.
    """

    model_config = ConfigDict(extra="ignore")  # Forward compatibility

    @classmethod
    def default_path(cls) -> Path:
        """Return the default config file path for this config type."""
        raise NotImplementedError(f"{cls.__name__} must implement default_path()")

    @classmethod
    def load_or_default(cls, path: Path | str | None = None) -> Self:
        """Load config from path, falling back to the default path.

        A missing file at the default path yields an all-defaults config.

        Raises:
            FileNotFoundError: If an explicit path does not exist
            ValidationError: If config is invalid
        """
        from scenecue.core.config.loader import load_config

        if path is None:
            path = cls.default_path()
            if not Path(path).exists():
                return cls()
        raw = load_config(path)
        return cls.model_validate(raw)


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = Field(default="INFO", pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$")
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    structured: bool = Field(default=False, description="Emit JSON lines instead of text")
    filename: str | None = Field(default=None, description="Log file path (stdout when unset)")


class SequencerConfig(BaseModel):
    """Sequence playback configuration."""

    deactivation_padding_ms: float = Field(
        default=DEFAULT_PADDING_MS,
        ge=0.0,
        description="Delay after the last keyframe before a sequence stops reporting as playing",
    )
    name_prefix: str = Field(
        default=DEFAULT_NAME_PREFIX,
        min_length=1,
        description="Prefix for names generated for unnamed sequences",
    )
    tracing_enabled: bool = Field(
        default=False, description="Collect playback trace events in memory"
    )
    max_trace_events: int | None = Field(
        default=1000, gt=0, description="Oldest trace events are dropped past this count"
    )

    model_config = ConfigDict(extra="forbid", frozen=True)


class AppConfig(ConfigBase):
    """Application-level configuration."""

    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    sequencer: SequencerConfig = Field(default_factory=SequencerConfig)
    library_path: str | None = Field(
        default=None, description="Project sequence library to load (JSON or YAML)"
    )

    @classmethod
    def default_path(cls) -> Path:
        return Path("config.json")
