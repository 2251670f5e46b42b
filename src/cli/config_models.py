"""Pydantic configuration models for the facts CLI."""

import os
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from facts import DEFAULT_INTERPRETER

VALID_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}

FACTS_PATH_ENV = "FACTS_PATH"


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = "WARNING"
    json_mode: bool = False

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        v_upper = v.upper()
        if v_upper not in VALID_LOG_LEVELS:
            raise ValueError(f"Invalid log level: {v}. Must be one of {VALID_LOG_LEVELS}")
        return v_upper


class ExecutionConfig(BaseModel):
    """External command execution."""

    interpreter: str = DEFAULT_INTERPRETER
    timeout: Optional[float] = None  # None = wait for the command forever

    @field_validator("timeout")
    @classmethod
    def validate_timeout(cls, v: Optional[float]) -> Optional[float]:
        if v is not None and v <= 0:
            raise ValueError(f"timeout must be positive, got {v}")
        return v


class CatalogConfig(BaseModel):
    """Which fact definitions get loaded."""

    load_builtin: bool = True
    fact_dirs: list[Path] = Field(default_factory=list)

    @model_validator(mode="after")
    def expand_paths(self):
        """Expand ~ in fact directories."""
        self.fact_dirs = [p.expanduser() for p in self.fact_dirs]
        return self


class FactsConfig(BaseModel):
    """Main configuration model."""

    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    execution: ExecutionConfig = Field(default_factory=ExecutionConfig)
    catalog: CatalogConfig = Field(default_factory=CatalogConfig)

    @model_validator(mode="after")
    def add_env_fact_dirs(self):
        """Append directories listed in $FACTS_PATH."""
        env_path = os.getenv(FACTS_PATH_ENV, "")
        for entry in env_path.split(os.pathsep):
            if not entry:
                continue
            path = Path(entry).expanduser()
            if path not in self.catalog.fact_dirs:
                self.catalog.fact_dirs.append(path)
        return self

    @classmethod
    def from_dict(cls, data: dict) -> "FactsConfig":
        """Create config from a parsed YAML dict."""
        return cls.model_validate(data)
