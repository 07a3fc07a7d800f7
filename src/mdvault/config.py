"""Application configuration: settings schema and config.yaml loader"""

import os
from pathlib import Path
from typing import Any, Optional

import yaml
from pydantic import BaseModel, Field, field_validator


CONFIG_FILE = "config.yaml"
ENV_PREFIX = "MDVAULT_"


class Settings(BaseModel):
    app_name:         str = "mdvault"
    vault_path:       str = Field(default=".",          description="Root directory of the markdown vault")
    extensions:       list[str] = Field(default=[".md"], description="File extensions treated as markdown")
    parser_config:    str = Field(default="gfm-like",   description="MarkdownIt parser preset name")
    archive_heading:  str = Field(default="Archived",   description="Heading text of the archive section")
    archive_tag:      str = Field(default="todo",       description="Only archive files tagged #<tag>; empty = all files")
    ntfy_url:         str = Field(default="https://ntfy.sh", description="ntfy server for conflict notifications")
    ntfy_topic:       Optional[str] = Field(default=None, description="ntfy topic for conflict notifications")
    conflict_pattern: Optional[str] = Field(default=None, description="Glob (relative to the vault) naming sync-conflict files")
    log_level:        str = Field(default="WARNING", pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$")

    @field_validator("extensions", mode="before")
    @classmethod
    def _split_extensions(cls, value: Any) -> Any:
        """Accept 'md,.markdown' style strings (env vars) as well as lists."""
        if isinstance(value, str):
            value = [v.strip() for v in value.split(",") if v.strip()]
        if isinstance(value, list):
            return [v if str(v).startswith(".") else f".{v}" for v in value]
        return value

    @field_validator("log_level", mode="before")
    @classmethod
    def _upper_level(cls, value: Any) -> Any:
        return value.upper() if isinstance(value, str) else value


def load_config(overrides: dict[str, Any] = None) -> Settings:
    """Load Settings from config.yaml, then MDVAULT_<FIELD> env vars, then non-None CLI overrides."""
    data: dict[str, Any] = {}
    if Path(CONFIG_FILE).exists():
        try:
            data = yaml.safe_load(Path(CONFIG_FILE).read_text(encoding="utf-8")) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid {CONFIG_FILE}: {e}") from e
        if not isinstance(data, dict):
            raise ValueError(f"Invalid {CONFIG_FILE}: expected a mapping, got {type(data).__name__}")

    for name in Settings.model_fields:
        if val := os.getenv(f"{ENV_PREFIX}{name.upper()}"):
            data[name] = val

    if overrides:
        data.update({k: v for k, v in overrides.items() if v is not None})
    return Settings(**data)
