"""Application configuration: settings schema and config.yaml loader"""

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, field_validator


CONFIG_FILE = "config.yaml"


class Settings(BaseModel):
    app_name:           str = "docsearch"
    db_url:             str = "sqlite:///docsearch.db"
    docs_dir:           str = Field(default="resources/docs", description="Root holding one directory per version")
    versions:           list[str] = Field(default_factory=list, description="Versions indexed when none are given")
    index_name:         str = Field(default="prod_docs", min_length=1, description="Production index name")
    staging_suffix:     str = Field(default="_tmp", min_length=1, description="Appended to index_name for staging")
    parser_config:      str = Field(default="gfm-like", description="MarkdownIt parser preset name")
    index_bullet_lists: bool = Field(default=False, description="Expand unordered lists instead of skipping them")
    workers:            int = Field(default=1, ge=1, description="Document worker threads; 1 is sequential")
    log_level:          str = Field(default="INFO", pattern="^(DEBUG|INFO|WARNING|ERROR)$")

    @field_validator("versions", mode="before")
    @classmethod
    def _split_versions(cls, value: Any) -> Any:
        """Accept a comma-separated string (env vars) as well as a list."""
        if isinstance(value, str):
            return [v.strip() for v in value.split(",") if v.strip()]
        return value

    @property
    def staging_name(self) -> str:
        return f"{self.index_name}{self.staging_suffix}"


def load_config(overrides: dict[str, Any] = None) -> Settings:
    """Load Settings from config.yaml, then DOCSEARCH_<FIELD> env vars, then non-None CLI overrides."""
    data: dict[str, Any] = {}
    if Path(CONFIG_FILE).exists():
        try:
            data = yaml.safe_load(Path(CONFIG_FILE).read_text()) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid {CONFIG_FILE}: {e}") from e
        if not isinstance(data, dict):
            raise ValueError(f"Invalid {CONFIG_FILE}: expected a mapping, got {type(data).__name__}")

    for name in Settings.model_fields:
        if val := os.getenv(f"DOCSEARCH_{name.upper()}"):
            data[name] = val

    if overrides:
        data.update({k: v for k, v in overrides.items() if v is not None})
    return Settings(**data)
