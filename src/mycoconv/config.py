"""Application configuration: settings schema and config.yaml loader"""

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field


CONFIG_FILE = "config.yaml"


class Settings(BaseModel):
    app_name:         str  = "mycoconv"
    hypha_prefix:     str  = Field(default="/hypha/",  description="URL prefix of internal hypha links")
    binary_prefix:    str  = Field(default="/binary/", description="URL prefix of hypha media files")
    default_language: str  = Field(default="plain",    description="Code block language meaning 'unspecified'")
    parser_config:    str  = Field(default="gfm-like", description="MarkdownIt parser preset name")
    linkify:          bool = Field(default=True,       description="Turn bare URLs in Markdown into links")
    output_dir:       str  = Field(default="converted", description="Directory for converted documents")
    log_level:        str  = Field(default="WARNING", pattern="^(DEBUG|INFO|WARNING|ERROR)$")


def load_config(overrides: dict[str, Any] = None) -> Settings:
    """Load Settings from config.yaml, then MYCOCONV_<FIELD> env vars, then non-None CLI overrides."""
    data: dict[str, Any] = {}
    if Path(CONFIG_FILE).exists():
        try:
            data = yaml.safe_load(Path(CONFIG_FILE).read_text()) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid {CONFIG_FILE}: {e}") from e

    for name in Settings.model_fields:
        if val := os.getenv(f"MYCOCONV_{name.upper()}"):
            data[name] = val

    if overrides:
        data.update({k: v for k, v in overrides.items() if v is not None})
    return Settings(**data)
