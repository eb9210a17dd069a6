"""
Configuration loader for AuraGold.

What it does:
- Reads static settings from `config/config.yaml` (all keys optional; a
  missing file yields defaults).
- Applies environment overrides: `AURAGOLD_STORE_PATH`, `AURAGOLD_EXPORT_DIR`,
  `AURAGOLD_LOG_LEVEL`, and the `GEMINI_API_KEY` secret.
- Validates the result with Pydantic models.

Where it is used:
- Called by `auragold.main` to build the store, the transfer service and the
  summary client.
"""

import os
import pathlib
from typing import Any, Dict, Literal

import yaml
from pydantic import BaseModel, Field, field_validator


class LLMSettings(BaseModel):
    """Trade summary provider settings."""
    provider: Literal["gemini", "offline"] = "gemini"
    model: str = "gemini-3-flash-preview"
    temperature: float = Field(0.7, ge=0, le=2)
    timeout_s: float = Field(30.0, gt=0)
    api_key: str = ""


class Settings(BaseModel):
    """Runtime settings assembled from YAML + environment variables."""
    store_path: str = "data/auragold.sqlite"
    export_dir: str = "exports"
    default_lang: Literal["en", "zh"] = "zh"
    default_theme: Literal["light", "dark"] = "dark"
    show_master_ledger: bool = True
    handling_fee_rate: float = Field(0.004, ge=0)
    log_level: str = "INFO"
    llm: LLMSettings = Field(default_factory=LLMSettings)

    @field_validator("store_path", "export_dir")
    @classmethod
    def not_empty(cls, v, info):
        if not v:
            raise ValueError(f"{info.field_name} must not be empty")
        return v

    @field_validator("log_level")
    @classmethod
    def upper_level(cls, v: str):
        return v.upper()


def load_settings(path: str = "config/config.yaml") -> Settings:
    """Load YAML config, apply env-var overrides, and return Settings."""
    p = pathlib.Path(path)
    config: Dict[str, Any] = {}
    if p.exists():
        with open(p, "r", encoding="utf-8") as f:
            config = yaml.safe_load(f) or {}

    overrides = {
        "store_path": os.getenv("AURAGOLD_STORE_PATH"),
        "export_dir": os.getenv("AURAGOLD_EXPORT_DIR"),
        "log_level": os.getenv("AURAGOLD_LOG_LEVEL"),
    }
    for key, val in overrides.items():
        if val:
            config[key] = val

    llm = dict(config.get("llm") or {})
    api_key = os.getenv("GEMINI_API_KEY", "")
    if api_key:
        llm["api_key"] = api_key
    config["llm"] = llm
    return Settings(**config)
