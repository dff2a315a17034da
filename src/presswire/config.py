"""Unified configuration loaded from .presswire.toml and env vars.

Loading order: defaults → TOML file → env vars.
"""

from __future__ import annotations

import logging
import os
import tomllib
from enum import StrEnum
from pathlib import Path

from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)

CONFIG_FILENAME = ".presswire.toml"
GLOBAL_CONFIG_PATH = Path.home() / ".config" / "presswire" / "config.toml"

DEFAULT_ADMIN_URL = "https://media-network-admin.vercel.app"


class StoreConfig(BaseModel):
    """[store] section."""

    data_dir: str = "./data"


class SiteConfig(BaseModel):
    """[site] section."""

    admin_url: str = DEFAULT_ADMIN_URL


class TTSConfig(BaseModel):
    """[tts] section: ElevenLabs speech synthesis."""

    api_key: str = ""
    base_url: str = "https://api.elevenlabs.io"
    model_id: str = "eleven_multilingual_v2"
    max_chars: int = 5000
    # Rough mp3 byte rate used for the duration estimate.
    bytes_per_second: int = 16000
    timeout: int = 120

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key)


class StorageConfig(BaseModel):
    """[storage] section: where synthesized audio is written."""

    root: str = "./data/storage"
    public_base_url: str = "http://localhost:8000/storage"
    bucket: str = "article-audio"


class EffectMode(StrEnum):
    """How the orchestrator launches detached effects."""

    INLINE = "inline"
    HTTP = "http"


class EffectsConfig(BaseModel):
    """[effects] section."""

    mode: EffectMode = EffectMode.INLINE
    max_workers: int = 4
    http_timeout: int = 10


class PresswireConfig(BaseModel):
    """Top-level configuration model."""

    store: StoreConfig = Field(default_factory=StoreConfig)
    site: SiteConfig = Field(default_factory=SiteConfig)
    tts: TTSConfig = Field(default_factory=TTSConfig)
    storage: StorageConfig = Field(default_factory=StorageConfig)
    effects: EffectsConfig = Field(default_factory=EffectsConfig)

    @property
    def is_tts_configured(self) -> bool:
        return self.tts.is_configured

    @property
    def data_dir(self) -> Path:
        return Path(self.store.data_dir)


def load_config(path: str | Path | None = None) -> PresswireConfig:
    """Load configuration from a TOML file.

    Search order:
    1. Explicit path (if provided)
    2. .presswire.toml in CWD
    3. ~/.config/presswire/config.toml

    Then overlay environment variables.
    """
    data: dict[str, object] = {}

    if path is not None:
        toml_path = Path(path)
        if toml_path.exists():
            data = _load_toml(toml_path)
        else:
            logger.warning("Config file not found: %s", toml_path)
    else:
        local = Path(".") / CONFIG_FILENAME
        if local.exists():
            data = _load_toml(local)
            logger.info("Loaded config from %s", local)
        elif GLOBAL_CONFIG_PATH.exists():
            data = _load_toml(GLOBAL_CONFIG_PATH)
            logger.info("Loaded config from %s", GLOBAL_CONFIG_PATH)

    config = PresswireConfig.model_validate(data) if data else PresswireConfig()
    return _apply_env_vars(config)


def _load_toml(path: Path) -> dict[str, object]:
    """Load a TOML file and return the data dict."""
    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except (tomllib.TOMLDecodeError, OSError) as exc:
        logger.warning("Failed to parse %s: %s", path, exc)
        return {}


def _apply_env_vars(config: PresswireConfig) -> PresswireConfig:
    """Apply environment variable overrides to config."""
    data = config.model_dump()

    env_mapping: dict[str, tuple[str, str]] = {
        "PRESSWIRE_DATA_DIR": ("store", "data_dir"),
        "PRESSWIRE_SITE_URL": ("site", "admin_url"),
        "ELEVENLABS_API_KEY": ("tts", "api_key"),
        "PRESSWIRE_STORAGE_ROOT": ("storage", "root"),
        "PRESSWIRE_STORAGE_URL": ("storage", "public_base_url"),
        "PRESSWIRE_EFFECT_MODE": ("effects", "mode"),
    }

    for env_var, (section, field) in env_mapping.items():
        value = os.environ.get(env_var)
        if value is not None:
            data[section][field] = value

    workers_raw = os.environ.get("PRESSWIRE_MAX_WORKERS")
    if workers_raw is not None:
        data["effects"]["max_workers"] = int(workers_raw)

    return PresswireConfig.model_validate(data)
