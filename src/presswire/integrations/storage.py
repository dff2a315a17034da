"""Local object storage for synthesized audio.

Objects live at ``{root}/{bucket}/{key}`` and are served from
``{public_base_url}/{bucket}/{key}``.  Writes overwrite (upsert).
"""

from __future__ import annotations

import logging
from pathlib import Path

from presswire.config import StorageConfig
from presswire.errors import StorageError

logger = logging.getLogger(__name__)


def audio_key(brand: str, article_id: str, extension: str) -> str:
    """Content-addressed key for an article's narration."""
    return f"{brand}/{article_id}.{extension}"


class AudioStorage:
    def __init__(self, config: StorageConfig) -> None:
        self.bucket = config.bucket
        self.root = Path(config.root) / config.bucket
        self.public_base_url = config.public_base_url.rstrip("/")

    def upload(self, key: str, data: bytes) -> str:
        """Write ``data`` under ``key`` and return its public URL.

        Raises:
            StorageError: If the object cannot be written.
        """
        target = self.root / key
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_bytes(data)
        except OSError as exc:
            raise StorageError(f"Failed to store {key}: {exc}") from exc
        logger.info("Stored %s (%d bytes)", key, len(data))
        return self.public_url(key)

    def public_url(self, key: str) -> str:
        return f"{self.public_base_url}/{self.bucket}/{key}"
