"""JSON-backed content store gateway.

Persists articles, authors and every publish-effect record in a single
JSON file, loaded on init and saved after every write operation.  Writes
come from the request thread and from background dispatchers, so every
operation holds a re-entrant lock.  Reads hand out deep copies; callers
mutate through ``update_*`` with a patch dict.
"""

from __future__ import annotations

import json
import logging
import threading
from collections.abc import Iterable
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, ValidationError

from presswire.brands import Brand
from presswire.content.models import (
    AudioStatus,
    AudioVersion,
    Author,
    ContentItem,
    ContentStatus,
    NewsletterCampaign,
    NewsletterSettings,
    NewsletterSubscriber,
    Platform,
    SocialMediaSettings,
    SocialShareLogEntry,
    utcnow,
)
from presswire.errors import ContentNotFoundError

logger = logging.getLogger(__name__)

STORE_FILENAME = ".presswire-store.json"
SHARE_LOG_LIMIT = 100


class _StoreData(BaseModel):
    """Internal wrapper for JSON serialization."""

    items: list[ContentItem] = Field(default_factory=list)
    authors: list[Author] = Field(default_factory=list)
    audio_versions: list[AudioVersion] = Field(default_factory=list)
    campaigns: list[NewsletterCampaign] = Field(default_factory=list)
    newsletter_settings: list[NewsletterSettings] = Field(default_factory=list)
    subscribers: list[NewsletterSubscriber] = Field(default_factory=list)
    social_settings: list[SocialMediaSettings] = Field(default_factory=list)
    share_log: list[SocialShareLogEntry] = Field(default_factory=list)


def _patched(model: BaseModel, patch: dict[str, Any]) -> BaseModel:
    """Return a validated copy of ``model`` with ``patch`` applied."""
    data = model.model_dump()
    data.update(patch)
    return type(model).model_validate(data)


def _replace(records: list[Any], updated: Any) -> None:
    for i, record in enumerate(records):
        if record.id == updated.id:
            records[i] = updated
            return


class ContentStore:
    """CRUD gateway over the content network's records.

    Pass ``data_dir=None`` for a purely in-memory store.
    """

    def __init__(self, data_dir: Path | None = None) -> None:
        self._path = data_dir / STORE_FILENAME if data_dir is not None else None
        self._lock = threading.RLock()
        self._data = self._load()

    # ── Private helpers ──────────────────────────────────────────

    def _load(self) -> _StoreData:
        if self._path is None or not self._path.exists():
            return _StoreData()
        try:
            raw = json.loads(self._path.read_text(encoding="utf-8"))
            return _StoreData.model_validate(raw)
        except (json.JSONDecodeError, ValidationError):
            logger.warning("Corrupt content store at %s, starting fresh", self._path)
            return _StoreData()

    def _save(self) -> None:
        if self._path is None:
            return
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._path.write_text(
            self._data.model_dump_json(indent=2),
            encoding="utf-8",
        )

    def _find_item(self, item_id: str) -> ContentItem | None:
        for item in self._data.items:
            if item.id == item_id:
                return item
        return None

    # ── Content items ────────────────────────────────────────────

    def get_item(self, item_id: str) -> ContentItem:
        """Return an item by id.

        Raises:
            ContentNotFoundError: If the id does not exist.
        """
        with self._lock:
            item = self._find_item(item_id)
            if item is None:
                raise ContentNotFoundError("article", item_id)
            return item.model_copy(deep=True)

    def find_item(self, item_id: str) -> ContentItem | None:
        """Return an item by id, or None if not found."""
        with self._lock:
            item = self._find_item(item_id)
            return item.model_copy(deep=True) if item is not None else None

    def update_item(self, item_id: str, patch: dict[str, Any]) -> ContentItem:
        """Apply a field patch to an item and return the committed result.

        Raises:
            ContentNotFoundError: If the id does not exist.
            pydantic.ValidationError: If the patch produces an invalid item.
        """
        with self._lock:
            item = self._find_item(item_id)
            if item is None:
                raise ContentNotFoundError("article", item_id)
            updated = _patched(item, {**patch, "updated_at": utcnow()})
            _replace(self._data.items, updated)
            self._save()
            return updated.model_copy(deep=True)

    def insert_item(self, item: ContentItem) -> ContentItem:
        """Insert a new item.

        Raises:
            ValueError: If an item with the same id or (brand, slug) exists.
        """
        with self._lock:
            for existing in self._data.items:
                if existing.id == item.id:
                    raise ValueError(f"Duplicate article id: {item.id}")
                if existing.brand == item.brand and existing.slug == item.slug:
                    raise ValueError(f"Slug already taken in {item.brand}: {item.slug}")
            stored = item.model_copy(deep=True)
            self._data.items.append(stored)
            self._save()
            return stored.model_copy(deep=True)

    def list_items(
        self,
        brand: Brand | None = None,
        status: ContentStatus | None = None,
    ) -> list[ContentItem]:
        """Return items, optionally filtered by brand and/or status."""
        with self._lock:
            results = self._data.items
            if brand is not None:
                results = [i for i in results if i.brand == brand]
            if status is not None:
                results = [i for i in results if i.status == status]
            return [i.model_copy(deep=True) for i in results]

    # ── Authors ──────────────────────────────────────────────────

    def upsert_author(self, author: Author) -> None:
        with self._lock:
            self._data.authors = [a for a in self._data.authors if a.id != author.id]
            self._data.authors.append(author)
            self._save()

    def get_author(self, author_id: str | None) -> Author | None:
        if not author_id:
            return None
        with self._lock:
            for author in self._data.authors:
                if author.id == author_id:
                    return author.model_copy()
            return None

    # ── Audio versions ───────────────────────────────────────────

    def find_ready_audio(self, article_id: str) -> AudioVersion | None:
        """Return the ready audio version for an article, if one exists."""
        with self._lock:
            for version in self._data.audio_versions:
                if version.article_id == article_id and version.status == AudioStatus.READY:
                    return version.model_copy()
            return None

    def insert_audio(self, version: AudioVersion) -> AudioVersion:
        with self._lock:
            self._data.audio_versions.append(version.model_copy())
            self._save()
            return version.model_copy()

    def update_audio(self, version_id: str, patch: dict[str, Any]) -> AudioVersion:
        with self._lock:
            for version in self._data.audio_versions:
                if version.id == version_id:
                    updated = _patched(version, patch)
                    _replace(self._data.audio_versions, updated)
                    self._save()
                    return updated.model_copy()
            raise ContentNotFoundError("audio version", version_id)

    def list_audio(self, article_id: str) -> list[AudioVersion]:
        with self._lock:
            return [
                v.model_copy() for v in self._data.audio_versions if v.article_id == article_id
            ]

    # ── Newsletter ───────────────────────────────────────────────

    def get_newsletter_settings(self, brand: Brand) -> NewsletterSettings | None:
        with self._lock:
            for settings in self._data.newsletter_settings:
                if settings.brand == brand:
                    return settings.model_copy()
            return None

    def upsert_newsletter_settings(self, settings: NewsletterSettings) -> None:
        with self._lock:
            self._data.newsletter_settings = [
                s for s in self._data.newsletter_settings if s.brand != settings.brand
            ]
            self._data.newsletter_settings.append(settings)
            self._save()

    def add_subscriber(self, subscriber: NewsletterSubscriber) -> None:
        with self._lock:
            self._data.subscribers.append(subscriber)
            self._save()

    def list_active_subscribers(self, brand: Brand) -> list[NewsletterSubscriber]:
        with self._lock:
            return [
                s.model_copy()
                for s in self._data.subscribers
                if s.brand == brand and s.is_active
            ]

    def insert_campaign(self, campaign: NewsletterCampaign) -> NewsletterCampaign:
        with self._lock:
            self._data.campaigns.append(campaign.model_copy(deep=True))
            self._save()
            return campaign.model_copy(deep=True)

    def get_campaign(self, campaign_id: str) -> NewsletterCampaign:
        """Return a campaign by id.

        Raises:
            ContentNotFoundError: If the id does not exist.
        """
        with self._lock:
            for campaign in self._data.campaigns:
                if campaign.id == campaign_id:
                    return campaign.model_copy(deep=True)
            raise ContentNotFoundError("campaign", campaign_id)

    def update_campaign(self, campaign_id: str, patch: dict[str, Any]) -> NewsletterCampaign:
        with self._lock:
            campaign = self.get_campaign(campaign_id)
            updated = _patched(campaign, patch)
            _replace(self._data.campaigns, updated)
            self._save()
            return updated.model_copy(deep=True)

    def list_campaigns(self, brand: Brand | None = None) -> list[NewsletterCampaign]:
        with self._lock:
            return [
                c.model_copy(deep=True)
                for c in self._data.campaigns
                if brand is None or c.brand == brand
            ]

    # ── Social ───────────────────────────────────────────────────

    def get_social_settings(
        self,
        brand: Brand,
        platforms: Iterable[Platform] | None = None,
    ) -> list[SocialMediaSettings]:
        """Return a brand's per-platform settings, optionally limited to ``platforms``."""
        wanted = set(platforms) if platforms is not None else None
        with self._lock:
            return [
                s.model_copy(deep=True)
                for s in self._data.social_settings
                if s.brand == brand and (wanted is None or s.platform in wanted)
            ]

    def upsert_social_settings(self, settings: SocialMediaSettings) -> None:
        with self._lock:
            self._data.social_settings = [
                s
                for s in self._data.social_settings
                if not (s.brand == settings.brand and s.platform == settings.platform)
            ]
            self._data.social_settings.append(settings)
            self._save()

    def append_share_log(self, entry: SocialShareLogEntry) -> None:
        with self._lock:
            self._data.share_log.append(entry)
            self._save()

    def list_share_log(
        self,
        article_id: str | None = None,
        brand: Brand | None = None,
        limit: int = SHARE_LOG_LIMIT,
    ) -> list[SocialShareLogEntry]:
        """Return share-log rows, newest first."""
        with self._lock:
            rows = [
                e
                for e in self._data.share_log
                if (article_id is None or e.article_id == article_id)
                and (brand is None or e.brand == brand)
            ]
            # Ties on shared_at keep newest-appended first.
            rows.reverse()
            rows.sort(key=lambda e: e.shared_at, reverse=True)
            return [e.model_copy() for e in rows[:limit]]
