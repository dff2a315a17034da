"""Publish orchestrator: one authoritative transition, then fan-out.

``publish`` commits the status change, writes the OG-image URL, starts
audio, newsletter and social effects in the background without waiting,
and runs cross-posting inline because its sibling ids are part of the
response.  Only the status transition can fail the call.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field

from presswire.brands import Brand
from presswire.content.models import ContentItem, ContentStatus, Platform, utcnow
from presswire.content.store import ContentStore
from presswire.dispatchers.crosspost import CrossPostReplicator
from presswire.effects import EffectLauncher
from presswire.errors import ContentNotFoundError, PrimaryTransitionError
from presswire.result import Err, Ok
from presswire.templates import og_image_url

logger = logging.getLogger(__name__)

PUBLISHABLE = {ContentStatus.DRAFT, ContentStatus.PENDING_REVIEW, ContentStatus.PUBLISHED}


class PublishRequest(BaseModel):
    """Optional fan-out targets for a publish call."""

    cross_post_to: list[Brand] = Field(default_factory=list)
    share_to: list[Platform] = Field(default_factory=list)


@dataclass
class _ItemLock:
    lock: threading.Lock = field(default_factory=threading.Lock)
    users: int = 0


class PublishOrchestrator:
    def __init__(
        self,
        store: ContentStore,
        cross_poster: CrossPostReplicator,
        effects: EffectLauncher,
        *,
        clock: Callable[[], datetime] = utcnow,
    ) -> None:
        self.store = store
        self.cross_poster = cross_poster
        self.effects = effects
        self.clock = clock
        self._locks: dict[str, _ItemLock] = {}
        self._locks_guard = threading.Lock()

    @contextmanager
    def _item_lock(self, item_id: str) -> Iterator[None]:
        # Serializes concurrent publishes of the same item; the entry is
        # dropped once nobody holds or waits on it.
        with self._locks_guard:
            entry = self._locks.setdefault(item_id, _ItemLock())
            entry.users += 1
        try:
            with entry.lock:
                yield
        finally:
            with self._locks_guard:
                entry.users -= 1
                if entry.users == 0:
                    del self._locks[item_id]

    def publish(self, item_id: str, request: PublishRequest | None = None) -> ContentItem:
        """Publish an item and launch its effects.

        Re-publishing an already published item leaves ``published_at``
        alone and skips the auto-triggered effects (newsletter auto-send,
        auto-share platforms); explicitly requested cross-posts and shares
        still run, and the audio trigger short-circuits on a ready version.

        Raises:
            ContentNotFoundError: If the item does not exist.
            PrimaryTransitionError: If the status transition cannot be committed.
        """
        request = request or PublishRequest()
        with self._item_lock(item_id):
            item, republish = self._transition(item_id)
            item = self._write_og_image(item)
            self._launch_detached(item, request, republish=republish)
            if request.cross_post_to:
                item = self._cross_post(item, request.cross_post_to)
        return item

    # ── Steps ────────────────────────────────────────────────────

    def _transition(self, item_id: str) -> tuple[ContentItem, bool]:
        """Commit ``status = published``; returns the item and whether it already was."""
        item = self.store.get_item(item_id)
        if item.status not in PUBLISHABLE:
            raise PrimaryTransitionError(f"Cannot publish {item.status} item {item_id}")
        if item.status == ContentStatus.PUBLISHED and item.published_at is not None:
            logger.info("Item %s already published at %s", item_id, item.published_at)
            return item, True

        patch: dict[str, Any] = {"status": ContentStatus.PUBLISHED}
        if item.published_at is None:
            patch["published_at"] = self.clock()
        try:
            updated = self.store.update_item(item_id, patch)
        except ContentNotFoundError:
            raise
        except Exception as exc:
            raise PrimaryTransitionError(f"Failed to publish {item_id}: {exc}") from exc
        logger.info("Published %s (%s)", item_id, updated.brand)
        return updated, False

    def _write_og_image(self, item: ContentItem) -> ContentItem:
        try:
            author = self.store.get_author(item.author_id)
            url = og_image_url(item, author.name if author else None)
            if item.metadata.get("og_image_url") == url:
                return item
            return self.store.update_item(
                item.id, {"metadata": {**item.metadata, "og_image_url": url}}
            )
        except Exception:
            logger.warning("Failed to write OG image for %s", item.id, exc_info=True)
            return item

    def _launch_detached(self, item: ContentItem, request: PublishRequest, *, republish: bool) -> None:
        launches: list[tuple[str, Callable[[], Any]]] = [
            ("audio", lambda: self.effects.trigger_audio(item.id)),
        ]
        if not republish:
            launches.append(("newsletter", lambda: self.effects.auto_newsletter(item.id)))
        if request.share_to or not republish:
            launches.append(
                (
                    "social",
                    lambda: self.effects.share(
                        item.id, item.brand, request.share_to, include_auto=not republish
                    ),
                )
            )
        for name, launch in launches:
            try:
                launch()
            except Exception:
                logger.warning("Could not launch %s effect for %s", name, item.id, exc_info=True)

    def _cross_post(self, item: ContentItem, targets: list[Brand]) -> ContentItem:
        try:
            result = self.cross_poster.replicate(item, targets)
        except Exception:
            logger.warning("Cross-posting %s raised", item.id, exc_info=True)
            return item
        match result:
            case Ok(outcome) if outcome.source is not None:
                if outcome.failed:
                    logger.warning("Cross-post failures for %s: %s", item.id, outcome.failed)
                return outcome.source
            case Err() as err:
                logger.warning("Cross-posting %s failed: %s", item.id, err.describe())
        return item
