"""Cross-post replicator: copy a published article into sibling brands.

Every target brand is attempted independently; a failed replica is
logged and skipped without touching the others.  Successful sibling ids
are appended to the source's ``cross_posted_to`` in one write at the end.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from pydantic import BaseModel, Field

from presswire.brands import Brand
from presswire.content.models import ContentItem, ContentStatus, new_id, utcnow
from presswire.content.store import ContentStore
from presswire.result import WRITE_FAILED, DispatchResult, Err, Ok

logger = logging.getLogger(__name__)

CROSS_POSTED_TAG = "cross-posted"


class CrossPostOutcome(BaseModel):
    created: dict[Brand, str] = Field(default_factory=dict)
    skipped: list[Brand] = Field(default_factory=list)
    failed: dict[str, str] = Field(default_factory=dict)
    source: ContentItem | None = None

    @property
    def created_ids(self) -> list[str]:
        return list(self.created.values())


def crosspost_slug(slug: str, brand: Brand | str) -> str:
    return f"{slug}-x-{Brand(brand)}"


def build_replica(source: ContentItem, brand: Brand) -> ContentItem:
    """Shape a sibling item for ``brand`` from ``source``."""
    tags = list(source.tags)
    if CROSS_POSTED_TAG not in tags:
        tags.append(CROSS_POSTED_TAG)
    now = utcnow()
    return ContentItem(
        id=new_id(),
        brand=brand,
        status=ContentStatus.PUBLISHED,
        title=source.title,
        slug=crosspost_slug(source.slug, brand),
        body=source.body,
        excerpt=source.excerpt,
        cover_image=source.cover_image,
        category=source.category,
        tags=tags,
        author_id=source.author_id,
        reading_time_minutes=source.reading_time_minutes,
        metadata={
            **source.metadata,
            "cross_posted_from_brand": str(source.brand),
            "cross_posted_from_title": source.title,
        },
        cross_posted_from=source.id,
        source_url=source.source_url,
        is_ai_generated=source.is_ai_generated,
        published_at=now,
        created_at=now,
        updated_at=now,
    )


class CrossPostReplicator:
    def __init__(self, store: ContentStore) -> None:
        self.store = store

    def existing_sibling_brands(self, source: ContentItem) -> set[Brand]:
        brands: set[Brand] = set()
        for sibling_id in source.cross_posted_to:
            sibling = self.store.find_item(sibling_id)
            if sibling is not None:
                brands.add(sibling.brand)
        return brands

    def replicate(self, source: ContentItem, targets: Iterable[Brand | str]) -> DispatchResult:
        """Create one published sibling per target brand.

        The source's own brand and brands that already hold a sibling are
        skipped.  Returns ``Ok(CrossPostOutcome)`` unless the final
        write-back onto the source fails.
        """
        outcome = CrossPostOutcome()
        already = self.existing_sibling_brands(source)
        seen: set[Brand] = set()

        for target in targets:
            try:
                brand = Brand(target)
            except ValueError:
                logger.warning("Skipping cross-post to unknown brand %r", target)
                outcome.failed[str(target)] = "unknown brand"
                continue
            if brand in seen:
                continue
            seen.add(brand)
            if brand == source.brand or brand in already:
                outcome.skipped.append(brand)
                continue
            try:
                replica = self.store.insert_item(build_replica(source, brand))
            except Exception as exc:
                logger.warning(
                    "Cross-post of %s to %s failed: %s", source.id, brand, exc, exc_info=True
                )
                outcome.failed[str(brand)] = str(exc)
                continue
            outcome.created[brand] = replica.id
            logger.info("Cross-posted %s to %s as %s", source.id, brand, replica.id)

        if not outcome.created:
            outcome.source = source
            return Ok(outcome)

        try:
            current = self.store.get_item(source.id)
            merged = current.cross_posted_to + [
                i for i in outcome.created_ids if i not in current.cross_posted_to
            ]
            outcome.source = self.store.update_item(source.id, {"cross_posted_to": merged})
        except Exception as exc:
            logger.warning("Failed to record cross-posts on %s: %s", source.id, exc, exc_info=True)
            return Err.from_exception(WRITE_FAILED, exc)
        return Ok(outcome)
