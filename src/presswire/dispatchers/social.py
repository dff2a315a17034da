"""Social syndication fan-out.

Posts an article to every requested platform plus every platform the
brand auto-shares to.  Each attempt is independent and leaves exactly one
share-log row, whether it succeeded or not.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping

from pydantic import BaseModel

from presswire.brands import Brand
from presswire.content.models import (
    ContentItem,
    Platform,
    ShareStatus,
    SocialMediaSettings,
    SocialShareLogEntry,
)
from presswire.content.store import ContentStore
from presswire.errors import ContentNotFoundError, PlatformPostError
from presswire.integrations.social import PLATFORM_POSTERS, Poster, PostResult
from presswire.result import NOT_FOUND, DispatchResult, Err, Ok
from presswire.templates import render_post

logger = logging.getLogger(__name__)


class ShareResult(BaseModel):
    platform: Platform
    status: ShareStatus
    post_url: str | None = None
    error: str | None = None


def merge_platforms(
    requested: Iterable[Platform | str],
    settings: Iterable[SocialMediaSettings],
) -> list[Platform]:
    """Requested platforms first, then auto-share platforms, without duplicates."""
    merged: list[Platform] = []
    for platform in requested:
        p = Platform(platform)
        if p not in merged:
            merged.append(p)
    for s in settings:
        if s.enabled and s.auto_share_on_publish and s.platform not in merged:
            merged.append(s.platform)
    return merged


class SocialFanout:
    def __init__(
        self,
        store: ContentStore,
        posters: Mapping[Platform, Poster] | None = None,
    ) -> None:
        self.store = store
        self.posters = dict(PLATFORM_POSTERS if posters is None else posters)

    def share(
        self,
        article_id: str,
        brand: Brand | str,
        platforms: Iterable[Platform | str] = (),
        *,
        custom_text: str | None = None,
        include_auto: bool = True,
    ) -> DispatchResult:
        """Post an article to each platform and return per-platform results.

        ``include_auto`` adds the brand's auto-share platforms to the
        requested ones.  ``custom_text`` replaces every platform template.
        """
        try:
            item = self.store.get_item(article_id)
        except ContentNotFoundError as exc:
            return Err.from_exception(NOT_FOUND, exc)

        brand = Brand(brand)
        settings = {s.platform: s for s in self.store.get_social_settings(brand)}
        targets = merge_platforms(platforms, settings.values() if include_auto else ())
        author = self.store.get_author(item.author_id)
        author_name = author.name if author else None

        results = [
            self._share_one(item, brand, platform, settings.get(platform), author_name, custom_text)
            for platform in targets
        ]
        logger.info(
            "Shared %s to %d platform(s): %s",
            article_id,
            len(results),
            ", ".join(f"{r.platform}={r.status}" for r in results) or "none",
        )
        return Ok(results)

    def _share_one(
        self,
        item: ContentItem,
        brand: Brand,
        platform: Platform,
        settings: SocialMediaSettings | None,
        author: str | None,
        custom_text: str | None,
    ) -> ShareResult:
        template = custom_text or (settings.default_template if settings else None)
        hashtags = settings.default_hashtags if settings else []
        credentials = settings.credentials if settings else {}

        try:
            text = render_post(
                item, platform, template=template, hashtags=hashtags, author=author, brand=brand
            )
            poster = self.posters.get(platform)
            if poster is None:
                raise PlatformPostError(f"No posting adapter for {platform}")
            posted: PostResult = poster(text, credentials)
        except Exception as exc:
            logger.warning("Posting %s to %s failed: %s", item.id, platform, exc, exc_info=True)
            posted = PostResult(success=False, error=str(exc) or type(exc).__name__)

        result = ShareResult(
            platform=platform,
            status=ShareStatus.SUCCESS if posted.success else ShareStatus.FAILED,
            post_url=posted.post_url,
            error=posted.error,
        )
        try:
            self.store.append_share_log(
                SocialShareLogEntry(
                    article_id=item.id,
                    platform=platform,
                    brand=brand,
                    status=result.status,
                    post_url=result.post_url,
                    error_message=result.error,
                )
            )
        except Exception:
            logger.warning("Failed to record share log for %s/%s", item.id, platform, exc_info=True)
        return result
