"""Social platform posting adapters.

The adapters are placeholders: they log the post and return a synthetic
post URL.  Each one keeps the real contract so a live API client can
replace it without touching the fan-out: take the final text and the
brand's credentials, return a ``PostResult``.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable

from pydantic import BaseModel

from presswire.content.models import Platform

logger = logging.getLogger(__name__)


class PostResult(BaseModel):
    """Outcome of one platform post."""

    success: bool
    post_url: str | None = None
    error: str | None = None


Poster = Callable[[str, dict[str, str]], PostResult]


def _placeholder_id() -> str:
    return f"placeholder_{int(time.time() * 1000)}"


def post_to_twitter(text: str, credentials: dict[str, str]) -> PostResult:
    logger.info("[social] Twitter post (placeholder): %s", text[:100])
    return PostResult(success=True, post_url=f"https://twitter.com/i/status/{_placeholder_id()}")


def post_to_facebook(text: str, credentials: dict[str, str]) -> PostResult:
    logger.info("[social] Facebook post (placeholder): %s", text[:100])
    return PostResult(success=True, post_url=f"https://facebook.com/post/{_placeholder_id()}")


def post_to_instagram(text: str, credentials: dict[str, str]) -> PostResult:
    # The Graph API needs an image; captions alone are accepted here.
    logger.info("[social] Instagram post (placeholder): %s", text[:100])
    return PostResult(success=True, post_url=f"https://instagram.com/p/{_placeholder_id()}")


def post_to_tiktok(text: str, credentials: dict[str, str]) -> PostResult:
    logger.info("[social] TikTok post (placeholder): %s", text[:100])
    return PostResult(success=True)


def post_to_linkedin(text: str, credentials: dict[str, str]) -> PostResult:
    logger.info("[social] LinkedIn post (placeholder): %s", text[:100])
    return PostResult(
        success=True,
        post_url=f"https://linkedin.com/feed/update/{_placeholder_id()}",
    )


PLATFORM_POSTERS: dict[Platform, Poster] = {
    Platform.TWITTER: post_to_twitter,
    Platform.FACEBOOK: post_to_facebook,
    Platform.INSTAGRAM: post_to_instagram,
    Platform.TIKTOK: post_to_tiktok,
    Platform.LINKEDIN: post_to_linkedin,
}
