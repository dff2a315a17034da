"""Launchers for the detached publish effects.

The orchestrator hands each detached effect to a launcher and gets a
``Future`` back that it never waits on.  ``InlineEffects`` runs the
dispatchers in this process; ``HttpEffects`` posts to the effect
endpoints of a running presswire API instead.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Iterable
from concurrent.futures import Future
from typing import Any

from presswire.brands import Brand
from presswire.content.models import Platform
from presswire.dispatchers import AudioTrigger, NewsletterDispatcher, SocialFanout
from presswire.errors import HttpError
from presswire.executor import BackgroundRunner
from presswire.integrations.http import post_json
from presswire.result import HTTP_FAILED, DispatchResult, Err, Ok

logger = logging.getLogger(__name__)

TTS_PATH = "/api/tts"
SHARE_PATH = "/api/social/share"
NEWSLETTER_AUTO_PATH = "/api/newsletter/auto-send"


class EffectLauncher(ABC):
    """Starts detached effects and returns their handles immediately."""

    def __init__(self, runner: BackgroundRunner) -> None:
        self.runner = runner

    @abstractmethod
    def trigger_audio(self, article_id: str) -> Future:
        """Start narration synthesis for an article."""

    @abstractmethod
    def auto_newsletter(self, article_id: str) -> Future:
        """Start the newsletter auto-dispatch for an article."""

    @abstractmethod
    def share(
        self,
        article_id: str,
        brand: Brand,
        platforms: Iterable[Platform],
        *,
        include_auto: bool = True,
    ) -> Future:
        """Start social syndication for an article."""


class InlineEffects(EffectLauncher):
    def __init__(
        self,
        runner: BackgroundRunner,
        audio: AudioTrigger,
        newsletter: NewsletterDispatcher,
        social: SocialFanout,
    ) -> None:
        super().__init__(runner)
        self.audio = audio
        self.newsletter = newsletter
        self.social = social

    def trigger_audio(self, article_id: str) -> Future:
        return self.runner.submit(f"audio:{article_id}", self.audio.trigger, article_id)

    def auto_newsletter(self, article_id: str) -> Future:
        return self.runner.submit(
            f"newsletter:{article_id}", self.newsletter.auto_dispatch, article_id
        )

    def share(
        self,
        article_id: str,
        brand: Brand,
        platforms: Iterable[Platform],
        *,
        include_auto: bool = True,
    ) -> Future:
        return self.runner.submit(
            f"social:{article_id}",
            self.social.share,
            article_id,
            brand,
            list(platforms),
            include_auto=include_auto,
        )


class HttpEffects(EffectLauncher):
    """Fires each effect as a JSON POST to the API's effect endpoints."""

    def __init__(self, runner: BackgroundRunner, base_url: str, *, timeout: float = 10) -> None:
        super().__init__(runner)
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    def _post(self, path: str, payload: dict[str, Any]) -> DispatchResult:
        url = f"{self.base_url}{path}"
        try:
            resp = post_json(url, payload, timeout=self.timeout)
        except HttpError as exc:
            return Err.from_exception(HTTP_FAILED, exc)
        if not resp.ok:
            return Err(HTTP_FAILED, f"{url} answered {resp.status}: {resp.text[:500]}")
        return Ok(resp.json())

    def trigger_audio(self, article_id: str) -> Future:
        return self.runner.submit(
            f"audio:{article_id}", self._post, TTS_PATH, {"articleId": article_id}
        )

    def auto_newsletter(self, article_id: str) -> Future:
        return self.runner.submit(
            f"newsletter:{article_id}",
            self._post,
            NEWSLETTER_AUTO_PATH,
            {"article_id": article_id},
        )

    def share(
        self,
        article_id: str,
        brand: Brand,
        platforms: Iterable[Platform],
        *,
        include_auto: bool = True,
    ) -> Future:
        payload = {
            "article_id": article_id,
            "platforms": [str(p) for p in platforms],
            "brand": str(brand),
            "auto_share": include_auto,
        }
        return self.runner.submit(f"social:{article_id}", self._post, SHARE_PATH, payload)
