"""Wiring: build the store, dispatchers and orchestrator from config."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from presswire.config import EffectMode, PresswireConfig
from presswire.content.store import ContentStore
from presswire.dispatchers import (
    AudioTrigger,
    CrossPostReplicator,
    NewsletterDispatcher,
    SocialFanout,
)
from presswire.effects import EffectLauncher, HttpEffects, InlineEffects
from presswire.executor import BackgroundRunner
from presswire.integrations.elevenlabs import ElevenLabsClient
from presswire.integrations.storage import AudioStorage
from presswire.orchestrator import PublishOrchestrator

logger = logging.getLogger(__name__)


@dataclass
class Services:
    config: PresswireConfig
    store: ContentStore
    runner: BackgroundRunner
    audio: AudioTrigger
    cross_poster: CrossPostReplicator
    newsletter: NewsletterDispatcher
    social: SocialFanout
    effects: EffectLauncher
    orchestrator: PublishOrchestrator

    def shutdown(self) -> None:
        self.runner.drain()
        self.runner.shutdown()


def build_services(
    config: PresswireConfig,
    *,
    store: ContentStore | None = None,
    runner: BackgroundRunner | None = None,
) -> Services:
    store = store if store is not None else ContentStore(config.data_dir)
    runner = runner or BackgroundRunner(max_workers=config.effects.max_workers)

    synthesizer = ElevenLabsClient(config.tts) if config.is_tts_configured else None
    if synthesizer is None:
        logger.info("No speech synthesis API key configured; narration disabled")

    audio = AudioTrigger(
        store,
        synthesizer,
        AudioStorage(config.storage),
        max_chars=config.tts.max_chars,
        bytes_per_second=config.tts.bytes_per_second,
    )
    cross_poster = CrossPostReplicator(store)
    newsletter = NewsletterDispatcher(store, timeout=config.effects.http_timeout)
    social = SocialFanout(store)

    effects: EffectLauncher
    if config.effects.mode == EffectMode.HTTP:
        effects = HttpEffects(runner, config.site.admin_url, timeout=config.effects.http_timeout)
    else:
        effects = InlineEffects(runner, audio, newsletter, social)

    return Services(
        config=config,
        store=store,
        runner=runner,
        audio=audio,
        cross_poster=cross_poster,
        newsletter=newsletter,
        social=social,
        effects=effects,
        orchestrator=PublishOrchestrator(store, cross_poster, effects),
    )
