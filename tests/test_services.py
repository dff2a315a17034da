"""Tests for service wiring."""

import pytest

from presswire.config import EffectMode, EffectsConfig, PresswireConfig, TTSConfig
from presswire.content.store import ContentStore
from presswire.effects import HttpEffects, InlineEffects
from presswire.integrations.elevenlabs import ElevenLabsClient
from presswire.services import build_services


class TestBuildServices:
    def test_inline_by_default_without_tts(self, config: PresswireConfig):
        services = build_services(config, store=ContentStore())
        try:
            assert isinstance(services.effects, InlineEffects)
            assert services.audio.synthesizer is None
            assert services.orchestrator.store is services.store
        finally:
            services.shutdown()

    def test_tts_client_when_key_present(self, config: PresswireConfig):
        config = config.model_copy(update={"tts": TTSConfig(api_key="xi-1")})
        services = build_services(config, store=ContentStore())
        try:
            assert isinstance(services.audio.synthesizer, ElevenLabsClient)
        finally:
            services.shutdown()

    def test_http_effects_mode(self, config: PresswireConfig):
        config = config.model_copy(
            update={"effects": EffectsConfig(mode=EffectMode.HTTP, max_workers=2)}
        )
        services = build_services(config, store=ContentStore())
        try:
            assert isinstance(services.effects, HttpEffects)
            assert services.effects.base_url == config.site.admin_url
        finally:
            services.shutdown()

    def test_store_created_from_data_dir(self, config: PresswireConfig):
        services = build_services(config)
        try:
            assert services.store.list_items() == []
        finally:
            services.shutdown()


@pytest.mark.parametrize("mode", list(EffectMode))
def test_effect_modes_parse_from_strings(mode: EffectMode):
    assert EffectsConfig(mode=str(mode)).mode is mode  # type: ignore[arg-type]
