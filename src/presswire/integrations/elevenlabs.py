"""ElevenLabs text-to-speech client."""

from __future__ import annotations

import logging

from presswire.config import TTSConfig
from presswire.errors import HttpError, SynthesisError
from presswire.integrations.http import post_json

logger = logging.getLogger(__name__)

PROVIDER_NAME = "elevenlabs"
AUDIO_EXTENSION = "mp3"
AUDIO_CONTENT_TYPE = "audio/mpeg"

VOICE_SETTINGS = {
    "stability": 0.6,
    "similarity_boost": 0.75,
    "style": 0.3,
    "use_speaker_boost": True,
}


class ElevenLabsClient:
    """Synthesizes narration audio for a voice."""

    provider = PROVIDER_NAME
    extension = AUDIO_EXTENSION

    def __init__(self, config: TTSConfig) -> None:
        self.config = config
        self.base_url = config.base_url.rstrip("/")

    def synthesize(self, text: str, voice_id: str) -> bytes:
        """Return encoded audio for ``text``.

        Raises:
            SynthesisError: If the API rejects the request or is unreachable.
        """
        url = f"{self.base_url}/v1/text-to-speech/{voice_id}"
        logger.debug("Synthesizing %d chars with voice %s", len(text), voice_id)
        try:
            resp = post_json(
                url,
                {
                    "text": text,
                    "model_id": self.config.model_id,
                    "voice_settings": VOICE_SETTINGS,
                },
                headers={"xi-api-key": self.config.api_key, "Accept": AUDIO_CONTENT_TYPE},
                timeout=self.config.timeout,
            )
        except HttpError as exc:
            raise SynthesisError(str(exc)) from exc
        if not resp.ok:
            raise SynthesisError(resp.text or f"HTTP {resp.status}")
        if not resp.body:
            raise SynthesisError("Empty audio response")
        return resp.body
