"""Audio synthesis trigger: narrate an article and store the result.

A ``processing`` audio version is recorded before the slow synthesis
call.  Every failure after that point moves the record to ``error`` with
the provider's message, so the stored row is the only trace of a failed
narration in the publish flow.
"""

from __future__ import annotations

import logging

from pydantic import BaseModel

from presswire.brands import voice_for
from presswire.content.models import AudioStatus, AudioVersion
from presswire.content.store import ContentStore
from presswire.errors import ContentNotFoundError
from presswire.integrations.elevenlabs import ElevenLabsClient
from presswire.integrations.storage import AudioStorage, audio_key
from presswire.result import (
    NOT_CONFIGURED,
    NOT_FOUND,
    SYNTHESIS_FAILED,
    UPLOAD_FAILED,
    DispatchResult,
    Err,
    Ok,
)
from presswire.templates import prepare_narration

logger = logging.getLogger(__name__)

MSG_EXISTS = "Audio already exists"
MSG_GENERATED = "Audio generated successfully"


class AudioOutcome(BaseModel):
    message: str
    audio_version: AudioVersion
    url: str | None = None


class AudioTrigger:
    """Creates at most one ready narration per article."""

    def __init__(
        self,
        store: ContentStore,
        synthesizer: ElevenLabsClient | None,
        storage: AudioStorage,
        *,
        max_chars: int = 5000,
        bytes_per_second: int = 16000,
    ) -> None:
        self.store = store
        self.synthesizer = synthesizer
        self.storage = storage
        self.max_chars = max_chars
        self.bytes_per_second = bytes_per_second

    def estimate_duration(self, size: int) -> int:
        """Approximate seconds of audio from the encoded size (not decoded)."""
        return round(size / self.bytes_per_second)

    def trigger(self, article_id: str) -> DispatchResult:
        try:
            item = self.store.get_item(article_id)
        except ContentNotFoundError as exc:
            return Err.from_exception(NOT_FOUND, exc)

        existing = self.store.find_ready_audio(article_id)
        if existing is not None:
            logger.info("Audio already exists for %s, skipping synthesis", article_id)
            return Ok(AudioOutcome(message=MSG_EXISTS, audio_version=existing))

        if self.synthesizer is None:
            return Err(NOT_CONFIGURED, "Speech synthesis API key not configured")

        voice = voice_for(item.brand)
        record = self.store.insert_audio(
            AudioVersion(
                article_id=article_id,
                provider=self.synthesizer.provider,
                voice_id=voice.voice_id,
                voice_name=voice.voice_name,
                status=AudioStatus.PROCESSING,
            )
        )

        text = prepare_narration(item.title, item.body, self.max_chars)
        try:
            audio = self.synthesizer.synthesize(text, voice.voice_id)
        except Exception as exc:
            return self._fail(record, SYNTHESIS_FAILED, exc)

        key = audio_key(item.brand, article_id, self.synthesizer.extension)
        try:
            url = self.storage.upload(key, audio)
        except Exception as exc:
            return self._fail(record, UPLOAD_FAILED, exc)

        updated = self.store.update_audio(
            record.id,
            {
                "status": AudioStatus.READY,
                "url": url,
                "file_size_bytes": len(audio),
                "duration_seconds": self.estimate_duration(len(audio)),
            },
        )
        logger.info("Narration ready for %s at %s", article_id, url)
        return Ok(AudioOutcome(message=MSG_GENERATED, audio_version=updated, url=url))

    def _fail(self, record: AudioVersion, kind: str, exc: Exception) -> Err:
        logger.warning("Narration failed for %s: %s", record.article_id, exc)
        self.store.update_audio(
            record.id,
            {"status": AudioStatus.ERROR, "error_message": str(exc)},
        )
        return Err.from_exception(kind, exc)
