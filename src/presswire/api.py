"""HTTP surface: the publish endpoint and the effect endpoints.

The effect endpoints are what ``HttpEffects`` posts to, so a deployment
can run effects out of process by pointing ``site.admin_url`` here.
"""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

from fastapi import APIRouter, FastAPI
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from presswire.brands import Brand
from presswire.content.models import Platform
from presswire.errors import ContentNotFoundError, PrimaryTransitionError
from presswire.orchestrator import PublishRequest
from presswire.result import (
    NO_SUBSCRIBERS,
    NOT_CONFIGURED,
    NOT_FOUND,
    SEND_FAILED,
    Err,
    Ok,
)
from presswire.services import Services

logger = logging.getLogger(__name__)


# --- Request models ---

class TTSRequest(BaseModel):
    articleId: str | None = None


class ShareRequest(BaseModel):
    article_id: str | None = None
    platforms: list[Platform] = Field(default_factory=list)
    brand: Brand | None = None
    custom_text: str | None = None
    auto_share: bool = False


class AutoSendRequest(BaseModel):
    article_id: str | None = None


# --- Helpers ---

def _error(message: str, status_code: int, details: str | None = None) -> JSONResponse:
    body: dict[str, Any] = {"error": message}
    if details:
        body["details"] = details
    return JSONResponse(body, status_code=status_code)


def _dump(value: Any) -> Any:
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json")
    if isinstance(value, list):
        return [_dump(v) for v in value]
    return value


def create_router(services: Services) -> APIRouter:
    router = APIRouter(prefix="/api")

    @router.post("/articles/{article_id}/publish")
    def publish_article(article_id: str, body: PublishRequest | None = None):
        """Publish an article; effects never change the response status."""
        try:
            item = services.orchestrator.publish(article_id, body)
        except ContentNotFoundError as exc:
            return _error(str(exc), 404)
        except PrimaryTransitionError as exc:
            logger.error("Error publishing article %s: %s", article_id, exc)
            return _error(str(exc) or "Failed to publish article", 500)
        return _dump(item)

    @router.post("/tts")
    def trigger_tts(body: TTSRequest):
        if not body.articleId:
            return _error("articleId required", 400)
        match services.audio.trigger(body.articleId):
            case Ok(outcome):
                payload: dict[str, Any] = {
                    "message": outcome.message,
                    "audioVersion": _dump(outcome.audio_version),
                }
                if outcome.url:
                    payload["url"] = outcome.url
                return payload
            case Err(kind=kind, detail=detail) if kind == NOT_FOUND:
                return _error("Article not found", 404, detail)
            case Err(kind=kind, detail=detail) if kind == NOT_CONFIGURED:
                return _error("Speech synthesis not configured", 500, detail)
            case Err(kind=kind, detail=detail):
                return _error("TTS generation failed", 500, f"{kind}: {detail}")

    @router.post("/social/share")
    def share_article(body: ShareRequest):
        if not body.article_id or not body.brand or not (body.platforms or body.auto_share):
            return _error("article_id, platforms, and brand are required", 400)
        result = services.social.share(
            body.article_id,
            body.brand,
            body.platforms,
            custom_text=body.custom_text,
            include_auto=body.auto_share,
        )
        match result:
            case Ok(results):
                return {"results": _dump(results)}
            case Err(kind=kind, detail=detail) if kind == NOT_FOUND:
                return _error("Article not found", 404, detail)
            case Err(detail=detail):
                return _error(detail or "Failed to share", 500)

    @router.get("/social/share-log")
    def share_log(article_id: str | None = None, brand: Brand | None = None):
        rows = services.store.list_share_log(article_id=article_id, brand=brand)
        return {"data": _dump(rows)}

    @router.post("/newsletter/campaigns/{campaign_id}/send")
    def send_campaign(campaign_id: str):
        match services.newsletter.send_campaign(campaign_id):
            case Ok(outcome):
                return {
                    "success": True,
                    "sent_count": outcome.sent_count,
                    "total_subscribers": outcome.total_subscribers,
                }
            case Err(kind=kind, detail=detail) if kind == NOT_FOUND:
                return _error("Campaign not found", 404, detail)
            case Err(kind=kind, detail=detail) if kind in (NOT_CONFIGURED, NO_SUBSCRIBERS):
                return _error(detail, 400)
            case Err(kind=kind, detail=detail) if kind == SEND_FAILED:
                return _error(f"Failed to send: {detail}", 500)
            case Err(detail=detail):
                return _error(detail, 500)

    @router.post("/newsletter/auto-send")
    def auto_send(body: AutoSendRequest):
        if not body.article_id:
            return _error("article_id required", 400)
        match services.newsletter.auto_dispatch(body.article_id):
            case Ok(None):
                return {"sent": False}
            case Ok(outcome):
                return {"sent": True, **_dump(outcome)}
            case Err(kind=kind, detail=detail) if kind == NOT_FOUND:
                return _error("Article not found", 404, detail)
            case Err(kind=kind, detail=detail):
                return _error(detail or kind, 400 if kind == NO_SUBSCRIBERS else 500)

    return router


def create_app(services: Services) -> FastAPI:
    @asynccontextmanager
    async def lifespan(_app: FastAPI) -> AsyncIterator[None]:
        yield
        services.shutdown()

    app = FastAPI(title="presswire", lifespan=lifespan)
    app.include_router(create_router(services))
    return app
