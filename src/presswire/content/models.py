"""Content domain models: pure Pydantic v2 data types.

A ContentItem is an article owned by one brand.  Each publish effect owns
its own record type: audio versions, newsletter campaigns and social
share-log rows.  Per-brand settings for the newsletter and social
integrations live alongside them in the store.
"""

from __future__ import annotations

import uuid
from datetime import UTC, datetime
from enum import StrEnum
from typing import Any

from pydantic import BaseModel, Field

from presswire.brands import Brand


def new_id() -> str:
    return uuid.uuid4().hex


def utcnow() -> datetime:
    return datetime.now(tz=UTC)


class ContentStatus(StrEnum):
    """Lifecycle status of a content item."""

    DRAFT = "draft"
    PENDING_REVIEW = "pending_review"
    PUBLISHED = "published"
    ARCHIVED = "archived"


class Platform(StrEnum):
    """Social platforms an article can be syndicated to."""

    TWITTER = "twitter"
    FACEBOOK = "facebook"
    INSTAGRAM = "instagram"
    TIKTOK = "tiktok"
    LINKEDIN = "linkedin"


class Author(BaseModel):
    """A byline attached to content items by ``author_id``."""

    id: str
    name: str


class ContentItem(BaseModel):
    """An editorial unit (article) in one brand's namespace.

    ``cross_posted_to`` lists siblings replicated from this item;
    ``cross_posted_from`` points back to the origin when this item is
    itself a cross-post.
    """

    id: str = Field(default_factory=new_id)
    brand: Brand
    status: ContentStatus = ContentStatus.DRAFT
    title: str
    slug: str
    body: str = ""
    excerpt: str | None = None
    cover_image: str | None = None
    category: str = ""
    tags: list[str] = Field(default_factory=list)
    author_id: str | None = None
    reading_time_minutes: int = 0
    metadata: dict[str, Any] = Field(default_factory=dict)
    cross_posted_to: list[str] = Field(default_factory=list)
    cross_posted_from: str | None = None
    source_url: str | None = None
    is_ai_generated: bool = False
    published_at: datetime | None = None
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)


class AudioStatus(StrEnum):
    PROCESSING = "processing"
    READY = "ready"
    ERROR = "error"


class AudioVersion(BaseModel):
    """A synthesized narration of an article."""

    id: str = Field(default_factory=new_id)
    article_id: str
    provider: str
    voice_id: str
    voice_name: str = ""
    status: AudioStatus = AudioStatus.PROCESSING
    url: str = ""
    error_message: str | None = None
    file_size_bytes: int | None = None
    duration_seconds: int | None = None
    created_at: datetime = Field(default_factory=utcnow)


class EmailProviderName(StrEnum):
    RESEND = "resend"
    SENDGRID = "sendgrid"
    NONE = "none"


class NewsletterSettings(BaseModel):
    """Per-brand newsletter configuration."""

    brand: Brand
    enabled: bool = False
    provider: EmailProviderName = EmailProviderName.RESEND
    api_key: str | None = None
    from_email: str | None = None
    from_name: str | None = None
    reply_to: str | None = None
    footer_text: str | None = None
    auto_send_on_publish: bool = False


class NewsletterSubscriber(BaseModel):
    id: str = Field(default_factory=new_id)
    brand: Brand
    email: str
    is_active: bool = True
    subscribed_at: datetime = Field(default_factory=utcnow)


class CampaignStatus(StrEnum):
    DRAFT = "draft"
    SENDING = "sending"
    SENT = "sent"
    FAILED = "failed"


class NewsletterCampaign(BaseModel):
    """One newsletter send to a brand's subscribers."""

    id: str = Field(default_factory=new_id)
    brand: Brand
    subject: str
    html_content: str | None = None
    text_content: str | None = None
    article_ids: list[str] = Field(default_factory=list)
    status: CampaignStatus = CampaignStatus.DRAFT
    sent_count: int = 0
    sent_at: datetime | None = None
    created_at: datetime = Field(default_factory=utcnow)


class ShareStatus(StrEnum):
    SUCCESS = "success"
    FAILED = "failed"


class SocialShareLogEntry(BaseModel):
    """Append-only audit row: one per (article, platform, attempt)."""

    id: str = Field(default_factory=new_id)
    article_id: str
    platform: Platform
    brand: Brand
    status: ShareStatus
    post_url: str | None = None
    error_message: str | None = None
    shared_at: datetime = Field(default_factory=utcnow)


class SocialMediaSettings(BaseModel):
    """Per (brand, platform) syndication settings."""

    brand: Brand
    platform: Platform
    enabled: bool = True
    auto_share_on_publish: bool = False
    default_template: str | None = None
    default_hashtags: list[str] = Field(default_factory=list)
    credentials: dict[str, str] = Field(default_factory=dict)
