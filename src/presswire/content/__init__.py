"""Content domain: models and the JSON-backed content store gateway."""

from presswire.content.models import (
    AudioStatus,
    AudioVersion,
    Author,
    CampaignStatus,
    ContentItem,
    ContentStatus,
    EmailProviderName,
    NewsletterCampaign,
    NewsletterSettings,
    NewsletterSubscriber,
    Platform,
    ShareStatus,
    SocialMediaSettings,
    SocialShareLogEntry,
)
from presswire.content.store import ContentStore

__all__ = [
    "AudioStatus",
    "AudioVersion",
    "Author",
    "CampaignStatus",
    "ContentItem",
    "ContentStatus",
    "ContentStore",
    "EmailProviderName",
    "NewsletterCampaign",
    "NewsletterSettings",
    "NewsletterSubscriber",
    "Platform",
    "ShareStatus",
    "SocialMediaSettings",
    "SocialShareLogEntry",
]
