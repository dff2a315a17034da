"""Newsletter auto-dispatch and campaign send.

On publish, a brand whose newsletter settings allow it gets a one-article
campaign that is sent straight away.  Sending continues past individual
recipient failures; ``sent_count`` only counts confirmed deliveries.
"""

from __future__ import annotations

import logging

from pydantic import BaseModel

from presswire.brands import get_brand
from presswire.content.models import (
    CampaignStatus,
    ContentItem,
    NewsletterCampaign,
    NewsletterSettings,
    NewsletterSubscriber,
    utcnow,
)
from presswire.content.store import ContentStore
from presswire.errors import ContentNotFoundError, NoSubscribersError, NotConfiguredError
from presswire.integrations.email import EmailMessage, create_email_provider
from presswire.result import (
    NO_SUBSCRIBERS,
    NOT_CONFIGURED,
    NOT_FOUND,
    SEND_FAILED,
    DispatchResult,
    Err,
    Ok,
)
from presswire.templates import email_article, render_email_html, render_email_text

logger = logging.getLogger(__name__)


class SendOutcome(BaseModel):
    campaign_id: str
    sent_count: int
    total_subscribers: int


def allows_auto_send(settings: NewsletterSettings | None) -> bool:
    return settings is not None and settings.enabled and settings.auto_send_on_publish


class NewsletterDispatcher:
    def __init__(self, store: ContentStore, *, timeout: float = 10) -> None:
        self.store = store
        self.timeout = timeout

    def build_campaign(self, item: ContentItem, settings: NewsletterSettings) -> NewsletterCampaign:
        """Draft campaign featuring a single published article."""
        profile = get_brand(item.brand)
        author = self.store.get_author(item.author_id)
        articles = [email_article(item, author.name if author else None)]
        return NewsletterCampaign(
            brand=item.brand,
            subject=item.title,
            html_content=render_email_html(
                profile, item.title, articles, footer_text=settings.footer_text
            ),
            text_content=render_email_text(
                profile, item.title, articles, footer_text=settings.footer_text
            ),
            article_ids=[item.id],
            status=CampaignStatus.DRAFT,
        )

    def auto_dispatch(self, article_id: str) -> DispatchResult:
        """Create and send a campaign for a freshly published article.

        Does nothing (``Ok(None)``) when the brand has no settings, is
        disabled, or does not auto-send on publish.
        """
        try:
            item = self.store.get_item(article_id)
        except ContentNotFoundError as exc:
            return Err.from_exception(NOT_FOUND, exc)

        settings = self.store.get_newsletter_settings(item.brand)
        if settings is None or not allows_auto_send(settings):
            logger.info("Newsletter auto-send off for %s, skipping %s", item.brand, article_id)
            return Ok(None)

        campaign = self.store.insert_campaign(self.build_campaign(item, settings))
        logger.info("Created newsletter campaign %s for %s", campaign.id, article_id)
        return self.send_campaign(campaign.id)

    def send_campaign(self, campaign_id: str) -> DispatchResult:
        """Deliver a campaign to every active subscriber of its brand."""
        try:
            campaign = self.store.get_campaign(campaign_id)
        except ContentNotFoundError as exc:
            return Err.from_exception(NOT_FOUND, exc)

        try:
            settings, subscribers = self._recipients(campaign)
        except NotConfiguredError as exc:
            return Err.from_exception(NOT_CONFIGURED, exc)
        except NoSubscribersError as exc:
            return Err.from_exception(NO_SUBSCRIBERS, exc)

        self.store.update_campaign(campaign_id, {"status": CampaignStatus.SENDING})

        try:
            provider = create_email_provider(settings, timeout=self.timeout)
            profile = get_brand(campaign.brand)
            html = campaign.html_content or f"<p>{campaign.text_content or ''}</p>"
            from_email = settings.from_email or f"noreply@{campaign.brand}.com"
            from_name = settings.from_name or profile.name

            sent_count = 0
            for subscriber in subscribers:
                message = EmailMessage(
                    to=subscriber.email,
                    subject=campaign.subject,
                    html=html,
                    from_email=from_email,
                    from_name=from_name,
                    reply_to=settings.reply_to,
                )
                try:
                    if provider.send(message):
                        sent_count += 1
                except Exception as exc:
                    logger.warning("Newsletter delivery to %s failed: %s", subscriber.email, exc)
        except Exception as exc:
            logger.error("Campaign %s failed: %s", campaign_id, exc, exc_info=True)
            self.store.update_campaign(campaign_id, {"status": CampaignStatus.FAILED})
            return Err.from_exception(SEND_FAILED, exc)

        self.store.update_campaign(
            campaign_id,
            {"status": CampaignStatus.SENT, "sent_count": sent_count, "sent_at": utcnow()},
        )
        logger.info(
            "Campaign %s sent to %d of %d subscribers",
            campaign_id,
            sent_count,
            len(subscribers),
        )
        return Ok(
            SendOutcome(
                campaign_id=campaign_id,
                sent_count=sent_count,
                total_subscribers=len(subscribers),
            )
        )

    def _recipients(
        self, campaign: NewsletterCampaign
    ) -> tuple[NewsletterSettings, list[NewsletterSubscriber]]:
        settings = self.store.get_newsletter_settings(campaign.brand)
        if settings is None or not settings.enabled:
            raise NotConfiguredError("Newsletter not configured or disabled for this brand")
        subscribers = self.store.list_active_subscribers(campaign.brand)
        if not subscribers:
            raise NoSubscribersError("No active subscribers")
        return settings, subscribers
