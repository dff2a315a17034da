"""Template rendering for social posts, OG images, narration and email.

Social templates use ``{title}``, ``{excerpt}``, ``{url}``, ``{brand}``
and ``{author}`` placeholders.  Substitution is a single pass, so values
that happen to contain braces are never expanded again.
"""

from __future__ import annotations

import html
import re
from datetime import UTC, datetime
from urllib.parse import urlencode

from pydantic import BaseModel

from presswire.brands import BrandProfile, get_brand
from presswire.content.models import ContentItem, Platform

DEFAULT_TEMPLATE = "{title} {url}"
ELLIPSIS = "..."

# Only platforms listed here are length-constrained.
PLATFORM_LIMITS: dict[Platform, int] = {
    Platform.TWITTER: 280,
}

OG_IMAGE_PATH = "/api/og"

_PLACEHOLDER_RE = re.compile(r"\{(title|excerpt|url|brand|author)\}")
_TAG_RE = re.compile(r"<[^>]*>")
_WS_RE = re.compile(r"\s+")


# ── Social posts ─────────────────────────────────────────────────────


def article_url(item: ContentItem, brand: str | None = None) -> str:
    """Canonical public URL of an article on its brand's site."""
    return f"{get_brand(brand or item.brand).base_url}/{item.slug}"


def fill_template(
    template: str,
    *,
    title: str,
    excerpt: str | None,
    url: str,
    brand: str,
    author: str | None,
) -> str:
    """Substitute every placeholder in ``template``.

    Missing ``excerpt`` and ``author`` render as the empty string.
    """
    values = {
        "title": title,
        "excerpt": excerpt or "",
        "url": url,
        "brand": brand,
        "author": author or "",
    }
    return _PLACEHOLDER_RE.sub(lambda m: values[m.group(1)], template)


def format_hashtags(hashtags: list[str]) -> str:
    """Join hashtags with spaces, adding a leading ``#`` where missing."""
    tags = [h.strip() for h in hashtags if h and h.strip()]
    return " ".join(t if t.startswith("#") else f"#{t}" for t in tags)


def enforce_limit(text: str, platform: Platform | str) -> str:
    """Truncate ``text`` to the platform ceiling, ellipsis included.

    A truncated result is exactly the limit long.  Platforms without a
    ceiling are returned unchanged.
    """
    limit = PLATFORM_LIMITS.get(Platform(platform))
    if limit is None or len(text) <= limit:
        return text
    return text[: limit - len(ELLIPSIS)] + ELLIPSIS


def render_post(
    item: ContentItem,
    platform: Platform | str,
    *,
    template: str | None = None,
    hashtags: list[str] | None = None,
    author: str | None = None,
    brand: str | None = None,
) -> str:
    """Build the final post text for one platform.

    ``brand`` overrides the item's own brand for the URL and ``{brand}``.
    """
    text = fill_template(
        template or DEFAULT_TEMPLATE,
        title=item.title,
        excerpt=item.excerpt,
        url=article_url(item, brand),
        brand=get_brand(brand or item.brand).name,
        author=author,
    )
    tags = format_hashtags(hashtags or [])
    if tags:
        text = f"{text}\n\n{tags}"
    return enforce_limit(text, platform)


# ── OG images ────────────────────────────────────────────────────────


def og_image_url(item: ContentItem, author: str | None = None) -> str:
    """Deterministic OG-image URL on the brand's canonical domain.

    Optional parameters are omitted when empty; order is fixed.
    """
    params: list[tuple[str, str]] = [("title", item.title), ("type", "article")]
    if item.category:
        params.append(("category", item.category))
    if author:
        params.append(("author", author))
    if item.cover_image:
        params.append(("image", item.cover_image))
    return f"{get_brand(item.brand).base_url}{OG_IMAGE_PATH}?{urlencode(params)}"


# ── Narration ────────────────────────────────────────────────────────


def prepare_narration(title: str, body: str, max_chars: int) -> str:
    """Turn an article into plain synthesis input.

    Strips markup, collapses whitespace and truncates to ``max_chars``.
    """
    text = _TAG_RE.sub("", f"{title}. {body}")
    text = _WS_RE.sub(" ", text).strip()
    return text[:max_chars]


# ── Email ────────────────────────────────────────────────────────────


class EmailArticle(BaseModel):
    """One article card in a newsletter."""

    title: str
    excerpt: str = ""
    url: str
    cover_image: str | None = None
    category: str | None = None
    author: str | None = None


def email_article(item: ContentItem, author: str | None = None) -> EmailArticle:
    return EmailArticle(
        title=item.title,
        excerpt=item.excerpt or "",
        url=article_url(item),
        cover_image=item.cover_image,
        category=item.category or None,
        author=author,
    )


def unsubscribe_url(profile: BrandProfile) -> str:
    return f"{profile.base_url}/unsubscribe"


def _article_card(article: EmailArticle, profile: BrandProfile) -> str:
    style = profile.email
    esc = html.escape
    image = ""
    if article.cover_image:
        image = (
            '<td width="120" style="padding-right: 16px; vertical-align: top;">'
            f'<img src="{esc(article.cover_image)}" alt="{esc(article.title)}" width="120" '
            'height="80" style="border-radius: 8px; object-fit: cover; display: block;" />'
            "</td>"
        )
    category = ""
    if article.category:
        category = (
            f'<span style="color: {style.primary_color}; font-size: 11px; '
            'text-transform: uppercase; letter-spacing: 1px; font-weight: 600;">'
            f"{esc(article.category)}</span><br/>"
        )
    byline = ""
    if article.author:
        byline = f'<span style="color: #666; font-size: 12px;">By {esc(article.author)}</span> '
    return (
        "<tr>"
        f'<td style="padding: 20px 0; border-bottom: 1px solid {style.primary_color}22;">'
        '<table width="100%" cellpadding="0" cellspacing="0" border="0"><tr>'
        f"{image}"
        '<td style="vertical-align: top;">'
        f"{category}"
        f'<a href="{esc(article.url)}" style="color: {style.text_color}; text-decoration: none; '
        'font-size: 18px; font-weight: 700; display: block; margin: 4px 0 8px;">'
        f"{esc(article.title)}</a>"
        '<p style="color: #999; font-size: 14px; line-height: 1.5; margin: 0 0 12px;">'
        f"{esc(article.excerpt)}</p>"
        f"{byline}"
        f'<a href="{esc(article.url)}" style="color: {style.primary_color}; font-size: 13px; '
        'font-weight: 600; text-decoration: none;">Read more &rarr;</a>'
        "</td></tr></table></td></tr>"
    )


def render_email_html(
    profile: BrandProfile,
    subject: str,
    articles: list[EmailArticle],
    *,
    footer_text: str | None = None,
) -> str:
    """Render a branded newsletter as a table-based HTML email."""
    style = profile.email
    esc = html.escape
    cards = "".join(_article_card(a, profile) for a in articles)
    footer = footer_text or f"You're receiving this because you subscribed to {profile.name}."
    year = datetime.now(tz=UTC).year
    return f"""<!DOCTYPE html>
<html>
<head>
  <meta charset="utf-8">
  <meta name="viewport" content="width=device-width, initial-scale=1.0">
  <title>{esc(subject)}</title>
</head>
<body style="margin: 0; padding: 0; background-color: {style.bg_color};">
  <table width="100%" cellpadding="0" cellspacing="0" border="0">
    <tr><td align="center" style="padding: 40px 20px;">
      <table width="600" cellpadding="0" cellspacing="0" border="0" style="max-width: 600px;">
        <tr><td style="text-align: center; padding: 32px 24px; border-bottom: 2px solid {style.primary_color};">
          <div style="font-size: 32px; margin-bottom: 8px;">{style.logo}</div>
          <h1 style="margin: 0; color: {style.primary_color}; font-size: 28px; {style.header_style}">{esc(profile.name)}</h1>
          <p style="margin: 4px 0 0; color: #888; font-size: 13px;">{esc(profile.tagline)}</p>
        </td></tr>
        <tr><td style="padding: 32px 24px;">
          <h2 style="color: {style.text_color}; font-size: 20px; margin: 0 0 24px;">{esc(subject)}</h2>
          <table width="100%" cellpadding="0" cellspacing="0" border="0">{cards}</table>
        </td></tr>
        <tr><td style="padding: 24px; text-align: center;">
          <p style="color: #666; font-size: 12px; margin: 0 0 8px;">{esc(footer)}</p>
          <a href="{esc(unsubscribe_url(profile))}" style="color: #999; font-size: 11px;">Unsubscribe</a>
          <p style="color: #444; font-size: 11px; margin: 12px 0 0;">&copy; {year} {esc(profile.name)} &mdash; {profile.domain}</p>
        </td></tr>
      </table>
    </td></tr>
  </table>
</body>
</html>"""


def render_email_text(
    profile: BrandProfile,
    subject: str,
    articles: list[EmailArticle],
    *,
    footer_text: str | None = None,
) -> str:
    """Plain-text alternative for the newsletter."""
    blocks = "\n---\n\n".join(
        f"{a.title}\n{a.excerpt}\nRead more: {a.url}\n" for a in articles
    )
    year = datetime.now(tz=UTC).year
    return (
        f"{profile.name} - {subject}\n\n{blocks}\n\n---\n{footer_text or ''}\n"
        f"Unsubscribe: {unsubscribe_url(profile)}\n(c) {year} {profile.name}"
    )
