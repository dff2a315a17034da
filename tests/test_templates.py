"""Tests for post, OG-image, narration and email rendering."""

from urllib.parse import parse_qsl, urlsplit

import pytest

from presswire.brands import Brand, get_brand
from presswire.content.models import ContentItem, Platform
from presswire.templates import (
    article_url,
    email_article,
    enforce_limit,
    fill_template,
    format_hashtags,
    og_image_url,
    prepare_narration,
    render_email_html,
    render_email_text,
    render_post,
)


def _item(**kwargs: object) -> ContentItem:
    defaults: dict[str, object] = {
        "brand": Brand.SAUCEWIRE,
        "title": "Drake Drops Surprise Album",
        "slug": "drake-surprise-album",
    }
    defaults.update(kwargs)
    return ContentItem(**defaults)  # type: ignore[arg-type]


# ── Social posts ─────────────────────────────────────────────────────────


class TestFillTemplate:
    def test_all_placeholders(self):
        text = fill_template(
            "{brand}: {title} by {author} - {excerpt} {url}",
            title="T",
            excerpt="E",
            url="https://u",
            brand="B",
            author="A",
        )
        assert text == "B: T by A - E https://u"

    def test_missing_author_and_excerpt_render_empty(self):
        text = fill_template(
            "[{author}][{excerpt}]", title="T", excerpt=None, url="u", brand="B", author=None
        )
        assert text == "[][]"

    def test_values_are_not_expanded_twice(self):
        text = fill_template("{title}", title="{url}", excerpt=None, url="X", brand="B", author=None)
        assert text == "{url}"

    def test_unknown_placeholder_left_alone(self):
        text = fill_template("{title} {other}", title="T", excerpt=None, url="u", brand="B", author=None)
        assert text == "T {other}"


class TestHashtags:
    def test_adds_hash_prefix(self):
        assert format_hashtags(["hiphop", "#music", "  ", ""]) == "#hiphop #music"


class TestEnforceLimit:
    def test_twitter_truncates_to_exactly_280(self):
        text = enforce_limit("x" * 300, Platform.TWITTER)
        assert len(text) == 280
        assert text.endswith("...")
        assert text[:277] == "x" * 277

    def test_at_limit_untouched(self):
        text = "y" * 280
        assert enforce_limit(text, Platform.TWITTER) == text

    def test_unlimited_platform_untouched(self):
        text = "z" * 1000
        assert enforce_limit(text, Platform.LINKEDIN) == text


class TestRenderPost:
    def test_default_template(self):
        text = render_post(_item(), Platform.FACEBOOK)
        assert text == "Drake Drops Surprise Album https://saucewire.com/drake-surprise-album"

    def test_hashtags_appended_after_blank_line(self):
        text = render_post(_item(), Platform.FACEBOOK, hashtags=["rap"])
        assert text.endswith("\n\n#rap")

    def test_brand_override_changes_url_and_name(self):
        text = render_post(_item(), Platform.FACEBOOK, template="{brand} {url}", brand="trapglow")
        assert text == "TrapGlow https://trapglow.com/drake-surprise-album"

    def test_twitter_long_post_truncated(self):
        item = _item(title="A" * 400)
        text = render_post(item, Platform.TWITTER, hashtags=["x"])
        assert len(text) == 280
        assert text.endswith("...")

    def test_article_url(self):
        assert article_url(_item()) == "https://saucewire.com/drake-surprise-album"


# ── OG images ────────────────────────────────────────────────────────────


class TestOgImageUrl:
    def test_minimal_params(self):
        url = og_image_url(_item())
        parts = urlsplit(url)
        assert f"{parts.scheme}://{parts.netloc}{parts.path}" == "https://saucewire.com/api/og"
        assert parse_qsl(parts.query) == [
            ("title", "Drake Drops Surprise Album"),
            ("type", "article"),
        ]

    def test_full_params_in_fixed_order(self):
        item = _item(category="Music", cover_image="https://img.example.com/c.jpg")
        params = parse_qsl(urlsplit(og_image_url(item, "Jordan Blake")).query)
        assert [k for k, _ in params] == ["title", "type", "category", "author", "image"]
        assert dict(params)["author"] == "Jordan Blake"

    def test_deterministic(self):
        item = _item(category="Music")
        assert og_image_url(item, "A") == og_image_url(item, "A")

    def test_uses_item_brand_domain(self):
        assert og_image_url(_item(brand=Brand.TRAPFREQUENCY)).startswith(
            "https://trapfrequency.com/api/og?"
        )


# ── Narration ────────────────────────────────────────────────────────────


class TestPrepareNarration:
    def test_strips_markup_and_whitespace(self):
        text = prepare_narration("Title", "<p>Hello\n\n  <b>world</b></p>", 5000)
        assert text == "Title. Hello world"

    def test_truncates(self):
        assert len(prepare_narration("T", "word " * 2000, 5000)) == 5000


# ── Email ────────────────────────────────────────────────────────────────


class TestEmail:
    @pytest.fixture
    def profile(self):
        return get_brand(Brand.SAUCECAVIAR)

    def test_html_contains_brand_and_article(self, profile):
        item = _item(brand=Brand.SAUCECAVIAR, excerpt="Short take", category="Music")
        html = render_email_html(profile, item.title, [email_article(item, "Sam")])

        assert "SauceCaviar" in html
        assert "https://saucecaviar.com/drake-surprise-album" in html
        assert "By Sam" in html
        assert "https://saucecaviar.com/unsubscribe" in html
        assert profile.email.primary_color in html

    def test_html_escapes_content(self, profile):
        item = _item(brand=Brand.SAUCECAVIAR, title="<script>alert(1)</script>")
        html = render_email_html(profile, item.title, [email_article(item)])
        assert "<script>" not in html
        assert "&lt;script&gt;" in html

    def test_custom_footer(self, profile):
        html = render_email_html(profile, "S", [], footer_text="Thanks for reading")
        assert "Thanks for reading" in html

    def test_text_version(self, profile):
        item = _item(brand=Brand.SAUCECAVIAR, excerpt="Short take")
        text = render_email_text(profile, "Subject", [email_article(item)])
        assert text.startswith("SauceCaviar - Subject")
        assert "Read more: https://saucecaviar.com/drake-surprise-album" in text
        assert "Unsubscribe: https://saucecaviar.com/unsubscribe" in text
