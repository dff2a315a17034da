"""Smoke tests for the CLI."""

import logging
from pathlib import Path

import pytest
from typer.testing import CliRunner

from presswire import __version__
from presswire.brands import Brand
from presswire.cli import app
from presswire.content.models import (
    CampaignStatus,
    ContentItem,
    ContentStatus,
    NewsletterCampaign,
    NewsletterSettings,
    NewsletterSubscriber,
    Platform,
)
from presswire.content.store import ContentStore


@pytest.fixture
def cli() -> CliRunner:
    """Create a CLI test runner."""
    return CliRunner()


@pytest.fixture(autouse=True)
def _restore_root_logging(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.delenv("ELEVENLABS_API_KEY", raising=False)
    monkeypatch.delenv("PRESSWIRE_DATA_DIR", raising=False)
    monkeypatch.delenv("PRESSWIRE_EFFECT_MODE", raising=False)
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture
def data_dir(tmp_path: Path) -> Path:
    return tmp_path / "data"


@pytest.fixture
def config_file(tmp_path: Path, data_dir: Path) -> Path:
    path = tmp_path / "presswire.toml"
    path.write_text(
        f'[store]\ndata_dir = "{data_dir.as_posix()}"\n\n'
        f'[storage]\nroot = "{(tmp_path / "storage").as_posix()}"\n',
        encoding="utf-8",
    )
    return path


@pytest.fixture
def item(data_dir: Path) -> ContentItem:
    return ContentStore(data_dir).insert_item(
        ContentItem(brand=Brand.SAUCEWIRE, title="Big Story", slug="big-story")
    )


class TestVersion:
    def test_version_flag(self, cli: CliRunner):
        result = cli.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert f"presswire {__version__}" in result.output


class TestPublish:
    def test_publish_with_cross_post(
        self, cli: CliRunner, config_file: Path, data_dir: Path, item: ContentItem
    ):
        result = cli.invoke(
            app, ["publish", item.id, "--cross-post", "trapglow", "--config", str(config_file)]
        )

        assert result.exit_code == 0, result.output
        store = ContentStore(data_dir)
        published = store.get_item(item.id)
        assert published.status == ContentStatus.PUBLISHED
        assert len(published.cross_posted_to) == 1
        assert store.get_item(published.cross_posted_to[0]).brand == Brand.TRAPGLOW

    def test_publish_shares_before_exit(
        self, cli: CliRunner, config_file: Path, data_dir: Path, item: ContentItem
    ):
        result = cli.invoke(
            app, ["publish", item.id, "-s", "facebook", "--config", str(config_file)]
        )

        assert result.exit_code == 0, result.output
        rows = ContentStore(data_dir).list_share_log(article_id=item.id)
        assert [r.platform for r in rows] == [Platform.FACEBOOK]

    def test_publish_missing_item(self, cli: CliRunner, config_file: Path):
        result = cli.invoke(app, ["publish", "nope", "--config", str(config_file)])
        assert result.exit_code == 1
        assert "not found" in result.output


class TestTTS:
    def test_not_configured(self, cli: CliRunner, config_file: Path, item: ContentItem):
        result = cli.invoke(app, ["tts", item.id, "--config", str(config_file)])
        assert result.exit_code == 1
        assert "not_configured" in result.output


class TestShare:
    def test_share_records_log(
        self, cli: CliRunner, config_file: Path, data_dir: Path, item: ContentItem
    ):
        result = cli.invoke(
            app,
            ["share", item.id, "-p", "twitter", "-p", "linkedin", "--config", str(config_file)],
        )

        assert result.exit_code == 0, result.output
        rows = ContentStore(data_dir).list_share_log(article_id=item.id)
        assert {r.platform for r in rows} == {Platform.TWITTER, Platform.LINKEDIN}

    def test_share_log_table(self, cli: CliRunner, config_file: Path, item: ContentItem):
        cli.invoke(app, ["share", item.id, "-p", "twitter", "--config", str(config_file)])
        result = cli.invoke(app, ["share-log", "--config", str(config_file)])
        assert result.exit_code == 0
        assert "Social share log" in result.output


class TestSendCampaign:
    def test_sends(self, cli: CliRunner, config_file: Path, data_dir: Path):
        store = ContentStore(data_dir)
        store.upsert_newsletter_settings(NewsletterSettings(brand=Brand.SAUCEWIRE, enabled=True))
        store.add_subscriber(NewsletterSubscriber(brand=Brand.SAUCEWIRE, email="a@x.com"))
        campaign = store.insert_campaign(NewsletterCampaign(brand=Brand.SAUCEWIRE, subject="S"))

        result = cli.invoke(app, ["send-campaign", campaign.id, "--config", str(config_file)])

        assert result.exit_code == 0, result.output
        assert "Sent to 1 of 1 subscribers" in result.output
        assert ContentStore(data_dir).get_campaign(campaign.id).status == CampaignStatus.SENT

    def test_not_configured(self, cli: CliRunner, config_file: Path, data_dir: Path):
        campaign = ContentStore(data_dir).insert_campaign(
            NewsletterCampaign(brand=Brand.SAUCEWIRE, subject="S")
        )
        result = cli.invoke(app, ["send-campaign", campaign.id, "--config", str(config_file)])
        assert result.exit_code == 1
