"""Shared fixtures for presswire tests."""

from __future__ import annotations

from collections.abc import Callable, Iterator
from pathlib import Path

import pytest

from presswire.brands import Brand
from presswire.config import PresswireConfig, StorageConfig, StoreConfig
from presswire.content.models import Author, ContentItem, ContentStatus
from presswire.content.store import ContentStore
from presswire.executor import BackgroundRunner


@pytest.fixture
def store() -> ContentStore:
    """In-memory content store."""
    return ContentStore()


@pytest.fixture
def make_item(store: ContentStore) -> Callable[..., ContentItem]:
    """Insert an article into ``store`` and return it."""

    def _make(
        slug: str = "big-story",
        brand: Brand = Brand.SAUCEWIRE,
        title: str = "Big Story",
        status: ContentStatus = ContentStatus.DRAFT,
        **kwargs: object,
    ) -> ContentItem:
        item = ContentItem(slug=slug, brand=brand, title=title, status=status, **kwargs)  # type: ignore[arg-type]
        return store.insert_item(item)

    return _make


@pytest.fixture
def author(store: ContentStore) -> Author:
    writer = Author(id="author-1", name="Jordan Blake")
    store.upsert_author(writer)
    return writer


@pytest.fixture
def runner() -> Iterator[BackgroundRunner]:
    pool = BackgroundRunner(max_workers=2)
    yield pool
    pool.shutdown()


@pytest.fixture
def config(tmp_path: Path) -> PresswireConfig:
    """Config that keeps every file under ``tmp_path`` and has no TTS key."""
    return PresswireConfig(
        store=StoreConfig(data_dir=str(tmp_path / "data")),
        storage=StorageConfig(
            root=str(tmp_path / "storage"),
            public_base_url="https://cdn.example.com/storage",
        ),
    )
