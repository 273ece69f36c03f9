"""Unit tests for the data models."""

from dataclasses import FrozenInstanceError
from datetime import datetime, timezone

import pytest

from src.github_client.errors import ListFailedError
from src.models.mirror_config import MirrorConfig
from src.models.snapshot import Snapshot
from src.models.sync_result import SyncResult, SyncStatus


class TestSnapshot:
    """Test cases for Snapshot."""

    def test_empty(self):
        snapshot = Snapshot.empty()

        assert snapshot.is_empty()
        assert len(snapshot) == 0
        assert dict(snapshot.index) == {}
        assert snapshot.generated_at is None

    def test_build_sorts_descending(self, make_post):
        posts = [make_post("data/a.md"), make_post("data/c.md"), make_post("data/b.md")]

        snapshot = Snapshot.build(posts)

        assert [p.source_path for p in snapshot.posts] == ["data/c.md", "data/b.md", "data/a.md"]
        assert set(snapshot.index) == {"a", "b", "c"}

    def test_collision_later_post_wins(self, make_post):
        """Both colliding posts stay listed; the later one in order owns the slug."""
        nested = make_post("data/foo/bar.md", slug="foo-bar", title="Nested")
        flat = make_post("data/foo-bar.md", slug="foo-bar", title="Flat")

        snapshot = Snapshot.build([flat, nested])

        assert snapshot.posts == (nested, flat)
        assert snapshot.index["foo-bar"] is flat
        assert snapshot.owns_slug(flat)
        assert not snapshot.owns_slug(nested)

    def test_build_is_order_independent(self, make_post):
        posts = [make_post("data/foo/bar.md", slug="foo-bar"), make_post("data/foo-bar.md", slug="foo-bar")]

        assert Snapshot.build(posts) == Snapshot.build(list(reversed(posts)))

    def test_immutable(self, make_post):
        snapshot = Snapshot.build([make_post("data/a.md")])

        with pytest.raises(FrozenInstanceError):
            snapshot.posts = ()
        with pytest.raises(TypeError):
            snapshot.index["x"] = make_post("data/x.md")

    def test_generated_at_recorded(self, make_post):
        now = datetime(2024, 5, 1, tzinfo=timezone.utc)
        assert Snapshot.build([make_post("data/a.md")], now).generated_at == now


class TestSyncModels:
    """Test cases for SyncResult and SyncStatus."""

    def test_default_result_succeeded(self):
        assert SyncResult().succeeded is True

    def test_error_result_not_succeeded(self):
        result = SyncResult(error=ListFailedError("o", "r", "b", "boom"))
        assert result.succeeded is False
        assert result.posts == []

    def test_status_error_summary(self):
        status = SyncStatus(
            last_sync_at=datetime.now(timezone.utc),
            last_error=ListFailedError("o", "r", "b", "boom"),
        )
        assert status.last_error_summary == "ListFailedError: Listing o/r@b failed: boom"

    def test_status_without_error(self):
        assert SyncStatus().last_error_summary is None


class TestMirrorConfig:
    """Test cases for MirrorConfig."""

    def test_defaults(self):
        config = MirrorConfig(owner="octo", repo="blog")

        assert config.branch == "main"
        assert config.content_dir == "data"
        assert config.sync_interval == 300
        assert config.excerpt_length == 140

    def test_repository_label(self):
        assert MirrorConfig(owner="octo", repo="blog", branch="dev").repository_label == "octo/blog@dev"
