"""Tests for PathResolver and write_content."""

from pathlib import Path

import pytest

from content_publisher.core.config import PublisherSettings
from content_publisher.core.models import PathError, VaultFile
from content_publisher.core.paths import PathResolver, write_content


def note(rel: str) -> VaultFile:
    return VaultFile(path=rel, abs_path=Path("/vault") / rel)


class TestValidateRoot:
    """Tests for destination root validation."""

    def test_existing_root(self, tmp_path):
        resolver = PathResolver(PublisherSettings(publish_to_ab_folder=str(tmp_path)))
        assert resolver.validate_root() is True

    def test_missing_root(self, tmp_path):
        resolver = PathResolver(PublisherSettings(publish_to_ab_folder=str(tmp_path / "nope")))
        assert resolver.validate_root() is False

    def test_empty_root(self):
        assert PathResolver(PublisherSettings(publish_to_ab_folder="")).validate_root() is False
        assert PathResolver(PublisherSettings(publish_to_ab_folder="   ")).validate_root() is False

    def test_root_is_a_file(self, tmp_path):
        target = tmp_path / "file.txt"
        target.write_text("x")
        assert PathResolver(PublisherSettings(publish_to_ab_folder=str(target))).validate_root() is False

    def test_explicit_root_argument(self, tmp_path):
        resolver = PathResolver(PublisherSettings(publish_to_ab_folder=""))
        assert resolver.validate_root(str(tmp_path)) is True


class TestResolveDestination:
    """Tests for mapping notes to destination paths."""

    @pytest.fixture
    def resolver(self):
        return PathResolver(PublisherSettings(note_folder="notes", publish_to_ab_folder="/pub"))

    def test_relative_to_source_folder(self, resolver):
        assert resolver.resolve_destination(note("notes/a.md")) == Path("/pub/a.md")

    def test_nested_note(self, resolver):
        assert resolver.resolve_destination(note("notes/sub/b.md")) == Path("/pub/sub/b.md")

    def test_note_outside_source_folder(self, resolver):
        assert resolver.resolve_destination(note("other/c.md")) == Path("/pub/other/c.md")

    def test_idempotent(self, resolver):
        doc = note("notes/a.md")
        assert resolver.resolve_destination(doc) == resolver.resolve_destination(doc)

    def test_distinct_notes_distinct_paths(self, resolver):
        paths = {resolver.resolve_destination(note(p)) for p in ("notes/a.md", "notes/x/a.md", "notes/b.md")}
        assert len(paths) == 3

    def test_trailing_slash_in_note_folder(self):
        resolver = PathResolver(PublisherSettings(note_folder="notes/", publish_to_ab_folder="/pub"))
        assert resolver.resolve_destination(note("notes/a.md")) == Path("/pub/a.md")

    def test_slugify_filenames(self):
        resolver = PathResolver(PublisherSettings(
            note_folder="notes", publish_to_ab_folder="/pub", slugify_filenames=True,
        ))
        assert resolver.resolve_destination(note("notes/sub/My Great Note.md")) == Path("/pub/sub/my-great-note.md")

    def test_parent_segments_rejected(self, resolver):
        with pytest.raises(PathError):
            resolver.resolve_destination(note("notes/../../secret.md"))
        with pytest.raises(PathError):
            resolver.resolve_destination(note("../secret.md"))

    def test_destination_stays_under_root(self, resolver):
        destination = resolver.resolve_destination(note("notes/sub/b.md"))
        assert destination.is_relative_to(Path("/pub"))


class TestMatchesSourceScope:
    """Tests for the source folder and extension filter."""

    @pytest.fixture
    def resolver(self):
        return PathResolver(PublisherSettings(note_folder="notes", publish_to_ab_folder="/pub"))

    def test_markdown_in_folder(self, resolver):
        assert resolver.matches_source_scope(note("notes/a.md"))
        assert resolver.matches_source_scope(note("notes/deep/a.md"))

    def test_wrong_extension(self, resolver):
        assert not resolver.matches_source_scope(note("notes/a.txt"))
        assert not resolver.matches_source_scope(note("notes/a.md.bak"))

    def test_outside_folder(self, resolver):
        assert not resolver.matches_source_scope(note("other/a.md"))

    def test_sibling_folder_with_same_prefix(self, resolver):
        assert not resolver.matches_source_scope(note("notes-archive/a.md"))

    def test_parent_segments_out_of_scope(self, resolver):
        assert not resolver.matches_source_scope(note("notes/../../secret.md"))
        assert not resolver.matches_source_scope(note("notes/../other/a.md"))

    def test_extension_case_insensitive(self, resolver):
        assert resolver.matches_source_scope(note("notes/A.MD"))
        assert resolver.matches_source_scope(note("notes/b.Md"))

    def test_explicit_source_root(self, resolver):
        assert resolver.matches_source_scope(note("other/a.md"), "other")

    def test_vault_root_scope(self):
        resolver = PathResolver(PublisherSettings(note_folder="", publish_to_ab_folder="/pub"))
        assert resolver.matches_source_scope(note("anywhere/a.md"))
        assert not resolver.matches_source_scope(note("anywhere/a.png"))


class TestWriteContent:
    """Tests for writing published notes."""

    @pytest.mark.asyncio
    async def test_writes_and_calls_back(self, tmp_path):
        calls = []
        target = tmp_path / "out" / "nested" / "a.md"

        await write_content(target, "hello\n", lambda: calls.append("done"))

        assert target.read_text() == "hello\n"
        assert calls == ["done"]

    @pytest.mark.asyncio
    async def test_without_callback(self, tmp_path):
        target = tmp_path / "a.md"
        await write_content(target, "x")
        assert target.read_text() == "x"

    @pytest.mark.asyncio
    async def test_failure_propagates(self, tmp_path):
        blocker = tmp_path / "blocker"
        blocker.write_text("not a folder")
        calls = []

        with pytest.raises(OSError):
            await write_content(blocker / "a.md", "x", lambda: calls.append("done"))

        assert calls == []
