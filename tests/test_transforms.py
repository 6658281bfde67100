"""Tests for transform factories."""

import pytest

from content_publisher.core.config import PublisherSettings
from content_publisher.core.models import MetadataContext, VaultFile
from content_publisher.transforms.links import relative_link, absolute_link, hugo_ref, build_link_transform
from content_publisher.transforms.frontmatter import (
    build_header_transform,
    identity as fm_identity,
    prune_keys,
    hugo_frontmatter,
)


class TestLinkTransforms:
    """Tests for link transform factories."""

    def test_relative_link(self):
        transform = relative_link()
        assert transform("My Note", "my-note") == "[My Note](my-note.md)"

    def test_absolute_link_with_prefix(self):
        transform = absolute_link("/blog")
        assert transform("My Note", "my-note") == "[My Note](/blog/my-note)"

    def test_absolute_link_trailing_slash(self):
        transform = absolute_link("/blog/")
        assert transform("My Note", "my-note") == "[My Note](/blog/my-note)"

    def test_absolute_link_without_prefix(self):
        transform = absolute_link()
        assert transform("My Note", "my-note") == "[My Note](/my-note)"

    def test_hugo_ref(self):
        transform = hugo_ref()
        assert transform("My Note", "my-note") == '[My Note]({{< ref "my-note" >}})'

    def test_build_link_transform(self):
        assert build_link_transform()("A", "a") == "[A](a.md)"
        assert build_link_transform("markdown", "/posts")("A", "a") == "[A](/posts/a)"

    def test_build_hugo_link_transform(self):
        assert build_link_transform("hugo")("A", "a") == '[A]({{< ref "a" >}})'
        assert build_link_transform("hugo", "/posts")("A", "a") == '[A]({{< ref "a" >}})'


class TestHeaderTransforms:
    """Tests for header transform factories."""

    @pytest.fixture
    def context(self, tmp_path):
        file_path = tmp_path / "test-note.md"
        file_path.write_text("---\ntitle: test note\n---\nContent")
        return MetadataContext(
            document=VaultFile(path="notes/test-note.md", abs_path=file_path),
            metadata={"title": "test note"},
        )

    def test_identity(self, context):
        transform = fm_identity()
        fm = {"a": 1, "b": 2}
        result = transform(fm, context)
        assert result == {"a": 1, "b": 2}
        assert result is not fm

    def test_prune_keep_keys(self, context):
        transform = prune_keys(keep_keys=["a"])
        assert transform({"a": 1, "b": 2, "c": 3}, context) == {"a": 1}

    def test_prune_remove_keys(self, context):
        transform = prune_keys(remove_keys=["b"])
        assert transform({"a": 1, "b": 2, "c": 3}, context) == {"a": 1, "c": 3}

    def test_prune_without_keys(self, context):
        transform = prune_keys()
        fm = {"a": 1}
        result = transform(fm, context)
        assert result == {"a": 1}
        assert result is not fm

    def test_keep_keys_wins_over_remove_keys(self, context):
        transform = prune_keys(keep_keys=["a"], remove_keys=["a"])
        assert transform({"a": 1, "b": 2}, context) == {"a": 1}

    def test_hugo_frontmatter_with_author(self, context):
        transform = hugo_frontmatter("Kishore Kumar")
        fm = {
            "title": "test note",
            "date": "2024-01-15",
            "created": "2024-01-01",
            "tags": ["domain-cs"],
        }
        result = transform(fm, context)
        assert result["title"] == "Test Note"
        assert result["author"] == "Kishore Kumar"
        assert result["date"] == "2024-01-15"
        assert result["doc"] == "2024-01-01"
        assert result["tags"] == ["domain-cs"]

    def test_hugo_frontmatter_without_author(self, context):
        result = hugo_frontmatter()({"title": "x"}, context)
        assert "author" not in result
        assert "tags" not in result

    def test_hugo_frontmatter_falls_back(self, context):
        result = hugo_frontmatter()({"updated": "2024-02-02", "tags": "single"}, context)
        assert result["title"].lower() == "test-note"
        assert result["date"] == "2024-02-02"
        assert result["doc"] == ""
        assert result["tags"] == ["single"]

    def test_hugo_frontmatter_semicolon(self, context):
        result = hugo_frontmatter()({"title": "one; two"}, context)
        assert ";" not in result["title"]


class TestBuildHeaderTransform:
    """Tests for choosing the header transform from settings."""

    @pytest.fixture
    def context(self, tmp_path):
        return MetadataContext(
            document=VaultFile(path="a.md", abs_path=tmp_path / "a.md"),
            metadata={},
        )

    def test_default_is_passthrough(self, context):
        transform = build_header_transform(PublisherSettings())
        assert transform({"a": 1}, context) == {"a": 1}

    def test_hugo_style(self, context):
        transform = build_header_transform(PublisherSettings(header_style="hugo", author="Me"))
        result = transform({"title": "hello"}, context)
        assert result["author"] == "Me"
        assert result["title"] == "Hello"

    def test_keep_keys(self, context):
        transform = build_header_transform(PublisherSettings(keep_keys=["title"]))
        assert transform({"title": "t", "secret": 1}, context) == {"title": "t"}

    def test_remove_keys(self, context):
        transform = build_header_transform(PublisherSettings(remove_keys=["secret"]))
        assert transform({"title": "t", "secret": 1}, context) == {"title": "t"}
