"""Shared fixtures for Content Publisher tests."""

from pathlib import Path

import pytest

from content_publisher.core.config import PublisherSettings
from content_publisher.core.notify import MemoryNotifier


def write_note(root: Path, rel: str, content: str) -> Path:
    """Create a file under root, making parent folders."""
    path = root / rel
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding='utf-8')
    return path


@pytest.fixture
def vault_dir(tmp_path):
    vault = tmp_path / "vault"
    vault.mkdir()
    return vault


@pytest.fixture
def publish_dir(tmp_path):
    pub = tmp_path / "pub"
    pub.mkdir()
    return pub


@pytest.fixture
def settings(vault_dir, publish_dir):
    return PublisherSettings(
        vault_path=str(vault_dir),
        note_folder="notes",
        publish_to_ab_folder=str(publish_dir),
    )


@pytest.fixture
def notifier():
    return MemoryNotifier()
