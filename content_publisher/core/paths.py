"""Destination path resolution and writing of published notes."""

import asyncio
import logging
import os
from pathlib import Path, PurePosixPath
from typing import Callable, Optional

import inflection

from content_publisher.core.config import PublisherSettings
from content_publisher.core.discovery import is_note
from content_publisher.core.models import DocumentRef, PathError

logger = logging.getLogger(__name__)


class PathResolver:
    """Maps notes to destination paths under the configured root."""

    def __init__(self, settings: PublisherSettings):
        self.settings = settings

    @property
    def root(self) -> Path:
        return Path(self.settings.publish_to_ab_folder).expanduser()

    def validate_root(self, root: Optional[str] = None) -> bool:
        """Check that the destination root exists and is a directory."""
        value = self.settings.publish_to_ab_folder if root is None else root
        if not value or not value.strip():
            return False
        return Path(value).expanduser().is_dir()

    def resolve_destination(self, document: DocumentRef) -> Path:
        """Absolute destination path for a note.

        The note path relative to the source folder is kept, so
        ``notes/a.md`` with source folder ``notes`` lands at ``<root>/a.md``.
        """
        rel = PurePosixPath(document.path)
        if '..' in rel.parts:
            raise PathError(f"Note path leaves the vault: {document.path}")

        source_root = self.settings.source_root
        if source_root and self._is_under(document.path, source_root):
            rel = rel.relative_to(source_root)

        if self.settings.slugify_filenames:
            rel = rel.with_name(inflection.parameterize(rel.stem) + rel.suffix)

        root = Path(os.path.normpath(self.root))
        destination = Path(os.path.normpath(root.joinpath(*rel.parts)))
        if not destination.is_relative_to(root):
            raise PathError(f"{document.path} resolves outside {root}")
        return destination

    def matches_source_scope(self, document: DocumentRef, source_root: Optional[str] = None) -> bool:
        """True iff the note is a markdown file under the source folder."""
        root = self.settings.source_root if source_root is None else source_root.strip().strip('/')
        if not is_note(document):
            return False
        if '..' in PurePosixPath(document.path).parts:
            return False
        return not root or self._is_under(document.path, root)

    @staticmethod
    def _is_under(path: str, root: str) -> bool:
        return '..' not in PurePosixPath(path).parts and path.startswith(root + '/')


async def write_content(path: Path, content: str, on_success: Optional[Callable[[], None]] = None) -> None:
    """Write content to an absolute path, creating parent folders.

    Errors propagate to the caller; ``on_success`` runs only after the write.
    """
    def _write() -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding='utf-8')

    await asyncio.to_thread(_write)
    logger.debug("Wrote %s", path)
    if on_success is not None:
        on_success()
