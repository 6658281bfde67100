"""Vault access and discovery of publishable notes."""

import logging
from collections import deque
from pathlib import Path, PurePosixPath
from typing import List, Optional, Union

from content_publisher.core.models import VaultFile, VaultFolder

logger = logging.getLogger(__name__)

NOTE_EXTENSION = "md"


class Vault:
    """Read-only view of a notes vault as a tree of folders and files."""

    def __init__(self, vault_path: Path, active_path: Optional[str] = None):
        """Initialize Vault.

        Args:
            vault_path: Path to the vault root
            active_path: Vault-relative path of the note currently being edited
        """
        self.vault_path = Path(vault_path)
        self.active_path = active_path

    def set_active_document(self, path: Optional[str]) -> None:
        """Mark a note as active by vault-relative or absolute path."""
        if path is None:
            self.active_path = None
            return
        candidate = Path(path)
        if candidate.is_absolute():
            try:
                path = candidate.resolve().relative_to(self.vault_path.resolve()).as_posix()
            except ValueError:
                logger.warning("Active note %s is outside the vault", candidate)
                path = None
        self.active_path = path

    def get_active_document(self) -> Optional[VaultFile]:
        if not self.active_path:
            return None
        return self.get_by_path(self.active_path)

    def get_by_path(self, path: str) -> Optional[VaultFile]:
        node = self.get_abstract_file_by_path(path)
        return node if isinstance(node, VaultFile) else None

    def get_abstract_file_by_path(self, path: str) -> Optional[Union[VaultFolder, VaultFile]]:
        """Look up a vault-relative path.

        Returns:
            VaultFolder with its children populated, VaultFile, or None
        """
        rel = self._normalize(path)
        if rel is None:
            return None
        abs_path = self.vault_path / rel if rel else self.vault_path

        if abs_path.is_dir():
            return self._load_folder(rel, abs_path)
        if abs_path.is_file():
            return VaultFile(path=rel, abs_path=abs_path)
        return None

    def _normalize(self, path: str) -> Optional[str]:
        """Vault-relative posix path, or None if it would leave the vault."""
        rel = PurePosixPath(path.strip().strip('/'))
        if ".." in rel.parts:
            logger.warning("Rejecting path outside the vault: %s", path)
            return None
        rel = rel.as_posix()
        return "" if rel == "." else rel

    def _load_folder(self, rel: str, abs_path: Path) -> VaultFolder:
        folder = VaultFolder(path=rel, abs_path=abs_path)
        for child in sorted(abs_path.iterdir(), key=lambda p: p.name):
            if child.name.startswith('.'):
                continue
            child_rel = f"{rel}/{child.name}" if rel else child.name
            if child.is_dir():
                folder.children.append(self._load_folder(child_rel, child))
            elif child.is_file():
                folder.children.append(VaultFile(path=child_rel, abs_path=child))
        return folder


class VaultDiscovery:
    """Discovers notes eligible for publishing under the source folder."""

    def __init__(self, vault: Vault, note_folder: str = ""):
        """Initialize VaultDiscovery.

        Args:
            vault: Vault to traverse
            note_folder: Vault-relative folder to scan (default: vault root)
        """
        self.vault = vault
        self.note_folder = note_folder

    def discover_all(self) -> List[VaultFile]:
        """Collect every note under the source folder, breadth first.

        Non-markdown files are ignored.

        Returns:
            List of VaultFile in traversal order
        """
        root = self.vault.get_abstract_file_by_path(self.note_folder)
        if root is None:
            logger.warning("Source folder not found: %s", self.note_folder or ".")
            return []

        queue = deque([root])
        notes = []
        while queue:
            node = queue.popleft()
            if isinstance(node, VaultFolder):
                queue.extend(node.children)
            elif isinstance(node, VaultFile) and is_note(node):
                notes.append(node)

        logger.debug("Discovered %d notes under %s", len(notes), self.note_folder or ".")
        return notes


def is_note(file: VaultFile) -> bool:
    return file.extension.lower() == NOTE_EXTENSION
