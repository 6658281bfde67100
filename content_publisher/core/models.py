"""Data models for Content Publisher."""

import enum
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Union


class PublisherError(Exception):
    """Base class for all publishing errors."""


class ConfigurationError(PublisherError):
    """The settings file cannot be parsed or is not a mapping."""


class FrontmatterError(PublisherError):
    """A note's header could not be parsed or rewritten."""


class RenderError(PublisherError):
    """A template variable or expression could not be rendered."""


class PathError(PublisherError):
    """A note path would leave the vault or the destination root."""


class RunInProgressError(PublisherError):
    """A publish run was started while another one is still outstanding."""


@dataclass
class VaultFile:
    """Reference to a single file inside the vault.

    Only location is stored; content is read on demand.
    """
    path: str
    abs_path: Path

    @property
    def name(self) -> str:
        return self.abs_path.name

    @property
    def basename(self) -> str:
        return self.abs_path.stem

    @property
    def extension(self) -> str:
        return self.abs_path.suffix.lstrip('.')

    def read_raw(self) -> str:
        """Read file contents on demand."""
        return self.abs_path.read_text(encoding='utf-8')

    def write_raw(self, content: str) -> None:
        self.abs_path.write_text(content, encoding='utf-8')


@dataclass
class VaultFolder:
    """A folder node; children are folders and files sorted by name."""
    path: str
    abs_path: Path
    children: List[Union["VaultFolder", VaultFile]] = field(default_factory=list)

    @property
    def name(self) -> str:
        return self.abs_path.name


DocumentRef = VaultFile


@dataclass
class MetadataContext:
    """Resolved variable set for one note, recomputed on every run."""
    document: DocumentRef
    metadata: Dict[str, Any]

    @property
    def key(self) -> str:
        """Cache fingerprint; the note path is stable within a run."""
        return self.document.path


@dataclass(frozen=True)
class RunReport:
    """Terminal summary of one publish run."""
    total: int
    successed: int
    failed: int

    @property
    def all_succeeded(self) -> bool:
        return self.failed == 0

    @property
    def message(self) -> str:
        if self.failed > 0:
            return f"All done, failed: {self.failed}, successed: {self.successed}"
        return "All notes have been published!"


class RunState(enum.Enum):
    """Lifecycle of a publish run."""
    IDLE = "idle"
    VALIDATING = "validating"
    DISCOVERING = "discovering"
    REFRESHING = "refreshing"
    SEEDING = "seeding"
    FAN_OUT = "fan_out"
