"""
Content Publisher - Publish vault notes to an external content folder

Refreshes each note's frontmatter, renders header and body through
jinja2 templates, and writes the result under a destination folder:
- Single note or whole source folder publishing
- Templated header fields
- Wikilink and image embed conversion
- One summary notification per run
"""

from content_publisher.core.models import MetadataContext, PublisherError, RunReport, RunState, VaultFile, VaultFolder
from content_publisher.core.config import PublisherSettings, load_settings
from content_publisher.core.discovery import Vault, VaultDiscovery
from content_publisher.core.processor import ContentRenderer
from content_publisher.core.publisher import PublishOrchestrator, create_publisher_from_config
from content_publisher.core.tracker import TaskTracker

__version__ = "0.1.0"

__all__ = [
    "MetadataContext",
    "PublisherError",
    "RunReport",
    "RunState",
    "VaultFile",
    "VaultFolder",
    "PublisherSettings",
    "load_settings",
    "Vault",
    "VaultDiscovery",
    "ContentRenderer",
    "PublishOrchestrator",
    "create_publisher_from_config",
    "TaskTracker",
]
