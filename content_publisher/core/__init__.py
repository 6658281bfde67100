"""Core components for Content Publisher."""

from content_publisher.core.models import (
    ConfigurationError,
    FrontmatterError,
    MetadataContext,
    PathError,
    PublisherError,
    RenderError,
    RunInProgressError,
    RunReport,
    RunState,
    VaultFile,
    VaultFolder,
)
from content_publisher.core.config import DEFAULT_SETTINGS, PublisherSettings, load_settings, save_settings
from content_publisher.core.discovery import Vault, VaultDiscovery
from content_publisher.core.paths import PathResolver, write_content
from content_publisher.core.template import TemplateProcessor, TemplateProcessorManager
from content_publisher.core.updater import FrontmatterUpdater
from content_publisher.core.processor import ContentRenderer
from content_publisher.core.tracker import TaskTracker
from content_publisher.core.publisher import PublishOrchestrator, create_publisher_from_config

__all__ = [
    "ConfigurationError",
    "FrontmatterError",
    "MetadataContext",
    "PathError",
    "PublisherError",
    "RenderError",
    "RunInProgressError",
    "RunReport",
    "RunState",
    "VaultFile",
    "VaultFolder",
    "DEFAULT_SETTINGS",
    "PublisherSettings",
    "load_settings",
    "save_settings",
    "Vault",
    "VaultDiscovery",
    "PathResolver",
    "write_content",
    "TemplateProcessor",
    "TemplateProcessorManager",
    "FrontmatterUpdater",
    "ContentRenderer",
    "TaskTracker",
    "PublishOrchestrator",
    "create_publisher_from_config",
]
