"""Settings for Content Publisher."""

import dataclasses
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from content_publisher.core.models import ConfigurationError

logger = logging.getLogger(__name__)

DEFAULT_SETTINGS_FILE = "publisher.yaml"


@dataclass
class PublisherSettings:
    """Persisted publisher settings.

    Attributes:
        vault_path: Root of the notes vault
        note_folder: Vault-relative folder whose notes are eligible for publishing
        publish_to_ab_folder: Absolute destination folder for published notes
        header_style: "passthrough" keeps the refreshed header, "hugo" rebuilds it
        author: Author written by the hugo header style
        keep_keys: Header keys to keep (passthrough style)
        remove_keys: Header keys to drop (passthrough style)
        header_fields: Extra header entries, rendered as templates per note
        render_body: Render the note body through the note's template processor
        convert_wikilinks: Convert [[wikilinks]] and ![[embeds]] to markdown
        link_style: "markdown" writes plain links, "hugo" writes ref shortcodes
        link_prefix: Prefix for converted note links ("" keeps relative .md links)
        image_path_prefix: Prefix for converted image embeds
        slugify_filenames: Parameterize destination file names
        log_level: Logging level used by the CLI
    """
    vault_path: str = "."
    note_folder: str = ""
    publish_to_ab_folder: str = ""
    header_style: str = "passthrough"
    author: Optional[str] = None
    keep_keys: Optional[List[str]] = None
    remove_keys: Optional[List[str]] = None
    header_fields: Dict[str, Any] = field(default_factory=dict)
    render_body: bool = False
    convert_wikilinks: bool = True
    link_style: str = "markdown"
    link_prefix: str = ""
    image_path_prefix: str = "/images"
    slugify_filenames: bool = False
    log_level: str = "INFO"

    @property
    def source_root(self) -> str:
        """Note folder normalised to a vault-relative posix prefix."""
        return self.note_folder.strip().strip('/')

    def to_dict(self) -> Dict[str, Any]:
        return dataclasses.asdict(self)


DEFAULT_SETTINGS = PublisherSettings()


def merge_settings(data: Dict[str, Any], defaults: PublisherSettings = DEFAULT_SETTINGS) -> PublisherSettings:
    """Overlay loaded values onto the defaults.

    Unknown keys are ignored with a warning.
    """
    known = {f.name for f in dataclasses.fields(PublisherSettings)}
    merged = defaults.to_dict()
    for key, value in data.items():
        if key not in known:
            logger.warning("Ignoring unknown setting: %s", key)
            continue
        merged[key] = value
    return PublisherSettings(**merged)


def load_settings(path: Optional[Path] = None) -> PublisherSettings:
    """Load settings from a YAML file, merged with defaults.

    Args:
        path: Settings file (default: publisher.yaml in the working directory)

    Returns:
        PublisherSettings; defaults when the file does not exist

    Raises:
        ConfigurationError: If the file is not valid YAML or not a mapping
    """
    path = Path(path or DEFAULT_SETTINGS_FILE)
    if not path.exists():
        logger.info("No settings file at %s, using defaults", path)
        return merge_settings({})

    try:
        data = yaml.safe_load(path.read_text(encoding='utf-8'))
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Failed to parse settings {path}: {e}") from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigurationError(f"Settings file {path} must contain a mapping")

    return merge_settings(data)


def save_settings(settings: PublisherSettings, path: Optional[Path] = None) -> None:
    """Persist settings as YAML."""
    path = Path(path or DEFAULT_SETTINGS_FILE)
    path.write_text(
        yaml.dump(settings.to_dict(), default_flow_style=False, allow_unicode=True, sort_keys=False),
        encoding='utf-8',
    )
