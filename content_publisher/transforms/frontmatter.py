"""Header transform factories for Content Publisher.

These factories create transform functions that shape the rendered note
header before it is written to the published file.
"""

import titlecase as tc
from typing import Any, Callable, Dict, List, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from content_publisher.core.config import PublisherSettings
    from content_publisher.core.models import MetadataContext

HeaderTransform = Callable[[Dict[str, Any], "MetadataContext"], Dict[str, Any]]


def identity() -> HeaderTransform:
    """Create a pass-through transform that returns the header unchanged.

    Returns:
        A transform function (header, context) -> header
    """
    def transform(fm: Dict[str, Any], context: "MetadataContext") -> Dict[str, Any]:
        return fm.copy()
    return transform


def prune_keys(
    keep_keys: Optional[List[str]] = None,
    remove_keys: Optional[List[str]] = None,
) -> HeaderTransform:
    """Create a transform that prunes header keys.

    If keep_keys is provided, only those keys are kept.
    If remove_keys is provided (and keep_keys is not), those keys are removed.
    Extra entries come from the ``header_fields`` setting, which the renderer
    merges after this transform runs.

    Args:
        keep_keys: List of keys to keep (exclusive with remove_keys)
        remove_keys: List of keys to remove

    Returns:
        A transform function
    """
    def transform(fm: Dict[str, Any], context: "MetadataContext") -> Dict[str, Any]:
        if keep_keys is not None:
            return {k: v for k, v in fm.items() if k in keep_keys}
        if remove_keys is not None:
            return {k: v for k, v in fm.items() if k not in remove_keys}
        return fm.copy()
    return transform


def _tags(value: Any) -> List[str]:
    if isinstance(value, list):
        return [str(tag) for tag in value]
    if isinstance(value, str) and value:
        return [value]
    return []


def hugo_frontmatter(author: Optional[str] = None) -> HeaderTransform:
    """Create a transform that produces standard Hugo frontmatter.

    Output includes: title, date, doc (creation date), author (optional), tags.
    Title is converted to proper title case using the titlecase library.

    Args:
        author: Author name to include in frontmatter

    Returns:
        A transform function for Hugo frontmatter
    """
    def transform(fm: Dict[str, Any], context: "MetadataContext") -> Dict[str, Any]:
        # Semicolons in titles break YAML parsing, replace with colons
        title = tc.titlecase(str(fm.get('title', context.document.basename))).replace(';', ':')
        result: Dict[str, Any] = {
            'title': title,
            'date': fm.get('date') or fm.get('updated', ''),
            'doc': fm.get('created', ''),
        }
        if author:
            result['author'] = author
        tags = _tags(fm.get('tags'))
        if tags:
            result['tags'] = tags
        return result
    return transform


def build_header_transform(settings: "PublisherSettings") -> HeaderTransform:
    """Pick the header transform configured in settings."""
    if settings.header_style == "hugo":
        return hugo_frontmatter(settings.author)
    if settings.keep_keys is not None or settings.remove_keys is not None:
        return prune_keys(keep_keys=settings.keep_keys, remove_keys=settings.remove_keys)
    return identity()
