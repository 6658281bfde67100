"""Frontmatter refresh for source notes."""

import asyncio
import datetime
import logging
from typing import Any, Dict, Tuple

import inflection
import yaml

from content_publisher.core.models import DocumentRef, FrontmatterError, MetadataContext

logger = logging.getLogger(__name__)

FENCE = '---\n'


def split_frontmatter(raw_content: str) -> Tuple[str, str]:
    """Split a note into (header text, body).

    Notes without a header return an empty header text.
    """
    if not raw_content.startswith('---'):
        return "", raw_content

    parts = raw_content.split(FENCE, 2)
    if len(parts) < 3:
        return "", raw_content
    return parts[1], parts[2]


def get_date_string(date_value: Any) -> str:
    """Convert various date formats to string.

    Args:
        date_value: Date in various formats (str, datetime, date, None)

    Returns:
        Date string or empty string
    """
    if date_value is None:
        return ""

    if isinstance(date_value, str):
        return date_value

    if isinstance(date_value, datetime.datetime):
        return date_value.strftime('%Y-%m-%d %H:%M:%S%z')

    if isinstance(date_value, datetime.date):
        return date_value.strftime('%Y-%m-%d')

    return str(date_value)


class FrontmatterUpdater:
    """Recomputes a note's header and persists it back to the note."""

    async def update_frontmatter(self, document: DocumentRef) -> MetadataContext:
        """Refresh the header of a note.

        Fills in ``title``, ``slug``, ``created`` and ``updated``, normalises
        date values to strings and rewrites the note when the header changed.

        Raises:
            FrontmatterError: If the header cannot be parsed or written back
        """
        try:
            raw_content = await asyncio.to_thread(document.read_raw)
        except OSError as e:
            raise FrontmatterError(f"Failed to read {document.path}: {e}") from e

        header_text, body = split_frontmatter(raw_content)
        original = self._parse_header(document, header_text)
        modified = datetime.date.fromtimestamp(document.abs_path.stat().st_mtime)

        metadata = self._refresh(document, original, modified)

        if metadata != original:
            header = yaml.dump(metadata, default_flow_style=False, allow_unicode=True, sort_keys=False)
            try:
                await asyncio.to_thread(document.write_raw, f"{FENCE}{header}{FENCE}{body}")
            except OSError as e:
                raise FrontmatterError(f"Failed to write {document.path}: {e}") from e
            logger.debug("Updated frontmatter of %s", document.path)

        return MetadataContext(document=document, metadata=metadata)

    def _parse_header(self, document: DocumentRef, header_text: str) -> Dict[str, Any]:
        try:
            data = yaml.safe_load(header_text) if header_text.strip() else {}
        except yaml.YAMLError as e:
            raise FrontmatterError(f"Invalid YAML header in {document.path}: {e}") from e

        if data is None:
            return {}
        if not isinstance(data, dict):
            raise FrontmatterError(f"Header of {document.path} is not a mapping")
        return data

    def _refresh(self, document: DocumentRef, original: Dict[str, Any], modified: datetime.date) -> Dict[str, Any]:
        metadata = {
            key: get_date_string(value) if isinstance(value, datetime.date) else value
            for key, value in original.items()
        }

        title = metadata.get('title') or document.basename
        metadata['title'] = str(title)
        if not metadata.get('slug'):
            metadata['slug'] = inflection.parameterize(metadata['title'])
        if not metadata.get('created'):
            metadata['created'] = get_date_string(modified)
        metadata['updated'] = get_date_string(modified)

        return metadata
