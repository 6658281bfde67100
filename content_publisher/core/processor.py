"""Content rendering for published notes."""

import asyncio
import re
from pathlib import Path
from typing import Optional

import inflection
import yaml

from content_publisher.core.config import PublisherSettings
from content_publisher.core.models import DocumentRef, MetadataContext, RenderError
from content_publisher.core.template import TemplateProcessorManager
from content_publisher.core.updater import split_frontmatter
from content_publisher.transforms.frontmatter import HeaderTransform, build_header_transform
from content_publisher.transforms.links import LinkTransform, build_link_transform

IMAGE_EXTENSIONS = ('.png', '.jpg', '.jpeg', '.gif', '.webp', '.svg')


class ContentRenderer:
    """Renders the published header and body of a note.

    Handles:
    - Template rendering of header values through the cached processor
    - Header shaping through a header transform
    - Wikilink and image embed conversion in the body
    """

    # Pattern for wikilinks: [[target]] or [[target|display]]
    WIKILINK_PATTERN = re.compile(r'\[\[([^\]|]+)(?:\|([^\]]+))?\]\]')

    # Pattern for image embeds: ![[image.png]] or ![[image.png|alt]]
    IMAGE_EMBED_PATTERN = re.compile(r'!\[\[([^\]|]+\.(?:png|jpg|jpeg|gif|webp|svg))(?:\|([^\]]+))?\]\]', re.IGNORECASE)

    def __init__(
        self,
        processors: TemplateProcessorManager,
        settings: Optional[PublisherSettings] = None,
        header_transform: Optional[HeaderTransform] = None,
        link_transform: Optional[LinkTransform] = None,
    ):
        """Initialize ContentRenderer.

        Args:
            processors: Per-run template processor cache
            settings: Publisher settings
            header_transform: Transform for the published header (default from settings)
            link_transform: Transform for converted wikilinks (default from settings)
        """
        self.processors = processors
        self.settings = settings or PublisherSettings()
        self.header_transform = header_transform or build_header_transform(self.settings)
        self.link_transform = link_transform or build_link_transform(
            self.settings.link_style, self.settings.link_prefix,
        )
        self.image_path_prefix = self.settings.image_path_prefix.rstrip('/')

    def get_published_yaml(self, context: MetadataContext) -> str:
        """Render the header block, fences included.

        Returns an empty string when the resulting header is empty.
        """
        processor = self.processors.get_processor(context)
        header = self.header_transform(processor.render_metadata(), context)
        header.update(processor.render_extra_fields())
        if not header:
            return ""

        header_str = yaml.dump(
            header,
            default_flow_style=False,
            allow_unicode=True,
            sort_keys=False,
        )
        return f"---\n{header_str}---\n"

    async def get_published_text(self, document: DocumentRef) -> str:
        """Render the body of a note, header stripped.

        Raises:
            RenderError: If body rendering is enabled and the body fails to render
        """
        raw_content = await asyncio.to_thread(document.read_raw)
        _, content = split_frontmatter(raw_content)

        if self.settings.render_body:
            processor = self.processors.lookup(document.path)
            if processor is None:
                raise RenderError(f"No metadata context for {document.path}")
            content = processor.render_text(content)

        if self.settings.convert_wikilinks:
            # Images must be processed before wikilinks to avoid double-processing
            content = self._process_images(content)
            content = self._process_wikilinks(content)

        return content

    def _image_link(self, image_name: str, alt_text: Optional[str]) -> str:
        stem = Path(image_name).stem
        slug = inflection.parameterize(stem)
        ext = Path(image_name).suffix.lower()
        alt_slug = inflection.parameterize(alt_text or stem)
        return f"![{alt_slug}]({self.image_path_prefix}/{slug}{ext})"

    def _process_images(self, content: str) -> str:
        def replace_image(match: re.Match) -> str:
            return self._image_link(match.group(1), match.group(2))

        return self.IMAGE_EMBED_PATTERN.sub(replace_image, content)

    def _process_wikilinks(self, content: str) -> str:
        def replace_link(match: re.Match) -> str:
            target = match.group(1).strip()
            display = match.group(2)

            # [[image.png]] without the embed marker
            if target.lower().endswith(IMAGE_EXTENSIONS):
                return self._image_link(target, display)

            section = ""
            note_target = target
            if "#" in target:
                note_target, section = target.split("#", 1)
                note_target = note_target.strip()

            slug = inflection.parameterize(note_target)
            result = self.link_transform(display or note_target, slug)

            # Append section anchor by inserting before closing paren
            if section and result.endswith(")"):
                result = result[:-1] + f"#{inflection.parameterize(section)})"

            return result

        return self.WIKILINK_PATTERN.sub(replace_link, content)
