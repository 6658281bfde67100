"""Template processors for note metadata and the per-run processor cache."""

import logging
from typing import Any, Callable, Dict, Optional

import inflection
import jinja2
import titlecase as tc

from content_publisher.core.config import PublisherSettings
from content_publisher.core.models import MetadataContext, RenderError

logger = logging.getLogger(__name__)

TEMPLATE_MARKERS = ('{{', '{%')


class TemplateProcessor:
    """Renders template expressions found in one note's metadata.

    Variables available to templates:
    - every header key of the note (``{{ title }}``, ``{{ slug }}``, ...)
    - ``file``: the note reference (``{{ file.basename }}``, ``{{ file.path }}``)
    - ``meta``: the whole header mapping
    """

    def __init__(self, context: MetadataContext, settings: Optional[PublisherSettings] = None):
        self.context = context
        self.settings = settings or PublisherSettings()
        self.env = jinja2.Environment(
            undefined=jinja2.StrictUndefined,
            autoescape=False,
            keep_trailing_newline=True,
        )
        self._register_filters()
        self.variables: Dict[str, Any] = dict(context.metadata)
        self.variables['file'] = context.document
        self.variables['meta'] = context.metadata

    def _register_filters(self) -> None:
        self.env.filters['slugify'] = inflection.parameterize
        self.env.filters['titlecase'] = tc.titlecase

    def render_value(self, value: Any) -> Any:
        """Render a header value, descending into lists and mappings."""
        if isinstance(value, str):
            if not any(marker in value for marker in TEMPLATE_MARKERS):
                return value
            return self.render_text(value)
        if isinstance(value, list):
            return [self.render_value(v) for v in value]
        if isinstance(value, dict):
            return {k: self.render_value(v) for k, v in value.items()}
        return value

    def render_metadata(self) -> Dict[str, Any]:
        """Rendered copy of the note header."""
        return {k: self.render_value(v) for k, v in self.context.metadata.items()}

    def render_extra_fields(self) -> Dict[str, Any]:
        """Rendered ``header_fields`` from settings."""
        return {k: self.render_value(v) for k, v in self.settings.header_fields.items()}

    def render_text(self, text: str) -> str:
        try:
            return self.env.from_string(text).render(self.variables)
        except jinja2.TemplateError as e:
            raise RenderError(
                f"Failed to render template in {self.context.document.path}: {e}"
            ) from e


ProcessorFactory = Callable[[MetadataContext], TemplateProcessor]


class TemplateProcessorManager:
    """Caches one TemplateProcessor per note for the duration of a run.

    All access happens on the event loop thread, so no locking is needed.
    """

    def __init__(self, factory: Optional[ProcessorFactory] = None, settings: Optional[PublisherSettings] = None):
        self.settings = settings or PublisherSettings()
        self.factory = factory or (lambda context: TemplateProcessor(context, self.settings))
        self._processors: Dict[str, TemplateProcessor] = {}

    def get_processor(self, context: MetadataContext) -> TemplateProcessor:
        """Return the cached processor for this note, creating it on a miss."""
        processor = self._processors.get(context.key)
        if processor is None:
            processor = self.factory(context)
            self._processors[context.key] = processor
        return processor

    get_or_create = get_processor

    def lookup(self, key: str) -> Optional[TemplateProcessor]:
        return self._processors.get(key)

    def clear(self) -> None:
        if self._processors:
            logger.debug("Clearing %d template processors", len(self._processors))
        self._processors.clear()

    def __len__(self) -> int:
        return len(self._processors)

    def __contains__(self, key: str) -> bool:
        return key in self._processors
