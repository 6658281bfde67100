"""Link transform factories for Content Publisher.

A link transform turns (link text, target slug) into a markdown link.
"""

from typing import Callable

LinkTransform = Callable[[str, str], str]


def relative_link() -> LinkTransform:
    """Link to a sibling markdown file: ``[Text](slug.md)``."""
    def transform(text: str, slug: str) -> str:
        return f"[{text}]({slug}.md)"
    return transform


def absolute_link(prefix: str = "") -> LinkTransform:
    """Link to an absolute URL path: ``[Text](/prefix/slug)``."""
    base = prefix.rstrip('/')

    def transform(text: str, slug: str) -> str:
        return f"[{text}]({base}/{slug})"
    return transform


def hugo_ref() -> LinkTransform:
    """Link through Hugo's ref shortcode."""
    def transform(text: str, slug: str) -> str:
        return f'[{text}]({{{{< ref "{slug}" >}}}})'
    return transform


def build_link_transform(style: str = "markdown", prefix: str = "") -> LinkTransform:
    """Pick a transform from the ``link_style`` and ``link_prefix`` settings."""
    if style == "hugo":
        return hugo_ref()
    if prefix:
        return absolute_link(prefix)
    return relative_link()
