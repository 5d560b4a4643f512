"""Options threaded through every render call."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class RenderContext:
    """Rendering switches.

    Attributes:
        use_html_tags: Emit ``<strong>``/``<em>``/``<del>`` instead of
            Markdown emphasis markers.
        one_page: Replace chapter-link headings with the linked document.
    """

    use_html_tags: bool = False
    one_page: bool = False
