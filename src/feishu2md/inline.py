"""Render docx inline elements to Markdown."""

from __future__ import annotations

from typing import Sequence
from urllib.parse import unquote

from feishu2md.context import RenderContext
from feishu2md.schemas import TextElement
from feishu2md.schemas.blocks import TextRun

BOLD_MARKER = "**"


def render_inline(elements: Sequence[TextElement], context: RenderContext) -> str:
    """Render the elements of one text-bearing block.

    Adjacent bold fragments are merged into a single bold span, so that runs
    split only by an invisible style boundary do not produce ``**a****b**``.
    The result always ends with exactly one newline.
    """
    inline = len(elements) > 1
    fragments = [render_element(element, inline=inline, context=context) for element in elements]

    parts: list[str] = []
    i = 0
    while i < len(fragments):
        current = fragments[i]
        i += 1
        if not _is_bold(current):
            parts.append(current)
            continue
        merged = _bold_inner(current)
        while i < len(fragments) and _is_bold(fragments[i]):
            merged = _join_bold(merged, _bold_inner(fragments[i]))
            i += 1
        parts.append(BOLD_MARKER + merged.strip() + BOLD_MARKER)

    return "".join(parts) + "\n"


def render_element(element: TextElement, *, inline: bool, context: RenderContext) -> str:
    """Render a single inline element.

    Equations render inline (``$...$``) when they share the block with other
    elements and as display math (``$$...$$``) when they stand alone.
    """
    out: list[str] = []
    if element.text_run is not None:
        out.append(render_text_run(element.text_run, context))
    if element.mention_user is not None:
        out.append(element.mention_user.user_id)
    if element.mention_doc is not None:
        doc = element.mention_doc
        out.append(f"[{doc.title}]({unquote(doc.url)})")
    if element.equation is not None:
        symbol = "$" if inline else "$$"
        content = element.equation.content
        if content.endswith("\n"):
            content = content[:-1]
        out.append(symbol + content + symbol)
    return "".join(out)


def render_text_run(run: TextRun, context: RenderContext) -> str:
    """Wrap run content in the markup of its highest-priority style.

    Only one style is applied: bold, then italic, strikethrough, underline,
    inline code and finally link.
    """
    before, after = _style_markup(run, context)
    return before + run.content + after


def _style_markup(run: TextRun, context: RenderContext) -> tuple[str, str]:
    style = run.text_element_style
    if style is None:
        return "", ""
    html = context.use_html_tags
    if style.bold:
        return ("<strong>", "</strong>") if html else (BOLD_MARKER, BOLD_MARKER)
    if style.italic:
        return ("<em>", "</em>") if html else ("_", "_")
    if style.strikethrough:
        return ("<del>", "</del>") if html else ("~~", "~~")
    if style.underline:
        return "<u>", "</u>"
    if style.inline_code:
        return "`", "`"
    if style.link is not None:
        return "[", f"]({unquote(style.link.url)})"
    return "", ""


def _is_bold(fragment: str) -> bool:
    return fragment.startswith(BOLD_MARKER) and fragment.endswith(BOLD_MARKER)


def _bold_inner(fragment: str) -> str:
    inner = fragment[len(BOLD_MARKER):]
    if inner.endswith(BOLD_MARKER):
        inner = inner[: -len(BOLD_MARKER)]
    return inner


def _join_bold(left: str, right: str) -> str:
    # Whitespace at the seam collapses to one space; none is added otherwise.
    if left[-1:].isspace() or right[:1].isspace():
        return left.rstrip() + " " + right.lstrip()
    return left + right
