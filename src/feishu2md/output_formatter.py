"""Format a conversion summary."""

from __future__ import annotations

try:
    import tiktoken
except ImportError:  # pragma: no cover - optional dependency
    tiktoken = None


def format_summary(
    *,
    title: str,
    document_id: str,
    markdown: str,
    block_count: int,
    image_count: int,
    chapters: list[str],
) -> str:
    """Create the human-readable summary printed after a conversion."""
    lines = []
    if title:
        lines.append(f"Title: {title}")
    lines.append(f"Document: {document_id}")
    lines.append(f"Blocks: {block_count}")
    lines.append(f"Images: {image_count}")
    if chapters:
        lines.append(f"Chapters: {len(chapters)}")

    token_estimate = _format_token_count(markdown)
    if token_estimate:
        lines.append(f"Estimated tokens: {token_estimate}")

    return "\n".join(lines)


def _format_token_count(text: str) -> str | None:
    if not tiktoken:
        return None
    try:
        encoding = tiktoken.get_encoding("o200k_base")
        total_tokens = len(encoding.encode(text, disallowed_special=()))
    except Exception:
        return None

    if total_tokens >= 1_000_000:
        return f"{total_tokens / 1_000_000:.1f}M"
    if total_tokens >= 1_000:
        return f"{total_tokens / 1_000:.1f}k"
    return str(total_tokens)
