"""mdnotion — Markdown AST to Notion blocks.

Public re-exports
-----------------

* **Transforms:** :func:`parse_blocks`, :func:`parse_rich_text`,
  :func:`markdown_to_blocks`, :func:`markdown_to_rich_text`,
  :class:`MarkdownToNotionConverter`
* **Configuration:** :class:`BlocksConfig`, :class:`RichTextConfig`,
  :class:`NotionLimits`
* **Colours:** :func:`resolve_color`
* **Errors:** Every :class:`MdNotionError` subclass and :class:`ErrorCode`

Usage::

    from mdnotion import BlocksConfig, markdown_to_blocks

    blocks = markdown_to_blocks(
        "# Hello\\n\\nWorld",
        BlocksConfig(heading_colors={"h1": "#4DB8FF"}),
    )
"""

from __future__ import annotations

# ── Configuration ───────────────────────────────────────────────────────
from mdnotion.config import (
    DEFAULT_HEADING_COLORS,
    BlocksConfig,
    NotionLimits,
    RichTextConfig,
)

# ── Transforms ──────────────────────────────────────────────────────────
from mdnotion.converter import (
    ASTNormalizer,
    MarkdownToNotionConverter,
    markdown_to_blocks,
    markdown_to_rich_text,
    parse_blocks,
    parse_rich_text,
    resolve_color,
)

# ── Errors ──────────────────────────────────────────────────────────────
from mdnotion.errors import (
    ErrorCode,
    MdNotionBlocksLimitError,
    MdNotionConversionError,
    MdNotionError,
    MdNotionLimitError,
    MdNotionLinkUrlLimitError,
    MdNotionRichTextLimitError,
    MdNotionTextContentLimitError,
    MdNotionUnsupportedNodeError,
)

# ── Public surface ──────────────────────────────────────────────────────

__all__ = [
    # Transforms
    "parse_blocks",
    "parse_rich_text",
    "markdown_to_blocks",
    "markdown_to_rich_text",
    "MarkdownToNotionConverter",
    "ASTNormalizer",
    "resolve_color",
    # Configuration
    "BlocksConfig",
    "RichTextConfig",
    "NotionLimits",
    "DEFAULT_HEADING_COLORS",
    # Error base + code enum
    "MdNotionError",
    "ErrorCode",
    # Conversion errors
    "MdNotionConversionError",
    "MdNotionUnsupportedNodeError",
    # Limit errors
    "MdNotionLimitError",
    "MdNotionBlocksLimitError",
    "MdNotionRichTextLimitError",
    "MdNotionTextContentLimitError",
    "MdNotionLinkUrlLimitError",
]
