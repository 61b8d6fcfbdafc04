"""Markdown AST -> Notion conversion pipeline.

Public API:

- :func:`parse_blocks` — mdast root -> Notion blocks.
- :func:`parse_rich_text` — mdast root -> Notion rich_text array.
- :func:`markdown_to_blocks` / :func:`markdown_to_rich_text` — the same,
  starting from a Markdown string.
- :class:`MarkdownToNotionConverter` — Markdown string converter.
- :class:`ASTNormalizer` — parse Markdown to an mdast-shaped tree.
- :func:`build_blocks` — convert block nodes without limit enforcement.
- :func:`parse_inline` — convert one inline node to rich_text spans.
- :func:`resolve_color` — map a colour token to a Notion palette value.
"""

from mdnotion.converter.ast_normalizer import ASTNormalizer
from mdnotion.converter.block_builder import build_blocks
from mdnotion.converter.colors import resolve_color
from mdnotion.converter.md_to_notion import (
    MarkdownToNotionConverter,
    markdown_to_blocks,
    markdown_to_rich_text,
    parse_blocks,
    parse_rich_text,
)
from mdnotion.converter.rich_text import parse_inline

__all__ = [
    "ASTNormalizer",
    "MarkdownToNotionConverter",
    "build_blocks",
    "markdown_to_blocks",
    "markdown_to_rich_text",
    "parse_blocks",
    "parse_inline",
    "parse_rich_text",
    "resolve_color",
]
