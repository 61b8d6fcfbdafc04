"""Top-level transforms from a Markdown AST to Notion payloads.

Two entry points take an mdast ``root`` node:

* :func:`parse_blocks` — the full document as Notion blocks.
* :func:`parse_rich_text` — inline content only, for fields that accept
  nothing but rich text (a page title, a database property).

Both run the converter and then the limit enforcer.  The Markdown-string
variants, :func:`markdown_to_blocks` and :func:`markdown_to_rich_text`,
parse with :class:`ASTNormalizer` first; :class:`MarkdownToNotionConverter`
bundles a parser with a fixed configuration.
"""

from __future__ import annotations

import json
import sys
import time
from typing import Any

from mdnotion.config import BlocksConfig, RichTextConfig
from mdnotion.converter.ast_normalizer import ASTNormalizer
from mdnotion.converter.block_builder import build_blocks
from mdnotion.converter.limits import enforce_block_limits, enforce_rich_text_limits
from mdnotion.converter.rich_text import parse_inline_children
from mdnotion.errors import MdNotionUnsupportedNodeError
from mdnotion.observability import get_logger, resolve_metrics

log = get_logger("mdnotion.converter")


def parse_blocks(
    root: dict[str, Any],
    config: BlocksConfig | None = None,
) -> list[dict[str, Any]]:
    """Convert an mdast root node to a list of Notion blocks.

    Parameters
    ----------
    root:
        The mdast ``root`` node.  It is never modified.
    config:
        Transform options.  Defaults to :class:`BlocksConfig()`.

    Returns
    -------
    list[dict]
        Notion block payloads, capped at the payload limit unless
        ``config.notion_limits.truncate`` is ``False``.
    """
    config = config or BlocksConfig()
    metrics = resolve_metrics(config.metrics)
    _dump_options("parse_blocks", config)

    started = time.perf_counter()
    blocks = build_blocks(root.get("children", []), config)
    blocks = enforce_block_limits(blocks, config.notion_limits, metrics)
    elapsed_ms = (time.perf_counter() - started) * 1000

    metrics.increment("mdnotion.blocks_created_total", value=len(blocks))
    metrics.timing("mdnotion.conversion_duration_ms", elapsed_ms, tags={"op": "parse_blocks"})
    log.debug(
        "parse_blocks complete",
        extra={"extra_fields": {"op": "parse_blocks", "blocks": len(blocks)}},
    )
    _dump_payload("Notion blocks payload", blocks, config)
    return blocks


def parse_rich_text(
    root: dict[str, Any],
    config: RichTextConfig | None = None,
) -> list[dict[str, Any]]:
    """Convert an mdast root node to a flat Notion rich_text array.

    Only top-level paragraphs contribute.  Other top-level nodes are
    skipped, or rejected when ``config.non_inline == "raise"``.

    Raises
    ------
    MdNotionUnsupportedNodeError
        On the first non-paragraph node when ``non_inline="raise"``.
    """
    config = config or RichTextConfig()
    metrics = resolve_metrics(config.metrics)
    _dump_options("parse_rich_text", config)

    started = time.perf_counter()
    spans: list[dict[str, Any]] = []
    for node in root.get("children", []):
        node_type = node.get("type", "")
        if node_type == "paragraph":
            spans.extend(parse_inline_children(node.get("children", [])))
        elif config.non_inline == "raise":
            raise MdNotionUnsupportedNodeError(
                message=f"Unsupported markdown element: {json.dumps(node, default=str)}",
                context={"node_type": node_type},
            )

    spans = enforce_rich_text_limits(spans, config.notion_limits, metrics)
    elapsed_ms = (time.perf_counter() - started) * 1000

    metrics.increment("mdnotion.rich_text_created_total", value=len(spans))
    metrics.timing("mdnotion.conversion_duration_ms", elapsed_ms, tags={"op": "parse_rich_text"})
    log.debug(
        "parse_rich_text complete",
        extra={"extra_fields": {"op": "parse_rich_text", "spans": len(spans)}},
    )
    _dump_payload("Notion rich_text payload", spans, config)
    return spans


# ---------------------------------------------------------------------------
# Markdown string entry points
# ---------------------------------------------------------------------------

class MarkdownToNotionConverter:
    """Convert Markdown text to Notion payloads with a fixed configuration.

    Examples
    --------
    >>> converter = MarkdownToNotionConverter()
    >>> blocks = converter.convert("# Hello\\n\\nWorld")
    >>> [block["type"] for block in blocks]
    ['heading_1', 'paragraph']
    """

    def __init__(
        self,
        config: BlocksConfig | None = None,
        rich_text_config: RichTextConfig | None = None,
    ) -> None:
        self._config = config or BlocksConfig()
        self._rich_text_config = rich_text_config or RichTextConfig()
        self._normalizer = ASTNormalizer()

    def parse(self, markdown: str, *, dump: bool = False) -> dict[str, Any]:
        """Parse *markdown* into an mdast root node."""
        root = self._normalizer.parse(markdown)
        if dump:
            print(
                "[mdnotion] Normalized AST:",
                json.dumps(root, indent=2, ensure_ascii=False),
                file=sys.stderr,
            )
        return root

    def convert(self, markdown: str) -> list[dict[str, Any]]:
        """Full pipeline: parse -> normalize -> build blocks -> enforce limits."""
        root = self.parse(markdown, dump=self._config.debug_dump_ast)
        return parse_blocks(root, self._config)

    def convert_rich_text(self, markdown: str) -> list[dict[str, Any]]:
        """Parse *markdown* and return its inline content as rich_text."""
        root = self.parse(markdown, dump=self._rich_text_config.debug_dump_ast)
        return parse_rich_text(root, self._rich_text_config)


def markdown_to_blocks(
    markdown: str,
    config: BlocksConfig | None = None,
) -> list[dict[str, Any]]:
    """Parse *markdown* and convert it to Notion blocks."""
    return MarkdownToNotionConverter(config).convert(markdown)


def markdown_to_rich_text(
    markdown: str,
    config: RichTextConfig | None = None,
) -> list[dict[str, Any]]:
    """Parse *markdown* and convert its inline content to Notion rich_text."""
    return MarkdownToNotionConverter(rich_text_config=config).convert_rich_text(markdown)


# ---------------------------------------------------------------------------
# Debug helpers
# ---------------------------------------------------------------------------

def _dump_options(op: str, config: BlocksConfig | RichTextConfig) -> None:
    if config.debug_dump_options:
        print(
            f"[mdnotion] {op} options:",
            json.dumps(config.to_debug_dict(), indent=2, ensure_ascii=False, default=str),
            file=sys.stderr,
        )


def _dump_payload(
    label: str,
    payload: list[dict[str, Any]],
    config: BlocksConfig | RichTextConfig,
) -> None:
    if config.debug_dump_payload:
        print(
            f"[mdnotion] {label}:",
            json.dumps(payload, indent=2, ensure_ascii=False),
            file=sys.stderr,
        )
