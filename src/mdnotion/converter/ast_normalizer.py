"""Parse Markdown with mistune and normalize to mdast-shaped nodes.

The converter consumes the node shape produced by mdast parsers
(``{"type": "heading", "depth": 1, "children": [...]}``).  This module
is a thin front-end for callers that start from a Markdown string: it
runs mistune v3's AST renderer and rewrites its tokens into that shape.

Mistune -> mdast mapping:
    heading -> heading (depth), paragraph / block_text -> paragraph,
    block_quote -> blockquote, list -> list (start), list_item /
    task_list_item -> listItem (checked), block_code -> code (lang),
    block_math -> math, thematic_break -> thematicBreak,
    table -> table / tableRow / tableCell, block_html -> html

    text -> text, emphasis -> emphasis, strong -> strong,
    strikethrough -> delete, codespan -> inlineCode, inline_math ->
    inlineMath, link -> link, image -> image, softbreak -> text "\\n",
    linebreak -> break, inline_html -> html

Adjacent text nodes are merged, as an mdast parser would produce them.
The standard mdast fields ``list.ordered``, ``link.title``, ``image.title``
and ``code.meta`` are carried through for callers that walk the tree;
the converter itself does not read them.
"""

from __future__ import annotations

from typing import Any

import mistune

from mdnotion.converter.rich_text import extract_text

_CONTAINER_TYPES: dict[str, str] = {
    "paragraph": "paragraph",
    "block_text": "paragraph",
    "block_quote": "blockquote",
    "emphasis": "emphasis",
    "strong": "strong",
    "strikethrough": "delete",
}

_LITERAL_TYPES: dict[str, str] = {
    "codespan": "inlineCode",
    "inline_math": "inlineMath",
    "block_math": "math",
    "block_html": "html",
    "inline_html": "html",
}

# Types that should be silently skipped during normalization
_SKIP_TYPES: frozenset[str] = frozenset({
    "blank_line",
})


class ASTNormalizer:
    """Parse Markdown and normalize to an mdast ``root`` node."""

    def __init__(self) -> None:
        self._parser = mistune.create_markdown(
            renderer="ast",
            plugins=[
                "strikethrough",
                "table",
                "task_lists",
                "url",
                "math",
            ],
        )

    def parse(self, markdown: str) -> dict[str, Any]:
        """Parse *markdown* and return an mdast ``root`` node."""
        raw_tokens = self._parser(markdown)
        if isinstance(raw_tokens, str):
            return {"type": "root", "children": []}
        return {"type": "root", "children": self._normalize_tokens(raw_tokens)}

    def _normalize_tokens(self, tokens: list[dict[str, Any]]) -> list[dict[str, Any]]:
        result: list[dict[str, Any]] = []
        for token in tokens:
            for node in self._normalize_token(token):
                previous = result[-1] if result else None
                if (
                    previous is not None
                    and previous["type"] == "text"
                    and node["type"] == "text"
                ):
                    previous["value"] += node["value"]
                else:
                    result.append(node)
        return result

    def _children(self, token: dict[str, Any]) -> list[dict[str, Any]]:
        return self._normalize_tokens(token.get("children") or [])

    def _normalize_token(self, token: dict[str, Any]) -> list[dict[str, Any]]:
        """Normalize a single token into zero or more mdast nodes."""
        raw_type = token.get("type", "")
        attrs = token.get("attrs") or {}

        if raw_type in _SKIP_TYPES:
            return []

        if raw_type in ("text", "raw"):
            return [{"type": "text", "value": token.get("raw", "")}]

        if raw_type == "softbreak":
            return [{"type": "text", "value": "\n"}]

        if raw_type == "linebreak":
            return [{"type": "break"}]

        if raw_type in _CONTAINER_TYPES:
            return [{"type": _CONTAINER_TYPES[raw_type], "children": self._children(token)}]

        if raw_type in _LITERAL_TYPES:
            return [{"type": _LITERAL_TYPES[raw_type], "value": token.get("raw", "")}]

        if raw_type == "heading":
            return [{
                "type": "heading",
                "depth": attrs.get("level", 1),
                "children": self._children(token),
            }]

        if raw_type == "thematic_break":
            return [{"type": "thematicBreak"}]

        if raw_type == "block_code":
            return [self._normalize_code(token)]

        if raw_type == "link":
            return [{
                "type": "link",
                "url": attrs.get("url", ""),
                "title": attrs.get("title"),
                "children": self._children(token),
            }]

        if raw_type == "image":
            return [{
                "type": "image",
                "url": attrs.get("url", ""),
                "title": attrs.get("title"),
                "alt": extract_text(self._children(token)),
            }]

        if raw_type == "list":
            ordered = attrs.get("ordered", False)
            return [{
                "type": "list",
                "ordered": ordered,
                "start": attrs.get("start", 1) if ordered else None,
                "children": self._children(token),
            }]

        if raw_type in ("list_item", "task_list_item"):
            checked = attrs.get("checked") if raw_type == "task_list_item" else None
            return [{
                "type": "listItem",
                "checked": checked,
                "children": self._children(token),
            }]

        if raw_type == "table":
            return [{"type": "table", "children": self._normalize_table_rows(token)}]

        # Unknown token: skip silently
        return []

    def _normalize_code(self, token: dict[str, Any]) -> dict[str, Any]:
        raw_code = token.get("raw", "")
        # Strip trailing newline added by mistune
        if raw_code.endswith("\n"):
            raw_code = raw_code[:-1]
        info = ((token.get("attrs") or {}).get("info") or "").strip()
        lang, _, meta = info.partition(" ")
        return {
            "type": "code",
            "lang": lang or None,
            "meta": meta.strip() or None,
            "value": raw_code,
        }

    def _normalize_table_rows(self, token: dict[str, Any]) -> list[dict[str, Any]]:
        """Flatten mistune's table_head / table_body into tableRow nodes."""
        rows: list[dict[str, Any]] = []
        for part in token.get("children") or []:
            part_type = part.get("type", "")
            if part_type == "table_head":
                rows.append(self._normalize_table_row(part))
            elif part_type == "table_body":
                for row in part.get("children") or []:
                    if row.get("type") == "table_row":
                        rows.append(self._normalize_table_row(row))
        return rows

    def _normalize_table_row(self, token: dict[str, Any]) -> dict[str, Any]:
        cells = [
            {"type": "tableCell", "children": self._children(cell)}
            for cell in token.get("children") or []
            if cell.get("type") == "table_cell"
        ]
        return {"type": "tableRow", "children": cells}
