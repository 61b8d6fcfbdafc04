"""Build Notion rich_text arrays from mdast inline nodes.

A rich_text span is a dict in one of two forms:

Text span::

    {
        "type": "text",
        "annotations": {"bold": false, "italic": false, "strikethrough": false,
                        "underline": false, "code": false, "color": "default"},
        "text": {"content": "hello", "link": {"url": "https://..."}}
    }

Equation span::

    {
        "type": "equation",
        "annotations": {...},
        "equation": {"expression": "E=mc^2"}
    }

``text.link`` is only present when the span sits inside a Markdown link.
"""

from __future__ import annotations

from typing import Any, Literal

from mdnotion.models import Annotations, InlineContext
from mdnotion.utils.text_split import split_string

TEXT_SPLIT_LIMIT: int = 2000
"""Maximum characters per text span produced by segmentation."""

_DEFAULT_CONTEXT = InlineContext()

# Inline wrappers that only add a formatting flag to their children.
_FLAG_NODES: dict[str, str] = {
    "emphasis": "italic",
    "strong": "bold",
    "delete": "strikethrough",
}


# ---------------------------------------------------------------------------
# Span factory
# ---------------------------------------------------------------------------

def make_rich_text(
    content: str,
    *,
    annotations: Annotations | None = None,
    url: str | None = None,
    kind: Literal["text", "equation"] = "text",
) -> dict[str, Any]:
    """Create a single Notion rich_text span.

    Parameters
    ----------
    content:
        Text content, or the LaTeX expression when *kind* is
        ``"equation"``.
    annotations:
        Formatting flags.  Defaults to all-false with colour ``"default"``.
    url:
        Link target for text spans.  Ignored for equations.
    kind:
        ``"text"`` or ``"equation"``.
    """
    annots = (annotations or Annotations()).to_dict()

    if kind == "equation":
        return {
            "type": "equation",
            "annotations": annots,
            "equation": {"expression": content},
        }

    text: dict[str, Any] = {"content": content}
    if url:
        text["link"] = {"url": url}
    return {
        "type": "text",
        "annotations": annots,
        "text": text,
    }


def text_spans(
    text: str,
    context: InlineContext | None = None,
    limit: int = TEXT_SPLIT_LIMIT,
) -> list[dict[str, Any]]:
    """Split *text* into spans of at most *limit* characters.

    Every chunk carries its own copy of the context's annotations and
    link.  Empty *text* produces no spans.
    """
    ctx = context or _DEFAULT_CONTEXT
    return [
        make_rich_text(chunk, annotations=ctx.annotations, url=ctx.url)
        for chunk in split_string(text, limit)
    ]


# ---------------------------------------------------------------------------
# Segmenter
# ---------------------------------------------------------------------------

def parse_inline(
    node: dict[str, Any],
    context: InlineContext | None = None,
) -> list[dict[str, Any]]:
    """Flatten an inline node subtree into rich_text spans.

    Handles text, emphasis, strong, delete, link, inlineCode and
    inlineMath.  Any other node kind (images, breaks, raw HTML, ...)
    yields no spans.

    Parameters
    ----------
    node:
        An mdast inline node.
    context:
        Formatting inherited from enclosing inline nodes.

    Returns
    -------
    list[dict]
        Spans in document order.
    """
    ctx = context or _DEFAULT_CONTEXT
    node_type = node.get("type", "")

    if node_type == "text":
        return text_spans(node.get("value", ""), ctx)

    if node_type in _FLAG_NODES:
        child_ctx = ctx.with_flags(**{_FLAG_NODES[node_type]: True})
        return parse_inline_children(node.get("children", []), child_ctx)

    if node_type == "link":
        child_ctx = ctx.with_url(node.get("url"))
        return parse_inline_children(node.get("children", []), child_ctx)

    if node_type == "inlineCode":
        # Code spans are kept whole, even past the split limit.
        code_ctx = ctx.with_flags(code=True)
        return [make_rich_text(
            node.get("value", ""),
            annotations=code_ctx.annotations,
            url=code_ctx.url,
        )]

    if node_type == "inlineMath":
        return [make_rich_text(node.get("value", ""), kind="equation")]

    return []


def parse_inline_children(
    children: list[dict[str, Any]],
    context: InlineContext | None = None,
) -> list[dict[str, Any]]:
    """Segment a list of sibling inline nodes and concatenate the spans."""
    spans: list[dict[str, Any]] = []
    for child in children:
        spans.extend(parse_inline(child, context))
    return spans


def set_color(spans: list[dict[str, Any]], color: str) -> None:
    """Overwrite the annotation colour of every span in place."""
    for span in spans:
        span.setdefault("annotations", Annotations().to_dict())["color"] = color


def extract_text(children: list[dict[str, Any]]) -> str:
    """Recursively extract plain text from inline nodes."""
    parts: list[str] = []
    for node in children:
        if "value" in node:
            parts.append(node["value"])
        elif "children" in node:
            parts.append(extract_text(node["children"]))
    return "".join(parts)
