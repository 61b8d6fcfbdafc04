"""Convert mdast block nodes to Notion block dicts.

Node kinds handled (anything else produces no block):

- heading -> heading_1 / heading_2 / heading_3 (depth 3+ all clamp to 3),
  with optional per-level colour
- paragraph -> paragraph, table_of_contents (``[[_TOC_]]``), and image
  blocks hoisted out of the inline content
- code -> code block with a Notion language name
- blockquote -> quote block with the mapped children nested inside
- list -> bulleted_list_item / numbered_list_item / to_do siblings
- table -> delegate to tables.py
- math -> delegate to math.py
- thematicBreak -> divider
"""

from __future__ import annotations

import posixpath
import re
from collections.abc import Callable
from typing import Any
from urllib.parse import urlsplit

from mdnotion.config import BlocksConfig
from mdnotion.converter.colors import default_heading_color, resolve_color
from mdnotion.converter.math import build_block_math
from mdnotion.converter.rich_text import (
    make_rich_text,
    parse_inline,
    parse_inline_children,
    set_color,
    text_spans,
)
from mdnotion.converter.tables import build_table

# ---------------------------------------------------------------------------
# Notion code language mapping
# ---------------------------------------------------------------------------

NOTION_LANGUAGES: frozenset[str] = frozenset({
    "abap", "arduino", "bash", "basic", "c", "clojure", "coffeescript",
    "c++", "c#", "css", "dart", "diff", "docker", "elixir", "elm",
    "erlang", "flow", "fortran", "f#", "gherkin", "glsl", "go", "graphql",
    "groovy", "haskell", "html", "java", "javascript", "json", "julia",
    "kotlin", "latex", "less", "lisp", "livescript", "lua", "makefile",
    "markdown", "markup", "matlab", "mermaid", "nix", "objective-c",
    "ocaml", "pascal", "perl", "php", "plain text", "powershell",
    "prolog", "protobuf", "python", "r", "reason", "ruby", "rust",
    "sass", "scala", "scheme", "scss", "shell", "sql", "swift",
    "typescript", "vb.net", "verilog", "vhdl", "visual basic",
    "webassembly", "xml", "yaml", "java/c/c++/c#",
})

_LANGUAGE_ALIASES: dict[str, str] = {
    "py": "python",
    "js": "javascript",
    "mjs": "javascript",
    "cjs": "javascript",
    "node": "javascript",
    "ts": "typescript",
    "sh": "shell",
    "zsh": "shell",
    "console": "shell",
    "shell-session": "shell",
    "rb": "ruby",
    "rs": "rust",
    "yml": "yaml",
    "md": "markdown",
    "cs": "c#",
    "cpp": "c++",
    "cc": "c++",
    "h": "c",
    "hpp": "c++",
    "objc": "objective-c",
    "objective_c": "objective-c",
    "objectivec": "objective-c",
    "dockerfile": "docker",
    "make": "makefile",
    "tex": "latex",
    "htm": "html",
    "xhtml": "html",
    "svg": "xml",
    "jsx": "javascript",
    "tsx": "typescript",
    "jsonc": "json",
    "json5": "json",
    "vb": "visual basic",
    "fs": "f#",
    "fsharp": "f#",
    "csharp": "c#",
    "golang": "go",
    "hs": "haskell",
    "kt": "kotlin",
    "kts": "kotlin",
    "pl": "perl",
    "ps1": "powershell",
    "psm1": "powershell",
    "pwsh": "powershell",
    "asm": "webassembly",
    "wasm": "webassembly",
    "wat": "webassembly",
    "proto": "protobuf",
    "gql": "graphql",
    "clj": "clojure",
    "ex": "elixir",
    "exs": "elixir",
    "erl": "erlang",
    "ml": "ocaml",
    "coffee": "coffeescript",
    "ls": "livescript",
    "scm": "scheme",
    "el": "lisp",
    "elisp": "lisp",
    "ino": "arduino",
    "patch": "diff",
    "text": "plain text",
    "txt": "plain text",
    "plaintext": "plain text",
    "postgresql": "sql",
    "mysql": "sql",
    "sv": "verilog",
    "v": "verilog",
    "mmd": "mermaid",
    "feature": "gherkin",
    "re": "reason",
}

_PLAIN_TEXT = "plain text"


def resolve_code_language(lang: str | None) -> str:
    """Return the Notion language name for a code fence language.

    A language Notion already accepts is used as is (case-insensitive);
    anything else goes through :func:`normalize_language`.  A missing
    language is ``"plain text"``: Notion requires a language on every code
    block, and this is its untagged default.
    """
    if not lang:
        return _PLAIN_TEXT
    lang = lang.lower()
    if lang in NOTION_LANGUAGES:
        return lang
    return normalize_language(lang)


def normalize_language(lang: str) -> str:
    """Best-effort mapping of a language alias to a Notion language name."""
    lang = lang.strip().lower()
    # Info strings may carry extra words ("python title=x.py").
    lang = lang.split()[0] if lang else _PLAIN_TEXT
    if lang in NOTION_LANGUAGES:
        return lang
    if lang in _LANGUAGE_ALIASES:
        return _LANGUAGE_ALIASES[lang]
    # "python3" -> "python"
    stripped = re.sub(r"\d+$", "", lang)
    if stripped in NOTION_LANGUAGES:
        return stripped
    if stripped in _LANGUAGE_ALIASES:
        return _LANGUAGE_ALIASES[stripped]
    return _PLAIN_TEXT


# ---------------------------------------------------------------------------
# Images
# ---------------------------------------------------------------------------

# https://developers.notion.com/reference/block#image
IMAGE_EXTENSIONS: frozenset[str] = frozenset({
    ".png", ".jpg", ".jpeg", ".gif", ".tif", ".tiff",
    ".bmp", ".svg", ".heic", ".webp",
})


def _is_supported_image_url(url: str) -> bool:
    """Check that *url* is absolute and names a Notion-supported image file."""
    try:
        parsed = urlsplit(url)
    except ValueError:
        return False
    if not parsed.scheme:
        return False
    return posixpath.splitext(parsed.path)[1] in IMAGE_EXTENSIONS


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def build_blocks(
    nodes: list[dict[str, Any]],
    config: BlocksConfig,
) -> list[dict[str, Any]]:
    """Convert a list of mdast block nodes to Notion block dicts.

    Parameters
    ----------
    nodes:
        Sibling mdast block nodes, usually the children of a ``root``.
    config:
        Transform options (image strictness, heading colours).

    Returns
    -------
    list[dict]
        The produced blocks in document order.  No limits are applied
        here; see :mod:`mdnotion.converter.limits`.
    """
    blocks: list[dict[str, Any]] = []
    for node in nodes:
        blocks.extend(build_node(node, config))
    return blocks


def build_node(node: dict[str, Any], config: BlocksConfig) -> list[dict[str, Any]]:
    """Convert a single mdast node to zero or more Notion blocks."""
    handler = _BLOCK_HANDLERS.get(node.get("type", ""))
    if handler is None:
        return []
    return handler(node, config)


# ---------------------------------------------------------------------------
# Block factories
# ---------------------------------------------------------------------------

def _make_block(block_type: str, data: dict[str, Any]) -> dict[str, Any]:
    return {"object": "block", "type": block_type, block_type: data}


def _make_text_block(
    block_type: str,
    rich_text: list[dict[str, Any]],
    children: list[dict[str, Any]] | None = None,
    **extra: Any,
) -> dict[str, Any]:
    data: dict[str, Any] = {"rich_text": rich_text, **extra}
    if children:
        data["children"] = children
    return _make_block(block_type, data)


def make_paragraph(rich_text: list[dict[str, Any]]) -> dict[str, Any]:
    return _make_text_block("paragraph", rich_text)


def make_image(url: str) -> dict[str, Any]:
    return _make_block("image", {"type": "external", "external": {"url": url}})


# ---------------------------------------------------------------------------
# Block builders
# ---------------------------------------------------------------------------

def _build_heading(node: dict[str, Any], config: BlocksConfig) -> list[dict[str, Any]]:
    """Build a heading block; Notion has no level below heading_3."""
    depth = node.get("depth", 1)
    rich_text = parse_inline_children(node.get("children", []))

    color: str | None = None
    if config.heading_colors:
        color = config.heading_colors.get(f"h{depth}")
    if not color and config.use_default_heading_colors:
        color = default_heading_color(depth)
    if color:
        set_color(rich_text, resolve_color(color))

    level = depth if depth in (1, 2) else 3
    return [_make_text_block(f"heading_{level}", rich_text)]


def _is_table_of_contents(children: list[dict[str, Any]]) -> bool:
    """Detect the legacy ``[[_TOC_]]`` marker."""
    if len(children) <= 2:
        return False
    first, second = children[0], children[1]
    if first.get("type") != "text" or first.get("value") != "[[":
        return False
    if second.get("type") != "emphasis":
        return False
    inner = second.get("children", [])
    return bool(inner) and inner[0].get("type") == "text" and inner[0].get("value") == "TOC"


def _build_paragraph(node: dict[str, Any], config: BlocksConfig) -> list[dict[str, Any]]:
    """Build a paragraph block followed by one block per inline image.

    Notion has no inline images, so they are pulled out of the text and
    emitted after the paragraph in their original order.  A paragraph
    holding nothing but images produces only the image blocks.
    """
    children = node.get("children", [])

    if _is_table_of_contents(children):
        return [_make_block("table_of_contents", {})]

    images: list[dict[str, Any]] = []
    rich_text: list[dict[str, Any]] = []
    for child in children:
        if child.get("type") == "image":
            images.append(_build_image(child, config))
        else:
            rich_text.extend(parse_inline(child))

    if rich_text:
        return [make_paragraph(rich_text), *images]
    return images


def _build_image(node: dict[str, Any], config: BlocksConfig) -> dict[str, Any]:
    """Build an image block, or a paragraph with the raw URL as a fallback."""
    url = node.get("url", "")
    if config.strict_image_urls and not _is_supported_image_url(url):
        return make_paragraph([make_rich_text(url)])
    return make_image(url)


def _build_code(node: dict[str, Any], config: BlocksConfig) -> list[dict[str, Any]]:
    """Build a Notion code block."""
    rich_text = text_spans(node.get("value", ""))
    language = resolve_code_language(node.get("lang"))
    return [_make_text_block("code", rich_text, language=language)]


def _build_blockquote(node: dict[str, Any], config: BlocksConfig) -> list[dict[str, Any]]:
    """Build a quote block whose content lives entirely in its children."""
    children = build_blocks(node.get("children", []), config)
    return [_make_text_block("quote", [], children)]


def _build_list(node: dict[str, Any], config: BlocksConfig) -> list[dict[str, Any]]:
    """Build one sibling block per list item.

    Notion has no list wrapper block.  An item whose first child is not a
    paragraph cannot supply the item text and is dropped.
    """
    ordered = node.get("start") is not None
    blocks: list[dict[str, Any]] = []

    for item in node.get("children", []):
        item_children = item.get("children", [])
        if not item_children or item_children[0].get("type") != "paragraph":
            continue

        rich_text = parse_inline_children(item_children[0].get("children", []))
        nested = build_blocks(item_children[1:], config)

        checked = item.get("checked")
        if ordered:
            blocks.append(_make_text_block("numbered_list_item", rich_text, nested))
        elif isinstance(checked, bool):
            blocks.append(_make_text_block("to_do", rich_text, nested, checked=checked))
        else:
            blocks.append(_make_text_block("bulleted_list_item", rich_text, nested))

    return blocks


def _build_table(node: dict[str, Any], config: BlocksConfig) -> list[dict[str, Any]]:
    return [build_table(node)]


def _build_math(node: dict[str, Any], config: BlocksConfig) -> list[dict[str, Any]]:
    return [build_block_math(node)]


def _build_divider(node: dict[str, Any], config: BlocksConfig) -> list[dict[str, Any]]:
    return [_make_block("divider", {})]


# ---------------------------------------------------------------------------
# Block handler dispatch table
# ---------------------------------------------------------------------------

_BlockHandler = Callable[[dict[str, Any], BlocksConfig], list[dict[str, Any]]]

_BLOCK_HANDLERS: dict[str, _BlockHandler] = {
    "heading": _build_heading,
    "paragraph": _build_paragraph,
    "code": _build_code,
    "blockquote": _build_blockquote,
    "list": _build_list,
    "table": _build_table,
    "math": _build_math,
    "thematicBreak": _build_divider,
}
