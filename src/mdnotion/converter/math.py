"""Math conversion: mdast ``math`` nodes to Notion equation blocks.

Notion renders block equations with KaTeX, which ignores bare newlines.
Every line break in the source expression is therefore turned into the
KaTeX line-break command ``\\\\`` followed by the newline itself.

Inline math (``inlineMath``) becomes an equation rich_text span and is
handled by :func:`mdnotion.converter.rich_text.parse_inline`.
"""

from __future__ import annotations

from typing import Any

KATEX_NEWLINE: str = "\\\\\n"


def build_block_math(node: dict[str, Any]) -> dict[str, Any]:
    """Build a Notion equation block from an mdast ``math`` node."""
    expression = katex_newlines(node.get("value", ""))
    return make_equation_block(expression)


def katex_newlines(expression: str) -> str:
    """Replace each ``\\n`` in *expression* with ``\\\\`` + ``\\n``."""
    return KATEX_NEWLINE.join(expression.split("\n"))


def make_equation_block(expression: str) -> dict[str, Any]:
    """Create a Notion equation block."""
    return {
        "object": "block",
        "type": "equation",
        "equation": {
            "expression": expression,
        },
    }
