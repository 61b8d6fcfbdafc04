"""Table conversion: mdast table to Notion table block.

The mdast table shape is a flat list of rows::

    {
        "type": "table",
        "children": [
            {"type": "tableRow", "children": [
                {"type": "tableCell", "children": [inline nodes...]},
                ...
            ]},
            ...
        ]
    }

The resulting Notion block::

    {
        "object": "block",
        "type": "table",
        "table": {
            "table_width": <cells in the first row>,
            "has_column_header": true,
            "has_row_header": false,
            "children": [
                {
                    "object": "block",
                    "type": "table_row",
                    "table_row": {"cells": [[<rich_text spans>], ...]}
                },
                ...
            ]
        }
    }

Cells only hold inline content; nothing inside a cell becomes a block.
"""

from __future__ import annotations

from typing import Any

from mdnotion.converter.rich_text import parse_inline_children


def build_table(node: dict[str, Any]) -> dict[str, Any]:
    """Build a Notion table block from an mdast ``table`` node.

    The table width is the first row's cell count, or ``0`` for a table
    without rows.
    """
    rows = node.get("children", [])
    table_width = len(rows[0].get("children", [])) if rows else 0

    return {
        "object": "block",
        "type": "table",
        "table": {
            "table_width": table_width,
            "has_column_header": True,
            "has_row_header": False,
            "children": [build_table_row(row) for row in rows],
        },
    }


def build_table_row(row: dict[str, Any]) -> dict[str, Any]:
    """Build a Notion table_row block; each cell is its own rich_text run."""
    cells = [
        parse_inline_children(cell.get("children", []))
        for cell in row.get("children", [])
    ]
    return {
        "object": "block",
        "type": "table_row",
        "table_row": {"cells": cells},
    }
