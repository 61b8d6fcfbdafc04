"""Data models shared by the converter modules.

The converter works on plain dicts for both the input tree (mdast-shaped
nodes) and the output (Notion API payloads).  The types here describe
the piece in between: the formatting state inherited by inline nodes.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace


# ---------------------------------------------------------------------------
# Inline formatting state
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Annotations:
    """Formatting flags attached to a rich_text span.

    ``underline`` is never set from Markdown but is part of the Notion
    annotation object, so it is always serialised.
    """

    bold: bool = False
    italic: bool = False
    strikethrough: bool = False
    underline: bool = False
    code: bool = False
    color: str = "default"

    def with_flags(self, **flags: bool) -> Annotations:
        """Return a copy with *flags* OR-merged into the current ones."""
        merged = {key: getattr(self, key) or value for key, value in flags.items()}
        return replace(self, **merged)

    def to_dict(self) -> dict:
        return {
            "bold": self.bold,
            "italic": self.italic,
            "strikethrough": self.strikethrough,
            "underline": self.underline,
            "code": self.code,
            "color": self.color,
        }


@dataclass(frozen=True)
class InlineContext:
    """Formatting inherited from ancestor inline nodes.

    Each recursion level derives a new context instead of mutating its
    parent's, so sibling branches never see each other's flags.

    Attributes
    ----------
    annotations:
        Accumulated formatting flags.
    url:
        Link target inherited from an enclosing ``link`` node.
    """

    annotations: Annotations = field(default_factory=Annotations)
    url: str | None = None

    def with_flags(self, **flags: bool) -> InlineContext:
        return replace(self, annotations=self.annotations.with_flags(**flags))

    def with_url(self, url: str | None) -> InlineContext:
        return replace(self, url=url)
