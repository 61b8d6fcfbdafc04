"""Conversion options for mdnotion.

Three dataclasses capture every tuneable knob of the two transforms:

* :class:`NotionLimits` — how to react when output exceeds Notion's
  request limits.
* :class:`BlocksConfig` — options for the full-document transform.
* :class:`RichTextConfig` — options for the inline-only transform.

:data:`DEFAULT_HEADING_COLORS` holds the hex colours applied to headings
when ``use_default_heading_colors=True``.
"""

from __future__ import annotations

import dataclasses
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any, Literal

# ---------------------------------------------------------------------------
# Heading colour constants
# ---------------------------------------------------------------------------

DEFAULT_HEADING_COLORS: dict[int, str] = {
    1: "#FF6F61",
    2: "#F8B400",
    3: "#4DB8FF",
    4: "#A3BE8C",
    5: "#B48EAD",
    6: "#5E81AC",
}
"""Default hex colour per heading depth."""

HEADING_COLOR_KEYS: frozenset[str] = frozenset(
    f"h{depth}" for depth in DEFAULT_HEADING_COLORS
)


# ---------------------------------------------------------------------------
# Limits
# ---------------------------------------------------------------------------

@dataclass
class NotionLimits:
    """Behaviour when a produced item exceeds Notion's request limits.

    Parameters
    ----------
    truncate:
        Cut excess items or characters where possible.  When ``False``
        the output is returned as is and will not be accepted by Notion.
        Text is only truncated when nothing else can resolve the issue.
    on_error:
        Called with an :class:`~mdnotion.errors.MdNotionLimitError` for
        every violation.  ``None`` means violations are silently ignored.
    """

    truncate: bool = True

    on_error: Callable[[Exception], Any] | None = None

    def report(self, error: Exception) -> None:
        """Forward *error* to the configured callback, if any."""
        if self.on_error is not None:
            self.on_error(error)


# ---------------------------------------------------------------------------
# Transform options
# ---------------------------------------------------------------------------

@dataclass
class _CommonConfig:
    """Options shared by both transforms.

    Parameters
    ----------
    notion_limits:
        Limit enforcement behaviour, see :class:`NotionLimits`.
    metrics:
        Optional :class:`~mdnotion.observability.MetricsHook` backend.
    debug_dump_options:
        Write these options to *stderr* on each transform.
    debug_dump_ast:
        Write the normalised Markdown AST to *stderr* (Markdown entry
        points only).
    debug_dump_payload:
        Write the produced blocks or rich text to *stderr*.
    """

    notion_limits: NotionLimits = field(default_factory=NotionLimits)

    # ── Observability ──────────────────────────────────────────────────
    metrics: Any | None = None

    # ── Debug ───────────────────────────────────────────────────────────
    debug_dump_options: bool = False

    debug_dump_ast: bool = False

    debug_dump_payload: bool = False

    def __repr__(self) -> str:
        """Show callables by name so dumps stay readable."""
        parts: list[str] = []
        for f in dataclasses.fields(self):
            val = getattr(self, f.name)
            if f.name == "notion_limits":
                callback = val.on_error
                name = getattr(callback, "__name__", type(callback).__name__)
                shown = None if callback is None else name
                parts.append(
                    f"notion_limits=NotionLimits(truncate={val.truncate!r}, "
                    f"on_error={shown})"
                )
            else:
                parts.append(f"{f.name}={val!r}")
        return f"{type(self).__name__}({', '.join(parts)})"

    def to_debug_dict(self) -> dict[str, Any]:
        """Return a JSON-friendly view of the options for debug dumps."""
        result: dict[str, Any] = {}
        for f in dataclasses.fields(self):
            val = getattr(self, f.name)
            if f.name == "notion_limits":
                callback = val.on_error
                result[f.name] = {
                    "truncate": val.truncate,
                    "on_error": None if callback is None else getattr(
                        callback, "__name__", type(callback).__name__,
                    ),
                }
            elif f.name == "metrics":
                result[f.name] = None if val is None else type(val).__name__
            else:
                result[f.name] = val
        return result


@dataclass(repr=False)
class BlocksConfig(_CommonConfig):
    """Options for the full-document transform.

    Parameters
    ----------
    strict_image_urls:
        Only emit image blocks for absolute URLs whose extension Notion
        accepts.  Anything else is rendered as a paragraph holding the
        raw URL.  When ``False`` every image becomes an image block.
    heading_colors:
        Colour per heading level, keyed ``"h1"`` … ``"h6"``.  Values are
        Notion palette names (``"red"``, ``"blue_background"`` …) or hex
        strings (``"#4DB8FF"``), which are mapped to the nearest palette
        colour.
    use_default_heading_colors:
        Colour headings with :data:`DEFAULT_HEADING_COLORS` when no
        explicit colour is set for their level.
    """

    strict_image_urls: bool = True

    heading_colors: dict[str, str] | None = None

    use_default_heading_colors: bool = False

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        if self.heading_colors:
            unknown = sorted(set(self.heading_colors) - HEADING_COLOR_KEYS)
            if unknown:
                raise ValueError(
                    f"heading_colors keys must be h1..h6, got {unknown}"
                )


@dataclass(repr=False)
class RichTextConfig(_CommonConfig):
    """Options for the inline-only transform.

    Parameters
    ----------
    non_inline:
        What to do with a top-level node that is not a paragraph.

        * ``"ignore"`` — skip it.
        * ``"raise"`` — raise
          :class:`~mdnotion.errors.MdNotionUnsupportedNodeError`.
    """

    non_inline: Literal["ignore", "raise"] = "ignore"

    def __post_init__(self) -> None:
        if self.non_inline not in ("ignore", "raise"):
            raise ValueError(
                f"non_inline must be 'ignore' or 'raise', got {self.non_inline!r}"
            )
