"""Enforce Notion request limits on converted output.

Applied once, after the whole tree has been converted.  Every violation
is reported through :meth:`NotionLimits.report`, which hands an
:class:`~mdnotion.errors.MdNotionLimitError` to the caller's ``on_error``
callback.  The converter itself never raises for a limit.  With
``truncate=True`` (the default) oversized arrays and text are cut down;
link URLs are only reported, since a cut URL would be useless.

See https://developers.notion.com/reference/request-limits
"""

from __future__ import annotations

from typing import Any

from mdnotion.config import NotionLimits
from mdnotion.errors import (
    ErrorCode,
    MdNotionBlocksLimitError,
    MdNotionLimitError,
    MdNotionLinkUrlLimitError,
    MdNotionRichTextLimitError,
    MdNotionTextContentLimitError,
)
from mdnotion.observability import MetricsHook, NoopMetricsHook, get_logger

log = get_logger("mdnotion.converter")

PAYLOAD_BLOCKS: int = 1000
"""Maximum block elements in one request payload."""

RICH_TEXT_ARRAYS: int = 100
"""Maximum elements in a rich_text array."""

RICH_TEXT_TEXT_CONTENT: int = 2000
"""Maximum characters in ``text.content``."""

RICH_TEXT_LINK_URL: int = 1000
"""Maximum characters in ``text.link.url``."""

RICH_TEXT_EQUATION_EXPRESSION: int = 1000
"""Maximum characters in ``equation.expression`` (not enforced)."""

LIMITS: dict[str, int] = {
    "PAYLOAD_BLOCKS": PAYLOAD_BLOCKS,
    "RICH_TEXT_ARRAYS": RICH_TEXT_ARRAYS,
    "RICH_TEXT_TEXT_CONTENT": RICH_TEXT_TEXT_CONTENT,
    "RICH_TEXT_LINK_URL": RICH_TEXT_LINK_URL,
    "RICH_TEXT_EQUATION_EXPRESSION": RICH_TEXT_EQUATION_EXPRESSION,
}

ELLIPSIS: str = "..."


def enforce_block_limits(
    blocks: list[dict[str, Any]],
    limits: NotionLimits,
    metrics: MetricsHook | None = None,
) -> list[dict[str, Any]]:
    """Cap a top-level block list at :data:`PAYLOAD_BLOCKS` items."""
    if len(blocks) > PAYLOAD_BLOCKS:
        _report(limits, metrics, MdNotionBlocksLimitError(
            message=f"Resulting blocks array exceeds Notion limit ({PAYLOAD_BLOCKS})",
            context={"length": len(blocks), "limit": PAYLOAD_BLOCKS},
        ))
    return blocks[:PAYLOAD_BLOCKS] if limits.truncate else blocks


def enforce_rich_text_limits(
    spans: list[dict[str, Any]],
    limits: NotionLimits,
    metrics: MetricsHook | None = None,
) -> list[dict[str, Any]]:
    """Cap a rich_text array and the text and URL of each text span.

    The array is cut to :data:`RICH_TEXT_ARRAYS` first, so only spans that
    survive are checked individually.
    """
    if len(spans) > RICH_TEXT_ARRAYS:
        _report(limits, metrics, MdNotionRichTextLimitError(
            message=f"Resulting richTexts array exceeds Notion limit ({RICH_TEXT_ARRAYS})",
            context={"length": len(spans), "limit": RICH_TEXT_ARRAYS},
        ))
    kept = spans[:RICH_TEXT_ARRAYS] if limits.truncate else spans
    return [_enforce_span_limits(span, limits, metrics) for span in kept]


def _enforce_span_limits(
    span: dict[str, Any],
    limits: NotionLimits,
    metrics: MetricsHook | None,
) -> dict[str, Any]:
    if span.get("type") != "text":
        return span

    text = span.get("text", {})
    content = text.get("content", "")
    if len(content) > RICH_TEXT_TEXT_CONTENT:
        _report(limits, metrics, MdNotionTextContentLimitError(
            message=f"Resulting text content exceeds Notion limit ({RICH_TEXT_TEXT_CONTENT})",
            context={"length": len(content), "limit": RICH_TEXT_TEXT_CONTENT},
        ))
        if limits.truncate:
            cut = content[:RICH_TEXT_TEXT_CONTENT - len(ELLIPSIS)] + ELLIPSIS
            span = {**span, "text": {**text, "content": cut}}

    url = (text.get("link") or {}).get("url")
    if url and len(url) > RICH_TEXT_LINK_URL:
        _report(limits, metrics, MdNotionLinkUrlLimitError(
            message=f"Resulting text URL exceeds Notion limit ({RICH_TEXT_LINK_URL})",
            context={"length": len(url), "limit": RICH_TEXT_LINK_URL},
        ))

    return span


def _report(
    limits: NotionLimits,
    metrics: MetricsHook | None,
    error: MdNotionLimitError,
) -> None:
    log.debug(
        "Notion limit exceeded",
        extra={
            "extra_fields": {
                "op": "enforce_limits",
                "code": ErrorCode(error.code).value,
                "truncate": limits.truncate,
                **error.context,
            },
        },
    )
    (metrics or NoopMetricsHook()).increment(
        "mdnotion.limit_exceeded_total",
        tags={"limit": ErrorCode(error.code).value},
    )
    limits.report(error)
