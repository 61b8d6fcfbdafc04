"""Tests for Notion request-limit enforcement."""

import copy

import pytest

from mdnotion.config import NotionLimits
from mdnotion.converter.limits import (
    LIMITS,
    PAYLOAD_BLOCKS,
    RICH_TEXT_ARRAYS,
    RICH_TEXT_LINK_URL,
    RICH_TEXT_TEXT_CONTENT,
    enforce_block_limits,
    enforce_rich_text_limits,
)
from mdnotion.converter.rich_text import make_rich_text
from mdnotion.errors import (
    ErrorCode,
    MdNotionBlocksLimitError,
    MdNotionLinkUrlLimitError,
    MdNotionRichTextLimitError,
    MdNotionTextContentLimitError,
)


def _blocks(n):
    return [{"object": "block", "type": "divider", "divider": {}} for _ in range(n)]


class RecordingMetricsHook:
    def __init__(self):
        self.increments = []

    def increment(self, name, value=1, tags=None):
        self.increments.append({"name": name, "value": value, "tags": tags})

    def timing(self, name, ms, tags=None):
        pass


class TestConstants:
    def test_values(self):
        assert PAYLOAD_BLOCKS == 1000
        assert RICH_TEXT_ARRAYS == 100
        assert RICH_TEXT_TEXT_CONTENT == 2000
        assert RICH_TEXT_LINK_URL == 1000

    def test_limits_table(self):
        assert LIMITS["PAYLOAD_BLOCKS"] == PAYLOAD_BLOCKS
        assert LIMITS["RICH_TEXT_EQUATION_EXPRESSION"] == 1000
        assert len(LIMITS) == 5


# =========================================================================
# Block arrays
# =========================================================================

class TestBlockLimits:
    def test_under_limit_untouched(self, collector):
        blocks = _blocks(10)
        result = enforce_block_limits(blocks, NotionLimits(on_error=collector))
        assert result == blocks
        assert collector.errors == []

    def test_exactly_at_limit(self, collector):
        result = enforce_block_limits(_blocks(PAYLOAD_BLOCKS), NotionLimits(on_error=collector))
        assert len(result) == PAYLOAD_BLOCKS
        assert collector.errors == []

    def test_truncated_with_single_callback(self, collector):
        result = enforce_block_limits(_blocks(PAYLOAD_BLOCKS + 5), NotionLimits(on_error=collector))
        assert len(result) == PAYLOAD_BLOCKS
        assert len(collector.errors) == 1
        error = collector.errors[0]
        assert isinstance(error, MdNotionBlocksLimitError)
        assert error.code == ErrorCode.BLOCKS_LIMIT_EXCEEDED
        assert error.context == {"length": PAYLOAD_BLOCKS + 5, "limit": PAYLOAD_BLOCKS}

    def test_no_truncate_keeps_everything(self, collector):
        blocks = _blocks(PAYLOAD_BLOCKS + 5)
        result = enforce_block_limits(blocks, NotionLimits(truncate=False, on_error=collector))
        assert len(result) == PAYLOAD_BLOCKS + 5
        assert len(collector.errors) == 1

    def test_default_callback_is_noop(self):
        result = enforce_block_limits(_blocks(PAYLOAD_BLOCKS + 1), NotionLimits())
        assert len(result) == PAYLOAD_BLOCKS

    def test_callback_may_raise(self):
        def on_error(err):
            raise err

        with pytest.raises(MdNotionBlocksLimitError):
            enforce_block_limits(_blocks(PAYLOAD_BLOCKS + 1), NotionLimits(on_error=on_error))

    def test_metrics_counted(self):
        metrics = RecordingMetricsHook()
        enforce_block_limits(_blocks(PAYLOAD_BLOCKS + 1), NotionLimits(), metrics)
        assert metrics.increments == [{
            "name": "mdnotion.limit_exceeded_total",
            "value": 1,
            "tags": {"limit": "BLOCKS_LIMIT_EXCEEDED"},
        }]


# =========================================================================
# Rich text
# =========================================================================

class TestRichTextLimits:
    def test_array_truncated(self, collector):
        spans = [make_rich_text(str(i)) for i in range(RICH_TEXT_ARRAYS + 20)]
        result = enforce_rich_text_limits(spans, NotionLimits(on_error=collector))
        assert len(result) == RICH_TEXT_ARRAYS
        assert [type(e) for e in collector.errors] == [MdNotionRichTextLimitError]

    def test_array_not_truncated(self, collector):
        spans = [make_rich_text("x") for _ in range(RICH_TEXT_ARRAYS + 1)]
        result = enforce_rich_text_limits(spans, NotionLimits(truncate=False, on_error=collector))
        assert len(result) == RICH_TEXT_ARRAYS + 1
        assert len(collector.errors) == 1

    def test_long_content_truncated_with_ellipsis(self, collector):
        spans = [make_rich_text("y" * 2500)]
        result = enforce_rich_text_limits(spans, NotionLimits(on_error=collector))
        content = result[0]["text"]["content"]
        assert len(content) == RICH_TEXT_TEXT_CONTENT
        assert content == "y" * 1997 + "..."
        assert [type(e) for e in collector.errors] == [MdNotionTextContentLimitError]

    def test_long_content_kept_without_truncate(self, collector):
        spans = [make_rich_text("y" * 2500)]
        result = enforce_rich_text_limits(spans, NotionLimits(truncate=False, on_error=collector))
        assert len(result[0]["text"]["content"]) == 2500
        assert len(collector.errors) == 1

    def test_input_spans_not_mutated(self):
        spans = [make_rich_text("y" * 2500)]
        snapshot = copy.deepcopy(spans)
        enforce_rich_text_limits(spans, NotionLimits())
        assert spans == snapshot

    def test_long_url_reported_never_truncated(self, collector):
        url = "https://example.com/" + "p" * 1200
        spans = [make_rich_text("link", url=url)]
        result = enforce_rich_text_limits(spans, NotionLimits(on_error=collector))
        assert result[0]["text"]["link"]["url"] == url
        assert [type(e) for e in collector.errors] == [MdNotionLinkUrlLimitError]

    def test_equations_not_checked(self, collector):
        spans = [make_rich_text("x" * 3000, kind="equation")]
        result = enforce_rich_text_limits(spans, NotionLimits(on_error=collector))
        assert result == spans
        assert collector.errors == []

    def test_only_surviving_spans_checked(self, collector):
        spans = [make_rich_text("ok") for _ in range(RICH_TEXT_ARRAYS)]
        spans.append(make_rich_text("z" * 3000))
        enforce_rich_text_limits(spans, NotionLimits(on_error=collector))
        assert [type(e) for e in collector.errors] == [MdNotionRichTextLimitError]

    def test_multiple_violations_each_reported(self, collector):
        url = "https://e.com/" + "q" * 1000
        spans = [make_rich_text("w" * 2001, url=url)]
        enforce_rich_text_limits(spans, NotionLimits(on_error=collector))
        assert [type(e) for e in collector.errors] == [
            MdNotionTextContentLimitError,
            MdNotionLinkUrlLimitError,
        ]
