"""Tests for conversion options and the error hierarchy."""

import pytest

from mdnotion.config import (
    DEFAULT_HEADING_COLORS,
    HEADING_COLOR_KEYS,
    BlocksConfig,
    NotionLimits,
    RichTextConfig,
)
from mdnotion.errors import (
    ErrorCode,
    MdNotionBlocksLimitError,
    MdNotionConversionError,
    MdNotionError,
    MdNotionLimitError,
    MdNotionLinkUrlLimitError,
    MdNotionRichTextLimitError,
    MdNotionTextContentLimitError,
    MdNotionUnsupportedNodeError,
)


class TestDefaults:
    def test_blocks_config_defaults(self):
        config = BlocksConfig()
        assert config.strict_image_urls is True
        assert config.heading_colors is None
        assert config.use_default_heading_colors is False
        assert config.notion_limits.truncate is True
        assert config.notion_limits.on_error is None

    def test_rich_text_config_defaults(self):
        config = RichTextConfig()
        assert config.non_inline == "ignore"
        assert config.debug_dump_options is False

    def test_limits_not_shared_between_instances(self):
        assert BlocksConfig().notion_limits is not BlocksConfig().notion_limits

    def test_heading_color_table(self):
        assert sorted(DEFAULT_HEADING_COLORS) == [1, 2, 3, 4, 5, 6]
        assert HEADING_COLOR_KEYS == {"h1", "h2", "h3", "h4", "h5", "h6"}


class TestValidation:
    def test_unknown_heading_key(self):
        with pytest.raises(ValueError, match="h7"):
            BlocksConfig(heading_colors={"h1": "red", "h7": "blue"})

    def test_valid_heading_keys(self):
        config = BlocksConfig(heading_colors={"h1": "red", "h6": "#5E81AC"})
        assert config.heading_colors["h6"] == "#5E81AC"

    def test_bad_non_inline_policy(self):
        with pytest.raises(ValueError, match="non_inline"):
            RichTextConfig(non_inline="warn")


class TestNotionLimits:
    def test_report_without_callback(self):
        NotionLimits().report(ValueError("ignored"))

    def test_report_forwards(self, collector):
        err = MdNotionBlocksLimitError(message="too many")
        NotionLimits(on_error=collector).report(err)
        assert collector.errors == [err]


class TestDebugViews:
    def test_repr_shows_callback_name(self):
        def on_limit(err):
            pass

        text = repr(BlocksConfig(notion_limits=NotionLimits(on_error=on_limit)))
        assert text.startswith("BlocksConfig(")
        assert "on_error=on_limit" in text
        assert "strict_image_urls=True" in text

    def test_repr_without_callback(self):
        assert "on_error=None" in repr(RichTextConfig())

    def test_to_debug_dict(self, collector):
        config = RichTextConfig(notion_limits=NotionLimits(truncate=False, on_error=collector))
        view = config.to_debug_dict()
        assert view["notion_limits"] == {"truncate": False, "on_error": "ErrorCollector"}
        assert view["non_inline"] == "ignore"
        assert view["metrics"] is None


class TestErrors:
    @pytest.mark.parametrize("cls,code", [
        (MdNotionBlocksLimitError, ErrorCode.BLOCKS_LIMIT_EXCEEDED),
        (MdNotionRichTextLimitError, ErrorCode.RICH_TEXT_LIMIT_EXCEEDED),
        (MdNotionTextContentLimitError, ErrorCode.TEXT_CONTENT_LIMIT_EXCEEDED),
        (MdNotionLinkUrlLimitError, ErrorCode.LINK_URL_LIMIT_EXCEEDED),
    ])
    def test_limit_error_codes(self, cls, code):
        err = cls(message="m", context={"length": 2, "limit": 1})
        assert isinstance(err, MdNotionLimitError)
        assert isinstance(err, MdNotionError)
        assert err.code == code
        assert err.context == {"length": 2, "limit": 1}
        assert str(err) == "m"

    def test_unsupported_node_is_conversion_error(self):
        err = MdNotionUnsupportedNodeError(message="bad", context={"node_type": "heading"})
        assert isinstance(err, MdNotionConversionError)
        assert err.code == ErrorCode.UNSUPPORTED_NODE

    def test_cause_chained(self):
        cause = KeyError("x")
        err = MdNotionConversionError(cause=cause)
        assert err.__cause__ is cause
        assert err.cause is cause

    def test_repr(self):
        err = MdNotionBlocksLimitError(message="m", context={"limit": 1})
        assert "context={'limit': 1}" in repr(err)
        assert repr(err).startswith("MdNotionBlocksLimitError(")

    def test_context_defaults_to_empty(self):
        assert MdNotionError(code="X", message="m").context == {}
