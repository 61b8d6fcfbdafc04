"""Shared test fixtures and AST builders for the mdnotion test suite."""

from __future__ import annotations

import pytest

from mdnotion.config import BlocksConfig, RichTextConfig
from mdnotion.converter.md_to_notion import MarkdownToNotionConverter


@pytest.fixture
def blocks_config() -> BlocksConfig:
    """Default full-document transform options."""
    return BlocksConfig()


@pytest.fixture
def rich_text_config() -> RichTextConfig:
    """Default inline-only transform options."""
    return RichTextConfig()


@pytest.fixture
def converter(blocks_config: BlocksConfig) -> MarkdownToNotionConverter:
    """Markdown-string converter using the default options."""
    return MarkdownToNotionConverter(blocks_config)


class ErrorCollector:
    """``on_error`` callback that records every error it receives."""

    def __init__(self) -> None:
        self.errors: list[Exception] = []

    def __call__(self, error: Exception) -> None:
        self.errors.append(error)


@pytest.fixture
def collector() -> ErrorCollector:
    return ErrorCollector()
