"""Tests for block math conversion."""

import pytest

from mdnotion.converter.math import build_block_math, katex_newlines


class TestKatexNewlines:
    @pytest.mark.parametrize("source,expected", [
        ("x^2", "x^2"),
        ("a\nb", "a\\\\\nb"),
        ("a\nb\nc", "a\\\\\nb\\\\\nc"),
        ("", ""),
        ("trailing\n", "trailing\\\\\n"),
    ])
    def test_rewrites_each_newline(self, source, expected):
        assert katex_newlines(source) == expected


class TestBuildBlockMath:
    def test_equation_block(self):
        block = build_block_math({"type": "math", "value": "E=mc^2"})
        assert block == {
            "object": "block",
            "type": "equation",
            "equation": {"expression": "E=mc^2"},
        }

    def test_multiline(self):
        block = build_block_math({"type": "math", "value": "x=1\ny=2"})
        assert block["equation"]["expression"] == "x=1\\\\\ny=2"
