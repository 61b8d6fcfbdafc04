"""Error hierarchy for the mdnotion package.

Every public error class inherits from MdNotionError. Each carries a
machine-readable ``code`` (from :class:`ErrorCode`), a human-readable
``message``, an optional structured ``context`` dict, and an optional
``cause`` (chained exception).

Limit errors are never raised by the converter itself.  They are built
and handed to the caller's ``on_error`` callback, which decides whether
to log, collect or raise them.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

# ---------------------------------------------------------------------------
# Error code enum
# ---------------------------------------------------------------------------

class ErrorCode(str, Enum):
    """Machine-readable error codes for every error the package can report."""

    CONVERSION_ERROR = "CONVERSION_ERROR"
    UNSUPPORTED_NODE = "UNSUPPORTED_NODE"
    LIMIT_EXCEEDED = "LIMIT_EXCEEDED"
    BLOCKS_LIMIT_EXCEEDED = "BLOCKS_LIMIT_EXCEEDED"
    RICH_TEXT_LIMIT_EXCEEDED = "RICH_TEXT_LIMIT_EXCEEDED"
    TEXT_CONTENT_LIMIT_EXCEEDED = "TEXT_CONTENT_LIMIT_EXCEEDED"
    LINK_URL_LIMIT_EXCEEDED = "LINK_URL_LIMIT_EXCEEDED"


# ---------------------------------------------------------------------------
# Base error
# ---------------------------------------------------------------------------

class MdNotionError(Exception):
    """Base exception for all mdnotion errors.

    Parameters
    ----------
    code:
        A value from :class:`ErrorCode` (or any string) identifying the
        error category.
    message:
        A developer-friendly description of what went wrong.
    context:
        Arbitrary structured data providing extra diagnostic detail.
        Keys and expected types are documented per subclass.
    cause:
        The underlying exception, if this error wraps another.
    """

    def __init__(
        self,
        code: str,
        message: str,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        self.code: str = code
        self.message: str = message
        self.context: dict[str, Any] = context or {}
        self.cause: Exception | None = cause
        super().__init__(message)
        if cause is not None:
            self.__cause__ = cause

    def __repr__(self) -> str:
        ctx = f", context={self.context!r}" if self.context else ""
        return f"{type(self).__name__}(code={self.code!r}, message={self.message!r}{ctx})"


# ---------------------------------------------------------------------------
# Conversion errors
# ---------------------------------------------------------------------------

class MdNotionConversionError(MdNotionError):
    """Base class for errors during Markdown AST conversion.

    Context varies by subclass.
    """

    def __init__(
        self,
        code: str = ErrorCode.CONVERSION_ERROR,
        message: str = "Conversion error",
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(
            code=code,
            message=message,
            context=context,
            cause=cause,
        )


class MdNotionUnsupportedNodeError(MdNotionConversionError):
    """A non-inline node was found while building rich text and the
    configured ``non_inline`` policy is ``"raise"``.

    Context keys: ``node_type``.
    """

    def __init__(
        self,
        message: str,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(
            code=ErrorCode.UNSUPPORTED_NODE,
            message=message,
            context=context,
            cause=cause,
        )


# ---------------------------------------------------------------------------
# Limit errors
# ---------------------------------------------------------------------------

class MdNotionLimitError(MdNotionError):
    """Base class for Notion request-limit violations.

    Context keys: ``length``, ``limit``.
    """

    def __init__(
        self,
        code: str = ErrorCode.LIMIT_EXCEEDED,
        message: str = "Notion limit exceeded",
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(
            code=code,
            message=message,
            context=context,
            cause=cause,
        )


class MdNotionBlocksLimitError(MdNotionLimitError):
    """The resulting blocks array is longer than the payload limit."""

    def __init__(
        self,
        message: str,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(
            code=ErrorCode.BLOCKS_LIMIT_EXCEEDED,
            message=message,
            context=context,
            cause=cause,
        )


class MdNotionRichTextLimitError(MdNotionLimitError):
    """The resulting rich_text array is longer than the array limit."""

    def __init__(
        self,
        message: str,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(
            code=ErrorCode.RICH_TEXT_LIMIT_EXCEEDED,
            message=message,
            context=context,
            cause=cause,
        )


class MdNotionTextContentLimitError(MdNotionLimitError):
    """A rich_text span's ``text.content`` is longer than allowed."""

    def __init__(
        self,
        message: str,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(
            code=ErrorCode.TEXT_CONTENT_LIMIT_EXCEEDED,
            message=message,
            context=context,
            cause=cause,
        )


class MdNotionLinkUrlLimitError(MdNotionLimitError):
    """A rich_text span's link URL is longer than allowed.

    URLs are reported but never truncated.
    """

    def __init__(
        self,
        message: str,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(
            code=ErrorCode.LINK_URL_LIMIT_EXCEEDED,
            message=message,
            context=context,
            cause=cause,
        )
