"""
Errors - Exception hierarchy for streaming JSON reading.

Every failure raised by the tokenizer, the depth extractor or the byte source
derives from JSONStreamError, so callers can catch a single type. The
subclasses separate malformed structure, malformed tokens and failures of the
underlying source.
"""

from typing import Optional


class JSONStreamError(Exception):
    """Base class for all errors raised while reading a JSON stream."""

    def __init__(self, message: str, offset: Optional[int] = None):
        if offset is not None:
            message = f"{message} (at byte {offset})"
        super().__init__(message)
        self.offset = offset


class StructuralError(JSONStreamError):
    """Containers, keys or separators appear where the grammar forbids them."""


class LexicalError(JSONStreamError):
    """A single token is malformed."""


class InvalidEscapeError(LexicalError):
    """A backslash is followed by a byte that is not a supported escape."""


class IncompleteLiteralError(LexicalError):
    """A null/true/false keyword is cut short or misspelled."""

    def __init__(self, message: str, literal: str, offset: Optional[int] = None):
        super().__init__(message, offset)
        self.literal = literal


class UnexpectedEndError(LexicalError):
    """The source ended in the middle of a token or an open container."""


class TransportError(JSONStreamError):
    """The underlying byte source failed."""
