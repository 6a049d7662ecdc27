"""
Tokenizer - Pull-based JSON lexer over a byte source.

Each call to next() skips whitespace and separators, classifies the next
significant byte and emits exactly one Token. Grammar is enforced through the
per-container state kept by StackTracker: keys alternate with values inside
objects, elements are separated by commas, and closing brackets must match
the container they close.
"""

import logging
from typing import Optional

from .errors import (
    IncompleteLiteralError,
    JSONStreamError,
    LexicalError,
    StructuralError,
    UnexpectedEndError,
)
from .handler import TokenHandler
from .source import ByteSource, SourceLike
from .stack_tracker import StackTracker
from .states import ContainerKind, ContainerState
from .strings import QUOTE, scan_string
from .tokens import (
    ARRAY_END,
    ARRAY_START,
    FALSE,
    NULL,
    OBJECT_END,
    OBJECT_START,
    TRUE,
    Token,
    TokenType,
)

logger = logging.getLogger(__name__)

WHITESPACE = frozenset(b" \t\n\r")
DIGITS = frozenset(b"0123456789")
COMMA = ord(',')
COLON = ord(':')
DOT = ord('.')
MINUS = ord('-')
ARRAY_OPEN = ord('[')
ARRAY_CLOSE = ord(']')
OBJECT_OPEN = ord('{')
OBJECT_CLOSE = ord('}')
CLOSERS = frozenset((ARRAY_CLOSE, OBJECT_CLOSE))

LITERALS = {
    ord('n'): ("null", NULL),
    ord('t'): ("true", TRUE),
    ord('f'): ("false", FALSE),
}


def _describe(byte: int) -> str:
    return repr(chr(byte))


class Tokenizer:
    """
    Lazily tokenize a JSON document.

    Iterating yields Token objects. The first error is terminal: it is raised
    from the call that detected it and re-raised by every later call. Once
    the input is exhausted every later call raises StopIteration.

    Unsupported by design: \\uXXXX escapes and exponents in numbers.
    """

    def __init__(self, source: SourceLike):
        self.source = ByteSource.coerce(source)
        self.tracker = StackTracker()
        self._failure: Optional[JSONStreamError] = None
        self._finished = False

    def __iter__(self) -> 'Tokenizer':
        return self

    def __next__(self) -> Token:
        if self._failure is not None:
            raise self._failure
        if self._finished:
            raise StopIteration

        try:
            token = self._next_token()
        except JSONStreamError as exc:
            self._failure = exc
            logger.debug("Tokenizer stopped: %s", exc)
            raise

        if token is None:
            self._finished = True
            logger.debug("Tokenizer exhausted after %d bytes", self.source.offset)
            raise StopIteration
        return token

    def parse(self, handler: Optional[TokenHandler] = None) -> None:
        """Drain the token stream, dispatching each token to handler."""
        handler = handler or TokenHandler()
        for token in self:
            if token.type is TokenType.OBJECT_START:
                handler.on_object_start()
            elif token.type is TokenType.OBJECT_END:
                handler.on_object_end()
            elif token.type is TokenType.ARRAY_START:
                handler.on_array_start()
            elif token.type is TokenType.ARRAY_END:
                handler.on_array_end()
            elif token.type is TokenType.KEY:
                handler.on_key(token.value)
            else:
                handler.on_value(token)

    # ========================================================================
    # TOKEN DISPATCH
    # ========================================================================

    def _last_offset(self) -> int:
        """Offset of the byte read most recently."""
        return self.source.offset - 1

    def _next_significant(self) -> Optional[int]:
        """Skip whitespace and return the next byte, or None at end of input."""
        byte = self.source.read_byte()
        while byte is not None and byte in WHITESPACE:
            byte = self.source.read_byte()
        return byte

    def _next_token(self) -> Optional[Token]:
        byte = self._next_significant()

        if byte is not None and self.tracker.state is ContainerState.EXPECT_SEPARATOR_OR_CLOSE:
            if byte == COMMA:
                self.tracker.separator_consumed()
                byte = self._next_significant()
            elif byte not in CLOSERS:
                raise StructuralError(
                    f"Expecting separator, got {_describe(byte)}", self._last_offset()
                )

        if byte is None:
            if not self.tracker.at_root():
                raise UnexpectedEndError(
                    f"Stream ended with {self.tracker.depth} unclosed container(s)",
                    self.source.offset,
                )
            return None

        state = self.tracker.state
        if state is ContainerState.EXPECT_KEY_OR_CLOSE:
            if byte == QUOTE:
                return self._read_key()
            if byte != OBJECT_CLOSE:
                raise StructuralError(f"Expected key, got {_describe(byte)}", self._last_offset())
        elif state is ContainerState.EXPECT_VALUE and byte in CLOSERS:
            raise StructuralError(f"Expected value, got {_describe(byte)}", self._last_offset())

        return self._read_value(byte)

    def _read_value(self, byte: int) -> Token:
        offset = self._last_offset()

        if byte == ARRAY_OPEN:
            self.tracker.push(ContainerKind.ARRAY)
            return ARRAY_START
        if byte == ARRAY_CLOSE:
            self.tracker.pop(ContainerKind.ARRAY, offset)
            return ARRAY_END
        if byte == OBJECT_OPEN:
            self.tracker.push(ContainerKind.OBJECT)
            return OBJECT_START
        if byte == OBJECT_CLOSE:
            self.tracker.pop(ContainerKind.OBJECT, offset)
            return OBJECT_END

        if byte == QUOTE:
            token = Token.string(self._read_string())
        elif byte in LITERALS:
            literal, token = LITERALS[byte]
            self._read_literal(literal)
        elif byte in DIGITS or byte == MINUS:
            token = Token.number(self._read_number(byte))
        else:
            raise StructuralError(f"Unexpected character: {_describe(byte)}", offset)

        self.tracker.value_completed()
        return token

    # ========================================================================
    # SUB-LEXERS
    # ========================================================================

    def _read_key(self) -> Token:
        text = self._read_string()

        byte = self._next_significant()
        if byte is None:
            raise UnexpectedEndError("EOF after key string", self.source.offset)
        if byte != COLON:
            raise StructuralError(
                f"Expected key separator, got {_describe(byte)}", self._last_offset()
            )

        self.tracker.key_consumed()
        return Token.key(text)

    def _read_string(self) -> str:
        start = self._last_offset()
        buf = bytearray()
        if not scan_string(self.source, buf, decode=True):
            raise UnexpectedEndError("Stream ended before string termination", start)
        try:
            return buf.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise LexicalError("UTF-8 decode failed", start) from exc

    def _read_number(self, first: int) -> str:
        """Match digits with at most one decimal point; the text is not validated further."""
        buf = bytearray((first,))
        seen_point = False

        while True:
            byte = self.source.peek_byte()
            if byte == DOT and not seen_point:
                seen_point = True
            elif byte is None or byte not in DIGITS:
                break
            buf.append(self.source.read_byte())

        return buf.decode("ascii")

    def _read_literal(self, literal: str) -> None:
        for expected in literal.encode("ascii")[1:]:
            byte = self.source.read_byte()
            if byte is None:
                raise IncompleteLiteralError(
                    f"EOF when expecting string: {literal}", literal, self.source.offset
                )
            if byte != expected:
                raise IncompleteLiteralError(
                    f"String incomplete: {literal}", literal, self._last_offset()
                )


def tokenize(source: SourceLike) -> Tokenizer:
    """Return a Tokenizer over source."""
    return Tokenizer(source)
