r"""
String Scanner - Consumes a JSON string body, honoring backslash escapes.

Shared by the tokenizer and the depth extractor so both agree on where a
string ends. A backslash always absorbs the byte after it; only the tokenizer
decodes the pair, and only \\ \n \r \t and \" are supported.
"""

from typing import Optional

from .errors import InvalidEscapeError
from .source import ByteSource

QUOTE = ord('"')
BACKSLASH = ord('\\')

ESCAPES = {
    BACKSLASH: BACKSLASH,
    ord('n'): ord('\n'),
    ord('r'): ord('\r'),
    ord('t'): ord('\t'),
    QUOTE: QUOTE,
}


def scan_string(source: ByteSource, out: Optional[bytearray], decode: bool) -> bool:
    """
    Consume bytes after an opening quote up to and including the closing quote.

    Args:
        source: Byte source positioned just after the opening quote.
        out: Buffer receiving the string body (closing quote excluded), or
            None to skip the body.
        decode: Resolve escape pairs into the bytes they stand for. When
            False the body is copied verbatim, backslashes included.

    Returns:
        True if the closing quote was consumed, False if the source ended first.
    """
    while True:
        byte = source.read_byte()
        if byte is None:
            return False
        if byte == QUOTE:
            return True
        if byte != BACKSLASH:
            if out is not None:
                out.append(byte)
            continue

        escaped = source.read_byte()
        if escaped is None:
            if out is not None and not decode:
                out.append(byte)
            return False

        if decode:
            if escaped not in ESCAPES:
                raise InvalidEscapeError(
                    f"Escaping unexpected char: {chr(escaped)!r}", source.offset - 1
                )
            if out is not None:
                out.append(ESCAPES[escaped])
        elif out is not None:
            out.append(byte)
            out.append(escaped)
