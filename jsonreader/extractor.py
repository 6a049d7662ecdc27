"""
Depth Extractor - Cut raw sub-documents out of a JSON byte stream.

Tracks bracket/brace nesting over the raw bytes and returns, one at a time,
the byte spans that sit deeper than a chosen target depth. With
target_depth=2, {"Records":[{...},{...}]} yields each record as its own
chunk, ready for json.loads() or forwarding, without the whole document ever
being held in memory.
"""

import logging
from typing import Optional

from .errors import JSONStreamError, StructuralError
from .source import ByteSource, SourceLike
from .strings import QUOTE, scan_string

logger = logging.getLogger(__name__)

OPENERS = frozenset(b"[{")
CLOSERS = frozenset(b"]}")


class DepthExtractor:
    """
    Iterate over the raw bytes of every container nested deeper than target_depth.

    A unit starts with the opening bracket that lifts the depth above
    target_depth and ends with the closing bracket that brings it back down;
    both brackets and everything between them, string contents verbatim, are
    part of the chunk. Bytes outside such a unit are skipped.

    Only containers count as units: scalars sitting directly at target_depth
    are skipped along with the separators around them.
    """

    def __init__(self, source: SourceLike, target_depth: int):
        if target_depth < 0:
            raise ValueError(f"target_depth must be >= 0, got {target_depth}")

        self.source = ByteSource.coerce(source)
        self.target_depth = target_depth
        self.depth = 0
        self._failure: Optional[JSONStreamError] = None
        self._finished = False

    def __iter__(self) -> 'DepthExtractor':
        return self

    def __next__(self) -> bytes:
        if self._failure is not None:
            raise self._failure
        if self._finished:
            raise StopIteration

        try:
            chunk = self._next_chunk()
        except JSONStreamError as exc:
            self._failure = exc
            logger.debug("Depth extractor stopped: %s", exc)
            raise

        if chunk is None:
            self._finished = True
            logger.debug("Depth extractor exhausted after %d bytes", self.source.offset)
            raise StopIteration
        return chunk

    def _next_chunk(self) -> Optional[bytes]:
        chunk = bytearray()
        capturing = False

        while True:
            byte = self.source.read_byte()
            if byte is None:
                break

            if byte == QUOTE:
                body = chunk if capturing else None
                if body is not None:
                    body.append(byte)
                if not scan_string(self.source, body, decode=False):
                    break
                if body is not None:
                    body.append(QUOTE)
                continue

            if byte in OPENERS:
                self.depth += 1
                if self.depth > self.target_depth:
                    capturing = True
            elif byte in CLOSERS:
                if self.depth == 0:
                    raise StructuralError(
                        f"Unbalanced {chr(byte)!r} closes nothing", self.source.offset - 1
                    )
                self.depth -= 1

            if capturing:
                chunk.append(byte)
                if self.depth <= self.target_depth:
                    return bytes(chunk)

        # Source ended; a unit cut short is returned as-is
        self._finished = True
        if chunk:
            logger.debug("Source ended inside a unit at depth %d", self.depth)
            return bytes(chunk)
        return None


def iter_depth(source: SourceLike, target_depth: int) -> DepthExtractor:
    """Return a DepthExtractor over source."""
    return DepthExtractor(source, target_depth)
