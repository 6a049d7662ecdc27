"""
Byte Source - Forward-only, byte-at-a-time view over a JSON input.

Wraps in-memory data, a binary file-like object or an iterable of byte chunks
and hands them out one byte at a time, with a single byte of look-ahead.
Failures of the wrapped input surface as TransportError.
"""

import logging
from typing import IO, Iterable, Iterator, Optional, Union

from .errors import TransportError

logger = logging.getLogger(__name__)

DEFAULT_CHUNK_SIZE = 65536

SourceLike = Union[str, bytes, bytearray, memoryview, IO[bytes], Iterable[bytes], 'ByteSource']


class ByteSource:
    """
    Ordered byte supply for the tokenizer and the depth extractor.

    Accepts:
    - str (encoded as UTF-8), bytes, bytearray or memoryview
    - a binary file-like object exposing read(n)
    - any iterable of byte chunks (e.g. a streaming HTTP body)

    Data is pulled from the wrapped input in chunks of at most chunk_size
    bytes, only when the current chunk runs out.
    """

    def __init__(self, data: SourceLike, chunk_size: int = DEFAULT_CHUNK_SIZE):
        if chunk_size <= 0:
            raise ValueError(f"chunk_size must be positive, got {chunk_size}")

        self._chunk_size = chunk_size
        self._buffer: bytes = b""
        self._pos: int = 0
        self._offset: int = 0
        self._exhausted: bool = False
        self._owned: Optional[IO[bytes]] = None

        if isinstance(data, str):
            data = data.encode("utf-8")

        if isinstance(data, (bytes, bytearray, memoryview)):
            self._buffer = bytes(data)
            self._chunks: Iterator[bytes] = iter(())
        elif hasattr(data, "read"):
            self._chunks = self._read_chunks(data)
        else:
            self._chunks = iter(data)

    @classmethod
    def open(cls, path, chunk_size: int = DEFAULT_CHUNK_SIZE) -> 'ByteSource':
        """Open a file in binary mode; the source closes it on close()."""
        fileobj = open(path, "rb")
        source = cls(fileobj, chunk_size=chunk_size)
        source._owned = fileobj
        logger.debug("Opened %s for streaming", path)
        return source

    @staticmethod
    def coerce(data: SourceLike) -> 'ByteSource':
        """Return data unchanged if it already is a ByteSource, else wrap it."""
        if isinstance(data, ByteSource):
            return data
        return ByteSource(data)

    @property
    def offset(self) -> int:
        """Number of bytes consumed so far."""
        return self._offset

    # ========================================================================
    # READING
    # ========================================================================

    def read_byte(self) -> Optional[int]:
        """Consume and return the next byte, or None at end of input."""
        if self._pos >= len(self._buffer) and not self._fill():
            return None
        byte = self._buffer[self._pos]
        self._pos += 1
        self._offset += 1
        return byte

    def peek_byte(self) -> Optional[int]:
        """Return the next byte without consuming it, or None at end of input."""
        if self._pos >= len(self._buffer) and not self._fill():
            return None
        return self._buffer[self._pos]

    def _read_chunks(self, fileobj: IO[bytes]) -> Iterator[bytes]:
        while True:
            chunk = fileobj.read(self._chunk_size)
            if not chunk:
                return
            yield chunk

    def _fill(self) -> bool:
        """Load the next non-empty chunk. Returns False once input is exhausted."""
        while not self._exhausted:
            try:
                chunk = next(self._chunks)
            except StopIteration:
                self._exhausted = True
                logger.debug("Byte source exhausted after %d bytes", self._offset)
                break
            except Exception as exc:
                raise TransportError(f"Byte source failed: {exc}", self._offset) from exc

            if not isinstance(chunk, (bytes, bytearray, memoryview)):
                raise TransportError(
                    f"Byte source produced {type(chunk).__name__}, expected bytes "
                    "(open files in binary mode)",
                    self._offset,
                )
            if chunk:
                self._buffer = bytes(chunk)
                self._pos = 0
                return True
        return False

    # ========================================================================
    # RESOURCE HANDLING
    # ========================================================================

    def close(self) -> None:
        """Close the underlying file if this source opened it."""
        if self._owned is not None:
            self._owned.close()
            self._owned = None

    def __enter__(self) -> 'ByteSource':
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"ByteSource({self._offset} bytes read)"
