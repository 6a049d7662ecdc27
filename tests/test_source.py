"""Test the byte source adapter over different kinds of input."""

import io

import pytest

from jsonreader import ByteSource, DepthExtractor, Tokenizer, TransportError
from jsonreader.tokens import ARRAY_START, Token


def read_all(source):
    out = bytearray()
    byte = source.read_byte()
    while byte is not None:
        out.append(byte)
        byte = source.read_byte()
    return bytes(out)


class FailingReader(io.RawIOBase):
    """Binary stream that fails after handing out its data once."""

    def __init__(self, data):
        self._data = data
        self._served = False

    def readable(self):
        return True

    def read(self, size=-1):
        if self._served:
            raise OSError("connection reset")
        self._served = True
        return self._data


def test_bytes_input():
    """Test in-memory bytes are served one byte at a time."""
    source = ByteSource(b'[1]')
    assert source.read_byte() == ord('[')
    assert source.offset == 1
    assert read_all(source) == b'1]'
    assert source.read_byte() is None


def test_str_input_is_utf8_encoded():
    """Test text input is encoded before reading."""
    assert read_all(ByteSource('"é"')) == '"é"'.encode('utf-8')


def test_file_input_with_small_chunks():
    """Test a binary file object read through a tiny chunk size."""
    source = ByteSource(io.BytesIO(b'{"a": 1}'), chunk_size=3)
    assert read_all(source) == b'{"a": 1}'
    assert source.offset == 8


def test_chunk_iterable_skips_empty_chunks():
    """Test empty chunks from an iterable are ignored."""
    source = ByteSource([b'', b'[t', b'', b'rue]', b''])
    assert read_all(source) == b'[true]'


def test_peek_does_not_consume():
    """Test peek_byte leaves the byte in place, across chunk boundaries."""
    source = ByteSource([b'a', b'b'])
    assert source.read_byte() == ord('a')
    assert source.peek_byte() == ord('b')
    assert source.peek_byte() == ord('b')
    assert source.offset == 1
    assert source.read_byte() == ord('b')
    assert source.peek_byte() is None


def test_invalid_chunk_size():
    """Test a non-positive chunk size is rejected."""
    with pytest.raises(ValueError):
        ByteSource(b'', chunk_size=0)


def test_text_mode_file_is_rejected():
    """Test files opened in text mode are reported clearly."""
    source = ByteSource(io.StringIO('[1]'))
    with pytest.raises(TransportError, match="binary mode"):
        source.read_byte()


def test_text_mode_file_stops_tokenizer_for_good():
    """Test a text-mode file fails every pull instead of ending quietly."""
    tokenizer = Tokenizer(io.StringIO('[1, 2]' * 10000))
    with pytest.raises(TransportError) as first:
        next(tokenizer)
    for _ in range(2):
        with pytest.raises(TransportError) as again:
            next(tokenizer)
        assert again.value is first.value
    assert tokenizer.source.offset == 0


def test_str_chunks_stop_extractor_for_good():
    """Test str chunks fail every pull without reading further chunks."""
    chunks = iter(['[[1]', ']'])
    extractor = DepthExtractor(chunks, 0)
    with pytest.raises(TransportError) as first:
        next(extractor)
    with pytest.raises(TransportError) as again:
        next(extractor)
    assert again.value is first.value
    assert next(chunks) == ']'


def test_coerce_keeps_existing_source():
    """Test an existing ByteSource is shared, not wrapped again."""
    source = ByteSource(b'[]')
    assert ByteSource.coerce(source) is source
    assert Tokenizer(source).source is source


def test_read_failure_becomes_transport_error():
    """Test an OSError from the underlying stream is wrapped."""
    source = ByteSource(FailingReader(b'[1'))
    assert read_all_until_error(source) == b'[1'


def read_all_until_error(source):
    out = bytearray()
    with pytest.raises(TransportError) as info:
        while True:
            byte = source.read_byte()
            out.append(byte)
    assert isinstance(info.value.__cause__, OSError)
    assert "connection reset" in str(info.value)
    return bytes(out)


def test_iterator_failure_becomes_transport_error():
    """Test an exception raised by a chunk iterator is wrapped."""
    def chunks():
        yield b'["a", '
        raise ConnectionError("peer went away")

    tokenizer = Tokenizer(chunks())
    assert next(tokenizer) == ARRAY_START
    assert next(tokenizer) == Token.string("a")
    with pytest.raises(TransportError) as first:
        next(tokenizer)
    with pytest.raises(TransportError) as again:
        next(tokenizer)
    assert again.value is first.value


def test_transport_error_aborts_extraction():
    """Test the depth extractor propagates source failures immediately."""
    extractor = DepthExtractor(FailingReader(b'[[1], [2'), 1)
    assert next(extractor) == b'[1]'
    with pytest.raises(TransportError):
        next(extractor)


def test_open_closes_owned_file(tmp_path):
    """Test files opened by the source are closed with it."""
    path = tmp_path / "doc.json"
    path.write_bytes(b'{"Records": [{"a": 1}]}')

    with ByteSource.open(path, chunk_size=4) as source:
        assert list(DepthExtractor(source, 2)) == [b'{"a": 1}']
        fileobj = source._owned
    assert fileobj.closed


def test_close_leaves_caller_file_open():
    """Test a caller-supplied file is not closed by the source."""
    fileobj = io.BytesIO(b'[]')
    with ByteSource(fileobj) as source:
        read_all(source)
    assert not fileobj.closed
