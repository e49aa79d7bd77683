"""Tests for partstream.parts module."""

import io

import pytest
from partstream.errors import InvalidArgumentError, InvalidStateError
from partstream.parts import (
    UNKNOWN_LENGTH,
    LiteralPart,
    ProducerPart,
    StreamPart,
    is_source,
    make_part,
)


class TestMakePart:
    """Tests for make_part classification."""

    def test_bytes_is_literal(self):
        """Test bytes become a literal part."""
        part = make_part(b"abc")
        assert isinstance(part, LiteralPart)
        assert part.length == 3

    def test_str_is_encoded_literal(self):
        """Test text is encoded as UTF-8."""
        part = make_part("hé")
        assert isinstance(part, LiteralPart)
        assert part.data == "hé".encode("utf-8")
        assert part.length == 3

    def test_bytearray_is_literal(self):
        """Test bytearray is copied into a literal part."""
        part = make_part(bytearray(b"xyz"))
        assert isinstance(part, LiteralPart)
        assert part.data == b"xyz"

    def test_literal_ignores_declared_length(self):
        """Test declared length is ignored for literals."""
        assert make_part(b"abc", 100).length == 3

    def test_stream_with_length(self):
        """Test objects with read() become stream parts."""
        part = make_part(io.BytesIO(b"abc"), 3)
        assert isinstance(part, StreamPart)
        assert part.length == 3

    def test_stream_without_length(self):
        """Test stream length defaults to unknown."""
        assert make_part(io.BytesIO(b"abc")).length == UNKNOWN_LENGTH

    def test_callable_is_producer(self):
        """Test other callables become producer parts."""
        part = make_part(lambda n: b"", 0)
        assert isinstance(part, ProducerPart)
        assert part.length == 0

    def test_unsupported_type(self):
        """Test unsupported sources are rejected."""
        with pytest.raises(InvalidArgumentError, match="non-supported part type: int"):
            make_part(0)

    def test_is_source(self):
        """Test is_source agrees with make_part."""
        assert is_source(b"")
        assert is_source("")
        assert is_source(io.BytesIO())
        assert is_source(len)
        assert not is_source(0)
        assert not is_source(None)


class TestLiteralPart:
    """Tests for LiteralPart."""

    def test_pull_in_chunks(self):
        """Test pulling advances through the data."""
        part = LiteralPart(b"Hello World")
        assert part.pull(5) == b"Hello"
        assert part.pull(5) == b" Worl"
        assert part.pull(5) == b"d"
        assert part.pull(5) == b""

    def test_rewind(self):
        """Test rewind restarts from the beginning."""
        part = LiteralPart(b"abc")
        part.pull(10)
        part.rewind()
        assert part.pull(10) == b"abc"


class TestStreamPart:
    """Tests for StreamPart."""

    def test_pull_reads_stream(self):
        """Test pulling forwards to read()."""
        part = StreamPart(io.BytesIO(b"abcdef"))
        assert part.pull(4) == b"abcd"
        assert part.pull(4) == b"ef"
        assert part.pull(4) == b""

    def test_closed_stream(self):
        """Test a closed stream raises InvalidStateError."""
        stream = io.BytesIO(b"abc")
        stream.close()
        part = StreamPart(stream)
        with pytest.raises(InvalidStateError, match="failed to read from stream"):
            part.pull(10)

    def test_os_error_is_chained(self, mocker):
        """Test underlying OSError is kept as the cause."""
        stream = mocker.Mock()
        cause = OSError("disk gone")
        stream.read.side_effect = cause
        with pytest.raises(InvalidStateError) as excinfo:
            StreamPart(stream).pull(10)
        assert excinfo.value.__cause__ is cause

    def test_text_stream_rejected(self):
        """Test a text mode stream raises InvalidStateError."""
        part = StreamPart(io.StringIO("abc"))
        with pytest.raises(InvalidStateError, match="expected bytes"):
            part.pull(10)

    def test_none_from_stream(self, mocker):
        """Test a stream returning None raises InvalidStateError."""
        stream = mocker.Mock()
        stream.read.return_value = None
        with pytest.raises(InvalidStateError):
            StreamPart(stream).pull(10)

    def test_rewind_does_not_seek(self):
        """Test rewind leaves the stream position alone."""
        stream = io.BytesIO(b"abc")
        part = StreamPart(stream)
        part.pull(2)
        part.rewind()
        assert part.pull(10) == b"c"


class TestProducerPart:
    """Tests for ProducerPart."""

    def test_pull_calls_producer_with_length(self, mocker):
        """Test the producer receives the maximum length."""
        producer = mocker.Mock(return_value=b"abc")
        assert ProducerPart(producer).pull(10) == b"abc"
        producer.assert_called_once_with(10)

    def test_text_is_encoded(self):
        """Test text returned by a producer is encoded."""
        assert ProducerPart(lambda n: "ab").pull(10) == b"ab"

    def test_too_much_data(self):
        """Test a producer returning more than requested is rejected."""
        with pytest.raises(InvalidStateError, match="more than the requested 2"):
            ProducerPart(lambda n: b"abc").pull(2)

    def test_stream_too_much_data(self, mocker):
        """Test a stream ignoring the requested size is rejected."""
        stream = mocker.Mock()
        stream.read.return_value = b"x" * 100
        with pytest.raises(InvalidStateError, match="stream returned 100 bytes, more than the requested 10"):
            StreamPart(stream).pull(10)

    def test_wrong_type(self):
        """Test a producer returning a non-bytes value is rejected."""
        with pytest.raises(InvalidStateError, match="expected bytes"):
            ProducerPart(lambda n: 42).pull(10)
