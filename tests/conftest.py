"""Pytest configuration and fixtures."""

import io
import random

import pytest
from partstream.multipart import Multipart


@pytest.fixture
def multipart():
    """Create an open multipart with a fixed boundary."""
    return Multipart("test-boundary", "multipart/test")


@pytest.fixture
def seeded_rng():
    """Create a deterministic random source."""
    return random.Random(1234)


@pytest.fixture
def file_content():
    """Binary content larger than a single small read."""
    return b"".join(f"line {i}\n".encode() for i in range(200))


@pytest.fixture
def file_stream(file_content):
    """Create an open binary stream over file_content."""
    return io.BytesIO(file_content)


@pytest.fixture
def failing_stream(mocker):
    """Create a stream whose read fails like a closed file."""
    stream = mocker.MagicMock()
    stream.read.side_effect = ValueError("I/O operation on closed file.")
    return stream
