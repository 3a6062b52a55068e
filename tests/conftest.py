"""Shared fixtures."""

import os

import pytest


@pytest.fixture
def latin1_dir():
    """Create a directory named b"caf\\xe9" (not valid UTF-8) and return its str name."""

    def make(parent) -> str:
        try:
            os.mkdir(os.path.join(os.fsencode(parent), b"caf\xe9"))
        except OSError:
            pytest.skip("filesystem rejects non-UTF-8 names")
        return os.fsdecode(b"caf\xe9")

    return make
