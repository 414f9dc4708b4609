"""Unit tests for status message helpers"""

from auto_lending.utils.formatting import shorten_address, shorten_hash


def test_shorten_hash():
    assert shorten_hash("0x1234567890abcdef") == "0x123456...cdef"
    assert shorten_hash("") == ""
    assert shorten_hash(None) == ""


def test_shorten_address():
    assert shorten_address("0x1234567890abcdef") == "0x1234...cdef"
    assert shorten_address("0xA1") == "0xA1"
