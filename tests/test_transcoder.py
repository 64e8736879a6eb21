import random

import pytest

from exceptions import InvalidEncodingError
from transcoder import from_url_safe_text, to_url_safe_text


def test_empty_buffer():
    assert to_url_safe_text(b"") == ""
    assert from_url_safe_text("") == b""


def test_uses_url_safe_alphabet_without_padding():
    # b"\xfb\xff" is "+/8=" in standard base64
    assert to_url_safe_text(b"\xfb\xff") == "-_8"
    assert from_url_safe_text("-_8") == b"\xfb\xff"


def test_random_buffers_roundtrip():
    rng = random.Random(7)
    for length in range(0, 40):
        data = bytes(rng.randrange(256) for _ in range(length))
        text = to_url_safe_text(data)
        assert "=" not in text
        assert from_url_safe_text(text) == data


@pytest.mark.parametrize("text", ["ab+c", "ab/c", "abc=", "ab c", "abé", "AAAA\n"])
def test_rejects_characters_outside_alphabet(text):
    with pytest.raises(InvalidEncodingError):
        from_url_safe_text(text)


def test_rejects_impossible_length():
    with pytest.raises(InvalidEncodingError):
        from_url_safe_text("AAAAA")


def test_rejects_non_canonical_trailing_bits():
    assert from_url_safe_text("AA") == b"\x00"
    with pytest.raises(InvalidEncodingError):
        from_url_safe_text("AB")
