"""
Tests for image type detection helpers.
"""

from buyside.utils.media import detect_media_type, is_supported_image, sniff_media_type

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 8
WEBP_BYTES = b"RIFF\x00\x00\x00\x00WEBPVP8 "


def test_sniff_known_types():
    assert sniff_media_type(PNG_BYTES) == "image/png"
    assert sniff_media_type(b"\xff\xd8\xff\xe0") == "image/jpeg"
    assert sniff_media_type(b"GIF89a....") == "image/gif"
    assert sniff_media_type(WEBP_BYTES) == "image/webp"


def test_sniff_unknown_bytes_is_none_but_detect_defaults_to_png():
    assert sniff_media_type(b"hello") is None
    assert detect_media_type(b"hello") == "image/png"


def test_supported_image_needs_extension_and_signature():
    assert is_supported_image("hero.PNG", PNG_BYTES)
    assert not is_supported_image("notes.txt", PNG_BYTES)
    assert not is_supported_image("hero", PNG_BYTES)
    assert not is_supported_image("hero.png", b"plain text")
