"""
Image payload helpers shared by the enrichment and storage layers.
"""

from typing import Optional


_EXTENSIONS = {
    "image/jpeg": "jpg",
    "image/png": "png",
    "image/gif": "gif",
    "image/webp": "webp",
}

_MEDIA_TYPES = {
    "jpg": "image/jpeg",
    "jpeg": "image/jpeg",
    "png": "image/png",
    "gif": "image/gif",
    "webp": "image/webp",
}


def sniff_media_type(image_bytes: bytes) -> Optional[str]:
    """Image MIME type from magic bytes, or None if the bytes are not a known image."""
    if image_bytes[:4] == b'RIFF' and image_bytes[8:12] == b'WEBP':
        return "image/webp"
    elif image_bytes[:3] == b'\xff\xd8\xff':
        return "image/jpeg"
    elif image_bytes[:8] == b'\x89PNG\r\n\x1a\n':
        return "image/png"
    elif image_bytes[:6] in (b'GIF87a', b'GIF89a'):
        return "image/gif"
    return None


def detect_media_type(image_bytes: bytes) -> str:
    """Detect image MIME type from magic bytes (PNG when unrecognised)."""
    return sniff_media_type(image_bytes) or "image/png"


def extension_for_media_type(media_type: str) -> str:
    return _EXTENSIONS.get(media_type, "png")


def media_type_for_extension(extension: str) -> str:
    return _MEDIA_TYPES.get(normalize_extension(extension), "image/png")


def normalize_extension(extension: Optional[str]) -> str:
    """Lower-case an extension and strip any leading dot ('' -> 'png')."""
    ext = (extension or "").strip().lstrip(".").lower()
    return ext or "png"


def extension_from_filename(filename: Optional[str]) -> Optional[str]:
    """Return the extension of ``filename`` (without the dot), if it has one."""
    if not filename or "." not in filename:
        return None
    ext = filename.rsplit(".", 1)[1].strip().lower()
    return ext or None


def is_supported_image(filename: Optional[str], image_bytes: bytes) -> bool:
    """True if the filename has an image extension and the bytes are a known image type."""
    extension = extension_from_filename(filename)
    if extension is None or extension not in _MEDIA_TYPES:
        return False
    return sniff_media_type(image_bytes) is not None
