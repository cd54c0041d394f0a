"""
AssetService - uploads campaign creatives to Supabase Storage.
"""

import logging
import time
import uuid
from typing import Optional

from ..core.config import Config
from ..core.database import get_supabase_client
from ..utils.media import media_type_for_extension, normalize_extension

logger = logging.getLogger(__name__)


def build_storage_key(extension: Optional[str]) -> str:
    """
    Generate a collision-resistant object key.

    Format: ``{random}_{epoch_ms}.{ext}``, e.g. ``3f9c0a1b2d4e_1718000000000.png``.
    """
    random_part = uuid.uuid4().hex[:12]
    millis = int(time.time() * 1000)
    return f"{random_part}_{millis}.{normalize_extension(extension)}"


class AssetService:
    """Object storage for uploaded creative images."""

    def __init__(self, bucket: Optional[str] = None):
        self.bucket = bucket or Config.CAMPAIGN_ASSETS_BUCKET

    def upload_image(self, data: bytes, extension: Optional[str] = None) -> Optional[str]:
        """
        Upload an image and return its public URL.

        Args:
            data: Raw image bytes
            extension: Suggested file extension (e.g. "jpg", ".PNG")

        Returns:
            Public URL, or None if the upload failed for any reason
        """
        storage_key = build_storage_key(extension)
        try:
            storage = get_supabase_client().storage.from_(self.bucket)
            storage.upload(
                storage_key,
                data,
                {"content-type": media_type_for_extension(extension or "")}
            )
            public_url = storage.get_public_url(storage_key)
            logger.info(f"Uploaded {len(data)} bytes to {self.bucket}/{storage_key}")
            return public_url
        except Exception as e:
            logger.error(f"Error uploading image to {self.bucket}/{storage_key}: {e}")
            return None
