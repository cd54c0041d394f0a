"""
CampaignCache - durable local copy of the session's campaign list.

One keyed slot on disk (``<cache_dir>/<key>.json``) holding the ordered
campaign list as JSON. Unreadable data is discarded, never surfaced.
"""

import logging
import os
import tempfile
from pathlib import Path
from typing import List, Optional, Sequence

from pydantic import TypeAdapter, ValidationError

from ..core.config import Config
from ..core.models import Campaign

logger = logging.getLogger(__name__)

_campaign_list = TypeAdapter(List[Campaign])


class CampaignCache:
    """Keyed JSON slot for a list of campaigns."""

    def __init__(self, directory: Optional[Path] = None, key: Optional[str] = None):
        self.directory = Path(directory) if directory is not None else Config.CACHE_DIR
        self.key = key or Config.CACHE_KEY

    @property
    def path(self) -> Path:
        return self.directory / f"{self.key}.json"

    def load(self) -> List[Campaign]:
        """Rehydrate the cached list; [] when the slot is empty or corrupt."""
        if not self.path.exists():
            return []
        try:
            return _campaign_list.validate_json(self.path.read_bytes())
        except (OSError, ValidationError, ValueError) as e:
            logger.warning(f"Discarding unreadable campaign cache at {self.path}: {e}")
            return []

    def save(self, campaigns: Sequence[Campaign]) -> None:
        """Replace the slot contents atomically."""
        self.directory.mkdir(parents=True, exist_ok=True)
        payload = _campaign_list.dump_json(list(campaigns))

        fd, tmp_name = tempfile.mkstemp(dir=self.directory, prefix=f".{self.key}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "wb") as f:
                f.write(payload)
            os.replace(tmp_name, self.path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise

        logger.debug(f"Cached {len(campaigns)} campaigns to {self.path}")

    def clear(self) -> None:
        self.path.unlink(missing_ok=True)
