"""
CampaignRepository - single owner of the session's campaign list.

The Supabase table is authoritative. The local cache is a read-through
acceleration layer: it is written only with lists that came from, or were
just accepted by, the record store.
"""

import logging
from typing import Iterable, List, Optional, Tuple

from ..core.models import Campaign
from .campaign_cache import CampaignCache
from .campaign_service import CampaignService

logger = logging.getLogger(__name__)


def filter_campaigns(campaigns: Iterable[Campaign], term: Optional[str]) -> List[Campaign]:
    """Campaigns whose name or any keyword contains ``term`` (case-insensitive)."""
    needle = (term or "").strip().lower()
    if not needle:
        return list(campaigns)
    return [
        c for c in campaigns
        if needle in c.name.lower() or any(needle in k.lower() for k in c.keywords)
    ]


class CampaignRepository:
    """Campaign list for one session, newest first."""

    def __init__(
        self,
        record_store: Optional[CampaignService] = None,
        cache: Optional[CampaignCache] = None,
    ):
        self.record_store = record_store or CampaignService()
        self.cache = cache or CampaignCache()
        self._campaigns: List[Campaign] = []
        self._loaded = False

    @property
    def campaigns(self) -> Tuple[Campaign, ...]:
        return tuple(self._campaigns)

    def load_cached(self) -> Tuple[Campaign, ...]:
        """Hydrate the in-memory list from the local cache (startup)."""
        self._campaigns = self.cache.load()
        self._loaded = True
        logger.info(f"Loaded {len(self._campaigns)} cached campaigns")
        return self.campaigns

    def refresh(self) -> Tuple[Campaign, ...]:
        """
        Reload from the record store and rewrite the cache.

        Raises:
            The record store's error; the in-memory list and cache are left as they were.
        """
        campaigns = self.record_store.list_campaigns()
        self._campaigns = list(campaigns)
        self._loaded = True
        self._write_cache()
        logger.info(f"Refreshed {len(self._campaigns)} campaigns from record store")
        return self.campaigns

    def create(self, campaign: Campaign) -> Campaign:
        """
        Persist a new campaign, then prepend it to the list.

        Raises:
            The record store's error; nothing is added in that case.
        """
        if not self._loaded:
            self.load_cached()

        saved = self.record_store.create_campaign(campaign)
        self._campaigns.insert(0, saved)
        self._write_cache()
        return saved

    def _write_cache(self) -> None:
        try:
            self.cache.save(self._campaigns)
        except OSError as e:
            logger.warning(f"Could not write campaign cache: {e}")

    def search(self, term: str) -> List[Campaign]:
        """Case-insensitive match on campaign name or any keyword."""
        return filter_campaigns(self._campaigns, term)
