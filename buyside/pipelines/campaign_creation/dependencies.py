"""
Dependencies for the campaign creation pipeline.
"""

import logging
from dataclasses import dataclass
from typing import Callable, Optional

from ...services.asset_service import AssetService
from ...services.campaign_repository import CampaignRepository
from ...services.gemini_service import GeminiService
from .state import CampaignCreationState

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[str, str], None]


@dataclass
class CampaignCreationDeps:
    """
    Services used by the campaign creation nodes.

    Attributes:
        enrichment: Gemini keyword / policy / description calls
        assets: Image upload to object storage
        campaigns: Repository owning the record store and local cache
        on_progress: Optional callback(step, message) for progress display
    """

    enrichment: GeminiService
    assets: AssetService
    campaigns: CampaignRepository
    on_progress: Optional[ProgressCallback] = None

    @classmethod
    def create(
        cls,
        on_progress: Optional[ProgressCallback] = None,
        campaigns: Optional[CampaignRepository] = None,
    ) -> "CampaignCreationDeps":
        """Build deps wired to the configured Gemini and Supabase services."""
        return cls(
            enrichment=GeminiService(),
            assets=AssetService(),
            campaigns=campaigns or CampaignRepository(),
            on_progress=on_progress,
        )

    def report_progress(self, state: CampaignCreationState, step: str, message: str) -> None:
        """Record the current step on the state and notify the progress callback."""
        state.current_step = step
        state.progress_message = message
        logger.info(f"[{step}] {message}")
        if self.on_progress is not None:
            self.on_progress(step, message)
