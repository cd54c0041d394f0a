"""
Campaign Creation State - dataclass passed through all pipeline nodes.
"""

from dataclasses import dataclass, field
from typing import List, Optional

from ...core.models import Campaign, CampaignDraft, PolicyVerdict


@dataclass
class CampaignCreationState:
    """
    State passed through all campaign creation nodes.

    Lifecycle:
        1. Caller creates it with the submitted draft + configuration
        2. Each node reads what it needs and writes its outputs
        3. PersistCampaignNode returns the saved Campaign via End()
    """

    # === REQUIRED INPUT ===
    draft: CampaignDraft

    # === CONFIGURATION ===
    parallel_enrichment: bool = False
    enrichment_timeout_seconds: Optional[float] = None  # shared deadline, parallel mode only

    # === POPULATED BY NODES ===

    # ExtractKeywordsNode / ConcurrentEnrichmentNode
    keywords: List[str] = field(default_factory=list)

    # ReviewPolicyNode / ConcurrentEnrichmentNode
    policy_verdict: Optional[PolicyVerdict] = None

    # DescribeSemanticsNode / ConcurrentEnrichmentNode
    semantic_description: Optional[str] = None

    # UploadAssetNode
    image_url: Optional[str] = None

    # AssembleCampaignNode
    campaign: Optional[Campaign] = None

    # === TRACKING ===
    current_step: str = "pending"
    progress_message: str = ""
    steps_completed: List[str] = field(default_factory=list)
    error: Optional[str] = None
    error_step: Optional[str] = None

    def mark_step_complete(self, step_name: str) -> None:
        """Mark a step as complete and update current_step."""
        self.steps_completed.append(step_name)
        self.current_step = f"{step_name}_complete"
