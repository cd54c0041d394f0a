"""
Campaign Creation Pipeline - Pydantic-Graph workflow run on draft submission.

Enrich the draft (keywords, policy review, semantic description), upload
its image, assemble the immutable Campaign and persist it.
"""

from .state import CampaignCreationState
from .dependencies import CampaignCreationDeps
from .orchestrator import (
    CampaignCreationError,
    CampaignCreationOrchestrator,
    PIPELINE_NODES,
    campaign_creation_graph,
    run_campaign_creation,
)

__all__ = [
    "CampaignCreationState",
    "CampaignCreationDeps",
    "CampaignCreationError",
    "CampaignCreationOrchestrator",
    "PIPELINE_NODES",
    "campaign_creation_graph",
    "run_campaign_creation",
]
