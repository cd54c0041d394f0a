"""
AssembleCampaignNode - Build the immutable Campaign from draft + stage outputs.
"""

import logging
import uuid
from dataclasses import dataclass
from typing import ClassVar

from pydantic_graph import BaseNode, GraphRunContext

from ..state import CampaignCreationState
from ..dependencies import CampaignCreationDeps
from ...metadata import NodeMetadata
from ....core.models import Campaign, PolicyStatus, PolicyVerdict, ReviewPolicy, utc_now
from ....services.gemini_service import FAILED_DESCRIPTION, POLICY_UNAVAILABLE_REASON

logger = logging.getLogger(__name__)

STEP_NAME = "assemble_campaign"
PROGRESS_MESSAGE = "Assembling campaign record..."


@dataclass
class AssembleCampaignNode(BaseNode[CampaignCreationState]):
    """
    Step 5: Create the Campaign.

    A fresh UUID is generated here; created_at and the policy timestamp
    share the same instant.

    Reads: draft, keywords, policy_verdict, semantic_description, image_url
    Writes: campaign
    """

    metadata: ClassVar[NodeMetadata] = NodeMetadata(
        inputs=["draft", "keywords", "policy_verdict", "semantic_description", "image_url"],
        outputs=["campaign"],
    )

    async def run(
        self,
        ctx: GraphRunContext[CampaignCreationState, CampaignCreationDeps]
    ) -> "PersistCampaignNode":
        from .persist_campaign import PersistCampaignNode

        ctx.deps.report_progress(ctx.state, STEP_NAME, PROGRESS_MESSAGE)
        state = ctx.state
        draft = state.draft
        now = utc_now()

        verdict = state.policy_verdict or PolicyVerdict(
            status=PolicyStatus.PENDING, reason=POLICY_UNAVAILABLE_REASON
        )

        state.campaign = Campaign(
            id=str(uuid.uuid4()),
            name=draft.name,
            budget=draft.budget,
            ad_text_content=draft.ad_text_content,
            ad_image_url=state.image_url,
            keywords=tuple(state.keywords),
            semantic_description=(
                state.semantic_description
                if state.semantic_description is not None
                else FAILED_DESCRIPTION
            ),
            review_policy=ReviewPolicy.from_verdict(verdict, timestamp=now),
            created_at=now,
        )
        state.mark_step_complete(STEP_NAME)
        logger.info(f"Assembled campaign {state.campaign.id} ({draft.name})")

        return PersistCampaignNode()
