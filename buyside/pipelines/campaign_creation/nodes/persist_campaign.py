"""
PersistCampaignNode - Save the assembled campaign. The only fatal stage.
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import ClassVar

from pydantic_graph import BaseNode, End, GraphRunContext

from ..state import CampaignCreationState
from ..dependencies import CampaignCreationDeps
from ...metadata import NodeMetadata
from ....core.models import Campaign

logger = logging.getLogger(__name__)

STEP_NAME = "persist_campaign"
PROGRESS_MESSAGE = "Saving campaign to database..."


@dataclass
class PersistCampaignNode(BaseNode[CampaignCreationState]):
    """
    Step 6: Persist via the campaign repository.

    On failure the error is recorded on the state and re-raised; no
    campaign leaves the pipeline and the repository's list is unchanged.

    Reads: campaign
    Writes: (none - returns End with the saved Campaign)
    Services: CampaignRepository.create()
    """

    metadata: ClassVar[NodeMetadata] = NodeMetadata(
        inputs=["campaign"],
        outputs=[],
        services=["campaigns.create"],
        fatal=True,
    )

    async def run(
        self,
        ctx: GraphRunContext[CampaignCreationState, CampaignCreationDeps]
    ) -> End[Campaign]:
        ctx.deps.report_progress(ctx.state, STEP_NAME, PROGRESS_MESSAGE)

        campaign = ctx.state.campaign
        try:
            if campaign is None:
                raise ValueError("No assembled campaign to persist")
            saved = await asyncio.to_thread(ctx.deps.campaigns.create, campaign)
        except Exception as e:
            ctx.state.error = str(e)
            ctx.state.error_step = STEP_NAME
            logger.error(f"Persisting campaign failed: {e}")
            raise

        ctx.state.mark_step_complete(STEP_NAME)
        logger.info(f"Campaign {saved.id} saved")

        return End(saved)
