"""
ReviewPolicyNode - Auto-rate the draft against the ad content policy.
"""

import logging
from dataclasses import dataclass
from typing import ClassVar

from pydantic_graph import BaseNode, GraphRunContext

from ..state import CampaignCreationState
from ..dependencies import CampaignCreationDeps
from ...metadata import NodeMetadata
from ....core.models import PolicyStatus, PolicyVerdict
from ....services.gemini_service import POLICY_UNAVAILABLE_REASON

logger = logging.getLogger(__name__)

STEP_NAME = "review_policy"
PROGRESS_MESSAGE = "Running auto-rater policy agent..."


@dataclass
class ReviewPolicyNode(BaseNode[CampaignCreationState]):
    """
    Step 2: Policy review of the creative.

    A failed call yields a PENDING verdict; REJECTED and PENDING drafts
    still become campaigns.

    Reads: draft.ad_text_content, draft.ad_image_bytes
    Writes: policy_verdict
    Services: GeminiService.rate_policy()
    """

    metadata: ClassVar[NodeMetadata] = NodeMetadata(
        inputs=["draft.ad_text_content", "draft.ad_image_bytes"],
        outputs=["policy_verdict"],
        services=["enrichment.rate_policy"],
        llm="Gemini 2.5 Flash",
        llm_purpose="Approve or reject the ad against content policy",
        fallback="PENDING verdict",
    )

    async def run(
        self,
        ctx: GraphRunContext[CampaignCreationState, CampaignCreationDeps]
    ) -> "DescribeSemanticsNode":
        from .describe_semantics import DescribeSemanticsNode

        ctx.deps.report_progress(ctx.state, STEP_NAME, PROGRESS_MESSAGE)
        draft = ctx.state.draft

        try:
            verdict = await ctx.deps.enrichment.rate_policy(
                draft.ad_text_content, draft.ad_image_bytes
            )
        except Exception as e:
            logger.warning(f"Policy review failed, marking PENDING: {e}")
            verdict = PolicyVerdict(status=PolicyStatus.PENDING, reason=POLICY_UNAVAILABLE_REASON)

        ctx.state.policy_verdict = verdict
        ctx.state.mark_step_complete(STEP_NAME)
        logger.info(f"Policy verdict: {verdict.status.value} ({verdict.reason})")

        return DescribeSemanticsNode()
