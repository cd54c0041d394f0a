"""
DescribeSemanticsNode - Dense text description standing in for an embedding.
"""

import logging
from dataclasses import dataclass
from typing import ClassVar

from pydantic_graph import BaseNode, GraphRunContext

from ..state import CampaignCreationState
from ..dependencies import CampaignCreationDeps
from ...metadata import NodeMetadata
from ....services.gemini_service import FAILED_DESCRIPTION

logger = logging.getLogger(__name__)

STEP_NAME = "describe_semantics"
PROGRESS_MESSAGE = "Training offline embedding & vectorizing..."


@dataclass
class DescribeSemanticsNode(BaseNode[CampaignCreationState]):
    """
    Step 3: Generate the semantic description.

    Reads: draft.ad_text_content, draft.ad_image_bytes
    Writes: semantic_description
    Services: GeminiService.describe_semantics()
    """

    metadata: ClassVar[NodeMetadata] = NodeMetadata(
        inputs=["draft.ad_text_content", "draft.ad_image_bytes"],
        outputs=["semantic_description"],
        services=["enrichment.describe_semantics"],
        llm="Gemini 2.5 Flash",
        llm_purpose="Describe tone, subject and intent in under 50 words",
        fallback="failure marker description",
    )

    async def run(
        self,
        ctx: GraphRunContext[CampaignCreationState, CampaignCreationDeps]
    ) -> "UploadAssetNode":
        from .upload_asset import UploadAssetNode

        ctx.deps.report_progress(ctx.state, STEP_NAME, PROGRESS_MESSAGE)
        draft = ctx.state.draft

        try:
            description = await ctx.deps.enrichment.describe_semantics(
                draft.ad_text_content, draft.ad_image_bytes
            )
        except Exception as e:
            logger.warning(f"Semantic description failed, using fallback: {e}")
            description = FAILED_DESCRIPTION

        ctx.state.semantic_description = description
        ctx.state.mark_step_complete(STEP_NAME)

        return UploadAssetNode()
