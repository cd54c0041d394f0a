"""
ExtractKeywordsNode - Suggest retrieval keywords for the draft.

First node of the sequential pipeline.
"""

import logging
from dataclasses import dataclass
from typing import ClassVar

from pydantic_graph import BaseNode, GraphRunContext

from ..state import CampaignCreationState
from ..dependencies import CampaignCreationDeps
from ...metadata import NodeMetadata
from ....services.gemini_service import ERROR_KEYWORDS

logger = logging.getLogger(__name__)

STEP_NAME = "extract_keywords"
PROGRESS_MESSAGE = "Analyzing context & suggesting keywords..."


@dataclass
class ExtractKeywordsNode(BaseNode[CampaignCreationState]):
    """
    Step 1: Extract 5-8 keyword tags from the ad text and image.

    A failed call yields the error-marker keywords; the pipeline continues.

    Reads: draft.ad_text_content, draft.ad_image_bytes
    Writes: keywords
    Services: GeminiService.extract_keywords()
    """

    metadata: ClassVar[NodeMetadata] = NodeMetadata(
        inputs=["draft.ad_text_content", "draft.ad_image_bytes"],
        outputs=["keywords"],
        services=["enrichment.extract_keywords"],
        llm="Gemini 2.5 Flash",
        llm_purpose="Suggest short keyword tags for ad retrieval",
        fallback="error keywords",
    )

    async def run(
        self,
        ctx: GraphRunContext[CampaignCreationState, CampaignCreationDeps]
    ) -> "ReviewPolicyNode":
        from .review_policy import ReviewPolicyNode

        ctx.deps.report_progress(ctx.state, STEP_NAME, PROGRESS_MESSAGE)
        draft = ctx.state.draft

        try:
            keywords = await ctx.deps.enrichment.extract_keywords(
                draft.ad_text_content, draft.ad_image_bytes
            )
        except Exception as e:
            logger.warning(f"Keyword extraction failed, using fallback: {e}")
            keywords = list(ERROR_KEYWORDS)

        ctx.state.keywords = list(keywords)
        ctx.state.mark_step_complete(STEP_NAME)
        logger.info(f"Keywords: {ctx.state.keywords}")

        return ReviewPolicyNode()
