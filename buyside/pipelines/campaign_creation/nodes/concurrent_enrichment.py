"""
ConcurrentEnrichmentNode - Keywords, policy review and description in parallel.

Used instead of the three sequential enrichment nodes when
``parallel_enrichment`` is enabled. The calls run as independent tasks
joined under one shared deadline; each keeps its own fallback.
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import Any, ClassVar

from pydantic_graph import BaseNode, GraphRunContext

from ..state import CampaignCreationState
from ..dependencies import CampaignCreationDeps
from ...metadata import NodeMetadata
from ....core.models import PolicyStatus, PolicyVerdict
from ....services.gemini_service import (
    ERROR_KEYWORDS,
    FAILED_DESCRIPTION,
    POLICY_UNAVAILABLE_REASON,
)

logger = logging.getLogger(__name__)

STEP_NAME = "enrich"
PROGRESS_MESSAGE = "Analyzing context, running policy agent & vectorizing..."


def _result_or(task: "asyncio.Task[Any]", fallback: Any, label: str) -> Any:
    if task.cancelled():
        logger.warning(f"{label} did not finish before the deadline, using fallback")
        return fallback
    error = task.exception()
    if error is not None:
        logger.warning(f"{label} failed, using fallback: {error}")
        return fallback
    return task.result()


@dataclass
class ConcurrentEnrichmentNode(BaseNode[CampaignCreationState]):
    """
    Steps 1-3 (parallel mode): run the three enrichment calls concurrently.

    Reads: draft.ad_text_content, draft.ad_image_bytes, enrichment_timeout_seconds
    Writes: keywords, policy_verdict, semantic_description
    Services: GeminiService.extract_keywords(), .rate_policy(), .describe_semantics()
    """

    metadata: ClassVar[NodeMetadata] = NodeMetadata(
        inputs=["draft.ad_text_content", "draft.ad_image_bytes", "enrichment_timeout_seconds"],
        outputs=["keywords", "policy_verdict", "semantic_description"],
        services=[
            "enrichment.extract_keywords",
            "enrichment.rate_policy",
            "enrichment.describe_semantics",
        ],
        llm="Gemini 2.5 Flash",
        llm_purpose="Keywords, policy verdict and semantic description",
        fallback="per-call fallbacks",
    )

    async def run(
        self,
        ctx: GraphRunContext[CampaignCreationState, CampaignCreationDeps]
    ) -> "UploadAssetNode":
        from .upload_asset import UploadAssetNode

        ctx.deps.report_progress(ctx.state, STEP_NAME, PROGRESS_MESSAGE)
        draft = ctx.state.draft
        enrichment = ctx.deps.enrichment
        text, image = draft.ad_text_content, draft.ad_image_bytes

        keywords_task = asyncio.create_task(enrichment.extract_keywords(text, image))
        policy_task = asyncio.create_task(enrichment.rate_policy(text, image))
        semantics_task = asyncio.create_task(enrichment.describe_semantics(text, image))
        tasks = (keywords_task, policy_task, semantics_task)

        _, pending = await asyncio.wait(tasks, timeout=ctx.state.enrichment_timeout_seconds)
        for task in pending:
            task.cancel()
        if pending:
            await asyncio.gather(*pending, return_exceptions=True)

        ctx.state.keywords = list(_result_or(keywords_task, ERROR_KEYWORDS, "Keyword extraction"))
        ctx.state.policy_verdict = _result_or(
            policy_task,
            PolicyVerdict(status=PolicyStatus.PENDING, reason=POLICY_UNAVAILABLE_REASON),
            "Policy review",
        )
        ctx.state.semantic_description = _result_or(
            semantics_task, FAILED_DESCRIPTION, "Semantic description"
        )

        for step in ("extract_keywords", "review_policy", "describe_semantics"):
            ctx.state.mark_step_complete(step)

        return UploadAssetNode()
