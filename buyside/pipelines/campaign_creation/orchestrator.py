"""
Campaign Creation Orchestrator - Graph definition and entry points.

Defines the pydantic-graph pipeline run when a draft is submitted and
provides run_campaign_creation() plus the CampaignCreationOrchestrator
used by the CLI and the dashboard.

Graph Flow (sequential, default):
    ExtractKeywords -> ReviewPolicy -> DescribeSemantics
        -> UploadAsset -> AssembleCampaign -> PersistCampaign -> End[Campaign]

Graph Flow (parallel_enrichment):
    ConcurrentEnrichment -> UploadAsset -> AssembleCampaign -> PersistCampaign -> End[Campaign]

Only persistence is fatal. Enrichment and upload failures degrade the
campaign's content (fallback keywords/description, PENDING policy, no image).
"""

import logging
from typing import Optional

from pydantic_graph import Graph

from ...core.config import Config
from ...core.models import Campaign, CampaignDraft
from .dependencies import CampaignCreationDeps, ProgressCallback
from .state import CampaignCreationState
from .nodes.extract_keywords import ExtractKeywordsNode
from .nodes.review_policy import ReviewPolicyNode
from .nodes.describe_semantics import DescribeSemanticsNode
from .nodes.concurrent_enrichment import ConcurrentEnrichmentNode
from .nodes.upload_asset import UploadAssetNode
from .nodes.assemble_campaign import AssembleCampaignNode
from .nodes.persist_campaign import PersistCampaignNode

logger = logging.getLogger(__name__)


class CampaignCreationError(Exception):
    """Raised when a submission could not be persisted. No campaign was created."""

    def __init__(self, message: str, step: Optional[str] = None):
        super().__init__(message)
        self.step = step


# ============================================================================
# Graph Definition
# ============================================================================

PIPELINE_NODES = (
    ExtractKeywordsNode,
    ReviewPolicyNode,
    DescribeSemanticsNode,
    ConcurrentEnrichmentNode,
    UploadAssetNode,
    AssembleCampaignNode,
    PersistCampaignNode,
)

campaign_creation_graph = Graph(
    nodes=PIPELINE_NODES,
    name="campaign_creation_pipeline"
)


# ============================================================================
# Convenience Function
# ============================================================================

async def run_campaign_creation(
    draft: CampaignDraft,
    deps: Optional[CampaignCreationDeps] = None,
    *,
    parallel_enrichment: Optional[bool] = None,
    enrichment_timeout_seconds: Optional[float] = None,
    state: Optional[CampaignCreationState] = None,
) -> Campaign:
    """
    Run the campaign creation pipeline for one draft.

    Args:
        draft: Submitted campaign draft
        deps: Pipeline services (created from Config if not provided)
        parallel_enrichment: Run the three enrichment calls concurrently
            (default: Config.PARALLEL_ENRICHMENT)
        enrichment_timeout_seconds: Shared deadline for parallel enrichment
            (default: Config.ENRICHMENT_TIMEOUT_SECONDS)
        state: Pre-built state to run with, so callers can observe progress

    Returns:
        The persisted Campaign

    Raises:
        CampaignCreationError: If the campaign could not be persisted
    """
    if deps is None:
        deps = CampaignCreationDeps.create()

    if state is None:
        state = CampaignCreationState(draft=draft)
    state.parallel_enrichment = (
        Config.PARALLEL_ENRICHMENT if parallel_enrichment is None else parallel_enrichment
    )
    state.enrichment_timeout_seconds = (
        Config.ENRICHMENT_TIMEOUT_SECONDS
        if enrichment_timeout_seconds is None
        else enrichment_timeout_seconds
    )

    start_node = ConcurrentEnrichmentNode() if state.parallel_enrichment else ExtractKeywordsNode()

    logger.info(f"=== STARTING CAMPAIGN CREATION for '{draft.name}' ===")

    try:
        result = await campaign_creation_graph.run(
            start_node,
            state=state,
            deps=deps,
        )
    except Exception as e:
        step = state.error_step or state.current_step
        logger.error(f"Campaign creation failed at {step}: {e}")
        raise CampaignCreationError(f"Failed to create campaign: {e}", step=step) from e

    campaign = result.output
    logger.info(f"=== CAMPAIGN CREATED: {campaign.id} ({campaign.review_policy.status.value}) ===")
    return campaign


class CampaignCreationOrchestrator:
    """
    Submits drafts through the creation pipeline, one at a time.

    ``current_step`` and ``progress_message`` reflect the run in flight
    (or the last run) for progress display.
    """

    def __init__(
        self,
        deps: Optional[CampaignCreationDeps] = None,
        *,
        on_progress: Optional[ProgressCallback] = None,
        parallel_enrichment: Optional[bool] = None,
        enrichment_timeout_seconds: Optional[float] = None,
    ):
        self.deps = deps or CampaignCreationDeps.create()
        if on_progress is not None:
            self.deps.on_progress = on_progress
        self.parallel_enrichment = parallel_enrichment
        self.enrichment_timeout_seconds = enrichment_timeout_seconds
        self._state: Optional[CampaignCreationState] = None
        self._running = False

    @property
    def is_running(self) -> bool:
        return self._running

    @property
    def current_step(self) -> str:
        return self._state.current_step if self._state else "pending"

    @property
    def progress_message(self) -> str:
        return self._state.progress_message if self._state else ""

    async def submit(self, draft: CampaignDraft) -> Campaign:
        """
        Run the pipeline for ``draft``.

        Returns:
            The persisted Campaign (already prepended to the repository's list)

        Raises:
            RuntimeError: If a submission is already in flight
            CampaignCreationError: If persistence failed
        """
        if self._running:
            raise RuntimeError("A campaign submission is already in progress")

        self._running = True
        self._state = CampaignCreationState(draft=draft)
        try:
            return await run_campaign_creation(
                draft,
                self.deps,
                parallel_enrichment=self.parallel_enrichment,
                enrichment_timeout_seconds=self.enrichment_timeout_seconds,
                state=self._state,
            )
        finally:
            self._running = False
