"""
UploadAssetNode - Upload the draft's image and keep its public URL.
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import ClassVar

from pydantic_graph import BaseNode, GraphRunContext

from ..state import CampaignCreationState
from ..dependencies import CampaignCreationDeps
from ...metadata import NodeMetadata

logger = logging.getLogger(__name__)

STEP_NAME = "upload_asset"
PROGRESS_MESSAGE = "Uploading assets to storage..."


@dataclass
class UploadAssetNode(BaseNode[CampaignCreationState]):
    """
    Step 4: Upload the creative image, if the draft has one.

    Skipped entirely (no storage call, no progress update) for text-only
    drafts. A failed upload leaves image_url as None; the campaign is still
    created, just without a displayable image.

    Reads: draft.ad_image_bytes, draft.ad_image_filename
    Writes: image_url
    Services: AssetService.upload_image()
    """

    metadata: ClassVar[NodeMetadata] = NodeMetadata(
        inputs=["draft.ad_image_bytes", "draft.ad_image_filename"],
        outputs=["image_url"],
        services=["assets.upload_image"],
        fallback="no image URL",
    )

    async def run(
        self,
        ctx: GraphRunContext[CampaignCreationState, CampaignCreationDeps]
    ) -> "AssembleCampaignNode":
        from .assemble_campaign import AssembleCampaignNode

        draft = ctx.state.draft
        if not draft.has_image:
            logger.info("No image attached, skipping upload")
            ctx.state.image_url = None
            return AssembleCampaignNode()

        ctx.deps.report_progress(ctx.state, STEP_NAME, PROGRESS_MESSAGE)

        try:
            image_url = await asyncio.to_thread(
                ctx.deps.assets.upload_image,
                draft.ad_image_bytes,
                draft.image_extension,
            )
        except Exception as e:
            logger.warning(f"Image upload failed, continuing without image: {e}")
            image_url = None

        if image_url is None:
            logger.warning("Campaign will be created without an image URL")

        ctx.state.image_url = image_url
        ctx.state.mark_step_complete(STEP_NAME)

        return AssembleCampaignNode()
