"""
Tests for UploadAssetNode, AssembleCampaignNode and PersistCampaignNode.
"""

import pytest
from unittest.mock import MagicMock

from pydantic_graph import End

from buyside.core.models import Campaign, CampaignDraft, PolicyStatus, PolicyVerdict
from buyside.pipelines.campaign_creation.state import CampaignCreationState
from buyside.pipelines.campaign_creation.nodes.upload_asset import UploadAssetNode
from buyside.pipelines.campaign_creation.nodes.assemble_campaign import AssembleCampaignNode
from buyside.pipelines.campaign_creation.nodes.persist_campaign import PersistCampaignNode
from buyside.services.gemini_service import FAILED_DESCRIPTION, POLICY_UNAVAILABLE_REASON

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 16


def _make_state(**overrides):
    defaults = {
        "draft": CampaignDraft(name="Summer Sale", budget=500, ad_text_content="50% off all shoes"),
        "keywords": ["shoes", "sale"],
        "policy_verdict": PolicyVerdict(status=PolicyStatus.APPROVED, reason="Compliant"),
        "semantic_description": "Retail footwear discount promo",
    }
    defaults.update(overrides)
    return CampaignCreationState(**defaults)


def _make_ctx(state):
    ctx = MagicMock()
    ctx.state = state
    ctx.deps.assets.upload_image.return_value = "https://cdn.example/abc.png"
    ctx.deps.campaigns.create.side_effect = lambda campaign: campaign
    return ctx


# ============================================================================
# UploadAssetNode
# ============================================================================

class TestUploadAssetNode:
    @pytest.mark.asyncio
    async def test_text_only_draft_skips_storage(self):
        state = _make_state()
        ctx = _make_ctx(state)

        next_node = await UploadAssetNode().run(ctx)

        assert isinstance(next_node, AssembleCampaignNode)
        ctx.deps.assets.upload_image.assert_not_called()
        ctx.deps.report_progress.assert_not_called()
        assert state.image_url is None
        assert "upload_asset" not in state.steps_completed

    @pytest.mark.asyncio
    async def test_uploads_image_with_sniffed_extension(self):
        state = _make_state(
            draft=CampaignDraft(name="Sale", ad_text_content="t", ad_image_bytes=PNG_BYTES)
        )
        ctx = _make_ctx(state)

        await UploadAssetNode().run(ctx)

        ctx.deps.assets.upload_image.assert_called_once_with(PNG_BYTES, "png")
        assert state.image_url == "https://cdn.example/abc.png"
        assert "upload_asset" in state.steps_completed

    @pytest.mark.asyncio
    async def test_upload_exception_continues_without_url(self):
        state = _make_state(
            draft=CampaignDraft(name="Sale", ad_text_content="t", ad_image_bytes=PNG_BYTES)
        )
        ctx = _make_ctx(state)
        ctx.deps.assets.upload_image.side_effect = RuntimeError("bucket missing")

        next_node = await UploadAssetNode().run(ctx)

        assert isinstance(next_node, AssembleCampaignNode)
        assert state.image_url is None


# ============================================================================
# AssembleCampaignNode
# ============================================================================

class TestAssembleCampaignNode:
    @pytest.mark.asyncio
    async def test_builds_campaign_from_draft_and_outputs(self):
        state = _make_state(image_url="https://cdn.example/abc.png")
        ctx = _make_ctx(state)

        next_node = await AssembleCampaignNode().run(ctx)

        assert isinstance(next_node, PersistCampaignNode)
        campaign = state.campaign
        assert campaign.name == "Summer Sale"
        assert campaign.budget == 500
        assert campaign.ad_text_content == "50% off all shoes"
        assert campaign.ad_image_url == "https://cdn.example/abc.png"
        assert campaign.keywords == ("shoes", "sale")
        assert campaign.semantic_description == "Retail footwear discount promo"
        assert campaign.review_policy.status == PolicyStatus.APPROVED
        assert campaign.review_policy.timestamp == campaign.created_at

    @pytest.mark.asyncio
    async def test_generates_distinct_ids(self):
        first = _make_state()
        second = _make_state()

        await AssembleCampaignNode().run(_make_ctx(first))
        await AssembleCampaignNode().run(_make_ctx(second))

        assert first.campaign.id != second.campaign.id

    @pytest.mark.asyncio
    async def test_missing_outputs_use_fallbacks(self):
        state = _make_state(policy_verdict=None, semantic_description=None)
        ctx = _make_ctx(state)

        await AssembleCampaignNode().run(ctx)

        assert state.campaign.review_policy.status == PolicyStatus.PENDING
        assert state.campaign.review_policy.reason == POLICY_UNAVAILABLE_REASON
        assert state.campaign.semantic_description == FAILED_DESCRIPTION


# ============================================================================
# PersistCampaignNode
# ============================================================================

class TestPersistCampaignNode:
    @pytest.mark.asyncio
    async def test_returns_end_with_saved_campaign(self):
        state = _make_state()
        ctx = _make_ctx(state)
        await AssembleCampaignNode().run(ctx)

        result = await PersistCampaignNode().run(ctx)

        assert isinstance(result, End)
        assert isinstance(result.data, Campaign)
        assert result.data.id == state.campaign.id
        ctx.deps.campaigns.create.assert_called_once_with(state.campaign)
        assert "persist_campaign" in state.steps_completed

    @pytest.mark.asyncio
    async def test_failure_is_recorded_and_raised(self):
        state = _make_state()
        ctx = _make_ctx(state)
        await AssembleCampaignNode().run(ctx)
        ctx.deps.campaigns.create.side_effect = RuntimeError("insert rejected")

        with pytest.raises(RuntimeError, match="insert rejected"):
            await PersistCampaignNode().run(ctx)

        assert state.error == "insert rejected"
        assert state.error_step == "persist_campaign"
        assert "persist_campaign" not in state.steps_completed

    @pytest.mark.asyncio
    async def test_nothing_assembled_raises(self):
        state = _make_state()
        ctx = _make_ctx(state)

        with pytest.raises(ValueError):
            await PersistCampaignNode().run(ctx)

        ctx.deps.campaigns.create.assert_not_called()
        assert state.error_step == "persist_campaign"
