"""
Campaign creation pipeline nodes, one per stage.
"""

from .extract_keywords import ExtractKeywordsNode
from .review_policy import ReviewPolicyNode
from .describe_semantics import DescribeSemanticsNode
from .concurrent_enrichment import ConcurrentEnrichmentNode
from .upload_asset import UploadAssetNode
from .assemble_campaign import AssembleCampaignNode
from .persist_campaign import PersistCampaignNode

__all__ = [
    "ExtractKeywordsNode",
    "ReviewPolicyNode",
    "DescribeSemanticsNode",
    "ConcurrentEnrichmentNode",
    "UploadAssetNode",
    "AssembleCampaignNode",
    "PersistCampaignNode",
]
