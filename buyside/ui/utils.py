"""
Pure helpers for the Streamlit dashboard (no Streamlit imports, unit tested).
"""

from dataclasses import dataclass
from typing import List, Sequence, Tuple

from ..core.models import Campaign, PolicyStatus
from ..services.campaign_repository import filter_campaigns

VISIBLE_KEYWORDS = 4

# status -> (label, streamlit badge color)
_BADGES = {
    PolicyStatus.APPROVED: ("APPROVED", "green"),
    PolicyStatus.REJECTED: ("REJECTED", "red"),
    PolicyStatus.PENDING: ("PENDING", "orange"),
}


@dataclass(frozen=True)
class CampaignSummary:
    """Headline numbers shown above the card grid."""
    total_campaigns: int
    total_budget: int
    approval_rate: int  # percent, halves round up


def summarize_campaigns(campaigns: Sequence[Campaign]) -> CampaignSummary:
    total = len(campaigns)
    approved = sum(1 for c in campaigns if c.is_approved)
    return CampaignSummary(
        total_campaigns=total,
        total_budget=sum(c.budget for c in campaigns),
        approval_rate=int(approved * 100 / total + 0.5) if total else 0,
    )


def split_keywords(keywords: Sequence[str], visible: int = VISIBLE_KEYWORDS) -> Tuple[List[str], int]:
    """First ``visible`` keywords plus the count of the hidden rest (the '+N' chip)."""
    return list(keywords[:visible]), max(len(keywords) - visible, 0)


def policy_badge(status: PolicyStatus) -> Tuple[str, str]:
    return _BADGES[status]


__all__ = [
    "CampaignSummary",
    "filter_campaigns",
    "summarize_campaigns",
    "split_keywords",
    "policy_badge",
]
