"""
CampaignService - the campaigns table in Supabase.

Owns the mapping between Campaign fields and the table's snake_case
columns, and the ISO-8601 serialization of timestamps. Storage errors are
propagated unchanged; nothing is retried or partially applied.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from ..core.config import Config
from ..core.database import get_supabase_client
from ..core.models import Campaign, PolicyStatus, ReviewPolicy

logger = logging.getLogger(__name__)


def _to_iso(value: datetime) -> str:
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.isoformat()


def _parse_timestamp(value: Any) -> datetime:
    """ISO-8601 string, or legacy epoch milliseconds, to an aware datetime."""
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, (int, float)):
        parsed = datetime.fromtimestamp(value / 1000, tz=timezone.utc)
    else:
        parsed = datetime.fromisoformat(str(value).replace("Z", "+00:00"))
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def _parse_status(value: Any) -> PolicyStatus:
    """Stored status to PolicyStatus. Unknown values are treated as PENDING."""
    if value is None:
        return PolicyStatus.PENDING
    try:
        return PolicyStatus(value)
    except ValueError:
        logger.warning(f"Unknown review policy status {value!r}, treating as PENDING")
        return PolicyStatus.PENDING


def campaign_to_row(campaign: Campaign) -> Dict[str, Any]:
    """Campaign -> campaigns table row."""
    return {
        "id": campaign.id,
        "name": campaign.name,
        "budget": campaign.budget,
        "ad_text_content": campaign.ad_text_content,
        "ad_image_content": campaign.ad_image_url,
        "keywords": list(campaign.keywords),
        "semantic_description": campaign.semantic_description,
        "review_policy": {
            "status": campaign.review_policy.status.value,
            "reason": campaign.review_policy.reason,
            "timestamp": _to_iso(campaign.review_policy.timestamp),
        },
        "created_at": _to_iso(campaign.created_at),
    }


def row_to_campaign(row: Dict[str, Any]) -> Campaign:
    """campaigns table row -> Campaign."""
    created_at = _parse_timestamp(row["created_at"])
    policy = row.get("review_policy") or {}
    policy_timestamp = policy.get("timestamp")

    return Campaign(
        id=str(row["id"]),
        name=row["name"],
        budget=row["budget"],
        ad_text_content=row.get("ad_text_content") or "",
        ad_image_url=row.get("ad_image_content"),
        keywords=tuple(row.get("keywords") or ()),
        semantic_description=row.get("semantic_description") or "",
        review_policy=ReviewPolicy(
            status=_parse_status(policy.get("status")),
            reason=policy.get("reason") or "",
            timestamp=_parse_timestamp(policy_timestamp) if policy_timestamp is not None else created_at,
        ),
        created_at=created_at,
    )


class CampaignService:
    """Record store for Campaign rows."""

    def __init__(self, table: Optional[str] = None):
        self.table = table or Config.CAMPAIGNS_TABLE

    def list_campaigns(self) -> List[Campaign]:
        """Fetch all campaigns, newest first."""
        try:
            result = (
                get_supabase_client()
                .table(self.table)
                .select("*")
                .order("created_at", desc=True)
                .execute()
            )
        except Exception as e:
            logger.error(f"Error fetching campaigns: {e}")
            raise

        return [row_to_campaign(row) for row in (result.data or [])]

    def create_campaign(self, campaign: Campaign) -> Campaign:
        """
        Insert a campaign row.

        Raises:
            Whatever the Supabase client raises; the caller treats it as fatal.
        """
        try:
            get_supabase_client().table(self.table).insert(campaign_to_row(campaign)).execute()
        except Exception as e:
            logger.error(f"Error creating campaign {campaign.id}: {e}")
            raise

        logger.info(f"Saved campaign {campaign.id} ({campaign.name})")
        return campaign
