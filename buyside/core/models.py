"""
Pydantic models for campaigns and campaign drafts

CampaignDraft is the mutable form state a user edits before submission.
Campaign is the immutable record produced by the creation pipeline.
The creative image is carried as raw bytes on the draft and as a hosted
URL on the campaign; the two never share a field.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..utils.media import detect_media_type, extension_for_media_type, extension_from_filename


# ============================================================================
# Enums
# ============================================================================

class PolicyStatus(str, Enum):
    """Approval state of a campaign's creative"""
    PENDING = "PENDING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


# ============================================================================
# Policy review
# ============================================================================

class PolicyVerdict(BaseModel):
    """Verdict returned by the policy review call, before it is timestamped."""
    status: PolicyStatus = Field(..., description="APPROVED or REJECTED from the model, PENDING on failure")
    reason: str = Field(default="", description="Short human-readable justification")


class ReviewPolicy(BaseModel):
    """Timestamped policy review attached to a Campaign."""
    model_config = ConfigDict(frozen=True)

    status: PolicyStatus
    reason: str = ""
    timestamp: datetime = Field(default_factory=utc_now)

    @classmethod
    def from_verdict(cls, verdict: PolicyVerdict, timestamp: datetime) -> "ReviewPolicy":
        return cls(status=verdict.status, reason=verdict.reason, timestamp=timestamp)


# ============================================================================
# Draft and Campaign
# ============================================================================

class CampaignDraft(BaseModel):
    """
    Editable pre-submission campaign form state.

    ``ad_image_bytes`` is present only when the user attached an image;
    ``ad_image_filename`` is the original upload name and is used to pick
    the storage extension.
    """
    model_config = ConfigDict(validate_assignment=True)

    name: str = Field(..., min_length=1, description="Campaign display name")
    budget: int = Field(default=1000, ge=1, description="Budget in whole dollars")
    ad_text_content: str = Field(default="", description="Ad copy, input to all enrichment calls")
    ad_image_bytes: Optional[bytes] = Field(default=None, repr=False)
    ad_image_filename: Optional[str] = None

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("name must not be blank")
        return v

    @property
    def has_image(self) -> bool:
        return bool(self.ad_image_bytes)

    @property
    def image_extension(self) -> Optional[str]:
        """Extension for storage: from the filename, else sniffed from the bytes."""
        if not self.has_image:
            return None
        return (
            extension_from_filename(self.ad_image_filename)
            or extension_for_media_type(detect_media_type(self.ad_image_bytes))
        )


class Campaign(BaseModel):
    """A launched ad campaign. Never mutated once assembled."""
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    budget: int
    ad_text_content: str
    ad_image_url: Optional[str] = None
    keywords: Tuple[str, ...] = Field(default_factory=tuple)
    semantic_description: str = ""
    review_policy: ReviewPolicy
    created_at: datetime

    @property
    def is_approved(self) -> bool:
        return self.review_policy.status == PolicyStatus.APPROVED

    @property
    def is_rejected(self) -> bool:
        return self.review_policy.status == PolicyStatus.REJECTED
