"""
GeminiService - AI enrichment of ad creatives using Google Gemini.

Three independent calls share one input shape (ad text, optional image):
keyword extraction, policy review and semantic description. None of them
raises or retries; each failure collapses to a documented fallback value
so the campaign creation pipeline can carry on.
"""

import json
import logging
from typing import Any, List, Optional

from google import genai
from google.genai import types

from ..core.config import Config
from ..core.models import PolicyStatus, PolicyVerdict
from ..utils.media import detect_media_type

logger = logging.getLogger(__name__)


# Successful call, nothing usable in the payload
EMPTY_KEYWORDS = ["generic", "ad"]
# Call failed (network, auth, quota...)
ERROR_KEYWORDS = ["error", "retry"]
MAX_KEYWORDS = 8

POLICY_UNAVAILABLE_REASON = "AI Service Unavailable"
POLICY_NO_VERDICT_REASON = "Policy review returned no verdict"

EMPTY_DESCRIPTION = "No description generated."
FAILED_DESCRIPTION = "Semantic processing failed."

KEYWORDS_PROMPT = """Analyze this ad campaign content. Suggest 5 to 8 high-relevance, short keyword tags for ad retrieval systems. Return strictly a JSON array of strings.

AD TEXT:
{text}"""

POLICY_SYSTEM_INSTRUCTION = """You are a strict Ad Policy Review Agent for "Buyside".
Review the provided ad content (text and optional image).

Policy Rules:
1. No violence, weapons, or illegal activities.
2. No misleading financial claims (e.g., "Get rich quick").
3. No explicit adult content.
4. High quality standards (no gibberish).

Output JSON with 'status' (APPROVED or REJECTED) and a short 'reason'."""

SEMANTICS_PROMPT = """Generate a dense, technical semantic description of this ad for a vector database. Focus on visual elements, tone, subject matter, and intent. Keep it under 50 words.

AD TEXT:
{text}"""

KEYWORDS_SCHEMA = types.Schema(
    type=types.Type.ARRAY,
    items=types.Schema(type=types.Type.STRING),
)

POLICY_SCHEMA = types.Schema(
    type=types.Type.OBJECT,
    properties={
        "status": types.Schema(
            type=types.Type.STRING,
            enum=[PolicyStatus.APPROVED.value, PolicyStatus.REJECTED.value],
        ),
        "reason": types.Schema(type=types.Type.STRING),
    },
    required=["status", "reason"],
)


def _parse_json(text: Optional[str]) -> Any:
    """Parse a JSON payload, tolerating markdown code fences. None if unparseable."""
    if not text:
        return None
    cleaned = text.strip()
    if cleaned.startswith("```"):
        first_newline = cleaned.find("\n")
        last_fence = cleaned.rfind("```")
        if first_newline != -1 and last_fence > first_newline:
            cleaned = cleaned[first_newline + 1:last_fence].strip()
    try:
        return json.loads(cleaned)
    except (json.JSONDecodeError, ValueError):
        return None


class GeminiService:
    """
    Enrichment client for campaign creatives.

    The underlying ``genai.Client`` is created lazily inside each guarded
    call, so a missing API key surfaces as a per-call fallback rather than
    a constructor error.
    """

    def __init__(self, api_key: Optional[str] = None, model: Optional[str] = None):
        self.api_key = api_key if api_key is not None else Config.GEMINI_API_KEY
        self.model_name = model or Config.GEMINI_MODEL
        self._client: Optional[genai.Client] = None

    @property
    def client(self) -> genai.Client:
        if self._client is None:
            if not self.api_key:
                raise ValueError("GEMINI_API_KEY not found in environment")
            self._client = genai.Client(api_key=self.api_key)
            logger.info(f"Gemini client initialized with model: {self.model_name}")
        return self._client

    def _image_part(self, image: Optional[bytes]) -> Optional[types.Part]:
        if not image:
            return None
        return types.Part.from_bytes(data=image, mime_type=detect_media_type(image))

    async def _generate(self, contents: List[Any], config: Optional[types.GenerateContentConfig] = None) -> Optional[str]:
        response = await self.client.aio.models.generate_content(
            model=self.model_name,
            contents=contents,
            config=config,
        )
        return response.text

    async def extract_keywords(self, text: str, image: Optional[bytes] = None) -> List[str]:
        """
        Suggest 5-8 short retrieval tags for an ad.

        Returns:
            Up to 8 tags; EMPTY_KEYWORDS if the model answered with nothing
            usable; ERROR_KEYWORDS if the call itself failed.
        """
        try:
            contents: List[Any] = [KEYWORDS_PROMPT.format(text=text)]
            image_part = self._image_part(image)
            if image_part is not None:
                contents.insert(0, image_part)

            result_text = await self._generate(
                contents,
                types.GenerateContentConfig(
                    response_mime_type="application/json",
                    response_schema=KEYWORDS_SCHEMA,
                ),
            )
        except Exception as e:
            logger.error(f"Error generating keywords: {e}")
            return list(ERROR_KEYWORDS)

        parsed = _parse_json(result_text)
        if not isinstance(parsed, list):
            logger.warning(f"Empty/unparseable keyword response: {(result_text or '')[:100]!r}")
            return list(EMPTY_KEYWORDS)

        keywords = [str(k).strip() for k in parsed if isinstance(k, str) and k.strip()]
        return keywords[:MAX_KEYWORDS]

    async def rate_policy(self, text: str, image: Optional[bytes] = None) -> PolicyVerdict:
        """
        Review an ad against the Buyside content policy.

        The model may only answer APPROVED or REJECTED. PENDING is produced
        here, when the call fails or the verdict cannot be read.
        """
        try:
            contents: List[Any] = [text]
            image_part = self._image_part(image)
            if image_part is not None:
                contents.append(image_part)

            result_text = await self._generate(
                contents,
                types.GenerateContentConfig(
                    system_instruction=POLICY_SYSTEM_INSTRUCTION,
                    response_mime_type="application/json",
                    response_schema=POLICY_SCHEMA,
                ),
            )
        except Exception as e:
            logger.error(f"Error in auto-rater: {e}")
            return PolicyVerdict(status=PolicyStatus.PENDING, reason=POLICY_UNAVAILABLE_REASON)

        parsed = _parse_json(result_text)
        status = parsed.get("status") if isinstance(parsed, dict) else None
        if status not in (PolicyStatus.APPROVED.value, PolicyStatus.REJECTED.value):
            logger.warning(f"Unusable policy verdict: {(result_text or '')[:100]!r}")
            return PolicyVerdict(status=PolicyStatus.PENDING, reason=POLICY_NO_VERDICT_REASON)

        reason = parsed.get("reason")
        return PolicyVerdict(
            status=PolicyStatus(status),
            reason=reason.strip() if isinstance(reason, str) else "",
        )

    async def describe_semantics(self, text: str, image: Optional[bytes] = None) -> str:
        """Dense (<50 words) description of the ad, standing in for an embedding."""
        try:
            contents: List[Any] = [SEMANTICS_PROMPT.format(text=text)]
            image_part = self._image_part(image)
            if image_part is not None:
                contents.insert(0, image_part)

            result_text = await self._generate(contents)
        except Exception as e:
            logger.error(f"Error generating semantic description: {e}")
            return FAILED_DESCRIPTION

        description = (result_text or "").strip()
        return description or EMPTY_DESCRIPTION
