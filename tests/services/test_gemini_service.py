"""
Tests for GeminiService: keyword extraction, policy review and semantic
description, including the distinct fallbacks for "empty answer" versus
"call failed".
"""

import pytest
from unittest.mock import AsyncMock, MagicMock

from google.genai import types

from buyside.core.models import PolicyStatus
from buyside.services.gemini_service import (
    EMPTY_DESCRIPTION,
    EMPTY_KEYWORDS,
    ERROR_KEYWORDS,
    FAILED_DESCRIPTION,
    POLICY_NO_VERDICT_REASON,
    POLICY_UNAVAILABLE_REASON,
    GeminiService,
    _parse_json,
)

JPEG_BYTES = b"\xff\xd8\xff\xe0" + b"\x00" * 16


def _service(text=None, side_effect=None):
    """GeminiService with a mocked genai client returning ``text``."""
    svc = GeminiService(api_key="test-key", model="gemini-test")
    client = MagicMock()
    client.aio.models.generate_content = AsyncMock(
        return_value=MagicMock(text=text), side_effect=side_effect
    )
    svc._client = client
    return svc


def _call_kwargs(svc):
    return svc._client.aio.models.generate_content.call_args.kwargs


# ============================================================================
# extract_keywords
# ============================================================================

class TestExtractKeywords:
    @pytest.mark.asyncio
    async def test_returns_parsed_keywords(self):
        svc = _service('["shoes", "summer sale", "discount"]')
        result = await svc.extract_keywords("50% off all shoes")
        assert result == ["shoes", "summer sale", "discount"]

    @pytest.mark.asyncio
    async def test_caps_at_eight_and_drops_blank_items(self):
        svc = _service('["a", " ", "b", 3, "c", "d", "e", "f", "g", "h", "i"]')
        result = await svc.extract_keywords("text")
        assert result == ["a", "b", "c", "d", "e", "f", "g", "h"]

    @pytest.mark.asyncio
    async def test_empty_response_uses_generic_keywords(self):
        svc = _service("")
        assert await svc.extract_keywords("text") == EMPTY_KEYWORDS

    @pytest.mark.asyncio
    async def test_unparseable_response_uses_generic_keywords(self):
        svc = _service("shoes, sale")
        assert await svc.extract_keywords("text") == EMPTY_KEYWORDS

    @pytest.mark.asyncio
    async def test_call_failure_uses_error_keywords(self):
        svc = _service(side_effect=RuntimeError("503 Service Unavailable"))
        result = await svc.extract_keywords("text")
        assert result == ERROR_KEYWORDS
        assert result != EMPTY_KEYWORDS

    @pytest.mark.asyncio
    async def test_missing_api_key_uses_error_keywords(self):
        svc = GeminiService(api_key="", model="gemini-test")
        assert await svc.extract_keywords("text") == ERROR_KEYWORDS

    @pytest.mark.asyncio
    async def test_requests_json_array(self):
        svc = _service('["x"]')
        await svc.extract_keywords("50% off all shoes")

        kwargs = _call_kwargs(svc)
        assert kwargs["model"] == "gemini-test"
        assert kwargs["config"].response_mime_type == "application/json"
        assert kwargs["config"].response_schema.type == types.Type.ARRAY
        assert "50% off all shoes" in kwargs["contents"][-1]

    @pytest.mark.asyncio
    async def test_image_sent_as_inline_part_first(self):
        svc = _service('["x"]')
        await svc.extract_keywords("text", JPEG_BYTES)

        contents = _call_kwargs(svc)["contents"]
        assert len(contents) == 2
        assert isinstance(contents[0], types.Part)
        assert contents[0].inline_data.mime_type == "image/jpeg"

    @pytest.mark.asyncio
    async def test_returns_fresh_list_each_failure(self):
        svc = _service(side_effect=RuntimeError("boom"))
        first = await svc.extract_keywords("text")
        first.append("mutated")
        assert await svc.extract_keywords("text") == ERROR_KEYWORDS


# ============================================================================
# rate_policy
# ============================================================================

class TestRatePolicy:
    @pytest.mark.asyncio
    async def test_approved_verdict(self):
        svc = _service('{"status": "APPROVED", "reason": "Clean retail promotion"}')
        verdict = await svc.rate_policy("50% off all shoes")
        assert verdict.status == PolicyStatus.APPROVED
        assert verdict.reason == "Clean retail promotion"

    @pytest.mark.asyncio
    async def test_rejected_verdict(self):
        svc = _service('{"status": "REJECTED", "reason": "Get rich quick claim"}')
        verdict = await svc.rate_policy("Double your money overnight")
        assert verdict.status == PolicyStatus.REJECTED

    @pytest.mark.asyncio
    async def test_call_failure_is_pending_service_unavailable(self):
        svc = _service(side_effect=ConnectionError("network down"))
        verdict = await svc.rate_policy("text")
        assert verdict.status == PolicyStatus.PENDING
        assert verdict.reason == POLICY_UNAVAILABLE_REASON

    @pytest.mark.asyncio
    async def test_empty_response_is_pending_never_approved(self):
        svc = _service(None)
        verdict = await svc.rate_policy("text")
        assert verdict.status == PolicyStatus.PENDING
        assert verdict.reason == POLICY_NO_VERDICT_REASON

    @pytest.mark.asyncio
    async def test_out_of_enum_status_is_pending(self):
        svc = _service('{"status": "PENDING", "reason": "unsure"}')
        verdict = await svc.rate_policy("text")
        assert verdict.status == PolicyStatus.PENDING
        assert verdict.reason == POLICY_NO_VERDICT_REASON

    @pytest.mark.asyncio
    async def test_schema_only_allows_approved_or_rejected(self):
        svc = _service('{"status": "APPROVED", "reason": "ok"}')
        await svc.rate_policy("text", JPEG_BYTES)

        kwargs = _call_kwargs(svc)
        config = kwargs["config"]
        assert config.system_instruction
        assert config.response_schema.properties["status"].enum == ["APPROVED", "REJECTED"]
        assert kwargs["contents"][0] == "text"
        assert isinstance(kwargs["contents"][1], types.Part)


# ============================================================================
# describe_semantics
# ============================================================================

class TestDescribeSemantics:
    @pytest.mark.asyncio
    async def test_returns_stripped_text(self):
        svc = _service("  Bold retail promo, footwear, urgency tone.  \n")
        assert await svc.describe_semantics("text") == "Bold retail promo, footwear, urgency tone."

    @pytest.mark.asyncio
    async def test_empty_response_marker(self):
        svc = _service("")
        assert await svc.describe_semantics("text") == EMPTY_DESCRIPTION

    @pytest.mark.asyncio
    async def test_failure_marker_differs_from_empty_marker(self):
        svc = _service(side_effect=TimeoutError())
        result = await svc.describe_semantics("text")
        assert result == FAILED_DESCRIPTION
        assert result != EMPTY_DESCRIPTION

    @pytest.mark.asyncio
    async def test_free_text_mode(self):
        svc = _service("desc")
        await svc.describe_semantics("text")
        assert _call_kwargs(svc)["config"] is None


# ============================================================================
# JSON parsing
# ============================================================================

class TestParseJson:
    def test_strips_code_fences(self):
        assert _parse_json('```json\n["a", "b"]\n```') == ["a", "b"]

    def test_none_for_garbage(self):
        assert _parse_json("not json") is None

    def test_none_for_empty(self):
        assert _parse_json("") is None
        assert _parse_json(None) is None
