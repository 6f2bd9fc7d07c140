"""
Gemini image service tests

The Gemini wire is replaced with httpx.MockTransport so each test controls
the exact HTTP response.
"""
import json
import httpx
import pytest

from services.gemini_service import (
    GeminiImageService,
    build_enhanced_prompt,
    INVALID_API_KEY_MESSAGE,
    NO_IMAGE_MESSAGE,
    UNKNOWN_ERROR_MESSAGE
)


def make_service(handler, api_key="test-key"):
    return GeminiImageService(api_key=api_key, transport=httpx.MockTransport(handler))


def image_response(*parts):
    return httpx.Response(200, json={
        "candidates": [{
            "content": {"role": "model", "parts": list(parts)},
            "finishReason": "STOP"
        }]
    })


@pytest.mark.unit
def test_enhanced_prompt_quotes_instruction():
    prompt = build_enhanced_prompt("make it glow")

    assert prompt.startswith("A masterpiece, high-resolution, studio quality")
    assert prompt.endswith('Using the provided image as a base, edit it to: "make it glow"')


@pytest.mark.unit
@pytest.mark.asyncio
class TestGeminiEditImage:
    """Tests for GeminiImageService.edit_image"""

    async def test_returns_data_url_from_inline_part(self):
        service = make_service(lambda request: image_response(
            {"text": "Here is your image"},
            {"inlineData": {"mimeType": "image/png", "data": "AAAA"}}
        ))

        success, image_url, error = await service.edit_image("BBBB", "image/jpeg", "make it glow")

        assert success is True
        assert image_url == "data:image/png;base64,AAAA"
        assert error is None

    async def test_first_image_part_wins(self):
        service = make_service(lambda request: image_response(
            {"inlineData": {"mimeType": "image/jpeg", "data": "FIRST"}},
            {"inlineData": {"mimeType": "image/png", "data": "SECOND"}}
        ))

        success, image_url, _ = await service.edit_image("BBBB", "image/png", "x")

        assert success is True
        assert image_url == "data:image/jpeg;base64,FIRST"

    async def test_request_carries_image_prompt_and_modality(self):
        requests = []

        def handler(request):
            requests.append(request)
            return image_response({"inlineData": {"mimeType": "image/png", "data": "AAAA"}})

        service = make_service(handler)
        await service.edit_image("BBBB", "image/jpeg", "turn the dress into glass")

        assert len(requests) == 1
        request = requests[0]
        assert request.url.path.endswith("/models/gemini-2.5-flash-image:generateContent")
        assert request.headers["x-goog-api-key"] == "test-key"

        body = json.loads(request.content)
        parts = body["contents"][0]["parts"]
        assert parts[0] == {"inlineData": {"data": "BBBB", "mimeType": "image/jpeg"}}
        assert parts[1]["text"] == build_enhanced_prompt("turn the dress into glass")
        assert body["generationConfig"]["responseModalities"] == ["IMAGE"]

    async def test_no_image_part(self):
        service = make_service(lambda request: image_response({"text": "I cannot do that"}))

        success, image_url, error = await service.edit_image("BBBB", "image/png", "x")

        assert success is False
        assert image_url is None
        assert error == NO_IMAGE_MESSAGE

    async def test_no_candidates(self):
        service = make_service(lambda request: httpx.Response(200, json={"promptFeedback": {"blockReason": "SAFETY"}}))

        success, _, error = await service.edit_image("BBBB", "image/png", "x")

        assert success is False
        assert error == NO_IMAGE_MESSAGE

    async def test_invalid_api_key_is_rewritten(self):
        service = make_service(lambda request: httpx.Response(400, json={
            "error": {
                "code": 400,
                "message": "API key not valid. Please pass a valid API key.",
                "status": "INVALID_ARGUMENT"
            }
        }))

        success, _, error = await service.edit_image("BBBB", "image/png", "x")

        assert success is False
        assert error == INVALID_API_KEY_MESSAGE
        assert "Please pass a valid API key" not in error

    async def test_service_error_includes_original_message(self):
        service = make_service(lambda request: httpx.Response(500, json={
            "error": {"code": 500, "message": "Internal error encountered.", "status": "INTERNAL"}
        }))

        success, _, error = await service.edit_image("BBBB", "image/png", "x")

        assert success is False
        assert error == "Failed to edit image: Internal error encountered."

    async def test_transport_error_includes_original_message(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        success, _, error = await make_service(handler).edit_image("BBBB", "image/png", "x")

        assert success is False
        assert error == "Failed to edit image: connection refused"

    async def test_error_without_message_is_unknown(self):
        def handler(request):
            raise httpx.ConnectError("", request=request)

        success, _, error = await make_service(handler).edit_image("BBBB", "image/png", "x")

        assert success is False
        assert error == UNKNOWN_ERROR_MESSAGE

    async def test_missing_api_key_makes_no_request(self):
        requests = []

        def handler(request):
            requests.append(request)
            return image_response({"inlineData": {"mimeType": "image/png", "data": "AAAA"}})

        service = make_service(handler, api_key="")
        success, _, error = await service.edit_image("BBBB", "image/png", "x")

        assert success is False
        assert error == INVALID_API_KEY_MESSAGE
        assert requests == []
        assert service.is_configured() is False
