"""
Gebeta Backend: Food Assistant Tests
====================================

What:  GeminiAssistant with the SDK mocked out, and POST /api/chat end to end
       with the assistant patched.
"""

import uuid
from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from app.exceptions import LLMServiceError
from app.schemas.business import BusinessResponse
from app.schemas.chat import ChatMessage
from app.services.assistant_service import GeminiAssistant


def sample_business(**overrides):
    now = datetime.now(timezone.utc)
    fields = {
        "id": uuid.uuid4(),
        "name": "Burger Dash",
        "slug": "burger-dash",
        "category": "delivery",
        "description": "Fastest delivery to all dorms.",
        "location": {"address": "Off-campus HQ"},
        "rating": {"average": 4.8, "count": 500},
        "is_featured": True,
        "created_at": now,
        "updated_at": now,
        **overrides,
    }
    return BusinessResponse.model_validate(fields)


class TestGeminiAssistant:

    def setup_method(self):
        self.genai_patcher = patch("app.services.assistant_service.genai")
        self.mock_genai = self.genai_patcher.start()
        self.model = MagicMock()
        self.mock_genai.GenerativeModel.return_value = self.model
        self.assistant = GeminiAssistant(api_key="test-key", model_name="gemini-test", timeout=12)

    def teardown_method(self):
        self.genai_patcher.stop()

    def test_configures_sdk_with_system_prompt(self):
        self.mock_genai.configure.assert_called_once_with(api_key="test-key")
        args, kwargs = self.mock_genai.GenerativeModel.call_args
        assert args == ("gemini-test",)
        assert "campus" in kwargs["system_instruction"]
        assert self.assistant.enabled

    @pytest.mark.asyncio
    async def test_reply_strips_text_and_passes_timeout(self):
        self.model.generate_content_async = AsyncMock(
            return_value=MagicMock(text="  Try Burger Dash.  ")
        )

        reply = await self.assistant.reply("Something fast?", [], [sample_business()])

        assert reply == "Try Burger Dash."
        args, kwargs = self.model.generate_content_async.call_args
        assert kwargs["request_options"] == {"timeout": 12}
        prompt = args[0][-1]["parts"][0]
        assert "Burger Dash (delivery, rated 4.8/5) at Off-campus HQ" in prompt
        assert prompt.endswith("Question: Something fast?")

    @pytest.mark.asyncio
    async def test_sdk_failure_becomes_llm_error(self):
        self.model.generate_content_async = AsyncMock(side_effect=TimeoutError("deadline"))

        with pytest.raises(LLMServiceError) as exc_info:
            await self.assistant.reply("Hi", [], [])

        assert exc_info.value.status_code == 503
        assert exc_info.value.context["error_type"] == "TimeoutError"
        # Single attempt, no retry
        assert self.model.generate_content_async.await_count == 1

    @pytest.mark.asyncio
    async def test_empty_reply_becomes_llm_error(self):
        self.model.generate_content_async = AsyncMock(return_value=MagicMock(text="   "))
        with pytest.raises(LLMServiceError):
            await self.assistant.reply("Hi", [], [])

    def test_history_roles_mapped_for_gemini(self):
        history = [
            ChatMessage(role="user", content="Any vegetarian places?"),
            ChatMessage(role="assistant", content="Green Garden is vegetarian friendly."),
        ]
        contents = self.assistant.build_contents("Is it open late?", history, [])

        assert [c["role"] for c in contents] == ["user", "model", "user"]
        assert contents[1]["parts"] == ["Green Garden is vegetarian friendly."]

    def test_empty_catalogue_is_stated(self):
        assert "no businesses" in GeminiAssistant.render_catalogue([])

    def test_unrated_business_has_no_rating_text(self):
        text = GeminiAssistant.render_catalogue(
            [sample_business(rating={"average": 0.0, "count": 0}, location=None, description=None)]
        )
        assert text.splitlines()[1] == "- Burger Dash (delivery)"

    @pytest.mark.asyncio
    async def test_health_check_looks_up_configured_model(self):
        assert await self.assistant.health_check() is True
        args, kwargs = self.mock_genai.get_model.call_args
        assert args == ("models/gemini-test",)
        assert kwargs["request_options"] == {"timeout": 5}

    @pytest.mark.asyncio
    async def test_health_check_false_when_lookup_fails(self):
        self.mock_genai.get_model.side_effect = RuntimeError("403 API key invalid")
        assert await self.assistant.health_check() is False


class TestUnconfiguredAssistant:

    @pytest.mark.asyncio
    async def test_reply_without_key_raises(self):
        with patch("app.services.assistant_service.genai") as mock_genai:
            assistant = GeminiAssistant(api_key="")

            assert not assistant.enabled
            mock_genai.configure.assert_not_called()
            with pytest.raises(LLMServiceError):
                await assistant.reply("Hi", [], [])

    @pytest.mark.asyncio
    async def test_health_check_false_without_key(self):
        assistant = GeminiAssistant(api_key="")
        assert await assistant.health_check() is False


class TestChatEndpoint:

    @pytest.mark.asyncio
    async def test_unconfigured_assistant_returns_503(self, test_client):
        response = await test_client.post("/api/chat", json={"message": "Where can I eat?"})

        assert response.status_code == 503
        body = response.json()
        assert body["success"] is False
        assert body["error"] == "assistant_unavailable"

    @pytest.mark.asyncio
    async def test_reply_uses_catalogue(self, test_client, make_business):
        await make_business()
        with patch("app.routes.chat.assistant_service") as mock_assistant:
            mock_assistant.reply = AsyncMock(return_value="Try the Student Center Cafeteria.")

            response = await test_client.post(
                "/api/chat",
                json={
                    "message": "Cheap lunch on campus?",
                    "history": [{"role": "user", "content": "Hello"}],
                },
            )

        assert response.status_code == 200
        assert response.json()["data"] == {"reply": "Try the Student Center Cafeteria."}

        message, history, catalogue = mock_assistant.reply.call_args.args
        assert message == "Cheap lunch on campus?"
        assert history[0].content == "Hello"
        assert [b.name for b in catalogue] == ["Student Center Cafeteria"]

    @pytest.mark.asyncio
    async def test_missing_message_rejected(self, test_client):
        response = await test_client.post("/api/chat", json={"history": []})
        assert response.status_code == 400
