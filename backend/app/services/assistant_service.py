"""
Gebeta Backend: Google Gemini Assistant
=======================================

What:  Concrete AssistantService that answers campus food questions with
       Google Gemini.
How:   A campus-food system instruction, the current business catalogue as
       grounding context, the conversation history, then the new question.
       One call per request with the configured timeout.
Who:   Instantiated once at import; called by the chat route handler.

Failure modes (all → LLMServiceError, HTTP 503):
    - GEMINI_API_KEY not set
    - SDK/network error or timeout
    - empty or blocked response
"""

import asyncio
import logging
import time
import uuid
from typing import Any, Dict, List, Optional, Sequence

import google.generativeai as genai

from app.config import settings
from app.exceptions import LLMServiceError
from app.schemas.business import BusinessResponse
from app.schemas.chat import ChatMessage
from app.services.llm_base import AssistantService

logger = logging.getLogger(__name__)

# Upper bound on businesses rendered into the prompt
MAX_CATALOGUE_ENTRIES = 50
HEALTH_CHECK_TIMEOUT = 5


class GeminiAssistant(AssistantService):

    SYSTEM_PROMPT = """You are Gebeta, a friendly assistant helping university students find food
on and around campus.

Rules:
1. Recommend only places listed in the catalogue you are given
2. Mention the place name, its category (on-campus, off-campus, delivery) and
   rating when you recommend it
3. Prices are in Ethiopian Birr (ETB) unless stated otherwise
4. If nothing in the catalogue fits, say so plainly instead of inventing a place
5. Keep answers short: a few sentences or a brief list"""

    def __init__(
        self,
        api_key: Optional[str] = None,
        model_name: Optional[str] = None,
        timeout: Optional[int] = None,
    ):
        self.api_key = settings.gemini_api_key if api_key is None else api_key
        self.model_name = model_name or settings.gemini_model
        self.timeout = timeout or settings.assistant_timeout
        self.model = None

        if self.enabled:
            genai.configure(api_key=self.api_key)
            self.model = genai.GenerativeModel(
                self.model_name,
                system_instruction=self.SYSTEM_PROMPT,
            )
            logger.info("GeminiAssistant initialized with model=%s", self.model_name)
        else:
            logger.info("GeminiAssistant disabled: GEMINI_API_KEY is not set")

    @property
    def enabled(self) -> bool:
        return bool(self.api_key) and self.api_key != "your_gemini_api_key_here"

    async def reply(
        self,
        message: str,
        history: Sequence[ChatMessage],
        catalogue: Sequence[BusinessResponse],
    ) -> str:
        if self.model is None:
            raise LLMServiceError(
                message="The food assistant is not configured on this server.",
            )

        # Short id to correlate the log lines of one call
        call_id = str(uuid.uuid4())[:8]
        contents = self.build_contents(message, history, catalogue)
        start_time = time.time()

        try:
            response = await self.model.generate_content_async(
                contents,
                request_options={"timeout": self.timeout},
            )
            text = (response.text or "").strip()
        except Exception as e:
            duration_ms = (time.time() - start_time) * 1000
            logger.error(
                "[%s] Gemini call failed after %.0fms: %s",
                call_id,
                duration_ms,
                str(e),
                exc_info=True,
            )
            raise LLMServiceError(
                context={"call_id": call_id, "error_type": type(e).__name__},
            ) from e

        if not text:
            logger.warning("[%s] Gemini returned an empty reply", call_id)
            raise LLMServiceError(
                message="The food assistant could not answer that. Try rephrasing.",
                context={"call_id": call_id},
            )

        logger.info(
            "[%s] Gemini reply in %.0fms, %d chars",
            call_id,
            (time.time() - start_time) * 1000,
            len(text),
        )
        return text

    def build_contents(
        self,
        message: str,
        history: Sequence[ChatMessage],
        catalogue: Sequence[BusinessResponse],
    ) -> List[Dict[str, Any]]:
        # Gemini calls the assistant role "model"
        contents = [
            {"role": "user" if turn.role == "user" else "model", "parts": [turn.content]}
            for turn in history
        ]
        prompt = f"{self.render_catalogue(catalogue)}\n\nQuestion: {message}"
        contents.append({"role": "user", "parts": [prompt]})
        return contents

    @staticmethod
    def render_catalogue(catalogue: Sequence[BusinessResponse]) -> str:
        if not catalogue:
            return "Catalogue: (no businesses are listed yet)"

        lines = ["Catalogue:"]
        for business in catalogue[:MAX_CATALOGUE_ENTRIES]:
            line = f"- {business.name} ({business.category}"
            if business.rating.count:
                line += f", rated {business.rating.average:.1f}/5"
            line += ")"
            address = (business.location or {}).get("address")
            if address:
                line += f" at {address}"
            if business.description:
                line += f": {business.description}"
            lines.append(line)
        return "\n".join(lines)

    async def health_check(self) -> bool:
        """Looks up the configured model; no generation quota is spent."""
        if not self.enabled:
            return False
        try:
            # The SDK lookup is synchronous; keep it off the event loop
            await asyncio.to_thread(
                genai.get_model,
                f"models/{self.model_name}",
                request_options={"timeout": HEALTH_CHECK_TIMEOUT},
            )
            return True
        except Exception as e:
            logger.warning("Gemini health check failed: %s", str(e))
            return False


assistant_service = GeminiAssistant()
