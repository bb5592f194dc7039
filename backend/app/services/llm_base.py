"""
Gebeta Backend: Abstract Assistant Interface
============================================

What:  Contract for the campus food assistant behind POST /api/chat.
Why:   The chat route depends on this interface only, so the provider can be
       swapped (or replaced by a stub in tests) without touching the route.
How:   Concrete implementations inherit from AssistantService and implement
       reply() and health_check().
"""

from abc import ABC, abstractmethod
from typing import Sequence

from app.schemas.business import BusinessResponse
from app.schemas.chat import ChatMessage


class AssistantService(ABC):
    """
    Contract:
        - reply() makes a single provider call; there is no retry
        - provider errors, timeouts and a missing API key surface as
          LLMServiceError (503)
        - `catalogue` is the current business list, used as grounding context

    Implementations:
        - GeminiAssistant: Google Gemini via google-generativeai
    """

    @property
    @abstractmethod
    def enabled(self) -> bool:
        """True when the provider is configured (API key present)."""
        ...

    @abstractmethod
    async def reply(
        self,
        message: str,
        history: Sequence[ChatMessage],
        catalogue: Sequence[BusinessResponse],
    ) -> str:
        """
        Answer one user message.

        Args:
            message: the new user question
            history: earlier turns, oldest first
            catalogue: businesses the answer may recommend

        Returns:
            The assistant's reply text, never empty.

        Raises:
            LLMServiceError: not configured, provider failed or timed out
        """
        ...

    @abstractmethod
    async def health_check(self) -> bool:
        """Lightweight reachability check; does not consume generation quota."""
        ...
