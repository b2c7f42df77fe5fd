import logging
from abc import ABC, abstractmethod
from collections.abc import Sequence
from typing import Generic, TypeVar

from pydantic import BaseModel

from zoba.agent.llm_client import LLMClient
from zoba.core.config import settings
from zoba.errors import GenerationFailed

logger = logging.getLogger(__name__)

InType = TypeVar("InType", bound=BaseModel)
OutType = TypeVar("OutType", bound=BaseModel)


class BaseAgent(ABC, Generic[InType, OutType]):
    """Single-call chat agent. Subclasses format the prompt and interpret the reply."""

    def __init__(self, model_name: str | None = None, llm: LLMClient | None = None):
        self.llm = llm or LLMClient(model_name=model_name or settings.MODEL_DEFAULT)

    @abstractmethod
    async def run(self, input_data: InType) -> OutType:
        pass

    @abstractmethod
    def get_system_prompt(self, input_data: InType) -> str:
        pass

    async def complete(self, system_prompt: str, messages: Sequence[dict[str, str]]) -> str:
        """
        One completion call with the assistant's sampling settings. Any transport
        or provider failure, including an empty reply, surfaces as GenerationFailed.
        """
        try:
            return await self.llm.generate_chat(
                system_prompt=system_prompt,
                messages=messages,
                temperature=settings.ASSISTANT_TEMPERATURE,
                max_tokens=settings.ASSISTANT_MAX_TOKENS,
            )
        except Exception as e:
            logger.error("%s completion failed: %s", type(self).__name__, e)
            raise GenerationFailed(cause=e) from e
