import logging
from collections.abc import Sequence

from openai import AsyncOpenAI

from zoba.core.config import settings

logger = logging.getLogger(__name__)


class LLMClient:
    """Provider-agnostic chat completion client over the OpenAI chat completions API."""

    def __init__(
        self,
        model_name: str | None = None,
        base_url: str | None = None,
        api_key: str | None = None,
        timeout: float | None = None,
    ):
        self.model_name = model_name or settings.MODEL_DEFAULT

        # The SDK rejects an empty key at construction; requests then fail at call time instead.
        resolved_api_key = api_key or settings.LLM_API_KEY or "missing-api-key"
        resolved_base_url = base_url or settings.LLM_BASE_URL

        self.client = AsyncOpenAI(
            base_url=resolved_base_url,
            api_key=resolved_api_key,
            timeout=timeout or settings.LLM_TIMEOUT_SECONDS,
            # Failures are reported to the user; the SDK must not retry behind our back.
            max_retries=0,
        )

    def _chat_completion_kwargs(self, *, temperature: float | None, max_tokens: int | None) -> dict:
        """Build provider/model-compatible kwargs for chat completions."""
        kwargs: dict = {}
        model_name = (self.model_name or "").lower()
        if max_tokens is not None:
            # Reasoning models only accept the newer token ceiling parameter.
            if model_name.startswith(("gpt-5", "o1", "o3", "o4")):
                kwargs["max_completion_tokens"] = max_tokens
            else:
                kwargs["max_tokens"] = max_tokens
        # GPT-5 family rejects non-default temperature values in some OpenAI endpoints.
        if temperature is not None and not model_name.startswith("gpt-5"):
            kwargs["temperature"] = temperature
        return kwargs

    async def generate_chat(
        self,
        system_prompt: str,
        messages: Sequence[dict[str, str]],
        *,
        temperature: float | None = None,
        max_tokens: int | None = None,
    ) -> str:
        """
        Send the system prompt followed by role/content messages and return the reply text.
        Raises ValueError when the provider answers with no usable content.
        """
        logger.info(
            "Issuing chat request to model %s with %s message(s)...",
            self.model_name,
            len(messages),
        )
        try:
            response = await self.client.chat.completions.create(
                model=self.model_name,
                messages=[{"role": "system", "content": system_prompt}, *messages],
                **self._chat_completion_kwargs(temperature=temperature, max_tokens=max_tokens),
            )
        except Exception as e:
            logger.error("Error calling LLM provider %s: %s", self.model_name, e)
            raise

        if getattr(response, "choices", None) is None:
            logger.error("Received invalid response structure from %s: %s", self.model_name, response)
            raise ValueError(f"Provider {self.model_name} returned an invalid response.")

        if len(response.choices) == 0:
            logger.error("Received 0 choices from %s: %s", self.model_name, response)
            raise ValueError(f"Provider {self.model_name} returned no output.")

        text_response = (response.choices[0].message.content or "").strip()
        if not text_response:
            raise ValueError("Model returned empty content")

        logger.info("Successfully received chat response from %s.", self.model_name)
        return text_response
