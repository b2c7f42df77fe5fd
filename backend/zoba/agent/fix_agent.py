import logging

from zoba.agent.artifacts import AssistantRequest, AssistantResult
from zoba.agent.assistant_agent import AssistantAgent
from zoba.agent.extraction import detect_diagram_type
from zoba.agent.prompts.assistant import FIX_SYSTEM_PROMPT, STYLING_SYNTAX, format_palette
from zoba.core.config import settings
from zoba.errors import FixAttemptsExceeded

logger = logging.getLogger(__name__)


def build_fix_prompt(error_description: str, current_code: str) -> str:
    return (
        f"Fix this Mermaid syntax error: {error_description}\n"
        f"Here's the code:\n{current_code}\n\n"
        "Please preserve any existing node styling and ensure it follows the ZOBA color scheme."
    )


class SyntaxFixAgent(AssistantAgent):
    """
    Assistant specialization for diagrams the renderer rejected. Runs once per
    request; the caller decides whether to ask again, up to `max_attempts`.
    """

    def __init__(self, model_name: str | None = None, llm=None, max_attempts: int | None = None):
        super().__init__(model_name=model_name, llm=llm)
        self.max_attempts = max_attempts or settings.MAX_FIX_ATTEMPTS

    def get_system_prompt(self, input_data: AssistantRequest) -> str:
        return FIX_SYSTEM_PROMPT.format(
            current_code=input_data.current_diagram_source,
            error_description=input_data.error_description,
            styling_syntax=STYLING_SYNTAX,
            palette=format_palette(input_data.style_guide),
        )

    async def run(self, input_data: AssistantRequest) -> AssistantResult:
        error_description = (input_data.error_description or "").strip()
        if not error_description:
            raise ValueError("A syntax fix needs the renderer's error description.")
        if input_data.fix_attempt > self.max_attempts:
            raise FixAttemptsExceeded(input_data.fix_attempt, self.max_attempts)

        logger.info(
            "Requesting syntax fix (attempt %s/%s): %s",
            input_data.fix_attempt,
            self.max_attempts,
            error_description,
        )
        result = await super().run(
            input_data.model_copy(update={"is_fix_request": True, "error_description": error_description})
        )
        if detect_diagram_type(result.extracted_diagram_source) is None:
            logger.warning("Syntax fix reply still lacks a diagram type declaration.")
        return result
