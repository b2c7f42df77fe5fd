import logging

from zoba.agent.artifacts import AssistantRequest, AssistantResult
from zoba.agent.base import BaseAgent
from zoba.agent.extraction import extract_diagram_source
from zoba.agent.prompts.assistant import (
    ASSISTANT_SYSTEM_PROMPT,
    OUT_OF_SCOPE_REPLY,
    STYLING_SYNTAX,
    format_palette,
)

logger = logging.getLogger(__name__)


class AssistantAgent(BaseAgent[AssistantRequest, AssistantResult]):
    """
    Turns a natural-language diagram request into an explanation plus a
    complete, directly renderable Mermaid source. Stateless: the caller
    supplies the full conversation history on every call.
    """

    def get_system_prompt(self, input_data: AssistantRequest) -> str:
        return ASSISTANT_SYSTEM_PROMPT.format(
            current_code=input_data.current_diagram_source,
            out_of_scope_reply=OUT_OF_SCOPE_REPLY,
            styling_syntax=STYLING_SYNTAX,
            palette=format_palette(input_data.style_guide),
            primary=input_data.style_guide.primary,
            dark=input_data.style_guide.dark,
        )

    @staticmethod
    def build_messages(input_data: AssistantRequest) -> list[dict[str, str]]:
        messages = [
            {"role": message.role, "content": message.content}
            for message in input_data.conversation_history
        ]
        messages.append({"role": "user", "content": input_data.user_prompt})
        return messages

    async def run(self, input_data: AssistantRequest) -> AssistantResult:
        reply = await self.complete(self.get_system_prompt(input_data), self.build_messages(input_data))

        extracted = extract_diagram_source(reply)
        if extracted is None:
            logger.info("Assistant reply carried no mermaid block; keeping the current diagram.")
            extracted = input_data.current_diagram_source

        return AssistantResult(explanation_text=reply, extracted_diagram_source=extracted)
