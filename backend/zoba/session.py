"""
Editor session: owns the chat transcript and the current diagram source, and
applies assistant results to them.

Every failure from the gateway or the renderer is turned into a transcript
message here; nothing escapes to the caller except `RenderUnavailable`.
"""

import logging
import time
from collections.abc import Awaitable, Callable

from zoba.agent.artifacts import (
    HOUSE_STYLE_GUIDE,
    AssistantRequest,
    AssistantResult,
    ConversationMessage,
    StyleGuide,
)
from zoba.agent.fix_agent import build_fix_prompt
from zoba.agent.gateway import run_assistant
from zoba.agent.prompts.assistant import format_palette
from zoba.canvas.config import CanvasConfig
from zoba.canvas.render import DiagramRenderer, RenderResult, RenderSyntaxError, StructuralRenderer
from zoba.errors import FixAttemptsExceeded, GenerationFailed

logger = logging.getLogger(__name__)

GENERATION_APOLOGY = "Sorry, I encountered an error while processing your request."
FIX_APOLOGY = "Sorry, I encountered an error while trying to fix the syntax."

Gateway = Callable[[AssistantRequest], Awaitable[AssistantResult]]


def _styling_hint(style_guide: StyleGuide) -> str:
    return (
        "\n\nPlease include node styling using the ZOBA color scheme. You can use these colors:\n"
        f"{format_palette(style_guide)}\n"
        "Use style statements like this:\n"
        "style NodeName fill:#color,stroke:#color,stroke-width:2px"
    )


class Transcript:
    """Append-only list of conversation messages with strictly increasing timestamps."""

    def __init__(self) -> None:
        self._messages: list[ConversationMessage] = []
        self._last_timestamp = 0

    def append(self, role: str, content: str, attached_diagram_source: str | None = None) -> ConversationMessage:
        timestamp = max(time.monotonic_ns(), self._last_timestamp + 1)
        message = ConversationMessage(
            role=role,
            content=content,
            timestamp=timestamp,
            attached_diagram_source=attached_diagram_source,
        )
        self._last_timestamp = timestamp
        self._messages.append(message)
        return message

    @property
    def messages(self) -> tuple[ConversationMessage, ...]:
        return tuple(self._messages)

    def __len__(self) -> int:
        return len(self._messages)


class EditorSession:
    def __init__(
        self,
        diagram_source: str = "",
        *,
        renderer: DiagramRenderer | None = None,
        canvas_config: CanvasConfig | None = None,
        gateway: Gateway = run_assistant,
        style_guide: StyleGuide = HOUSE_STYLE_GUIDE,
    ):
        self.diagram_source = diagram_source
        self.renderer = renderer or StructuralRenderer()
        self.canvas_config = canvas_config or CanvasConfig()
        self.gateway = gateway
        self.style_guide = style_guide
        self.transcript = Transcript()
        self.syntax_error: str | None = None
        self.fix_attempts = 0

    def apply_source(self, source: str) -> None:
        # A reported error only describes the source it was rendered from.
        if source != self.diagram_source:
            self.fix_attempts = 0
            self.syntax_error = None
        self.diagram_source = source

    async def render(self) -> RenderResult:
        result = await self.renderer.render(self.diagram_source, self.canvas_config)
        self.syntax_error = result.message if isinstance(result, RenderSyntaxError) else None
        return result

    async def submit_prompt(self, prompt: str) -> ConversationMessage | None:
        if not prompt.strip():
            return None

        history = list(self.transcript.messages)
        self.transcript.append("user", prompt)
        request = AssistantRequest(
            user_prompt=prompt + _styling_hint(self.style_guide),
            current_diagram_source=self.diagram_source,
            conversation_history=history,
            style_guide=self.style_guide,
        )
        try:
            result = await self.gateway(request)
        except GenerationFailed as e:
            logger.warning("Assistant request failed: %s", e.message)
            return self.transcript.append("assistant", GENERATION_APOLOGY)

        self.apply_source(result.extracted_diagram_source)
        return self.transcript.append(
            "assistant",
            result.explanation_text,
            attached_diagram_source=result.extracted_diagram_source,
        )

    async def fix_syntax(self) -> ConversationMessage | None:
        if not self.diagram_source or not self.syntax_error:
            return None

        request = AssistantRequest(
            user_prompt=build_fix_prompt(self.syntax_error, self.diagram_source),
            current_diagram_source=self.diagram_source,
            conversation_history=list(self.transcript.messages),
            is_fix_request=True,
            error_description=self.syntax_error,
            style_guide=self.style_guide,
            fix_attempt=self.fix_attempts + 1,
        )
        try:
            result = await self.gateway(request)
        except FixAttemptsExceeded as e:
            return self.transcript.append("assistant", e.message)
        except GenerationFailed as e:
            logger.warning("Syntax fix failed: %s", e.message)
            return self.transcript.append("assistant", FIX_APOLOGY)

        attempts = self.fix_attempts + 1
        self.apply_source(result.extracted_diagram_source)
        # Counts towards the bound until the user changes the source.
        self.fix_attempts = attempts
        self.syntax_error = None
        return self.transcript.append(
            "assistant",
            "I fixed the syntax error in your diagram. Here's the corrected code:\n"
            f"```mermaid\n{result.extracted_diagram_source}\n```",
            attached_diagram_source=result.extracted_diagram_source,
        )

    def restore(self, message: ConversationMessage) -> bool:
        """Re-apply the diagram attached to an earlier transcript message."""
        if not message.attached_diagram_source:
            return False
        self.apply_source(message.attached_diagram_source)
        return True
