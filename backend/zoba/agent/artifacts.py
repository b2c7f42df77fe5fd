import time
from typing import Literal

from pydantic import AliasChoices, BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class PaletteColor(BaseModel):
    name: str
    hex: str
    role: str


class StyleGuide(BaseModel):
    """House colors suggested to the assistant for node and edge styling."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    primary: str = "#273469"
    secondary: str = "#E4D9FF"
    dark: str = "#1B264F"
    light: str = "#F5F5F5"

    def palette(self) -> list[PaletteColor]:
        return [
            PaletteColor(name="Delft Blue", hex=self.primary, role="primary elements"),
            PaletteColor(name="Periwinkle", hex=self.secondary, role="secondary elements"),
            PaletteColor(name="Space Cadet", hex=self.dark, role="dark elements"),
            PaletteColor(name="Ghost White", hex=self.light, role="light elements"),
        ]


HOUSE_STYLE_GUIDE = StyleGuide()


class ConversationMessage(BaseModel):
    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    role: Literal["user", "assistant"]
    content: str
    timestamp: int = Field(default_factory=time.monotonic_ns)
    attached_diagram_source: str | None = Field(
        default=None,
        validation_alias=AliasChoices("attachedDiagramSource", "attached_diagram_source", "renderedCode"),
        description="Diagram source the assistant produced with this message, if any.",
    )


class AssistantRequest(BaseModel):
    """Input to one Assistant Gateway call. All history is supplied by the caller."""
    user_prompt: str = Field(min_length=1)
    current_diagram_source: str = ""
    conversation_history: list[ConversationMessage] = Field(default_factory=list)
    is_fix_request: bool = False
    error_description: str | None = None
    style_guide: StyleGuide = Field(default_factory=StyleGuide)
    fix_attempt: int = Field(default=1, ge=1)


class AssistantResult(BaseModel):
    explanation_text: str
    extracted_diagram_source: str
