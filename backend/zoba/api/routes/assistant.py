import logging

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from zoba.agent.artifacts import AssistantRequest, ConversationMessage, StyleGuide
from zoba.agent.gateway import run_assistant
from zoba.api.deps import LLMClientDep
from zoba.errors import FixAttemptsExceeded, GenerationFailed

router = APIRouter()
logger = logging.getLogger(__name__)


class StyleGuidePayload(BaseModel):
    colors: StyleGuide = Field(default_factory=StyleGuide)


class GenerateDiagramRequest(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    prompt: str = Field(min_length=1)
    messages: list[ConversationMessage] = Field(default_factory=list)
    current_code: str = ""
    is_fix_request: bool = False
    error_description: str | None = None
    style_guide: StyleGuidePayload | None = None
    fix_attempt: int = Field(default=1, ge=1)


class GenerateDiagramResponse(BaseModel):
    response: str
    code: str


@router.post("/", response_model=GenerateDiagramResponse)
async def generate_diagram(body: GenerateDiagramRequest, llm: LLMClientDep) -> GenerateDiagramResponse:
    """
    Ask the assistant to create or modify the current diagram, or to fix a
    syntax error when `isFixRequest` is set. `code` falls back to
    `currentCode` when the reply carries no mermaid block.
    """
    if body.is_fix_request and not (body.error_description or "").strip():
        raise HTTPException(status_code=422, detail="errorDescription is required for fix requests")

    request = AssistantRequest(
        user_prompt=body.prompt,
        current_diagram_source=body.current_code,
        conversation_history=body.messages,
        is_fix_request=body.is_fix_request,
        error_description=body.error_description,
        style_guide=body.style_guide.colors if body.style_guide else StyleGuide(),
        fix_attempt=body.fix_attempt,
    )
    try:
        result = await run_assistant(request, llm=llm)
    except FixAttemptsExceeded as e:
        raise HTTPException(status_code=400, detail=e.message)
    except GenerationFailed:
        raise HTTPException(status_code=500, detail="Failed to generate diagram")

    return GenerateDiagramResponse(
        response=result.explanation_text,
        code=result.extracted_diagram_source,
    )
