from collections.abc import Generator
from typing import Annotated

from fastapi import Depends
from sqlmodel import Session

from zoba.agent.llm_client import LLMClient
from zoba.canvas.render import DiagramRenderer, get_renderer
from zoba.core.db import engine


def get_db() -> Generator[Session, None, None]:
    with Session(engine) as session:
        yield session


def get_llm_client() -> LLMClient:
    return LLMClient()


SessionDep = Annotated[Session, Depends(get_db)]
LLMClientDep = Annotated[LLMClient, Depends(get_llm_client)]
RendererDep = Annotated[DiagramRenderer, Depends(get_renderer)]
