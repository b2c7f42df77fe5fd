from typing import Any

from fastapi import APIRouter

from zoba import crud
from zoba.api.deps import SessionDep
from zoba.models import Message, TemplatePublic

router = APIRouter()


@router.get("/", response_model=list[TemplatePublic])
def read_templates(session: SessionDep) -> Any:
    return crud.list_templates(session=session)


@router.post("/", response_model=Message)
def seed_templates(session: SessionDep) -> Any:
    """
    Insert the built-in templates if the collection is empty. Safe to call repeatedly.
    """
    if crud.seed_templates(session=session):
        return Message(message="Templates initialized successfully")
    return Message(message="Templates already exist")


@router.delete("/", response_model=Message)
def reset_templates(session: SessionDep) -> Any:
    """
    Drop every template and reseed the built-in catalog.
    """
    crud.reset_templates(session=session)
    return Message(message="Templates collection reset successfully")
