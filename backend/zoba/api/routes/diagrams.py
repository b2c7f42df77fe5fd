import logging
import re
import uuid
from pathlib import PurePath
from typing import Any

from fastapi import APIRouter, File, Form, HTTPException, Response, UploadFile, status
from fastapi.responses import PlainTextResponse

from zoba import crud
from zoba.agent.extraction import detect_diagram_type
from zoba.api.deps import SessionDep
from zoba.errors import ConflictError, NotFoundError
from zoba.models import DiagramCreate, DiagramPublic, DiagramUpdate

router = APIRouter()
logger = logging.getLogger(__name__)


def export_filename(name: str) -> str:
    slug = re.sub(r"\s+", "-", (name or "").strip()).lower()
    slug = re.sub(r"[^a-z0-9._-]", "", slug) or "diagram"
    return f"{slug}.mmd"


@router.get("/", response_model=list[DiagramPublic])
def read_diagrams(session: SessionDep) -> Any:
    """
    List diagrams, newest update first. Duplicate codes are pruned first,
    keeping the most recently created copy.
    """
    return crud.list_diagrams(session=session)


@router.post("/", response_model=DiagramPublic)
def create_diagram(*, session: SessionDep, diagram_in: DiagramCreate) -> Any:
    try:
        return crud.create_diagram(session=session, diagram_in=diagram_in)
    except ConflictError as e:
        raise HTTPException(status_code=400, detail=e.message)


@router.post("/import", response_model=DiagramPublic)
async def import_diagram(
    *,
    session: SessionDep,
    file: UploadFile = File(...),
    name: str | None = Form(default=None),
    type: str | None = Form(default=None),
) -> Any:
    """Save an uploaded .mmd text file as a new diagram."""
    content = await file.read()
    try:
        code = content.decode("utf-8").strip()
    except UnicodeDecodeError:
        raise HTTPException(status_code=400, detail="Diagram file must be UTF-8 text")
    if not code:
        raise HTTPException(status_code=400, detail="Diagram file is empty")

    diagram_in = DiagramCreate(
        name=name or PurePath(file.filename or "Imported diagram").stem or "Imported diagram",
        code=code,
        type=type or detect_diagram_type(code) or "flowchart",
    )
    try:
        return crud.create_diagram(session=session, diagram_in=diagram_in)
    except ConflictError as e:
        raise HTTPException(status_code=400, detail=e.message)


@router.put("/{id}", response_model=DiagramPublic)
def update_diagram(*, session: SessionDep, id: uuid.UUID, diagram_in: DiagramUpdate) -> Any:
    try:
        return crud.update_diagram(session=session, diagram_id=id, diagram_in=diagram_in)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)
    except ConflictError as e:
        raise HTTPException(status_code=400, detail=e.message)


@router.delete("/{id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_diagram(session: SessionDep, id: uuid.UUID) -> Response:
    try:
        crud.delete_diagram(session=session, diagram_id=id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)
    logger.info("Deleted diagram %s", id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/{id}/export", response_class=PlainTextResponse)
def export_diagram(session: SessionDep, id: uuid.UUID) -> Any:
    try:
        diagram = crud.get_diagram(session=session, diagram_id=id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)
    return PlainTextResponse(
        diagram.code,
        headers={"Content-Disposition": f'attachment; filename="{export_filename(diagram.name)}"'},
    )
