import uuid
from datetime import datetime, timedelta, timezone

import pytest

from zoba import crud
from zoba.errors import ConflictError, NotFoundError
from zoba.models import Diagram, DiagramCreate, DiagramUpdate

T0 = datetime(2025, 1, 1, tzinfo=timezone.utc)


def _insert(session, name, code, created_at):
    # Bypasses create_diagram to simulate concurrent saves that both landed.
    diagram = Diagram(name=name, code=code, created_at=created_at, updated_at=created_at)
    session.add(diagram)
    session.commit()
    session.refresh(diagram)
    return diagram


def test_list_removes_duplicates_keeping_most_recently_created(session):
    _insert(session, "old", "graph TD\nA-->B", T0)
    newest = _insert(session, "new", "graph TD\nA-->B", T0 + timedelta(minutes=5))
    _insert(session, "middle", "graph TD\nA-->B", T0 + timedelta(minutes=1))
    other = _insert(session, "other", "pie title x", T0 + timedelta(minutes=2))

    diagrams = crud.list_diagrams(session=session)

    assert [d.id for d in diagrams] == [newest.id, other.id]
    assert crud.remove_duplicate_diagrams(session=session) == 0


def test_create_conflict_names_existing_diagram(session):
    existing = crud.create_diagram(
        session=session, diagram_in=DiagramCreate(name="a", code="graph TD\nA-->B")
    )

    with pytest.raises(ConflictError) as exc_info:
        crud.create_diagram(session=session, diagram_in=DiagramCreate(name="b", code="graph TD\nA-->B"))

    assert exc_info.value.details == {"existing_id": str(existing.id)}


def test_update_bumps_updated_at(session):
    diagram = _insert(session, "a", "graph TD\nA-->B", T0)

    updated = crud.update_diagram(
        session=session,
        diagram_id=diagram.id,
        diagram_in=DiagramUpdate(name="b", code="graph TD\nA-->C", type="graph"),
    )

    assert updated.name == "b"
    assert updated.updated_at.replace(tzinfo=timezone.utc) > T0


def test_missing_diagram_raises_not_found(session):
    with pytest.raises(NotFoundError):
        crud.delete_diagram(session=session, diagram_id=uuid.uuid4())
    with pytest.raises(NotFoundError):
        crud.get_diagram(session=session, diagram_id=uuid.uuid4())


def test_seed_and_reset_templates(session):
    assert crud.seed_templates(session=session) is True
    assert crud.seed_templates(session=session) is False
    assert crud.reset_templates(session=session) == 13
    assert len(crud.list_templates(session=session)) == 13
