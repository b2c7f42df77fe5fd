import logging
import uuid

from sqlmodel import Session, col, select

from zoba.catalog import all_templates
from zoba.errors import ConflictError, NotFoundError
from zoba.models import (
    Diagram,
    DiagramCreate,
    DiagramUpdate,
    Template,
    get_datetime_utc,
)

logger = logging.getLogger(__name__)


def get_diagram_by_code(*, session: Session, code: str) -> Diagram | None:
    statement = select(Diagram).where(Diagram.code == code)
    return session.exec(statement).first()


def remove_duplicate_diagrams(*, session: Session) -> int:
    """Delete every diagram whose code also belongs to a more recently created one."""
    statement = select(Diagram).order_by(col(Diagram.created_at).desc())
    seen: set[str] = set()
    removed = 0
    for diagram in session.exec(statement).all():
        if diagram.code in seen:
            session.delete(diagram)
            removed += 1
            continue
        seen.add(diagram.code)
    if removed:
        session.commit()
        logger.info("Removed %s duplicate diagram(s)", removed)
    return removed


def list_diagrams(*, session: Session) -> list[Diagram]:
    remove_duplicate_diagrams(session=session)
    statement = select(Diagram).order_by(col(Diagram.updated_at).desc())
    return list(session.exec(statement).all())


def create_diagram(*, session: Session, diagram_in: DiagramCreate) -> Diagram:
    # Check-then-insert is not atomic; concurrent identical saves can both land
    # and are cleaned up by the next list_diagrams().
    existing = get_diagram_by_code(session=session, code=diagram_in.code)
    if existing:
        raise ConflictError(existing_id=str(existing.id))
    db_diagram = Diagram.model_validate(diagram_in)
    session.add(db_diagram)
    session.commit()
    session.refresh(db_diagram)
    return db_diagram


def update_diagram(*, session: Session, diagram_id: uuid.UUID, diagram_in: DiagramUpdate) -> Diagram:
    db_diagram = session.get(Diagram, diagram_id)
    if not db_diagram:
        raise NotFoundError("Diagram", str(diagram_id))
    existing = get_diagram_by_code(session=session, code=diagram_in.code)
    if existing and existing.id != db_diagram.id:
        raise ConflictError(existing_id=str(existing.id))
    db_diagram.sqlmodel_update(
        diagram_in.model_dump(),
        update={"updated_at": get_datetime_utc()},
    )
    session.add(db_diagram)
    session.commit()
    session.refresh(db_diagram)
    return db_diagram


def delete_diagram(*, session: Session, diagram_id: uuid.UUID) -> None:
    db_diagram = session.get(Diagram, diagram_id)
    if not db_diagram:
        raise NotFoundError("Diagram", str(diagram_id))
    session.delete(db_diagram)
    session.commit()


def get_diagram(*, session: Session, diagram_id: uuid.UUID) -> Diagram:
    db_diagram = session.get(Diagram, diagram_id)
    if not db_diagram:
        raise NotFoundError("Diagram", str(diagram_id))
    return db_diagram


def list_templates(*, session: Session) -> list[Template]:
    return list(session.exec(select(Template)).all())


def _insert_catalog(session: Session) -> int:
    templates = [Template.model_validate(template) for template in all_templates()]
    session.add_all(templates)
    session.commit()
    return len(templates)


def seed_templates(*, session: Session) -> bool:
    """Insert the built-in catalog when the collection is empty. Returns True if seeded."""
    if session.exec(select(Template)).first() is not None:
        return False
    count = _insert_catalog(session)
    logger.info("Seeded %s templates", count)
    return True


def reset_templates(*, session: Session) -> int:
    for template in session.exec(select(Template)).all():
        session.delete(template)
    session.commit()
    count = _insert_catalog(session)
    logger.info("Reset template collection with %s templates", count)
    return count
