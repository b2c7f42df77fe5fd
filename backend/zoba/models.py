import uuid
from datetime import datetime, timezone

from sqlalchemy import DateTime, Text
from sqlmodel import Field, SQLModel


def get_datetime_utc() -> datetime:
    return datetime.now(timezone.utc)


# Generic message
class Message(SQLModel):
    message: str


# Diagrams

class DiagramBase(SQLModel):
    name: str = Field(min_length=1, max_length=255)
    # Duplicate codes are rejected at write time, not by a constraint.
    code: str = Field(min_length=1, sa_type=Text, index=True)
    type: str = Field(default="flowchart", max_length=100)


class DiagramCreate(DiagramBase):
    pass


# Full overwrite only; every field is required
class DiagramUpdate(DiagramBase):
    pass


class Diagram(DiagramBase, table=True):
    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    created_at: datetime = Field(
        default_factory=get_datetime_utc,
        sa_type=DateTime(timezone=True),  # type: ignore
    )
    updated_at: datetime = Field(
        default_factory=get_datetime_utc,
        sa_type=DateTime(timezone=True),  # type: ignore
    )


class DiagramPublic(DiagramBase):
    id: uuid.UUID
    created_at: datetime
    updated_at: datetime


# Templates

class TemplateBase(SQLModel):
    name: str = Field(max_length=255)
    type: str = Field(max_length=100)
    code: str = Field(sa_type=Text)
    is_default: bool = False
    is_experimental: bool = False


class Template(TemplateBase, table=True):
    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)


class TemplatePublic(TemplateBase):
    id: uuid.UUID
