from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel, create_engine

from zoba.core.config import settings


def _engine_kwargs(url: str) -> dict:
    if not url.startswith("sqlite"):
        return {}
    kwargs: dict = {"connect_args": {"check_same_thread": False}}
    if ":memory:" in url or url.rstrip("/") == "sqlite:":
        kwargs["poolclass"] = StaticPool
    return kwargs


engine = create_engine(settings.DATABASE_URL, **_engine_kwargs(settings.DATABASE_URL))


def init_db(bind=None) -> None:
    # Tables are registered on import of the models module.
    import zoba.models  # noqa: F401

    SQLModel.metadata.create_all(bind or engine)
