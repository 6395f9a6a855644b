"""
Available fixtures:

- **`LocalBase`**: the declarative `Base`; mappers and metadata are cleared
  after the test.
- **`local_config`**: a fresh `Config` installed as the process-wide one for
  the duration of the test.
- **`User`**: a model with the `dumb`, `active` and `smart` boolean
  attributes.
- **`session`**: a session bound to an in-memory SQLite database that holds
  the tables of `LocalBase`.
- **`smart_user`**, **`dumb_user`**: factories for unsaved `User` records.
"""

from typing import Optional

import pytest
from sqlalchemy import Boolean, Integer, String, create_engine
from sqlalchemy.orm import Mapped, Session, clear_mappers, mapped_column

import booleanize_al.config as config_module
from booleanize_al.base import Base
from booleanize_al.config import Config


@pytest.fixture
def LocalBase():
    """The shared `Base`; models declared by the test are unmapped and their
    tables dropped from the metadata when it ends.
    """
    yield Base
    clear_mappers()
    Base.metadata.clear()


@pytest.fixture
def local_config(monkeypatch):
    """Isolate the process-wide default texts."""
    config = Config()
    monkeypatch.setattr(config_module, "default_config", config)
    yield config


@pytest.fixture
def User(LocalBase, local_config):
    class User(LocalBase):
        __tablename__ = "users"
        __booleanize__ = [
            ("dumb", "Dumb as hell!", "No, this is a smart one!"),
            "active",
            ("smart", "Yes!", "No, very dumb"),
        ]

        id: Mapped[int] = mapped_column(Integer, primary_key=True)
        name: Mapped[Optional[str]] = mapped_column(String, nullable=True)
        smart: Mapped[Optional[bool]] = mapped_column(Boolean, nullable=True)
        active: Mapped[Optional[bool]] = mapped_column(
            Boolean, nullable=True
        )
        dumb: Mapped[Optional[bool]] = mapped_column(Boolean, nullable=True)
        deleted: Mapped[Optional[bool]] = mapped_column(
            Boolean, nullable=True
        )

    yield User


@pytest.fixture
def session(LocalBase, User):
    engine = create_engine("sqlite:///:memory:")
    LocalBase.metadata.create_all(bind=engine)
    with Session(engine) as s:
        yield s
    engine.dispose()


@pytest.fixture
def smart_user(User):
    def factory():
        return User(name="Smart Dude", active=True, dumb=False, smart=True)

    return factory


@pytest.fixture
def dumb_user(User):
    def factory():
        return User(name="Dumb Dude", active=True, dumb=True, smart=False)

    return factory
