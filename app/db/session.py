from typing import Any, Type, TypeVar

from sqlalchemy import Engine
from sqlalchemy.orm import Session

from app.db.repositories.repository_base import RepositoryBase

T = TypeVar("T", bound=RepositoryBase)


class DbSession:
    def __init__(self, engine: Engine) -> None:
        self.session = Session(engine, expire_on_commit=False)

    def __enter__(self) -> "DbSession":
        return self

    def __exit__(self, exc_type: Any, exc_value: Any, traceback: Any) -> None:
        self.session.close()

    def get_repository(self, repository_class: Type[T]) -> T:
        return repository_class(self)

    def add(self, entry: Any) -> None:
        self.session.add(entry)

    def delete(self, entry: Any) -> None:
        self.session.delete(entry)

    def commit(self) -> None:
        self.session.commit()

    def rollback(self) -> None:
        self.session.rollback()
