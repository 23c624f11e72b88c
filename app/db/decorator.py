from typing import Any, Callable, Type, TypeVar

from app.db.entities.base import Base

T = TypeVar("T")

# Maps an entity class to the repository class that manages it
repository_registry: dict[Type[Base], Type[Any]] = {}


def repository(model_class: Type[Base]) -> Callable[[Type[T]], Type[T]]:
    def decorator(repo_class: Type[T]) -> Type[T]:
        repository_registry[model_class] = repo_class
        return repo_class

    return decorator
