from dataclasses import dataclass
from typing import Any

from app.exceptions import PrerequisiteMissingError
from app.utils import get_by_path


@dataclass(frozen=True)
class LookupKey:
    """
    How to find the external id of a source record: either the id itself, or a dotted path to
    the id inside the record (e.g. `result.instance.requestor.reference`).
    """

    external_id: str | None = None
    path: str | None = None

    def __post_init__(self) -> None:
        if (self.external_id is None) == (self.path is None):
            raise ValueError("A lookup key needs either an external_id or a path")

    @classmethod
    def by_id(cls, external_id: str) -> "LookupKey":
        return cls(external_id=external_id)

    @classmethod
    def by_path(cls, path: str) -> "LookupKey":
        return cls(path=path)

    def resolve(self, record: dict[str, Any]) -> str:
        if self.external_id is not None:
            return self.external_id

        value = get_by_path(record, self.path or "")
        if value is None or value == "":
            raise PrerequisiteMissingError(f"Could not find the source id at {self.path} in the record")

        return str(value)
