from typing import Any, Literal

from pydantic import BaseModel, Field


class SourceDto(BaseModel):
    reference: str
    name: str = ""
    location: str
    authentication: Literal["none", "api_key"] = "none"
    api_interface_id: str | None = None
    api_key: str | None = None
    timeout: int = Field(default=10, gt=0)
    headers: dict[str, str] = Field(default_factory=dict)


class SchemaDto(BaseModel):
    reference: str
    name: str = ""
    required: list[str] = Field(default_factory=list)


class MappingDto(BaseModel):
    reference: str
    name: str = ""
    passthrough: bool = False
    mapping: dict[str, Any] = Field(default_factory=dict)
    unset: list[str] = Field(default_factory=list)
    cast: dict[str, str] = Field(default_factory=dict)


class ActionDto(BaseModel):
    reference: str
    name: str = ""
    handler: str
    listens: list[str] = Field(default_factory=list)
    conditions: dict[str, Any] = Field(default_factory=dict)
    configuration: dict[str, Any] = Field(default_factory=dict)
    priority: int = 0
    is_enabled: bool = True
