"""Operation model for a single deferred call inside a batch."""

from __future__ import annotations

import re
from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator

# Matches the API root version segment, e.g. /3.0, /v2 or /1.1.2
API_VERSION_SEGMENT = re.compile(r"/(?:\d+\.\d+(?:\.\d+)*|v\d+(?:\.\d+)*)(?=/|$)")


class HttpMethod(StrEnum):
    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    PATCH = "PATCH"
    DELETE = "DELETE"


class Operation(BaseModel):
    """One HTTP call recorded for bulk submission."""

    model_config = ConfigDict(frozen=True)

    method: HttpMethod
    path: str
    params: dict[str, str] | None = None
    body: str | None = None
    operation_id: str | None = None

    @field_validator("method", mode="before")
    @classmethod
    def normalize_method(cls, value: Any) -> Any:
        """Accept lowercase verbs."""
        if isinstance(value, str):
            return value.upper()
        return value

    @field_validator("path")
    @classmethod
    def validate_path(cls, value: str) -> str:
        """Path must be server-relative and must not start with an API version segment."""
        if not value.startswith("/"):
            msg = "path must start with '/'"
            raise ValueError(msg)
        if API_VERSION_SEGMENT.match(value):
            msg = "path must not start with the API version segment"
            raise ValueError(msg)
        return value

    @field_validator("params")
    @classmethod
    def validate_params(cls, value: dict[str, str] | None) -> dict[str, str] | None:
        """An empty mapping is stored as absent."""
        if not value:
            return None
        return value

    def to_payload(self) -> dict[str, Any]:
        """Wire representation with absent fields omitted."""
        return self.model_dump(mode="json", exclude_none=True)
