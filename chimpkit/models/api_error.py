"""Problem-detail error body returned by the Mailchimp API."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class FieldError(BaseModel):
    """A single field-level validation error."""

    field: str = ""
    message: str = ""


class ErrorBody(BaseModel):
    """Error document sent with every non-success response."""

    model_config = ConfigDict(extra="ignore")

    type: str = ""
    title: str = ""
    status: int = 0
    detail: str = ""
    instance: str = ""
    errors: list[FieldError] = []

    def __str__(self) -> str:
        text = f"{self.status} {self.title}".strip()
        if self.detail:
            text = f"{text}: {self.detail}"
        for err in self.errors:
            text += f" [{err.field}: {err.message}]"
        return text
