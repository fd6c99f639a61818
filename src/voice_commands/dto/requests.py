"""Request DTOs for the remote backend and the console API."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ProcessCommandRequest(BaseModel):
    """Body of ``POST process/``.

    Length rules are enforced by the pipeline's validation so that the
    Spanish messages reach the caller; the DTO only types the field.
    """

    text: str = Field(..., description="Natural-language command text")


class HistoryQuery(BaseModel):
    """Pagination parameters for ``GET history/``."""

    page: int = Field(1, description="1-based page number", ge=1)
    page_size: int | None = Field(
        None,
        description="Entries per page (defaults to settings.history_page_size)",
        ge=1,
        le=100,
    )


class SuggestionRequest(BaseModel):
    """Console request to run one of the offered suggestions."""

    name: str = Field(..., description="Suggested report name", min_length=1)


class LoginRequest(BaseModel):
    """Console request to store the backend auth token."""

    token: str = Field(..., description="Token sent as 'Authorization: Token <token>'", min_length=1)
    user: dict[str, Any] | None = Field(None, description="User profile returned by the backend login")


class ViewedProductRequest(BaseModel):
    """A product summary to put on the recently viewed list."""

    model_config = ConfigDict(extra="allow")

    id: int | str = Field(..., description="Product identifier")
