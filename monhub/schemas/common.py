from typing import Any, Literal, Optional
from pydantic import AliasChoices, BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class ApiModel(BaseModel):
    """Base for records mirrored from the marketplace API (camelCase JSON)."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )


def id_field(default: Any = ...) -> Any:
    """Mongo style `_id` with a plain `id` fallback."""
    return Field(default, validation_alias=AliasChoices("_id", "id"), serialization_alias="id")


class Toast(BaseModel):
    type: Literal["success", "error", "info", "warning"]
    message: str


class MutationResult(BaseModel):
    success: bool
    message: Optional[str] = None
    data: Optional[Any] = None
    toast: Optional[Toast] = None


class ActionResponse(BaseModel):
    """Outcome of a page action: what the UI should do next."""

    action: str
    toast: Optional[Toast] = None
    error: Optional[str] = None
    data: Optional[Any] = None
