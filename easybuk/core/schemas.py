"""Base Pydantic models shared by every domain's request/response schemas."""
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class RequestModel(BaseModel):
    """Client input: unknown keys rejected, camelCase or snake_case accepted."""

    model_config = ConfigDict(
        extra="forbid",
        str_strip_whitespace=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )


class ResponseModel(BaseModel):
    """Client output: serialized with camelCase keys."""

    model_config = ConfigDict(
        from_attributes=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )


class MessageResponse(ResponseModel):
    success: bool = True
    message: str
