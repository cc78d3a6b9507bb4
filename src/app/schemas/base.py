"""Base schema configuration for all Pydantic models.

Usage:
    - Record: rows read from (or written to) the database
    - APIRequest: incoming request bodies
    - APIResponse: outgoing response bodies
    - CamelResponse: response fragments serialized in camelCase (pagination meta)

Field names on the wire are the catalog's own snake_case column names
(``id_categorias``, ``criado_em``), so only ``CamelResponse`` aliases.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class _BaseSchema(BaseModel):
    """Private base schema with common configuration."""

    model_config = ConfigDict(
        from_attributes=True,
        use_enum_values=True,
        validate_default=True,
    )


class Record(_BaseSchema):
    """Plain data holder mirroring a table row."""

    model_config = ConfigDict(extra="ignore")


class APIRequest(_BaseSchema):
    """Base class for incoming API request schemas.

    Unknown properties are ignored, so clients cannot smuggle columns such as
    ``id_usuarios`` into a write.
    """

    model_config = ConfigDict(
        extra="ignore",
        str_strip_whitespace=True,
    )


class APIResponse(_BaseSchema):
    """Base class for outgoing API response schemas."""

    model_config = ConfigDict(extra="forbid")


class CamelResponse(APIResponse):
    """Response schema serialized with camelCase keys."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        serialize_by_alias=True,
    )
