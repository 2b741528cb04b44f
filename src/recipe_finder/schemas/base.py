"""Base schema configuration for all Pydantic models.

Usage:
    - APIRequest: For incoming API request bodies
    - APIResponse: For outgoing API response bodies
    - DownstreamResponse: For responses received from the recipe provider

Request and response bodies of this API use snake_case keys, except for the
recipe resource, which mirrors the provider's camelCase shape so the client
renders stored and fresh recipes the same way.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class APIRequest(BaseModel):
    """Base class for incoming API request schemas.

    Extra fields are ignored; clients may send properties we don't recognize.
    """

    model_config = ConfigDict(
        extra="ignore",
        str_strip_whitespace=True,
    )


class APIResponse(BaseModel):
    """Base class for outgoing API response schemas.

    Only explicitly defined properties are returned.
    """

    model_config = ConfigDict(
        extra="forbid",
        from_attributes=True,
        use_enum_values=True,
    )


class CamelAPIResponse(APIResponse):
    """Response schema serialized with camelCase keys."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        serialize_by_alias=True,
    )


class DownstreamResponse(BaseModel):
    """Base class for responses received from external services.

    Configured to ignore extra fields - upstream services may add
    new properties, and we don't want that to break our parsing.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )
