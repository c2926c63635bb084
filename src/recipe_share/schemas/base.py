"""Base schema configuration for API models.

All JSON bodies use camelCase on the wire and snake_case in Python.

Usage:
    - APIRequest: incoming bodies where unknown fields are ignored
    - StrictAPIRequest: incoming bodies where unknown fields are an error
    - APIResponse: outgoing bodies
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class _BaseSchema(BaseModel):
    """Private base schema with common configuration.

    Do not use directly - inherit from one of the public subclasses.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,  # Accept both snake_case and camelCase
        use_enum_values=True,
        validate_default=True,
        serialize_by_alias=True,
    )


class APIRequest(_BaseSchema):
    """Incoming request body; extra properties are dropped."""

    model_config = ConfigDict(extra="ignore")


class StrictAPIRequest(_BaseSchema):
    """Incoming request body that rejects unknown properties.

    Used for credential payloads so that typos and smuggled fields such as
    ``role`` fail loudly instead of being silently discarded.
    """

    model_config = ConfigDict(extra="forbid")


class APIResponse(_BaseSchema):
    """Outgoing response body; only declared properties are serialized."""

    model_config = ConfigDict(extra="forbid")


class MessageResponse(APIResponse):
    message: str
