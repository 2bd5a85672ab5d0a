"""Shared pieces for Connect JSON messages.

Messages follow the proto3 JSON mapping: lowerCamelCase field names,
``bytes`` as base64 strings, and absent fields meaning the zero value.
"""
import base64
import binascii
from typing import Annotated, Any, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

INT32_MIN = -(2**31)
INT32_MAX = 2**31 - 1

# proto3 int32
Int32 = Annotated[int, Field(ge=INT32_MIN, le=INT32_MAX)]


class ConnectMessage(BaseModel):
    """Base for request/response bodies."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


def decode_bytes_field(value: Any) -> Any:
    """Accept standard or URL-safe base64, with or without padding."""
    if value is None:
        return b""
    if not isinstance(value, str):
        return value
    cleaned = value.strip().replace("-", "+").replace("_", "/")
    cleaned += "=" * (-len(cleaned) % 4)
    try:
        return base64.b64decode(cleaned, validate=True)
    except (binascii.Error, ValueError) as e:
        raise ValueError("invalid base64 data") from e


def encode_bytes_field(value: Optional[bytes]) -> Optional[str]:
    if value is None:
        return None
    return base64.b64encode(value).decode("ascii")
