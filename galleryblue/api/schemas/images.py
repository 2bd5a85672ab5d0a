"""Messages for users.v1.ImageService."""
from datetime import datetime
from typing import List, Optional

from pydantic import field_serializer, field_validator

from galleryblue.api.schemas.common import (
    ConnectMessage,
    Int32,
    decode_bytes_field,
    encode_bytes_field,
)


class UploadImageRequest(ConnectMessage):
    filename: str = ""
    content_type: str = ""
    data: bytes = b""
    title: str = ""
    description: str = ""

    @field_validator("data", mode="before")
    @classmethod
    def decode_data(cls, v):
        return decode_bytes_field(v)


class UploadImageResponse(ConnectMessage):
    image_id: str


class GetImageRequest(ConnectMessage):
    id: str = ""


class GetImageResponse(ConnectMessage):
    """Full image record, original bytes included."""

    id: str
    owner_id: str
    owner_display_name: str
    filename: str
    content_type: str
    data: bytes
    title: str
    description: str
    created_at: datetime

    @field_serializer("data", when_used="json")
    def serialize_data(self, v: bytes) -> Optional[str]:
        return encode_bytes_field(v)


class ImageInfo(ConnectMessage):
    """Gallery listing entry; carries the thumbnail, not the original."""

    id: str
    owner_id: str
    owner_display_name: str
    filename: str
    title: str
    created_at: datetime
    thumbnail: Optional[bytes] = None

    @field_serializer("thumbnail", when_used="json")
    def serialize_thumbnail(self, v: Optional[bytes]) -> Optional[str]:
        return encode_bytes_field(v)


class ListImagesRequest(ConnectMessage):
    limit: Int32 = 0
    offset: Int32 = 0


class ListImagesResponse(ConnectMessage):
    images: List[ImageInfo]
    total: int


class ListMyImagesRequest(ListImagesRequest):
    pass


class ListMyImagesResponse(ListImagesResponse):
    pass


class UpdateImageRequest(ConnectMessage):
    """Absent title/description keep their stored value."""

    id: str = ""
    title: Optional[str] = None
    description: Optional[str] = None


class UpdateImageResponse(ConnectMessage):
    id: str
    title: str
    description: str


class DeleteImageRequest(ConnectMessage):
    id: str = ""


class DeleteImageResponse(ConnectMessage):
    success: bool
