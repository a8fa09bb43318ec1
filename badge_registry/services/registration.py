"""Registration payload received from the upstream registration system."""

from __future__ import annotations

import base64
import binascii

from pydantic import BaseModel, ConfigDict, Field

from badge_registry.imgproc.normalize import DecodeError


class BadgeRegistration(BaseModel):
    """One fursuit badge registration, using the wire names of the registration system."""

    model_config = ConfigDict(populate_by_name=True)

    badge_no: int = Field(alias="badgeNo")
    reg_no: int = Field(alias="regNo")
    gender: str = ""
    name: str = ""
    species: str = ""
    dont_publish: int = Field(default=0, alias="dontPublish")
    worn_by: str = Field(default="", alias="wornBy")
    image_content: str = Field(alias="imageContent")

    def photo_bytes(self) -> bytes:
        """Decode the base64 photo payload."""

        try:
            return base64.b64decode("".join(self.image_content.split()), validate=True)
        except (ValueError, binascii.Error) as exc:
            raise DecodeError("Photo payload is not valid base64.") from exc
