"""HTTP routes for fursuit badge registration and delivery."""

from __future__ import annotations

import logging
from datetime import datetime

from fastapi import APIRouter, HTTPException, Request, Response, status
from pydantic import BaseModel, ConfigDict

from badge_registry.api.auth import InternalAuthDependency
from badge_registry.domain.records import BADGE_IMAGE_MIME_TYPE
from badge_registry.imgproc.normalize import DecodeError
from badge_registry.services.badges import RegistrationCoordinator
from badge_registry.services.registration import BadgeRegistration
from badge_registry.storage.base import StoreError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/fursuits/badges", tags=["fursuits"])


class BadgeResponse(BaseModel):
    """Public badge metadata; the photo is served by the image route."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    external_reference: str
    owner_uid: str
    name: str
    species: str
    gender: str
    worn_by: str
    is_public: bool
    last_change_at: datetime | None = None


class UpsertResponse(BaseModel):
    id: str


def _coordinator(request: Request) -> RegistrationCoordinator:
    return request.app.state.coordinator


@router.post("", response_model=UpsertResponse, dependencies=[InternalAuthDependency])
async def upsert_badge(registration: BadgeRegistration, request: Request) -> UpsertResponse:
    """Create or update a badge from a registration system push."""

    try:
        badge_id = await _coordinator(request).upsert(registration)
    except DecodeError as exc:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(exc)) from exc
    except StoreError as exc:
        logger.error("Badge %s could not be stored: %s", registration.badge_no, exc)
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(exc)) from exc
    return UpsertResponse(id=badge_id)


@router.get("", response_model=list[BadgeResponse])
async def list_badges(request: Request) -> list[BadgeResponse]:
    records = await _coordinator(request).list_all()
    return [BadgeResponse.model_validate(record) for record in records]


@router.get("/{badge_id}/image")
async def get_badge_image(badge_id: str, request: Request) -> Response:
    """Return the rendered badge photo."""

    content = await _coordinator(request).get_image_bytes(badge_id)
    if content is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Badge image not found.")
    return Response(content=content, media_type=BADGE_IMAGE_MIME_TYPE)
