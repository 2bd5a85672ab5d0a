"""users.v1.ImageService: upload, gallery listing and owner-only edits."""
import logging
from typing import Optional

from fastapi import APIRouter, Depends
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from galleryblue.api.schemas.images import (
    DeleteImageRequest,
    DeleteImageResponse,
    GetImageRequest,
    GetImageResponse,
    ImageInfo,
    ListImagesRequest,
    ListImagesResponse,
    ListMyImagesRequest,
    ListMyImagesResponse,
    UpdateImageRequest,
    UpdateImageResponse,
    UploadImageRequest,
    UploadImageResponse,
)
from galleryblue.core.database import get_db
from galleryblue.core.user_context import get_current_user_id
from galleryblue.database import repository
from galleryblue.services import image_service
from galleryblue.utils.error_handling import InternalError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/users.v1.ImageService", tags=["images"])


# --- Helper ---

def _info_to_message(info: repository.ImageInfo) -> ImageInfo:
    return ImageInfo(
        id=info.id,
        owner_id=info.owner_id,
        owner_display_name=info.owner_display_name or "",
        filename=info.filename,
        title=info.title or "",
        created_at=info.created_at,
        thumbnail=info.thumbnail,
    )


# --- Endpoints ---

@router.post("/UploadImage", response_model=UploadImageResponse)
def upload_image(
    request: UploadImageRequest,
    db: Session = Depends(get_db),
    user_id: Optional[str] = Depends(get_current_user_id),
):
    """Upload a JPEG; the caller becomes its owner."""
    try:
        image = image_service.upload_image(
            db,
            owner_id=user_id,
            filename=request.filename,
            content_type=request.content_type,
            data=request.data,
            title=request.title or None,
            description=request.description or None,
        )
    except SQLAlchemyError as e:
        logger.error(f"Error uploading image: {e}", exc_info=True)
        raise InternalError("failed to create image") from e

    return UploadImageResponse(image_id=image.id)


@router.post("/GetImage", response_model=GetImageResponse, response_model_exclude_none=True)
def get_image(request: GetImageRequest, db: Session = Depends(get_db)):
    """Get a full image record by id (public)."""
    try:
        detail = image_service.get_image(db, request.id)
    except SQLAlchemyError as e:
        logger.error(f"Error getting image {request.id}: {e}", exc_info=True)
        raise InternalError("database error") from e

    img = detail.image
    return GetImageResponse(
        id=img.id,
        owner_id=img.owner_id,
        owner_display_name=detail.owner_display_name or "",
        filename=img.filename,
        content_type=img.content_type,
        data=img.data,
        title=img.title or "",
        description=img.description or "",
        created_at=img.created_at,
    )


@router.post("/ListImages", response_model=ListImagesResponse, response_model_exclude_none=True)
def list_images(request: ListImagesRequest, db: Session = Depends(get_db)):
    """Public gallery, newest first."""
    try:
        page = image_service.list_images(db, limit=request.limit, offset=request.offset)
    except SQLAlchemyError as e:
        logger.error(f"Error listing images: {e}", exc_info=True)
        raise InternalError("database error") from e

    return ListImagesResponse(
        images=[_info_to_message(info) for info in page.images],
        total=page.total,
    )


@router.post("/ListMyImages", response_model=ListMyImagesResponse, response_model_exclude_none=True)
def list_my_images(
    request: ListMyImagesRequest,
    db: Session = Depends(get_db),
    user_id: Optional[str] = Depends(get_current_user_id),
):
    """Images owned by the caller, newest first."""
    try:
        page = image_service.list_my_images(
            db, user_id=user_id, limit=request.limit, offset=request.offset,
        )
    except SQLAlchemyError as e:
        logger.error(f"Error listing images for {user_id}: {e}", exc_info=True)
        raise InternalError("database error") from e

    return ListMyImagesResponse(
        images=[_info_to_message(info) for info in page.images],
        total=page.total,
    )


@router.post("/UpdateImage", response_model=UpdateImageResponse)
def update_image(
    request: UpdateImageRequest,
    db: Session = Depends(get_db),
    user_id: Optional[str] = Depends(get_current_user_id),
):
    """Update title and/or description (owner only)."""
    try:
        image = image_service.update_image(
            db,
            user_id=user_id,
            image_id=request.id,
            title=request.title,
            description=request.description,
        )
    except SQLAlchemyError as e:
        logger.error(f"Error updating image {request.id}: {e}", exc_info=True)
        raise InternalError("failed to update image") from e

    return UpdateImageResponse(
        id=image.id,
        title=image.title or "",
        description=image.description or "",
    )


@router.post("/DeleteImage", response_model=DeleteImageResponse)
def delete_image(
    request: DeleteImageRequest,
    db: Session = Depends(get_db),
    user_id: Optional[str] = Depends(get_current_user_id),
):
    """Delete an image (owner only)."""
    try:
        image_service.delete_image(db, user_id=user_id, image_id=request.id)
    except SQLAlchemyError as e:
        logger.error(f"Error deleting image {request.id}: {e}", exc_info=True)
        raise InternalError("failed to delete image") from e

    return DeleteImageResponse(success=True)
