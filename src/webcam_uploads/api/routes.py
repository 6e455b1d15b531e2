"""API routes for image upload and listing."""

from datetime import UTC, datetime
from typing import Annotated

from fastapi import APIRouter, Depends, File, Request, UploadFile

from webcam_uploads.core.config import Settings
from webcam_uploads.core.constants import (
    APP_VERSION,
    ERROR_FILE_TOO_LARGE,
    ERROR_NO_FILE,
    ERROR_UNSUPPORTED_FORMAT,
    MAX_FILE_SIZE,
    READ_CHUNK_SIZE,
    UPLOAD_FIELD_NAME,
    UPLOAD_RATE_LIMIT,
)
from webcam_uploads.core.errors import (
    ClientInputError,
    FileTooLargeError,
    UnsupportedImageError,
)
from webcam_uploads.core.models import HealthCheck, UploadResponse
from webcam_uploads.core.rate_limiter import is_exempt, limiter
from webcam_uploads.core.storage import ImageStorage, get_storage
from webcam_uploads.core.utils import (
    detect_image_format,
    generate_stored_name,
    public_path,
)

router = APIRouter()


def get_settings(request: Request) -> Settings:
    """Dependency to get the settings of the running app."""
    return request.app.state.settings


async def _read_limited(file: UploadFile) -> bytes:
    """Read the whole upload, refusing anything above MAX_FILE_SIZE."""
    chunks: list[bytes] = []
    total = 0
    while chunk := await file.read(READ_CHUNK_SIZE):
        total += len(chunk)
        if total > MAX_FILE_SIZE:
            raise FileTooLargeError(
                message=ERROR_FILE_TOO_LARGE,
                details={"filename": file.filename, "limit": MAX_FILE_SIZE},
            )
        chunks.append(chunk)
    return b"".join(chunks)


@router.post("/upload")
@limiter.limit(UPLOAD_RATE_LIMIT, exempt_when=is_exempt)
async def upload_image(
    request: Request,  # noqa: ARG001
    storage: Annotated[ImageStorage, Depends(get_storage)],
    settings: Annotated[Settings, Depends(get_settings)],
    image: Annotated[UploadFile | None, File(alias=UPLOAD_FIELD_NAME)] = None,
) -> UploadResponse:
    """Store a single image sent as multipart field ``image``."""
    if image is None:
        raise ClientInputError(message=ERROR_NO_FILE)

    stored_name = generate_stored_name(image.filename)
    content = await _read_limited(image)

    if settings.verify_image_content and detect_image_format(content) is None:
        raise UnsupportedImageError(
            message=ERROR_UNSUPPORTED_FORMAT,
            details={"filename": image.filename},
        )

    await storage.save(stored_name, content)
    return UploadResponse(filePath=public_path(stored_name))


@router.get("/images")
async def list_images(
    storage: Annotated[ImageStorage, Depends(get_storage)],
) -> list[str]:
    """List public paths of stored images."""
    return await storage.list_images()


@router.get("/health")
async def health_check(
    storage: Annotated[ImageStorage, Depends(get_storage)],
) -> HealthCheck:
    """Health check endpoint."""
    writable = storage.is_writable()

    return HealthCheck(
        status="healthy" if writable else "degraded",
        timestamp=datetime.now(UTC),
        version=APP_VERSION,
        storage_writable=writable,
    )
