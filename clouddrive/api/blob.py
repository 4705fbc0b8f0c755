from urllib.parse import quote

from fastapi import APIRouter, Depends, Path
from starlette.responses import Response

from clouddrive.api.deps import get_entry_service
from clouddrive.schemas.response import ApiError
from clouddrive.services.entry_service import EntryService

router = APIRouter(
    tags=["Blobs"],
    responses={
        401: {"model": ApiError, "description": "Unauthorized"},
        404: {"model": ApiError, "description": "Not Found"},
    }
)


async def _blob_response(service: EntryService, blob_ref: str, disposition: str) -> Response:
    entry, data = await service.read_blob(blob_ref)
    filename = quote(entry.name)
    return Response(
        content=data,
        media_type=entry.mime_type or "application/octet-stream",
        headers={"Content-Disposition": f"{disposition}; filename*=UTF-8''{filename}"},
    )


@router.get("/{blob_ref:path}/view", summary="View file content inline")
async def view_blob(
    blob_ref: str = Path(..., description="Blob reference"),
    service: EntryService = Depends(get_entry_service),
):
    return await _blob_response(service, blob_ref, "inline")


@router.get("/{blob_ref:path}/download", summary="Download file content")
async def download_blob(
    blob_ref: str = Path(..., description="Blob reference"),
    service: EntryService = Depends(get_entry_service),
):
    return await _blob_response(service, blob_ref, "attachment")
