from typing import List, Optional

from fastapi import APIRouter, Depends, File, Form, Path, Query, UploadFile, status

from clouddrive.api.deps import get_current_user_id, get_entry_service
from clouddrive.schemas.entry import (
    EntryResponse,
    EntryUrls,
    FolderCreateRequest,
    MoveRequest,
    RenameRequest,
    StorageStats,
    UploadBlob,
)
from clouddrive.schemas.response import ApiError, ApiResponse
from clouddrive.services.entry_service import EntryService
from clouddrive.utils.api_response import created, listed, ok

router = APIRouter(
    tags=["Entries"],
    responses={
        400: {"model": ApiError, "description": "Bad Request"},
        401: {"model": ApiError, "description": "Unauthorized"},
        404: {"model": ApiError, "description": "Not Found"},
        413: {"model": ApiError, "description": "File too large or quota exceeded"},
        422: {"model": ApiError, "description": "Validation Error"},
        502: {"model": ApiError, "description": "Storage backend failure"},
    }
)


@router.get("/children", response_model=ApiResponse[List[EntryResponse]], summary="List folder content")
async def list_children(
    parent_id: Optional[str] = Query(None, description="Folder id, omit for root"),
    user_id: str = Depends(get_current_user_id),
    service: EntryService = Depends(get_entry_service),
):
    entries = await service.list_children(user_id, parent_id)
    return listed(entries, message="Entries listed successfully")


@router.get("/folders", response_model=ApiResponse[List[EntryResponse]], summary="List all folders")
async def list_folders(
    user_id: str = Depends(get_current_user_id),
    service: EntryService = Depends(get_entry_service),
):
    folders = await service.list_folders(user_id)
    return listed(folders, message="Folders listed successfully")


@router.get("/recent", response_model=ApiResponse[List[EntryResponse]], summary="Recently updated files")
async def list_recent_files(
    limit: int = Query(10, ge=1, le=100, description="Number of files to return"),
    user_id: str = Depends(get_current_user_id),
    service: EntryService = Depends(get_entry_service),
):
    files = await service.list_recent_files(user_id, limit)
    return listed(files, message="Recent files listed successfully", limit=limit)


@router.get("/stats", response_model=ApiResponse[StorageStats], summary="Storage usage")
async def get_storage_stats(
    user_id: str = Depends(get_current_user_id),
    service: EntryService = Depends(get_entry_service),
):
    stats = await service.get_storage_stats(user_id)
    return ok(data=stats, message="Storage statistics retrieved successfully")


@router.post(
    "/folders",
    response_model=ApiResponse[EntryResponse],
    status_code=status.HTTP_201_CREATED,
    summary="Create folder",
)
async def create_folder(
    request: FolderCreateRequest,
    user_id: str = Depends(get_current_user_id),
    service: EntryService = Depends(get_entry_service),
):
    folder = await service.create_folder(request.name, user_id, request.parent_id)
    return created(folder, message="Folder created successfully")


@router.post(
    "/upload",
    response_model=ApiResponse[EntryResponse],
    status_code=status.HTTP_201_CREATED,
    summary="Upload file",
    description="Store the file content in MinIO and record its metadata",
)
async def upload_file(
    file: UploadFile = File(...),
    parent_id: Optional[str] = Form(None),
    user_id: str = Depends(get_current_user_id),
    service: EntryService = Depends(get_entry_service),
):
    if file.size is not None:
        service.check_file_size(file.size)
    # One byte past the limit is enough for the service to reject it
    blob = UploadBlob(
        name=file.filename or "untitled",
        content_type=file.content_type,
        data=await file.read(service.max_file_size + 1),
    )
    entry = await service.upload_file(blob, user_id, parent_id or None)
    return created(entry, message="File uploaded successfully")


@router.get("/{entry_id}", response_model=ApiResponse[EntryResponse], summary="Get entry")
async def get_entry(
    entry_id: str = Path(..., description="Entry ID"),
    service: EntryService = Depends(get_entry_service),
):
    entry = await service.get_entry(entry_id)
    return ok(data=entry)


@router.get("/{entry_id}/urls", response_model=ApiResponse[EntryUrls], summary="View and download URLs")
async def get_entry_urls(
    entry_id: str = Path(..., description="File entry ID"),
    service: EntryService = Depends(get_entry_service),
):
    urls = await service.get_entry_urls(entry_id)
    return ok(data=urls)


@router.put("/{entry_id}/move", response_model=ApiResponse[EntryResponse], summary="Move entry")
async def move_entry(
    request: MoveRequest,
    entry_id: str = Path(..., description="Entry ID"),
    service: EntryService = Depends(get_entry_service),
):
    entry = await service.move_entry(entry_id, request.parent_id)
    return ok(data=entry, message="Entry moved successfully")


@router.put("/{entry_id}/rename", response_model=ApiResponse[EntryResponse], summary="Rename entry")
async def rename_entry(
    request: RenameRequest,
    entry_id: str = Path(..., description="Entry ID"),
    service: EntryService = Depends(get_entry_service),
):
    entry = await service.rename_entry(entry_id, request.name)
    return ok(data=entry, message="Entry renamed successfully")


@router.delete("/{entry_id}", response_model=ApiResponse[bool], summary="Delete entry")
async def delete_entry(
    entry_id: str = Path(..., description="Entry ID"),
    service: EntryService = Depends(get_entry_service),
):
    await service.delete_entry(entry_id)
    return ok(message="Entry deleted successfully")
