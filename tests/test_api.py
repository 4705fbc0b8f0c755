"""HTTP surface: envelopes, status codes and blob streaming."""

from io import BytesIO
from unittest.mock import AsyncMock

import pytest
from httpx import ASGITransport, AsyncClient
from starlette.datastructures import UploadFile

from clouddrive.api.deps import get_entry_service
from clouddrive.api.entry import upload_file
from clouddrive.configs.setup import create_app
from clouddrive.core.exceptions import FileTooLargeError
from clouddrive.schemas.entry import UploadBlob
from tests.conftest import MAX_FILE_SIZE, MAX_TOTAL_STORAGE


@pytest.fixture
def app():
    return create_app()


@pytest.fixture
def use_service(app):
    def _use(service):
        app.dependency_overrides[get_entry_service] = lambda: service
    yield _use
    app.dependency_overrides.clear()


@pytest.fixture
async def client(app):
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac


async def test_health(client):
    response = await client.get("/health")

    body = response.json()
    assert response.status_code == 200
    assert body["status"] == "degraded"
    assert body["checks"] == {"mongodb": "down"}


async def test_missing_bearer_token_is_401(client):
    response = await client.get("/api/v1/entries/children")

    body = response.json()
    assert response.status_code == 401
    assert body["success"] is False
    assert body["code"] == "unauthenticated"


async def test_anonymous_identity_is_401(client, use_service, make_service):
    use_service(make_service(None))

    response = await client.get("/api/v1/entries/folders")

    assert response.status_code == 401


async def test_create_folder_and_list_root(client, use_service, service):
    use_service(service)

    created = await client.post("/api/v1/entries/folders", json={"name": "Docs"})
    listing = await client.get("/api/v1/entries/children")

    assert created.status_code == 201
    assert created.json()["data"]["kind"] == "folder"
    body = listing.json()
    assert [e["name"] for e in body["data"]] == ["Docs"]
    assert body["meta"]["count"] == 1


async def test_upload_and_download(client, use_service, service):
    use_service(service)

    uploaded = await client.post(
        "/api/v1/entries/upload",
        files={"file": ("hello.txt", b"hello", "text/plain")},
    )
    entry = uploaded.json()["data"]
    urls = await client.get(f"/api/v1/entries/{entry['id']}/urls")
    download = await client.get(f"/api/v1/blobs/{entry['blob_ref']}/download")

    assert uploaded.status_code == 201
    assert entry["size"] == 5
    assert entry["category"] == "documents"
    assert urls.json()["data"]["download_url"].endswith(f"/api/v1/blobs/{entry['blob_ref']}/download")
    assert download.status_code == 200
    assert download.content == b"hello"
    assert download.headers["content-disposition"] == "attachment; filename*=UTF-8''hello.txt"


async def test_upload_too_large_is_413(client, use_service, service, blob_store):
    use_service(service)

    response = await client.post(
        "/api/v1/entries/upload",
        files={"file": ("big.bin", b"x" * (MAX_FILE_SIZE + 1), "application/octet-stream")},
    )

    assert response.status_code == 413
    assert response.json()["code"] == "file_too_large"
    assert blob_store.put_calls == 0


async def test_unknown_entry_is_404(client, use_service, service):
    use_service(service)

    response = await client.get("/api/v1/entries/000000000000000000000999")

    assert response.status_code == 404
    assert response.json()["code"] == "not_found"


async def test_delete_non_empty_folder_is_409(client, use_service, service):
    use_service(service)
    folder = await service.create_folder("Docs", "user_alice")
    await service.create_folder("Inner", "user_alice", folder.id)

    response = await client.delete(f"/api/v1/entries/{folder.id}")

    assert response.status_code == 409
    assert response.json()["code"] == "folder_not_empty"


async def test_move_into_itself_is_400(client, use_service, service):
    use_service(service)
    folder = await service.create_folder("Docs", "user_alice")

    response = await client.put(f"/api/v1/entries/{folder.id}/move", json={"parent_id": folder.id})

    assert response.status_code == 400
    assert response.json()["code"] == "invalid_parent"


async def test_rename_validation_error_is_422(client, use_service, service):
    use_service(service)
    folder = await service.create_folder("Docs", "user_alice")

    response = await client.put(f"/api/v1/entries/{folder.id}/rename", json={"name": ""})

    assert response.status_code == 422
    assert response.json()["code"] == "validation_error"


async def test_stats(client, use_service, service):
    use_service(service)
    await client.post("/api/v1/entries/upload", files={"file": ("a.png", b"x" * 10, "image/png")})

    response = await client.get("/api/v1/entries/stats")

    data = response.json()["data"]
    assert data["total_size"] == 10
    assert data["images"] == {"count": 1, "size": 10}


async def test_upload_reads_at_most_one_byte_past_limit(service, blob_store):
    upload = UploadFile(file=BytesIO(b"x" * (MAX_FILE_SIZE * 50)), filename="big.bin")
    upload.read = AsyncMock(wraps=upload.read)

    with pytest.raises(FileTooLargeError):
        await upload_file(file=upload, parent_id=None, user_id="user_alice", service=service)

    upload.read.assert_awaited_once_with(MAX_FILE_SIZE + 1)
    assert blob_store.put_calls == 0


async def test_upload_with_declared_oversize_is_rejected_before_reading(service):
    upload = UploadFile(file=BytesIO(b""), filename="big.bin", size=MAX_FILE_SIZE * 50)
    upload.read = AsyncMock(wraps=upload.read)

    with pytest.raises(FileTooLargeError):
        await upload_file(file=upload, parent_id=None, user_id="user_alice", service=service)

    upload.read.assert_not_awaited()


async def test_upload_at_limit_is_accepted(client, use_service, service):
    use_service(service)

    response = await client.post(
        "/api/v1/entries/upload",
        files={"file": ("edge.bin", b"x" * MAX_FILE_SIZE, "application/octet-stream")},
    )

    assert response.status_code == 201
    assert response.json()["data"]["size"] == MAX_FILE_SIZE


async def test_quota_exceeded_is_413(client, use_service, service):
    use_service(service)
    for i in range(5):
        await service.upload_file(UploadBlob(name=f"f{i}.bin", data=b"x" * MAX_FILE_SIZE), "user_alice")

    response = await client.post("/api/v1/entries/upload", files={"file": ("one.bin", b"x", "text/plain")})

    body = response.json()
    assert response.status_code == 413
    assert body["code"] == "quota_exceeded"
    assert body["details"]["limit"] == MAX_TOTAL_STORAGE
