"""Shared fixtures: an EntryService wired to in-memory collaborators."""

import pytest

from clouddrive.crud.entry import EntryCRUD
from clouddrive.services.entry_service import EntryService
from clouddrive.services.quota_service import QuotaService
from clouddrive.services.reference_service import ReferenceResolver
from clouddrive.utils.file_classifier import FileClassifier
from tests.fakes import InMemoryBlobStore, InMemoryDocumentStore, StaticIdentity

USER_ID = "user_alice"
OTHER_USER_ID = "user_bob"

# Scaled-down limits: 100 byte files, 500 byte quota
MAX_FILE_SIZE = 100
MAX_TOTAL_STORAGE = 500


@pytest.fixture
def classifier():
    return FileClassifier(
        document_types=["application/pdf", "text/plain", "text/csv"],
        image_types=["image/jpeg", "image/png"],
        video_types=["video/mp4"],
    )


@pytest.fixture
def resolver():
    return ReferenceResolver("https://drive.example.com")


@pytest.fixture
def store():
    return InMemoryDocumentStore()


@pytest.fixture
def blob_store(resolver):
    return InMemoryBlobStore(resolver)


@pytest.fixture
def crud(store, classifier):
    return EntryCRUD(store=store, classifier=classifier, stats_scan_limit=1000, recent_files_limit=10)


@pytest.fixture
def quota(crud):
    return QuotaService(crud, max_total_storage=MAX_TOTAL_STORAGE)


@pytest.fixture
def make_service(crud, blob_store, quota, classifier, resolver):
    """Build a service for a given caller; collaborators are shared across callers"""

    def _make(user_id=USER_ID):
        return EntryService(
            identity=StaticIdentity(user_id),
            crud=crud,
            blob_store=blob_store,
            quota=quota,
            classifier=classifier,
            resolver=resolver,
            max_file_size=MAX_FILE_SIZE,
        )

    return _make


@pytest.fixture
def service(make_service):
    return make_service()


@pytest.fixture
def other_service(make_service):
    return make_service(OTHER_USER_ID)
