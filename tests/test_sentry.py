from clouddrive.core.exceptions import BackendError, NotFoundError
from clouddrive.middlewares.sentry import drop_health_transactions, scrub_event


def _hint(error):
    return {"exc_info": (type(error), error, None)}


def test_client_errors_are_not_reported():
    assert scrub_event({}, _hint(NotFoundError("Entry not found"))) is None


def test_backend_errors_are_tagged_with_details():
    error = BackendError("Failed to save entry", details={"orphaned_blob_ref": "user_alice/abc"})

    event = scrub_event({}, _hint(error))

    assert event["tags"]["error.code"] == "backend_error"
    assert event["extra"]["details"] == {"orphaned_blob_ref": "user_alice/abc"}


def test_credentials_and_upload_bodies_are_filtered():
    event = {
        "request": {
            "url": "https://drive.example.com/api/v1/entries/upload",
            "headers": {"Authorization": "Bearer secret", "Accept": "*/*"},
            "data": "raw bytes",
        }
    }

    scrubbed = scrub_event(event)

    assert scrubbed["request"]["headers"] == {"Authorization": "[Filtered]", "Accept": "*/*"}
    assert scrubbed["request"]["data"] == "[Filtered]"


def test_health_transactions_are_dropped():
    assert drop_health_transactions({"transaction": "/health"}) is None
    assert drop_health_transactions({"transaction": "/api/v1/entries/children"}) is not None
