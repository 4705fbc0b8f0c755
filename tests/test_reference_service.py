"""Tests for view/download locator derivation."""

import pytest

from clouddrive.services.reference_service import ReferenceResolver


def test_view_and_download_urls():
    resolver = ReferenceResolver("https://drive.example.com/")

    assert resolver.view_url("user_alice/abc.pdf") == \
        "https://drive.example.com/api/v1/blobs/user_alice/abc.pdf/view"
    assert resolver.download_url("user_alice/abc.pdf") == \
        "https://drive.example.com/api/v1/blobs/user_alice/abc.pdf/download"


def test_refs_are_quoted():
    resolver = ReferenceResolver("http://localhost:8000")

    assert resolver.view_url("user alice/a b") == \
        "http://localhost:8000/api/v1/blobs/user%20alice/a%20b/view"


def test_same_ref_gives_same_url():
    resolver = ReferenceResolver("http://localhost:8000")

    assert resolver.view_url("u/x") == resolver.view_url("u/x")


@pytest.mark.parametrize("base_url", ["", "drive.example.com", "ftp://drive.example.com", "https://"])
def test_malformed_base_url_is_rejected(base_url):
    with pytest.raises(ValueError):
        ReferenceResolver(base_url)
