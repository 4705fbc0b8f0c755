from urllib.parse import quote, urlsplit


class ReferenceResolver:
    """Builds view and download locators for stored blobs.

    Locators point at the blob endpoints of this API; deriving them needs no
    network call.
    """

    def __init__(self, base_url: str, prefix: str = "/api/v1/blobs"):
        parts = urlsplit(base_url or "")
        if parts.scheme not in ("http", "https") or not parts.netloc:
            raise ValueError(f"Invalid public base URL: {base_url!r}")
        self._base = f"{base_url.rstrip('/')}/{prefix.strip('/')}"

    def _locator(self, blob_ref: str, action: str) -> str:
        return f"{self._base}/{quote(blob_ref, safe='/')}/{action}"

    def view_url(self, blob_ref: str) -> str:
        return self._locator(blob_ref, "view")

    def download_url(self, blob_ref: str) -> str:
        return self._locator(blob_ref, "download")
