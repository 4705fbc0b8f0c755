from typing import Any, Dict, Optional, Sequence

from starlette.responses import JSONResponse
from starlette import status

from clouddrive.schemas.response import ApiResponse, ListMeta


def _envelope(
    data: Any,
    message: Optional[str],
    status_code: int,
    meta: Optional[ListMeta] = None,
    headers: Optional[Dict[str, str]] = None,
) -> JSONResponse:
    body = ApiResponse[Any](
        success=True,
        message=message,
        data=data,
        meta=meta,
    ).model_dump(mode="json", exclude_none=True)
    return JSONResponse(content=body, status_code=status_code, headers=headers)


def ok(
    data: Any = None,
    message: Optional[str] = None,
    headers: Optional[Dict[str, str]] = None,
) -> JSONResponse:
    return _envelope(data, message, status.HTTP_200_OK, headers=headers)


def created(data: Any = None, message: str = "Created") -> JSONResponse:
    return _envelope(data, message, status.HTTP_201_CREATED)


def listed(items: Sequence[Any], message: Optional[str] = None, limit: Optional[int] = None) -> JSONResponse:
    """Listing envelope; ``meta.count`` is the number of items returned"""
    items = list(items)
    return _envelope(items, message, status.HTTP_200_OK, meta=ListMeta(count=len(items), limit=limit))
