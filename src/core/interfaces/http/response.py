"""Response envelope shared by every route.

成功响应统一为 {"code", "message", "data", "meta"}；分页信息放在 meta 中，
错误响应由 exceptions.py 单独生成。
"""

from typing import Any, TypeVar

from pydantic import BaseModel

T = TypeVar("T")


class ApiResponse[T](BaseModel):
    """Envelope around a route's payload."""

    code: int = 200
    message: str = "Operation successful"
    data: T | None = None
    meta: dict[str, Any] | None = None

    @classmethod
    def success(
        cls,
        data: T | None = None,
        message: str = "Operation successful",
        meta: dict[str, Any] | None = None,
    ) -> "ApiResponse[T]":
        return cls(message=message, data=data, meta=meta)


def page_meta(total: int, page: int, page_size: int) -> dict[str, int]:
    """Pagination block for `meta`; total_pages is 0 for an empty result."""
    return {
        "total": total,
        "page": page,
        "page_size": page_size,
        "total_pages": -(-total // page_size) if page_size > 0 else 0,
    }
