"""Catalog domain exceptions.

每个异常类定义自己的 http_status_code 和 error_code，
由 core/interfaces/http/exceptions.py 中的 domain_exception_handler 统一处理。
"""

from fastapi import status

from src.core.domain.exceptions import AuthorizationError, EntityNotFoundError


class ToneModelNotFoundError(EntityNotFoundError):
    """Raised when a tone model does not exist or is already deleted."""

    error_code = "TONE_MODEL_NOT_FOUND"

    def __init__(self, model_id: str) -> None:
        super().__init__("ToneModel", model_id)


class ToneModelAccessDeniedError(AuthorizationError):
    """Raised when someone other than the owner touches a tone model."""

    http_status_code = status.HTTP_403_FORBIDDEN
    error_code = "TONE_MODEL_ACCESS_DENIED"

    def __init__(self, model_id: str) -> None:
        super().__init__(
            f"Not allowed to modify tone model '{model_id}'", {"model_id": model_id}
        )
