"""Listing domain exceptions."""

from src.core.domain.exceptions import ValidationError


class InvalidCategorySetError(ValidationError):
    """Raised when category options are not unique or misuse the reserved id."""


class InvalidPageSizeError(ValidationError):
    """Raised when a page size is not positive."""

    def __init__(self, page_size: int):
        super().__init__(
            f"Page size must be positive, got {page_size}", {"page_size": page_size}
        )


class InvalidPageIndexError(ValidationError):
    """Raised when a page click targets a negative index."""

    def __init__(self, index: int):
        super().__init__(
            f"Page index must be zero or greater, got {index}", {"index": index}
        )


class UnknownViewStateFieldError(ValidationError):
    """Raised when encoding a field that has no URL key."""

    def __init__(self, field: str):
        super().__init__(
            f"'{field}' is not a URL-addressable view state field", {"field": field}
        )
