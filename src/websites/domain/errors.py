"""
Domain-level exceptions for the websites context.

These subclass the shared exception classes so they keep mapping onto the
standardized error contract ({code, message, details}).
"""
from __future__ import annotations

from shared.exceptions import ConflictError, NotFoundError, ValidationError
from websites.domain.slug import SlugRejection


class InvalidSlugError(ValidationError):
    """Raised when a slug fails syntactic validation."""
    code = "invalid_slug"

    def __init__(self, slug: str, reason: SlugRejection) -> None:
        super().__init__(reason.message, details={"reason": reason.value, "slug": slug})
        self.slug = slug
        self.reason = reason


class SlugTakenError(ConflictError):
    """Raised when a slug is occupied by another record (oracle or store constraint)."""
    code = "slug_taken"

    def __init__(self, slug: str | None = None) -> None:
        super().__init__(details={"slug": slug} if slug else None)
        self.slug = slug


class NotPublishableError(ValidationError):
    """Raised when a record lacks the fields required to go public."""
    code = "not_publishable"

    def __init__(self, missing: list[str]) -> None:
        super().__init__(details={"missing": missing})
        self.missing = missing


class WebsiteNotFoundError(NotFoundError):
    """Raised when a website is missing or belongs to another owner."""
    code = "not_found"


class WebsiteDeletedError(ValidationError):
    """Raised when a transition is attempted on a deleted record."""
    code = "validation_error"

    def __init__(self) -> None:
        super().__init__("Website has been deleted")
