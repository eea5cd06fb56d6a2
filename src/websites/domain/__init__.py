"""
Websites domain: slug rules, content schema, the Website aggregate and the
collaborator contracts it relies on.
"""
from websites.domain.content import AccentColor, LeadershipMember, Program, SiteContent, WhatWeDoItem
from websites.domain.errors import (
    InvalidSlugError,
    NotPublishableError,
    SlugTakenError,
    WebsiteDeletedError,
    WebsiteNotFoundError,
)
from websites.domain.slug import (
    RESERVED_SLUGS,
    Invalid,
    SlugRejection,
    SlugValidation,
    Valid,
    derive_slug,
    validate_slug,
)
from websites.domain.website import Website, WebsiteState

__all__ = [
    "AccentColor",
    "LeadershipMember",
    "Program",
    "SiteContent",
    "WhatWeDoItem",
    "InvalidSlugError",
    "NotPublishableError",
    "SlugTakenError",
    "WebsiteDeletedError",
    "WebsiteNotFoundError",
    "RESERVED_SLUGS",
    "Invalid",
    "SlugRejection",
    "SlugValidation",
    "Valid",
    "derive_slug",
    "validate_slug",
    "Website",
    "WebsiteState",
]
