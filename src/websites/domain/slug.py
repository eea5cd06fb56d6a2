# src/websites/domain/slug.py
"""
Slug rules.

``validate_slug`` is the single authority on whether a candidate may be used
as a public path segment. It is pure: no I/O, no clock, no configuration.
Rules are applied in a fixed order and the first failure wins, so the same
input always yields the same user-facing message.

``derive_slug`` is advisory only; its output still has to pass validation.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Union

MIN_LENGTH = 3
MAX_LENGTH = 50

# System routes and common infrastructure terms. Closed list.
RESERVED_SLUGS: frozenset[str] = frozenset({
    "home", "dashboard", "build", "login", "signup", "register", "auth",
    "admin", "api", "www", "mail", "email", "support", "help", "docs",
    "blog", "news", "about", "contact", "terms", "privacy", "legal",
    "app", "mobile", "web", "site", "website", "domain", "server",
    "root", "public", "private", "secure", "ssl", "http", "https",
    "ftp", "sftp", "ssh", "telnet", "smtp", "pop", "imap",
    "settings", "config", "configuration", "setup", "install",
    "assets", "static", "images", "img", "css", "js", "fonts",
    "uploads", "downloads", "files", "media", "content",
    "test", "testing", "dev", "development", "staging", "production",
    "preview", "demo", "sample", "template",
})

_ALLOWED = re.compile(r"[a-z0-9-]+")
_DERIVE_STRIP = re.compile(r"[^a-z0-9\s-]")
_WHITESPACE_RUN = re.compile(r"\s+")


class SlugRejection(str, Enum):
    """Reason a candidate slug was refused, in rule order."""
    REQUIRED = "required"
    TOO_SHORT = "too short"
    TOO_LONG = "too long"
    INVALID_CHARACTERS = "invalid characters"
    EDGE_HYPHEN = "leading/trailing hyphen"
    CONSECUTIVE_HYPHENS = "consecutive hyphens"
    RESERVED = "reserved"

    @property
    def message(self) -> str:
        return _MESSAGES[self]


_MESSAGES = {
    SlugRejection.REQUIRED: "URL slug is required",
    SlugRejection.TOO_SHORT: f"URL slug must be at least {MIN_LENGTH} characters long",
    SlugRejection.TOO_LONG: f"URL slug must be at most {MAX_LENGTH} characters long",
    SlugRejection.INVALID_CHARACTERS: "URL slug can only contain lowercase letters, numbers, and hyphens",
    SlugRejection.EDGE_HYPHEN: "URL slug cannot start or end with a hyphen",
    SlugRejection.CONSECUTIVE_HYPHENS: "URL slug cannot contain consecutive hyphens",
    SlugRejection.RESERVED: "This URL slug cannot be used. Please choose a different one.",
}


@dataclass(frozen=True, slots=True)
class Valid:
    """Candidate accepted."""
    slug: str

    @property
    def is_valid(self) -> bool:
        return True


@dataclass(frozen=True, slots=True)
class Invalid:
    """Candidate refused for ``reason``."""
    slug: str
    reason: SlugRejection

    @property
    def is_valid(self) -> bool:
        return False

    @property
    def message(self) -> str:
        return self.reason.message


SlugValidation = Union[Valid, Invalid]


def validate_slug(candidate: str) -> SlugValidation:
    """
    Check ``candidate`` against the slug rules.

    Order: required, length, character set, edge hyphens, consecutive
    hyphens, reserved words.
    """
    if not candidate or not candidate.strip():
        return Invalid(candidate, SlugRejection.REQUIRED)
    if len(candidate) < MIN_LENGTH:
        return Invalid(candidate, SlugRejection.TOO_SHORT)
    if len(candidate) > MAX_LENGTH:
        return Invalid(candidate, SlugRejection.TOO_LONG)
    if not _ALLOWED.fullmatch(candidate):
        return Invalid(candidate, SlugRejection.INVALID_CHARACTERS)
    if candidate.startswith("-") or candidate.endswith("-"):
        return Invalid(candidate, SlugRejection.EDGE_HYPHEN)
    if "--" in candidate:
        return Invalid(candidate, SlugRejection.CONSECUTIVE_HYPHENS)
    if candidate in RESERVED_SLUGS:
        return Invalid(candidate, SlugRejection.RESERVED)
    return Valid(candidate)


def derive_slug(display_name: str) -> str:
    """
    Turn a display name into a candidate slug.

    "Hope Foundation" -> "hope-foundation". Characters outside
    ``[a-z0-9\\s-]`` are dropped after lowercasing, the result is trimmed and
    whitespace runs collapse to one hyphen. The output may still be invalid
    (too short, reserved, stray hyphens).
    """
    lowered = (display_name or "").lower()
    kept = _DERIVE_STRIP.sub("", lowered).strip()
    return _WHITESPACE_RUN.sub("-", kept)
