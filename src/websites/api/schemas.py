# src/websites/api/schemas.py
from __future__ import annotations

from datetime import datetime
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, model_validator

from websites.application import SlugCheck
from websites.domain import AccentColor, SiteContent, Website


# ===== Site content =====

class WhatWeDoItemPayload(BaseModel):
    title: str = ""
    description: str = ""


class LeadershipMemberPayload(BaseModel):
    name: str = ""
    title: str = ""
    bio: str = ""
    photo_url: str = ""


class ProgramPayload(BaseModel):
    title: str = ""
    description: str = ""
    impact: str = ""


class SiteContentPayload(BaseModel):
    """Builder form answers. Every field is optional until publish."""

    model_config = ConfigDict(extra="ignore")

    org_name: str = Field(default="", max_length=200)
    tagline: str = ""
    accent_color: AccentColor = AccentColor.BLUE
    font_family: str = "inter"
    logo_url: str = ""

    hero_image_url: str = ""
    mission_statement: str = ""
    what_we_do: List[WhatWeDoItemPayload] = Field(default_factory=list)
    cta_text: str = ""

    about_mission: str = ""
    leadership: List[LeadershipMemberPayload] = Field(default_factory=list)
    partners: str = ""
    sponsors_image_url: str = ""

    programs: List[ProgramPayload] = Field(default_factory=list)
    volunteer_text: str = ""
    google_form_embed: str = ""

    donate_text: str = ""
    payment_info: str = ""
    venmo_link: str = ""
    paypal_link: str = ""

    address: str = ""
    email: str = ""
    phone: str = ""
    office_hours: str = ""
    facebook: str = ""
    twitter: str = ""
    instagram: str = ""
    linkedin: str = ""

    def to_domain(self) -> SiteContent:
        return SiteContent.from_dict(self.model_dump(mode="json"))

    @classmethod
    def from_domain(cls, content: SiteContent) -> "SiteContentPayload":
        return cls.model_validate(content.to_dict())


# ===== Requests =====

class SaveWebsiteRequest(BaseModel):
    """Save payload. A new record without a slug gets one derived from org_name."""

    slug: Optional[str] = Field(default=None, description="Public path segment")
    content: SiteContentPayload = Field(default_factory=SiteContentPayload)


class PublishWebsiteRequest(BaseModel):
    """Optional unsaved edits to save right before publishing."""

    slug: Optional[str] = None
    content: Optional[SiteContentPayload] = None


class SlugCheckRequest(BaseModel):
    """Either a slug to check as-is, or a display name to derive one from."""

    slug: Optional[str] = None
    name: Optional[str] = None
    exclude_id: Optional[UUID] = None

    @model_validator(mode="after")
    def _one_of(self) -> "SlugCheckRequest":
        if (self.slug is None) == (self.name is None):
            raise ValueError("Provide exactly one of 'slug' or 'name'")
        return self


# ===== Responses =====

class SlugCheckResponse(BaseModel):
    slug: str
    valid: bool
    available: Optional[bool] = None
    reason: Optional[str] = None
    message: Optional[str] = None

    @classmethod
    def from_result(cls, result: SlugCheck) -> "SlugCheckResponse":
        return cls(
            slug=result.slug,
            valid=result.valid,
            available=result.available,
            reason=result.reason,
            message=result.message,
        )


class WebsiteResponse(BaseModel):
    id: UUID
    owner_id: UUID
    slug: str
    org_name: str
    state: str
    is_published: bool
    content: SiteContentPayload
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def from_entity(cls, website: Website) -> "WebsiteResponse":
        return cls(
            id=website.id,
            owner_id=website.owner_id,
            slug=website.slug,
            org_name=website.org_name,
            state=website.state.value,
            is_published=website.is_published,
            content=SiteContentPayload.from_domain(website.content),
            created_at=website.created_at,
            updated_at=website.updated_at,
        )


class WebsiteSummary(BaseModel):
    """Dashboard row."""
    id: UUID
    slug: str
    org_name: str
    is_published: bool
    updated_at: Optional[datetime] = None

    @classmethod
    def from_entity(cls, website: Website) -> "WebsiteSummary":
        return cls(
            id=website.id,
            slug=website.slug,
            org_name=website.org_name,
            is_published=website.is_published,
            updated_at=website.updated_at,
        )


class PublicWebsiteResponse(BaseModel):
    """What visitors of /{slug} are served; no owner information."""
    slug: str
    content: SiteContentPayload

    @classmethod
    def from_entity(cls, website: Website) -> "PublicWebsiteResponse":
        return cls(slug=website.slug, content=SiteContentPayload.from_domain(website.content))
