"""
Site content value objects.

The content schema is fixed: one record per website holding the answers to
the builder's steps (basic info, home, about, get involved, donations,
contact). The workflow treats it as a single opaque attribute except for
``org_name``, which must be filled in before publishing.
"""
from __future__ import annotations

from dataclasses import asdict, dataclass, field, fields
from enum import Enum
from typing import Any, Mapping


class AccentColor(str, Enum):
    """Theme colours offered by the template."""
    BLUE = "blue"
    GREEN = "green"
    PURPLE = "purple"
    RED = "red"
    ORANGE = "orange"


@dataclass(frozen=True)
class WhatWeDoItem:
    title: str = ""
    description: str = ""


@dataclass(frozen=True)
class LeadershipMember:
    name: str = ""
    title: str = ""
    bio: str = ""
    photo_url: str = ""


@dataclass(frozen=True)
class Program:
    title: str = ""
    description: str = ""
    impact: str = ""


def _pick(cls: type, data: Mapping[str, Any]) -> dict[str, Any]:
    names = {f.name for f in fields(cls)}
    return {k: ("" if v is None else v) for k, v in data.items() if k in names}


@dataclass(frozen=True)
class SiteContent:
    """
    Everything the template renders for one organization.

    Images live in external storage; only their URLs are kept here.
    """

    # Basic info
    org_name: str = ""
    tagline: str = ""
    accent_color: AccentColor = AccentColor.BLUE
    font_family: str = "inter"
    logo_url: str = ""

    # Home page
    hero_image_url: str = ""
    mission_statement: str = ""
    what_we_do: tuple[WhatWeDoItem, ...] = field(default_factory=tuple)
    cta_text: str = ""

    # About
    about_mission: str = ""
    leadership: tuple[LeadershipMember, ...] = field(default_factory=tuple)
    partners: str = ""
    sponsors_image_url: str = ""

    # Get involved
    programs: tuple[Program, ...] = field(default_factory=tuple)
    volunteer_text: str = ""
    google_form_embed: str = ""

    # Donations
    donate_text: str = ""
    payment_info: str = ""
    venmo_link: str = ""
    paypal_link: str = ""

    # Contact
    address: str = ""
    email: str = ""
    phone: str = ""
    office_hours: str = ""
    facebook: str = ""
    twitter: str = ""
    instagram: str = ""
    linkedin: str = ""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> SiteContent:
        """Build from a stored/JSON mapping; unknown keys are ignored."""
        data = dict(data or {})
        values = _pick(cls, data)
        if "accent_color" in values:
            try:
                values["accent_color"] = AccentColor(values["accent_color"] or AccentColor.BLUE.value)
            except ValueError:
                values["accent_color"] = AccentColor.BLUE
        values["what_we_do"] = tuple(
            WhatWeDoItem(**_pick(WhatWeDoItem, item)) for item in data.get("what_we_do") or ()
        )
        values["leadership"] = tuple(
            LeadershipMember(**_pick(LeadershipMember, item)) for item in data.get("leadership") or ()
        )
        values["programs"] = tuple(
            Program(**_pick(Program, item)) for item in data.get("programs") or ()
        )
        return cls(**values)

    def to_dict(self) -> dict[str, Any]:
        """JSON-ready mapping (lists instead of tuples, plain strings for enums)."""
        out = asdict(self)
        out["accent_color"] = self.accent_color.value
        for key in ("what_we_do", "leadership", "programs"):
            out[key] = list(out[key])
        return out

    @property
    def has_org_name(self) -> bool:
        return bool(self.org_name and self.org_name.strip())
