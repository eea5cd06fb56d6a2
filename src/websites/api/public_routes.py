from __future__ import annotations

from fastapi import APIRouter, Depends

from shared.config import get_settings
from websites.api.dependencies import get_website_service
from websites.api.schemas import PublicWebsiteResponse
from websites.application import WebsiteService

settings = get_settings()

router = APIRouter(prefix=f"{settings.API_V1_STR}/public", tags=["public"])


@router.get("/{slug}", response_model=PublicWebsiteResponse)
async def get_public_website(
    slug: str,
    svc: WebsiteService = Depends(get_website_service),
) -> PublicWebsiteResponse:
    """Serve a published site. Drafts and unknown slugs are both 404."""
    return PublicWebsiteResponse.from_entity(await svc.resolve_public(slug))
