# src/websites/api/routes.py
from __future__ import annotations

from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Response, status

from shared.config import get_settings
from websites.api.dependencies import get_current_user, get_website_service
from websites.api.schemas import (
    PublishWebsiteRequest,
    SaveWebsiteRequest,
    SlugCheckRequest,
    SlugCheckResponse,
    WebsiteResponse,
    WebsiteSummary,
)
from websites.application import WebsiteService
from websites.domain.identity import UserIdentity

settings = get_settings()

router = APIRouter(prefix=f"{settings.API_V1_STR}", tags=["websites"])


@router.post("/slugs/check", response_model=SlugCheckResponse)
async def check_slug(
    payload: SlugCheckRequest,
    user: UserIdentity = Depends(get_current_user),
    svc: WebsiteService = Depends(get_website_service),
) -> SlugCheckResponse:
    if payload.name is not None:
        result = await svc.check_slug(user.user_id, payload.name, derive=True, exclude_id=payload.exclude_id)
    else:
        result = await svc.check_slug(user.user_id, payload.slug, exclude_id=payload.exclude_id)
    return SlugCheckResponse.from_result(result)


@router.get("/websites", response_model=List[WebsiteSummary])
async def list_websites(
    user: UserIdentity = Depends(get_current_user),
    svc: WebsiteService = Depends(get_website_service),
) -> List[WebsiteSummary]:
    websites = await svc.list_for_owner(user.user_id)
    return [WebsiteSummary.from_entity(w) for w in websites]


@router.post("/websites", response_model=WebsiteResponse, status_code=status.HTTP_201_CREATED)
async def create_website(
    payload: SaveWebsiteRequest,
    user: UserIdentity = Depends(get_current_user),
    svc: WebsiteService = Depends(get_website_service),
) -> WebsiteResponse:
    website = await svc.save(user.user_id, content=payload.content.to_domain(), slug=payload.slug)
    return WebsiteResponse.from_entity(website)


@router.get("/websites/{website_id}", response_model=WebsiteResponse)
async def get_website(
    website_id: UUID,
    user: UserIdentity = Depends(get_current_user),
    svc: WebsiteService = Depends(get_website_service),
) -> WebsiteResponse:
    return WebsiteResponse.from_entity(await svc.get(user.user_id, website_id))


@router.put("/websites/{website_id}", response_model=WebsiteResponse)
async def save_website(
    website_id: UUID,
    payload: SaveWebsiteRequest,
    user: UserIdentity = Depends(get_current_user),
    svc: WebsiteService = Depends(get_website_service),
) -> WebsiteResponse:
    website = await svc.save(
        user.user_id,
        content=payload.content.to_domain(),
        slug=payload.slug,
        website_id=website_id,
    )
    return WebsiteResponse.from_entity(website)


@router.post("/websites/{website_id}/publish", response_model=WebsiteResponse)
async def publish_website(
    website_id: UUID,
    payload: Optional[PublishWebsiteRequest] = None,
    user: UserIdentity = Depends(get_current_user),
    svc: WebsiteService = Depends(get_website_service),
) -> WebsiteResponse:
    payload = payload or PublishWebsiteRequest()
    website = await svc.publish(
        user.user_id,
        website_id,
        content=payload.content.to_domain() if payload.content is not None else None,
        slug=payload.slug,
    )
    return WebsiteResponse.from_entity(website)


@router.post("/websites/{website_id}/unpublish", response_model=WebsiteResponse)
async def unpublish_website(
    website_id: UUID,
    user: UserIdentity = Depends(get_current_user),
    svc: WebsiteService = Depends(get_website_service),
) -> WebsiteResponse:
    return WebsiteResponse.from_entity(await svc.unpublish(user.user_id, website_id))


@router.delete("/websites/{website_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_website(
    website_id: UUID,
    user: UserIdentity = Depends(get_current_user),
    svc: WebsiteService = Depends(get_website_service),
) -> Response:
    await svc.delete(user.user_id, website_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
