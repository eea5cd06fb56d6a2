"""
FastAPI dependencies for the websites API.

Collaborators are wired once by the application factory onto ``app.state``;
this module only reads them, so the API layer never touches infrastructure.
"""
from __future__ import annotations

from typing import Optional

from fastapi import BackgroundTasks, Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from shared.exceptions import UnauthorizedError
from shared.logging import bind_context
from websites.application import OwnerProfileService, WebsiteService
from websites.domain.identity import UserIdentity

bearer_scheme = HTTPBearer(auto_error=False)


def get_website_service(request: Request) -> WebsiteService:
    return request.app.state.website_service


def get_profile_service(request: Request) -> OwnerProfileService:
    return request.app.state.profile_service


async def get_current_user(
    request: Request,
    background: BackgroundTasks,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    profiles: OwnerProfileService = Depends(get_profile_service),
) -> UserIdentity:
    """
    Resolve the signed-in owner from the bearer token.

    The owner's profile is refreshed after the response is sent; failures
    there are logged and never affect the request.
    """
    if credentials is None or credentials.scheme.lower() != "bearer" or not credentials.credentials:
        raise UnauthorizedError("Missing bearer token.")

    user = request.app.state.token_verifier.verify(credentials.credentials)
    request.state.user_id = str(user.user_id)
    bind_context(user_id=str(user.user_id))
    background.add_task(profiles.record_activity, user)
    return user
