"""
Access token verification for tokens issued by the identity provider.
"""
from __future__ import annotations

from typing import Any, Dict, Optional
from uuid import UUID

import jwt
from jwt.exceptions import ExpiredSignatureError, InvalidTokenError

from shared.exceptions import UnauthorizedError
from shared.logging import get_logger
from websites.domain.identity import UserIdentity

logger = get_logger(__name__)


class JWTTokenVerifier:
    """
    Verifies bearer tokens locally with the provider's shared secret.

    The ``sub`` claim is the account id and becomes the owner id for every
    website operation.
    """

    def __init__(self, secret_key: str, algorithm: str = "HS256", audience: Optional[str] = None) -> None:
        self._secret_key = secret_key
        self._algorithm = algorithm
        self._audience = audience

    def decode(self, token: str) -> Dict[str, Any]:
        options = {"require": ["sub", "exp"], "verify_aud": self._audience is not None}
        try:
            return jwt.decode(
                token,
                self._secret_key,
                algorithms=[self._algorithm],
                audience=self._audience,
                options=options,
            )
        except ExpiredSignatureError as e:
            logger.info("Access token expired")
            raise UnauthorizedError("Token has expired.") from e
        except InvalidTokenError as e:
            logger.info("Access token rejected", error=str(e))
            raise UnauthorizedError("Invalid token.") from e

    def verify(self, token: str) -> UserIdentity:
        payload = self.decode(token)
        try:
            user_id = UUID(str(payload["sub"]))
        except ValueError as e:
            raise UnauthorizedError("Invalid token.") from e
        return UserIdentity(user_id=user_id, email=payload.get("email"))
