"""
Access-token issuing and verification (PyJWT).

RS256 when a key pair is configured, HS256 with ``jwt_secret`` otherwise.
Claims: iss, aud, sub (admin id), role, iat, exp.
"""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import Optional

import jwt

from config import JWTSettings
from errors import AuthenticationError
from schemas.models.admin import AdminDoc
from shared.datetime_utils import utcnow


class TokenService:
    def __init__(self, settings: JWTSettings) -> None:
        self._settings = settings
        if settings.use_rs256:
            # Support keys provided via env with literal \n sequences
            self._signing_key = settings.jwt_private_key.replace("\\n", "\n")
            self._verify_key = settings.jwt_public_key.replace("\\n", "\n")
            self._algorithm = "RS256"
        else:
            if not settings.jwt_secret:
                raise RuntimeError(
                    "JWT_SECRET must be set when RS256 keys are not provided"
                )
            self._signing_key = settings.jwt_secret
            self._verify_key = settings.jwt_secret
            self._algorithm = "HS256"

    @property
    def ttl_seconds(self) -> int:
        return self._settings.access_token_ttl_seconds

    def issue_access_token(
        self, admin: AdminDoc, now: Optional[datetime] = None
    ) -> str:
        now = now or utcnow()
        claims = {
            "iss": self._settings.jwt_issuer,
            "aud": self._settings.jwt_audience,
            "sub": str(admin.id),
            "role": admin.role,
            "iat": int(now.timestamp()),
            "exp": int((now + timedelta(seconds=self.ttl_seconds)).timestamp()),
        }
        return jwt.encode(claims, self._signing_key, algorithm=self._algorithm)

    def decode_access_token(self, token: str) -> dict:
        """Verify signature, expiry, issuer and audience; return the claims."""
        try:
            return jwt.decode(
                token,
                self._verify_key,
                algorithms=[self._algorithm],
                audience=self._settings.jwt_audience,
                issuer=self._settings.jwt_issuer,
                options={"require": ["sub", "iat", "exp"]},
            )
        except jwt.ExpiredSignatureError as e:
            raise AuthenticationError("Token has expired") from e
        except jwt.InvalidTokenError as e:
            raise AuthenticationError("Token is not valid") from e
